"""
Role-based permission classes shared by all apps.

Usage:
    class CategoryViewSet(viewsets.ModelViewSet):
        permission_classes = [IsSuperAdminOrReadOnly]
"""
from rest_framework.permissions import BasePermission, SAFE_METHODS


def _is_authenticated(request):
    return bool(request.user and request.user.is_authenticated)


class IsSuperAdmin(BasePermission):
    """Only super admins."""

    message = 'Super admin access required.'

    def has_permission(self, request, view):
        return _is_authenticated(request) and request.user.is_admin


class IsSuperAdminOrReadOnly(BasePermission):
    """Anyone may read; only super admins may write."""

    message = 'Super admin access required.'

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return _is_authenticated(request) and request.user.is_admin


class IsCrew(BasePermission):
    """Crew roles (crew, order_taker_crew). Used for time tracking."""

    message = 'Only crew members can use time tracking.'

    def has_permission(self, request, view):
        return _is_authenticated(request) and request.user.is_crew


class IsStaffMember(BasePermission):
    """Any logged-in, active staff account."""

    def has_permission(self, request, view):
        return _is_authenticated(request) and request.user.is_active


class CanAccessRequestedBranch(BasePermission):
    """
    Reject requests for a branch outside the user's branch access.

    The branch is read from the ``branch`` query parameter or body field;
    requests without one pass and fall back to the default branch.
    """

    message = 'You do not have access to this branch.'

    def has_permission(self, request, view):
        branch = request.query_params.get('branch')
        if branch is None and hasattr(request.data, 'get'):
            branch = request.data.get('branch')
        if not branch or not _is_authenticated(request):
            return True
        return request.user.can_access_branch(branch)
