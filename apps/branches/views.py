from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .branches import DEFAULT_BRANCH, get_branch, list_branches
from .serializers import BranchSerializer, BranchListResponseSerializer


@extend_schema(
    responses={200: BranchListResponseSerializer},
    description="List all store branches and the default branch id.",
    tags=['branches'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def branch_list(request):
    return Response({
        'branches': list_branches(),
        'default': DEFAULT_BRANCH.value,
    })


@extend_schema(
    responses={200: BranchSerializer},
    description="Get a single branch by id.",
    tags=['branches'],
)
@api_view(['GET'])
@permission_classes([AllowAny])
def branch_detail(request, branch_id):
    branch = get_branch(branch_id)
    if branch is None:
        return Response(
            {'error': 'Branch not found'},
            status=status.HTTP_404_NOT_FOUND
        )
    return Response(branch)
