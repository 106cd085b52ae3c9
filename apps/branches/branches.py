"""
Store locations.

Branches are fixed configuration rather than database rows: every
branch-scoped record stores the branch id as a plain string.
"""

from django.db import models


class Branch(models.TextChoices):
    PANGABUGAN = 'pangabugan', 'Pangabugan Branch'
    BAAN = 'baan', 'Baan Branch'


DEFAULT_BRANCH = Branch.PANGABUGAN

VALID_BRANCH_IDS = tuple(Branch.values)


def is_valid_branch_id(branch_id) -> bool:
    """Check if a branch id is one of the configured branches."""
    return branch_id in VALID_BRANCH_IDS


def get_branch(branch_id):
    """Return ``{'id', 'name'}`` for a branch, or None if unknown."""
    if not is_valid_branch_id(branch_id):
        return None
    return {'id': branch_id, 'name': Branch(branch_id).label}


def list_branches():
    return [{'id': value, 'name': label} for value, label in Branch.choices]


def resolve_branch(branch_id=None):
    """Return the given branch id, or the default branch when empty."""
    return branch_id or DEFAULT_BRANCH.value
