from rest_framework import serializers

from .branches import Branch


class BranchSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()


class BranchListResponseSerializer(serializers.Serializer):
    branches = BranchSerializer(many=True)
    default = serializers.CharField()


class BranchField(serializers.ChoiceField):
    """Choice field restricted to the configured branch ids."""

    def __init__(self, **kwargs):
        kwargs.setdefault('choices', Branch.choices)
        super().__init__(**kwargs)


class BranchQuerySerializer(serializers.Serializer):
    """Validate the ``branch`` query parameter shared by branch-scoped lists."""

    branch = BranchField(required=False)

