from rest_framework import serializers

from .models import CustomerPhoto


class CustomerPhotoSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomerPhoto
        fields = ['id', 'image', 'alt_text', 'is_active', 'display_order', 'created_at', 'updated_at']
        read_only_fields = fields


class CustomerPhotoCreateSerializer(serializers.Serializer):
    image = serializers.CharField(max_length=500)
    alt_text = serializers.CharField(max_length=200, required=False, allow_blank=True)
    is_active = serializers.BooleanField(default=False)
    display_order = serializers.IntegerField(min_value=1, required=False)


class CustomerPhotoUpdateSerializer(serializers.Serializer):
    image = serializers.CharField(max_length=500, required=False)
    alt_text = serializers.CharField(max_length=200, required=False)
    is_active = serializers.BooleanField(required=False)
    display_order = serializers.IntegerField(min_value=1, required=False)


class PhotoOrderSerializer(serializers.Serializer):
    id = serializers.UUIDField()
    display_order = serializers.IntegerField(min_value=1)


class ReorderSerializer(serializers.Serializer):
    photos = PhotoOrderSerializer(many=True, allow_empty=False)

    def validate_photos(self, value):
        ids = [entry['id'] for entry in value]
        if len(ids) != len(set(ids)):
            raise serializers.ValidationError('Each photo may appear only once.')
        return value
