from rest_framework import serializers


class ImageUploadSerializer(serializers.Serializer):
    image = serializers.FileField()


class UploadResponseSerializer(serializers.Serializer):
    filename = serializers.CharField()
    path = serializers.CharField()
    size = serializers.IntegerField()
    mimetype = serializers.CharField()
