import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from rest_framework import status


PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 64


def png(name='photo.png', size=None):
    content = PNG_BYTES if size is None else b'\x00' * size
    return SimpleUploadedFile(name, content, content_type='image/png')


@pytest.mark.django_db
class TestUpload:
    """Tests for POST /api/upload/ and DELETE /api/upload/{filename}/"""

    def test_upload_image(self, authenticated_client, media_root):
        response = authenticated_client.post(
            reverse('uploads:upload'), {'image': png()}, format='multipart'
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['mimetype'] == 'image/png'
        assert response.data['size'] == len(PNG_BYTES)
        assert response.data['path'] == f"/uploads/{response.data['filename']}"
        assert response.data['filename'].endswith('.png')
        assert (media_root / response.data['filename']).exists()

    def test_upload_requires_auth(self, api_client):
        response = api_client.post(reverse('uploads:upload'), {'image': png()}, format='multipart')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_upload_without_file(self, authenticated_client):
        response = authenticated_client.post(reverse('uploads:upload'), {}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_upload_rejects_non_image(self, authenticated_client):
        text = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')
        response = authenticated_client.post(reverse('uploads:upload'), {'image': text}, format='multipart')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'Invalid file type' in response.data['error']

    def test_upload_rejects_large_file(self, authenticated_client, settings):
        settings.UPLOAD_MAX_BYTES = 10
        response = authenticated_client.post(
            reverse('uploads:upload'), {'image': png(size=11)}, format='multipart'
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'too large' in response.data['error']

    def test_delete_uploaded(self, authenticated_client, media_root):
        upload = authenticated_client.post(reverse('uploads:upload'), {'image': png()}, format='multipart')
        filename = upload.data['filename']

        response = authenticated_client.delete(reverse('uploads:delete', kwargs={'filename': filename}))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not (media_root / filename).exists()

    def test_delete_missing(self, authenticated_client):
        url = reverse('uploads:delete', kwargs={'filename': 'nope.png'})
        response = authenticated_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
