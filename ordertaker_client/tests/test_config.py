from ordertaker_client.config import ClientConfig, derive_socket_url
from ordertaker_client.images import PLACEHOLDER_IMAGE, resolve_image_url, server_base_url


class TestConfig:

    def test_socket_url_derived(self):
        assert derive_socket_url('https://shop.example/api') == 'wss://shop.example/ws/orders/'
        assert derive_socket_url('http://localhost:8000/api/') == 'ws://localhost:8000/ws/orders/'

    def test_explicit_socket_url(self):
        config = ClientConfig(api_url='http://a.test/api/', socket_url='ws://b.test/ws/orders/')
        assert config.api_url == 'http://a.test/api'
        assert config.socket_url == 'ws://b.test/ws/orders/'


class TestResolveImageUrl:

    def test_upload_path(self):
        base = server_base_url('https://shop.example/api')
        assert resolve_image_url('/uploads/a.png', base) == 'https://shop.example/uploads/a.png'

    def test_bare_filename(self):
        assert resolve_image_url('a.png', 'http://x.test/') == 'http://x.test/uploads/a.png'

    def test_passthrough(self):
        assert resolve_image_url('https://cdn.test/a.png', 'http://x.test') == 'https://cdn.test/a.png'
        assert resolve_image_url('data:image/png;base64,AAAA', 'http://x.test') == 'data:image/png;base64,AAAA'

    def test_empty(self):
        assert resolve_image_url('', 'http://x.test') == PLACEHOLDER_IMAGE
        assert resolve_image_url(None, 'http://x.test') == PLACEHOLDER_IMAGE
