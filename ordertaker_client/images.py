from urllib.parse import urlsplit

PLACEHOLDER_IMAGE = '/images/placeholder.png'


def server_base_url(api_url):
    """``https://shop.example/api`` -> ``https://shop.example``"""
    parts = urlsplit(api_url)
    return f'{parts.scheme}://{parts.netloc}'


def resolve_image_url(ref, server_base):
    """
    Turn a stored image reference into something displayable.

    Absolute URLs and data URIs are returned unchanged, upload paths are
    joined to the server origin and an empty reference gives the placeholder.
    """
    if not ref:
        return PLACEHOLDER_IMAGE
    if ref.startswith(('http://', 'https://', 'data:')):
        return ref
    if not ref.startswith('/'):
        ref = f'/uploads/{ref}'
    return f"{server_base.rstrip('/')}{ref}"
