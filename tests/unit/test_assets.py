"""
Unit Tests for the cover asset loader
"""

import base64

import httpx

from core.layout.renderer.assets import AssetLoader, guess_media_type

PNG_HEADER = b"\x89PNG\r\n\x1a\n"


def _mock_client(monkeypatch, handler):
    """Route every httpx.Client the loader opens through a mock transport"""
    real_client = httpx.Client

    def factory(**kwargs):
        return real_client(transport=httpx.MockTransport(handler), **kwargs)

    monkeypatch.setattr(httpx, "Client", factory)


class TestAssetLoader:
    """Test AssetLoader.load()."""

    def test_empty_source(self):
        assert AssetLoader(enabled=True).load(None) is None
        assert AssetLoader(enabled=True).load("") is None

    def test_data_uri(self):
        uri = "data:image/png;base64," + base64.b64encode(PNG_HEADER).decode()
        assert AssetLoader().load(uri) == PNG_HEADER

    def test_malformed_data_uri(self):
        assert AssetLoader().load("data:image/png;base64,abc") is None

    def test_local_file(self, tmp_path):
        path = tmp_path / "cover.png"
        path.write_bytes(PNG_HEADER)
        assert AssetLoader().load(str(path)) == PNG_HEADER

    def test_missing_file(self, tmp_path):
        assert AssetLoader().load(str(tmp_path / "missing.png")) is None

    def test_http_disabled(self, monkeypatch):
        def handler(request):
            raise AssertionError("no request expected")

        _mock_client(monkeypatch, handler)
        assert AssetLoader(enabled=False).load("https://example.com/cover.png") is None

    def test_http_download(self, monkeypatch):
        requests = []

        def handler(request):
            requests.append(str(request.url))
            return httpx.Response(200, content=PNG_HEADER)

        _mock_client(monkeypatch, handler)
        loader = AssetLoader(timeout=2, enabled=True)
        assert loader.load("https://example.com/cover.png") == PNG_HEADER
        # second load served from the cache
        assert loader.load("https://example.com/cover.png") == PNG_HEADER
        assert requests == ["https://example.com/cover.png"]

    def test_http_error_returns_none(self, monkeypatch):
        _mock_client(monkeypatch, lambda request: httpx.Response(404))
        assert AssetLoader(enabled=True).load("https://example.com/missing.png") is None


class TestGuessMediaType:
    """Test guess_media_type()."""

    def test_known_signatures(self):
        assert guess_media_type(PNG_HEADER) == "image/png"
        assert guess_media_type(b"GIF89a....") == "image/gif"
        assert guess_media_type(b"RIFF\x00\x00\x00\x00WEBPVP8 ") == "image/webp"

    def test_default_jpeg(self):
        assert guess_media_type(b"\xff\xd8\xff\xe0") == "image/jpeg"
        assert guess_media_type(b"") == "image/jpeg"
