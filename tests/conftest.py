import io
import os
import sys

import pytest
from PIL import Image

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


class FakeUpload(io.BytesIO):
    """Stands in for Streamlit's UploadedFile (a BytesIO with name and type)."""

    def __init__(self, data, name="upload.png", mime="image/png"):
        super().__init__(data)
        self.name = name
        self.type = mime


class FakeResponse:
    def __init__(self, status_code=200, body=None, reason="OK"):
        self.status_code = status_code
        self.reason = reason
        self._body = body

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


class FakeSession:
    """Records every post() call and answers with a canned response."""

    def __init__(self, response=None):
        self.response = response or FakeResponse(body={})
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        return self.response


def png_bytes(size=(40, 30), color=(255, 0, 0), mode="RGB"):
    buf = io.BytesIO()
    Image.new(mode, size, color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def product_upload():
    return FakeUpload(png_bytes(color=(0, 128, 255)), name="soda can.png", mime="image/png")


@pytest.fixture
def logo_upload():
    buf = io.BytesIO()
    Image.new("RGB", (20, 20), (255, 255, 255)).save(buf, format="JPEG")
    return FakeUpload(buf.getvalue(), name="logo.jpg", mime="image/jpeg")


@pytest.fixture
def image_response():
    def _make(data="AAAA", mime=None):
        inline = {"data": data}
        if mime:
            inline["mimeType"] = mime
        body = {"candidates": [{"content": {"parts": [{"text": "Here you go"}, {"inlineData": inline}]}}]}
        return FakeResponse(200, body)
    return _make
