"""
Integration tests for voice message and image attachment endpoints.
"""

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image


@pytest.fixture
def stt_handler():
    statuses = iter(["processing", "completed"])

    def handler(request):
        if request.url.path == "/v2/upload":
            return httpx.Response(200, json={"upload_url": "https://cdn.test/a"})
        if request.url.path == "/v2/transcript":
            return httpx.Response(200, json={"id": "tx-9"})
        status = next(statuses)
        body = {"status": status}
        if status == "completed":
            body.update({"text": "नमस्ते", "language_code": "hi"})
        return httpx.Response(200, json=body)

    return handler


def test_transcribe_and_translate(app, uploads_dir):
    (uploads_dir / "note.m4a").write_bytes(b"audio")

    with TestClient(app) as client:
        r = client.post("/audio/transcribe-and-translate", json={
            "audio_path": "note.m4a",
            "target_language": "en",
        })

    assert r.status_code == 200
    assert r.json()["data"] == {
        "transcript": "नमस्ते",
        "translation": "hello",
        "source_language": "hi",
    }


def test_transcribe_missing_file(app):
    with TestClient(app) as client:
        r = client.post("/audio/transcribe-and-translate", json={
            "audio_path": "gone.m4a",
            "target_language": "en",
        })

    assert r.status_code == 404
    assert r.json()["error_code"] == "MEDIA_NOT_FOUND"


def test_transcribe_rejects_unsupported_target(app, uploads_dir):
    (uploads_dir / "note.m4a").write_bytes(b"audio")

    with TestClient(app) as client:
        r = client.post("/audio/transcribe-and-translate", json={
            "audio_path": "note.m4a",
            "target_language": "de",
        })

    assert r.status_code == 400
    assert r.json()["error_code"] == "UNSUPPORTED_LANGUAGE"


def test_ocr_extract(app, uploads_dir, ocr_model):
    Image.new("RGB", (20, 20)).save(uploads_dir / "sign.png")

    with TestClient(app) as client:
        r = client.post("/ocr/extract", json={"image_path": "sign.png"})

    assert r.status_code == 200
    assert r.json()["data"] == {"text": "EXIT\nGate 3"}
    assert len(ocr_model.images) == 1


def test_ocr_path_traversal(app):
    with TestClient(app) as client:
        r = client.post("/ocr/extract", json={"image_path": "../../etc/passwd"})

    assert r.status_code == 400
    assert r.json()["error_code"] == "INVALID_MEDIA_PATH"
