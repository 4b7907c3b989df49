"""Route tests for POST /resize and static retrieval of resized images."""

from collections.abc import Callable
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from cl_batch_resizer.app import create_app
from cl_batch_resizer.common.errors import StorageError
from cl_batch_resizer.common.file_storage_impl import LocalFileStorage
from cl_batch_resizer.common.schemas import ResizeOutcome, SavedImageFile
from cl_batch_resizer.config import Settings

SizeReader = Callable[[bytes], tuple[int, int]]


UploadField = tuple[str, tuple[str, bytes, str]]


def _files(*entries: tuple[str, bytes], field: str = "images") -> list[UploadField]:
    return [(field, (name, data, "application/octet-stream")) for name, data in entries]


# ============================================================================
# SUCCESS
# ============================================================================


def test_resize_single_jpeg(
    api_client: TestClient, jpeg_bytes: bytes, storage_dir: Path, decoded_size: SizeReader
):
    response = api_client.post(
        "/resize",
        files=_files(("photo.jpg", jpeg_bytes)),
        data={"width": "800", "height": "600"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "status": "success",
        "results": [
            {
                "originalName": "photo.jpg",
                "resizedName": "photo_resized.jpg",
                "path": "uploads/resized/photo_resized.jpg",
            }
        ],
    }

    stored = storage_dir / "uploads" / "resized" / "photo_resized.jpg"
    assert decoded_size(stored.read_bytes()) == (800, 600)
    assert (storage_dir / "uploads" / "photo.jpg").read_bytes() == jpeg_bytes


def test_defaults_apply_when_dimensions_absent(
    api_client: TestClient, png_bytes: bytes, storage_dir: Path, decoded_size: SizeReader
):
    response = api_client.post("/resize", files=_files(("a.png", png_bytes)))

    assert response.status_code == 200
    stored = storage_dir / "uploads" / "resized" / "a_resized.png"
    assert decoded_size(stored.read_bytes()) == (600, 800)


def test_bracket_field_name_is_accepted(api_client: TestClient, png_bytes: bytes):
    """Browser clients post files as ``images[]``."""
    response = api_client.post(
        "/resize",
        files=_files(("a.png", png_bytes), ("b.png", png_bytes), field="images[]"),
        data={"width": "50", "height": "50"},
    )

    assert response.status_code == 200
    assert [r["originalName"] for r in response.json()["results"]] == ["a.png", "b.png"]


def test_unsupported_file_is_dropped(api_client: TestClient, png_bytes: bytes):
    response = api_client.post(
        "/resize",
        files=_files(("a.png", png_bytes), ("b.txt", b"plain text")),
        data={"width": "100", "height": "100"},
    )

    assert response.status_code == 200
    body = response.json()
    assert [r["originalName"] for r in body["results"]] == ["a.png"]
    assert "failures" not in body


@pytest.mark.integration
def test_resized_file_is_served(
    api_client: TestClient, gif_bytes: bytes, decoded_size: SizeReader
):
    response = api_client.post(
        "/resize",
        files=_files(("cat.gif", gif_bytes)),
        data={"width": "64", "height": "32"},
    )
    path = response.json()["results"][0]["path"]

    served = api_client.get(f"/{path}")

    assert served.status_code == 200
    assert decoded_size(served.content) == (64, 32)


def test_keep_originals_disabled(png_bytes: bytes, storage_dir: Path):
    settings = Settings(storage_dir=str(storage_dir), keep_originals=False)
    client = TestClient(create_app(settings=settings))

    response = client.post("/resize", files=_files(("a.png", png_bytes)))

    assert response.status_code == 200
    assert not (storage_dir / "uploads" / "a.png").exists()
    assert (storage_dir / "uploads" / "resized" / "a_resized.png").exists()


def test_collect_errors_mode_reports_failures(api_client: TestClient, png_bytes: bytes):
    response = api_client.post(
        "/resize",
        files=_files(("good.png", png_bytes), ("broken.jpg", b"garbage")),
        data={"width": "40", "height": "40", "fail_fast": "false"},
    )

    assert response.status_code == 200
    body = response.json()
    assert [r["originalName"] for r in body["results"]] == ["good.png"]
    assert body["failures"] == [
        {"originalName": "broken.jpg", "message": "Failed to decode image 'broken.jpg'"}
    ]


def test_health(api_client: TestClient):
    assert api_client.get("/health").json() == {"status": "ok"}


# ============================================================================
# ERRORS
# ============================================================================


@pytest.mark.parametrize(
    ("width", "height"),
    [("0", "100"), ("100", "-4"), ("abc", "100"), ("100", "tall")],
)
def test_invalid_dimensions(api_client: TestClient, png_bytes: bytes, width: str, height: str):
    response = api_client.post(
        "/resize",
        files=_files(("a.png", png_bytes)),
        data={"width": width, "height": height},
    )

    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "Invalid width or height"}


def test_no_images(api_client: TestClient):
    response = api_client.post("/resize", data={"width": "100", "height": "100"})

    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "No images received"}


def test_only_unsupported_files(api_client: TestClient):
    response = api_client.post(
        "/resize",
        files=_files(("a.txt", b"a"), ("b.pdf", b"b")),
        data={"width": "100", "height": "100"},
    )

    assert response.status_code == 422
    assert response.json() == {"status": "error", "message": "Image processing failed"}


def test_corrupted_image_fails_whole_batch(
    api_client: TestClient, png_bytes: bytes, storage_dir: Path
):
    response = api_client.post(
        "/resize",
        files=_files(("a.png", png_bytes), ("broken.jpg", b"\xff\xd8\xff corrupted")),
        data={"width": "100", "height": "100"},
    )

    assert response.status_code == 422
    body = response.json()
    assert body["status"] == "error"
    assert "broken.jpg" in body["message"]
    assert "results" not in body
    assert not (storage_dir / "uploads" / "resized" / "a_resized.png").exists()


def test_storage_failure(png_bytes: bytes, storage_dir: Path, monkeypatch: pytest.MonkeyPatch):
    storage = LocalFileStorage(storage_dir)

    async def failing_save(outcome: ResizeOutcome) -> SavedImageFile:
        raise StorageError()

    monkeypatch.setattr(storage, "save_resized", failing_save)
    settings = Settings(storage_dir=str(storage_dir))
    client = TestClient(create_app(settings=settings, storage=storage))

    response = client.post("/resize", files=_files(("a.png", png_bytes)))

    assert response.status_code == 500
    assert response.json() == {"status": "error", "message": "Failed to store image"}


@pytest.mark.parametrize(("width", "height"), [("", "10"), ("10", ""), ("", "")])
def test_blank_dimension_is_rejected_not_defaulted(
    api_client: TestClient, png_bytes: bytes, storage_dir: Path, width: str, height: str
):
    response = api_client.post(
        "/resize",
        files=_files(("a.png", png_bytes)),
        data={"width": width, "height": height},
    )

    assert response.status_code == 400
    assert response.json() == {"status": "error", "message": "Invalid width or height"}
    assert not (storage_dir / "uploads" / "resized" / "a_resized.png").exists()


def test_malformed_fail_fast_uses_error_envelope(api_client: TestClient, png_bytes: bytes):
    response = api_client.post(
        "/resize",
        files=_files(("a.png", png_bytes)),
        data={"width": "10", "height": "10", "fail_fast": "maybe"},
    )

    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert "fail_fast" in body["message"]
    assert "detail" not in body


def test_text_value_for_images_uses_error_envelope(api_client: TestClient):
    response = api_client.post("/resize", data={"images": "notafile"})

    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert "images" in body["message"]
    assert "detail" not in body
