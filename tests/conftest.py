"""Test configuration and fixtures for cl_batch_resizer.

This module provides:
- Image factories (synthetic JPEG/PNG/GIF bytes built with PIL)
- Storage and settings fixtures rooted in tmp_path
- FastAPI TestClient wired to the real router
"""

from collections.abc import Callable
from io import BytesIO
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from PIL import Image, ImageDraw

from cl_batch_resizer.app import create_app
from cl_batch_resizer.common.file_storage_impl import LocalFileStorage
from cl_batch_resizer.config import Settings

ImageFactory = Callable[..., bytes]


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: full HTTP round-trip tests (upload -> resize -> static GET)",
    )


def build_image(
    pil_format: str = "JPEG",
    size: tuple[int, int] = (800, 600),
    mode: str = "RGB",
) -> bytes:
    """Draw a small grid-and-circle pattern and encode it."""
    width, height = size
    background = (73, 109, 137, 255) if mode == "RGBA" else (73, 109, 137)
    img = Image.new(mode, size, color=background)
    draw = ImageDraw.Draw(img)

    for x in range(0, width, 50):
        draw.line([(x, 0), (x, height)], fill=(255, 255, 255), width=2)
    for y in range(0, height, 50):
        draw.line([(0, y), (width, y)], fill=(255, 255, 255), width=2)

    draw.ellipse(
        [width // 4, height // 4, 3 * width // 4, 3 * height // 4],
        fill=(200, 100, 100),
    )

    if pil_format == "GIF":
        img = img.convert("P", palette=Image.Palette.ADAPTIVE)

    buffer = BytesIO()
    img.save(buffer, format=pil_format)
    return buffer.getvalue()


def image_size(data: bytes) -> tuple[int, int]:
    with Image.open(BytesIO(data)) as img:
        return img.size


# ============================================================================
# Function-Scoped Fixtures (Run Per Test)
# ============================================================================


@pytest.fixture
def make_image() -> ImageFactory:
    """Provide the synthetic image factory."""
    return build_image


@pytest.fixture
def decoded_size() -> Callable[[bytes], tuple[int, int]]:
    """Provide a helper returning (width, height) of encoded image bytes."""
    return image_size


@pytest.fixture
def jpeg_bytes() -> bytes:
    return build_image("JPEG", (1000, 500))


@pytest.fixture
def png_bytes() -> bytes:
    return build_image("PNG", (320, 240))


@pytest.fixture
def gif_bytes() -> bytes:
    return build_image("GIF", (200, 200))


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    return tmp_path / "storage"


@pytest.fixture
def file_storage(storage_dir: Path) -> LocalFileStorage:
    """Provide local file storage rooted in a temp directory."""
    storage = LocalFileStorage(base_dir=storage_dir)
    storage.create_directories()
    return storage


@pytest.fixture
def settings(storage_dir: Path) -> Settings:
    return Settings(storage_dir=str(storage_dir))


@pytest.fixture
def api_client(settings: Settings, file_storage: LocalFileStorage) -> TestClient:
    """Provide FastAPI TestClient for route testing."""
    app = create_app(settings=settings, storage=file_storage)
    return TestClient(app)
