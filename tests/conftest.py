from __future__ import annotations

import os
import tempfile

import pytest
from fastapi.testclient import TestClient

# main builds a module-level app on import; keep its upload root out of the repo.
os.environ.setdefault("FILEGUARD_UPLOAD_ROOT", tempfile.mkdtemp(prefix="fileguard-"))

from fileguard.config import Settings  # noqa: E402
from main import create_app  # noqa: E402


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def upload_root(tmp_path):
    root = tmp_path / "uploads"
    for name in ("videos", "pdfs", "lectures", "gallery"):
        (root / name).mkdir(parents=True)
    (root / "videos" / "intro.mp4").write_bytes(b"\x00\x00\x00\x18ftypmp42")
    (root / "pdfs" / "week1.pdf").write_bytes(b"%PDF-1.4\n")
    (root / "gallery" / "campus.jpg").write_bytes(b"\xff\xd8\xff")
    (root / "secret.txt").write_text("do not serve")
    (tmp_path / "outside.txt").write_text("outside the root")
    return root


@pytest.fixture()
def settings(upload_root) -> Settings:
    return Settings(upload_root=upload_root, max_downloads=3, download_window_ms=60_000)


@pytest.fixture()
def api_client(settings):
    app = create_app(settings)
    with TestClient(app) as client:
        yield client, app
