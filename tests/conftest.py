from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from strmarr.domain.types import Source

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def media_root(tmp_path: Path) -> Path:
    root = tmp_path / "media"
    root.mkdir()
    return root


@pytest.fixture
def sources() -> tuple[Source, ...]:
    return (
        Source(name="movies", url="http://playarr.test/api/playlist/movies/data?api_key=secret"),
        Source(name="shows", url="http://playarr.test/api/playlist/shows/data?api_key=secret"),
    )


@pytest.fixture
def playarr_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    media = tmp_path / "library"
    monkeypatch.setenv("PLAYARR_BASE_URL", "http://playarr.test:5000/")
    monkeypatch.setenv("PLAYARR_API_KEY", "secret")
    monkeypatch.setenv("MEDIA_PATH", str(media))
    for name in ("SYNC_INTERVAL", "PLAYARR_MEDIA_TYPES", "PLAYARR_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)
    return media
