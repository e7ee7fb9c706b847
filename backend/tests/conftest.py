from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path
import sys

import pytest
from fastapi.testclient import TestClient


# Ensure `import plusgrid.*` works when pytest chooses an import mode that
# doesn't automatically add the project root to sys.path.
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))


@pytest.fixture()
def make_client(
    monkeypatch: pytest.MonkeyPatch,
) -> Iterator[Callable[..., TestClient]]:
    """Build a TestClient with PLUSGRID_* overrides applied to settings."""

    from plusgrid.core.settings import get_settings
    from plusgrid.main import create_app

    def _make(**env: str) -> TestClient:
        for key, value in env.items():
            monkeypatch.setenv(f"PLUSGRID_{key.upper()}", value)

        # Settings are cached per process; rebuild them for this app.
        get_settings.cache_clear()

        return TestClient(create_app())

    yield _make
    get_settings.cache_clear()


@pytest.fixture()
def client(make_client: Callable[..., TestClient]) -> TestClient:
    return make_client()
