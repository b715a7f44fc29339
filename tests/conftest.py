import sys
from pathlib import Path

import pytest


# Ensure the repo root is on sys.path so tests can import `leaflet_notebook`
# without an editable install.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from leaflet_notebook.config import OPTIONS_PATH_ENV, clear_config_cache  # noqa: E402


@pytest.fixture(autouse=True)
def _no_options_file(monkeypatch):
    # Keep a developer's own options file out of the tests.
    monkeypatch.delenv(OPTIONS_PATH_ENV, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()
