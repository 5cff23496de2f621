"""
Root conftest for all tests.

Engine defaults are read through the cached ``get_settings()``; tests that
change SPARKLINES_* variables must not leak them into other tests, so the
cache is cleared around every test.
"""

from collections.abc import Iterator

import pytest

from config.settings import get_settings
from libs.common.logging.context import clear_render_id


@pytest.fixture(autouse=True)
def _reset_engine_state() -> Iterator[None]:
    get_settings.cache_clear()
    clear_render_id()
    yield
    get_settings.cache_clear()
    clear_render_id()
