import sys
from pathlib import Path

import pytest

# Allow `import quicklink` without installing the package.
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _block_real_browser(monkeypatch):
    """Tests must never launch a real browser."""

    def _blocked(*_args, **_kwargs):
        raise AssertionError("Browser launch attempted during tests")

    import webbrowser

    monkeypatch.setattr(webbrowser, "open", _blocked)


@pytest.fixture
def counter_ids():
    """Deterministic id factory: ID-1, ID-2, ..."""
    n = {"i": 0}

    def _next() -> str:
        n["i"] += 1
        return f"ID-{n['i']}"

    return _next


@pytest.fixture(autouse=True)
def _restore_package_logger():
    """`setup_logging` rewires the package logger; undo it after each test."""
    import logging

    logger = logging.getLogger("quicklink")
    saved = (logger.level, logger.propagate, list(logger.handlers))
    yield
    logger.setLevel(saved[0])
    logger.propagate = saved[1]
    logger.handlers[:] = saved[2]
