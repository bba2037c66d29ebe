"""Shared pytest fixtures for witness-action tests.

NOTE: Do NOT add __init__.py to test directories - pytest uses importlib mode
which can cause namespace collisions with __init__.py files.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
import structlog

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def anyio_backend() -> str:
    """Run anyio-marked tests on asyncio only."""
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore default structlog configuration after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def clean_action_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove INPUT_* and runner variables inherited from the outer environment.

    Returns:
        The monkeypatch fixture, for setting inputs in the test.
    """
    import os

    for name in list(os.environ):
        if name.startswith("INPUT_"):
            monkeypatch.delenv(name, raising=False)
    for name in ("GITHUB_PATH", "GITHUB_TOKEN", "RUNNER_TOOL_CACHE", "WITNESS_ACTION_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
