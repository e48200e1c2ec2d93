"""
Shared pytest fixtures for forkserver test suite.

Provides fixtures for:
- Writing XML config files into a temporary directory
"""

from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    """Write a config document and return its path.

    Pass only the server section body to get it wrapped in
    <properties><server>...</server></properties>, or raw=True for the whole document.
    """

    def _write(body: str, name: str = "server-config.xml", raw: bool = False) -> Path:
        content = body if raw else f"<properties><server>{body}</server></properties>"
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write
