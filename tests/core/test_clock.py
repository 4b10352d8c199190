"""
Test suite for the shared clock.

System role: Verification of timestamp source and its layering
"""

import ast
import inspect
import time

from localchat.boundary.db import base
from localchat.core import clock, fallback_store


def imported_modules(module) -> set[str]:
    tree = ast.parse(inspect.getsource(module))
    names = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module:
            names.add(node.module)
        elif isinstance(node, ast.Import):
            names.update(alias.name for alias in node.names)
    return names


class TestNowMs:
    """Test suite for now_ms()."""

    def test_returns_epoch_milliseconds(self) -> None:
        before = int(time.time() * 1000)

        value = clock.now_ms()

        assert isinstance(value, int)
        assert before <= value <= int(time.time() * 1000)

    def test_storage_uses_same_clock(self) -> None:
        assert base.now_ms is clock.now_ms


class TestLayering:
    """Test suite for core module dependencies."""

    def test_fallback_store_does_not_depend_on_storage(self) -> None:
        assert not any(name.startswith("localchat.boundary") for name in imported_modules(fallback_store))
