"""Shared fixtures for the engine tests."""

from __future__ import annotations

from enum import Enum
from typing import Callable, List

import pytest


class S(str, Enum):
    """States used across the tests."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"


class E(str, Enum):
    """Events used across the tests."""

    X = "x"
    Y = "y"
    Z = "z"
    W = "w"


@pytest.fixture
def calls() -> List[str]:
    return []


@pytest.fixture
def record(calls: List[str]) -> Callable[[str], Callable[[], None]]:
    """Build an action that appends ``label`` to ``calls`` when run."""

    def _make(label: str) -> Callable[[], None]:
        return lambda: calls.append(label)

    return _make
