"""Shared desktop fixtures."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from core.orchestrator import RuntimeBundle, build_desktop


def fixed_ids(*ids: str) -> Callable[[], str]:
    return iter(ids).__next__


@pytest.fixture
def desktop() -> RuntimeBundle:
    return build_desktop()


@pytest.fixture
def make_desktop() -> Callable[..., RuntimeBundle]:
    def _make(*ids: str) -> RuntimeBundle:
        return build_desktop(id_factory=fixed_ids(*ids) if ids else None)

    return _make
