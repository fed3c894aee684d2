from __future__ import annotations

from typing import Any, Dict

import pytest

from tests._fixtures.content import make_content, make_project


@pytest.fixture(autouse=True)
def _no_base_path_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a PORTFOLIO_BASE_PATH from the developer's shell out of the tests."""
    monkeypatch.delenv("PORTFOLIO_BASE_PATH", raising=False)


@pytest.fixture
def content() -> Dict[str, Any]:
    """Three valid projects listed out of `order` across two sections."""
    return make_content(
        [
            make_project("gamma", order=30, section="Play"),
            make_project("alpha", order=10),
            make_project("beta", order=20),
        ]
    )
