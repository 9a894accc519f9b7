"""Shared fixtures: route trees written under ``tmp_path``."""

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from autoroutes.log import log_config


@pytest.fixture(autouse=True)
def _reset_log_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Every test starts from the default logging switches."""
    monkeypatch.setattr(log_config, "mute_logs", True)
    monkeypatch.setattr(log_config, "ignore_warnings", False)
    monkeypatch.setattr(log_config, "debug", False)


@pytest.fixture
def routes_dir(tmp_path: Path) -> Path:
    path = tmp_path / "routes"
    path.mkdir()
    # Compiled tables hold resolved paths
    return path.resolve()


@pytest.fixture
def write_routes(routes_dir: Path) -> Callable[[dict[str, str]], Path]:
    """Write ``{relative path: source}`` into the routes directory.

    Sources are dedented, so tests can use indented triple-quoted strings.
    Returns the routes directory.
    """

    def write(files: dict[str, str]) -> Path:
        for relative, source in files.items():
            path = routes_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(source), encoding="utf-8")
        return routes_dir

    return write
