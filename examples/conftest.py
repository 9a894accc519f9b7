"""pytest fixtures for the autoroutes examples.

An example directory holds ``app.py``, which compiles its ``routes/``
tree onto a module-level ``router``, next to its ``test_app.py``.
"""

import importlib.util
from pathlib import Path

import pytest

from autoroutes.routing import StackRouter


def _load_app(app_path: Path):
    spec = importlib.util.spec_from_file_location(f"autoroutes_example_{app_path.parent.name}", app_path)
    assert spec is not None and spec.loader is not None
    app = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(app)
    return app


@pytest.fixture
def example_router(request: pytest.FixtureRequest) -> StackRouter:
    """The router built by the example's app.py, compiled anew per test."""
    return _load_app(Path(request.path).parent / "app.py").router
