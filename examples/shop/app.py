"""Shop: a routes directory compiled onto the reference router.

Demonstrates:
- ``index.py`` files mapping to their directory URL
- middleware and per-method end middleware
- a computed route (``products/#id.py``) matching numeric ids
- directory catch-alls (``all.py``) with the deeper one winning
- ``$draft.py`` left out of the routes

Inspect:
    autoroutes routes examples/shop/routes
"""

from pathlib import Path

from autoroutes import StackRouter, compile_routes

router = StackRouter()
compile_routes(router, routes_dir=Path(__file__).parent / "routes")
