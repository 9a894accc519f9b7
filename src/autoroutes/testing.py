"""Test client for compiled route tables.

Drives a :class:`StackRouter` in-process with the same Request and
Response types handlers see in production use of the reference router.
"""

from collections.abc import Mapping

from autoroutes.routing.http import Request, Response
from autoroutes.routing.stack import StackRouter


class TestClient:
    """Async test client for a router built by ``compile_routes``.

    Usage::

        router = StackRouter()
        compile_routes(router, routes_dir=tmp_path)

        async with TestClient(router) as client:
            response = await client.get("/widgets")
            assert response.status == 200
    """

    __test__ = False  # Tell pytest this is not a test class
    __slots__ = ("router",)

    def __init__(self, router: StackRouter) -> None:
        self.router = router

    async def __aenter__(self) -> "TestClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        pass

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Response:
        """Dispatch a request and return the response it produced."""
        request = Request(method=method, path=path, headers=dict(headers or {}))
        return await self.router.dispatch(request, Response())

    async def get(self, path: str, *, headers: Mapping[str, str] | None = None) -> Response:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def post(self, path: str, *, headers: Mapping[str, str] | None = None) -> Response:
        """Send a POST request."""
        return await self.request("POST", path, headers=headers)

    async def put(self, path: str, *, headers: Mapping[str, str] | None = None) -> Response:
        """Send a PUT request."""
        return await self.request("PUT", path, headers=headers)

    async def patch(self, path: str, *, headers: Mapping[str, str] | None = None) -> Response:
        """Send a PATCH request."""
        return await self.request("PATCH", path, headers=headers)

    async def delete(self, path: str, *, headers: Mapping[str, str] | None = None) -> Response:
        """Send a DELETE request."""
        return await self.request("DELETE", path, headers=headers)
