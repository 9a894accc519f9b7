"""Tests for autoroutes.compiler: directory walking and registration order."""

import logging
from collections.abc import Callable
from pathlib import Path
from types import SimpleNamespace

import pytest

from autoroutes.compiler import (
    RouteCompiler,
    build_route,
    compile_routes,
    compile_routes_with_table,
)
from autoroutes.config import resolve_config
from autoroutes.errors import RouteLoadError
from autoroutes.routing import StackRouter

WriteRoutes = Callable[[dict[str, str]], Path]

GET = """
    def get(request, response, next):
        response.send("get")
"""

GET_POST = """
    def get(request, response, next):
        response.send("get")

    def post(request, response, next):
        response.send("post")
"""

CATCH_ALL = """
    def handler(request, response, next):
        response.send("caught")
"""


def _layers(router: StackRouter) -> list[tuple[str, str]]:
    return [(layer.method, layer.pattern) for layer in router.layers]


class TestUrls:
    def test_index_and_widgets(self, write_routes: WriteRoutes) -> None:
        root = write_routes(
            {
                "index.py": GET,
                "widgets/index.py": GET_POST,
                "widgets/$private.py": GET,
            }
        )
        router = StackRouter()

        table = compile_routes_with_table(router, routes_dir=root)

        assert table == {
            "/": str(root / "index.py"),
            "/widgets": str(root / "widgets" / "index.py"),
        }
        assert _layers(router) == [
            ("get", "/"),
            ("get", "/widgets"),
            ("post", "/widgets"),
        ]

    def test_named_files(self, write_routes: WriteRoutes) -> None:
        root = write_routes({"about.py": GET, "shop/cart.py": GET, "shop/deep/item.py": GET})

        table = compile_routes_with_table(StackRouter(), routes_dir=root)

        assert list(table) == ["/about", "/shop/cart", "/shop/deep/item"]

    def test_base_url(self, write_routes: WriteRoutes) -> None:
        root = write_routes({"index.py": GET, "about.py": GET, "widgets/index.py": GET})

        table = compile_routes_with_table(StackRouter(), routes_dir=root, base_url="/api/")

        assert list(table) == ["/api/about", "/api", "/api/widgets"]

    def test_custom_names(self, write_routes: WriteRoutes) -> None:
        root = write_routes(
            {
                "home.py": GET,
                "index.py": GET,
                "_hidden.py": "raise RuntimeError('loaded')\n",
                "fallback.py": CATCH_ALL,
            }
        )

        table = compile_routes_with_table(
            StackRouter(),
            routes_dir=root,
            root_route_name="home",
            all_route_name="fallback",
            ignore_prefix="_",
        )

        assert list(table) == ["/", "/index", "/$all"]


class TestSkips:
    def test_ignored_file_is_not_loaded(self, write_routes: WriteRoutes) -> None:
        root = write_routes({"$broken.py": "raise RuntimeError('never')\n", "index.py": GET})

        table = compile_routes_with_table(StackRouter(), routes_dir=root)

        assert list(table) == ["/"]

    def test_other_extensions(self, write_routes: WriteRoutes) -> None:
        root = write_routes({"README.md": "# routes\n", "data.json": "{}", "index.py": GET})

        table = compile_routes_with_table(StackRouter(), routes_dir=root)

        assert list(table) == ["/"]

    def test_pycache_directory(self, write_routes: WriteRoutes) -> None:
        root = write_routes({"__pycache__/stale.py": GET, "index.py": GET})

        table = compile_routes_with_table(StackRouter(), routes_dir=root)

        assert list(table) == ["/"]

    def test_ignore_prefixed_directory_is_walked(self, write_routes: WriteRoutes) -> None:
        root = write_routes({"$admin/index.py": GET})

        table = compile_routes_with_table(StackRouter(), routes_dir=root)

        assert list(table) == ["/$admin"]


class TestMiddleware:
    def test_registration_order(self, write_routes: WriteRoutes) -> None:
        root = write_routes(
            {
                "widgets.py": """
                    def before(request, response, next):
                        next()

                    def after(request, response, next):
                        next()

                    def get(request, response, next):
                        next()

                    middleware = before
                    end_middleware = {"get": [after]}
                """,
            }
        )
        router = StackRouter()

        compile_routes(router, routes_dir=root)

        assert [(layer.method, layer.pattern, layer.handler.__name__) for layer in router.layers] == [
            ("use", "/widgets", "before"),
            ("get", "/widgets", "get"),
            ("get", "/widgets", "after"),
        ]

    def test_per_method_list_warning(
        self, write_routes: WriteRoutes, caplog: pytest.LogCaptureFixture
    ) -> None:
        root = write_routes(
            {
                "index.py": """
                    def mw(request, response, next):
                        next()

                    middleware = {"get": [mw, "oops", mw]}
                """,
            }
        )
        router = StackRouter()

        with caplog.at_level(logging.WARNING, logger="autoroutes"):
            compile_routes(router, routes_dir=root)

        assert _layers(router) == [("get", "/"), ("get", "/")]
        assert len(caplog.records) == 1
        assert "get" in caplog.records[0].getMessage()
        assert "index 1" in caplog.records[0].getMessage()


class TestCatchAll:
    def test_one_per_directory(self, write_routes: WriteRoutes) -> None:
        root = write_routes(
            {
                "all.py": CATCH_ALL,
                "index.py": GET,
                "a.py": GET,
                "b.py": GET,
                "widgets/all.py": CATCH_ALL,
                "widgets/index.py": GET,
                "plain/index.py": GET,
            }
        )
        router = StackRouter()

        table = compile_routes_with_table(router, routes_dir=root)

        catch_alls = [layer.pattern for layer in router.layers if layer.method == "all"]
        assert catch_alls == ["/widgets/*", "/*"]
        assert table["/$all"] == str(root / "all.py")
        assert table["/widgets/$all"] == str(root / "widgets" / "all.py")
        assert "/plain/$all" not in table

    def test_registered_after_directory_routes(self, write_routes: WriteRoutes) -> None:
        root = write_routes({"all.py": CATCH_ALL, "zeta.py": GET, "alpha.py": GET})
        router = StackRouter()

        compile_routes(router, routes_dir=root)

        assert _layers(router) == [("get", "/alpha"), ("get", "/zeta"), ("all", "/*")]

    def test_not_a_route_url(self, write_routes: WriteRoutes) -> None:
        root = write_routes({"all.py": CATCH_ALL})

        table = compile_routes_with_table(StackRouter(), routes_dir=root)

        assert list(table) == ["/$all"]

    def test_missing_handler(self, write_routes: WriteRoutes, caplog: pytest.LogCaptureFixture) -> None:
        root = write_routes({"all.py": GET})
        router = StackRouter()

        table = compile_routes_with_table(router, routes_dir=root)

        assert table == {}
        assert len(router) == 0
        assert "all.py" in caplog.records[0].getMessage()

    def test_non_callable_handler(self, write_routes: WriteRoutes, caplog: pytest.LogCaptureFixture) -> None:
        root = write_routes({"all.py": "handler = 'caught'\n"})
        router = StackRouter()

        table = compile_routes_with_table(router, routes_dir=root)

        assert table == {}
        assert len(router) == 0
        assert len(caplog.records) == 1
        assert "all.py" in caplog.records[0].getMessage()


class TestComputed:
    def test_registered_first_under_wildcard(self, write_routes: WriteRoutes) -> None:
        root = write_routes(
            {
                "about.py": GET,
                "#.py": r"""
                    import re

                    pattern = re.compile(r"^\d+$")

                    def mw(request, response, next, remainder):
                        next()

                    middleware = [mw]

                    def get(request, response, next, remainder):
                        response.send(remainder)
                """,
            }
        )
        router = StackRouter()

        table = compile_routes_with_table(router, routes_dir=root)

        assert _layers(router) == [("use", "/*"), ("get", "/*"), ("get", "/about")]
        assert table == {
            r"/`^\d+$`": str(root / "#.py"),
            "/about": str(root / "about.py"),
        }

    def test_recursive_key(self, write_routes: WriteRoutes) -> None:
        root = write_routes(
            {
                "files/#path.py": """
                    recursive = True

                    def get(request, response, next, remainder):
                        response.send(remainder)
                """,
            }
        )

        table = compile_routes_with_table(StackRouter(), routes_dir=root)

        assert list(table) == ["/files/**/`^.+$`"]

    def test_several_in_one_directory(self, write_routes: WriteRoutes) -> None:
        root = write_routes(
            {
                "#a.py": "pattern = r'^a'\n",
                "#b.py": "pattern = r'^b'\n",
            }
        )

        table = compile_routes_with_table(StackRouter(), routes_dir=root)

        assert list(table) == ["/`^a`", "/`^b`"]


class TestWarnings:
    def test_directory_shadowing_file(
        self, write_routes: WriteRoutes, caplog: pytest.LogCaptureFixture
    ) -> None:
        root = write_routes({"widgets.py": GET, "widgets/gadget.py": GET})

        table = compile_routes_with_table(StackRouter(), routes_dir=root)

        assert list(table) == ["/widgets/gadget", "/widgets"]
        assert len(caplog.records) == 1
        message = caplog.records[0].getMessage()
        assert "widgets.py" in message
        assert "index.py" in message

    def test_non_callable_method(self, write_routes: WriteRoutes, caplog: pytest.LogCaptureFixture) -> None:
        root = write_routes(
            {
                "index.py": """
                    get = "hello"

                    def post(request, response, next):
                        response.send("post")
                """,
            }
        )
        router = StackRouter()

        table = compile_routes_with_table(router, routes_dir=root)

        assert list(table) == ["/"]
        assert _layers(router) == [("post", "/")]
        assert len(caplog.records) == 1

    def test_handler_value_in_regular_route(
        self, write_routes: WriteRoutes, caplog: pytest.LogCaptureFixture
    ) -> None:
        root = write_routes(
            {
                "index.py": """
                    handler = "json"

                    def get(request, response, next):
                        response.send(handler)
                """,
            }
        )

        table = compile_routes_with_table(StackRouter(), routes_dir=root)

        assert list(table) == ["/"]
        assert caplog.records == []

    def test_route_file_with_dataclass(self, write_routes: WriteRoutes) -> None:
        root = write_routes(
            {
                "items.py": """
                    from __future__ import annotations

                    from dataclasses import dataclass


                    @dataclass(frozen=True)
                    class Item:
                        name: str
                        price: int = 0


                    def get(request, response, next):
                        response.send(Item("kettle").name)
                """,
            }
        )
        router = StackRouter()

        table = compile_routes_with_table(router, routes_dir=root)

        assert list(table) == ["/items"]
        assert _layers(router) == [("get", "/items")]


class TestErrors:
    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="missing"):
            compile_routes(StackRouter(), routes_dir=tmp_path / "missing")

    def test_root_is_a_file(self, tmp_path: Path) -> None:
        path = tmp_path / "routes.py"
        path.write_text("", encoding="utf-8")

        with pytest.raises(FileNotFoundError):
            compile_routes(StackRouter(), routes_dir=path)

    def test_load_failure_aborts(self, write_routes: WriteRoutes) -> None:
        root = write_routes({"a.py": GET, "b.py": "import not_a_real_module_xyz\n", "c.py": GET})
        router = StackRouter()

        with pytest.raises(RouteLoadError) as exc_info:
            compile_routes(router, routes_dir=root)

        assert exc_info.value.path == root / "b.py"
        assert isinstance(exc_info.value.__cause__, ModuleNotFoundError)


class TestEntryPoints:
    def test_compile_routes_returns_nothing(self, write_routes: WriteRoutes) -> None:
        root = write_routes({"index.py": GET})
        router = StackRouter()

        assert compile_routes(router, routes_dir=root) is None
        assert _layers(router) == [("get", "/")]

    def test_accepts_mapping(self, write_routes: WriteRoutes) -> None:
        root = write_routes({"index.py": GET})

        table = compile_routes_with_table(StackRouter(), {"routes_dir": root, "base_url": "/v1/"})

        assert list(table) == ["/v1"]

    def test_compiler_without_recording(self, write_routes: WriteRoutes) -> None:
        root = write_routes({"index.py": GET})
        compiler = RouteCompiler(StackRouter(), resolve_config(routes_dir=root))

        assert compiler.compile() == {}
        assert compiler.table == {}

    def test_custom_loader(self, write_routes: WriteRoutes) -> None:
        root = write_routes({"index.py": "", "#.py": ""})
        seen: list[tuple[str, bool]] = []

        def get(request, response, next):  # noqa: A002
            response.send("custom")

        def loader(path: Path, *, computed: bool = False):
            seen.append((path.name, computed))
            return build_route(SimpleNamespace(get=get), path, computed=computed)

        router = StackRouter()
        compile_routes(router, routes_dir=root, loader=loader)

        assert seen == [("#.py", True), ("index.py", False)]
        assert _layers(router) == [("get", "/*"), ("get", "/")]

    def test_custom_log_sink(self, write_routes: WriteRoutes) -> None:
        root = write_routes({"widgets.py": GET, "widgets/index.py": GET})

        class Sink:
            def __init__(self) -> None:
                self.messages: list[tuple[str, str]] = []

            def _record(self, level: str, msg: str, *args: object) -> None:
                self.messages.append((level, msg % args if args else msg))

            def log(self, msg: str, *args: object) -> None:
                self._record("log", msg, *args)

            def debug(self, msg: str, *args: object) -> None:
                pass

            def info(self, msg: str, *args: object) -> None:
                self._record("info", msg, *args)

            def warn(self, msg: str, *args: object) -> None:
                self._record("warn", msg, *args)

            def error(self, msg: str, *args: object) -> None:
                raise AssertionError(msg)

            def exception(self, exc: BaseException) -> None:
                raise exc

        sink = Sink()
        compile_routes(StackRouter(), routes_dir=root, log=sink)

        levels = [level for level, _ in sink.messages]
        assert levels[0] == "info"
        assert levels[-1] == "info"
        assert levels.count("warn") == 1
        assert ("log", f"/widgets --> {root / 'widgets.py'}") in sink.messages
