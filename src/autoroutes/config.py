"""Compiler configuration.

RoutesConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from autoroutes.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class RoutesConfig:
    """Options for one compilation run. Immutable after creation.

    All fields have defaults. Override what you need::

        config = RoutesConfig(routes_dir="api", base_url="/api/")
    """

    # Root of the routes tree (resolved to an absolute path before walking)
    routes_dir: str | Path = "routes"

    # Reserved file names (stems)
    all_route_name: str = "all"
    root_route_name: str = "index"

    # File name prefixes
    ignore_prefix: str = "$"
    computed_prefix: str = "#"

    # URL prefix for the root directory
    base_url: str = "/"

    # Only files with this suffix are loaded as route modules
    extension: str = ".py"

    def resolve(self) -> RoutesConfig:
        """Return a copy whose ``routes_dir`` is absolute.

        Relative paths are resolved against the process working directory.
        """
        return replace(self, routes_dir=Path(self.routes_dir).resolve())


_FIELD_NAMES = frozenset(f.name for f in fields(RoutesConfig))


def resolve_config(
    config: RoutesConfig | Mapping[str, Any] | None = None,
    /,
    **overrides: Any,
) -> RoutesConfig:
    """Normalize user options against the defaults.

    Accepts a ``RoutesConfig``, a partial mapping of field names, or nothing.
    Keyword overrides win over both.

    Raises:
        ConfigurationError: If an option does not name a config field.
    """
    if config is None:
        base = RoutesConfig()
    elif isinstance(config, RoutesConfig):
        base = config
    else:
        _check_option_names(config)
        base = RoutesConfig(**config)

    if overrides:
        _check_option_names(overrides)
        base = replace(base, **overrides)

    return base.resolve()


def _check_option_names(options: Mapping[str, Any]) -> None:
    unknown = sorted(set(options) - _FIELD_NAMES)
    if unknown:
        msg = f"Unknown route option(s): {', '.join(unknown)}. Valid options: {', '.join(sorted(_FIELD_NAMES))}"
        raise ConfigurationError(msg)
