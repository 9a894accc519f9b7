"""HTTP method tokens recognised in route modules and middleware maps.

The set is closed: anything else a route module exports is ignored.
"""

# Ordered; registration follows this order.
HTTP_METHODS: tuple[str, ...] = (
    "all",
    "checkout",
    "copy",
    "delete",
    "get",
    "head",
    "lock",
    "merge",
    "mkactivity",
    "mkcol",
    "move",
    "m-search",
    "notify",
    "options",
    "patch",
    "post",
    "purge",
    "put",
    "report",
    "search",
    "subscribe",
    "trace",
    "unlock",
    "unsubscribe",
)

METHOD_SET: frozenset[str] = frozenset(HTTP_METHODS)

# Pseudo-method for middleware registrations
USE = "use"


def attribute_name(method: str) -> str:
    """Module attribute holding the handler for *method*.

    ``m-search`` is not a valid identifier, so it is exported as ``m_search``.
    """
    return method.replace("-", "_")
