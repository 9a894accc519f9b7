"""Routing: the router contract and an ordered reference router.

Compiled routes are registered on anything implementing
:class:`RouteRegistry`. :class:`StackRouter` is the in-process
implementation used by the CLI and the test client.
"""

from autoroutes.routing.http import Request, Response
from autoroutes.routing.protocol import Handler, Next, RouteRegistry
from autoroutes.routing.stack import Layer, StackRouter, match_pattern

__all__ = [
    "Handler",
    "Layer",
    "Next",
    "Request",
    "Response",
    "RouteRegistry",
    "StackRouter",
    "match_pattern",
]
