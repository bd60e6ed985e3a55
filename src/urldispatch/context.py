"""Request-scoped context via ContextVar.

Provides:
- ``request_uri_var``: The raw request URI (path + query string) set by
  the front controller. ``Dispatcher.handle()`` reads it when called
  without an explicit path.
- ``DispatchContext``: Per-dispatch state (query store, body, result)
  handed to targets instead of process-wide globals.
- ``context_var``: The ``DispatchContext`` of the target currently
  being invoked.

Both variables are explicitly opt-in — accessing an unset one raises
``LookupError``.
"""

from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from urldispatch.http.query import QueryParams

if TYPE_CHECKING:
    from urldispatch.routing.rule import Rule

# -- Request URI --

request_uri_var: ContextVar[str] = ContextVar("urldispatch_request_uri")
"""The current raw request URI. Set by the front controller before dispatch."""


def get_request_uri() -> str:
    """Return the current raw request URI.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_uri_var.get()


# -- Dispatch context --


@dataclass(slots=True)
class DispatchContext:
    """State of one ``handle()`` call.

    ``query`` is initialized from the request's query string and may
    receive matched parameters and rule defaults before the target runs.
    Resource targets with ``action="read"`` write into ``body``; executed
    resources and callbacks may do the same through ``write()``.
    """

    path: str
    query: QueryParams = field(default_factory=QueryParams)
    rule: "Rule | None" = None
    params: dict[str, str] = field(default_factory=dict)
    body: bytearray = field(default_factory=bytearray)
    result: Any = None

    def write(self, data: bytes | str) -> None:
        """Append *data* to the response body (``str`` is UTF-8 encoded)."""
        if isinstance(data, str):
            data = data.encode("utf-8")
        self.body.extend(data)


context_var: ContextVar[DispatchContext] = ContextVar("urldispatch_context")
"""The dispatch context of the running target. Set around each invocation."""


def get_context() -> DispatchContext:
    """Return the dispatch context of the running target.

    Raises ``LookupError`` if called outside a dispatched target.
    """
    return context_var.get()
