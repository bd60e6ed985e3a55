"""urldispatch exception hierarchy.

Shared across the rule builder, dispatcher, and CLI so every module
raises and catches the same types.
"""

from dataclasses import dataclass


class DispatchError(Exception):
    """Base for all urldispatch-specific errors."""


class ConfigurationError(DispatchError):
    """Raised when a rule or dispatcher setting is invalid.

    Missing ``pattern``/``target``, malformed ``params``/``GET`` options,
    a second build of the same rule name, or a missing files directory.
    """


class NoSuchRule(DispatchError, LookupError):  # noqa: N818
    """Reverse lookup for a rule name that was never registered."""

    def __init__(self, name: str) -> None:
        super().__init__(f"No rule named {name!r} is registered.")
        self.name = name


class URLFormatError(DispatchError, ValueError):
    """A URL template could not be filled with the supplied parameters."""


@dataclass(frozen=True, slots=True)
class HTTPError(DispatchError):
    """An error that maps directly to an HTTP status code.

    Raised by the dispatcher while handling a request. The front
    controller catches these and renders the matching error page.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no rule matched the normalized request path.

    ``path`` holds the path exactly as it was matched against the rules
    (base prefix and query string removed, trailing slash applied).
    """

    def __init__(self, path: str) -> None:
        super().__init__(status=404, detail=f"{path} not found")
        object.__setattr__(self, "path", path)


class ResourceNotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """500 — a matched rule points at a file that does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(status=500, detail=f"file {path!r} not found")
        object.__setattr__(self, "path", path)
