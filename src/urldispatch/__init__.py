"""urldispatch — A declarative, Django-like URL dispatcher.

Named rules pair a regular expression with a URL template and a target.
Requests go to the first rule, in registration order, whose pattern
matches; rule names map back to URLs.

Basic usage::

    from urldispatch import Dispatcher

    def show_post(slug):
        ...

    dispatcher = Dispatcher({
        "post": {"pattern": r"^blog/(?P<slug>[\\w-]+)/$", "url": "blog/%s/", "target": show_post},
    })

    dispatcher.handle("/blog/hello")        # show_post(slug="hello")
    dispatcher.url_for("post", ["hello"])   # "blog/hello/"
"""

__version__ = "0.1.0-dev"
__all__ = [
    "Callback",
    "ConfigurationError",
    "DispatchContext",
    "DispatchError",
    "Dispatcher",
    "DispatcherConfig",
    "HTTPError",
    "NoSuchRule",
    "NotFound",
    "QueryParams",
    "Resource",
    "ResourceNotFound",
    "Rule",
    "RuleMatch",
    "TargetKind",
    "URLFormatError",
    "create_htaccess",
    "get_context",
    "request_uri_var",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import urldispatch`` fast while providing a clean top-level API.
    """
    if name == "Dispatcher":
        from urldispatch.routing.dispatcher import Dispatcher

        return Dispatcher

    if name == "DispatcherConfig":
        from urldispatch.config import DispatcherConfig

        return DispatcherConfig

    if name in ("Callback", "Resource", "Rule", "RuleMatch", "TargetKind"):
        from urldispatch.routing import rule as _rule

        return getattr(_rule, name)

    if name in ("DispatchContext", "get_context", "request_uri_var"):
        from urldispatch import context as _ctx

        return getattr(_ctx, name)

    if name == "QueryParams":
        from urldispatch.http.query import QueryParams

        return QueryParams

    if name == "create_htaccess":
        from urldispatch.rewrite import create_htaccess

        return create_htaccess

    if name in (
        "ConfigurationError",
        "DispatchError",
        "HTTPError",
        "NoSuchRule",
        "NotFound",
        "ResourceNotFound",
        "URLFormatError",
    ):
        from urldispatch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
