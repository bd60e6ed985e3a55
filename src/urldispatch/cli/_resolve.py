"""Dispatcher lookup for ``urldispatch routes`` and ``urldispatch match``.

Import strings follow the same ``"module:attribute"`` form as callback
targets; the attribute defaults to ``dispatcher``.
"""

from collections.abc import Mapping

from urldispatch.routing.dispatcher import Dispatcher
from urldispatch.routing.rule import import_object


def resolve_dispatcher(import_string: str) -> Dispatcher:
    """Resolve an import string to a Dispatcher.

    The named object may be:

    - a ``Dispatcher``;
    - a factory returning one (``"myapp.urls:make_dispatcher"``);
    - a plain rule table, a mapping of name -> rule spec
      (``"myapp.urls:RULES"``), wrapped in a default-configured Dispatcher.

    Raises:
        ConfigurationError: If the module or attribute cannot be imported.
        TypeError: If the object is none of the above, or a factory fails.

    """
    obj = import_object(import_string, default_attr="dispatcher")

    if isinstance(obj, Mapping):
        return Dispatcher(obj)

    if callable(obj) and not isinstance(obj, Dispatcher):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Dispatcher):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a Dispatcher or rule table"
        raise TypeError(msg)

    return obj
