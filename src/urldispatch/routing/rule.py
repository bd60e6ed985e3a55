"""Rule, target variants, and RuleMatch."""

import importlib
import os
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from urldispatch.errors import ConfigurationError, URLFormatError


class TargetKind(Enum):
    """How a matched rule hands off the request."""

    CALLBACK = "callback"
    RESOURCE = "resource"


@dataclass(frozen=True, slots=True)
class Callback:
    """An invocable target.

    ``handler`` is either a callable or an import string
    (``"package.module:function"``) resolved the first time the rule's
    target kind is needed.
    """

    handler: Callable[..., Any] | str


@dataclass(frozen=True, slots=True)
class Resource:
    """A file target, relative to the dispatcher's files directory."""

    path: str | os.PathLike[str]


def import_object(import_string: str, default_attr: str | None = None) -> Any:
    """Import the object named by ``"module:attribute"``.

    The attribute part may be dotted (``"app.views:Blog.index"``). When it
    is omitted, *default_attr* is used; without one the string is rejected.

    Raises ``ConfigurationError`` if the string is malformed or the module
    or attribute is missing.
    """
    module_path, _, attr_path = import_string.partition(":")
    attr_path = attr_path or default_attr or ""
    if not module_path or not attr_path:
        msg = f"{import_string!r} must use the 'module:attribute' form."
        raise ConfigurationError(msg)

    try:
        obj: Any = importlib.import_module(module_path)
        for attr in attr_path.split("."):
            obj = getattr(obj, attr)
    except (ImportError, AttributeError) as exc:
        msg = f"Cannot resolve {import_string!r}: {exc}"
        raise ConfigurationError(msg) from exc
    return obj


def resolve_callable(import_string: str) -> Callable[..., Any]:
    """Resolve ``"module:attribute"`` to a callable.

    Raises ``ConfigurationError`` if the import fails or the resolved object
    is not callable.
    """
    obj = import_object(import_string)
    if not callable(obj):
        msg = f"Callback {import_string!r} resolved to {type(obj).__name__}, which is not callable."
        raise ConfigurationError(msg)
    return obj


def _classify(target: Any) -> tuple[TargetKind, Any]:
    """Return the kind of *target* and its normalized value.

    Explicit ``Callback``/``Resource`` wrappers win. Otherwise a callable is
    a callback and a string or path is a resource file.
    """
    match target:
        case Callback(handler=str() as import_string):
            return TargetKind.CALLBACK, resolve_callable(import_string)
        case Callback(handler=handler):
            if not callable(handler):
                msg = f"Callback target {handler!r} is not callable."
                raise ConfigurationError(msg)
            return TargetKind.CALLBACK, handler
        case Resource(path=path):
            return TargetKind.RESOURCE, os.fspath(path)
        case str() | os.PathLike():
            return TargetKind.RESOURCE, os.fspath(target)
        case _ if callable(target):
            return TargetKind.CALLBACK, target
    msg = f"Unsupported target {target!r}: expected a callable, a path, Callback or Resource."
    raise ConfigurationError(msg)


@dataclass(slots=True)
class Rule:
    """A built routing rule.

    Created by the rule builder the first time a registered name is
    needed, then cached by the dispatcher. Only ``merge_extra_data``
    mutates it after construction.
    """

    name: str
    pattern: str
    url: str
    target: Any
    extra: dict[str, Any] = field(default_factory=dict)
    _kind: TargetKind | None = field(default=None, init=False, repr=False, compare=False)
    _resolved: Any = field(default=None, init=False, repr=False, compare=False)
    _regex: re.Pattern[str] | None = field(default=None, init=False, repr=False, compare=False)

    @property
    def target_kind(self) -> TargetKind:
        """Kind of the target, classified once and cached."""
        if self._kind is None:
            self._kind, self._resolved = _classify(self.target)
        return self._kind

    @property
    def handler(self) -> Callable[..., Any]:
        """The resolved callable of a callback rule."""
        if self.target_kind is not TargetKind.CALLBACK:
            msg = f"Rule {self.name!r} targets a resource, not a callback."
            raise ConfigurationError(msg)
        return self._resolved

    @property
    def resource(self) -> str:
        """The target path of a resource rule, as registered."""
        if self.target_kind is not TargetKind.RESOURCE:
            msg = f"Rule {self.name!r} targets a callback, not a resource."
            raise ConfigurationError(msg)
        return self._resolved

    @property
    def regex(self) -> re.Pattern[str]:
        if self._regex is None:
            try:
                self._regex = re.compile(self.pattern)
            except re.error as exc:
                msg = f"Rule {self.name!r} has an invalid pattern {self.pattern!r}: {exc}"
                raise ConfigurationError(msg) from exc
        return self._regex

    def search(self, path: str) -> re.Match[str] | None:
        """Apply the pattern to *path*. ``None`` means no match.

        Patterns are not anchored implicitly; rules carry their own
        ``^``/``$``.
        """
        return self.regex.search(path)

    def extra_data(self, key: str, default: Any = None) -> Any:
        """Return the option named *key*, or *default* if it isn't set."""
        value = self.extra.get(key)
        return default if value is None else value

    def merge_extra_data(self, overlay: Mapping[str, Any]) -> None:
        """Merge *overlay* into the options. Existing keys are overwritten."""
        self.extra = {**self.extra, **overlay}

    def url_for(self, params: Sequence[Any] | Any = ()) -> str:
        """Fill the URL template positionally with *params*.

        A single non-sequence value is treated as a one-item sequence.

        Raises ``URLFormatError`` if the number or types of *params* do not
        fit the template's placeholders.
        """
        if isinstance(params, (str, bytes)) or not isinstance(params, Sequence):
            params = (params,)
        try:
            return self.url % tuple(params)
        except (TypeError, ValueError) as exc:
            msg = f"Cannot build URL for rule {self.name!r} from {self.url!r} with {tuple(params)!r}: {exc}"
            raise URLFormatError(msg) from exc


@dataclass(frozen=True, slots=True)
class RuleMatch:
    """Result of a successful rule match.

    ``params`` holds named captures only; unmatched optional groups are
    left out.
    """

    rule: Rule
    params: dict[str, str]
    path: str
