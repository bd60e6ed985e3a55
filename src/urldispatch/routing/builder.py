r"""Rule builder — validates a raw rule spec and materializes a Rule.

A raw spec is a plain mapping::

    {
        "pattern": r"^blog/(?P<slug>[\w-]+)/$",
        "url": "blog/%s/",                  # optional, guessed from pattern
        "target": show_post,                # callable, Callback, Resource or path
        "params": {"action": "read"},       # optional extra options
        "GET": {"page": "1"},               # optional query defaults
    }
"""

import logging
from collections.abc import Mapping
from typing import Any

from urldispatch.errors import ConfigurationError
from urldispatch.routing.rule import Rule

logger = logging.getLogger("urldispatch.routing")

# Legacy spellings accepted for the two required keys and the query defaults.
_PATTERN_KEYS = ("pattern", "regex")
_QUERY_KEYS = ("GET", "query")

# Options that may be given at the top level of a spec instead of in "params".
_TOP_LEVEL_OPTIONS = ("action", "args_in_get")


def guess_url(pattern: str) -> str:
    """Guess a URL template from *pattern* by dropping its first and last character.

    Meant for ``^...$`` patterns: ``"^foo/bar/$"`` -> ``"foo/bar/"``.
    Other patterns lose real characters; give those rules an explicit ``url``.
    """
    return pattern[1:-1]


def _first_present(spec: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if spec.get(key) is not None:
            return spec[key]
    return None


def _mapping_option(name: str, spec: Mapping[str, Any], keys: tuple[str, ...]) -> dict[str, Any]:
    value = _first_present(spec, keys)
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        msg = f"Rule {name!r} is malformed ({keys[0]!r} must be a mapping, got {type(value).__name__})."
        raise ConfigurationError(msg)
    return dict(value)


def build_rule(name: str, spec: Mapping[str, Any]) -> Rule:
    """Validate *spec* and build the Rule registered as *name*.

    Raises ``ConfigurationError`` if ``pattern`` or ``target`` is missing,
    or if ``params``/``GET`` is not a mapping.
    """
    if not isinstance(spec, Mapping):
        msg = f"Rule {name!r} is malformed (expected a mapping, got {type(spec).__name__})."
        raise ConfigurationError(msg)

    pattern = _first_present(spec, _PATTERN_KEYS)
    if pattern is None:
        msg = f"Missing 'pattern' option for the rule {name!r}."
        raise ConfigurationError(msg)

    target = spec.get("target")
    if target is None:
        msg = f"Missing 'target' option for the rule {name!r}."
        raise ConfigurationError(msg)

    url = spec.get("url")
    if url is None:
        url = guess_url(pattern)

    extra = _mapping_option(name, spec, ("params",))
    for key in _TOP_LEVEL_OPTIONS:
        if key in spec:
            extra[key] = spec[key]

    query_defaults = _mapping_option(name, spec, _QUERY_KEYS)

    rule = Rule(name=name, pattern=pattern, url=url, target=target, extra=extra)
    if query_defaults:
        rule.merge_extra_data({"GET": query_defaults})

    logger.debug("Built rule %r (%s -> %s)", name, pattern, url)
    return rule
