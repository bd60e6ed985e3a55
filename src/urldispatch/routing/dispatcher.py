"""Dispatcher — ordered, first-match-wins URL dispatch over named rules.

Raw rule specs are registered cheaply (no validation) and built into
``Rule`` objects the first time a dispatch or reverse lookup needs them.
Registration order is match priority.
"""

import logging
import os
import runpy
from collections.abc import Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any

from urldispatch.config import DispatcherConfig
from urldispatch.context import DispatchContext, context_var, get_request_uri
from urldispatch.errors import ConfigurationError, NoSuchRule, NotFound, ResourceNotFound
from urldispatch.http.query import QueryParams
from urldispatch.routing.builder import build_rule
from urldispatch.routing.rule import Rule, RuleMatch, TargetKind

logger = logging.getLogger("urldispatch.routing")


class Dispatcher:
    """Named-rule URL dispatcher.

    Usage::

        dispatcher = Dispatcher({
            "post": {"pattern": r"^blog/(?P<slug>[\\w-]+)/$", "url": "blog/%s/", "target": show_post},
            "about": {"pattern": r"^about/$", "target": "about.html", "params": {"action": "read"}},
        }, config=DispatcherConfig(files_dir="pages"))

        dispatcher.handle("/blog/hello-world")   # calls show_post(slug="hello-world")
        dispatcher.url_for("post", ["hello-world"])  # "blog/hello-world/"
    """

    __slots__ = (
        "_args_in_query",
        "_auto_trailing_slash",
        "_base_prefix",
        "_current",
        "_files_dir",
        "_receiver_file",
        "_rules",
        "_specs",
    )

    def __init__(
        self,
        rules: Mapping[str, Mapping[str, Any]] | None = None,
        *,
        config: DispatcherConfig | None = None,
    ) -> None:
        config = config or DispatcherConfig()
        self._specs: dict[str, Mapping[str, Any]] = {}
        self._rules: dict[str, Rule] = {}
        self._current: str | None = None
        self._base_prefix = config.base_prefix
        self._auto_trailing_slash = config.auto_trailing_slash
        self._args_in_query = config.args_in_query
        self._files_dir = ""
        self._receiver_file = config.receiver_file

        if rules:
            self.register_all(rules)
        if config.files_dir:
            self.set_files_dir(config.files_dir)

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, name: str, spec: Mapping[str, Any]) -> None:
        """Register a raw rule spec. A later spec with the same name replaces it.

        Replacing a spec discards the rule already built from it, so the next
        dispatch or reverse lookup builds from the new spec.
        """
        self._specs[name] = spec
        self._rules.pop(name, None)

    def register_all(self, rules: Mapping[str, Mapping[str, Any]]) -> None:
        """Register every spec in *rules*, in the mapping's iteration order."""
        for name, spec in rules.items():
            self.register(name, spec)

    def build(self, name: str) -> Rule:
        """Build and cache the rule registered as *name*.

        Raises ``NoSuchRule`` if nothing is registered under *name* and
        ``ConfigurationError`` if the spec is invalid or the rule was
        already built.
        """
        if name in self._rules:
            msg = f"A rule named {name!r} already exists."
            raise ConfigurationError(msg)
        try:
            spec = self._specs[name]
        except KeyError:
            raise NoSuchRule(name) from None

        rule = build_rule(name, spec)
        self._rules[name] = rule
        return rule

    def get_rule(self, name: str) -> Rule:
        """Return the built rule for *name*, building it on first use."""
        rule = self._rules.get(name)
        if rule is None:
            rule = self.build(name)
        return rule

    @property
    def names(self) -> list[str]:
        """Registered rule names in match priority order."""
        return list(self._specs)

    def __iter__(self) -> Iterator[Rule]:
        """Iterate built rules in match priority order, building as needed."""
        for name in self._specs:
            yield self.get_rule(name)

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, name: object) -> bool:
        return name in self._specs

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def files_dir(self) -> str:
        """Directory resource targets are resolved against ("" when unset)."""
        return self._files_dir

    def set_files_dir(self, directory: str | os.PathLike[str] = "") -> None:
        """Set the resource directory. An empty value clears it.

        Raises ``ConfigurationError`` if *directory* is not an existing
        directory.
        """
        directory = os.fspath(directory)
        if directory and not Path(directory).is_dir():
            msg = f"Directory {directory!r} doesn't exist."
            raise ConfigurationError(msg)
        self._files_dir = directory.rstrip("/") if directory != "/" else directory

    @property
    def auto_trailing_slash(self) -> bool:
        return self._auto_trailing_slash

    @auto_trailing_slash.setter
    def auto_trailing_slash(self, enabled: bool) -> None:
        self._auto_trailing_slash = bool(enabled)

    @property
    def base_prefix(self) -> str:
        return self._base_prefix

    @property
    def current(self) -> str | None:
        """Name of the last rule ``handle()`` dispatched to, if any."""
        return self._current

    @property
    def receiver_file(self) -> str:
        """Front-controller script the web server forwards unknown paths to."""
        return self._receiver_file

    def htaccess(self, base_dir: str = "") -> str:
        """Return the rewrite block forwarding requests to ``receiver_file``."""
        from urldispatch.rewrite import create_htaccess

        return create_htaccess(base_dir, self._receiver_file)

    # ------------------------------------------------------------------
    # Reverse lookup
    # ------------------------------------------------------------------

    def url_for(self, name: str, params: Sequence[Any] | Any = ()) -> str:
        """Return the URL of rule *name* filled positionally with *params*.

        Raises ``NoSuchRule`` for an unknown name and ``URLFormatError``
        if *params* do not fit the rule's URL template.
        """
        return self.get_rule(name).url_for(params)

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def normalize(self, requested: str) -> tuple[str, str]:
        """Split a raw request URI into ``(path, query_string)``.

        Strips the base prefix (or the leading ``/`` when no prefix is
        configured) and applies the automatic trailing slash.
        """
        if not self._base_prefix or self._base_prefix == "/":
            requested = requested[1:]
        else:
            requested = requested.removeprefix(self._base_prefix)

        path, _, query_string = requested.partition("?")
        if self._auto_trailing_slash and not path.endswith("/"):
            path += "/"
        return path, query_string

    def match(self, path: str) -> RuleMatch:
        """Return the first rule, in registration order, matching *path*.

        *path* must already be normalized. Rules are built on the way;
        a build error aborts the search.

        Raises ``NotFound`` if no rule matches.
        """
        for name in self._specs:
            rule = self.get_rule(name)
            found = rule.search(path)
            if found is None:
                continue
            params = {key: value for key, value in found.groupdict().items() if value is not None}
            return RuleMatch(rule=rule, params=params, path=path)

        logger.debug("404 %s: no rule matched", path)
        raise NotFound(path)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def handle(
        self,
        requested: str | None = None,
        *,
        args_in_query: bool | None = None,
    ) -> DispatchContext:
        """Dispatch *requested* to the first matching rule's target.

        When *requested* is empty, the raw URI is read from
        ``request_uri_var``. When *args_in_query* is ``None`` the
        dispatcher's configured default applies.

        Returns the ``DispatchContext`` the target ran with.

        Raises ``NotFound`` when no rule matches, ``ResourceNotFound`` when
        a matched resource file is missing, and ``ConfigurationError`` when
        a rule cannot be built.
        """
        if not requested:
            requested = get_request_uri()
        if args_in_query is None:
            args_in_query = self._args_in_query

        path, query_string = self.normalize(requested)
        ctx = DispatchContext(path=path, query=QueryParams(query_string))

        found = self.match(path)
        rule = found.rule
        self._current = rule.name
        ctx.rule = rule
        ctx.params = found.params
        logger.debug("Matched rule %r for %s with %r", rule.name, path, found.params)

        # Rule defaults take precedence over captured parameters.
        query_args = {**found.params, **rule.extra_data("GET", {})}

        token = context_var.set(ctx)
        try:
            if rule.target_kind is TargetKind.CALLBACK:
                self._call(rule, ctx, query_args, args_in_query=args_in_query)
            else:
                self._deliver(rule, ctx, query_args)
        finally:
            context_var.reset(token)
        return ctx

    def _call(
        self,
        rule: Rule,
        ctx: DispatchContext,
        query_args: dict[str, Any],
        *,
        args_in_query: bool,
    ) -> None:
        if not args_in_query or rule.extra_data("args_in_get", True) is False:
            ctx.result = rule.handler(**ctx.params)
        else:
            ctx.query.merge(query_args)
            ctx.result = rule.handler()

    def resource_path(self, rule: Rule) -> Path:
        """Filesystem path of a resource rule's target."""
        if not self._files_dir:
            return Path(rule.resource)
        return Path(self._files_dir) / rule.resource

    def _deliver(self, rule: Rule, ctx: DispatchContext, query_args: dict[str, Any]) -> None:
        file_path = self.resource_path(rule)
        if not file_path.is_file():
            raise ResourceNotFound(str(file_path))

        if rule.extra_data("action", "exec") == "read":
            ctx.write(file_path.read_bytes())
            return

        ctx.query.merge(query_args)
        ctx.result = runpy.run_path(
            str(file_path),
            init_globals={"context": ctx, "query": ctx.query, "params": dict(ctx.params)},
            run_name="__urldispatch__",
        )
