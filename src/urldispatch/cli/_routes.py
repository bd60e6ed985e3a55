"""``urldispatch routes`` — list registered rules.

Resolves an import string to a Dispatcher and prints every rule in
match priority order with its pattern, URL template, and target.
"""

import argparse
import sys

from urldispatch.cli._resolve import resolve_dispatcher
from urldispatch.errors import ConfigurationError
from urldispatch.routing.rule import TargetKind


def _describe_target(target: object, kind: TargetKind) -> str:
    if kind is TargetKind.RESOURCE:
        return f"file {target}"
    module = getattr(target, "__module__", None)
    name = getattr(target, "__qualname__", None) or getattr(target, "__name__", str(target))
    return f"{module}:{name}" if module else name


def run_routes(args: argparse.Namespace) -> None:
    """List registered rules for a dispatcher.

    Builds every rule, so malformed specs are reported here rather than
    on the first request.
    """
    try:
        dispatcher = resolve_dispatcher(args.dispatcher)
    except (ConfigurationError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not len(dispatcher):
        print("No rules registered.")
        return

    rows: list[tuple[str, str, str, str]] = []
    try:
        for rule in dispatcher:
            kind = rule.target_kind
            resolved = rule.handler if kind is TargetKind.CALLBACK else rule.resource
            rows.append((rule.name, rule.pattern, rule.url, _describe_target(resolved, kind)))
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    headers = ("NAME", "PATTERN", "URL", "TARGET")
    widths = [max(len(headers[i]), *(len(r[i]) for r in rows)) for i in range(3)]

    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    print(fmt.format(*headers))
    sep_len = sum(widths) + 6 + max(len(r[3]) for r in rows)
    print("-" * min(sep_len, 80))
    for row in rows:
        print(fmt.format(*row))
