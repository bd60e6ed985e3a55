"""``urldispatch match`` — show which rule a path dispatches to.

Normalizes the path the way ``Dispatcher.handle()`` does and reports the
first matching rule and its parameters. Nothing is invoked.
"""

import argparse
import sys

from urldispatch.cli._resolve import resolve_dispatcher
from urldispatch.errors import ConfigurationError, NotFound


def run_match(args: argparse.Namespace) -> None:
    """Print the rule *args.path* matches, or exit 1 on a miss."""
    try:
        dispatcher = resolve_dispatcher(args.dispatcher)
    except (ConfigurationError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    path, query_string = dispatcher.normalize(args.path)
    try:
        found = dispatcher.match(path)
    except NotFound as exc:
        print(f"No rule matches {exc.path!r}", file=sys.stderr)
        raise SystemExit(1) from exc
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rule = found.rule
    print(f"rule:    {rule.name}")
    print(f"path:    {found.path}")
    print(f"pattern: {rule.pattern}")
    for key, value in found.params.items():
        print(f"param:   {key} = {value}")
    if query_string:
        print(f"query:   {query_string}")
