"""``urldispatch htaccess`` — print the front-controller rewrite block.

The receiver script comes from ``--receiver``, else from the
``receiver_file`` of the dispatcher named by ``--dispatcher``, else from
the ``DispatcherConfig`` default applied by ``create_htaccess``.
"""

import argparse
import sys

from urldispatch.cli._resolve import resolve_dispatcher
from urldispatch.errors import ConfigurationError
from urldispatch.rewrite import create_htaccess


def run_htaccess(args: argparse.Namespace) -> None:
    """Print the rewrite block for *args.base_dir*."""
    receiver = args.receiver
    if receiver is None and args.dispatcher:
        try:
            dispatcher = resolve_dispatcher(args.dispatcher)
        except (ConfigurationError, TypeError) as exc:
            print(f"Error: {exc}", file=sys.stderr)
            raise SystemExit(1) from exc
        receiver = dispatcher.receiver_file

    print(create_htaccess(args.base_dir, receiver), end="")
