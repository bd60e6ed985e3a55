"""Dispatcher configuration.

DispatcherConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DispatcherConfig:
    """Dispatcher configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = DispatcherConfig(base_prefix="/blog", files_dir="pages")
    """

    # Request path
    base_prefix: str = ""  # Stripped from the front of every request path ("" or "/" strips one char)
    auto_trailing_slash: bool = True

    # Resource targets
    files_dir: str | Path = ""  # Prefix for resource targets, must exist when set

    # Callback targets
    args_in_query: bool = False  # Merge matched params into the query store instead of passing kwargs

    # Rewrite rules
    receiver_file: str = "index.py"
