"""Mutable query string parameters.

Implements ``MutableMapping[str, Any]`` plus ``get_list`` so a dispatch
can parse the raw query string once and later fold in matched
parameters and rule defaults.
"""

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any
from urllib.parse import parse_qs


class QueryParams(MutableMapping[str, Any]):
    """Query string parameters for one dispatch.

    Attributes:
        _data: Parsed query string as field name -> list of values.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    Assigning a key replaces every value previously stored under it.
    """

    _data: dict[str, list[Any]]

    __slots__ = ("_data",)

    def __init__(self, query_string: str = "") -> None:
        self._data = parse_qs(query_string, keep_blank_values=True)

    def __getitem__(self, key: str) -> Any:
        return self._data[key][0]

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = [value]

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def get(self, key: str, default: Any = None) -> Any:
        """Return the first value for *key*, or *default* if missing."""
        values = self._data.get(key)
        if values:
            return values[0]
        return default

    def get_list(self, key: str) -> list[Any]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))

    def merge(self, overlay: Mapping[str, Any]) -> None:
        """Fold *overlay* into the store. Existing keys are overwritten."""
        for key, value in overlay.items():
            self[key] = value
