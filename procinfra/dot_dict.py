"""
Dictionary-like object with attribute-style access.

DotDict lets configuration be read as ``config.log.dir`` as well as
``config.get("log.dir")``. Nested dictionaries (also inside lists) are
converted to DotDict instances on assignment.
"""

from __future__ import annotations

from collections.abc import ItemsView, KeysView, ValuesView
from typing import Any


class DotDict:
    """
    Dictionary-like object with attribute-style access and nested structure support.

    Example:
        >>> d = DotDict(log={"dir": "/tmp/t"})
        >>> d.log.dir
        '/tmp/t'
        >>> d.get("log.dir")
        '/tmp/t'
    """

    # Keys that would shadow methods used by callers
    _RESERVED_KEYS = frozenset({"set", "clear", "dict", "to_dict", "get", "has"})

    def __init__(self, **kwargs: Any) -> None:
        self.set(**kwargs)

    def set(self, **kwargs: Any) -> "DotDict":
        """
        Set multiple key-value pairs, converting nested dicts to DotDict.

        Returns:
            self: For method chaining
        """
        for key, val in kwargs.items():
            self._set_item(key, val)
        return self

    def _set_item(self, key: Any, val: Any) -> None:
        if not isinstance(key, str):
            key = str(key)

        if key in self._RESERVED_KEYS:
            raise ValueError(
                f"Key '{key}' is reserved and cannot be used (would shadow method)"
            )

        if isinstance(val, dict):
            setattr(self, key, DotDict(**val))
        elif isinstance(val, list):
            setattr(self, key, [self._map_entry(v) for v in val])
        else:
            setattr(self, key, val)

    @staticmethod
    def _map_entry(entry: Any) -> Any:
        if isinstance(entry, dict):
            return DotDict(**entry)
        return entry

    def clear(self) -> None:
        """Remove all public keys, leaving private attributes in place."""
        for k in [k for k in self.__dict__ if not k.startswith("_")]:
            delattr(self, k)

    def dict(self) -> dict[str, Any]:
        """
        Convert to a plain dictionary, recursing into nested DotDicts and lists.

        Private attributes (leading underscore) are not part of the data.
        """
        result: dict[str, Any] = {}
        for key, val in self.items():
            if isinstance(val, DotDict):
                result[key] = val.dict()
            elif isinstance(val, list):
                result[key] = [v.dict() if isinstance(v, DotDict) else v for v in val]
            else:
                result[key] = val
        return result

    to_dict = dict

    def _public(self) -> dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if not k.startswith("_")}

    def keys(self) -> KeysView[str]:
        return self._public().keys()

    def values(self) -> ValuesView[Any]:
        return self._public().values()

    def items(self) -> ItemsView[str, Any]:
        return self._public().items()

    def __contains__(self, key: Any) -> bool:
        return key in self._public()

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access; returns None for missing keys."""
        return self._public().get(key)

    def __setitem__(self, key: str, val: Any) -> None:
        self._set_item(key, val)

    def __len__(self) -> int:
        return len(self._public())

    def __str__(self) -> str:
        return str(self.dict())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.dict()!r})"

    def _walk(self, path: str) -> tuple[bool, Any]:
        cur: Any = self
        for item in (p for p in path.split(".") if p):
            if not isinstance(cur, DotDict) or item not in cur:
                return False, None
            cur = cur[item]
        return True, cur

    def has(self, path: str) -> bool:
        """
        Check if a dot-separated path exists.

        Args:
            path (str): Dot-separated path to check (e.g., "log.dir")

        Returns:
            bool: True if the path exists
        """
        if not path:
            return False
        return self._walk(path)[0]

    def get(self, path: str, default: Any = None) -> Any:
        """
        Get value by dot-separated path, following dict.get() semantics.

        Args:
            path (str): Dot-separated path (e.g., "readiness.timeout")
            default: Value returned when the path does not exist
        """
        if not path:
            return default
        found, value = self._walk(path)
        return value if found else default
