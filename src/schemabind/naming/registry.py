"""
Naming registry.

One registry exists per generation run. It maps a canonical type name to the
short name derived for it and is append-only: the first registration of a
key wins and later registrations return the stored value unchanged.
"""

import threading
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional

# Short names of the builtin target types, used as receiver names for
# generated conversions between builtin values.
BUILTIN_SHORTS: Mapping[str, str] = MappingProxyType(
    {
        "bool": "b",
        "str": "s",
        "bytes": "b",
        "int": "i",
        "float": "f",
        "list[bool]": "l",
        "list[bytes]": "l",
        "list[float]": "l",
        "list[int]": "l",
        "list[str]": "l",
    }
)


class NamingRegistry:
    """Append-only mapping from type names to short names.

    Example:
        >>> registry = NamingRegistry()
        >>> registry.register("UserAccount", "ua")
        'ua'
        >>> registry.register("UserAccount", "usr")
        'ua'
    """

    def __init__(self, seed: Optional[Mapping[str, str]] = None):
        self._shorts: Dict[str, str] = dict(BUILTIN_SHORTS if seed is None else seed)
        self._lock = threading.Lock()

    def get(self, type_name: str) -> Optional[str]:
        return self._shorts.get(type_name)

    def register(self, type_name: str, short: str) -> str:
        """Store short for type_name unless already registered; return the stored value."""
        with self._lock:
            return self._shorts.setdefault(type_name, short)

    def snapshot(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._shorts)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._shorts

    def __len__(self) -> int:
        return len(self._shorts)

    def __iter__(self) -> Iterator[str]:
        return iter(self.snapshot())
