"""
Treeargs flag store: the read-only result of one parse.

A FlagStore maps fully-qualified option paths ("contour.capture.timeout") to
Values, in the order they were first written. It is created fresh by parse()
and owned by the caller afterwards.

Reading
- Typed getters (boolean, integer, unsigned_integer, real, string) return the
  plain Python payload after checking the stored kind.
- A missing path raises KeyError; a kind mismatch raises TypeError. Both are
  programming errors in the embedding application, never parse failures.
"""
from collections.abc import Mapping
from types import MappingProxyType

from .values import Tag, Value


class FlagStore(Mapping):
    """
    read-only mapping of dotted option path → Value.
    """
    __slots__ = ("_values",)

    def __init__(self, values=(), /):
        values = dict(values)
        for path, value in values.items():
            if not isinstance(path, str):
                raise TypeError("flag-store paths must be strings")
            if not isinstance(value, Value):
                raise TypeError(f"flag-store path {path!r} must hold a value")
        self._values = MappingProxyType(values)

    def __getitem__(self, path):
        return self._values[path]

    def __iter__(self):
        return iter(self._values)

    def __len__(self):
        return len(self._values)

    def fetch(self, path, tag, /):
        """
        return the payload stored at path, asserting it is of the given kind.
        """
        if not isinstance(tag, Tag):
            raise TypeError("fetch() second argument must be a tag")
        value = self._values[path]
        if value.tag is not tag:
            raise TypeError(f"flag-store path {path!r} holds {value.tag.value}, not {tag.value}")
        return value.value

    def boolean(self, path, /):
        return self.fetch(path, Tag.BOOL)

    def integer(self, path, /):
        return self.fetch(path, Tag.INT)

    def unsigned_integer(self, path, /):
        return self.fetch(path, Tag.UINT)

    def real(self, path, /):
        return self.fetch(path, Tag.FLOAT)

    def string(self, path, /):
        return self.fetch(path, Tag.STR)

    def to_dict(self):
        """
        plain {path: payload} snapshot (kinds are dropped).
        """
        return {path: value.value for path, value in self._values.items()}

    def __repr__(self):
        return f"flag-store({dict(self._values)!r})"

    def __rich_repr__(self):
        yield from self._values.items()


__all__ = (
    "FlagStore",
)
