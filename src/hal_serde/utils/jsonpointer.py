"""
A minimal `RFC 6901 <https://tools.ietf.org/html/rfc6901>`_ JSON pointer.

Instances are immutable; a pointer is extended by ``/`` for object members and
by indexing for array elements:

.. code-block:: python

   pointer = JSONPointer() / "_embedded" / "orders"
   str(pointer[0])  # => "/_embedded/orders/0"

"""

import typing


def _escape(component: str) -> str:
    return component.replace("~", "~0").replace("/", "~1")


def _unescape(component: str) -> str:
    return component.replace("~1", "/").replace("~0", "~")


class JSONPointer:
    _components: typing.Tuple[str, ...]

    @classmethod
    def _from_components(cls, components: typing.Tuple[str, ...]) -> "JSONPointer":
        retval = cls.__new__(cls)
        retval._components = components
        return retval

    def __truediv__(self, component: str) -> "JSONPointer":
        return self._from_components(self._components + (component,))

    def __getitem__(self, index: int) -> "JSONPointer":
        return self._from_components(self._components + (str(index),))

    def __eq__(self, other: typing.Any) -> bool:
        if not isinstance(other, JSONPointer):
            return NotImplemented
        return self._components == other._components

    def __hash__(self) -> int:
        return hash(self._components)

    def __str__(self) -> str:
        return "".join("/" + _escape(c) for c in self._components)

    def __repr__(self) -> str:
        return f"JSONPointer({str(self)!r})"

    def __init__(self, path: str = ""):
        if path and not path.startswith("/"):
            raise ValueError(f"a JSON pointer must start with a slash: {path!r}")
        self._components = tuple(_unescape(c) for c in path.split("/")[1:])
