"""
Interfaces that the HAL model and codec rely on.

Anything stored in a :py:class:`hal_serde.models.RelationGroup` has to
implement :py:class:`ToCanonicalMap`, and the codec talks to JSON text only
through a :py:class:`JSONTextCodec`.
"""
import typing

from .types import JSONValue, MutableJSONObject


@typing.runtime_checkable
class ToCanonicalMap(typing.Protocol):
    def to_canonical_map(self) -> MutableJSONObject:
        """
        Returns the JSON object representation of the item.
        """
        ...  # pragma: nocover


class JSONTextCodec(typing.Protocol):
    def encode(self, tree: JSONValue) -> str:
        """
        Renders a tree of mappings, sequences and scalars as JSON text.
        """
        ...  # pragma: nocover

    def decode(self, text: typing.Union[str, bytes]) -> JSONValue:
        """
        Parses JSON text into a tree of mappings, sequences and scalars.
        """
        ...  # pragma: nocover
