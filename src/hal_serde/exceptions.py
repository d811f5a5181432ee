import abc
import typing

from .types import JSONValue
from .utils import JSONPointer, english_enumerate
from .utils.formatting import quote_all

RESERVED_KEYS: typing.Tuple[str, ...] = ("_links", "_embedded")


class HALSerdeError(Exception, metaclass=abc.ABCMeta):
    @property
    @abc.abstractmethod
    def message(self) -> str:
        ...  # pragma: nocover

    def __str__(self):
        return self.message


class ReservedKeyError(HALSerdeError):
    key: str

    @property
    def message(self):
        return f'"{self.key}" is reserved and cannot be used as a property name (reserved: {english_enumerate(quote_all(RESERVED_KEYS), " and ")})'

    def __init__(self, key: str):
        super().__init__(key)
        self.key = key


class InvalidItemError(HALSerdeError):
    relation: str
    item: typing.Any
    detail: typing.Optional[str]

    @property
    def message(self):
        if self.detail is not None:
            return f'invalid item for relation "{self.relation}": {self.detail}'
        return f'invalid item for relation "{self.relation}": {self.item!r} cannot be converted to a canonical map'

    def __init__(self, relation: str, item: typing.Any, detail: typing.Optional[str] = None):
        super().__init__(relation, item, detail)
        self.relation = relation
        self.item = item
        self.detail = detail


class MalformedInputError(HALSerdeError):
    detail: str
    pointer: typing.Optional[JSONPointer]
    payload: JSONValue

    @property
    def message(self):
        if self.pointer is None:
            return self.detail
        return f"{str(self.pointer) or '/'}: {self.detail}"

    def __init__(
        self,
        detail: str,
        pointer: typing.Optional[JSONPointer] = None,
        payload: JSONValue = None,
    ):
        super().__init__(detail, pointer)
        self.detail = detail
        self.pointer = pointer
        self.payload = payload


class NestingTooDeepError(HALSerdeError):
    max_depth: int

    @property
    def message(self):
        return f"embedded resources are nested deeper than {self.max_depth} levels"

    def __init__(self, max_depth: int):
        super().__init__(max_depth)
        self.max_depth = max_depth
