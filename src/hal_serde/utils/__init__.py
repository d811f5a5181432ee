from .formatting import english_enumerate  # noqa
from .jsonpointer import JSONPointer  # noqa
from .sequences import array_wrap, is_item_sequence  # noqa
from .types import UNSPECIFIED, UnspecifiedType  # noqa
