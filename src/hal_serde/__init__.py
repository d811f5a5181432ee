from .builders import ResourceBuilder  # noqa
from .codec import HALCodec, ResourceExtractor, StdlibJSONTextCodec, parse, serialize  # noqa
from .exceptions import (  # noqa
    HALSerdeError,
    InvalidItemError,
    MalformedInputError,
    NestingTooDeepError,
    ReservedKeyError,
)
from .interfaces import JSONTextCodec, ToCanonicalMap  # noqa
from .models import Link, Many, One, RelationGroup, Resource  # noqa
