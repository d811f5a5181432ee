import typing

T = typing.TypeVar("T")


def is_item_sequence(value: typing.Any) -> bool:
    """
    Tells if ``value`` is a sequence of items rather than a single item.

    Only lists and tuples count; strings, bytes and mappings are single values.
    """
    return isinstance(value, (list, tuple))


def array_wrap(value: typing.Union[None, T, typing.Sequence[T]]) -> typing.Tuple[T, ...]:
    """
    Normalizes ``value`` into a tuple.

    ``None`` becomes an empty tuple, a list or a tuple is converted as is,
    and anything else is wrapped into a one-element tuple.
    """
    if value is None:
        return ()
    elif is_item_sequence(value):
        return tuple(typing.cast(typing.Sequence[T], value))
    else:
        return (typing.cast(T, value),)
