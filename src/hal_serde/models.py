"""
Classes in :py:mod:`hal_serde.models` represent the elements of a HAL document:
links, relation groups and resources.

Ref.

* `JSON Hypertext Application Language <https://tools.ietf.org/html/draft-kelly-json-hal>`_
"""

import collections.abc
import dataclasses
import types
import typing
from collections import OrderedDict

from .exceptions import RESERVED_KEYS, InvalidItemError, ReservedKeyError
from .interfaces import ToCanonicalMap
from .types import JSONValue, MutableJSONObject
from .utils import UNSPECIFIED, UnspecifiedType, array_wrap, is_item_sequence

T = typing.TypeVar("T", bound=ToCanonicalMap)

CURIES_RELATION = "curies"
SELF_RELATION = "self"


@dataclasses.dataclass(init=False, frozen=True)
class Link:
    """
    :py:class:`Link` represents a `Link Object <https://tools.ietf.org/html/draft-kelly-json-hal-08#section-5>`_.

    Two links are equal when all of their attributes are equal.
    """

    ATTRIBUTES: typing.ClassVar[typing.Tuple[str, ...]] = (
        "type",
        "name",
        "profile",
        "title",
        "hreflang",
    )

    href: str
    templated: bool = False
    type: typing.Optional[str] = None
    name: typing.Optional[str] = None
    profile: typing.Optional[str] = None
    title: typing.Optional[str] = None
    hreflang: typing.Optional[str] = None

    def __init__(
        self,
        href: str,
        *,
        templated: bool = False,
        type: typing.Optional[str] = None,
        name: typing.Optional[str] = None,
        profile: typing.Optional[str] = None,
        title: typing.Optional[str] = None,
        hreflang: typing.Optional[str] = None,
    ):
        """
        :param str href: the target URI, or a URI template when ``templated`` is true.
        :param bool templated: whether ``href`` is a URI template.
        :param Optional[str] type: a media type hint.
        :param Optional[str] name: a secondary key for selecting links sharing a relation.
        :param Optional[str] profile: a URI hinting about the profile of the target resource.
        :param Optional[str] title: a human-readable label.
        :param Optional[str] hreflang: the language of the target resource.
        """
        if not isinstance(href, str) or not href:
            raise ValueError(f"href must be a non-empty string, got {href!r}")
        if not isinstance(templated, bool):
            raise TypeError(f"templated must be a bool, got {templated!r}")
        object.__setattr__(self, "href", href)
        object.__setattr__(self, "templated", templated)
        object.__setattr__(self, "type", type)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "profile", profile)
        object.__setattr__(self, "title", title)
        object.__setattr__(self, "hreflang", hreflang)

    def to_canonical_map(self) -> MutableJSONObject:
        retval: MutableJSONObject = OrderedDict()
        retval["href"] = self.href
        if self.templated:
            retval["templated"] = True
        for attr in self.ATTRIBUTES:
            value = getattr(self, attr)
            if value is not None:
                retval[attr] = value
        return retval


@dataclasses.dataclass
class One(typing.Generic[T]):
    """
    A relation holding a single item; it renders as a bare JSON object.
    """

    item: T


@dataclasses.dataclass
class Many(typing.Generic[T]):
    """
    A relation holding a list of items; it renders as a JSON array.
    """

    items: typing.List[T]


Slot = typing.Union[One[T], Many[T]]


class RelationGroup(typing.Generic[T]):
    """
    :py:class:`RelationGroup` groups items by relation name.

    A relation that has been given a single item keeps it bare so that it
    renders as a single JSON object, while a relation holding several items
    renders as an array. Reading a relation always yields a tuple regardless
    of how it is stored.

    .. code-block:: python

       links = RelationGroup()
       links.add("self", Link("/orders/1"))
       links["self"]
       # => (Link(href='/orders/1', ...),)
       links.to_canonical_map()
       # => {"self": {"href": "/orders/1"}}

    """

    _relations: "OrderedDict[str, Slot[T]]"

    def _validate(self, relation: str, item_or_items: typing.Any) -> typing.Sequence[T]:
        if is_item_sequence(item_or_items):
            items = typing.cast(typing.Sequence[typing.Any], item_or_items)
            if not items:
                raise InvalidItemError(relation, item_or_items, "no items given")
        else:
            items = (item_or_items,)
        for item in items:
            if not isinstance(item, ToCanonicalMap):
                raise InvalidItemError(relation, item)
        return typing.cast(typing.Sequence[T], items)

    def _to_slot(self, item_or_items: typing.Any, items: typing.Sequence[T]) -> Slot[T]:
        if is_item_sequence(item_or_items):
            return Many(list(items))
        else:
            return One(items[0])

    def add(self, relation: str, item_or_items: typing.Union[T, typing.Sequence[T]]) -> None:
        """
        Adds an item, or a list of items, to a relation.

        If the relation doesn't exist, a single item is stored as is and a list is
        stored as a list. If the relation holds a list, the items are appended to it.
        If the relation holds a single item, the existing item and the incoming ones
        are combined into a list.

        :param str relation: the relation that the item belongs to.
        :param item_or_items: an item or a list of items, each implementing :py:class:`ToCanonicalMap`.
        :raises InvalidItemError: if any of the items lacks ``to_canonical_map()``.
        """
        items = self._validate(relation, item_or_items)
        current = self._relations.get(relation)
        if current is None:
            self._relations[relation] = self._to_slot(item_or_items, items)
        elif isinstance(current, Many):
            current.items.extend(items)
        else:
            self._relations[relation] = Many([current.item, *items])

    def set(self, relation: str, item_or_items: typing.Union[T, typing.Sequence[T]]) -> None:
        """
        Sets an item, or a list of items, to a relation, replacing whatever it held.

        :raises InvalidItemError: if any of the items lacks ``to_canonical_map()``.
        """
        items = self._validate(relation, item_or_items)
        self._relations[relation] = self._to_slot(item_or_items, items)

    def get(self, relation: str) -> typing.Optional[typing.Tuple[T, ...]]:
        slot = self._relations.get(relation)
        if slot is None:
            return None
        return self._normalize(slot)

    def fetch(
        self,
        relation: str,
        default: typing.Union[typing.Tuple[T, ...], typing.Any, UnspecifiedType] = UNSPECIFIED,
        *,
        default_factory: typing.Optional[typing.Callable[[], typing.Any]] = None,
    ) -> typing.Any:
        """
        Returns the items of a relation, falling back to ``default``
        or the result of ``default_factory`` if the relation is unknown.

        :raises KeyError: if the relation is unknown and no fallback is given.
        """
        slot = self._relations.get(relation)
        if slot is not None:
            return self._normalize(slot)
        if default is not UNSPECIFIED:
            return default
        if default_factory is not None:
            return default_factory()
        raise KeyError(relation)

    def items(self) -> typing.Iterator[typing.Tuple[str, typing.Tuple[T, ...]]]:
        for relation, slot in self._relations.items():
            yield relation, self._normalize(slot)

    def slot(self, relation: str) -> Slot[T]:
        return self._relations[relation]

    @staticmethod
    def _normalize(slot: Slot[T]) -> typing.Tuple[T, ...]:
        if isinstance(slot, Many):
            return array_wrap(slot.items)
        else:
            return array_wrap(slot.item)

    def to_canonical_map(self) -> MutableJSONObject:
        retval: MutableJSONObject = OrderedDict()
        for relation, slot in self._relations.items():
            if isinstance(slot, Many):
                retval[relation] = [item.to_canonical_map() for item in slot.items]
            else:
                retval[relation] = slot.item.to_canonical_map()
        return retval

    def __getitem__(self, relation: str) -> typing.Tuple[T, ...]:
        return self._normalize(self._relations[relation])

    def __contains__(self, relation: typing.Any) -> bool:
        return relation in self._relations

    def __iter__(self) -> typing.Iterator[str]:
        return iter(self._relations)

    def __len__(self) -> int:
        return len(self._relations)

    def __eq__(self, other: typing.Any) -> bool:
        if not isinstance(other, RelationGroup):
            return NotImplemented
        return dict(self._relations) == dict(other._relations)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._relations)!r})"

    def __init__(self):
        self._relations = OrderedDict()


class Resource:
    """
    :py:class:`Resource` represents a `Resource Object <https://tools.ietf.org/html/draft-kelly-json-hal-08#section-4>`_:
    a set of properties, links grouped by relation, and embedded resources grouped by relation.

    .. code-block:: python

       order = Resource("/orders/123")
       order.set_property("total", 30.0)
       order.add_link("customer", "/customers/7", title="Jane")

       orders = Resource("/orders")
       orders.embed_resource("orders", order)

    """

    _properties: "OrderedDict[str, JSONValue]"
    links: RelationGroup[Link]
    embedded: "RelationGroup[Resource]"

    @property
    def properties(self) -> typing.Mapping[str, JSONValue]:
        return types.MappingProxyType(self._properties)

    @property
    def href(self) -> typing.Optional[str]:
        """
        Returns the href of the self link, if any.
        """
        for link in self.links.fetch(SELF_RELATION, ()):
            return link.href
        return None

    @property
    def namespaces(self) -> typing.Tuple[Link, ...]:
        return self.links.fetch(CURIES_RELATION, ())

    def namespace(self, name: str) -> typing.Optional[Link]:
        """
        Returns the CURIE registered under ``name``.

        :param str name: the name of the namespace.
        :return: the :py:class:`Link` of the namespace, or None if there is no such namespace.
        """
        for link in self.namespaces:
            if link.name == name:
                return link
        return None

    def get_property(self, key: str, default: JSONValue = None) -> JSONValue:
        return self._properties.get(key, default)

    def set_property(self, key: str, value: JSONValue) -> "Resource":
        """
        Sets a property in the resource.

        :raises ReservedKeyError: if ``key`` is either ``_links`` or ``_embedded``.
        """
        if key in RESERVED_KEYS:
            raise ReservedKeyError(key)
        self._properties[key] = value
        return self

    def remove_property(self, key: str) -> JSONValue:
        return self._properties.pop(key)

    def add_link(self, relation: str, href: str, **attributes: typing.Any) -> Link:
        """
        Adds a link to a relation.

        .. code-block:: python

           resource.add_link("next", "/orders/2", name="Foo")
           resource.links["next"][0].name
           # => "Foo"

        :param str relation: the relation.
        :param str href: the href of the link.
        :param attributes: the optional attributes of the link: ``templated``, ``type``,
                           ``name``, ``profile``, ``title`` and ``hreflang``.
        """
        link = Link(href, **attributes)
        self.links.add(relation, link)
        return link

    def add_namespace(self, name: str, href: str) -> Link:
        """
        Registers a CURIE.

        :param str name: the name of the namespace.
        :param str href: the templated URI of the namespace.
        """
        return self.add_link(CURIES_RELATION, href, templated=True, name=name)

    def embed_resource(self, relation: str, resource: ToCanonicalMap) -> None:
        """
        Embeds a resource in a relation. To embed many resources,
        call this with each one of them.
        """
        self.embedded.add(relation, resource)

    def to_canonical_map(self) -> MutableJSONObject:
        """
        Returns the JSON object representation of the resource.
        ``_links`` and ``_embedded`` are omitted when they are empty.
        """
        retval: MutableJSONObject = OrderedDict(self._properties)
        if self.links:
            retval["_links"] = self.links.to_canonical_map()
        if self.embedded:
            retval["_embedded"] = self.embedded.to_canonical_map()
        return retval

    def __getitem__(self, key: str) -> JSONValue:
        return self._properties[key]

    def __contains__(self, key: typing.Any) -> bool:
        return key in self._properties

    def __eq__(self, other: typing.Any) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return (
            dict(self._properties) == dict(other._properties)
            and self.links == other.links
            and self.embedded == other.embedded
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(href={self.href!r}, properties={dict(self._properties)!r})"

    def __init__(
        self,
        href: typing.Optional[str] = None,
        properties: typing.Union[
            typing.Iterable[typing.Tuple[str, JSONValue]],
            typing.Mapping[str, JSONValue],
        ] = (),
    ):
        """
        :param Optional[str] href: the href of the self link. No self link is added if omitted.
        :param properties: initial properties, either a mapping or a sequence of key-value pairs.
        """
        self._properties = OrderedDict()
        self.links = RelationGroup()
        self.embedded = RelationGroup()
        if href is not None:
            self.add_link(SELF_RELATION, href)
        pairs = properties.items() if isinstance(properties, collections.abc.Mapping) else properties
        for key, value in pairs:
            self.set_property(key, value)
