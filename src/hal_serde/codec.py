"""
:py:mod:`hal_serde.codec` converts :py:class:`hal_serde.models.Resource` objects to HAL JSON and back.

Synopsis
--------

.. code-block:: python

   from hal_serde.codec import parse, serialize
   from hal_serde.models import Resource

   resource = Resource("http://example.com")
   resource.add_link("posts", "/posts")
   resource.set_property("title", "Entry point")

   dumped = serialize(resource)
   # => '{"title": "Entry point", "_links": {"self": {"href": "http://example.com"}, "posts": {"href": "/posts"}}}'

   parse(dumped) == resource
   # => True

"""

import collections.abc
import json
import logging
import typing

from .exceptions import RESERVED_KEYS, MalformedInputError, NestingTooDeepError
from .interfaces import JSONTextCodec
from .models import Link, Resource
from .types import JSONObject, JSONValue, MutableJSONObject
from .utils import JSONPointer, array_wrap

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 64

EMPTY_SECTION: JSONObject = {}


class StdlibJSONTextCodec:
    """
    A :py:class:`hal_serde.interfaces.JSONTextCodec` backed by the :py:mod:`json` module.
    """

    _indent: typing.Optional[int] = None
    _sort_keys: bool = False
    _ensure_ascii: bool = True

    def encode(self, tree: JSONValue) -> str:
        return json.dumps(
            tree,
            indent=self._indent,
            sort_keys=self._sort_keys,
            ensure_ascii=self._ensure_ascii,
        )

    def decode(self, text: typing.Union[str, bytes]) -> JSONValue:
        try:
            return json.loads(text)
        except (ValueError, RecursionError) as e:
            raise MalformedInputError(f"failed to parse the payload as JSON ({e})") from e

    def __init__(
        self,
        indent: typing.Optional[int] = None,
        sort_keys: bool = False,
        ensure_ascii: bool = True,
    ):
        self._indent = indent
        self._sort_keys = sort_keys
        self._ensure_ascii = ensure_ascii


class ResourceExtractor:
    """
    :py:class:`ResourceExtractor` rebuilds a :py:class:`Resource` from the decoded JSON
    representation of a HAL document. Embedded resources are extracted recursively.

    .. code-block:: python

       extractor = ResourceExtractor({"_links": {"self": {"href": "http://example.com"}}})
       extractor.resource.href
       # => "http://example.com"

    :param JSONObject data: the decoded document.
    :param int max_depth: how deep ``_embedded`` sections may nest.
    :param JSONPointer pointer: the location of ``data`` in the outermost document.
    :raises MalformedInputError: if ``data`` is not a well-formed HAL document.
    """

    resource: Resource
    _data: JSONObject
    _max_depth: int
    _pointer: JSONPointer

    def _section(self, key: str) -> JSONObject:
        section = self._data.get(key, EMPTY_SECTION)
        if not isinstance(section, collections.abc.Mapping):
            raise MalformedInputError(
                f"{key} must be an object, got {section!r}", self._pointer / key, self._data
            )
        return section

    def _wrap_objects(self, pointer: JSONPointer, value: JSONValue) -> typing.Sequence[JSONObject]:
        if isinstance(value, collections.abc.Mapping):
            return array_wrap(value)
        if not isinstance(value, list):
            raise MalformedInputError(
                f"value must be an object or an array of objects, got {value!r}",
                pointer,
                self._data,
            )
        for i, item in enumerate(value):
            if not isinstance(item, collections.abc.Mapping):
                raise MalformedInputError(
                    f"value must be an object, got {item!r}", pointer[i], self._data
                )
        return array_wrap(value)

    def _link_attributes(self, pointer: JSONPointer, attrs: JSONObject) -> typing.Dict[str, typing.Any]:
        retval: typing.Dict[str, typing.Any] = {}
        for k, v in attrs.items():
            if k == "templated":
                if not isinstance(v, bool):
                    raise MalformedInputError(
                        f"templated must be a boolean, got {v!r}", pointer / k, self._data
                    )
            elif k in Link.ATTRIBUTES:
                if not isinstance(v, str):
                    raise MalformedInputError(
                        f"{k} must be a string, got {v!r}", pointer / k, self._data
                    )
            else:
                logger.debug("%s: dropping unknown link attribute %r", pointer, k)
                continue
            retval[k] = v
        return retval

    def _extract_properties(self) -> None:
        for key, value in self._data.items():
            if key in RESERVED_KEYS:
                continue
            self.resource.set_property(key, value)

    def _extract_link(self, pointer: JSONPointer, attrs: JSONObject) -> Link:
        attrs = dict(attrs)
        href = attrs.pop("href", None)
        if href is None:
            raise MalformedInputError('link object must have a property "href"', pointer, self._data)
        if not isinstance(href, str) or not href:
            raise MalformedInputError(
                f"href must be a non-empty string, got {href!r}", pointer / "href", self._data
            )
        return Link(href, **self._link_attributes(pointer, attrs))

    def _extract_links(self) -> None:
        links_pointer = self._pointer / "_links"
        for relation, values in self._section("_links").items():
            pointer = links_pointer / relation
            if values == []:
                # an empty array contributes no links
                continue
            if isinstance(values, list):
                # arrays stay arrays even with a single element
                self.resource.links.add(
                    relation,
                    [
                        self._extract_link(pointer[i], attrs)
                        for i, attrs in enumerate(self._wrap_objects(pointer, values))
                    ],
                )
            else:
                for attrs in self._wrap_objects(pointer, values):
                    self.resource.links.add(relation, self._extract_link(pointer, attrs))

    def _extract_embedded_resources(self) -> None:
        embedded_pointer = self._pointer / "_embedded"
        for relation, values in self._section("_embedded").items():
            pointer = embedded_pointer / relation
            if values == []:
                continue
            if isinstance(values, list):
                self.resource.embedded.add(
                    relation,
                    [
                        ResourceExtractor(embed, self._max_depth - 1, pointer[i]).resource
                        for i, embed in enumerate(self._wrap_objects(pointer, values))
                    ],
                )
            else:
                for embed in self._wrap_objects(pointer, values):
                    self.resource.embed_resource(
                        relation, ResourceExtractor(embed, self._max_depth - 1, pointer).resource
                    )

    def __init__(
        self,
        data: JSONValue,
        max_depth: int = DEFAULT_MAX_DEPTH,
        pointer: typing.Optional[JSONPointer] = None,
    ):
        self._pointer = JSONPointer() if pointer is None else pointer
        if not isinstance(data, collections.abc.Mapping):
            raise MalformedInputError(
                f"a HAL document must be an object, got {data!r}", self._pointer, data
            )
        if max_depth < 0:
            raise MalformedInputError("embedded resources are nested too deeply", self._pointer)
        self._data = data
        self._max_depth = max_depth
        self.resource = Resource()

        self._extract_properties()
        self._extract_links()
        self._extract_embedded_resources()


class HALCodec:
    """
    :py:class:`HALCodec` serializes resources to HAL JSON text and parses them back,
    delegating the JSON text itself to a :py:class:`hal_serde.interfaces.JSONTextCodec`.

    :param Optional[JSONTextCodec] json_codec: the JSON text codec. Defaults to :py:class:`StdlibJSONTextCodec`.
    :param int max_depth: how deep embedded resources may nest, both in parsed documents
                          and in rendered resources.
    """

    _json_codec: JSONTextCodec
    _max_depth: int = DEFAULT_MAX_DEPTH

    def _check_depth(self, resource: Resource) -> None:
        stack = [(resource, 0)]
        while stack:
            r, depth = stack.pop()
            if depth > self._max_depth:
                raise NestingTooDeepError(self._max_depth)
            for _, children in r.embedded.items():
                stack.extend(
                    (child, depth + 1) for child in children if isinstance(child, Resource)
                )

    def render(self, resource: Resource) -> MutableJSONObject:
        """
        Returns the JSON object representation of ``resource``.

        :raises NestingTooDeepError: if embedded resources nest deeper than ``max_depth``.
        """
        self._check_depth(resource)
        return resource.to_canonical_map()

    def serialize(self, resource: Resource) -> str:
        logger.debug("serializing resource %r", resource.href)
        return self._json_codec.encode(self.render(resource))

    def extract(self, data: JSONValue) -> Resource:
        return ResourceExtractor(data, max_depth=self._max_depth).resource

    def parse(self, text: typing.Union[str, bytes]) -> Resource:
        data = self._json_codec.decode(text)
        resource = self.extract(data)
        logger.debug("parsed resource %r", resource.href)
        return resource

    def __init__(
        self,
        json_codec: typing.Optional[JSONTextCodec] = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        self._json_codec = StdlibJSONTextCodec() if json_codec is None else json_codec
        self._max_depth = max_depth


_default_codec = HALCodec()


def serialize(resource: Resource) -> str:
    """
    Returns the HAL JSON text of ``resource``.
    """
    return _default_codec.serialize(resource)


def parse(text: typing.Union[str, bytes]) -> Resource:
    """
    Returns the :py:class:`Resource` that ``text`` represents.

    :raises MalformedInputError: if ``text`` is not a well-formed HAL document.
    """
    return _default_codec.parse(text)
