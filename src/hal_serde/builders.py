import typing
from collections import OrderedDict

from .models import CURIES_RELATION, Link, Resource
from .types import JSONValue


class ResourceBuilder:
    """
    :py:class:`ResourceBuilder` collects the parts of a resource, and those of the
    resources embedded in it, and builds the whole tree when called.

    .. code-block:: python

       b = ResourceBuilder("/orders")
       b.add_property("currentlyProcessing", 14)
       b.add_link("next", "/orders/2")
       order = b.next_embedded("orders", "/orders/123")
       order.add_property("total", 30.0)
       resource = b()

    """

    href: typing.Optional[str] = None
    properties: "OrderedDict[str, JSONValue]"
    links: typing.List[typing.Tuple[str, Link]]
    embedded: typing.List[typing.Tuple[str, "ResourceBuilder"]]

    def add_property(self, key: str, value: JSONValue) -> "ResourceBuilder":
        self.properties[key] = value
        return self

    def add_link(self, relation: str, href: str, **attributes: typing.Any) -> "ResourceBuilder":
        self.links.append((relation, Link(href, **attributes)))
        return self

    def add_namespace(self, name: str, href: str) -> "ResourceBuilder":
        return self.add_link(CURIES_RELATION, href, templated=True, name=name)

    def next_embedded(self, relation: str, href: typing.Optional[str] = None) -> "ResourceBuilder":
        builder = ResourceBuilder(href)
        self.embedded.append((relation, builder))
        return builder

    def __call__(self) -> Resource:
        resource = Resource(self.href, properties=self.properties)
        for relation, link in self.links:
            resource.links.add(relation, link)
        for relation, builder in self.embedded:
            resource.embed_resource(relation, builder())
        return resource

    def __init__(self, href: typing.Optional[str] = None):
        self.href = href
        self.properties = OrderedDict()
        self.links = []
        self.embedded = []
