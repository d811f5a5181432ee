import dataclasses

import pytest


@dataclasses.dataclass
class Item:
    value: str

    def to_canonical_map(self):
        return {"value": self.value}


class TestLink:
    @pytest.fixture
    def target(self):
        from ..models import Link

        return Link

    def test_non_templated(self, target):
        link = target("http://example.com")
        assert link.templated is False
        assert link.href == "http://example.com"
        assert link.to_canonical_map() == {"href": "http://example.com"}

    def test_templated(self, target):
        link = target("http://example.com/{id}", templated=True)
        assert link.templated is True
        assert link.to_canonical_map() == {"href": "http://example.com/{id}", "templated": True}

    def test_optionals(self, target):
        link = target(
            "http://example.com",
            type="type",
            name="name",
            profile="profile",
            title="title",
            hreflang="hreflang",
        )
        assert link.type == "type"
        assert link.name == "name"
        assert link.profile == "profile"
        assert link.title == "title"
        assert link.hreflang == "hreflang"
        assert list(link.to_canonical_map().items()) == [
            ("href", "http://example.com"),
            ("type", "type"),
            ("name", "name"),
            ("profile", "profile"),
            ("title", "title"),
            ("hreflang", "hreflang"),
        ]

    def test_empty_attribute_is_kept(self, target):
        assert target("/a", title="").to_canonical_map() == {"href": "/a", "title": ""}

    def test_empty_href(self, target):
        with pytest.raises(ValueError):
            target("")

    def test_unknown_attribute(self, target):
        with pytest.raises(TypeError):
            target("/a", deprecation="/why")

    @pytest.mark.parametrize("templated", ["false", 1, None])
    def test_non_bool_templated(self, target, templated):
        with pytest.raises(TypeError):
            target("/a", templated=templated)

    def test_immutable(self, target):
        link = target("/a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            link.href = "/b"

    def test_equality(self, target):
        assert target("/a", name="x") == target("/a", name="x")
        assert target("/a", name="x") != target("/a", name="y")
        assert target("/a") != target("/a", templated=True)
        assert len({target("/a"), target("/a")}) == 1


class TestRelationGroup:
    @pytest.fixture
    def target(self):
        from ..models import RelationGroup

        return RelationGroup

    def test_empty(self, target):
        group = target()
        assert not group
        assert len(group) == 0
        assert group.get("first") is None
        assert group.to_canonical_map() == {}

    def test_add_new_relation(self, target):
        from ..models import One

        group = target()
        group.add("first", Item("first"))
        assert group["first"][0].value == "first"
        assert group.slot("first") == One(Item("first"))

    def test_add_promotes_to_list(self, target):
        from ..models import Many

        group = target()
        group.add("first", Item("first"))
        group.add("first", Item("second"))
        assert len(group["first"]) == 2
        assert group["first"][0].value == "first"
        assert group["first"][-1].value == "second"
        assert group.slot("first") == Many([Item("first"), Item("second")])

    def test_add_appends(self, target):
        group = target()
        group.add("first", Item("1"))
        group.add("first", Item("2"))
        group.add("first", Item("3"))
        assert [i.value for i in group["first"]] == ["1", "2", "3"]

    def test_add_many_at_once(self, target):
        group = target()
        group.add("first", [Item("1"), Item("2")])
        group.add("first", [Item("3"), Item("4")])
        assert [i.value for i in group["first"]] == ["1", "2", "3", "4"]

    def test_add_list_to_single(self, target):
        group = target()
        group.add("first", Item("1"))
        group.add("first", [Item("2"), Item("3")])
        assert [i.value for i in group["first"]] == ["1", "2", "3"]

    def test_rejects_item_without_canonical_map(self, target):
        from ..exceptions import InvalidItemError

        group = target()
        with pytest.raises(InvalidItemError) as e:
            group.add("first", "not-hashable")
        assert e.value.relation == "first"
        assert e.value.item == "not-hashable"
        assert "first" not in group

    def test_rejects_list_with_invalid_item_without_mutating(self, target):
        from ..exceptions import InvalidItemError

        group = target()
        group.add("first", Item("1"))
        with pytest.raises(InvalidItemError):
            group.add("first", [Item("2"), {"value": "3"}])
        assert [i.value for i in group["first"]] == ["1"]
        with pytest.raises(InvalidItemError):
            group.set("first", 42)
        assert [i.value for i in group["first"]] == ["1"]

    def test_rejects_empty_list(self, target):
        from ..exceptions import InvalidItemError

        group = target()
        with pytest.raises(InvalidItemError):
            group.add("first", [])
        assert "first" not in group

    def test_set_overwrites(self, target):
        group = target()
        group.add("first", [Item("1"), Item("2")])
        group.set("first", Item("3"))
        assert [i.value for i in group["first"]] == ["3"]
        assert group.to_canonical_map() == {"first": {"value": "3"}}

    def test_get_normalizes(self, target):
        group = target()
        group.add("single", Item("1"))
        group.add("multi", [Item("1"), Item("2")])
        assert group.get("single") == (Item("1"),)
        assert group.get("multi") == (Item("1"), Item("2"))
        assert group.get("unknown") is None

    def test_fetch(self, target):
        group = target()
        group.add("first", Item("1"))
        assert group.fetch("first") == (Item("1"),)
        assert group.fetch("second", ()) == ()
        assert group.fetch("second", None) is None
        assert group.fetch("second", default_factory=list) == []
        with pytest.raises(KeyError):
            group.fetch("second")

    def test_iteration_keeps_insertion_order(self, target):
        group = target()
        group.add("b", Item("1"))
        group.add("a", Item("2"))
        group.add("b", Item("3"))
        assert list(group) == ["b", "a"]
        assert list(group.items()) == [("b", (Item("1"), Item("3"))), ("a", (Item("2"),))]

    def test_to_canonical_map_single(self, target):
        group = target()
        group.add("person", Item("bob"))
        assert group.to_canonical_map()["person"] == {"value": "bob"}

    def test_to_canonical_map_single_item_list(self, target):
        group = target()
        group.add("person", [Item("bob")])
        assert group.to_canonical_map()["person"] == [{"value": "bob"}]

    def test_to_canonical_map_multi(self, target):
        group = target()
        group.add("person", Item("bob"))
        group.add("person", Item("floyd"))
        assert group.to_canonical_map()["person"] == [{"value": "bob"}, {"value": "floyd"}]

    def test_equality_includes_shape(self, target):
        a = target()
        a.add("person", Item("bob"))
        b = target()
        b.add("person", Item("bob"))
        c = target()
        c.add("person", [Item("bob")])
        assert a == b
        assert a != c


class TestResource:
    @pytest.fixture
    def target(self):
        from ..models import Resource

        return Resource

    def test_empty(self, target):
        resource = target()
        assert resource.href is None
        assert resource.to_canonical_map() == {}

    def test_self_link(self, target):
        resource = target("/orders")
        assert resource.href == "/orders"
        assert resource.to_canonical_map() == {"_links": {"self": {"href": "/orders"}}}

    def test_initial_properties(self, target):
        resource = target(properties=[("b", 1), ("a", 2)])
        assert list(resource.properties.items()) == [("b", 1), ("a", 2)]
        assert target(properties={"a": 1}) == target().set_property("a", 1)

    def test_properties(self, target):
        resource = target()
        assert resource.set_property("name", "FooBar") is resource
        assert resource.get_property("name") == "FooBar"
        assert resource["name"] == "FooBar"
        assert "name" in resource
        assert resource.get_property("missing") is None
        assert resource.get_property("missing", 1) == 1
        with pytest.raises(KeyError):
            resource["missing"]
        assert resource.remove_property("name") == "FooBar"
        assert "name" not in resource

    def test_properties_view_is_read_only(self, target):
        resource = target()
        resource.set_property("a", 1)
        with pytest.raises(TypeError):
            resource.properties["_links"] = {}

    @pytest.mark.parametrize("key", ["_links", "_embedded"])
    def test_reserved_keys(self, target, key):
        from ..exceptions import ReservedKeyError

        resource = target()
        with pytest.raises(ReservedKeyError) as e:
            resource.set_property(key, "x")
        assert e.value.key == key
        assert key not in resource

    @pytest.mark.parametrize("key", ["links", "_link", "embedded", "_embeddeds", "_"])
    def test_other_underscored_keys_accepted(self, target, key):
        resource = target()
        resource.set_property(key, "x")
        assert resource[key] == "x"

    def test_add_link(self, target):
        from ..models import Link

        resource = target()
        link = resource.add_link("next", "/resource/2", name="Foo")
        assert link == Link("/resource/2", name="Foo")
        assert resource.links["next"][0].href == "/resource/2"
        assert resource.links["next"][0].name == "Foo"

    def test_namespaces(self, target):
        from ..models import Link

        resource = target()
        assert resource.namespaces == ()
        assert resource.namespace("ex") is None
        resource.add_namespace("ex", "http://example.com/rels/{rel}")
        resource.add_namespace("hub", "http://hub.example.com/{rel}")
        assert resource.namespace("hub") == Link(
            "http://hub.example.com/{rel}", templated=True, name="hub"
        )
        assert resource.namespace("ex").href == "http://example.com/rels/{rel}"
        assert resource.namespace("missing") is None
        assert len(resource.namespaces) == 2

    def test_embed_resource(self, target):
        resource = target("/orders")
        resource.embed_resource("orders", target("/orders/1"))
        assert resource.to_canonical_map() == {
            "_links": {"self": {"href": "/orders"}},
            "_embedded": {"orders": {"_links": {"self": {"href": "/orders/1"}}}},
        }
        resource.embed_resource("orders", target("/orders/2"))
        assert [o.href for o in resource.embedded["orders"]] == ["/orders/1", "/orders/2"]

    def test_embed_rejects_plain_value(self, target):
        from ..exceptions import InvalidItemError

        resource = target()
        with pytest.raises(InvalidItemError):
            resource.embed_resource("orders", {"total": 1})
        assert not resource.embedded

    def test_to_canonical_map_omits_empty_groups(self, target):
        resource = target()
        resource.set_property("a", 1)
        assert resource.to_canonical_map() == {"a": 1}
        assert "_links" not in resource.to_canonical_map()
        assert "_embedded" not in resource.to_canonical_map()

    def test_to_canonical_map_is_a_copy(self, target):
        resource = target()
        resource.set_property("a", 1)
        result = resource.to_canonical_map()
        result["a"] = 2
        assert resource["a"] == 1

    def test_equality(self, target):
        a = target("/a")
        a.set_property("x", 1)
        b = target("/a")
        b.set_property("x", 1)
        assert a == b
        b.add_link("next", "/b")
        assert a != b
        c = target("/a")
        c.set_property("x", 1)
        c.embed_resource("child", target("/c"))
        assert a != c
