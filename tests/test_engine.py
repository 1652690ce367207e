"""Tests for the in-memory property graph engine."""

import pytest

from friendgraph.engine.graph import PropertyGraph
from friendgraph.engine.schema import Cardinality, DataType, Multiplicity
from friendgraph.errors import DuplicateDeclaration, SchemaViolation, TransactionError


@pytest.fixture
def people():
    with PropertyGraph() as graph:
        with graph.open_management() as mgmt:
            mgmt.make_vertex_label("person")
            mgmt.make_edge_label("knows", Multiplicity.MULTI)
            mgmt.make_edge_label("likes", Multiplicity.SIMPLE)
            mgmt.make_edge_label("reports_to", Multiplicity.MANY2ONE)
            mgmt.make_edge_label("married_to", Multiplicity.ONE2ONE)
            mgmt.make_property_key("name", DataType.STRING)
            mgmt.make_property_key("age", DataType.INTEGER)
            mgmt.make_property_key("score", DataType.DOUBLE)
            mgmt.make_property_key("active", DataType.BOOLEAN)
            mgmt.make_property_key("nicknames", DataType.STRING, Cardinality.LIST)
            mgmt.make_property_key("tags", DataType.STRING, Cardinality.SET)
            mgmt.commit()
        yield graph


def test_management_rejects_duplicate_names():
    graph = PropertyGraph()
    with graph.open_management() as mgmt:
        mgmt.make_vertex_label("person")
        with pytest.raises(DuplicateDeclaration):
            mgmt.make_vertex_label("person")


def test_management_without_commit_publishes_nothing():
    graph = PropertyGraph()
    with graph.open_management() as mgmt:
        mgmt.make_vertex_label("person")
        mgmt.make_property_key("name", DataType.STRING)
    assert graph.schema.vertex_labels == {}
    assert graph.schema.property_keys == {}


def test_management_sees_committed_and_pending_declarations(people):
    with people.open_management() as mgmt:
        mgmt.make_vertex_label("robot")
        assert set(mgmt.vertex_labels()) == {"person", "robot"}
        with pytest.raises(DuplicateDeclaration):
            mgmt.make_edge_label("knows")


def test_writes_are_invisible_until_commit(people):
    with people.new_transaction() as tx:
        tx.add_vertex("person", {"name": "Ada"})
        assert tx.traversal().V().count() == 1
        assert people.vertex_count() == 0
        tx.commit()
    assert people.vertex_count() == 1


def test_leaving_block_without_commit_rolls_back(people):
    with people.new_transaction() as tx:
        tx.add_vertex("person", {"name": "Ada"})
    assert people.vertex_count() == 0
    assert not tx.is_open


def test_closed_transaction_cannot_be_used(people):
    tx = people.new_transaction()
    tx.commit()
    with pytest.raises(TransactionError):
        tx.add_vertex("person")


def test_undeclared_label_and_key_are_rejected(people):
    with people.new_transaction() as tx:
        with pytest.raises(SchemaViolation):
            tx.add_vertex("robot")
        with pytest.raises(SchemaViolation):
            tx.add_vertex("person", {"height": 180})


def test_property_types_are_enforced(people):
    with people.new_transaction() as tx:
        with pytest.raises(SchemaViolation):
            tx.add_vertex("person", {"age": "forty"})
        with pytest.raises(SchemaViolation):
            tx.add_vertex("person", {"age": True})
        with pytest.raises(SchemaViolation):
            tx.add_vertex("person", {"active": 1})
        vertex = tx.add_vertex("person", {"score": 3})
        assert tx.vertex_properties(vertex.id)["score"] == 3.0
        assert isinstance(tx.vertex_properties(vertex.id)["score"], float)


def test_cardinality_modes(people):
    with people.new_transaction() as tx:
        vertex = tx.add_vertex("person", {"name": "Ada", "nicknames": ["A", "A"], "tags": ["x", "x", "y"]})
        tx.add_property(vertex, "name", "Augusta")
        tx.add_property(vertex, "nicknames", "Countess")
        props = tx.vertex_properties(vertex.id)
        assert props["name"] == "Augusta"
        assert props["nicknames"] == ["A", "A", "Countess"]
        assert props["tags"] == ["x", "y"]
        with pytest.raises(SchemaViolation):
            tx.add_property(vertex, "name", ["a", "b"])


def test_multi_edges_allow_parallel_edges(people):
    with people.new_transaction() as tx:
        a = tx.add_vertex("person", {"name": "a"})
        b = tx.add_vertex("person", {"name": "b"})
        tx.add_edge(a, "knows", b)
        tx.add_edge(a, "knows", b)
        tx.commit()
    assert people.edge_count() == 2


def test_simple_edges_allow_one_per_pair(people):
    with people.new_transaction() as tx:
        a = tx.add_vertex("person", {"name": "a"})
        b = tx.add_vertex("person", {"name": "b"})
        tx.add_edge(a, "likes", b)
        tx.add_edge(b, "likes", a)
        with pytest.raises(SchemaViolation):
            tx.add_edge(a, "likes", b)


def test_many_to_one_and_one_to_one(people):
    with people.new_transaction() as tx:
        a = tx.add_vertex("person", {"name": "a"})
        b = tx.add_vertex("person", {"name": "b"})
        c = tx.add_vertex("person", {"name": "c"})
        tx.add_edge(a, "reports_to", c)
        tx.add_edge(b, "reports_to", c)
        with pytest.raises(SchemaViolation):
            tx.add_edge(a, "reports_to", b)
        tx.add_edge(a, "married_to", b)
        with pytest.raises(SchemaViolation):
            tx.add_edge(c, "married_to", b)
        tx.commit()
    with people.new_transaction() as tx:
        with pytest.raises(SchemaViolation):
            tx.add_edge(a, "married_to", c)


def test_traversal_walks_and_projects(people):
    with people.new_transaction() as tx:
        a = tx.add_vertex("person", {"name": "a", "nicknames": ["x", "y"]})
        b = tx.add_vertex("person", {"name": "b"})
        c = tx.add_vertex("person")
        tx.add_edge(a, "knows", b)
        tx.add_edge(c, "knows", b)
        tx.commit()
    g = people.traversal()
    assert g.V().has("name", "b").in_("knows").values("nicknames").to_list() == ["x", "y"]
    assert g.V().has("name", "b").in_("knows").count() == 2
    assert g.V().has("name", "b").in_("knows").values("name").to_list() == ["a"]
    assert g.V().has("name", "a").out("likes").to_list() == []
    assert g.V().has("name", "zed").try_next() is None
    assert g.V().has("nicknames", "y").try_next() == a
    assert g.E().count() == 2
    assert [e.label for e in g.E()] == ["knows", "knows"]
    assert g.V(b.id).both("knows").count() == 2
    assert g.E().out_v().values("name").to_list() == ["a"]


def test_has_keeps_booleans_and_numbers_apart(people):
    with people.new_transaction() as tx:
        v = tx.add_vertex("person", {"age": 1, "active": True, "score": 1.0})
        tx.commit()
    g = people.traversal()
    assert g.V().has("age", True).to_list() == []
    assert g.V().has("active", 1).to_list() == []
    assert g.V().has("age", 1).try_next() == v
    assert g.V().has("active", True).try_next() == v
    assert g.V().has("score", 1).try_next() == v
