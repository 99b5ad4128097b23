"""
Unit test for the ontology domain models.

HOW TO RUN:
From the project root, run:
    pytest src/ontology/test_domain.py
"""

from rdflib import Literal, RDFS, URIRef

from .domain import Annotation, Axiom, AxiomKind, Entity, EntityKind, ExpressionOperator
from .factory import EntityFactory


EX = "http://example.org/test#"


def test_entity_identity_is_structural():
    """Entities with the same kind and IRI are equal; kind matters."""
    print("Testing entity identity...")

    a = Entity(EntityKind.CLASS, URIRef(EX + "A"))
    b = Entity(EntityKind.CLASS, URIRef(EX + "A"))
    c = Entity(EntityKind.INDIVIDUAL, URIRef(EX + "A"))

    assert a == b
    assert hash(a) == hash(b)
    assert a != c
    assert a.name == "A"

    print("✓ Entity identity working correctly")


def test_factory_is_idempotent():
    """The factory returns the same object for the same kind and IRI."""
    factory = EntityFactory()
    first = factory.get_class(EX + "Vehicle")
    second = factory.get_class(URIRef(EX + "Vehicle"))

    assert first is second
    assert factory.get_object_property(EX + "Vehicle") is not first


def test_symmetric_axioms_ignore_member_order():
    """Disjoint and inverse axioms compare as sets of members."""
    factory = EntityFactory()
    a, b = factory.get_class(EX + "A"), factory.get_class(EX + "B")
    p, q = factory.get_object_property(EX + "p"), factory.get_object_property(EX + "q")

    assert factory.disjoint_classes([a, b]) == factory.disjoint_classes([b, a])
    assert factory.inverse_object_properties(p, q) == factory.inverse_object_properties(q, p)
    assert factory.subclass_of(a, b) != factory.subclass_of(b, a)


def test_axiom_mentions_nested_entities():
    """Signature reaches into class expressions; annotation subjects match by IRI."""
    print("Testing axiom signature...")

    factory = EntityFactory()
    a = factory.get_class(EX + "A")
    b = factory.get_class(EX + "B")
    p = factory.get_object_property(EX + "hasPart")

    restriction = factory.expression(ExpressionOperator.SOME, p, b)
    axiom = factory.subclass_of(a, restriction)

    assert axiom.signature() == frozenset({a, b, p})
    assert axiom.mentions(p)

    note = Annotation(factory.rdfs_comment(), Literal("a comment", lang="en"))
    assertion = factory.annotation_assertion(a.iri, note)
    assert assertion.mentions(a)
    assert not assertion.mentions(b)

    print("✓ Axiom signature working correctly")


def test_set_expression_members():
    """Union operands are unpacked by members()."""
    factory = EntityFactory()
    a, b = factory.get_class(EX + "A"), factory.get_class(EX + "B")

    union = factory.expression(ExpressionOperator.OR, a, b)

    assert set(union.members()) == {a, b}
    assert union == factory.expression(ExpressionOperator.OR, b, a)


def test_builtin_annotation_properties():
    factory = EntityFactory()
    assert factory.rdfs_label().iri == RDFS.label
    assert factory.rdfs_label().kind == EntityKind.ANNOTATION_PROPERTY
    assert Axiom(AxiomKind.DECLARATION, (factory.rdfs_label(),)) == factory.declaration(factory.rdfs_label())


if __name__ == "__main__":
    test_entity_identity_is_structural()
    test_factory_is_idempotent()
    test_symmetric_axioms_ignore_member_order()
    test_axiom_mentions_nested_entities()
    test_set_expression_members()
    test_builtin_annotation_properties()
    print("\n🎉 All domain tests passed!")
