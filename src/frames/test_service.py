"""
Unit test for the authoring service: builders and group scopes.

HOW TO RUN:
From the project root, run:
    pytest src/frames/test_service.py
"""

import pytest
from rdflib import OWL, URIRef

from ontology.changes import remove_entity
from ontology.context import get_store, ontology, with_ontology
from ontology.domain import AxiomKind, EntityKind
from ontology.errors import InverseArityError, UnknownFrameError
from ontology.factory import data_factory
from ontology.hierarchy import is_disjoint, is_equivalent, is_subclass, is_superclass, superclasses
from ontology.probe import with_probe_entities

from .collector import with_collection, with_default_frames
from .expressions import fact, owlor, owlsome
from .service import (
    add_disjoint_union, add_fact, add_subclass, annotation_property, as_disjoint,
    as_disjoint_subclasses, as_inverse, as_subclasses, declare_classes, define_classes,
    disjoint_classes, individual, object_property, owlclass, refine, with_prefix, with_suffix,
)

EX = "http://example.org/test#"


def _of_kind(onto, kind):
    return get_store().get_axioms(onto, kind)


def test_owlclass(onto):
    """A class with frames adds its declaration and one axiom per value."""
    print("Testing owlclass...")

    dog = owlclass("Dog", subclass=["Animal", owlsome("hasPart", "Tail")], label="Dog")

    assert dog.iri == URIRef(EX + "Dog")
    assert dog.kind == EntityKind.CLASS
    assert len(onto.axioms) == 4
    assert get_store().is_declared(onto, dog)
    assert is_superclass(dog, owlclass("Animal"))

    print("✓ owlclass working correctly")


def test_name_frame_overrides_name(onto):
    cls = owlclass("ignored", name="Named")
    assert cls.iri == URIRef(EX + "Named")


def test_unknown_frame_adds_nothing(onto):
    """A bad frame aborts the declaration before any axiom is added."""
    with pytest.raises(UnknownFrameError):
        owlclass("A", subclass="B", bogus=1)
    assert len(onto.axioms) == 0


def test_other_builders(onto):
    part = object_property("hasPart", domain="Whole", characteristic="transitive")
    note = annotation_property("note", superproperty=data_factory.rdfs_comment())
    fido = individual("fido", type="Dog")

    assert part.kind == EntityKind.OBJECT_PROPERTY
    assert note.kind == EntityKind.ANNOTATION_PROPERTY
    assert fido.kind == EntityKind.INDIVIDUAL
    assert len(_of_kind(onto, AxiomKind.TRANSITIVE_OBJECT_PROPERTY)) == 1
    assert len(_of_kind(onto, AxiomKind.SUB_ANNOTATION_PROPERTY_OF)) == 1
    assert len(_of_kind(onto, AxiomKind.CLASS_ASSERTION)) == 1


def test_refine_is_additive(onto):
    """Refining adds frames and keeps the original axioms."""
    dog = owlclass("Dog", subclass="Animal")
    refined = refine(dog, subclass="Pet", comment="A dog")

    assert refined is dog
    assert superclasses(dog) == {owlclass("Animal"), owlclass("Pet")}
    assert len(_of_kind(onto, AxiomKind.DECLARATION)) == 3
    with pytest.raises(TypeError):
        refine("Dog")


def test_refine_into_second_ontology(onto):
    dog = owlclass("Dog")
    animal = owlclass("Animal")
    other = ontology("http://example.org/other")

    refine(dog, ontology=other, subclass=animal)

    assert get_store().is_declared(other, dog)
    assert is_subclass(animal, dog, other)
    assert superclasses(dog) == set()


def test_declare_and_define_classes(onto):
    declared = declare_classes("A", ["B", "C"])
    defined = define_classes("D", ("E", {"subclass": "D"}))

    assert [cls.name for cls in declared] == ["A", "B", "C"]
    assert [cls.name for cls in defined] == ["D", "E"]
    assert is_superclass(defined[1], defined[0])


def test_disjoint_classes(onto):
    """A group of three gives one axiom; a group of one gives none."""
    a, b, c = declare_classes("A", "B", "C")

    axiom = disjoint_classes(a, b, c)
    assert axiom.operands[0] == frozenset({a, b, c})
    assert len(_of_kind(onto, AxiomKind.DISJOINT_CLASSES)) == 1
    assert disjoint_classes(a) is None
    assert disjoint_classes(a, a) is None
    assert len(_of_kind(onto, AxiomKind.DISJOINT_CLASSES)) == 1


def test_as_disjoint(onto):
    print("Testing as_disjoint...")

    with as_disjoint():
        a = owlclass("A")
        b = owlclass("B")
        c = owlclass("C")

    disjoints = _of_kind(onto, AxiomKind.DISJOINT_CLASSES)
    assert len(disjoints) == 1
    assert disjoints[0].operands[0] == frozenset({a, b, c})

    with as_disjoint():
        owlclass("Lonely")
    assert len(_of_kind(onto, AxiomKind.DISJOINT_CLASSES)) == 1

    print("✓ as_disjoint working correctly")


def test_nested_as_disjoint(onto):
    """Classes of an inner group do not join the outer group."""
    with as_disjoint():
        a = owlclass("A")
        with as_disjoint():
            b = owlclass("B")
            c = owlclass("C")
        d = owlclass("D")

    groups = {axiom.operands[0] for axiom in _of_kind(onto, AxiomKind.DISJOINT_CLASSES)}
    assert groups == {frozenset({b, c}), frozenset({a, d})}


def test_as_disjoint_skipped_on_error(onto):
    with pytest.raises(RuntimeError):
        with as_disjoint():
            owlclass("A")
            owlclass("B")
            raise RuntimeError("boom")

    assert _of_kind(onto, AxiomKind.DISJOINT_CLASSES) == []
    assert len(_of_kind(onto, AxiomKind.DECLARATION)) == 2


def test_as_inverse(onto):
    with as_inverse():
        p = object_property("hasPart")
        q = object_property("isPartOf")

    inverses = _of_kind(onto, AxiomKind.INVERSE_OBJECT_PROPERTIES)
    assert [axiom.operands[0] for axiom in inverses] == [frozenset({p, q})]


@pytest.mark.parametrize("names", [["p"], ["p", "q", "r"]])
def test_as_inverse_arity(onto, names):
    """Anything other than exactly two properties is an error."""
    with pytest.raises(InverseArityError):
        with as_inverse():
            for name in names:
                object_property(name)
    assert _of_kind(onto, AxiomKind.INVERSE_OBJECT_PROPERTIES) == []


def test_as_subclasses(onto):
    """Declared classes get the superclass; disjoint and cover add group axioms."""
    print("Testing as_subclasses...")

    topping = owlclass("Topping")
    with as_subclasses(topping, disjoint=True, cover=True):
        meat = owlclass("Meat")
        veg = owlclass("Vegetable", subclass="Food")

    assert is_superclass(meat, topping)
    assert superclasses(veg) == {topping, owlclass("Food")}
    assert is_disjoint(meat, veg)
    assert is_equivalent(topping, owlor(meat, veg))

    print("✓ as_subclasses working correctly")


def test_as_subclasses_without_options(onto):
    with as_subclasses("Animal"):
        owlclass("Dog")
        owlclass("Cat")

    assert _of_kind(onto, AxiomKind.DISJOINT_CLASSES) == []
    assert _of_kind(onto, AxiomKind.EQUIVALENT_CLASSES) == []
    assert len(_of_kind(onto, AxiomKind.SUBCLASS_OF)) == 2


def test_as_disjoint_subclasses(onto):
    with as_disjoint_subclasses("Animal"):
        dog = owlclass("Dog")
        cat = owlclass("Cat")

    assert is_disjoint(dog, cat)
    assert not is_equivalent(owlclass("Animal"), owlor(dog, cat))


def test_nested_subclass_scopes(onto):
    """Inner default frames replace the outer ones."""
    with as_subclasses("Animal"):
        with as_subclasses("Pet"):
            dog = owlclass("Dog")

    assert superclasses(dog) == {owlclass("Pet")}


def test_default_frames_apply_to_every_builder(onto):
    with with_default_frames({"comment": "generated"}):
        owlclass("A")
        object_property("p")

    assert len(_of_kind(onto, AxiomKind.ANNOTATION_ASSERTION)) == 2


def test_collection_records_all_kinds(onto):
    with with_collection() as collected:
        cls = owlclass("A")
        prop = object_property("p")
        ind = individual("i")

    assert collected == [cls, prop, ind]


def test_prefix_and_suffix(onto):
    with with_prefix("Pizza"):
        with with_suffix("Topping"):
            cls = owlclass("Cheese")
        plain = owlclass("Base")

    assert cls.name == "PizzaCheeseTopping"
    assert plain.name == "PizzaBase"
    assert owlclass(data_factory.get_class(EX + "X")).name == "X"


def test_disjoint_union_and_facts(onto):
    union = add_disjoint_union("Animal", "Dog", "Cat")
    assert union.kind == AxiomKind.DISJOINT_UNION

    alice = individual("alice")
    added = add_fact("fido", fact("hasOwner", alice))
    assert added[0].kind == AxiomKind.OBJECT_PROPERTY_ASSERTION

    add_subclass("Dog", "Pet")
    assert is_superclass(owlclass("Dog"), owlclass("Pet"))


def test_probe_scope_with_builders(onto):
    """Probe classes and their axioms disappear after the block."""
    animal = owlclass("Animal")
    before = list(onto.axioms)

    with with_probe_entities([
        ("probe", lambda bound: owlclass("Probe", subclass=animal)),
        ("sub", lambda bound: owlclass("SubProbe", subclass=bound["probe"])),
    ]) as probes:
        assert is_superclass(probes["sub"], animal)

    assert list(onto.axioms) == before


def test_remove_entity_after_owlclass(onto):
    a = owlclass("A", subclass="B", equivalent="C")
    assert len(remove_entity(a)) == 3
    assert len(onto.axioms) == 0


def test_explicit_ontology_argument(store):
    target = ontology("http://example.org/explicit")

    cls = owlclass("A", ontology=target)

    assert cls.iri == URIRef("http://example.org/explicit#A")
    assert get_store().is_declared(target, cls)
    with with_ontology(target):
        assert superclasses(cls) == set()


def test_name_frame_with_frames_mapping(onto):
    """The name frame works as a keyword and inside a frames mapping."""
    assert owlclass("ignored", {"name": "Mapped"}).name == "Mapped"
    assert owlclass("other", name="Keyword", subclass="Thing").name == "Keyword"
    assert refine(owlclass("Dog"), ontology=onto, label="Dog").name == "Dog"


def test_queries_by_name_after_building(onto):
    """Hierarchy queries accept the same names the builders accept."""
    owlclass("Dog", subclass="Animal")
    disjoint_classes("Dog", "Cat")

    assert is_superclass("Dog", "Animal")
    assert superclasses("Dog") == {owlclass("Animal")}
    assert is_disjoint("Dog", "Cat")


def test_self_inverse_is_rendered(onto):
    """Declaring the same property twice in as_inverse makes it its own inverse."""
    with as_inverse():
        p = object_property("p")
        object_property("p")

    inverses = _of_kind(onto, AxiomKind.INVERSE_OBJECT_PROPERTIES)
    assert [axiom.operands[0] for axiom in inverses] == [frozenset({p})]
    graph = get_store().to_graph(onto)
    assert (p.iri, OWL.inverseOf, p.iri) in graph


def test_self_equivalence_adds_nothing(onto):
    a = owlclass("A", equivalent="A")

    assert _of_kind(onto, AxiomKind.EQUIVALENT_CLASSES) == []
    assert get_store().is_declared(onto, a)
