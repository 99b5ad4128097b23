"""
Unit test for the frame compiler.

HOW TO RUN:
From the project root, run:
    pytest src/frames/test_compiler.py
"""

import pytest

from ontology.domain import AxiomKind
from ontology.errors import InvalidReferenceError, UnknownCharacteristicError, UnknownFrameError
from ontology.factory import data_factory
from ontology.resolver import ensure_class, ensure_individual, ensure_object_property

from .compiler import FrameCompiler, compile_frames
from .domain import FrameTag
from .expressions import fact, fact_not, label, owlcomment


def test_declaration_comes_first(onto):
    """The declaration leads, then frames in fixed order regardless of input order."""
    print("Testing compile order...")

    dog = ensure_class("Dog")
    axioms = compile_frames(dog, {"label": "Dog", "disjoint": "Cat", "subclass": "Animal"})

    assert [axiom.kind for axiom in axioms] == [
        AxiomKind.DECLARATION,
        AxiomKind.SUBCLASS_OF,
        AxiomKind.DISJOINT_CLASSES,
        AxiomKind.ANNOTATION_ASSERTION,
    ]
    assert axioms[1] == data_factory.subclass_of(dog, ensure_class("Animal"))

    print("✓ Compile order working correctly")


def test_compile_is_deterministic(onto):
    dog = ensure_class("Dog")
    frames = {"subclass": ["Animal", "Pet"], "equivalent": "Canine", "comment": "woof"}

    assert compile_frames(dog, frames) == compile_frames(dog, frames)


def test_defaults_come_before_explicit_values(onto):
    dog = ensure_class("Dog")
    axioms = FrameCompiler().compile(dog, {"subclass": "Pet"}, {FrameTag.SUBCLASS: "Animal"})

    supers = [axiom.operands[1] for axiom in axioms if axiom.kind == AxiomKind.SUBCLASS_OF]
    assert supers == [ensure_class("Animal"), ensure_class("Pet")]


def test_unknown_frame(onto):
    """An unknown tag, or a tag not allowed for the kind, is rejected."""
    dog = ensure_class("Dog")

    with pytest.raises(UnknownFrameError, match="bogus"):
        compile_frames(dog, {"bogus": "x"})
    with pytest.raises(UnknownFrameError):
        compile_frames(dog, {"domain": "Animal"})
    with pytest.raises(UnknownFrameError):
        compile_frames(dog, {"label": "Dog"}, schema={FrameTag.SUBCLASS})


def test_property_frames(onto):
    part = ensure_object_property("hasPart")
    axioms = compile_frames(part, {
        "domain": "Whole",
        "range": "Part",
        "inverseof": "isPartOf",
        "superproperty": "relatedTo",
        "characteristic": ["transitive", ":functional"],
    })

    kinds = [axiom.kind for axiom in axioms]
    assert kinds == [
        AxiomKind.DECLARATION,
        AxiomKind.OBJECT_PROPERTY_DOMAIN,
        AxiomKind.OBJECT_PROPERTY_RANGE,
        AxiomKind.INVERSE_OBJECT_PROPERTIES,
        AxiomKind.SUB_OBJECT_PROPERTY_OF,
        AxiomKind.TRANSITIVE_OBJECT_PROPERTY,
        AxiomKind.FUNCTIONAL_OBJECT_PROPERTY,
    ]

    with pytest.raises(UnknownCharacteristicError):
        compile_frames(part, {"characteristic": "symmetric"})


def test_individual_frames(onto):
    fido = ensure_individual("fido")
    axioms = compile_frames(fido, {
        "type": "Dog",
        "fact": [fact("hasOwner", "alice"), fact_not("hasOwner", "bob")],
        "same": ["fido", "rex"],
        "different": "tom",
        "annotation": label("Fido"),
    })

    kinds = [axiom.kind for axiom in axioms]
    assert kinds == [
        AxiomKind.DECLARATION,
        AxiomKind.CLASS_ASSERTION,
        AxiomKind.OBJECT_PROPERTY_ASSERTION,
        AxiomKind.NEGATIVE_OBJECT_PROPERTY_ASSERTION,
        AxiomKind.SAME_INDIVIDUAL,
        AxiomKind.DIFFERENT_INDIVIDUALS,
        AxiomKind.ANNOTATION_ASSERTION,
    ]


def test_invalid_values(onto):
    dog = ensure_class("Dog")
    fido = ensure_individual("fido")

    with pytest.raises(InvalidReferenceError):
        compile_frames(dog, {"subclass": fido})
    with pytest.raises(InvalidReferenceError):
        compile_frames(fido, {"fact": "hasOwner"})
    with pytest.raises(InvalidReferenceError):
        compile_frames(dog, {"label": 42})


def test_compile_does_not_touch_store(onto):
    compile_frames(ensure_class("Dog"), {"subclass": "Animal"})
    assert len(onto.axioms) == 0


def test_self_equivalence_is_skipped(onto):
    dog = ensure_class("Dog")
    axioms = compile_frames(dog, {"equivalent": ["Dog", "Canine"]})

    assert [axiom.kind for axiom in axioms] == [AxiomKind.DECLARATION, AxiomKind.EQUIVALENT_CLASSES]


def test_annotation_must_match_frame(onto):
    """A prebuilt annotation is only accepted by the frame of its own property."""
    dog = ensure_class("Dog")

    with pytest.raises(InvalidReferenceError):
        compile_frames(dog, {"label": owlcomment("A dog")})
    with pytest.raises(InvalidReferenceError):
        compile_frames(dog, {"comment": label("Dog")})

    axioms = compile_frames(dog, {"label": label("Hund", "de"), "comment": owlcomment("A dog")})
    assert [axiom.operands[1].property for axiom in axioms[1:]] == [
        data_factory.rdfs_comment(), data_factory.rdfs_label(),
    ]
