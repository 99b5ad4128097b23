"""
Domain models for the ontology module.

These models represent the entities, class expressions, annotations and
axioms held by an ontology, together with the ontology record itself.
Entities and axioms are plain values: two entities with the same kind and
IRI are the same entity, and axioms compare structurally.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Iterator, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field
from rdflib import Literal, URIRef


class EntityKind(str, Enum):
    """The closed set of named entity kinds."""
    CLASS = "class"
    OBJECT_PROPERTY = "object_property"
    ANNOTATION_PROPERTY = "annotation_property"
    INDIVIDUAL = "individual"


@dataclass(frozen=True)
class Entity:
    """A named entity: a class, object property, annotation property or individual."""

    kind: EntityKind
    iri: URIRef

    @property
    def name(self) -> str:
        """Local part of the IRI (after '#' or the last '/')."""
        text = str(self.iri)
        for separator in ("#", "/"):
            if separator in text:
                return text.rsplit(separator, 1)[1]
        return text

    def __str__(self) -> str:
        return f"{self.kind.value}<{self.iri}>"


class ExpressionOperator(str, Enum):
    """Operators for anonymous class expressions."""
    SOME = "some"
    ONLY = "only"
    AND = "and"
    OR = "or"
    NOT = "not"
    MIN = "min"
    MAX = "max"
    EXACTLY = "exactly"
    ONE_OF = "oneof"


# Operators whose operands form an unordered set
SET_OPERATORS = {ExpressionOperator.AND, ExpressionOperator.OR, ExpressionOperator.ONE_OF}


@dataclass(frozen=True)
class ClassExpression:
    """An anonymous class built from other classes, properties or individuals.

    For set operators (and/or/oneof) ``operands`` holds a single frozenset;
    restrictions hold ``(property, filler)``; ``not`` holds ``(filler,)``.
    """

    operator: ExpressionOperator
    operands: Tuple[Any, ...]
    cardinality: Optional[int] = None

    def members(self) -> Iterator[Any]:
        """Yield the direct operands, unpacking set operands."""
        for operand in self.operands:
            if isinstance(operand, frozenset):
                yield from operand
            else:
                yield operand


ClassReference = Union[Entity, ClassExpression]


@dataclass(frozen=True)
class Annotation:
    """An annotation value attached through an annotation property."""

    property: Entity
    value: Literal


@dataclass(frozen=True)
class Fact:
    """A relationship from an (implicit) individual along ``property`` to ``target``."""

    property: Any
    target: Any
    negated: bool = False


class AxiomKind(str, Enum):
    """Kinds of axioms produced by the entity factory."""
    DECLARATION = "declaration"
    SUBCLASS_OF = "subclass_of"
    EQUIVALENT_CLASSES = "equivalent_classes"
    DISJOINT_CLASSES = "disjoint_classes"
    DISJOINT_UNION = "disjoint_union"
    OBJECT_PROPERTY_DOMAIN = "object_property_domain"
    OBJECT_PROPERTY_RANGE = "object_property_range"
    INVERSE_OBJECT_PROPERTIES = "inverse_object_properties"
    SUB_OBJECT_PROPERTY_OF = "sub_object_property_of"
    TRANSITIVE_OBJECT_PROPERTY = "transitive_object_property"
    FUNCTIONAL_OBJECT_PROPERTY = "functional_object_property"
    INVERSE_FUNCTIONAL_OBJECT_PROPERTY = "inverse_functional_object_property"
    SUB_ANNOTATION_PROPERTY_OF = "sub_annotation_property_of"
    ANNOTATION_ASSERTION = "annotation_assertion"
    CLASS_ASSERTION = "class_assertion"
    OBJECT_PROPERTY_ASSERTION = "object_property_assertion"
    NEGATIVE_OBJECT_PROPERTY_ASSERTION = "negative_object_property_assertion"
    SAME_INDIVIDUAL = "same_individual"
    DIFFERENT_INDIVIDUALS = "different_individuals"


@dataclass(frozen=True)
class Axiom:
    """An atomic assertion. N-ary symmetric kinds keep their members in a frozenset."""

    kind: AxiomKind
    operands: Tuple[Any, ...]

    def signature(self) -> FrozenSet[Entity]:
        """All named entities referred to by this axiom, at any depth."""
        found = set()
        _collect_entities(self.operands, found)
        return frozenset(found)

    def mentions(self, entity: Entity) -> bool:
        """True if the axiom refers to ``entity`` or, as annotation subject, to its IRI."""
        if entity in self.signature():
            return True
        return self.kind == AxiomKind.ANNOTATION_ASSERTION and self.operands[0] == entity.iri


def _collect_entities(value: Any, found: set) -> None:
    if isinstance(value, Entity):
        found.add(value)
    elif isinstance(value, ClassExpression):
        _collect_entities(value.operands, found)
    elif isinstance(value, Annotation):
        found.add(value.property)
    elif isinstance(value, (tuple, frozenset)):
        for item in value:
            _collect_entities(item, found)


@dataclass(eq=False)
class Ontology:
    """A named, mutable collection of axioms owned by an ``OntologyStore``.

    Identity is object identity, so an ontology recreated under the same IRI
    is a different ontology.
    """

    iri: URIRef
    prefix: Optional[str] = None
    # dict keys keep insertion order; values are unused
    axioms: Dict[Axiom, None] = field(default_factory=dict)
    imports: List[URIRef] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Ontology(iri={str(self.iri)!r}, axioms={len(self.axioms)})"


class OntologyOptions(BaseModel):
    """Mutable per-ontology options, discarded together with the ontology."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    iri_gen: Optional[Callable[[str], URIRef]] = Field(
        default=None, description="Function generating an IRI from an entity name"
    )


class OntologyConfig(BaseModel):
    """Validated arguments for creating an ontology."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    iri: str = Field(..., min_length=1, description="IRI identifying the ontology")
    prefix: Optional[str] = Field(default=None, description="Prefix used when the ontology is rendered")
    iri_gen: Optional[Callable[[str], URIRef]] = Field(default=None, description="Naming policy for new entities")
    comment: Optional[str] = Field(default=None, description="rdfs:comment ontology annotation")
    versioninfo: Optional[str] = Field(default=None, description="owl:versionInfo ontology annotation")
    annotation: List[Any] = Field(default_factory=list, description="Additional ontology annotations")


@dataclass
class OntologyStats:
    """Statistics about the ontology content."""

    total_classes: int
    total_object_properties: int
    total_annotation_properties: int
    total_individuals: int
    total_axioms: int
    total_imports: int
