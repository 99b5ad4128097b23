"""
Entity factory producing canonical entities and axioms.

The factory is idempotent: asking twice for the same kind and IRI returns
the same entity object. Creating entities never adds axioms to any
ontology; the axiom constructors only build values.
"""

from typing import Dict, Iterable, Tuple

from rdflib import OWL, RDFS, Literal, URIRef

from .domain import (
    Annotation, Axiom, AxiomKind, ClassExpression, ClassReference, Entity, EntityKind,
    ExpressionOperator, SET_OPERATORS,
)


class EntityFactory:
    """Get-or-create canonical entities and build axioms over them."""

    def __init__(self):
        self._entities: Dict[Tuple[EntityKind, URIRef], Entity] = {}

    # Entities

    def get_entity(self, kind: EntityKind, iri) -> Entity:
        """Return the canonical entity of ``kind`` for ``iri``."""
        key = (EntityKind(kind), URIRef(str(iri)))
        entity = self._entities.get(key)
        if entity is None:
            entity = Entity(kind=key[0], iri=key[1])
            self._entities[key] = entity
        return entity

    def get_class(self, iri) -> Entity:
        return self.get_entity(EntityKind.CLASS, iri)

    def get_object_property(self, iri) -> Entity:
        return self.get_entity(EntityKind.OBJECT_PROPERTY, iri)

    def get_annotation_property(self, iri) -> Entity:
        return self.get_entity(EntityKind.ANNOTATION_PROPERTY, iri)

    def get_individual(self, iri) -> Entity:
        return self.get_entity(EntityKind.INDIVIDUAL, iri)

    def get_annotation(self, property: Entity, literal, language: str = "en") -> Annotation:
        if not isinstance(literal, Literal):
            literal = Literal(literal, lang=language)
        return Annotation(property=property, value=literal)

    def owl_thing(self) -> Entity:
        return self.get_class(OWL.Thing)

    def owl_nothing(self) -> Entity:
        return self.get_class(OWL.Nothing)

    # Built-in annotation properties

    def rdfs_label(self) -> Entity:
        return self.get_annotation_property(RDFS.label)

    def rdfs_comment(self) -> Entity:
        return self.get_annotation_property(RDFS.comment)

    def rdfs_is_defined_by(self) -> Entity:
        return self.get_annotation_property(RDFS.isDefinedBy)

    def rdfs_see_also(self) -> Entity:
        return self.get_annotation_property(RDFS.seeAlso)

    def owl_version_info(self) -> Entity:
        return self.get_annotation_property(OWL.versionInfo)

    def owl_backward_compatible_with(self) -> Entity:
        return self.get_annotation_property(OWL.backwardCompatibleWith)

    def owl_incompatible_with(self) -> Entity:
        return self.get_annotation_property(OWL.incompatibleWith)

    # Class expressions

    def expression(self, operator: ExpressionOperator, *operands, cardinality=None) -> ClassExpression:
        if operator in SET_OPERATORS:
            operands = (frozenset(operands),)
        return ClassExpression(operator=operator, operands=tuple(operands), cardinality=cardinality)

    # Axioms

    def declaration(self, entity: Entity) -> Axiom:
        return Axiom(AxiomKind.DECLARATION, (entity,))

    def subclass_of(self, subclass: ClassReference, superclass: ClassReference) -> Axiom:
        return Axiom(AxiomKind.SUBCLASS_OF, (subclass, superclass))

    def equivalent_classes(self, classes: Iterable[ClassReference]) -> Axiom:
        return Axiom(AxiomKind.EQUIVALENT_CLASSES, (frozenset(classes),))

    def disjoint_classes(self, classes: Iterable[ClassReference]) -> Axiom:
        return Axiom(AxiomKind.DISJOINT_CLASSES, (frozenset(classes),))

    def disjoint_union(self, owner: Entity, classes: Iterable[ClassReference]) -> Axiom:
        return Axiom(AxiomKind.DISJOINT_UNION, (owner, frozenset(classes)))

    def object_property_domain(self, property: Entity, domain: ClassReference) -> Axiom:
        return Axiom(AxiomKind.OBJECT_PROPERTY_DOMAIN, (property, domain))

    def object_property_range(self, property: Entity, range: ClassReference) -> Axiom:
        return Axiom(AxiomKind.OBJECT_PROPERTY_RANGE, (property, range))

    def inverse_object_properties(self, first: Entity, second: Entity) -> Axiom:
        return Axiom(AxiomKind.INVERSE_OBJECT_PROPERTIES, (frozenset((first, second)),))

    def sub_object_property_of(self, subproperty: Entity, superproperty: Entity) -> Axiom:
        return Axiom(AxiomKind.SUB_OBJECT_PROPERTY_OF, (subproperty, superproperty))

    def transitive_object_property(self, property: Entity) -> Axiom:
        return Axiom(AxiomKind.TRANSITIVE_OBJECT_PROPERTY, (property,))

    def functional_object_property(self, property: Entity) -> Axiom:
        return Axiom(AxiomKind.FUNCTIONAL_OBJECT_PROPERTY, (property,))

    def inverse_functional_object_property(self, property: Entity) -> Axiom:
        return Axiom(AxiomKind.INVERSE_FUNCTIONAL_OBJECT_PROPERTY, (property,))

    def sub_annotation_property_of(self, subproperty: Entity, superproperty: Entity) -> Axiom:
        return Axiom(AxiomKind.SUB_ANNOTATION_PROPERTY_OF, (subproperty, superproperty))

    def annotation_assertion(self, subject: URIRef, annotation: Annotation) -> Axiom:
        return Axiom(AxiomKind.ANNOTATION_ASSERTION, (subject, annotation))

    def class_assertion(self, cls: ClassReference, individual: Entity) -> Axiom:
        return Axiom(AxiomKind.CLASS_ASSERTION, (cls, individual))

    def object_property_assertion(self, property: Entity, subject: Entity, target: Entity) -> Axiom:
        return Axiom(AxiomKind.OBJECT_PROPERTY_ASSERTION, (property, subject, target))

    def negative_object_property_assertion(self, property: Entity, subject: Entity, target: Entity) -> Axiom:
        return Axiom(AxiomKind.NEGATIVE_OBJECT_PROPERTY_ASSERTION, (property, subject, target))

    def same_individual(self, individuals: Iterable[Entity]) -> Axiom:
        return Axiom(AxiomKind.SAME_INDIVIDUAL, (frozenset(individuals),))

    def different_individuals(self, individuals: Iterable[Entity]) -> Axiom:
        return Axiom(AxiomKind.DIFFERENT_INDIVIDUALS, (frozenset(individuals),))


# Shared factory, like the single data factory of an ontology manager
data_factory = EntityFactory()
