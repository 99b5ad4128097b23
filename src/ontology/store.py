"""
In-memory ontology store.

The store plays the role of an ontology manager: it creates, locates and
removes ontologies by IRI, applies single-axiom changes, answers structural
queries over declared axioms and renders an ontology as an rdflib graph.
"""

import logging
from typing import Callable, Dict, List, Optional, Set, Union

from rdflib import BNode, Graph, Literal, Namespace, OWL, RDF, RDFS, URIRef, XSD
from rdflib.collection import Collection

from .domain import (
    Annotation, Axiom, AxiomKind, ClassExpression, Entity, EntityKind, ExpressionOperator,
    Ontology, OntologyStats,
)
from .errors import StoreChangeRejectedError

logger = logging.getLogger(__name__)


DECLARATION_TYPES = {
    EntityKind.CLASS: OWL.Class,
    EntityKind.OBJECT_PROPERTY: OWL.ObjectProperty,
    EntityKind.ANNOTATION_PROPERTY: OWL.AnnotationProperty,
    EntityKind.INDIVIDUAL: OWL.NamedIndividual,
}

CHARACTERISTIC_TYPES = {
    AxiomKind.TRANSITIVE_OBJECT_PROPERTY: OWL.TransitiveProperty,
    AxiomKind.FUNCTIONAL_OBJECT_PROPERTY: OWL.FunctionalProperty,
    AxiomKind.INVERSE_FUNCTIONAL_OBJECT_PROPERTY: OWL.InverseFunctionalProperty,
}

RESTRICTION_PREDICATES = {
    ExpressionOperator.SOME: OWL.someValuesFrom,
    ExpressionOperator.ONLY: OWL.allValuesFrom,
    ExpressionOperator.MIN: OWL.minQualifiedCardinality,
    ExpressionOperator.MAX: OWL.maxQualifiedCardinality,
    ExpressionOperator.EXACTLY: OWL.qualifiedCardinality,
}

LIST_PREDICATES = {
    ExpressionOperator.AND: OWL.intersectionOf,
    ExpressionOperator.OR: OWL.unionOf,
    ExpressionOperator.ONE_OF: OWL.oneOf,
}


class OntologyStore:
    """Simple in-memory manager for many ontologies."""

    def __init__(self):
        self._ontologies: Dict[URIRef, Ontology] = {}
        self._remove_hooks: List[Callable[[Ontology], None]] = []

    # Lifecycle

    def create_ontology(self, iri, prefix: Optional[str] = None) -> Ontology:
        """Create a new ontology, replacing any ontology with the same IRI."""
        iri = URIRef(str(iri))
        self.remove_ontology(iri)
        ontology = Ontology(iri=iri, prefix=prefix)
        self._ontologies[iri] = ontology
        logger.info(f"Created ontology {iri}")
        return ontology

    def get_ontology(self, iri) -> Optional[Ontology]:
        return self._ontologies.get(URIRef(str(iri)))

    def contains(self, ontology: Union[Ontology, str]) -> bool:
        if isinstance(ontology, Ontology):
            return self._ontologies.get(ontology.iri) is ontology
        return URIRef(str(ontology)) in self._ontologies

    def list_ontologies(self) -> List[Ontology]:
        return list(self._ontologies.values())

    def remove_ontology(self, ontology: Union[Ontology, str]) -> bool:
        """Remove an ontology if present and run the remove hooks on it.

        Returns:
            True if an ontology was removed, False otherwise
        """
        iri = ontology.iri if isinstance(ontology, Ontology) else URIRef(str(ontology))
        existing = self._ontologies.get(iri)
        if existing is None:
            return False
        if isinstance(ontology, Ontology) and existing is not ontology:
            return False

        del self._ontologies[iri]
        logger.info(f"Removed ontology {iri}")
        for hook in list(self._remove_hooks):
            hook(existing)
        return True

    def add_remove_hook(self, hook: Callable[[Ontology], None]) -> None:
        """Register a function called immediately after an ontology is removed."""
        if hook not in self._remove_hooks:
            self._remove_hooks.append(hook)

    # Changes

    def apply_add(self, ontology: Ontology, axiom: Axiom) -> bool:
        """Add a single axiom. Returns True if the axiom was not already present."""
        self._check_change(ontology, axiom)
        if axiom in ontology.axioms:
            return False
        ontology.axioms[axiom] = None
        logger.debug(f"Added {axiom.kind.value} axiom to {ontology.iri}")
        return True

    def apply_remove(self, ontology: Ontology, axiom: Axiom) -> bool:
        """Remove a single axiom. Returns True if the axiom was present."""
        self._check_change(ontology, axiom)
        if axiom not in ontology.axioms:
            return False
        del ontology.axioms[axiom]
        logger.debug(f"Removed {axiom.kind.value} axiom from {ontology.iri}")
        return True

    def add_import(self, ontology: Ontology, imported: Ontology) -> None:
        """Record that ``ontology`` imports ``imported``."""
        self._check_ontology(ontology)
        if imported.iri not in ontology.imports:
            ontology.imports.append(imported.iri)

    def add_ontology_annotation(self, ontology: Ontology, annotation: Annotation) -> None:
        self._check_ontology(ontology)
        if not isinstance(annotation, Annotation):
            raise StoreChangeRejectedError(f"Not an annotation: {annotation!r}")
        if annotation not in ontology.annotations:
            ontology.annotations.append(annotation)

    def _check_ontology(self, ontology: Ontology) -> None:
        if not self.contains(ontology):
            logger.error(f"Rejected change: ontology {getattr(ontology, 'iri', ontology)} is not managed by this store")
            raise StoreChangeRejectedError(f"Ontology is not managed by this store: {ontology!r}")

    def _check_change(self, ontology: Ontology, axiom: Axiom) -> None:
        self._check_ontology(ontology)
        if not isinstance(axiom, Axiom):
            logger.error(f"Rejected change: {axiom!r} is not an axiom")
            raise StoreChangeRejectedError(f"Not an axiom: {axiom!r}")

    # Queries

    def get_axioms(self, ontology: Ontology, kind: Optional[AxiomKind] = None) -> List[Axiom]:
        return [axiom for axiom in ontology.axioms if kind is None or axiom.kind == kind]

    def referencing_axioms(self, ontology: Ontology, entity: Entity) -> List[Axiom]:
        """All axioms that mention ``entity`` anywhere, including its declaration."""
        return [axiom for axiom in ontology.axioms if axiom.mentions(entity)]

    def get_entities(self, ontology: Ontology, kind: Optional[EntityKind] = None) -> List[Entity]:
        """Declared entities, in declaration order."""
        entities = []
        for axiom in self.get_axioms(ontology, AxiomKind.DECLARATION):
            entity = axiom.operands[0]
            if kind is None or entity.kind == kind:
                entities.append(entity)
        return entities

    def is_declared(self, ontology: Ontology, entity: Entity) -> bool:
        return Axiom(AxiomKind.DECLARATION, (entity,)) in ontology.axioms

    def super_classes(self, ontology: Ontology, cls: Entity) -> Set:
        """Direct superclasses of a named class (class expressions included)."""
        return {axiom.operands[1] for axiom in self.get_axioms(ontology, AxiomKind.SUBCLASS_OF)
                if axiom.operands[0] == cls}

    def sub_classes(self, ontology: Ontology, cls: Entity) -> Set:
        return {axiom.operands[0] for axiom in self.get_axioms(ontology, AxiomKind.SUBCLASS_OF)
                if axiom.operands[1] == cls}

    def super_properties(self, ontology: Ontology, property: Entity) -> Set[Entity]:
        return {axiom.operands[1] for axiom in self.get_axioms(ontology, AxiomKind.SUB_OBJECT_PROPERTY_OF)
                if axiom.operands[0] == property}

    def sub_properties(self, ontology: Ontology, property: Entity) -> Set[Entity]:
        return {axiom.operands[0] for axiom in self.get_axioms(ontology, AxiomKind.SUB_OBJECT_PROPERTY_OF)
                if axiom.operands[1] == property}

    def disjoint_classes(self, ontology: Ontology, cls) -> Set:
        """Classes asserted disjoint with ``cls`` by any disjointness axiom."""
        return self._members_with(ontology, AxiomKind.DISJOINT_CLASSES, cls)

    def equivalent_classes(self, ontology: Ontology, cls) -> Set:
        """Classes asserted equivalent to ``cls``."""
        return self._members_with(ontology, AxiomKind.EQUIVALENT_CLASSES, cls)

    def _members_with(self, ontology: Ontology, kind: AxiomKind, member) -> Set:
        related = set()
        for axiom in self.get_axioms(ontology, kind):
            members = axiom.operands[0]
            if member in members:
                related.update(other for other in members if other != member)
        return related

    def get_stats(self, ontology: Ontology) -> OntologyStats:
        """Get basic statistics about the ontology."""
        counts = {kind: 0 for kind in EntityKind}
        for entity in self.get_entities(ontology):
            counts[entity.kind] += 1

        return OntologyStats(
            total_classes=counts[EntityKind.CLASS],
            total_object_properties=counts[EntityKind.OBJECT_PROPERTY],
            total_annotation_properties=counts[EntityKind.ANNOTATION_PROPERTY],
            total_individuals=counts[EntityKind.INDIVIDUAL],
            total_axioms=len(ontology.axioms),
            total_imports=len(ontology.imports),
        )

    # RDF rendering

    def to_graph(self, ontology: Ontology) -> Graph:
        """Render the ontology as an RDF graph using the OWL-to-RDF mapping."""
        graph = Graph()
        graph.bind("owl", OWL)
        graph.bind("rdfs", RDFS)
        if ontology.prefix:
            graph.bind(ontology.prefix.rstrip(":"), Namespace(f"{ontology.iri}#"))

        graph.add((ontology.iri, RDF.type, OWL.Ontology))
        for imported in ontology.imports:
            graph.add((ontology.iri, OWL.imports, imported))
        for annotation in ontology.annotations:
            graph.add((ontology.iri, annotation.property.iri, annotation.value))

        for axiom in ontology.axioms:
            self._add_axiom_triples(graph, axiom)
        return graph

    def _add_axiom_triples(self, graph: Graph, axiom: Axiom) -> None:
        kind = axiom.kind
        ops = axiom.operands

        if kind == AxiomKind.DECLARATION:
            graph.add((ops[0].iri, RDF.type, DECLARATION_TYPES[ops[0].kind]))
        elif kind == AxiomKind.SUBCLASS_OF:
            graph.add((self._node(graph, ops[0]), RDFS.subClassOf, self._node(graph, ops[1])))
        elif kind == AxiomKind.EQUIVALENT_CLASSES:
            self._add_pairwise(graph, ops[0], OWL.equivalentClass)
        elif kind == AxiomKind.DISJOINT_CLASSES:
            members = _ordered(ops[0])
            if len(members) == 2:
                graph.add((self._node(graph, members[0]), OWL.disjointWith, self._node(graph, members[1])))
            else:
                self._add_members(graph, OWL.AllDisjointClasses, members)
        elif kind == AxiomKind.DISJOINT_UNION:
            graph.add((ops[0].iri, OWL.disjointUnionOf, self._list(graph, _ordered(ops[1]))))
        elif kind == AxiomKind.OBJECT_PROPERTY_DOMAIN:
            graph.add((ops[0].iri, RDFS.domain, self._node(graph, ops[1])))
        elif kind == AxiomKind.OBJECT_PROPERTY_RANGE:
            graph.add((ops[0].iri, RDFS.range, self._node(graph, ops[1])))
        elif kind == AxiomKind.INVERSE_OBJECT_PROPERTIES:
            self._add_pairwise(graph, ops[0], OWL.inverseOf)
        elif kind in (AxiomKind.SUB_OBJECT_PROPERTY_OF, AxiomKind.SUB_ANNOTATION_PROPERTY_OF):
            graph.add((ops[0].iri, RDFS.subPropertyOf, ops[1].iri))
        elif kind in CHARACTERISTIC_TYPES:
            graph.add((ops[0].iri, RDF.type, CHARACTERISTIC_TYPES[kind]))
        elif kind == AxiomKind.ANNOTATION_ASSERTION:
            graph.add((ops[0], ops[1].property.iri, ops[1].value))
        elif kind == AxiomKind.CLASS_ASSERTION:
            graph.add((ops[1].iri, RDF.type, self._node(graph, ops[0])))
        elif kind == AxiomKind.OBJECT_PROPERTY_ASSERTION:
            graph.add((ops[1].iri, ops[0].iri, ops[2].iri))
        elif kind == AxiomKind.NEGATIVE_OBJECT_PROPERTY_ASSERTION:
            node = BNode()
            graph.add((node, RDF.type, OWL.NegativePropertyAssertion))
            graph.add((node, OWL.sourceIndividual, ops[1].iri))
            graph.add((node, OWL.assertionProperty, ops[0].iri))
            graph.add((node, OWL.targetIndividual, ops[2].iri))
        elif kind == AxiomKind.SAME_INDIVIDUAL:
            self._add_pairwise(graph, ops[0], OWL.sameAs)
        elif kind == AxiomKind.DIFFERENT_INDIVIDUALS:
            members = _ordered(ops[0])
            if len(members) == 2:
                graph.add((members[0].iri, OWL.differentFrom, members[1].iri))
            else:
                self._add_members(graph, OWL.AllDifferent, members)
        else:
            logger.warning(f"No RDF mapping for axiom kind {kind.value}")

    def _add_pairwise(self, graph: Graph, members, predicate: URIRef) -> None:
        members = _ordered(members)
        if len(members) == 1:
            # a self pairing, e.g. a property that is its own inverse
            members = members * 2
        for first, second in zip(members, members[1:]):
            graph.add((self._node(graph, first), predicate, self._node(graph, second)))

    def _add_members(self, graph: Graph, rdf_type: URIRef, members: list) -> None:
        node = BNode()
        graph.add((node, RDF.type, rdf_type))
        graph.add((node, OWL.members, self._list(graph, members)))

    def _list(self, graph: Graph, items: list) -> BNode:
        head = BNode()
        Collection(graph, head, [self._node(graph, item) for item in items])
        return head

    def _node(self, graph: Graph, value):
        """Return the RDF node for an entity or class expression."""
        if isinstance(value, Entity):
            return value.iri
        if not isinstance(value, ClassExpression):
            raise StoreChangeRejectedError(f"Cannot render {value!r} as RDF")

        node = BNode()
        operator = value.operator
        if operator in LIST_PREDICATES:
            graph.add((node, RDF.type, OWL.Class))
            graph.add((node, LIST_PREDICATES[operator], self._list(graph, _ordered(value.members()))))
        elif operator == ExpressionOperator.NOT:
            graph.add((node, RDF.type, OWL.Class))
            graph.add((node, OWL.complementOf, self._node(graph, value.operands[0])))
        else:
            property, filler = value.operands
            graph.add((node, RDF.type, OWL.Restriction))
            graph.add((node, OWL.onProperty, property.iri))
            if value.cardinality is None:
                graph.add((node, RESTRICTION_PREDICATES[operator], self._node(graph, filler)))
            else:
                graph.add((node, RESTRICTION_PREDICATES[operator],
                           Literal(value.cardinality, datatype=XSD.nonNegativeInteger)))
                graph.add((node, OWL.onClass, self._node(graph, filler)))
        return node


def _ordered(members) -> list:
    """Deterministic order for set-valued operands."""
    return sorted(members, key=lambda member: (isinstance(member, ClassExpression), str(member)))
