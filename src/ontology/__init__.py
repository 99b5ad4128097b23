"""
Ontology Store, Context & Hierarchy Module

This module provides an in-memory ontology store together with the context
machinery (current ontology, namespace registry, per-ontology options), the
atomic change operations, hierarchy closure queries and probe scopes used by
the frame-based authoring layer in ``frames``.

Public Interface:
- Context: ontology, defontology, with_ontology, get_current_ontology, ontology_options
- Changes: add_axiom, remove_axiom, remove_entity
- Hierarchy: ancestors, descendants, is_ancestor, is_disjoint, is_equivalent
- Probes: with_probe_entities, with_probe_axioms
- Resolution: resolve, iri_for_name (names, IRIs and producers to entities)

Private Components:
- OntologyStore: in-memory manager with an rdflib rendering
- EntityFactory: canonical entities and axiom constructors
"""

from .changes import add_axiom, add_axioms, remove_axiom, remove_entity
from .context import (
    defontology, get_current_namespace, get_current_ontology, get_iri, get_prefix, get_store,
    in_namespace, ontology, ontology_options, ontology_to_namespace, owlimport, remove_ontology,
    set_default_store, with_ontology,
)
from .domain import Annotation, Axiom, AxiomKind, ClassExpression, Entity, EntityKind, Fact, Ontology
from .errors import (
    CurrentOntologyUnsetError, InvalidReferenceError, InverseArityError, OntologyError,
    ProbeCleanupError, StoreChangeRejectedError, UnknownCharacteristicError, UnknownFrameError,
)
from .hierarchy import (
    ancestors, descendants, direct_subclasses, direct_subs, direct_superclasses, direct_supers,
    is_ancestor, is_descendant, is_disjoint, is_equivalent, is_subclass, is_superclass,
    subclasses, superclasses,
)
from .probe import with_probe_axioms, with_probe_entities
from .resolver import iri_for_name, resolve

__all__ = [
    "add_axiom", "add_axioms", "remove_axiom", "remove_entity",
    "defontology", "get_current_namespace", "get_current_ontology", "get_iri", "get_prefix",
    "get_store", "in_namespace", "ontology", "ontology_options", "ontology_to_namespace",
    "owlimport", "remove_ontology", "set_default_store", "with_ontology",
    "Annotation", "Axiom", "AxiomKind", "ClassExpression", "Entity", "EntityKind", "Fact", "Ontology",
    "CurrentOntologyUnsetError", "InvalidReferenceError", "InverseArityError", "OntologyError",
    "ProbeCleanupError", "StoreChangeRejectedError", "UnknownCharacteristicError", "UnknownFrameError",
    "ancestors", "descendants", "direct_subclasses", "direct_subs", "direct_superclasses",
    "direct_supers", "is_ancestor", "is_descendant", "is_disjoint", "is_equivalent",
    "is_subclass", "is_superclass", "subclasses", "superclasses",
    "with_probe_axioms", "with_probe_entities",
    "iri_for_name", "resolve",
]
