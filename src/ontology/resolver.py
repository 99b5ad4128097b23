"""
Entity resolution.

A reference to an entity may be given as a name, an IRI, an entity that
has already been resolved, or a zero-argument function producing any of
these (useful for forward references). ``resolve`` turns each of them into
the canonical entity of the requested kind.
"""

from enum import Enum
from typing import Any, Optional

from rdflib import URIRef

from .config import get_settings
from .context import ontology_options, resolve_ontology
from .domain import ClassExpression, Entity, EntityKind, Ontology
from .errors import InvalidReferenceError
from .factory import EntityFactory, data_factory


class ReferenceForm(str, Enum):
    """The closed set of shapes an entity reference can take."""
    ENTITY = "entity"
    EXPRESSION = "expression"
    PRODUCER = "producer"
    NAME = "name"
    IRI = "iri"
    INVALID = "invalid"


def classify_reference(ref: Any, kind: EntityKind) -> ReferenceForm:
    """Classify ``ref`` as a reference to an entity of ``kind``."""
    if isinstance(ref, Entity):
        return ReferenceForm.ENTITY if ref.kind == kind else ReferenceForm.INVALID
    if isinstance(ref, ClassExpression):
        return ReferenceForm.EXPRESSION if kind == EntityKind.CLASS else ReferenceForm.INVALID
    # URIRef is a str subclass, so test it first
    if isinstance(ref, URIRef):
        return ReferenceForm.IRI
    if isinstance(ref, str):
        return ReferenceForm.NAME if ref else ReferenceForm.INVALID
    if callable(ref):
        return ReferenceForm.PRODUCER
    return ReferenceForm.INVALID


def iri_for_name(name: str, ontology: Optional[Ontology] = None) -> URIRef:
    """Returns an IRI for the given name.

    Uses the ontology's ``iri_gen`` option when set, otherwise
    ``<ontology-iri>#<name>``.
    """
    ontology = resolve_ontology(ontology)
    iri_gen = ontology_options(ontology).iri_gen
    if iri_gen is not None:
        return URIRef(str(iri_gen(name)))
    return URIRef(f"{ontology.iri}{get_settings().iri_separator}{name}")


def resolve(ref: Any, kind: EntityKind, ontology: Optional[Ontology] = None,
            factory: EntityFactory = data_factory):
    """Resolve ``ref`` to an entity of ``kind``.

    Args:
        ref: Name, IRI, entity, class expression (classes only) or producer
        kind: Expected entity kind
        ontology: Ontology whose naming policy applies to names
        factory: Factory used to obtain canonical entities

    Returns:
        The canonical entity (or the class expression, unchanged)

    Raises:
        InvalidReferenceError: If ``ref`` cannot denote an entity of ``kind``
    """
    form = classify_reference(ref, kind)

    if form in (ReferenceForm.ENTITY, ReferenceForm.EXPRESSION):
        return ref
    if form == ReferenceForm.PRODUCER:
        return resolve(ref(), kind, ontology, factory)
    if form == ReferenceForm.IRI:
        return factory.get_entity(kind, ref)
    if form == ReferenceForm.NAME:
        return factory.get_entity(kind, iri_for_name(ref, ontology))
    raise InvalidReferenceError(kind, ref)


def ensure_class(ref: Any, ontology: Optional[Ontology] = None):
    return resolve(ref, EntityKind.CLASS, ontology)


def ensure_object_property(ref: Any, ontology: Optional[Ontology] = None) -> Entity:
    return resolve(ref, EntityKind.OBJECT_PROPERTY, ontology)


def ensure_annotation_property(ref: Any, ontology: Optional[Ontology] = None) -> Entity:
    return resolve(ref, EntityKind.ANNOTATION_PROPERTY, ontology)


def ensure_individual(ref: Any, ontology: Optional[Ontology] = None) -> Entity:
    return resolve(ref, EntityKind.INDIVIDUAL, ontology)
