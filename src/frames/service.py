"""
High-level authoring service: entity builders and group scopes.

This is the public interface of the frames module. Every builder resolves
the entity, merges any active default frames, compiles the frames into
axioms, adds them to the ontology and, when a collection window is active,
records the entity:

    owlclass("Pizza", subclass=food, label="Pizza")

    with as_subclasses(pizza_topping, disjoint=True, cover=True):
        owlclass("MeatTopping")
        owlclass("VegetableTopping")

    with as_inverse():
        object_property("hasTopping")
        object_property("isToppingOf")
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from rdflib import URIRef

from ontology.changes import add_axiom, add_axioms
from ontology.context import resolve_ontology
from ontology.domain import Axiom, Entity, EntityKind, Ontology
from ontology.errors import InverseArityError
from ontology.factory import data_factory
from ontology.resolver import ensure_class, ensure_object_property, resolve

from .collector import current_default_frames, record, with_collection, with_default_frames
from .compiler import FrameCompiler
from .domain import FrameTag, flatten, merge_frames
from .expressions import owlor

logger = logging.getLogger(__name__)


# (prefix, suffix) applied to the names of classes declared in scope
_name_affixes: ContextVar[Tuple[str, str]] = ContextVar("name_affixes", default=("", ""))


def _build(kind: EntityKind, name: Any, frames: Optional[Mapping[Any, Any]],
           ontology: Optional[Ontology]) -> Entity:
    ontology = resolve_ontology(ontology)
    entity = resolve(name, kind, ontology)
    axioms = FrameCompiler(ontology).compile(entity, frames, current_default_frames())
    add_axioms(axioms, ontology)
    record(entity)
    logger.debug(f"Declared {entity} with {len(axioms)} axioms in {ontology.iri}")
    return entity


def owlclass(name: Any, frames: Optional[Mapping[Any, Any]] = None, /,
             ontology: Optional[Ontology] = None, **more_frames) -> Entity:
    """Creates a class in the current ontology.

    Accepts the frames subclass, equivalent, disjoint, annotation, comment,
    label and name. Each frame can hold an item, a list of items or any
    nesting of the two; None values are ignored. The ``name`` frame, if
    present, overrides ``name``.

    Returns:
        The class entity
    """
    frames = merge_frames(frames, more_frames)
    names = frames.get(FrameTag.NAME, ())
    if names:
        name = names[0]
    if isinstance(name, str) and not isinstance(name, URIRef):
        prefix, suffix = _name_affixes.get()
        name = f"{prefix}{name}{suffix}"
    return _build(EntityKind.CLASS, name, frames, ontology)


def object_property(name: Any, frames: Optional[Mapping[Any, Any]] = None, /,
                    ontology: Optional[Ontology] = None, **more_frames) -> Entity:
    """Creates an object property.

    Frames: domain, range, inverse, superproperty, characteristic,
    annotation, comment, label.
    """
    return _build(EntityKind.OBJECT_PROPERTY, name, merge_frames(frames, more_frames), ontology)


def annotation_property(name: Any, frames: Optional[Mapping[Any, Any]] = None, /,
                        ontology: Optional[Ontology] = None, **more_frames) -> Entity:
    """Creates an annotation property. Frames: superproperty, annotation, comment, label."""
    return _build(EntityKind.ANNOTATION_PROPERTY, name, merge_frames(frames, more_frames), ontology)


def individual(name: Any, frames: Optional[Mapping[Any, Any]] = None, /,
               ontology: Optional[Ontology] = None, **more_frames) -> Entity:
    """Creates an individual. Frames: type, fact, same, different, annotation, comment, label."""
    return _build(EntityKind.INDIVIDUAL, name, merge_frames(frames, more_frames), ontology)


_BUILDERS: Dict[EntityKind, Callable[..., Entity]] = {
    EntityKind.CLASS: owlclass,
    EntityKind.OBJECT_PROPERTY: object_property,
    EntityKind.ANNOTATION_PROPERTY: annotation_property,
    EntityKind.INDIVIDUAL: individual,
}


def refine(entity: Entity, frames: Optional[Mapping[Any, Any]] = None, /,
           ontology: Optional[Ontology] = None, **more_frames) -> Entity:
    """Add more frames to an existing entity.

    The entity is declared in the target ontology (the current one unless
    given) if it is not already, and the new frames are added next to the
    axioms of the original declaration; nothing is removed. This also
    serves to make the same entity appear in a second ontology with extra
    axioms.
    """
    if not isinstance(entity, Entity):
        raise TypeError(f"refine expects an entity, got {entity!r}")
    return _BUILDERS[entity.kind](entity, frames, ontology=ontology, **more_frames)


def declare_classes(*names, ontology: Optional[Ontology] = None) -> List[Entity]:
    """Declares all the classes given in names, honouring default frames and collection."""
    return [owlclass(name, ontology=ontology) for name in flatten(names)]


def define_classes(*classes, ontology: Optional[Ontology] = None) -> List[Entity]:
    """Defines many classes at once; each item is a name or a ``(name, frames)`` pair."""
    defined = []
    for item in classes:
        if isinstance(item, tuple):
            name, frames = item
            defined.append(owlclass(name, frames, ontology=ontology))
        else:
            defined.append(owlclass(item, ontology=ontology))
    return defined


# Frames added to existing entities

def _add_frame(kind: EntityKind, entity: Any, tag: FrameTag, values: Tuple[Any, ...],
               ontology: Optional[Ontology]) -> List[Axiom]:
    ontology = resolve_ontology(ontology)
    entity = resolve(entity, kind, ontology)
    # skip the declaration at the head of the compiled list
    axioms = FrameCompiler(ontology).compile(entity, {tag: values})[1:]
    return add_axioms(axioms, ontology)


def _kind_of(entity: Any) -> EntityKind:
    return entity.kind if isinstance(entity, Entity) else EntityKind.CLASS


def add_subclass(cls: Any, *superclasses, ontology: Optional[Ontology] = None) -> List[Axiom]:
    return _add_frame(EntityKind.CLASS, cls, FrameTag.SUBCLASS, superclasses, ontology)


def add_equivalent(cls: Any, *classes, ontology: Optional[Ontology] = None) -> List[Axiom]:
    return _add_frame(EntityKind.CLASS, cls, FrameTag.EQUIVALENT, classes, ontology)


def add_disjoint(cls: Any, *classes, ontology: Optional[Ontology] = None) -> List[Axiom]:
    return _add_frame(EntityKind.CLASS, cls, FrameTag.DISJOINT, classes, ontology)


def add_annotation(entity: Any, *annotations, ontology: Optional[Ontology] = None) -> List[Axiom]:
    """Adds annotations to an entity (names are taken to be classes)."""
    return _add_frame(_kind_of(entity), entity, FrameTag.ANNOTATION, annotations, ontology)


def add_domain(property: Any, *classes, ontology: Optional[Ontology] = None) -> List[Axiom]:
    return _add_frame(EntityKind.OBJECT_PROPERTY, property, FrameTag.DOMAIN, classes, ontology)


def add_range(property: Any, *classes, ontology: Optional[Ontology] = None) -> List[Axiom]:
    return _add_frame(EntityKind.OBJECT_PROPERTY, property, FrameTag.RANGE, classes, ontology)


def add_inverse(property: Any, *properties, ontology: Optional[Ontology] = None) -> List[Axiom]:
    return _add_frame(EntityKind.OBJECT_PROPERTY, property, FrameTag.INVERSE, properties, ontology)


def add_superproperty(property: Any, *properties, ontology: Optional[Ontology] = None) -> List[Axiom]:
    kind = property.kind if isinstance(property, Entity) else EntityKind.OBJECT_PROPERTY
    return _add_frame(kind, property, FrameTag.SUPERPROPERTY, properties, ontology)


def add_characteristics(property: Any, *characteristics, ontology: Optional[Ontology] = None) -> List[Axiom]:
    return _add_frame(EntityKind.OBJECT_PROPERTY, property, FrameTag.CHARACTERISTIC, characteristics, ontology)


def add_type(individual: Any, *classes, ontology: Optional[Ontology] = None) -> List[Axiom]:
    return _add_frame(EntityKind.INDIVIDUAL, individual, FrameTag.TYPE, classes, ontology)


def add_fact(individual: Any, *facts, ontology: Optional[Ontology] = None) -> List[Axiom]:
    return _add_frame(EntityKind.INDIVIDUAL, individual, FrameTag.FACT, facts, ontology)


def add_same(individual: Any, *individuals, ontology: Optional[Ontology] = None) -> List[Axiom]:
    return _add_frame(EntityKind.INDIVIDUAL, individual, FrameTag.SAME, individuals, ontology)


def add_different(individual: Any, *individuals, ontology: Optional[Ontology] = None) -> List[Axiom]:
    return _add_frame(EntityKind.INDIVIDUAL, individual, FrameTag.DIFFERENT, individuals, ontology)


# Group axioms

def disjoint_classes(*classes, ontology: Optional[Ontology] = None) -> Optional[Axiom]:
    """Makes all the classes mutually disjoint with a single axiom.

    Fewer than two distinct classes is a no-op and returns None.
    """
    ontology = resolve_ontology(ontology)
    members = list(dict.fromkeys(ensure_class(cls, ontology) for cls in flatten(classes)))
    if len(members) < 2:
        return None
    return add_axiom(data_factory.disjoint_classes(members), ontology)


def add_disjoint_union(cls: Any, *subclasses, ontology: Optional[Ontology] = None) -> Axiom:
    """Asserts that ``cls`` is the disjoint union of ``subclasses``."""
    ontology = resolve_ontology(ontology)
    owner = ensure_class(cls, ontology)
    members = [ensure_class(sub, ontology) for sub in flatten(subclasses)]
    return add_axiom(data_factory.disjoint_union(owner, members), ontology)


# Scopes

@contextmanager
def as_disjoint(ontology: Optional[Ontology] = None) -> Iterator[List[Entity]]:
    """All classes declared in the block are made mutually disjoint.

    With one class or none nothing is added; the block still shields its
    classes from any enclosing ``as_disjoint``.
    """
    ontology = resolve_ontology(ontology)
    with with_collection() as collected:
        yield collected
    disjoint_classes(*collected, ontology=ontology)


@contextmanager
def as_inverse(ontology: Optional[Ontology] = None) -> Iterator[List[Entity]]:
    """The two properties declared in the block are declared as inverses.

    Raises:
        InverseArityError: If the block did not declare exactly two properties
    """
    ontology = resolve_ontology(ontology)
    with with_collection() as collected:
        yield collected
    if len(collected) != 2:
        raise InverseArityError(len(collected))
    first, second = (ensure_object_property(property, ontology) for property in collected)
    add_axiom(data_factory.inverse_object_properties(first, second), ontology)


@contextmanager
def as_subclasses(superclass: Any, disjoint: bool = False, cover: bool = False,
                  ontology: Optional[Ontology] = None) -> Iterator[List[Entity]]:
    """All classes declared in the block are given ``superclass`` as a superclass.

    Args:
        superclass: The common superclass
        disjoint: Also make the declared classes mutually disjoint
        cover: Also make the declared classes cover the superclass
        ontology: Target ontology, defaults to the current one
    """
    ontology = resolve_ontology(ontology)
    superclass = ensure_class(superclass, ontology)
    with with_collection() as collected:
        with with_default_frames({FrameTag.SUBCLASS: superclass}):
            yield collected

    if disjoint:
        disjoint_classes(*collected, ontology=ontology)
    if cover and collected:
        add_axiom(data_factory.equivalent_classes((superclass, owlor(*collected))), ontology)


def as_disjoint_subclasses(superclass: Any, ontology: Optional[Ontology] = None):
    """Shorthand for ``as_subclasses(superclass, disjoint=True)``."""
    return as_subclasses(superclass, disjoint=True, ontology=ontology)


@contextmanager
def with_prefix(prefix: str) -> Iterator[None]:
    """Adds a prefix to the names of all classes declared with ``owlclass`` in the block."""
    outer_prefix, outer_suffix = _name_affixes.get()
    token = _name_affixes.set((outer_prefix + prefix, outer_suffix))
    try:
        yield
    finally:
        _name_affixes.reset(token)


@contextmanager
def with_suffix(suffix: str) -> Iterator[None]:
    """Adds a suffix to the names of all classes declared with ``owlclass`` in the block."""
    outer_prefix, outer_suffix = _name_affixes.get()
    token = _name_affixes.set((outer_prefix, suffix + outer_suffix))
    try:
        yield
    finally:
        _name_affixes.reset(token)
