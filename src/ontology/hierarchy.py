"""
Hierarchy queries over declared structure.

No reasoning is involved: closures are computed from the asserted
subclass (or subproperty) axioms only. Cyclic assertions are tolerated; an
entity on a cycle is its own ancestor and descendant.

Every query accepts the same references as the builders. Names, IRIs and
producers are resolved as classes; pass an entity to query a property.
"""

from typing import Any, Callable, Optional, Set

from .context import get_store, resolve_ontology
from .domain import Entity, EntityKind, Ontology
from .resolver import resolve


def _reference(ref: Any, ontology: Ontology, kind: EntityKind = EntityKind.CLASS):
    """Resolve a reference, leaving entities and class expressions untouched."""
    return resolve(ref, ref.kind if isinstance(ref, Entity) else kind, ontology)


def _pair(first: Any, second: Any, ontology: Ontology):
    # the second reference takes the kind of the first
    first = _reference(first, ontology)
    kind = first.kind if isinstance(first, Entity) else EntityKind.CLASS
    return first, resolve(second, kind, ontology)


def direct_supers(entity, ontology: Optional[Ontology] = None) -> Set:
    """Direct superclasses of a class, or direct superproperties of an object property.

    Class expressions and other kinds of entity have no direct relation.
    """
    ontology = resolve_ontology(ontology)
    entity = _reference(entity, ontology)
    if not isinstance(entity, Entity):
        return set()
    if entity.kind == EntityKind.CLASS:
        return get_store().super_classes(ontology, entity)
    if entity.kind == EntityKind.OBJECT_PROPERTY:
        return get_store().super_properties(ontology, entity)
    return set()


def direct_subs(entity, ontology: Optional[Ontology] = None) -> Set:
    """Direct subclasses of a class, or direct subproperties of an object property."""
    ontology = resolve_ontology(ontology)
    entity = _reference(entity, ontology)
    if not isinstance(entity, Entity):
        return set()
    if entity.kind == EntityKind.CLASS:
        return get_store().sub_classes(ontology, entity)
    if entity.kind == EntityKind.OBJECT_PROPERTY:
        return get_store().sub_properties(ontology, entity)
    return set()


def _closure(entity, ontology: Ontology, step: Callable) -> Set:
    result = set()
    visited = set()
    frontier = list(step(entity, ontology))
    while frontier:
        member = frontier.pop()
        if member in visited:
            continue
        visited.add(member)
        result.add(member)
        frontier.extend(step(member, ontology))
    return result


def ancestors(entity, ontology: Optional[Ontology] = None) -> Set:
    """All superclasses (or superproperties) of ``entity``, direct or indirect."""
    return _closure(entity, resolve_ontology(ontology), direct_supers)


def descendants(entity, ontology: Optional[Ontology] = None) -> Set:
    """All subclasses (or subproperties) of ``entity``, direct or indirect."""
    return _closure(entity, resolve_ontology(ontology), direct_subs)


def is_ancestor(entity, candidate, ontology: Optional[Ontology] = None) -> bool:
    """True if ``candidate`` is a superclass of ``entity``, directly or indirectly."""
    ontology = resolve_ontology(ontology)
    entity, candidate = _pair(entity, candidate, ontology)
    return candidate in ancestors(entity, ontology)


def is_descendant(entity, candidate, ontology: Optional[Ontology] = None) -> bool:
    """True if ``candidate`` is a subclass of ``entity``, directly or indirectly."""
    ontology = resolve_ontology(ontology)
    entity, candidate = _pair(entity, candidate, ontology)
    return candidate in descendants(entity, ontology)


def is_disjoint(first, second, ontology: Optional[Ontology] = None) -> bool:
    """True iff the classes are asserted to be disjoint."""
    ontology = resolve_ontology(ontology)
    first, second = _pair(first, second, ontology)
    return second in get_store().disjoint_classes(ontology, first)


def is_equivalent(first, second, ontology: Optional[Ontology] = None) -> bool:
    """True iff the classes are asserted to be equivalent."""
    ontology = resolve_ontology(ontology)
    first, second = _pair(first, second, ontology)
    return second in get_store().equivalent_classes(ontology, first)


# Class-centred names
direct_superclasses = direct_supers
direct_subclasses = direct_subs
superclasses = ancestors
subclasses = descendants
is_superclass = is_ancestor
is_subclass = is_descendant
