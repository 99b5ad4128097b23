"""
Atomic changes against the ontology store.

Each function works on the given ontology or, if none is given, on the
current ontology.
"""

import logging
from typing import Iterable, List, Optional

from .context import get_store, resolve_ontology
from .domain import Axiom, Entity, Ontology

logger = logging.getLogger(__name__)


def add_axiom(axiom: Axiom, ontology: Optional[Ontology] = None) -> Axiom:
    """Adds an axiom to the given ontology, or the current one. Returns the axiom."""
    get_store().apply_add(resolve_ontology(ontology), axiom)
    return axiom


def add_axioms(axioms: Iterable[Axiom], ontology: Optional[Ontology] = None) -> List[Axiom]:
    """Adds axioms in order. Axioms added before a failure stay in the ontology."""
    ontology = resolve_ontology(ontology)
    return [add_axiom(axiom, ontology) for axiom in axioms]


def remove_axiom(axiom: Axiom, ontology: Optional[Ontology] = None) -> Axiom:
    """Removes an axiom from the given ontology, or the current one. Returns the axiom."""
    get_store().apply_remove(resolve_ontology(ontology), axiom)
    return axiom


def remove_entity(entity: Entity, ontology: Optional[Ontology] = None) -> List[Axiom]:
    """Remove every axiom that mentions ``entity``, including its declaration.

    For example ``owlclass("A", subclass="B", equivalent="C")`` adds three
    axioms; removing ``A`` removes all three, plus any other axiom that
    refers to ``A`` as subject or object.

    Returns:
        The removed axioms
    """
    ontology = resolve_ontology(ontology)
    store = get_store()

    # Collect in one pass over a snapshot before changing anything
    doomed = store.referencing_axioms(ontology, entity)
    for axiom in doomed:
        store.apply_remove(ontology, axiom)

    logger.debug(f"Removed {len(doomed)} axioms mentioning {entity.iri} from {ontology.iri}")
    return doomed
