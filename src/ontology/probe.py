"""
Probe scopes: temporary entities or axioms that are always removed again.

Mostly useful for tests. Axioms can be added, the ontology inspected, and
the additions removed, leaving the ontology effectively unchanged:

    with with_probe_entities([
        ("probe", lambda bound: owlclass("Probe", subclass=animal)),
        ("sub", lambda bound: owlclass("SubProbe", subclass=bound["probe"])),
    ]) as probes:
        assert is_superclass(probes["sub"], animal)
"""

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .changes import remove_axiom, remove_entity
from .context import resolve_ontology
from .domain import Ontology
from .errors import ProbeCleanupError

logger = logging.getLogger(__name__)


Binding = Tuple[str, Callable[[Dict[str, Any]], Any]]


@contextmanager
def _probe_scope(bindings: Sequence[Binding], remover: Callable, ontology: Optional[Ontology]) -> Iterator[Dict[str, Any]]:
    ontology = resolve_ontology(ontology)
    bound: Dict[str, Any] = {}
    failed = False
    try:
        for name, construct in bindings:
            bound[name] = construct(dict(bound))
        yield bound
    except BaseException:
        failed = True
        raise
    finally:
        errors: List[Exception] = []
        for name in reversed(list(bound)):
            try:
                remover(bound[name], ontology)
            except Exception as e:
                logger.error(f"Could not remove probe {name}: {e}")
                errors.append(e)
        if errors and not failed:
            raise ProbeCleanupError(errors)


def with_probe_entities(bindings: Sequence[Binding], ontology: Optional[Ontology] = None):
    """Bind probe entities in order, then remove each of them on exit.

    Args:
        bindings: ``(name, construct)`` pairs; ``construct`` receives the
            probes bound so far and returns an entity
        ontology: Ontology to clean up, defaults to the current ontology

    Yields:
        Mapping from binding name to entity
    """
    return _probe_scope(bindings, remove_entity, ontology)


def with_probe_axioms(bindings: Sequence[Binding], ontology: Optional[Ontology] = None):
    """Like ``with_probe_entities`` but each construct returns an axiom, removed with ``remove_axiom``."""
    return _probe_scope(bindings, remove_axiom, ontology)
