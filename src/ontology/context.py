"""
Ontology context: the process-wide store, the namespace registry and the
current ontology.

The current ontology and the current namespace are context variables, so a
``with_ontology`` block installs a value for its dynamic extent and restores
the previous one on exit, including on error. Threads and asyncio tasks
each see their own stack.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Callable, Dict, Iterator, List, Optional, Union

from rdflib import URIRef

from .config import get_settings
from .domain import Annotation, Ontology, OntologyConfig, OntologyOptions
from .errors import CurrentOntologyUnsetError
from .factory import data_factory
from .store import OntologyStore

logger = logging.getLogger(__name__)


DEFAULT_NAMESPACE = "user"

_current_ontology: ContextVar[Optional[Ontology]] = ContextVar("current_ontology", default=None)
_current_namespace: ContextVar[str] = ContextVar("current_namespace", default=DEFAULT_NAMESPACE)

# namespace -> ontology
_ontology_for_namespace: Dict[str, Ontology] = {}

# ontology -> options; entries are dropped when the store removes the ontology
_ontology_options: Dict[Ontology, OntologyOptions] = {}


def _discard_ontology_state(ontology: Ontology) -> None:
    """Remove hook: forget the options and namespace registrations of ``ontology``."""
    _ontology_options.pop(ontology, None)
    for namespace, registered in list(_ontology_for_namespace.items()):
        if registered is ontology:
            del _ontology_for_namespace[namespace]


_store = OntologyStore()
_store.add_remove_hook(_discard_ontology_state)


def get_store() -> OntologyStore:
    """Return the process-wide ontology store."""
    return _store


def set_default_store(store: OntologyStore) -> OntologyStore:
    """Replace the process-wide store, returning the previous one.

    Options and namespace registrations belong to the previous store's
    ontologies and are cleared.
    """
    global _store
    previous = _store
    store.add_remove_hook(_discard_ontology_state)
    _ontology_options.clear()
    _ontology_for_namespace.clear()
    _store = store
    return previous


# Namespaces and the current ontology

def get_current_namespace() -> str:
    return _current_namespace.get()


@contextmanager
def in_namespace(namespace: str) -> Iterator[str]:
    """Use ``namespace`` as the logical namespace within the block."""
    token = _current_namespace.set(namespace)
    try:
        yield namespace
    finally:
        _current_namespace.reset(token)


def ontology_to_namespace(ontology: Ontology, namespace: Optional[str] = None) -> None:
    """Register ``ontology`` as the default ontology of ``namespace``."""
    namespace = namespace or get_current_namespace()
    _ontology_for_namespace[namespace] = ontology
    logger.debug(f"Registered ontology {ontology.iri} for namespace {namespace}")


def get_namespace_ontology(namespace: Optional[str] = None) -> Optional[Ontology]:
    return _ontology_for_namespace.get(namespace or get_current_namespace())


@contextmanager
def with_ontology(ontology: Ontology) -> Iterator[Ontology]:
    """Set the current ontology for all operations inside the block."""
    token = _current_ontology.set(ontology)
    try:
        yield ontology
    finally:
        _current_ontology.reset(token)


def get_current_ontology(namespace: Optional[str] = None) -> Ontology:
    """Gets the current ontology.

    Returns the ontology bound by ``with_ontology`` or, failing that, the one
    registered for the namespace.

    Raises:
        CurrentOntologyUnsetError: If neither is available
    """
    bound = _current_ontology.get()
    if bound is not None:
        return bound

    registered = get_namespace_ontology(namespace)
    if registered is not None:
        return registered

    raise CurrentOntologyUnsetError(
        f"Current ontology has not been set for namespace {namespace or get_current_namespace()}"
    )


def resolve_ontology(ontology: Optional[Ontology] = None) -> Ontology:
    """Return ``ontology`` if given, else the current ontology."""
    return ontology if ontology is not None else get_current_ontology()


# Ontology options

def ontology_options(ontology: Optional[Ontology] = None) -> OntologyOptions:
    """Return the options of ``ontology`` or of the current ontology, creating them if needed."""
    ontology = resolve_ontology(ontology)
    options = _ontology_options.get(ontology)
    if options is None:
        options = OntologyOptions()
        _ontology_options[ontology] = options
    return options


# Lifecycle

def ontology(iri: str,
             prefix: Optional[str] = None,
             iri_gen: Optional[Callable[[str], URIRef]] = None,
             comment: Optional[str] = None,
             versioninfo: Optional[str] = None,
             annotation: Optional[List[Annotation]] = None) -> Ontology:
    """Create a new ontology, replacing any existing ontology with the same IRI.

    Args:
        iri: IRI of the new ontology
        prefix: Prefix used when the ontology is rendered
        iri_gen: Function from entity name to IRI, used instead of ``<iri>#<name>``
        comment: Text of an rdfs:comment ontology annotation
        versioninfo: Text of an owl:versionInfo ontology annotation
        annotation: Further ontology annotations

    Returns:
        The new ontology
    """
    config = OntologyConfig(
        iri=iri, prefix=prefix, iri_gen=iri_gen, comment=comment,
        versioninfo=versioninfo, annotation=annotation or [],
    )

    new_ontology = _store.create_ontology(config.iri, prefix=config.prefix)

    if config.iri_gen is not None:
        ontology_options(new_ontology).iri_gen = config.iri_gen

    language = get_settings().annotation_language
    annotations = list(config.annotation)
    if config.comment is not None:
        annotations.append(data_factory.get_annotation(data_factory.rdfs_comment(), config.comment, language))
    if config.versioninfo is not None:
        annotations.append(data_factory.get_annotation(data_factory.owl_version_info(), config.versioninfo, language))
    for item in annotations:
        _store.add_ontology_annotation(new_ontology, item)

    return new_ontology


def defontology(iri: str, namespace: Optional[str] = None, **options) -> Ontology:
    """Create an ontology and make it the default ontology of the namespace."""
    new_ontology = ontology(iri, **options)
    ontology_to_namespace(new_ontology, namespace)
    return new_ontology


def remove_ontology(ontology: Union[Ontology, str]) -> bool:
    """Remove an ontology from the store, discarding its options."""
    return _store.remove_ontology(ontology)


def get_iri(ontology: Optional[Ontology] = None) -> URIRef:
    """Gets the IRI for the given ontology, or the current ontology if none is given."""
    return resolve_ontology(ontology).iri


def get_prefix(ontology: Optional[Ontology] = None) -> Optional[str]:
    return resolve_ontology(ontology).prefix


def owlimport(imported: Ontology, into: Optional[Ontology] = None) -> None:
    """Adds ``imported`` as an import of ``into`` (or of the current ontology)."""
    _store.add_import(resolve_ontology(into), imported)
