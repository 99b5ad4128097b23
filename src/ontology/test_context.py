"""
Unit test for the ontology context: current ontology, namespaces and options.

HOW TO RUN:
From the project root, run:
    pytest src/ontology/test_context.py
"""

import pytest
from rdflib import Literal, RDFS, URIRef

from .context import (
    defontology, get_current_namespace, get_current_ontology, get_iri, get_prefix,
    in_namespace, ontology, ontology_options, ontology_to_namespace, owlimport, remove_ontology,
    with_ontology,
)
from .errors import CurrentOntologyUnsetError


def test_current_ontology_unset(store):
    """Without a binding or registration there is no current ontology."""
    with pytest.raises(CurrentOntologyUnsetError):
        get_current_ontology()


def test_with_ontology_nests_and_restores(store):
    """Scopes install and restore values in stack order, also on error."""
    print("Testing with_ontology nesting...")

    outer = ontology("http://example.org/outer")
    inner = ontology("http://example.org/inner")

    with with_ontology(outer):
        assert get_current_ontology() is outer
        with with_ontology(inner):
            assert get_current_ontology() is inner
        assert get_current_ontology() is outer

        with pytest.raises(RuntimeError):
            with with_ontology(inner):
                raise RuntimeError("boom")
        assert get_current_ontology() is outer

    with pytest.raises(CurrentOntologyUnsetError):
        get_current_ontology()

    print("✓ with_ontology nesting working correctly")


def test_namespace_registry(store):
    """defontology registers the ontology for the current namespace only."""
    with in_namespace("pizza"):
        assert get_current_namespace() == "pizza"
        pizza = defontology("http://example.org/pizza")
        assert get_current_ontology() is pizza

    with in_namespace("wine"):
        with pytest.raises(CurrentOntologyUnsetError):
            get_current_ontology()
        assert get_current_ontology("pizza") is pizza

    other = ontology("http://example.org/other")
    ontology_to_namespace(other, "wine")
    assert get_current_ontology("wine") is other


def test_binding_takes_precedence_over_namespace(store):
    registered = defontology("http://example.org/registered")
    bound = ontology("http://example.org/bound")

    with with_ontology(bound):
        assert get_current_ontology() is bound
    assert get_current_ontology() is registered


def test_options_discarded_with_ontology(store):
    """Removing an ontology drops its options record and registration."""
    print("Testing options teardown...")

    def naming(name):
        return URIRef(f"urn:test:{name}")

    created = defontology("http://example.org/opts", iri_gen=naming)
    options = ontology_options(created)
    assert options.iri_gen is naming

    remove_ontology(created)
    with pytest.raises(CurrentOntologyUnsetError):
        get_current_ontology()

    recreated = ontology("http://example.org/opts")
    assert ontology_options(recreated).iri_gen is None
    assert ontology_options(recreated) is not options

    print("✓ Options teardown working correctly")


def test_replacing_ontology_resets_options(store):
    first = ontology("http://example.org/same", iri_gen=lambda name: URIRef(f"urn:x:{name}"))
    second = ontology("http://example.org/same")

    assert store.get_ontology("http://example.org/same") is second
    assert ontology_options(second).iri_gen is None
    assert not store.contains(first)


def test_ontology_annotations_and_prefix(store):
    created = ontology(
        "http://example.org/annotated", prefix="ann:", comment="An ontology", versioninfo="1.0"
    )

    assert get_iri(created) == URIRef("http://example.org/annotated")
    assert get_prefix(created) == "ann:"
    values = {annotation.property.iri: annotation.value for annotation in created.annotations}
    assert values[RDFS.comment] == Literal("An ontology", lang="en")
    assert len(created.annotations) == 2


def test_invalid_ontology_config(store):
    """An empty IRI is rejected by the configuration model."""
    with pytest.raises(ValueError):
        ontology("")


def test_owlimport(onto):
    imported = ontology("http://example.org/imported")

    owlimport(imported)
    owlimport(imported)

    assert onto.imports == [imported.iri]
