"""
Shared pytest fixtures.

Each test gets a fresh ontology store installed as the process-wide store,
and (through ``onto``) a test ontology bound as the current ontology.
"""

import pytest

from ontology.context import ontology, set_default_store, with_ontology
from ontology.store import OntologyStore


TEST_IRI = "http://example.org/test"


@pytest.fixture
def store():
    """A fresh store, replaced by the previous one after the test."""
    fresh = OntologyStore()
    previous = set_default_store(fresh)
    yield fresh
    set_default_store(previous)


@pytest.fixture
def onto(store):
    """A test ontology bound as the current ontology."""
    created = ontology(TEST_IRI, prefix="test:")
    with with_ontology(created):
        yield created
