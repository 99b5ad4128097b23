"""
Errors raised by the ontology and frames modules.

All of these are configuration or logic errors raised synchronously at the
point of failure; none of them is retried.
"""

from typing import Any, List, Optional


class OntologyError(Exception):
    """Base class for all authoring errors."""


class InvalidReferenceError(OntologyError, ValueError):
    """A reference could not be resolved to an entity of the expected kind."""

    def __init__(self, expected: Any, value: Any):
        self.expected = expected
        self.value = value
        expected_name = getattr(expected, "value", expected)
        super().__init__(f"Expecting {expected_name}. Got: {value!r}")


class UnknownFrameError(OntologyError, ValueError):
    """A frame tag is not allowed for the entity kind being compiled."""

    def __init__(self, tag: Any, kind: Optional[Any] = None):
        self.tag = tag
        self.kind = kind
        if kind is None:
            message = f"Unknown frame: {tag}"
        else:
            message = f"Unknown frame for {getattr(kind, 'value', kind)}: {tag}"
        super().__init__(message)


class UnknownCharacteristicError(OntologyError, ValueError):
    """A property characteristic is not one of the supported keywords."""

    def __init__(self, characteristic: Any):
        self.characteristic = characteristic
        super().__init__(f"Characteristic is not recognised: {characteristic!r}")


class InverseArityError(OntologyError):
    """An inverse scope did not collect exactly two properties."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Can only have two properties in as_inverse, got {count}")


class StoreChangeRejectedError(OntologyError):
    """The ontology store refused a change; the store is left unchanged."""


class CurrentOntologyUnsetError(OntologyError):
    """No ontology is bound and none is registered for the current namespace."""


class ProbeCleanupError(OntologyError):
    """One or more probe values could not be removed after a probe scope."""

    def __init__(self, errors: List[Exception]):
        self.errors = errors
        details = "; ".join(str(error) for error in errors)
        super().__init__(f"{len(errors)} probe cleanup failure(s): {details}")
