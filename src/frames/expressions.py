"""
Builders for frame values: class expressions, annotations and facts.

Restrictions accept several fillers and then return one restriction per
filler as a list; frames flatten such lists, so they can be used directly
as frame values.
"""

from typing import Any, List, Optional, Union

from rdflib import Literal

from ontology.config import get_settings
from ontology.domain import Annotation, ClassExpression, Entity, ExpressionOperator, Fact
from ontology.factory import data_factory
from ontology.resolver import ensure_annotation_property, ensure_class, ensure_individual, ensure_object_property

from .domain import flatten


def _one_or_many(expressions: List[ClassExpression]) -> Union[ClassExpression, List[ClassExpression]]:
    return expressions[0] if len(expressions) == 1 else expressions


def _single_filler(classes) -> Any:
    fillers = flatten(classes)
    if len(fillers) != 1:
        raise ValueError(f"Expecting exactly one class, got {len(fillers)}")
    return ensure_class(fillers[0])


def owlsome(property, *classes):
    """Returns an existential restriction (some values from) per class."""
    prop = ensure_object_property(property)
    return _one_or_many([
        data_factory.expression(ExpressionOperator.SOME, prop, ensure_class(cls))
        for cls in flatten(classes)
    ])


def only(property, *classes):
    """Returns a universal restriction (all values from) per class."""
    prop = ensure_object_property(property)
    return _one_or_many([
        data_factory.expression(ExpressionOperator.ONLY, prop, ensure_class(cls))
        for cls in flatten(classes)
    ])


owlonly = only


def someonly(property, *classes) -> List[ClassExpression]:
    """Returns some restrictions for each class plus an only restriction over their union."""
    some = owlsome(property, *classes)
    some = some if isinstance(some, list) else [some]
    return some + [only(property, owlor(*classes))]


def _set_expression(operator: ExpressionOperator, classes):
    members = [ensure_class(cls) for cls in flatten(classes)]
    if not members:
        raise ValueError(f"owl{operator.value} must have at least one class")
    if len(set(members)) == 1:
        return members[0]
    return data_factory.expression(operator, *members)


def owland(*classes):
    """Returns an intersection of the classes."""
    return _set_expression(ExpressionOperator.AND, classes)


def owlor(*classes):
    """Returns a union of the classes."""
    return _set_expression(ExpressionOperator.OR, classes)


def owlnot(*cls) -> ClassExpression:
    """Returns the complement of a single class."""
    return data_factory.expression(ExpressionOperator.NOT, _single_filler(cls))


def _cardinality(operator: ExpressionOperator, cardinality: int, property, cls) -> ClassExpression:
    if cardinality < 0:
        raise ValueError(f"Cardinality must not be negative: {cardinality}")
    return data_factory.expression(
        operator, ensure_object_property(property), _single_filler(cls), cardinality=cardinality
    )


def atleast(cardinality: int, property, *cls) -> ClassExpression:
    """Returns a minimum cardinality restriction."""
    return _cardinality(ExpressionOperator.MIN, cardinality, property, cls)


def atmost(cardinality: int, property, *cls) -> ClassExpression:
    """Returns a maximum cardinality restriction."""
    return _cardinality(ExpressionOperator.MAX, cardinality, property, cls)


def exactly(cardinality: int, property, *cls) -> ClassExpression:
    """Returns an exact cardinality restriction."""
    return _cardinality(ExpressionOperator.EXACTLY, cardinality, property, cls)


def oneof(*individuals) -> ClassExpression:
    """Returns an enumeration of individuals."""
    members = [ensure_individual(individual) for individual in flatten(individuals)]
    if not members:
        raise ValueError("oneof must have at least one individual")
    return data_factory.expression(ExpressionOperator.ONE_OF, *members)


def owlthing() -> Entity:
    return data_factory.owl_thing()


def owlnothing() -> Entity:
    return data_factory.owl_nothing()


# Annotations

def annotation(property, literal, language: Optional[str] = None) -> Annotation:
    """Returns an annotation of ``literal`` along an annotation property."""
    if language is None and not isinstance(literal, Literal):
        language = get_settings().annotation_language
    return data_factory.get_annotation(ensure_annotation_property(property), literal, language)


def label(literal, language: Optional[str] = None) -> Annotation:
    return annotation(data_factory.rdfs_label(), literal, language)


def owlcomment(literal, language: Optional[str] = None) -> Annotation:
    return annotation(data_factory.rdfs_comment(), literal, language)


def isdefinedby(literal, language: Optional[str] = None) -> Annotation:
    return annotation(data_factory.rdfs_is_defined_by(), literal, language)


def seealso(literal, language: Optional[str] = None) -> Annotation:
    return annotation(data_factory.rdfs_see_also(), literal, language)


def versioninfo(literal, language: Optional[str] = None) -> Annotation:
    return annotation(data_factory.owl_version_info(), literal, language)


def backwardcompatiblewith(literal, language: Optional[str] = None) -> Annotation:
    return annotation(data_factory.owl_backward_compatible_with(), literal, language)


def incompatiblewith(literal, language: Optional[str] = None) -> Annotation:
    return annotation(data_factory.owl_incompatible_with(), literal, language)


# Facts

def fact(property, to) -> Fact:
    """Returns a fact asserting a relationship along ``property`` toward individual ``to``."""
    return Fact(property=property, target=to)


def fact_not(property, to) -> Fact:
    """Returns a fact asserting the lack of a relationship along ``property`` toward ``to``."""
    return Fact(property=property, target=to, negated=True)
