"""
Frame compiler: turns an entity and its frames into an ordered list of axioms.

Compilation never touches the store. Callers apply the returned list, so a
bad frame (unknown tag, unresolvable reference, unknown characteristic)
aborts before any axiom for the entity reaches the ontology.

Order of the result:
1. the declaration axiom of the entity;
2. one axiom per value, frames taken in ``FRAME_ORDER``, values in
   default-then-explicit order.
"""

import logging
from typing import Any, Callable, Collection, Dict, List, Mapping, Optional

from rdflib import Literal

from ontology.config import get_settings
from ontology.domain import Annotation, Axiom, Entity, EntityKind, Fact, Ontology
from ontology.errors import InvalidReferenceError, UnknownCharacteristicError, UnknownFrameError
from ontology.factory import EntityFactory, data_factory
from ontology.resolver import resolve

from .domain import (
    Characteristic, FRAME_ORDER, FRAME_SCHEMAS, FrameMap, FrameTag, merge_frames, parse_characteristic,
)

logger = logging.getLogger(__name__)


class FrameCompiler:
    """Compiles frames for entities of any kind against one ontology's naming policy."""

    def __init__(self, ontology: Optional[Ontology] = None, factory: EntityFactory = data_factory):
        """
        Args:
            ontology: Ontology used to resolve names; None means the current ontology
            factory: Factory building entities and axioms
        """
        self.ontology = ontology
        self.factory = factory

    def compile(self, entity: Entity, explicit_frames: Optional[Mapping[Any, Any]] = None,
                default_frames: Optional[Mapping[Any, Any]] = None,
                schema: Optional[Collection[FrameTag]] = None) -> List[Axiom]:
        """Build the ordered axiom list for ``entity``.

        Raises:
            UnknownFrameError: If a frame tag is not allowed for the entity kind
            UnknownCharacteristicError: If a characteristic is not recognised
            InvalidReferenceError: If a frame value cannot be resolved
        """
        merged = merge_frames(default_frames, explicit_frames)
        self.validate(entity, merged, schema)

        axioms = [self.factory.declaration(entity)]
        for tag in FRAME_ORDER:
            rule = _RULES[tag]
            for value in merged.get(tag, ()):
                axiom = rule(self, entity, value)
                if axiom is not None:
                    axioms.append(axiom)

        logger.debug(f"Compiled {len(axioms)} axioms for {entity}")
        return axioms

    def validate(self, entity: Entity, frames: FrameMap, schema: Optional[Collection[FrameTag]] = None) -> None:
        allowed = FRAME_SCHEMAS[entity.kind] if schema is None else schema
        for tag in frames:
            if not isinstance(tag, FrameTag) or tag not in allowed:
                raise UnknownFrameError(tag, entity.kind)

    # Resolution helpers

    def _resolve(self, value: Any, kind: EntityKind):
        return resolve(value, kind, self.ontology, self.factory)

    def _annotation(self, property: Entity, value: Any) -> Annotation:
        if isinstance(value, Annotation):
            if value.property != property:
                raise InvalidReferenceError(f"annotation along {property.iri}", value)
            return value
        if isinstance(value, (str, Literal)):
            return self.factory.get_annotation(property, value, get_settings().annotation_language)
        raise InvalidReferenceError("annotation literal", value)

    # Rules, one per frame tag

    def _name(self, entity: Entity, value: Any) -> None:
        # consumed when the entity is named
        return None

    def _subclass(self, entity: Entity, value: Any) -> Axiom:
        return self.factory.subclass_of(entity, self._resolve(value, EntityKind.CLASS))

    def _equivalent(self, entity: Entity, value: Any) -> Optional[Axiom]:
        other = self._resolve(value, EntityKind.CLASS)
        if other == entity:
            return None
        return self.factory.equivalent_classes((entity, other))

    def _disjoint(self, entity: Entity, value: Any) -> Optional[Axiom]:
        other = self._resolve(value, EntityKind.CLASS)
        if other == entity:
            return None
        return self.factory.disjoint_classes((entity, other))

    def _domain(self, entity: Entity, value: Any) -> Axiom:
        return self.factory.object_property_domain(entity, self._resolve(value, EntityKind.CLASS))

    def _range(self, entity: Entity, value: Any) -> Axiom:
        return self.factory.object_property_range(entity, self._resolve(value, EntityKind.CLASS))

    def _inverse(self, entity: Entity, value: Any) -> Axiom:
        return self.factory.inverse_object_properties(entity, self._resolve(value, EntityKind.OBJECT_PROPERTY))

    def _superproperty(self, entity: Entity, value: Any) -> Axiom:
        if entity.kind == EntityKind.ANNOTATION_PROPERTY:
            return self.factory.sub_annotation_property_of(
                entity, self._resolve(value, EntityKind.ANNOTATION_PROPERTY))
        return self.factory.sub_object_property_of(entity, self._resolve(value, EntityKind.OBJECT_PROPERTY))

    def _characteristic(self, entity: Entity, value: Any) -> Axiom:
        characteristic = parse_characteristic(value)
        if characteristic is None:
            raise UnknownCharacteristicError(value)
        return _CHARACTERISTICS[characteristic](self.factory, entity)

    def _type(self, entity: Entity, value: Any) -> Axiom:
        return self.factory.class_assertion(self._resolve(value, EntityKind.CLASS), entity)

    def _fact(self, entity: Entity, value: Any) -> Axiom:
        if not isinstance(value, Fact):
            raise InvalidReferenceError("fact", value)
        property = self._resolve(value.property, EntityKind.OBJECT_PROPERTY)
        target = self._resolve(value.target, EntityKind.INDIVIDUAL)
        if value.negated:
            return self.factory.negative_object_property_assertion(property, entity, target)
        return self.factory.object_property_assertion(property, entity, target)

    def _same(self, entity: Entity, value: Any) -> Optional[Axiom]:
        other = self._resolve(value, EntityKind.INDIVIDUAL)
        return None if other == entity else self.factory.same_individual((entity, other))

    def _different(self, entity: Entity, value: Any) -> Optional[Axiom]:
        other = self._resolve(value, EntityKind.INDIVIDUAL)
        return None if other == entity else self.factory.different_individuals((entity, other))

    def _annotate(self, entity: Entity, value: Any) -> Axiom:
        if not isinstance(value, Annotation):
            raise InvalidReferenceError("annotation", value)
        return self.factory.annotation_assertion(entity.iri, value)

    def _comment(self, entity: Entity, value: Any) -> Axiom:
        return self.factory.annotation_assertion(entity.iri, self._annotation(self.factory.rdfs_comment(), value))

    def _label(self, entity: Entity, value: Any) -> Axiom:
        return self.factory.annotation_assertion(entity.iri, self._annotation(self.factory.rdfs_label(), value))


_CHARACTERISTICS: Dict[Characteristic, Callable[[EntityFactory, Entity], Axiom]] = {
    Characteristic.TRANSITIVE: EntityFactory.transitive_object_property,
    Characteristic.FUNCTIONAL: EntityFactory.functional_object_property,
    Characteristic.INVERSE_FUNCTIONAL: EntityFactory.inverse_functional_object_property,
}

_RULES: Dict[FrameTag, Callable[[FrameCompiler, Entity, Any], Optional[Axiom]]] = {
    FrameTag.NAME: FrameCompiler._name,
    FrameTag.SUBCLASS: FrameCompiler._subclass,
    FrameTag.EQUIVALENT: FrameCompiler._equivalent,
    FrameTag.DISJOINT: FrameCompiler._disjoint,
    FrameTag.DOMAIN: FrameCompiler._domain,
    FrameTag.RANGE: FrameCompiler._range,
    FrameTag.INVERSE: FrameCompiler._inverse,
    FrameTag.SUPERPROPERTY: FrameCompiler._superproperty,
    FrameTag.CHARACTERISTIC: FrameCompiler._characteristic,
    FrameTag.TYPE: FrameCompiler._type,
    FrameTag.FACT: FrameCompiler._fact,
    FrameTag.SAME: FrameCompiler._same,
    FrameTag.DIFFERENT: FrameCompiler._different,
    FrameTag.ANNOTATION: FrameCompiler._annotate,
    FrameTag.COMMENT: FrameCompiler._comment,
    FrameTag.LABEL: FrameCompiler._label,
}


def compile_frames(entity: Entity, explicit_frames: Optional[Mapping[Any, Any]] = None,
                   default_frames: Optional[Mapping[Any, Any]] = None,
                   schema: Optional[Collection[FrameTag]] = None,
                   ontology: Optional[Ontology] = None) -> List[Axiom]:
    """Compile frames for ``entity`` without adding anything to the store."""
    return FrameCompiler(ontology).compile(entity, explicit_frames, default_frames, schema)
