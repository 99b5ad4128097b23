"""
Frame domain models.

A frame is a tag naming one facet of an entity (its superclasses, its
domain, its labels, ...) together with one value, a list of values or
nested lists of values. Frames are normalized at the boundary into a flat,
None-free tuple per tag so that nothing downstream deals with nesting.
"""

from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Union

from ontology.domain import EntityKind


class FrameTag(str, Enum):
    """Recognized frame tags."""
    NAME = "name"
    SUBCLASS = "subclass"
    EQUIVALENT = "equivalent"
    DISJOINT = "disjoint"
    DOMAIN = "domain"
    RANGE = "range"
    INVERSE = "inverse"
    SUPERPROPERTY = "superproperty"
    CHARACTERISTIC = "characteristic"
    TYPE = "type"
    FACT = "fact"
    SAME = "same"
    DIFFERENT = "different"
    ANNOTATION = "annotation"
    COMMENT = "comment"
    LABEL = "label"


# Alternative spellings accepted for tags
TAG_ALIASES = {
    "inverseof": FrameTag.INVERSE,
    "inverse_of": FrameTag.INVERSE,
    "subpropertyof": FrameTag.SUPERPROPERTY,
    "subproperty": FrameTag.SUPERPROPERTY,
    "sub_property_of": FrameTag.SUPERPROPERTY,
    "characteristics": FrameTag.CHARACTERISTIC,
}


# Fixed order in which frames are compiled, independent of input order
FRAME_ORDER: Tuple[FrameTag, ...] = (
    FrameTag.NAME,
    FrameTag.SUBCLASS,
    FrameTag.EQUIVALENT,
    FrameTag.DISJOINT,
    FrameTag.DOMAIN,
    FrameTag.RANGE,
    FrameTag.INVERSE,
    FrameTag.SUPERPROPERTY,
    FrameTag.CHARACTERISTIC,
    FrameTag.TYPE,
    FrameTag.FACT,
    FrameTag.SAME,
    FrameTag.DIFFERENT,
    FrameTag.ANNOTATION,
    FrameTag.COMMENT,
    FrameTag.LABEL,
)

_ANNOTATION_FRAMES = {FrameTag.ANNOTATION, FrameTag.COMMENT, FrameTag.LABEL}

# Allowed frames per entity kind
FRAME_SCHEMAS: Dict[EntityKind, FrozenSet[FrameTag]] = {
    EntityKind.CLASS: frozenset({
        FrameTag.NAME, FrameTag.SUBCLASS, FrameTag.EQUIVALENT, FrameTag.DISJOINT,
    } | _ANNOTATION_FRAMES),
    EntityKind.OBJECT_PROPERTY: frozenset({
        FrameTag.DOMAIN, FrameTag.RANGE, FrameTag.INVERSE, FrameTag.SUPERPROPERTY,
        FrameTag.CHARACTERISTIC,
    } | _ANNOTATION_FRAMES),
    EntityKind.ANNOTATION_PROPERTY: frozenset({FrameTag.SUPERPROPERTY} | _ANNOTATION_FRAMES),
    EntityKind.INDIVIDUAL: frozenset({
        FrameTag.TYPE, FrameTag.FACT, FrameTag.SAME, FrameTag.DIFFERENT,
    } | _ANNOTATION_FRAMES),
}


class Characteristic(str, Enum):
    """Object property characteristics."""
    TRANSITIVE = "transitive"
    FUNCTIONAL = "functional"
    INVERSE_FUNCTIONAL = "inversefunctional"


def parse_characteristic(value: Any) -> Optional[Characteristic]:
    """Return the characteristic named by ``value`` or None if it is not one."""
    if isinstance(value, Characteristic):
        return value
    if not isinstance(value, str):
        return None
    key = value.lstrip(":").lower().replace("_", "").replace("-", "")
    try:
        return Characteristic(key)
    except ValueError:
        return None


def parse_tag(tag: Any) -> Optional[FrameTag]:
    """Return the frame tag for ``tag`` (a FrameTag, ``"subclass"`` or ``":subclass"``)."""
    if isinstance(tag, FrameTag):
        return tag
    if not isinstance(tag, str):
        return None
    key = tag.lstrip(":").lower()
    if key in TAG_ALIASES:
        return TAG_ALIASES[key]
    try:
        return FrameTag(key)
    except ValueError:
        return None


def flatten(values: Any) -> Tuple[Any, ...]:
    """Flatten nested lists and tuples into a tuple, dropping None."""
    if values is None:
        return ()
    if not isinstance(values, (list, tuple)):
        return (values,)
    flat = []
    for value in values:
        flat.extend(flatten(value))
    return tuple(flat)


FrameKey = Union[FrameTag, str]
FrameMap = Dict[FrameKey, Tuple[Any, ...]]


def normalize_frames(frames: Optional[Mapping[Any, Any]]) -> FrameMap:
    """Normalize a frame mapping into ``{tag: flat tuple}``.

    Unrecognized keys are kept as given so that validation can report them
    against the schema of the entity being compiled.
    """
    normalized: FrameMap = {}
    for key, values in (frames or {}).items():
        tag = parse_tag(key)
        normalized_key = tag if tag is not None else key
        normalized[normalized_key] = normalized.get(normalized_key, ()) + flatten(values)
    return normalized


def merge_frames(defaults: Optional[Mapping[Any, Any]], explicit: Optional[Mapping[Any, Any]]) -> FrameMap:
    """Concatenate frames per tag, default values first, then explicit values."""
    merged = normalize_frames(defaults)
    for key, values in normalize_frames(explicit).items():
        merged[key] = merged.get(key, ()) + values
    return merged
