"""
Scoped collection of recently created entities and scoped default frames.

Both are context variables. Entering a window saves the previous value and
installs a new one for the dynamic extent of the block; leaving it restores
the previous value unconditionally.
"""

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator, List, Mapping, Optional, Tuple

from ontology.domain import Entity

from .domain import FrameMap, normalize_frames

logger = logging.getLogger(__name__)


_recent_entities: ContextVar[Optional[List[Entity]]] = ContextVar("recent_entities", default=None)
_default_frames: ContextVar[Optional[FrameMap]] = ContextVar("default_frames", default=None)


@contextmanager
def with_collection() -> Iterator[List[Entity]]:
    """Collect every entity created within the block into a fresh list.

    An outer window does not see entities created inside an inner one.
    """
    collected: List[Entity] = []
    token = _recent_entities.set(collected)
    try:
        yield collected
    finally:
        _recent_entities.reset(token)


def is_collecting() -> bool:
    return _recent_entities.get() is not None


def record(entity: Entity) -> None:
    """Append ``entity`` to the active window, if any."""
    collected = _recent_entities.get()
    if collected is not None:
        collected.append(entity)
        logger.debug(f"Collected {entity}")


def current_list() -> Tuple[Entity, ...]:
    """Entities collected by the active window, in creation order."""
    collected = _recent_entities.get()
    return tuple(collected) if collected is not None else ()


@contextmanager
def with_default_frames(frames: Mapping[Any, Any]) -> Iterator[FrameMap]:
    """Add ``frames`` to every entity declared within the block.

    The frames replace any default frames installed by an enclosing block.
    """
    normalized = normalize_frames(frames)
    token = _default_frames.set(normalized)
    try:
        yield normalized
    finally:
        _default_frames.reset(token)


def current_default_frames() -> FrameMap:
    return dict(_default_frames.get() or {})
