"""
Frame-based Entity Authoring Module

This module turns declarative descriptions of entities ("this class has
these superclasses, these labels, ...") into axioms in an ontology managed
by the ``ontology`` module, and provides the scopes that combine groups of
declarations into disjointness, inverse and covering axioms.

Public Interface:
- Builders: owlclass, object_property, annotation_property, individual, refine
- Scopes: as_disjoint, as_inverse, as_subclasses, as_disjoint_subclasses,
  with_default_frames, with_collection, with_prefix, with_suffix
- Values: owlsome, only, owland, owlor, owlnot, atleast, atmost, exactly, oneof,
  annotation, label, owlcomment, fact, fact_not
- Compilation: compile_frames, FrameCompiler (references are resolved with
  ``ontology.resolver.resolve``, re-exported here)
"""

from ontology.resolver import ReferenceForm, classify_reference, iri_for_name, resolve

from .collector import current_default_frames, current_list, with_collection, with_default_frames
from .compiler import FrameCompiler, compile_frames
from .domain import Characteristic, FRAME_ORDER, FRAME_SCHEMAS, FrameTag
from .expressions import (
    annotation, atleast, atmost, backwardcompatiblewith, exactly, fact, fact_not, incompatiblewith,
    isdefinedby, label, oneof, only, owland, owlcomment, owlnot, owlnothing, owlonly, owlor, owlsome,
    owlthing, seealso, someonly, versioninfo,
)
from .service import (
    add_annotation, add_characteristics, add_different, add_disjoint, add_disjoint_union, add_domain,
    add_equivalent, add_fact, add_inverse, add_range, add_same, add_subclass, add_superproperty,
    add_type, annotation_property, as_disjoint, as_disjoint_subclasses, as_inverse, as_subclasses,
    declare_classes, define_classes, disjoint_classes, individual, object_property, owlclass, refine,
    with_prefix, with_suffix,
)

__all__ = [
    "current_default_frames", "current_list", "with_collection", "with_default_frames",
    "FrameCompiler", "compile_frames",
    "Characteristic", "FRAME_ORDER", "FRAME_SCHEMAS", "FrameTag",
    "annotation", "atleast", "atmost", "backwardcompatiblewith", "exactly", "fact", "fact_not",
    "incompatiblewith", "isdefinedby", "label", "oneof", "only", "owland", "owlcomment", "owlnot",
    "owlnothing", "owlonly", "owlor", "owlsome", "owlthing", "seealso", "someonly", "versioninfo",
    "ReferenceForm", "classify_reference", "iri_for_name", "resolve",
    "add_annotation", "add_characteristics", "add_different", "add_disjoint", "add_disjoint_union",
    "add_domain", "add_equivalent", "add_fact", "add_inverse", "add_range", "add_same",
    "add_subclass", "add_superproperty", "add_type", "annotation_property", "as_disjoint",
    "as_disjoint_subclasses", "as_inverse", "as_subclasses", "declare_classes", "define_classes",
    "disjoint_classes", "individual", "object_property", "owlclass", "refine",
    "with_prefix", "with_suffix",
]
