"""
Static child-resource schema for resource objects.

A resource type declares which of its fields hold child resources at
definition time, so traversal never has to guess from runtime state:

- Dataclasses: a field is a child-resource field when its annotation is a
  resource type, ``Optional[...]`` of one, or a ``List``/``Tuple``/``Sequence``
  of one.
- Any class (dataclass or not) may set ``__child_resources__`` to an explicit
  tuple of attribute names, which takes precedence over annotations.

The schema is computed once per type and cached.
"""

import collections.abc
import logging
import sys
import types
from dataclasses import fields, is_dataclass
from typing import Any, Dict, Tuple, Union, get_args, get_origin, get_type_hints

logger = logging.getLogger(__name__)

# resource type -> ordered child-resource field names
_schema_cache: Dict[type, Tuple[str, ...]] = {}

_SEQUENCE_ORIGINS = (
    list,
    tuple,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
)

_UNION_ORIGINS = (Union, getattr(types, 'UnionType', Union))


def is_resource_type(candidate: Any) -> bool:
    """Check if ``candidate`` is a class whose instances are resource objects."""
    if not isinstance(candidate, type):
        return False
    return hasattr(candidate, '__child_resources__') or is_dataclass(candidate)


def is_resource(value: Any) -> bool:
    """Check if ``value`` is a resource instance (not a resource class)."""
    if value is None or isinstance(value, type):
        return False
    return is_resource_type(type(value))


def _is_resource_annotation(annotation: Any) -> bool:
    """Check if a field annotation declares a (possibly optional or list-valued) resource."""
    origin = get_origin(annotation)

    if origin in _UNION_ORIGINS:
        return any(
            _is_resource_annotation(arg)
            for arg in get_args(annotation)
            if arg is not type(None)
        )

    if origin in _SEQUENCE_ORIGINS:
        return any(
            _is_resource_annotation(arg)
            for arg in get_args(annotation)
            if arg is not Ellipsis
        )

    return is_resource_type(annotation)


def _resolve_annotations(resource_type: type) -> Dict[str, Any]:
    """
    Resolve field annotations, one field at a time when the class as a whole fails.

    String annotations are evaluated against the defining module and the
    class namespace. A field whose annotation cannot be resolved is left out
    and logged, so one unresolvable annotation never hides the others.
    """
    try:
        return get_type_hints(resource_type)
    except Exception as e:
        logger.debug(f"Resolving annotations of {resource_type.__name__} per field: {e}")

    module = sys.modules.get(resource_type.__module__)
    globalns = dict(vars(module)) if module is not None else {}
    localns = dict(vars(resource_type))

    hints = {}
    for f in fields(resource_type):
        annotation = f.type
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, globalns, localns)
            except Exception as e:
                logger.warning(
                    f"Cannot resolve annotation {f.type!r} of {resource_type.__name__}.{f.name}; "
                    f"field is not treated as a child resource: {e}"
                )
                continue
        hints[f.name] = annotation
    return hints


def child_resource_fields(resource_type: type) -> Tuple[str, ...]:
    """
    Get the ordered names of the child-resource fields declared by a type.

    Args:
        resource_type: The class to inspect

    Returns:
        Field names in declaration order. Empty for non-resource types.
    """
    cached = _schema_cache.get(resource_type)
    if cached is not None:
        return cached

    declared = getattr(resource_type, '__child_resources__', None)
    if declared is not None:
        names = tuple(declared)
    elif is_dataclass(resource_type):
        hints = _resolve_annotations(resource_type)
        names = tuple(
            f.name for f in fields(resource_type)
            if f.name in hints and _is_resource_annotation(hints[f.name])
        )
    else:
        names = ()

    _schema_cache[resource_type] = names
    return names


def clear_schema_cache() -> None:
    """Clear cached schemas. Only needed when classes are redefined at runtime."""
    _schema_cache.clear()
