"""
Object-graph core for nested form resources.

Walks a tree of resource objects (dataclasses, or classes declaring
``__child_resources__``), finds the objects carrying validation errors, and
derives from each object's ownership path the ids, nested field names and
translation keys used when rendering forms and error summaries.

Key Features:
- Static child-resource schema from dataclass annotations
- Cycle-safe, deterministic pre-order traversal
- Per-call traversal state (safe under concurrent renders)
- Prefix chains for DOM ids, form names and localization keys

Quick Start:
    >>> from resourcegraph import ResourcePaths, has_errors, objects_with_errors
    >>> if has_errors(person):
    ...     paths = ResourcePaths.for_root(person)
    ...     for child in objects_with_errors(person):
    ...         print(paths.dom_id(child, 'postcode'))

Modules:
    - schema: child-resource field declaration
    - naming: type-derived names
    - errors: validator interface and default validator
    - walker: object graph walker
    - path_resolver: parent map and prefix derivation
"""

from resourcegraph.schema import (
    child_resource_fields,
    clear_schema_cache,
    is_resource,
    is_resource_type,
)
from resourcegraph.naming import resource_name, underscore
from resourcegraph.errors import (
    AttributeErrorsValidator,
    DEFAULT_VALIDATOR,
    Validator,
    errors_present,
)
from resourcegraph.walker import (
    TraversalContext,
    enumerate_all_descendants,
    enumerate_children,
    has_errors,
    objects_with_errors,
    walk,
)
from resourcegraph.path_resolver import (
    ParentMap,
    ResourcePaths,
    ancestor_chain,
    build_parent_map,
    derive_prefixes,
    dom_id,
    field_name_path,
    localization_key,
    object_key,
)

__all__ = [
    # Schema
    'child_resource_fields',
    'clear_schema_cache',
    'is_resource',
    'is_resource_type',
    # Naming
    'resource_name',
    'underscore',
    # Errors
    'AttributeErrorsValidator',
    'DEFAULT_VALIDATOR',
    'Validator',
    'errors_present',
    # Walker
    'TraversalContext',
    'enumerate_all_descendants',
    'enumerate_children',
    'has_errors',
    'objects_with_errors',
    'walk',
    # Path resolver
    'ParentMap',
    'ResourcePaths',
    'ancestor_chain',
    'build_parent_map',
    'derive_prefixes',
    'dom_id',
    'field_name_path',
    'localization_key',
    'object_key',
]

__version__ = '1.0.0'
