"""
Object graph walker for resource trees.

Discovers child resources through the static schema in
:mod:`resourcegraph.schema` and walks them depth-first in pre-order. Every
top-level call allocates its own :class:`TraversalContext`, so concurrent
renders never share a visited set.

Cycle handling: the root is marked visited before the walk starts and every
object is yielded at most once, so ``A -> B -> A`` yields only ``B``.
"""

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator, List, Optional, Set

from resourcegraph.errors import Validator, errors_present
from resourcegraph.schema import child_resource_fields, is_resource

if TYPE_CHECKING:
    from resourcegraph.path_resolver import ParentMap

logger = logging.getLogger(__name__)


@dataclass
class TraversalContext:
    """Per-call traversal state: identities already seen, plus an optional parent map to fill."""
    visited: Set[int] = field(default_factory=set)
    parent_map: Optional['ParentMap'] = None

    @classmethod
    def starting_at(cls, root: Any, parent_map: Optional['ParentMap'] = None) -> 'TraversalContext':
        """Create a fresh context with ``root`` already marked visited."""
        context = cls(parent_map=parent_map)
        if root is not None:
            context.visited.add(id(root))
        return context

    def visit(self, obj: Any) -> bool:
        """Mark ``obj`` visited. Returns False if it had been seen already."""
        key = id(obj)
        if key in self.visited:
            return False
        self.visited.add(key)
        return True


def enumerate_children(obj: Any) -> List[Any]:
    """
    List the direct child resources of an object.

    Children come from the declared child-resource fields in declaration
    order; list and tuple values contribute their resource elements in order.
    Does not recurse.

    Args:
        obj: Resource object (may be None)

    Returns:
        Ordered list of child resources, empty for None or leaf objects.
    """
    if obj is None:
        return []

    children = []
    for name in child_resource_fields(type(obj)):
        value = getattr(obj, name, None)
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            children.extend(item for item in value if is_resource(item))
        elif is_resource(value):
            children.append(value)
    return children


def walk(obj: Any, context: TraversalContext) -> Iterator[Any]:
    """
    Yield every descendant of ``obj`` not yet visited in ``context``, pre-order.

    When the context carries a parent map, each newly discovered child is
    recorded against the object it was reached from.
    """
    for child in enumerate_children(obj):
        if not context.visit(child):
            logger.debug(
                f"Skipping already visited {type(child).__name__} reached from {type(obj).__name__}"
            )
            continue
        if context.parent_map is not None:
            context.parent_map.record(child, obj)
        yield child
        yield from walk(child, context)


def enumerate_all_descendants(obj: Any) -> List[Any]:
    """Flat, deterministic pre-order list of all resources reachable from ``obj`` (root excluded)."""
    if obj is None:
        return []
    return list(walk(obj, TraversalContext.starting_at(obj)))


def has_errors(obj: Any, validator: Optional[Validator] = None) -> bool:
    """Check if ``obj`` or anything reachable from it carries errors.

    Stops at the first object with errors.
    """
    if obj is None:
        return False
    if errors_present(obj, validator):
        return True
    return any(
        errors_present(descendant, validator)
        for descendant in walk(obj, TraversalContext.starting_at(obj))
    )


def objects_with_errors(obj: Any, validator: Optional[Validator] = None) -> List[Any]:
    """Descendants of ``obj`` whose own error mapping is non-empty, in traversal order.

    The root itself is not included; callers query it separately.
    """
    return [
        descendant for descendant in enumerate_all_descendants(obj)
        if errors_present(descendant, validator)
    ]
