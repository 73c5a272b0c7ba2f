"""
Path resolution for objects inside a resource tree.

Given a root resource, builds a child -> parent map with the same guarded
traversal as :mod:`resourcegraph.walker`, then derives for any object in the
tree the three artifacts needed for rendering:

- a DOM id:            ``person_address_attributes_postcode``
- a nested field name: ``person[address_attributes][postcode]``
- a localization key:  ``person[address_attributes].postcode``

All three are built from a prefix chain::

    [root_name, "{mid_name}_attributes", ..., "{target_name}_attributes"]

Shared references: when an object is reachable along more than one path, the
parent it was first discovered from wins. Discovery order is the walker's
pre-order traversal in field-declaration order, so the choice is deterministic.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from resourcegraph.naming import resource_name
from resourcegraph.walker import TraversalContext, walk

logger = logging.getLogger(__name__)

ID_SEPARATOR = '_'
NESTED_ATTRIBUTES_SUFFIX = '_attributes'


class ParentMap:
    """
    Child -> parent mapping keyed by reference identity.

    Holds strong references to both sides so ``id()`` keys stay valid for the
    lifetime of the map. Each child has at most one parent.
    """

    def __init__(self):
        self._entries: Dict[int, Tuple[Any, Any]] = {}

    def record(self, child: Any, parent: Any) -> bool:
        """Record ``parent`` for ``child`` unless one is already known.

        Returns:
            True if recorded, False if ``child`` already had a parent.
        """
        key = id(child)
        existing = self._entries.get(key)
        if existing is not None:
            if existing[1] is not parent:
                logger.debug(
                    f"{type(child).__name__} also reachable from {type(parent).__name__}; "
                    f"keeping first parent {type(existing[1]).__name__}"
                )
            return False
        self._entries[key] = (child, parent)
        return True

    def parent_of(self, obj: Any) -> Optional[Any]:
        """Get the recorded parent of ``obj``, or None for roots and orphans."""
        entry = self._entries.get(id(obj))
        return entry[1] if entry is not None else None

    def items(self) -> Iterator[Tuple[Any, Any]]:
        """Iterate (child, parent) pairs in discovery order."""
        return iter(self._entries.values())

    def __contains__(self, obj: Any) -> bool:
        return id(obj) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def build_parent_map(root: Any) -> ParentMap:
    """
    Walk the tree under ``root`` and record the parent of every discovered child.

    Args:
        root: Root resource (may be None)

    Returns:
        A fresh ParentMap. Empty when ``root`` is None or has no children.
    """
    parent_map = ParentMap()
    if root is None:
        return parent_map
    context = TraversalContext.starting_at(root, parent_map=parent_map)
    for _ in walk(root, context):
        pass
    return parent_map


def ancestor_chain(obj: Any, parent_map: ParentMap) -> List[Any]:
    """
    Ordered ownership chain from the root down to ``obj`` inclusive.

    Stops when no parent is recorded or when an ancestor repeats, returning
    the chain built so far in the cycle case.
    """
    chain = [obj]
    seen = {id(obj)}
    parent = parent_map.parent_of(obj)
    while parent is not None:
        if id(parent) in seen:
            logger.debug(f"Cycle in parent map at {type(parent).__name__}; truncating chain")
            break
        seen.add(id(parent))
        chain.insert(0, parent)
        parent = parent_map.parent_of(parent)
    return chain


def derive_prefixes(obj: Any, parent_map: ParentMap) -> List[str]:
    """
    Prefix chain for ``obj``.

    A root or orphan gets a single segment, its own type-derived name.
    Otherwise the root's name comes first and every later link, including
    ``obj`` itself, contributes ``"{name}_attributes"``.
    """
    chain = ancestor_chain(obj, parent_map)
    root, descendants = chain[0], chain[1:]
    prefixes = [resource_name(root)]
    prefixes.extend(f"{resource_name(link)}{NESTED_ATTRIBUTES_SUFFIX}" for link in descendants)
    return prefixes


def dom_id(prefixes: Sequence[str], field_name: str) -> str:
    """Join prefixes and field name into a DOM id."""
    return ID_SEPARATOR.join([*prefixes, str(field_name)])


def object_key(prefixes: Sequence[str]) -> str:
    """First prefix bare, later prefixes in brackets: ``person[address_attributes]``."""
    if not prefixes:
        return ''
    head, *rest = prefixes
    return head + ''.join(f"[{prefix}]" for prefix in rest)


def field_name_path(prefixes: Sequence[str], field_name: str) -> str:
    """Nested form-submission name, e.g. ``person[address_attributes][postcode]``."""
    if not prefixes:
        return str(field_name)
    return f"{object_key(prefixes)}[{field_name}]"


def localization_key(prefixes: Sequence[str], field_name: str) -> str:
    """Translation lookup key, e.g. ``person[address_attributes].postcode``."""
    if not prefixes:
        return str(field_name)
    return f"{object_key(prefixes)}.{field_name}"


class ResourcePaths:
    """
    Path derivations for every object in one resource tree.

    Builds the parent map once and answers prefix/id/name/key queries for any
    object in the tree. Create one per render; never share across renders.

    Example:
        paths = ResourcePaths.for_root(person)
        paths.dom_id(person.address, 'postcode')
        # 'person_address_attributes_postcode'
    """

    def __init__(self, root: Any, parent_map: ParentMap):
        self.root = root
        self.parent_map = parent_map

    @classmethod
    def for_root(cls, root: Any) -> 'ResourcePaths':
        return cls(root, build_parent_map(root))

    def prefixes(self, obj: Any) -> List[str]:
        return derive_prefixes(obj, self.parent_map)

    def dom_id(self, obj: Any, field_name: str) -> str:
        return dom_id(self.prefixes(obj), field_name)

    def field_name(self, obj: Any, field_name: str) -> str:
        return field_name_path(self.prefixes(obj), field_name)

    def localization_key(self, obj: Any, field_name: str) -> str:
        return localization_key(self.prefixes(obj), field_name)
