"""Tests for the object graph walker."""
import pytest
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from resourcegraph import (
    TraversalContext,
    enumerate_all_descendants,
    enumerate_children,
    has_errors,
    objects_with_errors,
    walk,
)


def ids(objects):
    return [id(obj) for obj in objects]


@dataclass(eq=False)
class Leaf:
    value: int = 0
    errors: Dict[str, List[str]] = field(default_factory=dict)


@dataclass(eq=False)
class Branch:
    first: Optional[Leaf] = None
    label: str = ""
    second: Optional[Leaf] = None
    many: List[Leaf] = field(default_factory=list)
    errors: Dict[str, List[str]] = field(default_factory=dict)


@dataclass(eq=False)
class Tree:
    left: Optional[Branch] = None
    right: Optional[Branch] = None
    errors: Dict[str, List[str]] = field(default_factory=dict)


class Partner:
    """Plain resource that can point back at its partner."""
    __child_resources__ = ("partner",)

    def __init__(self, name):
        self.name = name
        self.partner = None
        self.errors = {}


class TestEnumerateChildren:
    """Tests for enumerate_children."""

    def test_declaration_order_with_lists(self):
        """Direct children follow field order; list elements follow list order."""
        a, b, c, d = Leaf(1), Leaf(2), Leaf(3), Leaf(4)
        branch = Branch(first=a, second=b, many=[c, d])

        assert ids(enumerate_children(branch)) == ids([a, b, c, d])

    def test_none_fields_are_skipped(self):
        b = Leaf(2)
        assert ids(enumerate_children(Branch(second=b))) == ids([b])

    def test_non_resource_list_elements_are_skipped(self):
        """Only resource elements of a list-valued field are children."""
        leaf = Leaf()
        branch = Branch(many=["text", leaf, None, 3])
        assert ids(enumerate_children(branch)) == ids([leaf])

    def test_none_and_leaves(self):
        assert enumerate_children(None) == []
        assert enumerate_children(Leaf()) == []
        assert enumerate_children("not a resource") == []


class TestEnumerateAllDescendants:
    """Tests for enumerate_all_descendants."""

    def test_pre_order(self):
        """Descendants come in depth-first pre-order, root excluded."""
        a, b, c = Leaf(1), Leaf(2), Leaf(3)
        left = Branch(first=a, second=b)
        right = Branch(many=[c])
        tree = Tree(left=left, right=right)

        assert ids(enumerate_all_descendants(tree)) == ids([left, a, b, right, c])

    def test_two_cycle(self):
        """A <-> B from A yields only B."""
        a, b = Partner("a"), Partner("b")
        a.partner, b.partner = b, a

        assert ids(enumerate_all_descendants(a)) == ids([b])

    def test_self_reference(self):
        """An object pointing at itself has no descendants."""
        a = Partner("a")
        a.partner = a

        assert enumerate_all_descendants(a) == []

    def test_shared_reference_yielded_once(self):
        """An object reachable along two paths appears once, at its first discovery."""
        shared = Leaf()
        left, right = Branch(first=shared), Branch(second=shared)
        tree = Tree(left=left, right=right)

        assert ids(enumerate_all_descendants(tree)) == ids([left, shared, right])

    def test_none(self):
        assert enumerate_all_descendants(None) == []

    def test_fresh_state_per_call(self):
        """Repeated calls return the same result (no leftover visited set)."""
        tree = Tree(left=Branch(first=Leaf()))
        first = ids(enumerate_all_descendants(tree))
        assert ids(enumerate_all_descendants(tree)) == first
        assert len(first) == 2


class TestHasErrors:
    """Tests for has_errors."""

    def test_root_errors(self):
        assert has_errors(Leaf(errors={"value": ["is invalid"]}))

    def test_nested_errors(self):
        tree = Tree(right=Branch(many=[Leaf(), Leaf(errors={"value": ["is too big"]})]))
        assert has_errors(tree)

    def test_no_errors(self):
        assert not has_errors(Tree(left=Branch(first=Leaf())))

    def test_empty_message_lists_are_not_errors(self):
        assert not has_errors(Leaf(errors={"value": []}))

    def test_none(self):
        assert has_errors(None) is False

    def test_terminates_on_cycle(self):
        a, b = Partner("a"), Partner("b")
        a.partner, b.partner = b, a
        assert not has_errors(a)

        b.errors = {"name": ["is taken"]}
        assert has_errors(a)

    def test_custom_validator(self):
        """Errors are read through the validator when one is given."""
        flagged = Leaf(5)

        class FlagValidator:
            def errors_for(self, obj):
                return {"value": ["is flagged"]} if obj is flagged else {}

        tree = Tree(left=Branch(first=flagged))
        assert has_errors(tree, FlagValidator())
        assert not has_errors(Tree(left=Branch(first=Leaf())), FlagValidator())


class TestObjectsWithErrors:
    """Tests for objects_with_errors."""

    def test_root_excluded(self):
        """Root errors are reported by has_errors but the root is not listed."""
        bad_leaf = Leaf(errors={"value": ["is invalid"]})
        tree = Tree(left=Branch(first=bad_leaf), errors={"left": ["is incomplete"]})

        assert ids(objects_with_errors(tree)) == ids([bad_leaf])

    def test_traversal_order(self):
        a = Leaf(errors={"value": ["a"]})
        right = Branch(errors={"label": ["b"]})
        c = Leaf(errors={"value": ["c"]})
        right.many = [c]
        tree = Tree(left=Branch(first=a), right=right)

        assert ids(objects_with_errors(tree)) == ids([a, right, c])

    def test_none(self):
        assert objects_with_errors(None) == []


class TestTraversalContext:
    """Tests for the per-call traversal context."""

    def test_starting_at_marks_root_visited(self):
        root = Leaf()
        context = TraversalContext.starting_at(root)
        assert not context.visit(root)

    def test_visit_once(self):
        context = TraversalContext()
        leaf = Leaf()
        assert context.visit(leaf)
        assert not context.visit(leaf)

    def test_walk_skips_already_visited(self):
        """Objects visited in an earlier walk with the same context are not yielded again."""
        shared = Leaf()
        first, second = Branch(first=shared), Branch(first=shared)
        context = TraversalContext()

        assert ids(walk(first, context)) == ids([shared])
        assert list(walk(second, context)) == []
