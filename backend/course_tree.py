"""
Unbalanced binary search tree of courses keyed by course number.

Ordering rules:
  number <  node.course_number  → left subtree
  number >= node.course_number  → right subtree

Equal numbers are routed right, so inserting a course number twice keeps both
courses. Lookup descends by the same rule and stops at the first match it
meets, which is always the first-inserted course with that number.

There is no rebalancing: pre-sorted input degrades the tree to a linked list.
Every operation here is iterative, so tree height is never limited by the
interpreter's recursion limit.
"""

from __future__ import annotations

from typing import Iterator, Optional

from course import Course


class CourseNode:
    """A tree node. Each node is owned by exactly one parent (or the tree)."""

    __slots__ = ("course", "left", "right")

    def __init__(self, course: Course):
        self.course = course
        self.left: Optional[CourseNode] = None
        self.right: Optional[CourseNode] = None

    @property
    def key(self) -> str:
        return self.course.course_number

    def __repr__(self) -> str:
        return f"CourseNode({self.key!r})"


def insert_node(root: Optional[CourseNode], course: Course) -> CourseNode:
    """Insert `course` below `root` and return the (possibly new) root."""
    new_node = CourseNode(course)
    if root is None:
        return new_node

    node = root
    while True:
        if course.course_number < node.key:
            if node.left is None:
                node.left = new_node
                return root
            node = node.left
        else:
            if node.right is None:
                node.right = new_node
                return root
            node = node.right


def search_node(root: Optional[CourseNode], course_number: str) -> Optional[CourseNode]:
    """Return the first node whose key equals `course_number`, else None."""
    node = root
    while node is not None:
        if course_number == node.key:
            return node
        if course_number < node.key:
            node = node.left
        else:
            node = node.right
    return None


def iter_in_order(root: Optional[CourseNode]) -> Iterator[Course]:
    """Yield courses in ascending course-number order (left, node, right)."""
    stack: list[CourseNode] = []
    node = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        yield node.course
        node = node.right


def tree_height(root: Optional[CourseNode]) -> int:
    """Number of levels in the tree (0 for an empty tree)."""
    if root is None:
        return 0
    height = 0
    level = [root]
    while level:
        height += 1
        next_level = []
        for node in level:
            if node.left is not None:
                next_level.append(node.left)
            if node.right is not None:
                next_level.append(node.right)
        level = next_level
    return height


class CourseTree:
    """Owns the root node and exposes the ordered-search operations."""

    def __init__(self):
        self.root: Optional[CourseNode] = None
        self._size = 0

    def insert(self, course: Course) -> None:
        self.root = insert_node(self.root, course)
        self._size += 1

    def find(self, course_number: str) -> Optional[Course]:
        node = search_node(self.root, course_number)
        return node.course if node is not None else None

    def height(self) -> int:
        return tree_height(self.root)

    @property
    def is_empty(self) -> bool:
        return self.root is None

    def __iter__(self) -> Iterator[Course]:
        return iter_in_order(self.root)

    def __len__(self) -> int:
        return self._size

    def __contains__(self, course_number) -> bool:
        return search_node(self.root, course_number) is not None
