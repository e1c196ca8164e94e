"""
AVL balancing engine.

Heights are 0-based: a leaf has height 0 and an absent child counts as -1.
The balance factor of a node is ``height(right) - height(left)``, so a
right-heavy node is positive.

Every rotation takes the top of a subtree and returns the node that rises to
replace it. Parent pointers inside the subtree are rewired and the new top
inherits the old top's parent, but the parent's own child slot is left for
the caller to re-link.
"""

import logging
from typing import Generic, Optional, Tuple, TypeVar

T = TypeVar('T')

logger = logging.getLogger(__name__)

LEFT = "left"
RIGHT = "right"
RIGHT_LEFT = "right_left"
LEFT_RIGHT = "left_right"


class Node(Generic[T]):
    __slots__ = ("key", "left", "right", "parent", "height", "balance")

    def __init__(self, key: T, parent: Optional['Node[T]'] = None) -> None:
        self.key: T = key
        self.left: Optional[Node[T]] = None
        self.right: Optional[Node[T]] = None
        self.parent: Optional[Node[T]] = parent
        self.height: int = 0
        self.balance: int = 0

    def __repr__(self) -> str:
        return f"Node({self.key!r}, height={self.height}, balance={self.balance})"


def height(node: Optional[Node]) -> int:
    return node.height if node is not None else -1


def update(node: Node) -> None:
    """Recompute the cached height and balance factor from the children."""
    left_height = height(node.left)
    right_height = height(node.right)
    node.height = 1 + max(left_height, right_height)
    node.balance = right_height - left_height


def rotate_left(node: Node) -> Node:
    pivot = node.right
    assert pivot is not None, "left rotation needs a right child"
    inner = pivot.left

    node.right = inner
    if inner is not None:
        inner.parent = node
    pivot.left = node
    pivot.parent = node.parent
    node.parent = pivot

    update(node)
    update(pivot)
    return pivot


def rotate_right(node: Node) -> Node:
    pivot = node.left
    assert pivot is not None, "right rotation needs a left child"
    inner = pivot.right

    node.left = inner
    if inner is not None:
        inner.parent = node
    pivot.right = node
    pivot.parent = node.parent
    node.parent = pivot

    update(node)
    update(pivot)
    return pivot


def rotate_right_left(node: Node) -> Node:
    """Lift ``node.right.left`` to the top of the subtree."""
    assert node.right is not None, "right-left rotation needs a right child"
    node.right = rotate_right(node.right)
    return rotate_left(node)


def rotate_left_right(node: Node) -> Node:
    """Lift ``node.left.right`` to the top of the subtree."""
    assert node.left is not None, "left-right rotation needs a left child"
    node.left = rotate_left(node.left)
    return rotate_right(node)


def rebalance(node: Node) -> Tuple[Node, Optional[str]]:
    """Refresh ``node`` and rotate it if it is out of balance.

    Returns the new top of the subtree together with the kind of rotation
    applied, or ``None`` when the node was already balanced.
    """
    update(node)

    if node.balance >= 2:
        assert node.right is not None
        if node.right.balance >= 0:
            kind, top = LEFT, rotate_left(node)
        else:
            kind, top = RIGHT_LEFT, rotate_right_left(node)
    elif node.balance <= -2:
        assert node.left is not None
        if node.left.balance <= 0:
            kind, top = RIGHT, rotate_right(node)
        else:
            kind, top = LEFT_RIGHT, rotate_left_right(node)
    else:
        return node, None

    logger.debug("%s rotation at %r, %r rises", kind, node.key, top.key)
    return top, kind
