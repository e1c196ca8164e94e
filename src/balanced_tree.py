import logging
from collections import Counter, deque
from typing import Deque, Generic, Iterator, List, Optional, Tuple, TypeVar

from avl_rotations import Node, rebalance
from tree_errors import EmptyTreeError

T = TypeVar('T')

logger = logging.getLogger(__name__)


class NodeView(Generic[T]):
    """Read-only handle on a tree node, for visitors such as the DOT exporter."""

    __slots__ = ("_node",)

    def __init__(self, node: Node[T]) -> None:
        self._node = node

    @staticmethod
    def _wrap(node: Optional[Node[T]]) -> Optional['NodeView[T]']:
        return NodeView(node) if node is not None else None

    @property
    def key(self) -> T:
        return self._node.key

    @property
    def parent(self) -> Optional['NodeView[T]']:
        return self._wrap(self._node.parent)

    @property
    def left(self) -> Optional['NodeView[T]']:
        return self._wrap(self._node.left)

    @property
    def right(self) -> Optional['NodeView[T]']:
        return self._wrap(self._node.right)

    @property
    def height(self) -> int:
        return self._node.height

    @property
    def balance_factor(self) -> int:
        return self._node.balance

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NodeView):
            return NotImplemented
        return self._node is other._node

    def __hash__(self) -> int:
        return id(self._node)

    def __repr__(self) -> str:
        return f"NodeView({self.key!r})"


class BalancedTree(Generic[T]):
    def __init__(self) -> None:
        self._root: Optional[Node[T]] = None
        self._size: int = 0
        self._rotations: Counter = Counter()

    def _find_node(self, key: T) -> Optional[Node[T]]:
        node = self._root
        while node is not None:
            if key < node.key:
                node = node.left
            elif key > node.key:
                node = node.right
            else:
                return node
        return None

    def _find_min(self, node: Node[T]) -> Node[T]:
        while node.left is not None:
            node = node.left
        return node

    def _find_max(self, node: Node[T]) -> Node[T]:
        while node.right is not None:
            node = node.right
        return node

    def _replace_child(self, parent: Optional[Node[T]], old: Node[T],
                       new: Optional[Node[T]]) -> None:
        if parent is None:
            self._root = new
        elif parent.left is old:
            parent.left = new
        else:
            assert parent.right is old, "parent pointer out of sync"
            parent.right = new

    def _retrace(self, node: Optional[Node[T]]) -> None:
        """Rebalance every node from ``node`` up to the root."""
        while node is not None:
            parent = node.parent
            top, kind = rebalance(node)
            if kind is not None:
                self._replace_child(parent, node, top)
                self._rotations[kind] += 1
            node = parent

    def insert(self, key: T) -> bool:
        """Add ``key``; duplicates are rejected and return False."""
        if key is None:
            raise TypeError("key must not be None")

        if self._root is None:
            self._root = Node(key)
            self._size = 1
            return True

        node = self._root
        while True:
            if key < node.key:
                if node.left is None:
                    node.left = Node(key, parent=node)
                    break
                node = node.left
            elif key > node.key:
                if node.right is None:
                    node.right = Node(key, parent=node)
                    break
                node = node.right
            else:
                return False

        self._size += 1
        self._retrace(node)
        return True

    def remove(self, key: T) -> bool:
        if key is None or self._root is None:
            return False
        node = self._find_node(key)
        if node is None:
            return False

        if node.left is not None and node.right is not None:
            successor = self._find_min(node.right)
            node.key = successor.key
            node = successor

        self._unlink(node)
        self._size -= 1
        return True

    def _unlink(self, node: Node[T]) -> None:
        # node has at most one child here
        child = node.left if node.left is not None else node.right
        parent = node.parent
        if child is not None:
            child.parent = parent
        self._replace_child(parent, node, child)
        logger.debug("unlinked node %r", node.key)

        node.parent = node.left = node.right = None
        self._retrace(parent)

    def contains(self, key: T) -> bool:
        if key is None:
            return False
        return self._find_node(key) is not None

    def minimum(self) -> Optional[T]:
        if self._root is None:
            return None
        return self._find_min(self._root).key

    def maximum(self) -> Optional[T]:
        if self._root is None:
            return None
        return self._find_max(self._root).key

    def root(self) -> NodeView[T]:
        if self._root is None:
            raise EmptyTreeError()
        return NodeView(self._root)

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._root is None

    def clear(self) -> None:
        self._root = None
        self._size = 0
        self._rotations = Counter()

    def height(self) -> int:
        return self._root.height if self._root is not None else -1

    def rotation_counts(self) -> Counter:
        return Counter(self._rotations)

    def is_balanced(self) -> bool:
        stack: List[Node[T]] = [self._root] if self._root is not None else []
        while stack:
            node = stack.pop()
            if abs(node.balance) > 1:
                return False
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        return True

    def _walk_in_order(self) -> Iterator[Node[T]]:
        pending: List[Node[T]] = []
        node = self._root
        while pending or node is not None:
            if node is not None:
                pending.append(node)
                node = node.left
                continue
            node = pending.pop()
            yield node
            node = node.right

    def _walk_node_first(self, left_first: bool) -> Iterator[Node[T]]:
        """Yield each node ahead of its subtrees, the chosen side first."""
        pending: List[Node[T]] = [self._root] if self._root is not None else []
        while pending:
            node = pending.pop()
            yield node
            near, far = (node.left, node.right) if left_first else (node.right, node.left)
            pending.extend(child for child in (far, near) if child is not None)

    def in_order(self) -> List[T]:
        return [node.key for node in self._walk_in_order()]

    def pre_order(self) -> List[T]:
        return [node.key for node in self._walk_node_first(left_first=True)]

    def post_order(self) -> List[T]:
        # node-right-left, reversed, is left-right-node
        keys = [node.key for node in self._walk_node_first(left_first=False)]
        return keys[::-1]

    def level_order(self) -> List[T]:
        result: List[T] = []
        if self._root is None:
            return result
        queue: Deque[Node[T]] = deque([self._root])
        while queue:
            node = queue.popleft()
            result.append(node.key)
            if node.left is not None:
                queue.append(node.left)
            if node.right is not None:
                queue.append(node.right)
        return result

    def copy(self) -> 'BalancedTree[T]':
        """Return an independent tree with the same shape."""
        clone: BalancedTree[T] = BalancedTree()
        clone._size = self._size
        clone._rotations = Counter(self._rotations)
        if self._root is None:
            return clone

        clone._root = self._clone_node(self._root, None)
        stack: List[Tuple[Node[T], Node[T]]] = [(self._root, clone._root)]
        while stack:
            original, copied = stack.pop()
            if original.left is not None:
                copied.left = self._clone_node(original.left, copied)
                stack.append((original.left, copied.left))
            if original.right is not None:
                copied.right = self._clone_node(original.right, copied)
                stack.append((original.right, copied.right))
        return clone

    @staticmethod
    def _clone_node(node: Node[T], parent: Optional[Node[T]]) -> Node[T]:
        copied = Node(node.key, parent=parent)
        copied.height = node.height
        copied.balance = node.balance
        return copied

    __contains__ = contains

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        """Ascending keys, produced lazily; do not mutate the tree mid-iteration."""
        return (node.key for node in self._walk_in_order())

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self)})"

    def __str__(self) -> str:
        name = type(self).__name__
        return f"{name}(size={len(self)}, height={self.height()})"
