"""
Graphviz DOT export for BalancedTree.

Each node is drawn as a three-field record ``<l> | key | <r>`` and every
parent-child edge leaves from the matching port, so the picture keeps left and
right children apart even when one of them is missing. Paste the output into
any Graphviz renderer (``dot -Tpng``, webgraphviz, viz-js) to view it.
"""

from pathlib import Path
from typing import List, Optional, Union

from balanced_tree import BalancedTree, NodeView

HEADER = "digraph g {\nnode [shape = record,height=.1];\n"
FOOTER = "}\n"


def _node_id(node: NodeView) -> str:
    return f"node{node.key}"


def _walk(root: NodeView) -> List[NodeView]:
    """Nodes in in-order, without touching the tree's own traversals."""
    result: List[NodeView] = []
    stack: List[NodeView] = []
    node: Optional[NodeView] = root
    while stack or node is not None:
        while node is not None:
            stack.append(node)
            node = node.left
        node = stack.pop()
        result.append(node)
        node = node.right
    return result


def node_statements(root: NodeView) -> List[str]:
    return [f'"{_node_id(n)}"[label = "<l> | {n.key} | <r> "];' for n in _walk(root)]


def edge_statements(root: NodeView) -> List[str]:
    lines: List[str] = []
    for node in _walk(root):
        if node.left is not None:
            lines.append(f'"{_node_id(node)}":l -> "{_node_id(node.left)}";')
        if node.right is not None:
            lines.append(f'"{_node_id(node)}":r -> "{_node_id(node.right)}";')
    return lines


def to_dot(tree: BalancedTree) -> str:
    if tree.is_empty():
        return HEADER + FOOTER
    root = tree.root()
    body = node_statements(root) + [""] + edge_statements(root)
    return HEADER + "\n" + "\n".join(body) + "\n" + FOOTER


def write_dot(tree: BalancedTree, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.write_text(to_dot(tree))
    return path
