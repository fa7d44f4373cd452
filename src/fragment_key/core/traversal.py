"""Pre-order tree walk dispatching visitor callbacks by node type."""

from collections.abc import Callable, Iterator, Mapping

from tree_sitter import Node

Visitor = Mapping[str, Callable[[Node], None]]


def iter_preorder(root: Node) -> Iterator[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.named_children))


def traverse(root: Node, visitor: Visitor) -> None:
    for node in iter_preorder(root):
        handler = visitor.get(node.type)
        if handler is not None:
            handler(node)
