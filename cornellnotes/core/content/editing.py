"""
Selection and cursor engine: structural edits over a content tree.

Every edit returns a new tree; the input tree is never mutated.
"""
from typing import Tuple

from .models import (
    ContentTree,
    Cursor,
    Node,
    Selection,
    StyleDescriptor,
    StyledRun,
    TextRun,
    node_length,
    tree_length,
)

Nodes = Tuple[Node, ...]


def _split_node(node: Node, at: int) -> Tuple[Node, Node]:
    """Split a text or styled run strictly inside its extent."""
    if isinstance(node, TextRun):
        return (
            TextRun(node.text[:at], node.style),
            TextRun(node.text[at:], node.style),
        )
    if isinstance(node, StyledRun):
        head, tail = _split_nodes(node.children, at)
        return StyledRun(node.style, head), StyledRun(node.style, tail)
    raise ValueError(f"Cannot split {type(node).__name__}")


def _split_nodes(nodes: Nodes, offset: int) -> Tuple[Nodes, Nodes]:
    """
    Split a node sequence at a flat offset.

    Partially covered runs are cut in two; each half keeps the run's style,
    so the nesting structure stays well-formed on both sides.
    """
    left, right = [], []
    position = 0
    for node in nodes:
        length = node_length(node)
        if position + length <= offset:
            left.append(node)
        elif position >= offset:
            right.append(node)
        else:
            head, tail = _split_node(node, offset - position)
            left.append(head)
            right.append(tail)
        position += length
    return tuple(left), tuple(right)


def _wrap_nodes(nodes: Nodes, start: int, end: int, style: StyleDescriptor) -> Nodes:
    position = 0
    for index, node in enumerate(nodes):
        length = node_length(node)
        # Range inside an existing wrap: nest the new wrap inside it.
        if isinstance(node, StyledRun) and position <= start and end <= position + length:
            children = _wrap_nodes(node.children, start - position, end - position, style)
            return nodes[:index] + (StyledRun(node.style, children),) + nodes[index + 1:]
        position += length

    left, rest = _split_nodes(nodes, start)
    middle, right = _split_nodes(rest, end - start)
    return left + (StyledRun(style, middle),) + right


def _insert_nodes(nodes: Nodes, position: int, new_node: Node) -> Nodes:
    offset = 0
    for index, node in enumerate(nodes):
        length = node_length(node)
        if offset < position < offset + length:
            if isinstance(node, StyledRun):
                children = _insert_nodes(node.children, position - offset, new_node)
                replacement = (StyledRun(node.style, children),)
            else:
                head, tail = _split_node(node, position - offset)
                replacement = (head, new_node, tail)
            return nodes[:index] + replacement + nodes[index + 1:]
        offset += length

    left, right = _split_nodes(nodes, position)
    return left + (new_node,) + right


def wrap_selection(tree: ContentTree, selection: Selection,
                   style: StyleDescriptor) -> Tuple[ContentTree, Selection]:
    """
    Wrap the nodes spanned by ``selection`` in a new styled run.

    Args:
        tree: Tree to edit
        selection: Range to style
        style: Attributes set on the new run

    Returns:
        Tuple of (new tree, collapsed selection at the end of the range).
        A collapsed selection returns the same tree object untouched.
    """
    span = selection.normalized(tree_length(tree))
    if span.is_collapsed:
        return tree, selection

    nodes = _wrap_nodes(tree.nodes, span.start, span.end, style)
    return tree.with_nodes(nodes), Selection.collapsed_at(span.end)


def insert_at_cursor(tree: ContentTree, cursor: Cursor,
                     node: Node) -> Tuple[ContentTree, Cursor]:
    """
    Insert ``node`` at the cursor and advance the cursor past it.

    Args:
        tree: Tree to edit
        cursor: Insertion point
        node: Node to insert

    Returns:
        Tuple of (new tree, cursor just after the inserted node)
    """
    position = max(0, min(cursor.position, tree_length(tree)))
    nodes = _insert_nodes(tree.nodes, position, node)
    return tree.with_nodes(nodes), Cursor(position + node_length(node))
