"""
Content tree data model for rich note regions (body and summary).
"""
from dataclasses import dataclass, replace
from typing import Callable, Iterator, List, Optional, Tuple, Union


@dataclass(frozen=True)
class StyleDescriptor:
    """Sparse set of inline style attributes. ``None`` means "not set"."""

    weight: Optional[str] = None
    font_size_px: Optional[Union[int, float, str]] = None
    text_color: Optional[str] = None
    highlight_color: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return (
            self.weight is None
            and self.font_size_px is None
            and self.text_color is None
            and self.highlight_color is None
        )

    def merged(self, inner: "StyleDescriptor") -> "StyleDescriptor":
        """
        Compose this (outer) style with an inner one.

        Args:
            inner: Style of a nested run

        Returns:
            New descriptor where every attribute set on ``inner`` wins
        """
        return StyleDescriptor(
            weight=inner.weight if inner.weight is not None else self.weight,
            font_size_px=(
                inner.font_size_px if inner.font_size_px is not None else self.font_size_px
            ),
            text_color=inner.text_color if inner.text_color is not None else self.text_color,
            highlight_color=(
                inner.highlight_color
                if inner.highlight_color is not None
                else self.highlight_color
            ),
        )


EMPTY_STYLE = StyleDescriptor()


@dataclass(frozen=True)
class TextRun:
    """A run of plain text with its own inline style."""

    text: str
    style: StyleDescriptor = EMPTY_STYLE


@dataclass(frozen=True)
class ImageNode:
    """An embedded, self-contained encoded image."""

    data: bytes
    mime_type: str = "image/png"


@dataclass(frozen=True)
class LineBreak:
    pass


@dataclass(frozen=True)
class StyledRun:
    """A wrap applying ``style`` to every node in ``children``."""

    style: StyleDescriptor
    children: Tuple["Node", ...] = ()


Node = Union[TextRun, ImageNode, LineBreak, StyledRun]


def node_length(node: Node) -> int:
    """Number of offset units a node spans."""
    if isinstance(node, TextRun):
        return len(node.text)
    if isinstance(node, StyledRun):
        return sum(node_length(child) for child in node.children)
    return 1


@dataclass(frozen=True)
class ContentTree:
    """Ordered node sequence; node order is the reading order."""

    nodes: Tuple[Node, ...] = ()

    def __len__(self) -> int:
        return tree_length(self)

    def with_nodes(self, nodes) -> "ContentTree":
        return replace(self, nodes=tuple(nodes))


def tree_length(tree: ContentTree) -> int:
    return sum(node_length(node) for node in tree.nodes)


@dataclass(frozen=True)
class Selection:
    """A range of offsets inside a content tree."""

    start: int
    end: int

    @property
    def is_collapsed(self) -> bool:
        return self.start == self.end

    def normalized(self, length: Optional[int] = None) -> "Selection":
        """Order the bounds and clamp them to ``[0, length]``."""
        start, end = sorted((self.start, self.end))
        if length is not None:
            start = max(0, min(start, length))
            end = max(0, min(end, length))
        return Selection(start, end)

    @staticmethod
    def collapsed_at(position: int) -> "Selection":
        return Selection(position, position)


@dataclass(frozen=True)
class Cursor:
    """An insertion point inside a content tree."""

    position: int = 0


@dataclass(frozen=True)
class StyledLeaf:
    """A leaf node together with its fully composed style."""

    node: Node
    style: StyleDescriptor
    offset: int


def iter_styled_leaves(tree: ContentTree) -> Iterator[StyledLeaf]:
    """
    Walk the tree in reading order and yield every leaf with its effective style.

    Args:
        tree: Tree to walk

    Yields:
        StyledLeaf entries; ``offset`` is the leaf's start offset
    """
    stack: List[Tuple[Iterator[Node], StyleDescriptor]] = [(iter(tree.nodes), EMPTY_STYLE)]
    offset = 0
    while stack:
        nodes, outer = stack[-1]
        node = next(nodes, None)
        if node is None:
            stack.pop()
            continue
        if isinstance(node, StyledRun):
            stack.append((iter(node.children), outer.merged(node.style)))
            continue
        style = outer.merged(node.style) if isinstance(node, TextRun) else outer
        yield StyledLeaf(node=node, style=style, offset=offset)
        offset += node_length(node)


def plain_text(tree: ContentTree) -> str:
    """Text content of a tree; line breaks become newlines, images are skipped."""
    parts = []
    for leaf in iter_styled_leaves(tree):
        if isinstance(leaf.node, TextRun):
            parts.append(leaf.node.text)
        elif isinstance(leaf.node, LineBreak):
            parts.append("\n")
    return "".join(parts)


def iter_images(tree: ContentTree) -> Iterator[ImageNode]:
    for leaf in iter_styled_leaves(tree):
        if isinstance(leaf.node, ImageNode):
            yield leaf.node


def replace_images(tree: ContentTree,
                   convert: Callable[[ImageNode], ImageNode]) -> ContentTree:
    """Copy of ``tree`` with every image node passed through ``convert``."""

    def _convert(node: Node) -> Node:
        if isinstance(node, ImageNode):
            return convert(node)
        if isinstance(node, StyledRun):
            return StyledRun(node.style, tuple(_convert(child) for child in node.children))
        return node

    return tree.with_nodes(_convert(node) for node in tree.nodes)
