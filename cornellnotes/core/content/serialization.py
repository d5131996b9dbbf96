"""
Conversion between content trees and their persisted HTML form.

The HTML form only exists at persistence and rendering boundaries; all
structural edits run on the tree.
"""
import base64
import binascii
import html
from html.parser import HTMLParser
from typing import Callable, List, Optional, Tuple
from urllib.parse import unquote_to_bytes

from cornellnotes.utils.logger import get_logger

from .models import (
    EMPTY_STYLE,
    ContentTree,
    ImageNode,
    LineBreak,
    Node,
    StyleDescriptor,
    StyledRun,
    TextRun,
)

logger = get_logger(__name__)

IMAGE_INLINE_STYLE = "max-width: 100%; border-radius: 6px"

_BOLD_TAGS = {"b", "strong"}
_BLOCK_TAGS = {"div", "p", "li", "h1", "h2", "h3", "h4", "h5", "h6", "blockquote", "pre"}
_VOID_TAGS = {"br", "img", "hr", "input", "meta", "link", "wbr", "source", "col", "area"}


# --- Style <-> CSS ---

def _format_font_size(value) -> str:
    text = str(value).strip()
    return text if text.lower().endswith("px") else f"{text}px"


def _parse_font_size(value: str):
    text = value.strip()
    number = text[:-2].strip() if text.lower().endswith("px") else text
    try:
        return int(number)
    except ValueError:
        pass
    try:
        return float(number)
    except ValueError:
        return text


def style_to_css(style: StyleDescriptor) -> str:
    """Render a style descriptor as an inline CSS declaration list."""
    declarations = []
    if style.weight is not None:
        declarations.append(f"font-weight: {style.weight}")
    if style.font_size_px is not None:
        declarations.append(f"font-size: {_format_font_size(style.font_size_px)}")
    if style.text_color is not None:
        declarations.append(f"color: {style.text_color}")
    if style.highlight_color is not None:
        declarations.append(f"background-color: {style.highlight_color}")
    return "; ".join(declarations)


def css_to_style(css: Optional[str]) -> StyleDescriptor:
    """Parse the inline CSS properties this editor understands; others are ignored."""
    values = {}
    for declaration in (css or "").split(";"):
        if ":" not in declaration:
            continue
        name, value = declaration.split(":", 1)
        name, value = name.strip().lower(), value.strip()
        if not value:
            continue
        if name == "font-weight":
            values["weight"] = value
        elif name == "font-size":
            values["font_size_px"] = _parse_font_size(value)
        elif name == "color":
            values["text_color"] = value
        elif name in ("background-color", "background"):
            values["highlight_color"] = value
    return StyleDescriptor(**values)


# --- Images ---

def image_to_data_uri(image: ImageNode) -> str:
    encoded = base64.b64encode(image.data).decode("ascii")
    return f"data:{image.mime_type};base64,{encoded}"


def data_uri_to_image(uri: str) -> Optional[ImageNode]:
    """
    Decode a ``data:`` URI into an image node.

    Returns:
        The image node, or None when the URI is not a usable data URI
    """
    if not uri or not uri.startswith("data:") or "," not in uri:
        return None
    header, payload = uri[5:].split(",", 1)
    parts = header.split(";")
    mime_type = parts[0] or "image/png"
    try:
        if "base64" in parts[1:]:
            data = base64.b64decode(payload, validate=False)
        else:
            data = unquote_to_bytes(payload)
    except (binascii.Error, ValueError):
        return None
    return ImageNode(data=data, mime_type=mime_type)


# --- Tree -> HTML ---

def embedded_image_html(image: ImageNode) -> str:
    return f'<img src="{image_to_data_uri(image)}" style="{IMAGE_INLINE_STYLE}">'


def _node_to_html(node: Node, image_html: Callable[[ImageNode], str]) -> str:
    if isinstance(node, TextRun):
        text = html.escape(node.text, quote=False)
        if node.style.is_empty:
            return text
        return f'<span style="{html.escape(style_to_css(node.style))}">{text}</span>'
    if isinstance(node, StyledRun):
        inner = "".join(_node_to_html(child, image_html) for child in node.children)
        css = style_to_css(node.style)
        if not css:
            return f"<span>{inner}</span>"
        return f'<span style="{html.escape(css)}">{inner}</span>'
    if isinstance(node, ImageNode):
        return image_html(node)
    if isinstance(node, LineBreak):
        return "<br>"
    raise TypeError(f"Unknown content node: {node!r}")


def to_html(tree: ContentTree,
            image_html: Callable[[ImageNode], str] = embedded_image_html) -> str:
    """
    Serialize a content tree to an HTML fragment.

    Args:
        tree: Tree to serialize
        image_html: Renders one image element; the default embeds the image
            as a data URI, which is the persisted form

    Returns:
        HTML fragment
    """
    return "".join(_node_to_html(node, image_html) for node in tree.nodes)


# --- HTML -> Tree ---

class _Frame:
    """One open element while parsing."""

    def __init__(self, tag: str, style: StyleDescriptor, keep: bool):
        self.tag = tag
        self.style = style
        self.keep = keep
        self.children: List[Node] = []


class _ContentTreeParser(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self._stack: List[_Frame] = [_Frame("#root", EMPTY_STYLE, keep=False)]

    @property
    def _current(self) -> List[Node]:
        return self._stack[-1].children

    def _has_content_before(self) -> bool:
        """True if anything was emitted before this point in reading order."""
        for frame in self._stack:
            if frame.children:
                return True
        return False

    def _ends_with_break(self) -> bool:
        for frame in reversed(self._stack):
            if frame.children:
                return isinstance(frame.children[-1], LineBreak)
        return False

    def handle_starttag(self, tag: str, attrs):
        tag = tag.lower()
        attributes = dict(attrs)

        if tag == "br":
            self._current.append(LineBreak())
            return
        if tag == "img":
            image = data_uri_to_image(attributes.get("src") or "")
            if image is None:
                logger.warning("Dropping image without embedded data")
            else:
                self._current.append(image)
            return
        if tag in _VOID_TAGS:
            return

        if tag in _BLOCK_TAGS and self._has_content_before() and not self._ends_with_break():
            self._current.append(LineBreak())

        if tag == "span":
            style = css_to_style(attributes.get("style"))
        elif tag in _BOLD_TAGS:
            style = css_to_style(attributes.get("style")).merged(StyleDescriptor(weight="700"))
        else:
            style = EMPTY_STYLE
        self._stack.append(_Frame(tag, style, keep=not style.is_empty))

    def handle_endtag(self, tag: str):
        tag = tag.lower()
        if not any(frame.tag == tag for frame in self._stack[1:]):
            return
        while len(self._stack) > 1:
            frame = self._pop()
            if frame.tag == tag:
                break

    def handle_data(self, data: str):
        if not data:
            return
        current = self._current
        if current and isinstance(current[-1], TextRun) and current[-1].style.is_empty:
            current[-1] = TextRun(current[-1].text + data)
        else:
            current.append(TextRun(data))

    def _pop(self) -> _Frame:
        frame = self._stack.pop()
        if frame.keep:
            self._current.append(StyledRun(frame.style, tuple(frame.children)))
        else:
            self._current.extend(frame.children)
        return frame

    def result(self) -> Tuple[Node, ...]:
        while len(self._stack) > 1:
            self._pop()
        return tuple(self._stack[0].children)


def from_html(markup: Optional[str]) -> ContentTree:
    """
    Parse a persisted HTML fragment into a content tree.

    Args:
        markup: HTML produced by :func:`to_html` or by a rich-text editor

    Returns:
        The parsed content tree (empty for empty input)
    """
    if not markup:
        return ContentTree()
    parser = _ContentTreeParser()
    parser.feed(markup)
    parser.close()
    return ContentTree(parser.result())
