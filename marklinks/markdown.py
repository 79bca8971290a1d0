"""Markdown parsing and tree-walking helpers built on markdown-it-py."""

from __future__ import annotations

from functools import lru_cache
from typing import Iterator

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

# Leaf node types whose content counts as plain text.
TEXT_NODE_TYPES = frozenset({"text", "code_inline"})


@lru_cache(maxsize=1)
def _parser() -> MarkdownIt:
    md = MarkdownIt("commonmark")
    # Keep destinations as written and emit a node for every scheme.
    md.normalizeLink = lambda url: url
    md.validateLink = lambda url: True
    return md


def parse_document(content: bytes) -> SyntaxTreeNode:
    """Parse raw document bytes into a syntax tree."""
    source = content.decode("utf-8", errors="replace")
    return SyntaxTreeNode(_parser().parse(source))


def iter_nodes(tree: SyntaxTreeNode, node_type: str) -> Iterator[SyntaxTreeNode]:
    """Yield every node of ``node_type`` in document order."""
    for node in tree.walk():
        if node.type == node_type:
            yield node


def is_link(node: SyntaxTreeNode) -> bool:
    """Return True for inline and reference links, False for autolinks."""
    return node.type == "link" and node.markup != "autolink"


def link_destination(node: SyntaxTreeNode) -> str:
    href = node.attrs.get("href", "")
    return str(href) if href is not None else ""


def flatten_text(node: SyntaxTreeNode) -> str:
    """Concatenate the text leaves below ``node``.

    Emphasis and other wrappers are descended into; images, line breaks and
    raw HTML contribute nothing.
    """
    parts = []
    for child in node.children:
        if child.type in TEXT_NODE_TYPES:
            parts.append(child.content)
        elif child.type == "image":
            continue
        elif child.children:
            parts.append(flatten_text(child))
    return "".join(parts)
