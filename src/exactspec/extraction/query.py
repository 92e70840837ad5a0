"""Predicate-based queries over parsed documentation markup.

Extractors never use CSS selectors directly. They describe the nodes they
want with small composable predicates and ask for the first or all
matching nodes, which keeps them testable against synthetic documents.

Example:
    >>> soup = parse_markup('<table id="t"><tr class="x"></tr></table>')
    >>> find_first(soup, attr("id", "t")).name
    'table'
    >>> len(find_all(soup, all_of(tag("tr"), has_class("x"))))
    1
"""

from typing import Callable, Optional

from bs4 import BeautifulSoup, Tag

Predicate = Callable[[Tag], bool]

_ANY = object()


def parse_markup(html: str) -> BeautifulSoup:
    """Parse raw HTML into a queryable document."""
    return BeautifulSoup(html, "html.parser")


def tag(name: str) -> Predicate:
    """Match elements by tag name."""
    return lambda node: node.name == name


def attr(name: str, value: object = _ANY) -> Predicate:
    """Match elements carrying an attribute, optionally with a given value."""

    def predicate(node: Tag) -> bool:
        if not node.has_attr(name):
            return False
        return value is _ANY or node.get(name) == value

    return predicate


def has_class(name: str) -> Predicate:
    """Match elements whose class list contains ``name``."""
    return lambda node: name in (node.get("class") or [])


def all_of(*predicates: Predicate) -> Predicate:
    """Match elements satisfying every given predicate."""
    return lambda node: all(p(node) for p in predicates)


def find_all(root: Tag, predicate: Predicate) -> list[Tag]:
    """Return all descendants of ``root`` matching ``predicate``, in document order."""
    return [node for node in root.descendants if isinstance(node, Tag) and predicate(node)]


def find_first(root: Tag, predicate: Predicate) -> Optional[Tag]:
    """Return the first descendant of ``root`` matching ``predicate``."""
    for node in root.descendants:
        if isinstance(node, Tag) and predicate(node):
            return node
    return None


def contains(root: Tag, predicate: Predicate) -> bool:
    """Check ``root`` itself and its descendants for a match."""
    return predicate(root) or find_first(root, predicate) is not None


def child_elements(node: Tag) -> list[Tag]:
    """Direct element children, skipping text and comments."""
    return [child for child in node.children if isinstance(child, Tag)]


def text_of(node: Tag) -> str:
    """Whitespace-trimmed text content of a node."""
    return node.get_text().strip()
