"""XML → nested dict tree, plus the helpers that tame its shape.

``parse_markup`` turns a whole document into plain dicts:

- each element becomes either its stripped text (no attributes, no
  children) or a dict;
- attributes appear under ``"@name"`` and text under ``"#text"``;
- namespaces are dropped, so ``{http://www.opengis.net/kml/2.2}Placemark``
  is just ``"Placemark"``;
- a tag that occurs once under its parent is a bare value, a repeated tag
  becomes a list.

That last rule is what the markup formats force on every reader: a
document with one ``<Placemark>`` looks different from one with two.
Extraction code must therefore never index into the tree directly but go
through ``one_or_many`` / ``first`` / ``text_of``.

Because siblings are grouped by tag, the tree does not keep the
interleaving of differently named siblings. ``find_nodes`` collects every
element of one name in document order for readers that need it.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from geo_convert.core.constants import ATTRIBUTE_PREFIX, TEXT_KEY
from geo_convert.core.exceptions import MarkupParseError

if TYPE_CHECKING:
    from lxml.etree import _Element

logger = logging.getLogger("geo_convert.readers.markup")

Node = dict[str, Any] | str


def parse_markup(content: bytes) -> dict[str, Any]:
    """Parse an XML document into ``{root_tag: root_node}``.

    Raises:
        MarkupParseError: If the document is empty or not well-formed XML.
    """
    root = _parse_root(content)
    return {_local_name(root.tag): _element_to_node(root)}


def find_nodes(content: bytes, local_name: str) -> list[Node]:
    """Every element named *local_name* at any depth, in document order, as tree nodes.

    Unlike walking the tree from ``parse_markup``, interleaving of differently
    named siblings is preserved.

    Raises:
        MarkupParseError: If the document is empty or not well-formed XML.
    """
    root = _parse_root(content)
    return [_element_to_node(elem) for elem in root.iter(f"{{*}}{local_name}")]


def _parse_root(content: bytes) -> _Element:
    from lxml import etree  # type: ignore[attr-defined]

    if not content.strip():
        msg = "Markup document is empty"
        raise MarkupParseError(msg)

    parser = etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        huge_tree=False,
        remove_comments=True,
        remove_pis=True,
    )
    try:
        root: _Element = etree.fromstring(content, parser=parser)
    except etree.XMLSyntaxError as exc:
        msg = f"Not valid XML: {exc}"
        raise MarkupParseError(msg) from exc
    return root


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _element_to_node(elem: _Element) -> Node:
    """Convert one element (recursively) to its tree node."""
    children = [child for child in elem if isinstance(child.tag, str)]
    text = (elem.text or "").strip()

    if not elem.attrib and not children:
        return text

    node: dict[str, Any] = {
        ATTRIBUTE_PREFIX + _local_name(str(key)): value for key, value in elem.attrib.items()
    }
    for child in children:
        key = _local_name(child.tag)
        value = _element_to_node(child)
        if key not in node:
            node[key] = value
        elif isinstance(node[key], list):
            node[key].append(value)
        else:
            node[key] = [node[key], value]

    if text:
        node[TEXT_KEY] = text
    return node


# ---------------------------------------------------------------------------
# Shape normalisation helpers
# ---------------------------------------------------------------------------


def one_or_many(value: Any) -> list[Any]:
    """Normalise an absent / single / repeated tree value to a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def child(node: Any, key: str) -> Any:
    """Return ``node[key]`` when *node* is an element dict, else ``None``."""
    if isinstance(node, dict):
        return node.get(key)
    return None


def children(node: Any, key: str) -> list[Any]:
    """All children of *node* named *key*, always as a list."""
    return one_or_many(child(node, key))


def first(node: Any, key: str) -> Any:
    """The first child of *node* named *key*, or ``None``."""
    found = children(node, key)
    return found[0] if found else None


def text_of(node: Any, default: str = "") -> str:
    """Text content of a tree node, whether it collapsed to a string or not."""
    if isinstance(node, str):
        return node
    if isinstance(node, dict):
        text = node.get(TEXT_KEY)
        return text if isinstance(text, str) else default
    return default


def attribute(node: Any, name: str) -> str | None:
    """Value of attribute *name* on an element dict, or ``None``."""
    value = child(node, ATTRIBUTE_PREFIX + name)
    return value if isinstance(value, str) else None
