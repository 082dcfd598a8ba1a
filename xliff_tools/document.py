"""Thin adapter over :mod:`lxml` for XLIFF documents.

The engines never touch the parser directly.  Everything they need, from
loading and querying to detaching nodes and writing the document back out,
goes through these helpers.  Queries match on local element names so that
Xcode exports using the XLIFF 1.2 default namespace behave exactly like
hand-written files without one.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Union

from lxml import etree


class ParseError(ValueError):
    """Raised when the input is not well formed XML."""


def _detect_encoding(header: str) -> str:
    """Return the encoding named in an XML declaration, or ``utf-8``."""

    match = re.search(r"encoding=[\"']([^\"']+)[\"']", header[:200])
    return match.group(1) if match else "utf-8"


def load(text: Union[str, bytes]) -> etree._ElementTree:
    """Parse XLIFF text into an element tree.

    Whitespace is kept as authored so that a document written back without
    changes matches what was read.  Unicode input is encoded with the
    encoding its own declaration names, which lets lxml honour the
    declaration instead of rejecting it.

    :param text: Document contents.
    :returns: The parsed tree.
    :raises ParseError: If ``text`` is not well formed or cannot be encoded
        with the encoding it declares.
    """

    parser = etree.XMLParser(remove_blank_text=False)
    try:
        if isinstance(text, str):
            text = text.encode(_detect_encoding(text))
        root = etree.fromstring(text, parser)
    except (LookupError, UnicodeEncodeError, etree.XMLSyntaxError) as exc:
        raise ParseError(str(exc)) from exc
    return root.getroottree()


def _xpath_for(tag_path: str) -> str:
    steps = [f"*[local-name()='{step}']" for step in tag_path.split("/")]
    return "//" + "/".join(steps)


def select_all(
    tree: etree._ElementTree,
    tag_path: str,
    predicate: Optional[Callable[[etree._Element], bool]] = None,
) -> List[etree._Element]:
    """Select elements by a chain of tag names.

    The first step of ``tag_path`` matches anywhere in the document and each
    following step matches direct children, so ``"trans-unit/note"`` yields
    every note that belongs to a unit.

    :param tree: Document to search.
    :param tag_path: ``/`` separated element names.
    :param predicate: Optional filter applied to each candidate.
    :returns: Matching elements in document order.
    """

    nodes = tree.xpath(_xpath_for(tag_path))
    if predicate is None:
        return nodes
    return [node for node in nodes if predicate(node)]


def select_one(
    tree: etree._ElementTree, expression: str, **variables: str
) -> Optional[etree._Element]:
    """Return the first result of an XPath ``expression`` or ``None``.

    Keyword arguments are bound as XPath variables (``$name``), which keeps
    ids containing quotes from breaking the expression.
    """

    result = tree.xpath(expression, **variables)
    return result[0] if result else None


def is_detached(tree: etree._ElementTree, node: etree._Element) -> bool:
    """Check whether ``node`` or one of its ancestors was removed."""

    ancestors = list(node.iterancestors())
    top = ancestors[-1] if ancestors else node
    return top is not tree.getroot()


def remove_node(node: etree._Element) -> None:
    """Detach ``node`` and its subtree from the document.

    lxml moves an element's tail along with it.  When the last child of a
    parent is removed its tail holds the indentation of the closing tag, so
    that text is handed to the previous sibling (or the parent) first.

    :param node: Element to remove.
    :raises ValueError: If the node has already been removed.
    """

    parent = node.getparent()
    if parent is None:
        raise ValueError(f"<{etree.QName(node).localname}> is already detached")
    if node.getnext() is None and node.tail is not None:
        previous = node.getprevious()
        if previous is not None:
            previous.tail = node.tail
        else:
            parent.text = node.tail
    parent.remove(node)


def get_attribute(node: etree._Element, name: str) -> Optional[str]:
    return node.get(name)


def get_text(node: Optional[etree._Element]) -> str:
    """Return all text inside ``node``; missing nodes read as empty."""

    if node is None:
        return ""
    return "".join(node.itertext())


def set_text(node: etree._Element, value: str) -> None:
    node.text = value


def children(node: etree._Element, tag: str) -> List[etree._Element]:
    """Direct children of ``node`` whose local name is ``tag``."""

    return [c for c in node if isinstance(c.tag, str) and etree.QName(c).localname == tag]


def file_of(unit: etree._Element) -> Optional[etree._Element]:
    """Return the ``<file>`` element that owns ``unit``."""

    for ancestor in unit.iterancestors():
        if etree.QName(ancestor).localname == "file":
            return ancestor
    return None


def serialize(tree: etree._ElementTree) -> str:
    """Render the document back to text.

    The XML declaration always names the document's encoding and keeps a
    declared ``standalone`` flag.  The output ends with a newline.  DOCTYPE,
    top-level comments and every untouched node are written as parsed, so
    ``serialize(load(serialize(load(x))))`` equals ``serialize(load(x))``.
    """

    encoding = tree.docinfo.encoding or "UTF-8"
    data = etree.tostring(
        tree,
        encoding=encoding,
        xml_declaration=True,
        standalone=tree.docinfo.standalone,
    )
    return data.decode(encoding) + "\n"


def read_document(path: str) -> etree._ElementTree:
    """Load the XLIFF file at ``path``."""

    with open(path, "rb") as f:
        return load(f.read())


def write_document(tree: etree._ElementTree, path: str) -> None:
    """Overwrite ``path`` with the serialized document."""

    encoding = tree.docinfo.encoding or "UTF-8"
    with open(path, "wb") as f:
        f.write(serialize(tree).encode(encoding))
