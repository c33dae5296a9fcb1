"""Namespace-agnostic helpers for walking loosely structured UVAR XML"""
from typing import Iterator, List, Optional

from lxml import etree

from ..exceptions import DocumentParseError


def parse_document(document) -> etree._Element:
    """
    Parse raw XML text or bytes into an element tree root.

    Raises DocumentParseError when the input is empty or not well-formed.
    """
    data = document.encode("utf-8") if isinstance(document, str) else document
    if not data or not data.strip():
        raise DocumentParseError("Empty document")

    parser = etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)
    try:
        root = etree.fromstring(data, parser=parser)
    except etree.XMLSyntaxError as e:
        raise DocumentParseError(f"Failed to parse XML: {e}") from e

    if root is None:
        raise DocumentParseError("Document has no root element")
    return root


def local_name(node: etree._Element) -> str:
    """Tag name without namespace URI or prefix; empty for comments and PIs"""
    tag = node.tag
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1].rsplit(":", 1)[-1]


def type_attribute(node: etree._Element) -> str:
    """Value of a plain or namespaced (xsi:) type attribute"""
    for key, value in node.attrib.items():
        if key == "type" or key.endswith("}type"):
            return value
    return ""


def text_of(node: Optional[etree._Element]) -> str:
    if node is None:
        return ""
    return "".join(node.itertext()).strip()


def iter_descendants(node: etree._Element) -> Iterator[etree._Element]:
    """All element descendants in document order, skipping comments and PIs"""
    for child in node.iterdescendants():
        if isinstance(child.tag, str):
            yield child


def find_all(node: etree._Element, name: str) -> List[etree._Element]:
    """Descendants whose local name equals ``name``"""
    return node.xpath(".//*[local-name()=$name]", name=name)


def find_first(node: etree._Element, name: str) -> Optional[etree._Element]:
    found = find_all(node, name)
    return found[0] if found else None


def first_text(node: etree._Element, name: str) -> str:
    return text_of(find_first(node, name))


def localized_text(node: etree._Element, container: str, language: str) -> str:
    """
    Text of the first ``value`` in the given language under a ``container`` element.

    Matches both ``lang`` and ``xml:lang`` attributes.
    """
    values = node.xpath(
        ".//*[local-name()=$container]//*[local-name()='value']"
        "[@lang=$lang or @xml:lang=$lang]",
        container=container,
        lang=language,
    )
    return text_of(values[0]) if values else ""
