"""
NSX Client - XML Helpers

Parsing, lookup, serialization and patching helpers for the XML documents
exchanged with the NSX manager API.

Every helper accepts a string, bytes, an element or a whole document.
"""

import copy
import re
from typing import Union

from lxml import etree

from ..core.exceptions import NotFoundError, StructuralError

XmlInput = Union[str, bytes, etree._Element, etree._ElementTree]

# Leading <?xml ...?> declaration plus the newline that follows it
_DECLARATION_RE = re.compile(r"^\s*<\?xml[^>]*\?>[ \t]*\r?\n?")


def _parser() -> etree.XMLParser:
    return etree.XMLParser(remove_blank_text=True, resolve_entities=False, no_network=True)


def parse_xml(xml: XmlInput) -> etree._ElementTree:
    """Parse XML into a document.

    Elements are returned as the document they belong to; strings are encoded
    first because lxml refuses unicode input carrying an encoding declaration.

    Raises:
        StructuralError: If the input is empty or not well-formed XML
    """
    if isinstance(xml, etree._ElementTree):
        return xml
    if isinstance(xml, etree._Element):
        return xml.getroottree()
    if isinstance(xml, str):
        xml = xml.encode("utf-8")
    try:
        return etree.ElementTree(etree.fromstring(xml, _parser()))
    except etree.XMLSyntaxError as e:
        raise StructuralError(
            f"Malformed XML document: {e}",
            context={"document": xml[:200].decode("utf-8", errors="replace")},
        ) from e


def _root(xml: XmlInput) -> etree._Element:
    if isinstance(xml, etree._Element):
        return xml
    return parse_xml(xml).getroot()


def _first(root: etree._Element, selector: str) -> etree._Element | None:
    if root.tag == selector:
        return root
    return root.find(f".//{selector}")


def extract_text(xml: XmlInput, selector: str) -> str:
    """Return the text content of the first element matching ``selector``.

    Args:
        xml: Document to search
        selector: Tag name or relative path such as ``addressGroup/primaryAddress``

    Raises:
        NotFoundError: If no element matches
    """
    element = _first(_root(xml), selector)
    if element is None:
        raise NotFoundError(
            f"Element '{selector}' not found in XML document",
            context={"selector": selector},
        )
    return "".join(element.itertext())


def child_text(element: etree._Element, tag: str) -> str | None:
    """Text of ``tag`` below ``element``, or None when absent.

    Direct children win over deeper descendants, so a nested object's
    ``<name>`` or ``<objectId>`` is not mistaken for the element's own.
    """
    child = element.find(tag)
    if child is None:
        child = element.find(f".//{tag}")
    if child is None:
        return None
    return "".join(child.itertext())


def list_elements(xml: XmlInput, tag: str) -> list[etree._Element]:
    """All elements named ``tag`` in document order."""
    return list(_root(xml).iter(tag))


def to_xml_string(xml: XmlInput, xml_declaration: bool = False) -> str:
    """Serialize a document or element to a string."""
    if isinstance(xml, (str, bytes)):
        xml = parse_xml(xml)
    return etree.tostring(xml, xml_declaration=xml_declaration, encoding="UTF-8").decode("utf-8")


def strip_declaration(xml: XmlInput) -> str:
    """Remove the leading XML declaration and the newline that follows it.

    The NSX API answers 500 when a payload embeds its own declaration.
    """
    if isinstance(xml, bytes):
        xml = xml.decode("utf-8")
    elif not isinstance(xml, str):
        xml = to_xml_string(xml)
    return _DECLARATION_RE.sub("", xml, count=1)


def inject_child(
    xml: XmlInput, grandparent_tag: str, parent_tag: str, new_child_xml: XmlInput
) -> etree._ElementTree:
    """Append ``new_child_xml`` under the first ``parent_tag`` element.

    NSX omits empty container elements, so when ``parent_tag`` is missing it
    is created as the last child of the first ``grandparent_tag``. Only one
    missing level is synthesized.

    Args:
        xml: Document to modify; an already parsed document is mutated in place
        grandparent_tag: Tag to create the parent under when it is absent
        parent_tag: Tag of the element receiving the new child
        new_child_xml: Child to insert; a copy is appended

    Returns:
        The modified document

    Raises:
        StructuralError: If neither parent nor grandparent exists
    """
    doc = parse_xml(xml)
    root = doc.getroot()

    parent = _first(root, parent_tag)
    if parent is None:
        grandparent = _first(root, grandparent_tag)
        if grandparent is None:
            raise StructuralError(
                f"No valid parent to insert XML into: neither <{parent_tag}> "
                f"nor <{grandparent_tag}> found",
                context={"parent": parent_tag, "grandparent": grandparent_tag},
            )
        parent = etree.SubElement(grandparent, parent_tag)

    parent.append(copy.deepcopy(_root(new_child_xml)))
    return doc
