"""
Tests for the NSX client XML helpers.

This module tests parsing, element lookup, declaration stripping and
the parent/grandparent child injection used by the relay agent flow.
"""

import pytest
from lxml import etree

from src.nsx_client.core.exceptions import NotFoundError, StructuralError
from src.nsx_client.shared.xml_utils import (
    child_text,
    extract_text,
    inject_child,
    list_elements,
    parse_xml,
    strip_declaration,
    to_xml_string,
)

from fixtures.mock_responses import MOCK_INTERFACES, MOCK_RELAY_NO_AGENTS, MOCK_RELAY_WITH_AGENTS

AGENT = "<relayAgent><vnicIndex>11</vnicIndex><giAddress>10.0.2.1</giAddress></relayAgent>"


class TestParseXml:
    """Test parse_xml input handling."""

    def test_parse_string_with_encoding_declaration(self):
        """Test that unicode input carrying an encoding declaration is accepted."""
        doc = parse_xml('<?xml version="1.0" encoding="UTF-8"?>\n<a><b>1</b></a>')

        assert doc.getroot().tag == "a"

    def test_parse_bytes(self):
        """Test parsing bytes input."""
        doc = parse_xml(b"<a/>")

        assert doc.getroot().tag == "a"

    def test_parse_element_returns_its_document(self):
        """Test that an element is returned as its owning document."""
        root = etree.fromstring("<a><b/></a>")

        assert parse_xml(root).getroot() is root

    def test_parse_does_not_resolve_entities(self):
        """Test that external entities are not expanded."""
        xml = (
            '<?xml version="1.0"?>'
            '<!DOCTYPE a [<!ENTITY x SYSTEM "file:///etc/passwd">]>'
            "<a>&x;</a>"
        )
        doc = parse_xml(xml)

        assert "root:" not in to_xml_string(doc)

    @pytest.mark.parametrize("xml", ["", "   ", "<virtualWires><dataPage>", b"not xml"])
    def test_parse_malformed_raises_structural_error(self, xml):
        """Test that empty or truncated documents map to StructuralError."""
        with pytest.raises(StructuralError) as exc_info:
            parse_xml(xml)

        assert isinstance(exc_info.value.__cause__, etree.XMLSyntaxError)

    def test_extract_from_malformed_document(self):
        """Test that lookups on a malformed document raise StructuralError."""
        with pytest.raises(StructuralError):
            extract_text("<interface><index>1</index>", "index")


class TestExtractText:
    """Test extract_text lookups."""

    def test_extract_first_match_in_document_order(self):
        """Test that the first matching element wins."""
        assert extract_text(MOCK_INTERFACES, "index") == "2"

    def test_extract_by_relative_path(self):
        """Test extracting through a relative path."""
        value = extract_text(MOCK_INTERFACES, "addressGroup/primaryAddress")

        assert value == "192.168.100.2"

    def test_extract_matches_root_element(self):
        """Test that the root element itself can be selected."""
        assert extract_text("<objectId>virtualwire-3</objectId>", "objectId") == "virtualwire-3"

    def test_extract_missing_element_raises(self):
        """Test that a missing element raises NotFoundError."""
        with pytest.raises(NotFoundError) as exc_info:
            extract_text(MOCK_INTERFACES, "poolId")

        assert exc_info.value.context["selector"] == "poolId"


class TestListElements:
    """Test list_elements and child_text."""

    def test_list_in_document_order(self):
        """Test that all elements are returned in document order."""
        interfaces = list_elements(MOCK_INTERFACES, "interface")

        assert [child_text(i, "name") for i in interfaces] == ["uplink", "web-lif"]

    def test_list_no_matches(self):
        """Test that a missing tag gives an empty list."""
        assert list_elements(MOCK_RELAY_NO_AGENTS, "relayAgent") == []

    def test_child_text_prefers_direct_child(self):
        """Test that a direct child wins over a nested element of the same name."""
        element = etree.fromstring(
            "<virtualWire><scope><name>tz</name></scope><name>web</name></virtualWire>"
        )

        assert child_text(element, "name") == "web"

    def test_child_text_missing(self):
        """Test child_text for an absent tag."""
        assert child_text(etree.fromstring("<a/>"), "b") is None


class TestStripDeclaration:
    """Test strip_declaration."""

    def test_strip_declaration_and_newline(self):
        """Test removing the declaration and the newline after it."""
        assert strip_declaration('<?xml version="1.0" encoding="UTF-8"?>\n<a/>') == "<a/>"

    def test_strip_single_quoted_declaration(self):
        """Test removing a declaration as serialized by lxml."""
        assert strip_declaration("<?xml version='1.0' encoding='UTF-8'?>\n<a/>") == "<a/>"

    def test_strip_without_declaration_is_noop(self):
        """Test that a fragment without declaration is unchanged."""
        assert strip_declaration("<a><b/></a>") == "<a><b/></a>"

    def test_strip_only_leading_newline(self):
        """Test that content newlines are preserved."""
        xml = '<?xml version="1.0"?>\n<a>\n<b/></a>'

        assert strip_declaration(xml) == "<a>\n<b/></a>"

    def test_strip_element(self):
        """Test stripping an element serializes it without declaration."""
        element = list_elements(MOCK_INTERFACES, "interface")[1]
        fragment = strip_declaration(element)

        assert fragment.startswith("<interface>")
        assert "<connectedToId>virtualwire-7</connectedToId>" in fragment


class TestInjectChild:
    """Test inject_child."""

    def test_inject_into_existing_parent(self):
        """Test appending as a sibling of existing children."""
        doc = inject_child(MOCK_RELAY_WITH_AGENTS, "relay", "relayAgents", AGENT)

        agents = list_elements(doc, "relayAgent")
        assert [child_text(a, "vnicIndex") for a in agents] == ["10", "11"]
        assert len(list_elements(doc, "relayAgents")) == 1

    def test_inject_creates_missing_parent(self):
        """Test that the parent is created under the grandparent."""
        doc = inject_child(MOCK_RELAY_NO_AGENTS, "relay", "relayAgents", AGENT)

        parents = list_elements(doc, "relayAgents")
        assert len(parents) == 1
        assert parents[0].getparent().tag == "relay"
        assert [child.tag for child in parents[0]] == ["relayAgent"]
        assert child_text(parents[0][0], "giAddress") == "10.0.2.1"

    def test_inject_preserves_other_content(self):
        """Test that unrelated elements survive the injection."""
        doc = inject_child(MOCK_RELAY_NO_AGENTS, "relay", "relayAgents", AGENT)

        assert extract_text(doc, "relayServer/ipAddress") == "10.0.0.10"

    def test_inject_without_parent_or_grandparent_raises(self):
        """Test StructuralError when neither element exists."""
        with pytest.raises(StructuralError):
            inject_child("<dhcp><enabled>true</enabled></dhcp>", "relay", "relayAgents", AGENT)

    def test_inject_mutates_parsed_document(self):
        """Test that a parsed document is modified in place."""
        doc = parse_xml(MOCK_RELAY_WITH_AGENTS)

        result = inject_child(doc, "relay", "relayAgents", AGENT)

        assert result is doc
        assert len(list_elements(doc, "relayAgent")) == 2

    def test_inject_copies_child(self):
        """Test that the injected element is a copy of the given one."""
        child = etree.fromstring(AGENT)

        inject_child(MOCK_RELAY_NO_AGENTS, "relay", "relayAgents", child)

        assert child.getparent() is None

    def test_serialized_result_has_no_declaration_after_strip(self):
        """Test the serialize-then-strip sequence used for relay payloads."""
        doc = inject_child(MOCK_RELAY_NO_AGENTS, "relay", "relayAgents", AGENT)

        payload = strip_declaration(to_xml_string(doc, xml_declaration=True))

        assert payload.startswith("<relay>")
        assert "<?xml" not in payload
