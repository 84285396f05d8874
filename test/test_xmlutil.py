import pytest

from gmp_lib.errors import MalformedDocument
from gmp_lib.framing import extract_document
from gmp_lib.xmlutil import escape_xml_value, parse_bool, parse_document, parse_number

TRICKY = "Tom & Jerry's <\"scan\"> > all"


def test_escape_xml_value() -> None:
    assert escape_xml_value("a&b<c>d\"e'f") == "a&amp;b&lt;c&gt;d&quot;e&apos;f"


def test_escaped_value_survives_framer_and_parser() -> None:
    escaped = escape_xml_value(TRICKY)
    wire = f'<create_target_response status="201" status_text="{escaped}"><name>{escaped}</name></create_target_response>'
    framed = extract_document(wire + "<next")
    assert framed.document == wire

    root = parse_document(framed.document)
    assert root.attr("status_text") == TRICKY
    assert root.read_string("name") == TRICKY


def test_malformed_document_raises() -> None:
    with pytest.raises(MalformedDocument):
        parse_document("<get_tasks_response><task></get_tasks_response>")


def test_entities_are_not_expanded() -> None:
    xml = '<!DOCTYPE r [<!ENTITY boom "expanded">]><r_response><v>&boom;</v></r_response>'
    root = parse_document(xml)
    assert root.read_string("v") != "expanded"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("12", 12), (" 7 ", 7), ("24.5", 24.5), ("", None), (None, None), ("n/a", None), ("nan", None)],
)
def test_parse_number(raw, expected) -> None:
    assert parse_number(raw) == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("1", True), ("TRUE", True), ("yes", True), ("0", False), ("false", False), ("No", False), ("maybe", None), (None, None)],
)
def test_parse_bool(raw, expected) -> None:
    assert parse_bool(raw) is expected


def test_candidate_paths_first_hit_wins() -> None:
    node = parse_document(
        "<target id='t1'><host>10.0.0.1</host><port_list id='pl'><name>All</name></port_list></target>"
    )
    assert node.read_string("hosts", "host") == "10.0.0.1"
    assert node.read_string("port_list/port_list/@id", "port_list/@id") == "pl"
    assert node.read_string("port_list/name") == "All"
    assert node.read_string("missing", "also/missing") is None
    assert node.read_string("@id") == "t1"


def test_text_semantics() -> None:
    node = parse_document("<r><empty/><blank>  </blank><role><name>Admin</name></role><n> 3 </n></r>")
    assert node.read_string("empty") == ""
    assert node.read_string("blank") == ""
    assert node.read_string("role") is None
    assert node.read_string("role/name", "role") == "Admin"
    assert node.read_number("n") == 3


def test_attribute_segment_must_be_last() -> None:
    node = parse_document("<r><a id='x'><b/></a></r>")
    assert node.read_string("a/@id/b") is None


def test_entity_nodes_direct_and_nested() -> None:
    direct = parse_document("<get_users_response><user id='1'/><user id='2'/><filters/></get_users_response>")
    assert [n.attr("id") for n in direct.entity_nodes("user")] == ["1", "2"]

    nested = parse_document("<get_reports_response><report id='outer'><report id='inner'/></report></get_reports_response>")
    assert [n.attr("id") for n in nested.entity_nodes("report")] == ["outer"]

    wrapped = parse_document("<get_x_response><items><item id='a'/><item id='b'/></items></get_x_response>")
    assert [n.attr("id") for n in wrapped.entity_nodes("item")] == ["a", "b"]

    assert parse_document("<get_x_response/>").entity_nodes("item") == []


def test_children_skip_comments() -> None:
    node = parse_document("<r><!-- note --><a/><b/></r>")
    assert [child.tag for child in node] == ["a", "b"]
