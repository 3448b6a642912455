import io

import pytest

from forked_listeners.errors import ForkedStructureError
from forked_listeners.errors import ListenerConfigurationError
from forked_listeners.errors import MissingAttributeError
from forked_listeners.forked import EventType
from forked_listeners.forked import ForkedReader
from forked_listeners.forked import new_writer
from forked_listeners.forked import parse_boolean
from forked_listeners.models import ListenerDefinition
from forked_listeners.models import ListenerType
from forked_listeners.models.listener_type import LEGACY_XML_FORMATTER


def write_listener(listener: ListenerDefinition) -> str:
    buffer = io.StringIO()
    listener.to_forked_representation(new_writer(buffer))
    return buffer.getvalue()


def read_listener(xml_text: str) -> ListenerDefinition:
    reader = ForkedReader(xml_text)
    reader.next_tag()
    return ListenerDefinition.from_forked_representation(reader)


def test_write_emits_fixed_attribute_order() -> None:
    listener = ListenerDefinition(implementation_id="com.example.Custom", send_sys_out=True)

    assert write_listener(listener) == (
        '<listener classname="com.example.Custom" sendSysErr="false" sendSysOut="true"/>'
    )


def test_write_includes_result_file_only_when_set() -> None:
    listener = ListenerDefinition(type=ListenerType.LEGACY_XML, send_sys_err=True, result_file="out.xml")

    assert write_listener(listener) == (
        f'<listener classname="{LEGACY_XML_FORMATTER}" sendSysErr="true" sendSysOut="false" resultFile="out.xml"/>'
    )


def test_write_leaves_controller_side_fields_out() -> None:
    listener = ListenerDefinition(
        implementation_id="com.example.Custom",
        output_dir="reports",
        if_condition="ci",
        unless_condition="quick",
    )

    assert write_listener(listener) == (
        '<listener classname="com.example.Custom" sendSysErr="false" sendSysOut="false"/>'
    )


def test_write_without_implementation_id_fails_fast() -> None:
    buffer = io.StringIO()

    with pytest.raises(ListenerConfigurationError):
        ListenerDefinition(send_sys_out=True).to_forked_representation(new_writer(buffer))

    assert buffer.getvalue() == ""


@pytest.mark.parametrize(
    ("send_sys_out", "send_sys_err", "result_file"),
    [
        (False, False, None),
        (True, False, "TEST-Foo.xml"),
        (False, True, None),
        (True, True, 'reports/a&b "quoted" <x>.txt'),
    ],
)
def test_round_trip_preserves_wire_fields(send_sys_out: bool, send_sys_err: bool, result_file: str | None) -> None:
    original = ListenerDefinition(
        implementation_id="com.example.Custom",
        send_sys_out=send_sys_out,
        send_sys_err=send_sys_err,
        result_file=result_file,
        output_dir="reports",
        if_condition="ci",
        unless_condition="quick",
    )

    restored = read_listener(write_listener(original))

    assert restored.implementation_id == "com.example.Custom"
    assert restored.send_sys_out is send_sys_out
    assert restored.send_sys_err is send_sys_err
    assert restored.result_file == result_file
    assert restored.output_dir is None
    assert restored.if_condition is None
    assert restored.unless_condition is None


def test_read_permissive_booleans() -> None:
    restored = read_listener('<listener classname="x" sendSysOut="TRUE" sendSysErr="yes"/>')

    assert restored.send_sys_out is True
    assert restored.send_sys_err is False


def test_read_absent_booleans_default_false() -> None:
    restored = read_listener('<listener classname="x"></listener>')

    assert restored.send_sys_out is False
    assert restored.send_sys_err is False
    assert restored.result_file is None


def test_parse_boolean_only_accepts_true() -> None:
    assert parse_boolean("True") is True
    assert parse_boolean("1") is False
    assert parse_boolean("") is False
    assert parse_boolean("true ") is False


def test_read_missing_classname_reports_location() -> None:
    with pytest.raises(MissingAttributeError) as excinfo:
        read_listener('\n<listener sendSysOut="true"/>')

    assert excinfo.value.attribute == "classname"
    assert excinfo.value.location is not None
    assert excinfo.value.location.line == 2
    assert "Attribute classname is missing at line 2" in str(excinfo.value)


def test_read_requires_start_of_listener() -> None:
    reader = ForkedReader('<listener classname="x"/>')

    with pytest.raises(ForkedStructureError):
        ListenerDefinition.from_forked_representation(reader)


def test_read_rejects_other_element() -> None:
    with pytest.raises(ForkedStructureError):
        read_listener('<formatter classname="x"/>')


def test_read_rejects_nested_element() -> None:
    with pytest.raises(ForkedStructureError):
        read_listener('<listener classname="x"><extra/></listener>')


def test_read_rejects_text_content() -> None:
    with pytest.raises(ForkedStructureError):
        read_listener('<listener classname="x">text</listener>')


def test_read_allows_whitespace_before_end_tag() -> None:
    restored = read_listener('<listener classname="x">\n    </listener>')
    assert restored.implementation_id == "x"


def test_malformed_document_is_structural_error() -> None:
    with pytest.raises(ForkedStructureError) as excinfo:
        ForkedReader('<listener classname="x">')

    assert excinfo.value.location is not None


def test_reader_leaves_stream_open() -> None:
    stream = io.BytesIO(b'<listener classname="x"/>')

    reader = ForkedReader.from_stream(stream)

    assert stream.closed is False
    assert reader.event_type is EventType.START_DOCUMENT
    assert reader.next_tag() is EventType.START_ELEMENT
    assert reader.local_name == "listener"
    assert reader.attribute("classname") == "x"
    assert reader.next_tag() is EventType.END_ELEMENT
    assert reader.next() is EventType.END_DOCUMENT
    assert reader.has_next() is False
    with pytest.raises(ForkedStructureError):
        reader.next()


@pytest.mark.parametrize(
    ("implementation_id", "result_file"),
    [
        ("x", "out\x1b.txt"),
        ("com.example\x00Custom", None),
    ],
)
def test_write_rejects_characters_xml_cannot_carry(implementation_id: str, result_file: str | None) -> None:
    buffer = io.StringIO()
    listener = ListenerDefinition(implementation_id=implementation_id, result_file=result_file)

    with pytest.raises(ListenerConfigurationError):
        listener.to_forked_representation(new_writer(buffer))

    assert buffer.getvalue() == ""


def test_round_trip_keeps_tab_and_newline_in_result_file() -> None:
    original = ListenerDefinition(implementation_id="x", result_file="a\tb\nc\r.txt")

    restored = read_listener(write_listener(original))

    assert restored.result_file == "a\tb\nc\r.txt"
