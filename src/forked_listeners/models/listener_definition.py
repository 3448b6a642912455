"""Pydantic model for a <listener> configured on a test launch."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping
from xml.sax.saxutils import XMLGenerator
from xml.sax.xmlreader import AttributesImpl

from pydantic import BaseModel, ConfigDict, Field, model_validator

from forked_listeners.conditions import ConditionEvaluator
from forked_listeners.errors import ListenerConfigurationError, MissingAttributeError
from forked_listeners.forked import (
    ATTR_CLASS_NAME,
    ATTR_RESULT_FILE,
    ATTR_SEND_SYS_ERR,
    ATTR_SEND_SYS_OUT,
    ELEMENT_LISTENER,
    EventType,
    ForkedReader,
    format_boolean,
    is_xml_text,
    parse_boolean,
)
from forked_listeners.models.listener_type import LEGACY_XML_FORMATTER, ListenerType
from forked_listeners.models.test_definition import NamedTest, TestDefinition

_IMPLEMENTATION_KEYS = ("type", "classname", "implementation_id")


class ListenerDefinition(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid", validate_assignment=True)

    implementation_id: str | None = Field(default=None, alias="classname")
    result_file: str | None = Field(default=None, alias="resultFile")
    send_sys_out: bool = Field(default=False, alias="sendSysOut", strict=True)
    send_sys_err: bool = Field(default=False, alias="sendSysErr", strict=True)
    output_dir: str | None = Field(default=None, alias="outputDir")
    # Controller-side only; never written to the forked representation.
    if_condition: str | None = Field(default=None, alias="if")
    unless_condition: str | None = Field(default=None, alias="unless")

    @model_validator(mode="before")
    @classmethod
    def _resolve_type_alias(cls, data: Any) -> Any:
        """
        Apply "type", "classname" and "implementation_id" in the order they were given.
        Whichever comes last decides the implementation id.
        """
        if not isinstance(data, Mapping) or "type" not in data:
            return data
        resolved: dict[str, Any] = {}
        for key, value in data.items():
            if key not in _IMPLEMENTATION_KEYS:
                resolved[key] = value
                continue
            resolved.pop("classname", None)
            resolved.pop("implementation_id", None)
            if key == "type":
                resolved["classname"] = ListenerType(value).implementation_id
            else:
                resolved[key] = value
        return resolved

    def apply_type(self, listener_type: ListenerType | str) -> None:
        self.implementation_id = ListenerType(listener_type).implementation_id

    def require_result_file(self, test: TestDefinition | None = None) -> str:
        if self.result_file is not None:
            return self.result_file
        name = test.name if isinstance(test, NamedTest) else "unknown"
        # Only the legacy XML formatter gets an .xml default, compared by exact id.
        suffix = "xml" if self.implementation_id == LEGACY_XML_FORMATTER else "txt"
        return f"TEST-{name}.{suffix}"

    def result_path(self, test: TestDefinition | None = None, base_dir: Path | None = None) -> Path:
        file_path = Path(self.require_result_file(test))
        if file_path.is_absolute():
            return file_path
        directory = Path(self.output_dir) if self.output_dir is not None else base_dir
        if directory is None:
            return file_path
        return directory / file_path

    def should_use(self, conditions: ConditionEvaluator) -> bool:
        return conditions.if_condition_holds(self.if_condition) and not conditions.unless_condition_holds(
            self.unless_condition
        )

    def check_forkable(self) -> None:
        """Raise ListenerConfigurationError unless the listener can be written as a well-formed element."""
        if self.implementation_id is None:
            raise ListenerConfigurationError("Listener has no classname; set classname or type before forking.")
        for attribute, value in ((ATTR_CLASS_NAME, self.implementation_id), (ATTR_RESULT_FILE, self.result_file)):
            if value is not None and not is_xml_text(value):
                raise ListenerConfigurationError(f"Listener {attribute} {value!r} contains characters XML cannot carry.")

    def to_forked_representation(self, writer: XMLGenerator) -> None:
        self.check_forkable()
        attributes = {
            ATTR_CLASS_NAME: self.implementation_id,
            ATTR_SEND_SYS_ERR: format_boolean(self.send_sys_err),
            ATTR_SEND_SYS_OUT: format_boolean(self.send_sys_out),
        }
        if self.result_file is not None:
            attributes[ATTR_RESULT_FILE] = self.result_file
        writer.startElement(ELEMENT_LISTENER, AttributesImpl(attributes))
        writer.endElement(ELEMENT_LISTENER)

    @classmethod
    def from_forked_representation(cls, reader: ForkedReader) -> "ListenerDefinition":
        reader.require(EventType.START_ELEMENT, ELEMENT_LISTENER)
        listener = cls()
        listener.implementation_id = _require_attribute(reader, ATTR_CLASS_NAME)
        send_sys_err = reader.attribute(ATTR_SEND_SYS_ERR)
        if send_sys_err is not None:
            listener.send_sys_err = parse_boolean(send_sys_err)
        send_sys_out = reader.attribute(ATTR_SEND_SYS_OUT)
        if send_sys_out is not None:
            listener.send_sys_out = parse_boolean(send_sys_out)
        result_file = reader.attribute(ATTR_RESULT_FILE)
        if result_file is not None:
            listener.result_file = result_file
        reader.next_tag()
        reader.require(EventType.END_ELEMENT, ELEMENT_LISTENER)
        return listener


def _require_attribute(reader: ForkedReader, name: str) -> str:
    value = reader.attribute(name)
    if value is None:
        raise MissingAttributeError(name, reader.location)
    return value
