"""XML plumbing for the representation handed to a forked test worker."""

from __future__ import annotations

import re
import xml.parsers.expat
from dataclasses import dataclass, field
from enum import Enum
from typing import IO
from xml.sax.saxutils import XMLGenerator

from forked_listeners.errors import ForkedStructureError

ELEMENT_LAUNCH_DEF = "launch-def"
ELEMENT_LISTENER = "listener"

ATTR_CLASS_NAME = "classname"
ATTR_SEND_SYS_ERR = "sendSysErr"
ATTR_SEND_SYS_OUT = "sendSysOut"
ATTR_RESULT_FILE = "resultFile"

# Characters XML 1.0 allows in attribute values.
_INVALID_XML_CHARS = re.compile("[^\u0009\u000A\u000D\u0020-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


class EventType(Enum):
    START_DOCUMENT = "start_document"
    START_ELEMENT = "start_element"
    END_ELEMENT = "end_element"
    CHARACTERS = "characters"
    END_DOCUMENT = "end_document"


@dataclass(frozen=True)
class Location:
    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


@dataclass(frozen=True)
class ReaderEvent:
    type: EventType
    location: Location
    name: str | None = None
    attributes: dict[str, str] = field(default_factory=dict)
    text: str = ""


def parse_boolean(value: str) -> bool:
    # Only a literal "true" counts; anything else, malformed or not, is false.
    return value.lower() == "true"


def format_boolean(value: bool) -> str:
    return "true" if value else "false"


def is_xml_text(value: str) -> bool:
    return _INVALID_XML_CHARS.search(value) is None


def new_writer(stream: IO[str]) -> XMLGenerator:
    """Create an XML writer over a text stream owned by the caller."""
    return XMLGenerator(stream, encoding="utf-8", short_empty_elements=True)


def _parse_events(source: bytes | str) -> list[ReaderEvent]:
    parser = xml.parsers.expat.ParserCreate()
    parser.buffer_text = True
    events: list[ReaderEvent] = [ReaderEvent(EventType.START_DOCUMENT, Location(1, 0))]

    def here() -> Location:
        return Location(parser.CurrentLineNumber, parser.CurrentColumnNumber)

    def on_start(name: str, attributes: dict[str, str]) -> None:
        events.append(ReaderEvent(EventType.START_ELEMENT, here(), name, dict(attributes)))

    def on_end(name: str) -> None:
        events.append(ReaderEvent(EventType.END_ELEMENT, here(), name))

    def on_text(text: str) -> None:
        events.append(ReaderEvent(EventType.CHARACTERS, here(), text=text))

    parser.StartElementHandler = on_start
    parser.EndElementHandler = on_end
    parser.CharacterDataHandler = on_text
    try:
        parser.Parse(source, True)
    except xml.parsers.expat.ExpatError as exc:
        location = Location(exc.lineno, exc.offset)
        raise ForkedStructureError(f"Malformed forked representation: {exc}", location) from exc
    events.append(ReaderEvent(EventType.END_DOCUMENT, here()))
    return events


class ForkedReader:
    """
    Pull reader over a forked representation document.
    The reader starts on START_DOCUMENT; callers advance with next() or next_tag().
    """

    def __init__(self, source: bytes | str) -> None:
        self._events: list[ReaderEvent] = _parse_events(source)
        self._index: int = 0

    @classmethod
    def from_stream(cls, stream: IO[bytes] | IO[str]) -> "ForkedReader":
        # The stream stays open; it belongs to the caller.
        return cls(stream.read())

    @property
    def _current(self) -> ReaderEvent:
        return self._events[self._index]

    @property
    def event_type(self) -> EventType:
        return self._current.type

    @property
    def local_name(self) -> str | None:
        return self._current.name

    @property
    def location(self) -> Location:
        return self._current.location

    @property
    def text(self) -> str:
        return self._current.text

    def attribute(self, name: str) -> str | None:
        return self._current.attributes.get(name)

    def has_next(self) -> bool:
        return self._index < len(self._events) - 1

    def next(self) -> EventType:
        if not self.has_next():
            raise ForkedStructureError(f"No events left after end of document at {self.location}", self.location)
        self._index += 1
        return self.event_type

    def next_tag(self) -> EventType:
        """Advance to the next start or end tag, skipping whitespace-only text."""
        event = self.next()
        while event is EventType.CHARACTERS and not self.text.strip():
            event = self.next()
        if event not in (EventType.START_ELEMENT, EventType.END_ELEMENT):
            raise ForkedStructureError(
                f"Expected a start or end tag but found {event.name} at {self.location}",
                self.location,
            )
        return event

    def require(self, event_type: EventType, name: str | None = None) -> None:
        if self.event_type is not event_type:
            raise ForkedStructureError(
                f"Expected {event_type.name} but found {self.event_type.name} at {self.location}",
                self.location,
            )
        if name is not None and self.local_name != name:
            raise ForkedStructureError(
                f"Expected element <{name}> but found <{self.local_name}> at {self.location}",
                self.location,
            )
