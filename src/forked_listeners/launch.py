"""Launch document exchanged between the controller and a forked worker."""

from __future__ import annotations

import io
import logging
from typing import IO, Iterable
from xml.sax.xmlreader import AttributesImpl

from forked_listeners.conditions import ConditionEvaluator
from forked_listeners.forked import ELEMENT_LAUNCH_DEF, EventType, ForkedReader, new_writer
from forked_listeners.models.listener_definition import ListenerDefinition
from forked_listeners.models.test_definition import TestDefinition

logger = logging.getLogger(__name__)


def active_listeners(
    listeners: Iterable[ListenerDefinition],
    conditions: ConditionEvaluator,
) -> list[ListenerDefinition]:
    active: list[ListenerDefinition] = []
    for listener in listeners:
        if not listener.should_use(conditions):
            logger.debug(
                "Skipping listener %s (if=%r, unless=%r)",
                listener.implementation_id,
                listener.if_condition,
                listener.unless_condition,
            )
            continue
        active.append(listener)
    return active


def write_launch_definition(
    listeners: Iterable[ListenerDefinition],
    stream: IO[str],
    conditions: ConditionEvaluator,
    test: TestDefinition | None = None,
) -> list[ListenerDefinition]:
    """
    Write the active listeners as a <launch-def> document to a caller-owned stream.
    Returns the listeners that were written.
    """
    selected = active_listeners(listeners, conditions)
    for listener in selected:
        listener.check_forkable()
    writer = new_writer(stream)
    writer.startDocument()
    writer.startElement(ELEMENT_LAUNCH_DEF, AttributesImpl({}))
    for listener in selected:
        logger.debug(
            "Forking listener %s, result file %s",
            listener.implementation_id,
            listener.require_result_file(test),
        )
        listener.to_forked_representation(writer)
    writer.endElement(ELEMENT_LAUNCH_DEF)
    writer.endDocument()
    return selected


def read_launch_definition(reader: ForkedReader) -> list[ListenerDefinition]:
    reader.next_tag()
    reader.require(EventType.START_ELEMENT, ELEMENT_LAUNCH_DEF)
    listeners: list[ListenerDefinition] = []
    while reader.next_tag() is EventType.START_ELEMENT:
        listeners.append(ListenerDefinition.from_forked_representation(reader))
    reader.require(EventType.END_ELEMENT, ELEMENT_LAUNCH_DEF)
    return listeners


def encode_listeners(
    listeners: Iterable[ListenerDefinition],
    conditions: ConditionEvaluator,
    test: TestDefinition | None = None,
) -> bytes:
    buffer = io.StringIO()
    write_launch_definition(listeners, buffer, conditions, test)
    return buffer.getvalue().encode("utf-8")


def decode_listeners(data: bytes) -> list[ListenerDefinition]:
    return read_launch_definition(ForkedReader(data))
