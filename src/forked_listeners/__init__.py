"""Public package exports."""

from forked_listeners.conditions import ConditionEvaluator
from forked_listeners.conditions import PropertyConditions
from forked_listeners.errors import ForkedRepresentationError
from forked_listeners.errors import ForkedStructureError
from forked_listeners.errors import ListenerConfigurationError
from forked_listeners.errors import MissingAttributeError
from forked_listeners.forked import ForkedReader
from forked_listeners.launch import decode_listeners
from forked_listeners.launch import encode_listeners
from forked_listeners.models import ListenerDefinition
from forked_listeners.models import ListenerType
from forked_listeners.models import NamedTest
from forked_listeners.models import TestDefinition

__all__ = [
    "ConditionEvaluator",
    "ForkedReader",
    "ForkedRepresentationError",
    "ForkedStructureError",
    "ListenerConfigurationError",
    "ListenerDefinition",
    "ListenerType",
    "MissingAttributeError",
    "NamedTest",
    "PropertyConditions",
    "TestDefinition",
    "decode_listeners",
    "encode_listeners",
]
