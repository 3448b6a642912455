"""Model types for listener configuration."""

from forked_listeners.models.launch_spec import LaunchSpec
from forked_listeners.models.listener_definition import ListenerDefinition
from forked_listeners.models.listener_type import ListenerType
from forked_listeners.models.test_definition import NamedTest
from forked_listeners.models.test_definition import TestDefinition

__all__ = [
    "LaunchSpec",
    "ListenerDefinition",
    "ListenerType",
    "NamedTest",
    "TestDefinition",
]
