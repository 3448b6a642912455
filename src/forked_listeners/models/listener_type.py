"""Legacy listener type aliases."""

from __future__ import annotations

from enum import Enum

FORMATTER_PACKAGE = "org.apache.tools.ant.taskdefs.optional.junitlauncher"

LEGACY_PLAIN_FORMATTER = f"{FORMATTER_PACKAGE}.LegacyPlainResultFormatter"
LEGACY_BRIEF_FORMATTER = f"{FORMATTER_PACKAGE}.LegacyBriefResultFormatter"
LEGACY_XML_FORMATTER = f"{FORMATTER_PACKAGE}.LegacyXmlResultFormatter"


class ListenerType(str, Enum):
    LEGACY_PLAIN = "legacy-plain"
    LEGACY_BRIEF = "legacy-brief"
    LEGACY_XML = "legacy-xml"

    @property
    def implementation_id(self) -> str:
        return _IMPLEMENTATIONS[self]


_IMPLEMENTATIONS: dict[ListenerType, str] = {
    ListenerType.LEGACY_PLAIN: LEGACY_PLAIN_FORMATTER,
    ListenerType.LEGACY_BRIEF: LEGACY_BRIEF_FORMATTER,
    ListenerType.LEGACY_XML: LEGACY_XML_FORMATTER,
}
