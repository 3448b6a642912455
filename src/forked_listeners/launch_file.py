"""Loading launch configuration from YAML or markdown frontmatter."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import frontmatter
import yaml

from forked_listeners.models.launch_spec import LaunchSpec

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


def load_launch_file(launch: Path | str) -> LaunchSpec:
    metadata, notes, source_label = load_launch_source(launch)
    spec = LaunchSpec.model_validate({**metadata, "notes": notes.strip()})
    if not spec.listeners:
        logger.warning("No listeners configured in %s", source_label)
    logger.debug("Loaded %d listener(s) from %s", len(spec.listeners), source_label)
    return spec


def load_launch_source(launch: Path | str) -> tuple[dict[str, Any], str, str]:
    """Return (metadata, markdown body, label) for a launch file path or inline text."""
    if isinstance(launch, str):
        if "\n" in launch or not Path(launch).exists():
            post = frontmatter.loads(launch)
            return dict(post.metadata), post.content, "<inline>"
        launch = Path(launch)
    if not launch.exists():
        raise FileNotFoundError(launch)
    if launch.suffix.lower() in YAML_SUFFIXES:
        raw = yaml.safe_load(launch.read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Launch file {launch} must contain a mapping at the top level.")
        return raw, "", str(launch)
    post = frontmatter.load(str(launch))
    return dict(post.metadata), post.content, str(launch)
