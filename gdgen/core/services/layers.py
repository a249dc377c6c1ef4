"""
Layer extractor — groups ``[layer_names]`` entries per engine group.

    [layer_names]
    2d_physics/layer_1="collisions"
    2d_physics/layer_2="noncolliding"
    2d_render/layer_1="ghosts"

yields two groups, ``Physics2d`` [collisions=1, noncolliding=2] and
``Render2d`` [ghosts=1].
"""

from __future__ import annotations

import logging
import re

from gdgen.core.errors import (
    DuplicateLayerIndex,
    InvalidLayerKey,
    MissingLayerSection,
    NameCollision,
)
from gdgen.core.models.document import ConfigDocument
from gdgen.core.models.layer import LayerEntry, LayerGroup
from gdgen.core.services.naming import group_type_name

logger = logging.getLogger(__name__)

LAYER_SECTION = "layer_names"

_LAYER_KEY = re.compile(r"^(?P<group>[^/]+)/layer_(?P<index>.*)$")
_DIGITS = re.compile(r"^[0-9]+$")


def extract_layers(document: ConfigDocument, *, required: bool = True) -> list[LayerGroup]:
    """Extract layer groups from a project document.

    Args:
        document: Parsed project file.
        required: Raise if the section is missing (layer output enabled).

    Returns:
        Groups sorted by type name, each with entries sorted by index.

    Raises:
        MissingLayerSection: Section absent and *required*.
        InvalidLayerKey: Layer number is not an integer >= 1.
        DuplicateLayerIndex: Two keys name the same layer differently.
        NameCollision: Two groups map to the same type name.
    """
    section = document.section(LAYER_SECTION)
    if section is None:
        if required:
            raise MissingLayerSection(document.path)
        return []

    # group → index → entry
    by_group: dict[str, dict[int, LayerEntry]] = {}

    for entry in section.entries:
        parsed = parse_layer_key(entry.key, entry.line)
        if parsed is None:
            logger.warning("Ignoring non-layer key '%s' in [%s]", entry.key, LAYER_SECTION)
            continue
        group, index = parsed

        if not entry.value.strip():
            logger.debug("Skipping unnamed layer %s", entry.key)
            continue

        layer = LayerEntry(group=group, index=index, name=entry.value, key=entry.key)
        layers = by_group.setdefault(group, {})
        previous = layers.get(index)
        if (
            previous is not None
            and previous.key != layer.key
            and previous.name != layer.name
        ):
            raise DuplicateLayerIndex(group, index, previous.key, layer.key)
        layers[index] = layer

    groups = [
        LayerGroup(
            group_name=group,
            type_name=group_type_name(group),
            entries=[layers[i] for i in sorted(layers)],
        )
        for group, layers in by_group.items()
    ]
    _check_type_names(groups)

    groups.sort(key=lambda g: g.type_name)
    logger.info(
        "Extracted %d layer groups (%d layers)",
        len(groups),
        sum(len(g.entries) for g in groups),
    )
    return groups


def parse_layer_key(key: str, line: int | None = None) -> tuple[str, int] | None:
    """Split ``<group>/layer_<n>`` into (group, n).

    Returns:
        None if *key* is not a layer key at all.

    Raises:
        InvalidLayerKey: The key is a layer key but ``n`` is not an integer >= 1.
    """
    match = _LAYER_KEY.match(key)
    if match is None:
        return None

    raw_index = match.group("index")
    if not _DIGITS.match(raw_index):
        raise InvalidLayerKey(key, line)
    index = int(raw_index)
    if index < 1:
        raise InvalidLayerKey(key, line)
    return match.group("group"), index


def _check_type_names(groups: list[LayerGroup]) -> None:
    seen: dict[str, str] = {}
    for group in sorted(groups, key=lambda g: g.group_name):
        other = seen.get(group.type_name)
        if other is not None:
            raise NameCollision(other, group.group_name, group.type_name)
        seen[group.type_name] = group.group_name
