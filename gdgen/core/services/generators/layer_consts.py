"""
Layer constants generator — one Rust enum per layer group.

    #[derive(Debug, Clone, Copy, PartialEq, Eq, Hash)]
    #[repr(u32)]
    pub enum Physics2d {
        COLLISIONS = 1,
        NONCOLLIDING = 2,
    }
"""

from __future__ import annotations

from typing import Literal

from gdgen.core.errors import DuplicateConstantName
from gdgen.core.models.layer import LayerGroup
from gdgen.core.models.generated import GeneratedFile
from gdgen.core.services.generators.rust import doc_code, file_header
from gdgen.core.services.naming import constant_name

MODULE = "layer_consts"

_DERIVES = "#[derive(Debug, Clone, Copy, PartialEq, Eq, Hash)]"


def generate_layer_consts(
    groups: list[LayerGroup],
    *,
    values: Literal["index", "bitmask"] = "index",
) -> GeneratedFile | None:
    """Render ``layer_consts.rs``.

    Args:
        groups: Layer groups from ``extract_layers()``.
        values: Variant value: the layer index, or its bit (``1 << (index - 1)``).

    Returns:
        GeneratedFile, or None when there are no named layers.

    Raises:
        DuplicateConstantName: Two layers of a group render to the same variant.
    """
    if not groups:
        return None

    ordered = sorted(groups, key=lambda g: g.type_name)
    enums = [format_group(group, values=values) for group in ordered]

    content = file_header("allow(dead_code)", "allow(non_camel_case_types)")
    content += "\n" + "\n".join(enums)

    return GeneratedFile(
        path=f"{MODULE}.rs",
        content=content,
        feature="layer_consts",
        reason=f"Layer enums for groups: {', '.join(g.group_name for g in ordered)}",
    )


def format_group(group: LayerGroup, *, values: str = "index") -> str:
    """Render one group as a Rust enum."""
    seen: dict[str, str] = {}
    variants: list[str] = []
    for entry in sorted(group.entries, key=lambda e: e.index):
        variant = constant_name(entry.name, fallback=f"LAYER_{entry.index}")
        if variant in seen:
            raise DuplicateConstantName(
                f"{group.type_name}::{variant}",
                f"layers '{seen[variant]}' and '{entry.name}' in {group.group_name}",
            )
        seen[variant] = entry.name
        value = entry.mask if values == "bitmask" else entry.index
        variants.append(f"    /// Layer {entry.index}: {doc_code(entry.name)}")
        variants.append(f"    {variant} = {value},")

    lines = [
        f"/// Named layers of {doc_code(group.group_name)}.",
        _DERIVES,
        "#[repr(u32)]",
        f"pub enum {group.type_name} {{",
        *variants,
        "}",
    ]
    if values == "index":
        lines += [
            "",
            f"impl {group.type_name} {{",
            "    /// Bit of this layer in a collision or visibility mask.",
            "    pub const fn mask(self) -> u32 {",
            "        1 << (self as u32 - 1)",
            "    }",
            "}",
        ]
    return "\n".join(lines) + "\n"
