"""
Generated module model — the output unit of every Rust emitter.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """One Rust source file rendered in memory.

    Emitters return these without touching the filesystem; the generate
    use case decides what reaches disk.

    Attributes:
        path:      Path relative to the output directory (``layer_consts.rs``).
        content:   Full file content with ``\\n`` line endings.
        feature:   Feature that produced the file; empty for ``mod.rs``.
        reason:    One-line summary for logs.
    """

    path: str
    content: str
    feature: str = ""
    reason: str = ""
