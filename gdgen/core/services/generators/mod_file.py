"""
Module index generator — ``mod.rs`` linking every generated file.

Only the relative paths of the generated files are read, never their
content. Lines are sorted by path so the index is stable no matter which
features ran first.
"""

from __future__ import annotations

from gdgen.core.models.generated import GeneratedFile
from gdgen.core.services.generators.rust import file_header

MOD_FILE = "mod.rs"


def format_mod_line(file_name: str) -> str:
    """``pub mod`` declaration for one file of the output directory."""
    stem = file_name[:-3] if file_name.endswith(".rs") else file_name
    return f"pub mod {stem};"


def generate_mod_file(files: list[GeneratedFile]) -> GeneratedFile | None:
    """Render ``mod.rs`` for *files* (``mod.rs`` itself is skipped).

    Returns:
        None when nothing was generated.
    """
    paths = sorted({f.path for f in files if f.path != MOD_FILE})
    if not paths:
        return None

    content = file_header() + "\n" + "\n".join(format_mod_line(p) for p in paths) + "\n"
    return GeneratedFile(
        path=MOD_FILE,
        content=content,
        reason=f"Module index for {len(paths)} generated files",
    )
