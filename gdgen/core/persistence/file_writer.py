"""
File writer — puts generated files on disk.

Generated files are always regenerated, but a file whose content is
unchanged is not rewritten, so build tools that watch modification times
do not rebuild for nothing.

``atomic_write_text()`` writes to a temp file in the target directory and
renames it over the target, so a crash never leaves a half-written file.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from gdgen.core.errors import OutputDirUnwritable
from gdgen.core.models.generated import GeneratedFile

logger = logging.getLogger(__name__)


def ensure_output_dir(path: Path) -> Path:
    """Create the output directory (and parents) if needed.

    Raises:
        OutputDirUnwritable: If it cannot be created or is not a directory.
    """
    if path.exists() and not path.is_dir():
        raise OutputDirUnwritable(path, "exists and is not a directory")
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputDirUnwritable(path, e.strerror or str(e)) from e
    return path


def write_generated_file(output_dir: Path, generated: GeneratedFile) -> bool:
    """Write one generated file below *output_dir*.

    Returns:
        True if the file was written, False if it already had this content.

    Raises:
        OutputDirUnwritable: If the file cannot be written.
    """
    target = output_dir / generated.path

    if target.is_file():
        try:
            if target.read_text(encoding="utf-8") == generated.content:
                logger.debug("Unchanged: %s", target)
                return False
        except (OSError, UnicodeDecodeError):
            pass

    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps "\n" on every platform so output is byte-identical
        with open(target, "w", encoding="utf-8", newline="") as fh:
            fh.write(generated.content)
    except OSError as e:
        raise OutputDirUnwritable(output_dir, f"cannot write {generated.path}: {e}") from e

    logger.info("Wrote %s (%s)", target, generated.feature or generated.reason)
    return True


def atomic_write_text(path: Path, content: str, *, prefix: str = ".gdgen_") -> None:
    """Replace *path* with *content* atomically (temp file + rename).

    An existing target keeps its permission bits.

    Raises:
        OSError: If the temp file cannot be written or renamed. The target
            is left untouched in that case.
    """
    fd, tmp_path = tempfile.mkstemp(dir=path.parent, prefix=prefix, suffix=".tmp")
    tmp = Path(tmp_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(content)
        # mkstemp creates 0600
        if path.exists():
            shutil.copymode(path, tmp)
        tmp.replace(path)
        logger.debug("Atomically replaced %s", path)
    except Exception:
        tmp.unlink(missing_ok=True)
        raise
