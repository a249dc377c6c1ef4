"""
Generator errors — the failure taxonomy for a generation run.

Every failure stems from malformed input or unwritable filesystem state,
so nothing here is retried. Each error carries enough context (file path,
line, offending key or name) to fix the configuration without reading
the generator's internals.

The orchestrator surfaces ``error.code`` (the class name) to callers.
"""

from __future__ import annotations

from pathlib import Path


class GeneratorError(Exception):
    """Base class for all generation failures."""

    @property
    def code(self) -> str:
        return type(self).__name__


class ConfigError(GeneratorError):
    """Raised when gdgen.yml is missing, invalid, or incomplete."""


class ConfigNotFound(GeneratorError):
    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"Project config file not found: {self.path}")


class ConfigParseError(GeneratorError):
    def __init__(self, path: Path | str | None, line: int, reason: str):
        self.path = Path(path) if path else None
        self.line = line
        self.reason = reason
        where = f"{self.path}:{line}" if self.path else f"line {line}"
        super().__init__(f"{where}: {reason}")


class MissingLayerSection(GeneratorError):
    def __init__(self, path: Path | str | None):
        self.path = Path(path) if path else None
        source = str(self.path) if self.path else "project config"
        super().__init__(
            f"No [layer_names] section in {source} "
            "(name at least one layer in Project Settings, or disable layer_consts)"
        )


class InvalidLayerKey(GeneratorError):
    def __init__(self, key: str, line: int | None = None):
        self.key = key
        self.line = line
        suffix = f" (line {line})" if line else ""
        super().__init__(
            f"Invalid layer key '{key}'{suffix}: expected '<group>/layer_<n>' with n >= 1"
        )


class NameCollision(GeneratorError):
    def __init__(self, group_a: str, group_b: str, identifier: str):
        self.group_a = group_a
        self.group_b = group_b
        self.identifier = identifier
        super().__init__(
            f"Layer groups '{group_a}' and '{group_b}' both map to type name '{identifier}'"
        )


class DuplicateConstantName(GeneratorError):
    def __init__(self, name: str, detail: str = ""):
        self.name = name
        self.detail = detail
        msg = f"Duplicate generated constant name '{name}'"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class DuplicateLayerIndex(DuplicateConstantName):
    """Two different layer keys claim the same index within one group."""

    def __init__(self, group: str, index: int, key_a: str, key_b: str):
        self.group = group
        self.index = index
        self.key_a = key_a
        self.key_b = key_b
        super().__init__(
            f"{group}/layer_{index}",
            f"keys '{key_a}' and '{key_b}' name the same layer with different names",
        )


class OutputDirUnwritable(GeneratorError):
    def __init__(self, path: Path | str, reason: str = ""):
        self.path = Path(path)
        msg = f"Cannot create output directory: {self.path}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class ManifestNotFound(GeneratorError):
    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"Manifest file not found: {self.path}")


class IconPathConflict(GeneratorError):
    def __init__(self, class_name: str, existing_path: str, requested_path: str):
        self.class_name = class_name
        self.existing_path = existing_path
        self.requested_path = requested_path
        super().__init__(
            f"Icon for class '{class_name}' is already declared as '{existing_path}', "
            f"refusing to replace it with '{requested_path}'"
        )


class InvalidIconSource(GeneratorError):
    def __init__(self, class_name: str, path: str, reason: str):
        self.class_name = class_name
        self.path = path
        super().__init__(f"Invalid icon source for class '{class_name}' ({path}): {reason}")


class ManifestWriteFailed(GeneratorError):
    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        super().__init__(f"Failed to write manifest {self.path}: {reason}")
