"""
Domain models — Pydantic types for the generator.

All models are re-exported here for convenient access:

    from gdgen.core.models import ConfigDocument, LayerGroup, ActionEntry, GeneratedFile
"""

from gdgen.core.models.action import ActionEntry, InputBinding
from gdgen.core.models.config import Features, GeneratorConfig
from gdgen.core.models.document import GLOBAL_SECTION, ConfigDocument, Entry, Section
from gdgen.core.models.layer import LayerEntry, LayerGroup
from gdgen.core.models.manifest import ManifestDocument
from gdgen.core.models.scene import SceneEntry
from gdgen.core.models.generated import GeneratedFile

__all__ = [
    # action.py
    "ActionEntry",
    # document.py
    "ConfigDocument",
    "Entry",
    # config.py
    "Features",
    "GLOBAL_SECTION",
    # generated.py
    "GeneratedFile",
    "GeneratorConfig",
    "InputBinding",
    # layer.py
    "LayerEntry",
    "LayerGroup",
    # manifest.py
    "ManifestDocument",
    # scene.py
    "SceneEntry",
    "Section",
]
