"""
gdgen — build-time code generation for Godot + Rust (gdext) projects.
"""

__version__ = "0.1.0"
