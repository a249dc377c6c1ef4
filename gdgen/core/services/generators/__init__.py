"""
Generators — render Rust source from extracted project data.

Each generator module exposes a ``generate_*()`` function that returns
``GeneratedFile`` instances. Generators are pure: they never touch the
filesystem and produce byte-identical output for identical input.
"""
