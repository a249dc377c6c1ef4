"""
CLI command groups — thin click wrappers over ``gdgen.core``.
"""
