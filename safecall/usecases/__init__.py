"""Use-case layer: guarded invocation of sentinel-returning primitives.

Modules here depend on domain ports only and never perform I/O themselves.
"""
