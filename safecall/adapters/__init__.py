"""Adapter package for platform-facing implementations.

Purpose:
    Hold the concrete diagnostic slots and the sentinel-returning primitives
    that guarded calls wrap.

Dependencies:
    Individual submodules depend on ``threading``, ``hashlib``, ``binascii``,
    ``jellyfish`` and the domain protocol definitions.

Call context:
    Imported by ``safecall.strings`` for runtime wiring and by tests.
"""
