"""
hashing.py
==========

Does: Compute an order-independent content hash for a name → hex mapping.
Used By: VariableStore.get_resolved_view (change detection without deep compares).
"""

from __future__ import annotations

import hashlib
from collections.abc import Mapping

__all__ = ["hash_definitions"]


def hash_definitions(definitions: Mapping[str, str]) -> str:
    """Does: Hash sorted (name, value) pairs so insertion order never matters."""
    digest = hashlib.sha1(usedforsecurity=False)
    for name, value in sorted(definitions.items()):
        digest.update(name.encode("utf-8"))
        digest.update(b"\x00")
        digest.update(value.encode("utf-8"))
        digest.update(b"\x01")
    return digest.hexdigest()
