"""Stable keys linking user checklist items to their template origin."""
import hashlib

SEPARATOR = "\u0000"


def derive_stable_key(section_title: str, item_title: str) -> str:
    """
    Derive the stable key for an item from its section and item titles.

    The key is computed once, when a user item is created, and sync uses it
    to find that item again regardless of ordering changes. Titles are the
    identity: renaming either title yields a different key.

    The NUL separator keeps ("a b", "c") and ("a", "b c") apart.
    """
    raw = f"{section_title}{SEPARATOR}{item_title}".encode("utf-8")
    return hashlib.sha256(raw).hexdigest()
