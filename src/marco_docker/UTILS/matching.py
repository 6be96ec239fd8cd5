"""
Predicates deciding which environment entry names a container's domain and
which container ports may be proxied.

Both checks default to plain substring containment, which is loose: a key
of ``DOMAIN`` also matches ``NOT_DOMAIN=x`` and an allowlist of ``8080`` also
admits port ``80``.
``MatchMode.EXACT`` compares whole tokens instead.
"""
from enum import Enum


class MatchMode(str, Enum):
    """How configured keys and ports are compared against container metadata."""

    SUBSTRING = "substring"
    EXACT = "exact"


def env_entry_matches(entry: str, key: str, mode: MatchMode = MatchMode.SUBSTRING) -> bool:
    """
    Checks whether a ``KEY=VALUE`` environment entry is the domain variable.

    Args:
        entry: Raw environment entry of a container.
        key: Configured domain variable name.
        mode: Matching mode.

    Returns:
        True if the entry should be used as the domain source.
    """
    if mode == MatchMode.EXACT:
        return entry.split("=", 1)[0] == key
    return key in entry


def port_allowed(port: str, allowlist: str, mode: MatchMode = MatchMode.SUBSTRING) -> bool:
    """
    Checks whether a bare container port is eligible for proxying.

    Args:
        port: Port number without protocol, e.g. ``"80"``.
        allowlist: Comma separated allowlist, e.g. ``"80,8080"``.
        mode: Matching mode.

    Returns:
        True if the port may be proxied.
    """
    if mode == MatchMode.EXACT:
        return port in [p.strip() for p in allowlist.split(",")]
    return port in allowlist
