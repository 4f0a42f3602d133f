"""Capabilities a user record must provide.

The account core depends on these small protocols instead of a user base
class: anything with an id can be looked up, anything with a client-safe
projection can be rendered into a UserView.
"""

from typing import Any, Protocol
from uuid import UUID


class Identifiable(Protocol):
    """Record addressable by a stable id."""

    id: UUID


class ClientProjectable(Protocol):
    """Record that can render itself without secrets."""

    def to_public(self) -> dict[str, Any]:
        """Return the fields a client may see (never the password hash)."""
        ...
