"""Injectable time source.

Services take a Clock instead of calling datetime.now() so code and token
expiry can be exercised without patching time.
"""

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current timezone-aware UTC time."""
    return datetime.now(UTC)
