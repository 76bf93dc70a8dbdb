"""
Message resolvers for GraphQL API
"""

from datetime import UTC, datetime

import strawberry

from ...logging import get_logger
from ..types.message import Message

logger = get_logger(__name__)


def utc_timestamp(now: datetime | None = None) -> str:
    """Format a UTC instant as ISO-8601 with millisecond precision.

    Args:
        now: Aware datetime to format; defaults to the current wall-clock time

    Returns:
        Timestamp such as ``2026-10-19T12:34:56.789Z``
    """
    if now is None:
        now = datetime.now(UTC)
    elif now.tzinfo is None:
        raise ValueError("Timestamp must be timezone-aware")

    return now.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def resolve_send_message(info: strawberry.Info, message: str) -> Message:
    """Echo the message back, stamped with the time it was handled.

    The message is returned verbatim; nothing is stored between calls.
    """
    _ = info

    echo = Message(message=message, timestamp=utc_timestamp())
    logger.debug("Message echoed", length=len(message), timestamp=echo.timestamp)
    return echo
