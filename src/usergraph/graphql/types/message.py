"""
Message GraphQL type definitions
"""

import strawberry


@strawberry.type
class Message:
    """Echo of a sent message, stamped with the server time it was handled."""

    message: str
    timestamp: str
