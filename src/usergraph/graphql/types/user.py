"""
User GraphQL type definitions
"""

import strawberry

from ...store import UserRecord


@strawberry.type
class User:
    """User type for GraphQL API."""

    id: strawberry.ID
    name: str
    email: str

    @classmethod
    def from_record(cls, record: UserRecord) -> "User":
        return cls(id=strawberry.ID(record.id), name=record.name, email=record.email)
