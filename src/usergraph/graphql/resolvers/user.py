"""
User resolvers for GraphQL API
"""

import strawberry

from ...store import UserProvider
from ..types.user import User


def get_user_provider(info: strawberry.Info) -> UserProvider:
    """Return the user provider injected into the request context."""
    return info.context["users"]


async def resolve_users(info: strawberry.Info) -> list[User]:
    """Get every user, in the provider's insertion order."""
    return [User.from_record(record) for record in get_user_provider(info).list_all()]


async def resolve_user_by_id(info: strawberry.Info, id: str) -> User | None:
    """Get a user by ID.

    An unknown ID is a valid empty result, not an error.
    """
    record = get_user_provider(info).find_by_id(id)
    if record is None:
        return None
    return User.from_record(record)
