"""
Root GraphQL mutation definitions
"""

import strawberry

from ..types.message import Message


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    @strawberry.mutation(name="sendMessage")
    async def send_message(self, info: strawberry.Info, message: str) -> Message:
        """Echo a message back with a server-generated timestamp."""
        from ..resolvers.message import resolve_send_message

        return await resolve_send_message(info, message)
