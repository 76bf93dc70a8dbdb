import strawberry

GREETING = "Hello from Strawberry!"


async def resolve_hello(info: strawberry.Info) -> str:
    _ = info  # Unused but required by GraphQL interface
    return GREETING
