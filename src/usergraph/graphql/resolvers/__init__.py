"""Resolver package for the GraphQL schema.

Resolvers read users from the provider placed in the GraphQL context
(``info.context["users"]``) and never touch module-level data directly.
"""
