"""Queries: read-only use cases."""

from warden.application.queries.admin import GetUserQuery, ListUsersQuery

__all__ = [
    "GetUserQuery",
    "ListUsersQuery",
]
