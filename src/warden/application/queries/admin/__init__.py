from warden.application.queries.admin.get_user_query import GetUserQuery
from warden.application.queries.admin.list_users_query import ListUsersQuery

__all__ = [
    "GetUserQuery",
    "ListUsersQuery",
]
