from warden.application.context.auth_context import AuthContext

__all__ = ["AuthContext"]
