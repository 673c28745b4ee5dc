"""Warden - user accounts, authentication and session management backend."""

__version__ = "1.0.0"
