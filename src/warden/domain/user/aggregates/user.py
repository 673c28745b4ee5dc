"""User aggregate."""

from datetime import datetime
from typing import Optional, Union
from uuid import UUID, uuid4

from warden.domain.shared.exceptions import ValidationError
from warden.domain.shared.time import utc_now
from warden.domain.user.value_objects import Email, UserRole, UserStatus, Username

NAME_MAX_LENGTH = 50


def _normalize_name(name: Optional[str]) -> Optional[str]:
    if name is None:
        return None
    stripped = name.strip()
    if len(stripped) > NAME_MAX_LENGTH:
        msg = f"Name cannot exceed {NAME_MAX_LENGTH} characters"
        raise ValidationError(msg)
    return stripped or None


class User:
    """
    User aggregate root.

    Holds the account identity, the bcrypt password hash, the role and the
    account status. The hash is opaque to the aggregate: hashing and
    verification happen in the authentication service.
    """

    def __init__(  # NOQA: PLR0913
        self,
        email: Union[str, Email],
        username: Union[str, Username],
        password_hash: str,
        name: Optional[str] = None,
        role: Union[str, UserRole] = UserRole.USER,
        status: Union[str, UserStatus] = UserStatus.DEACTIVATE,
        id: UUID | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
        deleted_at: datetime | None = None,
    ):
        self._email = email if isinstance(email, Email) else Email(email)
        self._username = (
            username if isinstance(username, Username) else Username(username)
        )
        self._password_hash = password_hash
        self._name = _normalize_name(name)
        self._id = id or uuid4()
        self._role = role if isinstance(role, UserRole) else UserRole(role)
        self._status = status if isinstance(status, UserStatus) else UserStatus(status)
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()
        self._deleted_at = deleted_at

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def email_obj(self) -> Email:
        return self._email

    @property
    def username(self) -> str:
        return self._username.value

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def password_hash(self) -> str:
        return self._password_hash

    @property
    def role(self) -> UserRole:
        return self._role

    @property
    def status(self) -> UserStatus:
        return self._status

    @property
    def is_admin(self) -> bool:
        return self._role == UserRole.ADMIN

    @property
    def is_deleted(self) -> bool:
        return self._deleted_at is not None

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @property
    def deleted_at(self) -> datetime | None:
        return self._deleted_at

    def update_profile(
        self,
        email: Union[str, Email, None] = None,
        username: Union[str, Username, None] = None,
        name: Optional[str] = None,
    ) -> None:
        """Apply a partial profile update. ``None`` leaves a field untouched."""
        if email is not None:
            self._email = email if isinstance(email, Email) else Email(email)
        if username is not None:
            self._username = (
                username if isinstance(username, Username) else Username(username)
            )
        if name is not None:
            self._name = _normalize_name(name)
        self._updated_at = utc_now()

    def change_password_hash(self, password_hash: str) -> None:
        if not password_hash:
            msg = "Password hash cannot be empty"
            raise ValidationError(msg)
        self._password_hash = password_hash
        self._updated_at = utc_now()

    def promote_to_admin(self) -> None:
        self._role = UserRole.ADMIN
        self._updated_at = utc_now()

    def demote_to_user(self) -> None:
        self._role = UserRole.USER
        self._updated_at = utc_now()

    def change_status(self, status: Union[str, UserStatus]) -> None:
        self._status = status if isinstance(status, UserStatus) else UserStatus(status)
        self._updated_at = utc_now()

    def mark_deleted(self) -> None:
        if self._deleted_at is None:
            self._deleted_at = utc_now()
            self._updated_at = self._deleted_at

    @classmethod
    def create(  # NOQA: PLR0913
        cls,
        email: Union[str, Email],
        username: Union[str, Username],
        password_hash: str,
        name: Optional[str] = None,
        role: UserRole = UserRole.USER,
        status: UserStatus = UserStatus.DEACTIVATE,
    ) -> "User":
        if not password_hash:
            msg = "Password hash cannot be empty"
            raise ValidationError(msg)
        return cls(
            email=email,
            username=username,
            password_hash=password_hash,
            name=name,
            role=role,
            status=status,
        )

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: UUID,
        email: Union[str, Email],
        username: Union[str, Username],
        password_hash: str,
        name: Optional[str],
        role: Union[str, UserRole],
        status: Union[str, UserStatus],
        created_at: datetime,
        updated_at: datetime,
        deleted_at: datetime | None = None,
    ) -> "User":
        return cls(
            id=id,
            email=email,
            username=username,
            password_hash=password_hash,
            name=name,
            role=role,
            status=status,
            created_at=created_at,
            updated_at=updated_at,
            deleted_at=deleted_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"User(id={self._id}, email={self._email.value}, "
            f"username={self._username.value})"
        )
