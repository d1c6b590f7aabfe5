"""Permission subject - a user or a users group, never both."""

from dataclasses import dataclass
from uuid import UUID

from warden.domain.exceptions import InvalidArgument


@dataclass(frozen=True)
class UserSubject:
    """Permission written for a single user."""

    user_id: str

    def __post_init__(self) -> None:
        if not isinstance(self.user_id, str) or not self.user_id.strip():
            raise InvalidArgument("User id must be a non-empty string")


@dataclass(frozen=True)
class GroupSubject:
    """Permission written for a users group (applies to all members)."""

    group_id: UUID


Subject = UserSubject | GroupSubject


def as_subject(value: "Subject | str | None") -> Subject:
    """Coerce a bare user id into UserSubject. Raises InvalidArgument for None."""
    if value is None:
        raise InvalidArgument("Subject is required")
    if isinstance(value, (UserSubject, GroupSubject)):
        return value
    if isinstance(value, str):
        return UserSubject(value)
    raise InvalidArgument(f"Unsupported subject: {value!r}")
