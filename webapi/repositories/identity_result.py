"""
Outcome of an identity store write.
"""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class IdentityError:
    """A store rejection: a stable code plus a localizable message template."""

    code: str
    description: str
    args: Tuple = ()


@dataclass(frozen=True)
class IdentityResult:
    succeeded: bool
    errors: List[IdentityError] = field(default_factory=list)

    @classmethod
    def success(cls) -> "IdentityResult":
        return cls(succeeded=True)

    @classmethod
    def failed(cls, *errors: IdentityError) -> "IdentityResult":
        return cls(succeeded=False, errors=list(errors))


def duplicate_role_name(name: str) -> IdentityError:
    return IdentityError("DuplicateRoleName", "Role name '{0}' is already taken.", (name,))


def invalid_role_name(name: str) -> IdentityError:
    return IdentityError("InvalidRoleName", "Role name '{0}' is invalid.", (name or "",))


def database_error(detail: str) -> IdentityError:
    return IdentityError("DatabaseError", "{0}", (detail,))
