"""CRUD actions for resource permissions."""

from enum import StrEnum

from fefelina_access.domain.exceptions import ValidationError


class CrudAction(StrEnum):
    """Actions that can be granted on a resource."""

    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def parse(cls, value: "str | CrudAction") -> "CrudAction":
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"Unknown action: {value!r}") from None
