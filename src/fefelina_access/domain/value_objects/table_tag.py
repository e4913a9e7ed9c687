"""Tables carrying field-level security rules."""

from enum import StrEnum

from fefelina_access.domain.exceptions import ValidationError


class TableTag(StrEnum):
    """Tables whose fields can be masked per profile."""

    CLIENTS = "clients"
    PETS = "pets"
    VISITS = "visits"
    SERVICES = "services"

    @classmethod
    def parse(cls, value: "str | TableTag") -> "TableTag":
        """Validate an externally supplied table name."""
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"Unknown table: {value!r}") from None
