"""Resources subject to CRUD permission checks."""

from enum import StrEnum

from fefelina_access.domain.exceptions import ValidationError


class ResourceTag(StrEnum):
    """Business areas a profile may be granted CRUD access to."""

    DASHBOARD = "dashboard"
    CLIENTS = "clients"
    LEADS = "leads"
    AGENDA = "agenda"
    SERVICES = "services"
    VISITS = "visits"
    PETS = "pets"
    FINANCEIRO = "financeiro"
    RELATORIOS = "relatorios"
    SETUP = "setup"

    @classmethod
    def parse(cls, value: "str | ResourceTag") -> "ResourceTag":
        """Validate an externally supplied resource name."""
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"Unknown resource: {value!r}") from None
