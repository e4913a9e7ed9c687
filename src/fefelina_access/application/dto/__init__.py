"""Application DTOs."""

from fefelina_access.application.dto.revocation import RevocationImpact

__all__ = ["RevocationImpact"]
