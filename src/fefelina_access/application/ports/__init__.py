"""Application ports - interfaces for external adapters."""

from fefelina_access.application.ports.session_source import SessionSource
from fefelina_access.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "SessionSource",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
