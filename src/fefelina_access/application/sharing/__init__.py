"""Client sharing grants."""

from fefelina_access.application.sharing.grant_store import SharingGrantStore

__all__ = ["SharingGrantStore"]
