"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool

from fefelina_access.config import Settings

POOL_NAME = "fefelina-access"


def create_pool(settings: Settings) -> AsyncConnectionPool:
    """Create the access engine pool from settings, left closed.

    ``access_runtime`` opens it with ``await pool.open()`` and closes it on exit.
    Connections run outside autocommit; the unit of work commits or rolls back.
    """
    return AsyncConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.database_pool_min_size,
        max_size=settings.database_pool_max_size,
        timeout=settings.database_pool_timeout,
        name=POOL_NAME,
        kwargs={"autocommit": False},
        open=False,
    )
