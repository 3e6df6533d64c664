from infra.db.models import Base, UptimeCheckModel
from infra.db.session import (
    close_engine,
    create_database_schema,
    get_engine,
    get_session_factory,
    ping_database,
)

__all__ = [
    "Base",
    "UptimeCheckModel",
    "close_engine",
    "create_database_schema",
    "get_engine",
    "get_session_factory",
    "ping_database",
]
