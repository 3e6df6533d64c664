from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.domain.check_result import CheckResult
from core.port.uptime_check_repository import UptimeCheckRepository
from infra.db.models import UptimeCheckModel
from infra.db.session import get_session_factory


class PostgresUptimeCheckRepository(UptimeCheckRepository):
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
    ) -> None:
        self._session_factory = session_factory

    async def add_check(self, result: CheckResult) -> None:
        async with self._session_factory() as session:
            session.add(self._to_model(result))

            await session.commit()

    def _to_model(self, result: CheckResult) -> UptimeCheckModel:
        return UptimeCheckModel(
            website_id=result.id,
            status=result.status,
            response_time=result.response_time_ms,
            status_code=result.status_code,
        )


@lru_cache
def get_uptime_check_repository() -> UptimeCheckRepository:
    session_factory = get_session_factory()

    return PostgresUptimeCheckRepository(session_factory=session_factory)
