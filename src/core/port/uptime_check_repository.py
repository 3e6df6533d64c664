from abc import ABC, abstractmethod

from core.domain.check_result import CheckResult


class UptimeCheckRepository(ABC):
    @abstractmethod
    async def add_check(self, result: CheckResult) -> None:
        raise NotImplementedError
