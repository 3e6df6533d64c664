from abc import ABC, abstractmethod

from core.domain.check_result import CheckResult
from core.domain.check_target import CheckTarget


class Prober(ABC):
    @abstractmethod
    async def probe(self, target: CheckTarget) -> CheckResult:
        """Check one target. Implementations must never raise; failures become DOWN results."""
        raise NotImplementedError
