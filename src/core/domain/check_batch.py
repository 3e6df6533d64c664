from dataclasses import dataclass, field

from core.domain.check_target import CheckTarget
from core.exceptions.batch_too_large_error import BatchTooLargeError

MAX_BATCH_SIZE = 5


def ensure_batch_size(size: int) -> None:
    if size > MAX_BATCH_SIZE:
        raise BatchTooLargeError(size=size, limit=MAX_BATCH_SIZE)


@dataclass(frozen=True)
class CheckBatch:
    region: str
    targets: tuple[CheckTarget, ...] = field(default_factory=tuple)

    def __post_init__(self):
        ensure_batch_size(len(self.targets))

    def __len__(self) -> int:
        return len(self.targets)
