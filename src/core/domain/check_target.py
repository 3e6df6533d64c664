from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class CheckTarget:
    id: UUID
    url: str
