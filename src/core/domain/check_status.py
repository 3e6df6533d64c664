from enum import Enum


class CheckStatus(str, Enum):
    UP = "up"
    DEGRADED = "degraded"
    DOWN = "down"
