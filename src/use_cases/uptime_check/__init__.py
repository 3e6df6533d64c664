from use_cases.uptime_check.record_uptime_check_use_case import RecordUptimeCheckUseCase
from use_cases.uptime_check.run_uptime_checks_use_case import RunUptimeChecksUseCase

__all__ = [
    "RecordUptimeCheckUseCase",
    "RunUptimeChecksUseCase",
]
