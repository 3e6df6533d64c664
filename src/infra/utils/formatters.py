_BYTE_UNITS = ("B", "KB", "MB", "GB", "TB", "PB")

DAY_SECONDS = 86_400
HOUR_SECONDS = 3_600
MINUTE_SECONDS = 60


def format_bytes(bytes_size: int | float) -> str:
    if bytes_size < 0:
        raise ValueError("Bytes size must be non-negative")

    size = float(bytes_size)

    for unit in _BYTE_UNITS[:-1]:
        if size < 1024.0:
            return f"{size:.2f} {unit}"

        size /= 1024.0

    return f"{size:.2f} {_BYTE_UNITS[-1]}"


def format_time(elapsed_seconds: float) -> str:
    days, remainder = divmod(max(elapsed_seconds, 0.0), DAY_SECONDS)
    hours, remainder = divmod(remainder, HOUR_SECONDS)
    minutes, seconds = divmod(remainder, MINUTE_SECONDS)

    return f"{int(days):02d}d {int(hours):02d}h {int(minutes):02d}m {seconds:05.2f}s"
