"""Conversion between elapsed seconds and GTFS clock times."""


def seconds_to_time(seconds: int) -> str:
    """Format seconds since service start as HH:MM:SS, allowing hours past 24."""
    if seconds < 0:
        raise ValueError(f"Negative time: {seconds}")

    hours, remainder = divmod(int(seconds), 3600)
    minutes, secs = divmod(remainder, 60)

    return f"{hours:02d}:{minutes:02d}:{secs:02d}"


def time_to_seconds(time_str: str) -> int:
    """Parse HH:MM:SS to seconds since midnight, supporting >24h."""
    parts = time_str.strip().split(":")
    if len(parts) != 3:
        raise ValueError(f"Invalid time format: {time_str}")

    hours = int(parts[0])
    minutes = int(parts[1])
    seconds = int(parts[2])

    return hours * 3600 + minutes * 60 + seconds
