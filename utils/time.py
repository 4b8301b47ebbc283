from datetime import datetime, timezone


def parse_iso_utc(ts: str) -> datetime:
    """Parse ISO-8601 UTC timestamp (with trailing 'Z') to an aware datetime.

    Falls back to current UTC time if the input is falsy.
    """
    if not ts:
        return datetime.now(timezone.utc)
    if ts.endswith("Z"):
        ts = ts[:-1] + "+00:00"
    return datetime.fromisoformat(ts)


def seconds_until(ts: str, now: datetime | None = None) -> float:
    now = now or datetime.now(timezone.utc)
    return max(0.0, (parse_iso_utc(ts) - now).total_seconds())


def format_duration(seconds: float) -> str:
    total = int(round(seconds))
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    if hours:
        return f"{hours}h {minutes:02d}m {secs:02d}s"
    if minutes:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"
