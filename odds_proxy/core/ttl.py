from __future__ import annotations

DEFAULT_TTL_SEC = 60
MIN_TTL_SEC = 10


def _coerce_seconds(raw: str | int | float | None) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        text = raw.strip()
        if not text:
            return None
        try:
            value = float(text)
        except ValueError:
            return None
    if value != value or value in (float("inf"), float("-inf")):
        return None
    return int(value)


def resolve_ttl(
    raw: str | int | float | None,
    default: int = DEFAULT_TTL_SEC,
    floor: int = MIN_TTL_SEC,
) -> int:
    seconds = _coerce_seconds(raw)
    if seconds is None or seconds <= 0:
        seconds = default
    return max(floor, seconds)
