from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CacheEntry:
    timestamp: float
    status_code: int
    body: str

    def __post_init__(self) -> None:
        if not (100 <= self.status_code <= 599):
            raise ValueError("status_code must be a valid HTTP status")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300
