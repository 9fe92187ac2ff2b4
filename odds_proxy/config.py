from dataclasses import dataclass
from functools import lru_cache
import os

NY_BOOK_TITLES = "DraftKings,FanDuel,BetMGM,Caesars,BetRivers,Resorts World Bet"
EVENT_PROP_MARKETS = (
    "player_pass_yds,player_pass_tds,player_rush_yds,player_reception_yds,player_anytime_td"
)


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_env: str
    odds_api_key: str
    odds_api_base_url: str
    bookmaker_allowlist: tuple[str, ...]
    default_sport: str
    default_regions: str
    default_markets: str
    default_event_markets: str
    default_odds_format: str
    cache_default_ttl_sec: int
    cache_min_ttl_sec: int
    error_ttl_sec: int
    cache_max_entries: int
    upstream_timeout_sec: float | None
    enable_cache_sweep: bool
    cache_sweep_interval_sec: int
    cache_sweep_max_age_sec: int


def _csv_env(name: str, default: str = "") -> tuple[str, ...]:
    raw = os.getenv(name, default)
    if not raw.strip():
        return ()
    return tuple(part.strip() for part in raw.split(",") if part.strip())


def _bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _float_env(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw.strip())


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw.strip())


@lru_cache
def get_settings() -> Settings:
    # The allow-list matches titles, not bookmaker keys: upstream titles are
    # what the frontend displays.
    return Settings(
        app_name=os.getenv("APP_NAME", "odds-proxy"),
        app_env=os.getenv("APP_ENV", "development"),
        odds_api_key=os.getenv("ODDS_API_KEY", ""),
        odds_api_base_url=os.getenv("ODDS_API_BASE_URL", "https://api.the-odds-api.com/v4"),
        bookmaker_allowlist=_csv_env("BOOKMAKER_ALLOWLIST", NY_BOOK_TITLES),
        default_sport=os.getenv("DEFAULT_SPORT", "americanfootball_nfl"),
        default_regions=os.getenv("DEFAULT_REGIONS", "us"),
        default_markets=os.getenv("DEFAULT_MARKETS", "h2h,spreads,totals"),
        default_event_markets=os.getenv("DEFAULT_EVENT_MARKETS", EVENT_PROP_MARKETS),
        default_odds_format=os.getenv("DEFAULT_ODDS_FORMAT", "american"),
        cache_default_ttl_sec=_int_env("CACHE_DEFAULT_TTL_SEC", 60),
        cache_min_ttl_sec=_int_env("CACHE_MIN_TTL_SEC", 10),
        error_ttl_sec=_int_env("ERROR_TTL_SEC", 10),
        cache_max_entries=_int_env("CACHE_MAX_ENTRIES", 0),
        upstream_timeout_sec=_float_env("UPSTREAM_TIMEOUT_SEC", None),
        enable_cache_sweep=_bool_env("ENABLE_CACHE_SWEEP", False),
        cache_sweep_interval_sec=_int_env("CACHE_SWEEP_INTERVAL_SEC", 300),
        cache_sweep_max_age_sec=_int_env("CACHE_SWEEP_MAX_AGE_SEC", 3600),
    )
