"""Configuration from environment variables (.env)."""

import os
from pathlib import Path
from dataclasses import dataclass
from dotenv import load_dotenv

from appsearch.contracts.app_search_v1 import EmptyQueryPolicy, MatchPolicy

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _default_locale() -> str:
    # LANG looks like "en_US.UTF-8"; only the language/region part matters
    lang = os.getenv("LANG", "").split(".")[0].strip()
    if not lang or lang in ("C", "POSIX"):
        return "en"
    return lang


@dataclass
class Config:
    project_root: Path
    logs_dir: Path
    event_log_enabled: bool
    log_level: str
    max_results: int  # Cap on app rows per search
    match_policy: MatchPolicy
    empty_query_policy: EmptyQueryPolicy
    locale: str
    matcher_cache_size: int

    @classmethod
    def load(cls) -> "Config":
        project_root = Path(__file__).parent.parent.parent
        logs_dir = os.getenv("APPSEARCH_LOGS_DIR", "")
        return cls(
            project_root=project_root,
            logs_dir=Path(logs_dir) if logs_dir else project_root / "logs",
            event_log_enabled=_env_bool("APPSEARCH_EVENT_LOG", False),
            log_level=os.getenv("APPSEARCH_LOG_LEVEL", "INFO").upper(),
            max_results=int(os.getenv("APPSEARCH_MAX_RESULTS", "5")),
            match_policy=MatchPolicy(os.getenv("APPSEARCH_MATCH_POLICY", MatchPolicy.WORD_PREFIX).lower()),
            empty_query_policy=EmptyQueryPolicy(os.getenv("APPSEARCH_EMPTY_QUERY", EmptyQueryPolicy.MATCH_ALL).lower()),
            locale=os.getenv("APPSEARCH_LOCALE", "") or _default_locale(),
            matcher_cache_size=int(os.getenv("APPSEARCH_MATCHER_CACHE_SIZE", "1024")),
        )

    def validate(self) -> list[str]:
        errors = []
        if self.max_results < 0:
            errors.append(f"APPSEARCH_MAX_RESULTS must be >= 0, got {self.max_results}")
        if self.matcher_cache_size < 0:
            errors.append(f"APPSEARCH_MATCHER_CACHE_SIZE must be >= 0, got {self.matcher_cache_size}")
        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown APPSEARCH_LOG_LEVEL: {self.log_level}")
        return errors


config = Config.load()
