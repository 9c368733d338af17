from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    data_dir: Path = Path("data")
    roster_file: Path = Path("data/celebrities/roster.json")
    nominations_dir: Path = Path("data/oscars")

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///data/egot.db")
    db_pool_size: int = int(os.getenv("DB_POOL_SIZE", "10"))
    db_pool_timeout: int = int(os.getenv("DB_POOL_TIMEOUT", "30"))

    # Runtime
    http_timeout: int = int(os.getenv("HTTP_TIMEOUT", "30"))
    request_deadline: float = float(os.getenv("REQUEST_DEADLINE", "60"))
    user_agent: str = os.getenv(
        "USER_AGENT", "EGOT-Tracker/1.0 (https://github.com/egot-tracker)"
    )
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Seed workflows
    populate_delay: float = float(os.getenv("POPULATE_DELAY", "1.5"))
    oscar_setup_delay: float = float(os.getenv("OSCAR_SETUP_DELAY", "0.2"))

    # Result limits
    default_search_limit: int = 10
    default_list_limit: int = 50

    # APIs
    wikidata_api: str = "https://www.wikidata.org/w/api.php"
    wikidata_sparql: str = "https://query.wikidata.org/sparql"
    wikipedia_summary_api: str = "https://en.wikipedia.org/api/rest_v1/page/summary"

    def ensure_dirs(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.nominations_dir.mkdir(parents=True, exist_ok=True)

    def nominations_file(self, year: int) -> Path:
        return self.nominations_dir / f"{year}.json"


settings = Settings()
