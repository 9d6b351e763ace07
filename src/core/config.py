"""Runtime configuration (environment variables) and logging setup"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Self

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

MEMORY_STORE_URL = "memory://"


@dataclass(frozen=True)
class Settings:
    # None: no store connection configured
    store_url: Optional[str] = None
    session_root: str = "games"
    log_level: str = "INFO"
    sql_echo: bool = False

    @classmethod
    def from_env(cls) -> Self:
        return cls(
            store_url=os.getenv("REVERSI_STORE_URL") or None,
            session_root=os.getenv("REVERSI_SESSION_ROOT", "games").strip("/"),
            log_level=os.getenv("REVERSI_LOG_LEVEL", "INFO").upper(),
            sql_echo=os.getenv("REVERSI_SQL_ECHO", "0").lower() in {"1", "true", "yes"},
        )

    def session_path(self, session_id: str) -> str:
        """Location of a session document in the shared store."""
        return f"{self.session_root}/{session_id}"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
