import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    user_agent: str = os.getenv("CHECKER_USER_AGENT", "page-analyzer/1.0")
    request_timeout_s: float = float(os.getenv("REQUEST_TIMEOUT_S", "5"))
    db_pool_min_size: int = int(os.getenv("DB_POOL_MIN_SIZE", "1"))
    db_pool_max_size: int = int(os.getenv("DB_POOL_MAX_SIZE", "10"))


settings = Settings()
