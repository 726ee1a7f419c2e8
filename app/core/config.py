from pydantic_settings import BaseSettings
from typing import List, Optional, Union
import os
import json
import re


class Settings(BaseSettings):
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    jwt_user_id_claim: str = "userId"
    auth_header_name: str = "x-auth-token"
    log_level: str = "INFO"
    environment: str = "local"
    api_prefix: str = "/Api"
    # CORS origins - can be JSON array or comma-separated string
    # For localhost wildcard, use "localhost:*" which will match any port
    cors_origins: Union[List[str], str] = ["localhost:*"]

    # Upstream marketplace backend that owns product persistence
    product_backend_url: str = ""
    product_backend_timeout: float = 10.0

    # Listing pagination
    default_page_limit: int = 10
    max_page_limit: int = 100

    def get_cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list, accepting JSON or comma-separated input."""
        if isinstance(self.cors_origins, str):
            try:
                origins = json.loads(self.cors_origins)
            except (json.JSONDecodeError, ValueError):
                origins = [o.strip() for o in self.cors_origins.split(",") if o.strip()]
        else:
            origins = self.cors_origins

        return origins if isinstance(origins, list) else [origins]

    class Config:
        env_file = f"config/{os.getenv('ENV', 'local')}.env"
        case_sensitive = False


settings = Settings()


def build_cors_origin_regex(origins: List[str]) -> Optional[str]:
    """
    Build a single regex for the wildcard entries of the CORS origin list.

    Supports:
    - "localhost:*" - matches any localhost port (http://localhost:3000, http://localhost:5000, etc.)
    - "127.0.0.1:*" - matches any 127.0.0.1 port
    - Generic "*" patterns such as "https://*.example.com"

    Exact origins are left to ``allow_origins``; returns None when there are no wildcards.
    """
    patterns = []
    for allowed in origins:
        if allowed == "*":
            continue
        if allowed == "localhost:*":
            patterns.append(r"https?://localhost(:\d+)?/?")
        elif allowed == "127.0.0.1:*":
            patterns.append(r"https?://127\.0\.0\.1(:\d+)?/?")
        elif "*" in allowed:
            patterns.append(".*".join(re.escape(part) for part in allowed.split("*")))

    if not patterns:
        return None
    return "^(" + "|".join(patterns) + ")$"


def split_exact_origins(origins: List[str]) -> List[str]:
    return [o for o in origins if o == "*" or "*" not in o]
