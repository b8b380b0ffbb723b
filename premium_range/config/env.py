from __future__ import annotations
import os
from dataclasses import dataclass

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"


def get_server_config() -> ServerConfig:
    return ServerConfig(
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


@dataclass(frozen=True)
class ApiConfig:
    api_key: str | None = None
    rate_limit_n: int = 30
    rate_limit_window_sec: float = 1.0


def get_api_config() -> ApiConfig:
    return ApiConfig(
        api_key=os.getenv("API_KEY") or None,
        rate_limit_n=int(os.getenv("RATE_LIMIT_N", "30")),
        rate_limit_window_sec=float(os.getenv("RATE_LIMIT_WINDOW_SEC", "1.0")),
    )
