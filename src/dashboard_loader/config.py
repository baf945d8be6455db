"""
Dashboard loader - configuration
Defines all configuration parameters and their environment overrides.
"""

from dataclasses import dataclass, field
from typing import Optional
import os

from .cache.definition_cache import DASHBOARD_CACHE_TTL

ENV_PREFIX = "DASHBOARD_LOADER_"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def _env_bool(name: str, default: bool) -> bool:
    return (_env(name, str(default)) or "").lower() in ("1", "true", "yes")


@dataclass
class BackendConfig:
    """后端服务配置"""
    base_url: str = "http://localhost:3000"
    api_key: str = ""
    timeout: float = 30.0
    # Sub-path the application is served under, e.g. "/grafana"
    app_sub_url: str = ""


@dataclass
class CacheConfig:
    """缓存配置"""
    definition_ttl: float = DASHBOARD_CACHE_TTL
    single_flight: bool = False


@dataclass
class LoggingConfig:
    """日志配置"""
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_path: Optional[str] = None


@dataclass
class ServerConfig:
    """服务器配置"""
    host: str = "localhost"
    port: int = 8090


@dataclass
class LoaderConfig:
    """主配置类"""
    backend: BackendConfig = field(default_factory=BackendConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    @classmethod
    def load_from_env(cls) -> "LoaderConfig":
        """从环境变量加载配置"""
        config = cls()

        # 后端配置
        config.backend.base_url = _env("BACKEND_URL", config.backend.base_url)
        config.backend.api_key = _env("API_KEY", config.backend.api_key)
        config.backend.timeout = float(_env("BACKEND_TIMEOUT", str(config.backend.timeout)))
        config.backend.app_sub_url = _env("APP_SUB_URL", config.backend.app_sub_url)

        # 缓存配置
        config.cache.definition_ttl = float(_env("DEFINITION_TTL", str(config.cache.definition_ttl)))
        config.cache.single_flight = _env_bool("SINGLE_FLIGHT", config.cache.single_flight)

        # 日志配置
        config.logging.level = _env("LOG_LEVEL", config.logging.level).upper()
        config.logging.file_path = _env("LOG_FILE", config.logging.file_path)

        # 服务器配置
        config.server.host = _env("HOST", config.server.host)
        config.server.port = int(_env("PORT", str(config.server.port)))

        return config
