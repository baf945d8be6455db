#!/usr/bin/env python3
"""Dashboard Loader - Main entry point.

This script starts the dashboard loader HTTP service with proper
configuration and logging.
"""

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from .app_factory import create_app
from .config import LoaderConfig, LoggingConfig


def setup_logging(config: LoggingConfig) -> None:
    """设置日志配置"""
    logging.basicConfig(
        level=getattr(logging, config.level.upper(), logging.INFO),
        format=config.format,
        handlers=[
            logging.StreamHandler(sys.stdout),
            *([logging.FileHandler(config.file_path)] if config.file_path else [])
        ]
    )

    # 设置第三方库的日志级别
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        description="Dashboard Loader - dashboard load and cache orchestration service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  DASHBOARD_LOADER_HOST             Server host (default: localhost)
  DASHBOARD_LOADER_PORT             Server port (default: 8090)
  DASHBOARD_LOADER_BACKEND_URL      Dashboard backend URL (default: http://localhost:3000)
  DASHBOARD_LOADER_API_KEY          Backend API key (optional)
  DASHBOARD_LOADER_APP_SUB_URL      Application sub-path (default: empty)
  DASHBOARD_LOADER_DEFINITION_TTL   Definition cache TTL in seconds (default: 2.0)
  DASHBOARD_LOADER_SINGLE_FLIGHT    Share concurrent fetches per key (default: false)
  DASHBOARD_LOADER_LOG_LEVEL        Log level (default: INFO)
  DASHBOARD_LOADER_LOG_FILE         Log file path (optional)
        """
    )

    parser.add_argument("--host", type=str, help="Server host")
    parser.add_argument("--port", type=int, help="Server port")
    parser.add_argument("--backend-url", type=str, help="Dashboard backend URL")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level"
    )
    parser.add_argument("--single-flight", action="store_true", help="Share concurrent fetches for the same dashboard")

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> LoaderConfig:
    """Merge command line arguments over environment configuration."""
    config = LoaderConfig.load_from_env()
    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port
    if args.backend_url:
        config.backend.base_url = args.backend_url
    if args.log_level:
        config.logging.level = args.log_level
    if args.single_flight:
        config.cache.single_flight = True
    return config


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_arguments(argv)
    config = build_config(args)
    setup_logging(config.logging)

    logger = logging.getLogger(__name__)
    logger.info(f"Starting dashboard loader on {config.server.host}:{config.server.port}")

    uvicorn.run(
        create_app(config),
        host=config.server.host,
        port=config.server.port,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
