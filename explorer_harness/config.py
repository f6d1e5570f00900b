# explorer_harness/config.py
# Environment-driven configuration for the explorer test fixture

from __future__ import annotations

import os
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

# Resolved against the working directory, i.e. the checkout the tests run from.
DEFAULT_SCHEMA_PATH = Path("resources") / "explorer" / "graphql" / "schema.graphql"


@dataclass(frozen=True)
class BootstrapConfig:
    interval: float = 1.0
    max_attempts: int = 10
    strict: bool = False


@dataclass(frozen=True)
class LogConfig:
    level: str = "INFO"
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    file_path: Optional[Path] = None
    max_file_size_mb: int = 10
    backup_count: int = 5


@dataclass(frozen=True)
class ExplorerConfig:
    binary: str = "explorer"
    host: str = "127.0.0.1"
    graphql_path: str = "/explorer/graphql"
    request_timeout: float = 30.0
    print_log: bool = True
    logs_dir: Optional[Path] = None
    schema_path: Path = DEFAULT_SCHEMA_PATH
    bootstrap: BootstrapConfig = field(default_factory=BootstrapConfig)
    log: LogConfig = field(default_factory=LogConfig)

    @classmethod
    def from_env(cls) -> "ExplorerConfig":
        bootstrap = BootstrapConfig(
            interval=float(os.getenv("EXPLORER_BOOTSTRAP_INTERVAL", "1.0")),
            max_attempts=int(os.getenv("EXPLORER_BOOTSTRAP_ATTEMPTS", "10")),
            strict=os.getenv("EXPLORER_STRICT_BOOTSTRAP", "false").lower() == "true",
        )

        log_file = os.getenv("EXPLORER_LOG_FILE")
        log = LogConfig(
            level=os.getenv("EXPLORER_LOG_LEVEL", "INFO"),
            file_path=Path(log_file) if log_file else None,
        )

        logs_dir = os.getenv("EXPLORER_LOGS_DIR")

        return cls(
            binary=os.getenv("EXPLORER_BIN", "explorer"),
            host=os.getenv("EXPLORER_HOST", "127.0.0.1"),
            graphql_path=os.getenv("EXPLORER_GRAPHQL_PATH", "/explorer/graphql"),
            request_timeout=float(os.getenv("EXPLORER_REQUEST_TIMEOUT", "30")),
            print_log=os.getenv("EXPLORER_PRINT_LOG", "true").lower() == "true",
            logs_dir=Path(logs_dir) if logs_dir else None,
            schema_path=Path(os.getenv("EXPLORER_SCHEMA_PATH", str(DEFAULT_SCHEMA_PATH))),
            bootstrap=bootstrap,
            log=log,
        )


_config: Optional[ExplorerConfig] = None


def get_config() -> ExplorerConfig:
    global _config
    if _config is None:
        _config = ExplorerConfig.from_env()
    return _config


def set_config(config: Optional[ExplorerConfig]) -> None:
    global _config
    _config = config


def setup_logging(config: Optional[ExplorerConfig] = None) -> None:
    cfg = config or get_config()

    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if cfg.log.file_path is not None:
        from logging.handlers import RotatingFileHandler
        cfg.log.file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            cfg.log.file_path,
            maxBytes=cfg.log.max_file_size_mb * 1024 * 1024,
            backupCount=cfg.log.backup_count,
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, cfg.log.level.upper()),
        format=cfg.log.format,
        handlers=handlers,
        force=True,
    )
    logger.debug(f"Logging configured at {cfg.log.level.upper()}")
