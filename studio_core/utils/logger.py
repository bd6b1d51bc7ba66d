import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from studio_core.config_manager import LoggingConfig

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


def setup_logger(log_dir: str = "logs", cfg: Optional[LoggingConfig] = None) -> Any:
    """
    Points loguru at the console and the studio log files.

    The console shows ``cfg.level`` and up; ``viral_studio.log`` keeps DEBUG for
    prompt/response tracing. ``error.log`` and the JSON sink are optional.
    """
    cfg = cfg or LoggingConfig()
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger.remove()
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=cfg.level)

    file_opts = {"rotation": cfg.rotation, "retention": cfg.retention, "encoding": "utf-8"}
    if cfg.compression:
        file_opts["compression"] = cfg.compression

    logger.add(log_path / "viral_studio.log", level="DEBUG", **file_opts)

    if cfg.error_file:
        logger.add(log_path / "error.log", level="ERROR", **file_opts)

    if cfg.json_sink:
        logger.add(log_path / "viral_studio.json.log", level="INFO", serialize=True, **file_opts)

    logger.info(f"Logger initialized. Logs writing to {log_path.absolute()}")
    return logger
