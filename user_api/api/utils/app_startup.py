import logging
import sys
from pathlib import Path

from loguru import logger

from user_api.runtime.config.config_data import LoggingConfig

_LEVELS = {
    "trace": "TRACE",
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "warning": "WARNING",
    "error": "ERROR",
    "fatal": "CRITICAL",
    "panic": "CRITICAL",
    "critical": "CRITICAL",
}


def parse_log_level(level: str) -> str | None:
    """Map a configured level name to a Loguru level.

    Returns ``None`` for ``disabled``; unknown names fall back to INFO.
    """
    name = (level or "").strip().lower()
    if name == "disabled":
        return None
    return _LEVELS.get(name, "INFO")


class InterceptHandler(logging.Handler):
    """Redirect standard 'logging' records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Request logging middleware handles access logs
        if record.name == "uvicorn.access":
            return

        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Make Loguru show the original caller (not this handler)
        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def configure_logging(cfg: LoggingConfig, environment: str = "development") -> None:
    # 0) Reset Loguru and guarantee default context keys
    logger.remove()
    logger.configure(extra={"request_id": "-", "component": "-"})

    level = parse_log_level(cfg.level)
    if level is None:
        return

    # 1) Formats
    fmt_plain = (
        "<green>{time:YYYY-MM-DDTHH:mm:ssZZ}</green> | "
        "<level>{level: <8}</level> | "
        "[<cyan>{extra[request_id]}</cyan>] | "
        "<magenta>{extra[component]}</magenta> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )
    is_json = cfg.format == "json"

    backtrace_on = environment != "production"
    diagnose_on = environment != "production"

    # 2) Loguru sinks
    if is_json:
        logger.add(
            sys.stdout,
            level=level,
            serialize=True,
            backtrace=backtrace_on,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stdout,
            level=level,
            format=fmt_plain,
            colorize=True,
            backtrace=backtrace_on,
            diagnose=diagnose_on,
        )

    if cfg.file:
        path = Path(cfg.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(path),
            level=level,
            format="{message}" if is_json else fmt_plain,
            serialize=is_json,
            rotation=f"{cfg.max_size_mb} MB",
            retention=cfg.backup_count,
            compression="zip",
            enqueue=True,
            backtrace=backtrace_on,
            diagnose=diagnose_on,
        )

    # 3) Replace stdlib handlers with our interceptor
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in list(logging.root.manager.loggerDict.keys()):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    # 4) Tune noise
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.CRITICAL)

    logger.bind(component="logging").info(
        "Logging configured",
        app_level=level,
        app_format=cfg.format,
        app_file=cfg.file,
        environment=environment,
    )


def get_logger(component: str):
    """Return a logger bound to a component name."""
    return logger.bind(component=component)
