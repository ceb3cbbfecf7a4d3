import sys
import logging
from typing import Any

from loguru import logger

from standings.config.settings import settings

SENSITIVE_KEYS = ["key", "token", "password", "secret", "apikey"]


def _mask(value: str) -> str:
    if len(value) > 8:
        return value[:4] + "****" + value[-4:]
    return "********"


def sensitive_data_filter(record: dict[str, Any]) -> bool:
    """Filter function to mask sensitive data in log records."""

    def mask_extra(value: Any, key: str = "") -> Any:
        if isinstance(value, dict):
            return {k: mask_extra(v, k) for k, v in value.items()}
        if isinstance(value, list):
            return [mask_extra(item, key) for item in value]
        if isinstance(value, str) and any(sk in key.lower() for sk in SENSITIVE_KEYS):
            return _mask(value)
        return value

    if "extra" in record and isinstance(record["extra"], dict):
        record["extra"] = mask_extra(record["extra"])

    # The anon key is the only secret this service holds
    if settings.supabase_key and settings.supabase_key in record["message"]:
        record["message"] = record["message"].replace(settings.supabase_key, "********")

    return True


class InterceptHandler(logging.Handler):
    """Routes stdlib logging (supabase, httpx) through loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging() -> None:
    """Configures Loguru logger based on application settings."""
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.log_level.upper(),
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
        backtrace=True,
        diagnose=True,
        filter=sensitive_data_filter,
    )

    logger.info(f"Logging initialized with level: {settings.log_level}")

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logger.info("Standard logging intercepted.")
