# =============================================================================================
# APP/CORE/LOGGING.PY - LOGURU SETUP
# =============================================================================================
# loguru is the application logger. Libraries that log through the stdlib (uvicorn,
# SQLAlchemy) are routed into it by an intercept handler on the root logger.
#
# USAGE:
#   from loguru import logger
#   logger.info("User {} logged in", user.id)
#
# Never log passwords, hashes or token values.
# =============================================================================================

import logging
import sys

from loguru import logger


class _InterceptHandler(logging.Handler):
    """Forward stdlib logging records to loguru, keeping the caller's location."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def configure_logging(level: str) -> None:
    """Replace loguru's default sink with stdout at `level` and hook the stdlib root logger."""
    logger.remove()
    logger.add(
        sys.stdout,
        level=level,
        backtrace=True,
        diagnose=False,  # diagnose would print local variables (secrets, tokens)
    )
    logging.root.handlers = [_InterceptHandler()]
    logging.root.setLevel(level)
