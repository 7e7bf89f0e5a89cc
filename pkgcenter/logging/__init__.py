from pathlib import Path

from logly import _LoggerProxy, logger

from pkgcenter.config import DEFAULT_LOG_DIR, DEFAULT_LOG_LEVEL


def init_logger(
    level: str = DEFAULT_LOG_LEVEL, log_dir: Path = DEFAULT_LOG_DIR
) -> _LoggerProxy:
    """Initialize the logger.

    Configures colored console output and a size-limited log file under `log_dir`.
    Credentials must never be passed to the logger.

    Args:
        level: Minimum level name (e.g. "INFO", "DEBUG").
        log_dir: Directory that receives `app.log`.
    """
    logger.configure(
        level=level,
        color=True,
        console=True,
        auto_sink=True,
    )

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning(f"Log directory {log_dir} is not writable, console only: {e}")
    else:
        logger.add(f"{log_dir}/app.log", size_limit="10MB", retention=3)

    logger.success("logger initialized!")

    return logger
