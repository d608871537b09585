import os
import logging

VALID_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: str | None = None) -> str:
    """
    Configure root logging from LOG_LEVEL (or an explicit level).

    Invalid levels fall back to INFO with a warning. Returns the level applied.
    """
    log_level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    fallback_from = None
    if log_level not in VALID_LEVELS:
        fallback_from = log_level
        log_level = 'INFO'

    logging.basicConfig(level=getattr(logging, log_level), format=LOG_FORMAT)

    if fallback_from is not None:
        logging.warning(
            f"Invalid LOG_LEVEL '{fallback_from}'. Using INFO instead. "
            f"Valid levels: {', '.join(VALID_LEVELS)}"
        )

    if log_level == 'DEBUG':
        logging.info("DEBUG logging enabled - request dispatch and session details will be logged")

    return log_level
