import logging
import sys


def configure_logging(settings):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format=settings.LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    # SQL statements are logged through SQL_ECHO, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
