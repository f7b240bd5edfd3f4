import asyncio
import logging
from explorecali import db
from explorecali.core import config
from explorecali.core.logging import configure_logging

logger = logging.getLogger("initial-db")

if __name__ == "__main__":
    settings = config.get_settings()
    configure_logging(settings)
    logger.info("Recreating tables on %s", config.safe_database_url(settings.DATABASE_URL))
    db.init_db(settings)
    asyncio.run(db.recreate_table())
