from __future__ import annotations

import logging
from dataclasses import replace
import os
from pathlib import Path

import uvicorn

from tasknest.config import load_settings
from tasknest.ui.http.app import create_app


def main() -> None:
    """
    Entry point for the API server.

    Reads settings from the environment (and .env), makes sure the database
    directory exists, then serves the app with uvicorn. Migrations run in the
    app's startup hook.
    """
    settings = load_settings()

    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - [PID:%(process)d] - %(message)s'
    )
    logger = logging.getLogger(__name__)

    db_path = settings.db_path
    if not db_path.is_absolute():
        db_path = Path.cwd() / db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)
    settings = replace(settings, db_path=db_path)

    logger.info("=" * 60)
    logger.info("API starting - PID: %s", os.getpid())
    logger.info("DB_PATH: %s", db_path)
    logger.info("=" * 60)

    try:
        uvicorn.run(
            create_app(settings),
            host=settings.host,
            port=settings.port,
            log_level=settings.log_level.lower(),
        )
    except Exception:
        logger.error("API crashed - PID: %s", os.getpid(), exc_info=True)
        raise
    finally:
        logger.info("API shutdown complete - PID: %s", os.getpid())


if __name__ == "__main__":
    main()
