"""Service entry point: configuration, logging, storage, then the HTTP server."""

import uvicorn
from loguru import logger

from user_api.api.http.app import create_app
from user_api.api.utils.app_startup import configure_logging
from user_api.core.services.database.db_manage import DbManageService
from user_api.core.services.database.db_session import DbSessionService
from user_api.runtime.config.config_template import load_config


def main() -> None:
    config = load_config()
    configure_logging(config.logging, config.app.environment)

    try:
        database_service = DbSessionService(config.database, config.app.environment)
        DbManageService(database_service.engine).create_all()
    except Exception as e:
        logger.opt(exception=e).critical("Failed to initialize database")
        raise SystemExit(1) from e

    app = create_app(config, database_service)

    logger.info(
        "Starting server on {}:{}", config.server.host, config.server.port
    )
    try:
        uvicorn.run(
            app,
            host=config.server.host,
            port=config.server.port,
            access_log=False,  # Request logging middleware handles access logs
            log_config=None,  # Keep the intercepted stdlib logging
        )
    except Exception as e:
        logger.opt(exception=e).critical("Failed to start server")
        raise SystemExit(1) from e


if __name__ == "__main__":
    main()
