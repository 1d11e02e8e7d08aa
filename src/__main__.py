"""Entry point for running the server."""

import uvicorn

from src.config import get_config
from src.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


def main() -> None:
    """Entry point for running the server."""
    config = get_config()
    configure_logging(config.log_level)

    logger.info("server_listening", host=config.server_host, port=config.port)

    uvicorn.run(
        "src.server:app",
        host=config.server_host,
        port=config.port,
        log_config=None,  # Use our custom structlog configuration
        access_log=False,
    )


if __name__ == "__main__":
    main()
