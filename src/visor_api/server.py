from __future__ import annotations

import logging

import uvicorn

from .logging_setup import setup_logging
from .main import create_app
from .settings import HOST, get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Run the API on 127.0.0.1 at the configured port until interrupted."""
    settings = get_settings()
    setup_logging(console_level=settings.log_level, log_file=settings.log_file)

    app = create_app(settings=settings)
    logger.info("Visor API server listening on http://%s:%d (data: %s)", HOST, settings.port, settings.data_file)
    uvicorn.run(app, host=HOST, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
