"""HTTP server process entrypoint."""

from __future__ import annotations

import logging

import uvicorn

from src.api.app import create_api
from src.config.logging import configure_logging
from src.config.settings import load_settings

logger = logging.getLogger(__name__)


def main() -> None:
    """Serve the intent endpoint until interrupted."""

    settings = load_settings()
    configure_logging(settings.log_level)

    api = create_api(settings)
    logger.info(
        "starting host=%s port=%d llm_enabled=%s model=%s",
        settings.api_host,
        settings.api_port,
        settings.llm_enabled,
        settings.groq_model,
    )
    uvicorn.run(api, host=settings.api_host, port=settings.api_port, log_config=None)


if __name__ == "__main__":
    main()
