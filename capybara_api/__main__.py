"""Run the Capybara API under uvicorn: ``python -m capybara_api``."""
import logging

import uvicorn

from capybara_api.app import DOCS_PATHS, create_app
from capybara_api.core.config import get_settings

logger = logging.getLogger("capybara_api")


def main() -> None:
    settings = get_settings()
    app = create_app(settings)
    shown_host = "localhost" if settings.host in ("0.0.0.0", "") else settings.host
    base = f"http://{shown_host}:{settings.port}"
    logger.info("Capybara API server running at %s/", base)
    logger.info("Swagger UI available at %s%s", base, DOCS_PATHS[-1])
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()
