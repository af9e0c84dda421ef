"""Process entry point: `python -m shrinker` or the `shrinker` console script.

Startup procedure:
- Step 1: Load `.env` (if present) into the environment
- Step 2: Initialize logging
- Step 3: Read and validate settings (fail fast on configuration errors)
- Step 4: Connect to Redis and build the app
- Step 5: Serve with uvicorn
"""

import logging

import uvicorn
from dotenv import load_dotenv

from shrinker.api import create_app_from_settings
from shrinker.dao.exceptions import DataStoreError
from shrinker.exceptions import ConfigurationError
from shrinker.utils import initialize_logging, load_settings


logger = logging.getLogger(__name__)


def main() -> None:
    load_dotenv()
    initialize_logging()

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.critical('Invalid configuration. Refusing to start.', extra={'error': str(e), 'error_code': e.error_code})
        raise SystemExit(1) from e

    try:
        app = create_app_from_settings(settings)
    except DataStoreError as e:
        logger.critical('Redis is unreachable. Refusing to start.', extra={'error': str(e)})
        raise SystemExit(1) from e

    logger.info('Starting shrinker.', extra={'host': settings.host, 'port': settings.port})
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == '__main__':
    main()
