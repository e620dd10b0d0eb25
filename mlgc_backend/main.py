# mlgc_backend/main.py
import logging

from mlgc_backend import create_app
from mlgc_backend.core.config import Config

logger = logging.getLogger(__name__)


def main():
    app = create_app()
    logger.info("Server running on port %s", Config.PORT)
    app.run(host=Config.HOST, port=Config.PORT)


if __name__ == "__main__":
    main()
