import logging
from typing import Optional

from .config import Config


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level: Optional[str] = None) -> None:
    """Configure process-wide logging for a service using the toolkit."""
    logging.basicConfig(
        level=(level or Config.log_level()).upper(),
        format=LOG_FORMAT,
        handlers=[
            logging.StreamHandler(),
        ]
    )
