import sys
from loguru import logger


def setup_logging(verbose: bool = False) -> None:
    """Route loguru to stderr so stdout only carries results."""
    logger.remove()
    logger.add(sys.stderr, level='DEBUG' if verbose else 'WARNING')
