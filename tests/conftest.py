import sys
import pytest
from loguru import logger

from nbodybench.config import load_config
from nbodybench.helpers import XorShift64, generate_bodies


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    # CLI tests point loguru at the runner's stderr, which is closed afterwards
    logger.remove()
    logger.add(sys.stderr, level='WARNING')


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def bodies():
    return generate_bodies(7, XorShift64())
