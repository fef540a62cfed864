import json
from pathlib import Path
from loguru import logger

DEFAULT_CONFIG_FILE = Path(__file__).parent / 'nbody_constant.json'
REQUIRED_KEYS = ('G', 'dt', 'softening', 'seed')


class ConfigError(KeyError):
    pass


def load_config(config_file: str | Path | None = None, dt: float | None = None) -> dict:
    """Read the simulation constants, applying command line overrides.

    `G` is carried for reporting only; the force law does not multiply by it.
    """
    if config_file is None:
        logger.info('No config file provided, using default one')
        config_file = DEFAULT_CONFIG_FILE
    with open(config_file) as f:
        logger.debug(f'Reading config file from {config_file}')
        config = json.load(f)

    for key in REQUIRED_KEYS:
        if key not in config:
            logger.error(f"{key} hasn't been found in {config_file}. Aborting")
            raise ConfigError(f'{key} missing from {config_file}')

    if dt is not None:
        logger.debug(f'dt = {dt} passed as an argument therefore dt in config file will not be used')
        config['dt'] = dt

    config['dt'] = float(config['dt'])
    config['softening'] = float(config['softening'])
    config['G'] = float(config['G'])
    config['seed'] = int(config['seed'])
    return config
