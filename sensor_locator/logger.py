import logging
import logging.config
from typing import Optional

import yaml

DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DEFAULT_LOG_LEVEL = "WARNING"


def get_logger_config(filepath: str) -> dict:
    """
    Load a logging configuration from a YAML file.

    :param filepath: Path to a ``logging.config.dictConfig`` document in YAML.
    :return: Python dictionary with the logging configuration.
    :raises FileNotFoundError: If the configuration file cannot be found.
    :raises yaml.YAMLError: If the file is not valid YAML.
    """
    with open(filepath, "r") as file:
        return yaml.safe_load(file)


def setup_logging(log_level: Optional[str] = None, log_config: Optional[str] = None) -> logging.Logger:
    """
    Configure logging for a CLI run and return the "sensor_locator" logger.

    With *log_config* the YAML file is applied through dictConfig and its
    levels stand unless *log_level* is given. Without it, a plain stderr
    handler is installed at *log_level* (WARNING when None).
    """
    log = logging.getLogger("sensor_locator")
    if log_config:
        logging.config.dictConfig(get_logger_config(log_config))
        if log_level:
            log.setLevel(log_level.upper())
    else:
        logging.basicConfig(format=DEFAULT_LOG_FORMAT)
        log.setLevel((log_level or DEFAULT_LOG_LEVEL).upper())
    return log
