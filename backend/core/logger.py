# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261019v1
# ---------------------------------------------------------------------------
"""
Logging setup for the user service.

Handlers, levels and formats come from etc/logging.conf.  The only value
filled in here is the rotating file path (log/app.log under the project
root).

    from core.logger import logger
"""

import configparser
import logging
import logging.config
from pathlib import Path

_ROOT = Path(__file__).resolve().parents[2]
LOG_FILE = _ROOT / "log" / "app.log"
LOGGING_CONF = _ROOT / "etc" / "logging.conf"


def configure_logging(conf_path: Path = LOGGING_CONF, log_file: Path = LOG_FILE) -> None:
    """Apply *conf_path*, substituting ``%(log_file)s`` with *log_file*."""
    log_file.parent.mkdir(parents=True, exist_ok=True)
    text = conf_path.read_text(encoding="utf-8").replace("%(log_file)s", str(log_file))

    # format strings contain %(asctime)s, so no interpolation
    parser = configparser.RawConfigParser()
    parser.read_string(text)
    logging.config.fileConfig(parser, disable_existing_loggers=False)


configure_logging()

logger = logging.getLogger("usersvc")
