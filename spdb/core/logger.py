# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Centralised logging configuration.

All log settings (levels, rotation, format …) live in spdb/etc/logging.conf.
:func:`configure_logging` resolves the log-file path, patches it into the
config text, and applies it via the standard-library fileConfig loader.

The library never configures logging on import; the embedding server (or
the ``sp-seed-user`` script) calls ``configure_logging()`` once at startup.

Import the ready-made logger anywhere:
    from spdb.core.logger import logger
"""

import configparser as _cp
import logging
import logging.config
from pathlib import Path
from typing import Optional, Union

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
_PACKAGED_CONF = Path(__file__).resolve().parent.parent / "etc" / "logging.conf"

PathLike = Union[str, Path]


def configure_logging(log_file: Optional[PathLike] = None, conf_path: Optional[PathLike] = None) -> Path:
    """
    Apply the logging configuration and return the log file in use.

    Defaults come from :class:`spdb.core.config.Settings` (``SP_LOG_FILE``,
    ``SP_LOG_CONFIG``) when arguments are omitted.
    """
    if log_file is None or conf_path is None:
        # Lazy import: the library never reads Settings on import
        from spdb.core.config import get_settings

        settings = get_settings()
        log_file = log_file if log_file is not None else settings.log_file
        conf_path = conf_path if conf_path is not None else (settings.log_config or _PACKAGED_CONF)

    log_path = Path(log_file).resolve()
    # Ensure the log directory exists before the handler tries to open the file
    log_path.parent.mkdir(parents=True, exist_ok=True)

    # logging.conf uses %(log_file)s as a placeholder.  We read the raw text,
    # replace it with the real absolute path, then feed the result to
    # fileConfig via a ConfigParser-compatible object.
    raw = Path(conf_path).read_text(encoding="utf-8")
    raw = raw.replace("%(log_file)s", log_path.as_posix())

    # RawConfigParser is required: the format strings contain %(asctime)s
    # etc. which ConfigParser would try to interpolate and fail on.
    parser = _cp.RawConfigParser()
    parser.read_string(raw)

    logging.config.fileConfig(parser, disable_existing_loggers=False)
    return log_path


# ---------------------------------------------------------------------------
# Module-level handle
# ---------------------------------------------------------------------------
logger = logging.getLogger("spdb")
