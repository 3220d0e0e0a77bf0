import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from ..core.config_loader import ConfigLoader

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(message)s'
DEFAULT_LOG_FILE = 'logs/selenium_extensions.log'


def _level(name: Any, fallback: int) -> int:
    return getattr(logging, str(name).upper(), fallback)


def _console_handler(config: Dict[str, Any], level: int, fmt: str) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(_level(config.get('level', ''), level))
    handler.setFormatter(logging.Formatter(config.get('format', fmt)))
    return handler


def _file_handler(config: Dict[str, Any], level: int, fmt: str) -> Optional[logging.Handler]:
    """
    Builds the file handler described by the 'file_handler' block.

    Relative paths are taken from the current working directory. `rotation_type`
    selects size ('max_bytes') or time ('when', 'interval') rotation; anything
    else writes a plain file.
    """
    log_file_path = Path(config.get('path', DEFAULT_LOG_FILE)).expanduser()
    if not log_file_path.is_absolute():
        log_file_path = Path.cwd() / log_file_path

    try:
        log_file_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        # Logger is not usable yet, report on stderr
        print(f"Error: Could not create log directory {log_file_path.parent}. File logging disabled. Error: {e}", file=sys.stderr)
        return None

    backup_count = int(config.get('backup_count', 5))
    rotation_type = config.get('rotation_type')
    if rotation_type == 'size':
        handler: logging.Handler = logging.handlers.RotatingFileHandler(
            log_file_path,
            maxBytes=int(config.get('max_bytes', 5 * 1024 * 1024)),
            backupCount=backup_count,
            encoding='utf-8',
        )
    elif rotation_type == 'time':
        handler = logging.handlers.TimedRotatingFileHandler(
            log_file_path,
            when=config.get('when', 'midnight'),
            interval=int(config.get('interval', 1)),
            backupCount=backup_count,
            encoding='utf-8',
        )
    else:
        handler = logging.FileHandler(log_file_path, encoding='utf-8')

    handler.setLevel(_level(config.get('level', ''), level))
    handler.setFormatter(logging.Formatter(config.get('format', fmt)))
    return handler


def setup_logger(config_loader: Optional[ConfigLoader] = None, logger_name: Optional[str] = None) -> logging.Logger:
    """
    Configures a logger (the root logger by default) from the 'logging' settings block.

    Handlers previously installed on that logger are closed and replaced, so the
    call can be repeated. The library itself never calls this; applications and
    test sessions do, once at startup.
    """
    if config_loader is None:
        config_loader = ConfigLoader()

    level = _level(config_loader.get_logging_setting('level', 'INFO'), logging.INFO)
    fmt = config_loader.get_logging_setting('format', DEFAULT_LOG_FORMAT)

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    console_config = config_loader.get_logging_setting('console_handler', {}) or {}
    if console_config.get('enabled', True):
        logger.addHandler(_console_handler(console_config, level, fmt))

    file_config = config_loader.get_logging_setting('file_handler', {}) or {}
    if file_config.get('enabled', False):
        file_handler = _file_handler(file_config, level, fmt)
        if file_handler is not None:
            logger.addHandler(file_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    return logger
