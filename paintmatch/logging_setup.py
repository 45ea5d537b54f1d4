import logging
from pathlib import Path
from typing import Optional, Union

from .preferences import get_preferences_manager

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_FILENAME = 'paintmatch.log'


def setup_logging(log_dir: Optional[Union[str, Path]] = None, level: Union[int, str, None] = None,
                  console: bool = True) -> Path:
    """Send paintmatch logs to a file, and INFO and above to the console.

    The directory and level default to the saved logging preferences
    (~/.paintmatch/logs and INFO unless changed).
    Calling it again replaces the handlers installed by the previous call.
    """
    if log_dir is None or level is None:
        prefs_manager = get_preferences_manager()
        if log_dir is None:
            log_dir = prefs_manager.get_log_dir()
        if level is None:
            level = prefs_manager.preferences.logging_prefs.level

    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILENAME

    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger('paintmatch')
    for handler in list(root_logger.handlers):
        if getattr(handler, '_paintmatch_handler', False):
            root_logger.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    file_handler._paintmatch_handler = True
    root_logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        console_handler._paintmatch_handler = True
        root_logger.addHandler(console_handler)

    root_logger.setLevel(level)
    root_logger.info(f'Logging to {log_file}')
    return log_file
