# utils/logger.py
import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

LOGGER_NAME = "inventory"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(log_dir: Path | str = Path("data/logs")):
    """
    Attach handlers to the "inventory" logger and return it.

    The services never configure logging themselves. They log to
    children of this logger ("inventory.store", "inventory.form",
    "inventory.service"), so whatever is set up here also receives
    store load/parse errors and form rejections. The GUI logs user
    actions on the parent directly as "GUI: ..." lines.

    Output goes to the console and to <log_dir>/inventory.log,
    rotated at midnight with a week of history kept.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)

    # already configured (the GUI and main() both call this)
    if logger.handlers:
        return logger

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    file_handler = TimedRotatingFileHandler(
        filename=log_dir / "inventory.log",
        when="midnight",
        backupCount=7,
        encoding="utf-8"
    )
    console_handler = logging.StreamHandler()

    for handler in (file_handler, console_handler):
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.info(f"Inventory logging started, writing to {log_dir / 'inventory.log'}")
    return logger
