# utils/logger.py
import logging
import os

ROOT_LOGGER = "equipment_tracker"

_configured = False


def _configure(level_name: str) -> None:
    global _configured
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(getattr(logging, level_name.upper(), logging.INFO))
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)s [%(name)s] %(funcName)s: %(message)s"
            )
        )
        root.addHandler(handler)
    _configured = True


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """
    Trả về logger con của "equipment_tracker".

    Handler chỉ gắn 1 lần cho logger gốc; level lấy từ LOG_LEVEL (mặc định INFO).
    """
    if not _configured:
        _configure(os.getenv("LOG_LEVEL", "INFO"))
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)


def set_level(level_name: str) -> None:
    _configure(level_name)
