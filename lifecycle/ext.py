# lifecycle/ext.py
from flask import current_app

from dao.store import MemoryStore, SqlStore
from lifecycle.manager import RequestLifecycleManager
from utils.logger import get_logger

logger = get_logger("lifecycle.ext")

EXTENSION_KEY = "lifecycle"


def init_lifecycle(app, store=None):
    """
    Gắn 1 manager cho app.

    Mỗi HTTP request đánh dấu view cũ; lần gọi get_manager() đầu tiên trong
    request sẽ đọc lại từ store, nên các worker khác nhau cùng thấy DB.
    """
    if store is None:
        backend = app.config.get("STORE_BACKEND", "sql")
        store = MemoryStore() if backend == "memory" else SqlStore()
    manager = RequestLifecycleManager(
        store, reserve_items=app.config.get("RESERVE_ITEMS_ON_SUBMIT", False)
    )
    app.extensions[EXTENSION_KEY] = manager

    @app.before_request
    def _refresh_lifecycle():
        invalidate()

    return manager


def get_manager() -> RequestLifecycleManager:
    manager = current_app.extensions[EXTENSION_KEY]
    if not manager.loaded:
        for warning in manager.load():
            logger.warning(warning)
    return manager


def invalidate() -> None:
    """Bỏ view hiện tại; lần get_manager() kế tiếp đọc lại từ store."""
    current_app.extensions[EXTENSION_KEY].loaded = False
