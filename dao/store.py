# dao/store.py
"""Persistence contract used by RequestLifecycleManager.

Every method may raise ``SyncError``; the manager treats that as "applied
locally, not yet durable".
"""
import copy
from dataclasses import replace
from typing import Dict, Iterable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from dao import inventory as inventory_dao
from dao import movement_request as request_dao
from lifecycle.errors import StaleStateError, SyncError
from lifecycle.records import Item, Request


class Store:
    def insert_request(self, record: Request) -> None:
        raise NotImplementedError

    def update_request_status(self, request_id: str, fields: Dict) -> None:
        raise NotImplementedError

    def list_requests(self, filter: Optional[Dict] = None) -> List[Request]:
        raise NotImplementedError

    def insert_inventory_batch(self, items: Iterable[Item]) -> None:
        raise NotImplementedError

    def update_inventory_item(self, item_id: str, fields: Dict) -> None:
        raise NotImplementedError

    def list_inventory_items(self, filter: Optional[Dict] = None) -> List[Item]:
        raise NotImplementedError


class SqlStore(Store):
    """Store trên Flask-SQLAlchemy (cần app context)."""

    def insert_request(self, record):
        self._call(request_dao.create_request, record)

    def update_request_status(self, request_id, fields):
        try:
            row = self._call(request_dao.update_request_status, request_id, **fields)
        except request_dao.TerminalStatusError as exc:
            raise StaleStateError(str(exc)) from exc
        if row is None:
            raise SyncError(f"Request {request_id} does not exist in the database.")

    def list_requests(self, filter=None):
        rows = self._call(request_dao.list_requests, filter)
        return [request_dao.to_record(r) for r in rows]

    def insert_inventory_batch(self, items):
        self._call(inventory_dao.insert_items, list(items))

    def update_inventory_item(self, item_id, fields):
        row = self._call(inventory_dao.update_item, item_id, **fields)
        if row is None:
            raise SyncError(f"Item {item_id} does not exist in the database.")

    def list_inventory_items(self, filter=None):
        rows = self._call(inventory_dao.list_items, filter)
        return [inventory_dao.to_record(r) for r in rows]

    @staticmethod
    def _call(fn, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except SQLAlchemyError as exc:
            raise SyncError(str(exc.__class__.__name__) + ": " + str(exc).splitlines()[0]) from exc


class MemoryStore(Store):
    """Store trong bộ nhớ; giữ bản sao riêng để độc lập với local view."""

    def __init__(self, items: Iterable[Item] = (), requests: Iterable[Request] = ()):
        self.items: Dict[str, Item] = {i.id: copy.deepcopy(i) for i in items}
        self.requests: Dict[str, Request] = {r.id: copy.deepcopy(r) for r in requests}

    def insert_request(self, record):
        if record.id in self.requests:
            raise SyncError(f"Request {record.id} already exists.")
        self.requests[record.id] = copy.deepcopy(record)

    def update_request_status(self, request_id, fields):
        if request_id not in self.requests:
            raise SyncError(f"Request {request_id} does not exist.")
        if self.requests[request_id].is_terminal:
            stored = self.requests[request_id].status.value
            raise StaleStateError(f"Request {request_id} is already {stored}.")
        self.requests[request_id] = replace(self.requests[request_id], **fields)

    def list_requests(self, filter=None):
        rows = [
            copy.deepcopy(r)
            for r in self.requests.values()
            if _matches(r, filter)
        ]
        return sorted(rows, key=lambda r: r.timestamp, reverse=True)

    def insert_inventory_batch(self, items):
        items = list(items)
        dupes = [i.id for i in items if i.id in self.items]
        if dupes:
            raise SyncError("Items already exist: " + ", ".join(dupes))
        for item in items:
            self.items[item.id] = copy.deepcopy(item)

    def update_inventory_item(self, item_id, fields):
        if item_id not in self.items:
            raise SyncError(f"Item {item_id} does not exist.")
        self.items[item_id] = replace(self.items[item_id], **fields)

    def list_inventory_items(self, filter=None):
        return [copy.deepcopy(i) for i in self.items.values() if _matches(i, filter)]


def _matches(record, filter) -> bool:
    return all(getattr(record, k) == v for k, v in (filter or {}).items())
