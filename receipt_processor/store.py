import threading
from typing import List, Optional
from uuid import UUID

from uuid6 import uuid7

from .schemas import Receipt, StoredReceipt

class ReceiptStore:
    """
    In-memory, append-only receipt storage.
    - one lock guards every append and every scan
    - ids are UUIDv7 minted under the lock, so insertion order matches id order
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._receipts: List[StoredReceipt] = []

    def submit(self, receipt: Receipt) -> UUID:
        with self._lock:
            stored = StoredReceipt(id=uuid7(), receipt=receipt)
            self._receipts.append(stored)
        return stored.id

    def find_by_id(self, receipt_id: str) -> Optional[StoredReceipt]:
        with self._lock:
            for stored in self._receipts:
                if str(stored.id) == receipt_id:
                    return stored
        return None

    def __len__(self) -> int:
        with self._lock:
            return len(self._receipts)
