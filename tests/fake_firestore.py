"""
In-memory stand-in for the small part of the Firestore client the service uses.
"""

import copy
from typing import Any, Dict, List, Optional


class FakeSnapshot:
    def __init__(self, doc_id: str, data: Optional[Dict[str, Any]]):
        self.id = doc_id
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, store: Dict[str, Dict[str, Any]], doc_id: str):
        self._store = store
        self.id = doc_id

    def set(self, data: Dict[str, Any], merge: bool = False):
        if merge and self.id in self._store:
            self._store[self.id].update(copy.deepcopy(data))
        else:
            self._store[self.id] = copy.deepcopy(data)

    def get(self) -> FakeSnapshot:
        return FakeSnapshot(self.id, self._store.get(self.id))

    def delete(self):
        self._store.pop(self.id, None)


class FakeQuery:
    def __init__(self, store: Dict[str, Dict[str, Any]], field: str, value: Any):
        self._store = store
        self._field = field
        self._value = value

    def stream(self) -> List[FakeSnapshot]:
        return [
            FakeSnapshot(doc_id, data)
            for doc_id, data in self._store.items()
            if data.get(self._field) == self._value
        ]


class FakeCollection:
    def __init__(self):
        self.docs: Dict[str, Dict[str, Any]] = {}

    def document(self, doc_id: str) -> FakeDocument:
        return FakeDocument(self.docs, doc_id)

    def where(self, filter=None):
        assert filter.op_string == "=="
        return FakeQuery(self.docs, filter.field_path, filter.value)


class FakeFirestore:
    def __init__(self):
        self.collections: Dict[str, FakeCollection] = {}

    def collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())
