"""In-memory stand-in for the slice of the Firestore client the services use."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

from google.api_core.exceptions import NotFound


class FakeSnapshot:
    def __init__(self, reference: "FakeDocumentRef", data: Optional[Dict[str, Any]]):
        self.reference = reference
        self.id = reference.id
        self._data = copy.deepcopy(data)

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> Optional[Dict[str, Any]]:
        return copy.deepcopy(self._data)


class FakeDocumentRef:
    def __init__(self, db: "FakeFirestore", path: str):
        self._db = db
        self.path = path
        self.id = path.rsplit("/", 1)[-1]

    def get(self, transaction=None) -> FakeSnapshot:
        self._db._check(self.path)
        self._db.reads.append(self.path)
        return FakeSnapshot(self, self._db.docs.get(self.path))

    def set(self, data: Dict[str, Any], merge: bool = False) -> None:
        self._db._write("set", self.path)
        if merge and self.path in self._db.docs:
            self._db.docs[self.path].update(copy.deepcopy(data))
        else:
            self._db.docs[self.path] = copy.deepcopy(data)

    def update(self, data: Dict[str, Any]) -> None:
        if self.path not in self._db.docs:
            raise NotFound(f"No document to update: {self.path}")
        self._db._write("update", self.path)
        self._db.docs[self.path].update(copy.deepcopy(data))

    def delete(self) -> None:
        self._db._write("delete", self.path)
        self._db.docs.pop(self.path, None)

    def collection(self, name: str) -> "FakeCollection":
        return FakeCollection(self._db, f"{self.path}/{name}")


class FakeQuery:
    def __init__(self, collection: "FakeCollection", filters=None, limit: Optional[int] = None):
        self._collection = collection
        self._filters = list(filters or [])
        self._limit = limit

    def where(self, field: str, op: str, value) -> "FakeQuery":
        if op != "==":
            raise NotImplementedError(op)
        return FakeQuery(self._collection, self._filters + [(field, value)], self._limit)

    def limit(self, count: int) -> "FakeQuery":
        return FakeQuery(self._collection, self._filters, count)

    def stream(self):
        out = []
        for snap in self._collection.stream():
            data = snap.to_dict()
            if all(field in data and data[field] == value for field, value in self._filters):
                out.append(snap)
        if self._limit is not None:
            out = out[: self._limit]
        return iter(out)


class FakeCollection:
    def __init__(self, db: "FakeFirestore", path: str):
        self._db = db
        self.path = path
        self.id = path.rsplit("/", 1)[-1]

    def document(self, doc_id: str) -> FakeDocumentRef:
        return FakeDocumentRef(self._db, f"{self.path}/{doc_id}")

    def where(self, field: str, op: str, value) -> FakeQuery:
        return FakeQuery(self).where(field, op, value)

    def limit(self, count: int) -> FakeQuery:
        return FakeQuery(self, limit=count)

    def stream(self):
        self._db._check(self.path)
        prefix = self.path + "/"
        snaps = []
        for path in sorted(self._db.docs):
            if path.startswith(prefix) and "/" not in path[len(prefix):]:
                snaps.append(FakeSnapshot(FakeDocumentRef(self._db, path), self._db.docs[path]))
        return iter(snaps)


class FakeWriteBatch:
    def __init__(self, db: "FakeFirestore"):
        self._db = db
        self._ops: List[tuple] = []
        self.committed = False

    def set(self, ref: FakeDocumentRef, data: Dict[str, Any], merge: bool = False) -> None:
        self._ops.append(("set", ref, copy.deepcopy(data), merge))

    def delete(self, ref: FakeDocumentRef) -> None:
        self._ops.append(("delete", ref, None, False))

    def commit(self) -> None:
        if self._db.fail_commit:
            raise self._db.fail_commit
        for op, ref, data, merge in self._ops:
            if op == "set":
                ref.set(data, merge=merge)
            else:
                ref.delete()
        self.committed = True


class FakeFirestore:
    def __init__(self, docs: Optional[Dict[str, Dict[str, Any]]] = None):
        self.docs: Dict[str, Dict[str, Any]] = copy.deepcopy(docs or {})
        self.reads: List[str] = []
        self.writes: List[tuple] = []
        # path -> exception raised when that document or collection is read
        self.fail_paths: Dict[str, Exception] = {}
        self.fail_commit: Optional[Exception] = None

    def _check(self, path: str) -> None:
        if path in self.fail_paths:
            raise self.fail_paths[path]

    def _write(self, op: str, path: str) -> None:
        self.writes.append((op, path))

    def collection(self, name: str) -> FakeCollection:
        return FakeCollection(self, name)

    def batch(self) -> FakeWriteBatch:
        return FakeWriteBatch(self)

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        return copy.deepcopy(self.docs)
