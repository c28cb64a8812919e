from __future__ import annotations

from typing import Any, Dict, List, Optional

USERS_COLLECTION = 'users'


class UserRecord:
    def __init__(self, doc_snapshot=None, data=None, doc_id=None):
        if doc_snapshot:
            self.id = doc_snapshot.id
            self._data = doc_snapshot.to_dict() or {}
        else:
            self.id = doc_id
            self._data = data or {}

    def to_dict(self):
        return self._data

    @property
    def email(self):
        return self._data.get('email', '')

    @property
    def client_access(self) -> Dict[str, Any]:
        return self._data.get('clientAccess') or {}

    @property
    def client_ids(self) -> List[str]:
        return sorted(self.client_access.keys())


class UserStore:
    """
    The handful of operations the admin scripts perform against `users`:
    get by key, query by field, set by key, delete by key.
    """

    def __init__(self, db):
        if not db:
            raise ValueError("Database not available")
        self.db = db

    def _ref(self, key):
        return self.db.collection(USERS_COLLECTION).document(str(key))

    def get(self, key) -> Optional[UserRecord]:
        if not key:
            return None
        doc = self._ref(key).get()
        if doc.exists:
            return UserRecord(doc_snapshot=doc)
        return None

    def find_by_field(self, field: str, value, limit: Optional[int] = None) -> List[UserRecord]:
        query = self.db.collection(USERS_COLLECTION).where(field, '==', value)
        if limit is not None:
            query = query.limit(limit)
        return [UserRecord(doc_snapshot=doc) for doc in query.stream()]

    def find_by_email(self, email: str) -> List[UserRecord]:
        return self.find_by_field('email', email)

    def set(self, key, data: Dict[str, Any]) -> None:
        # Full replace; callers that want a merge must say so explicitly.
        self._ref(key).set(data)

    def delete(self, key) -> None:
        self._ref(key).delete()

    def move(self, source_key, target_key, data: Dict[str, Any]) -> None:
        """
        Write `data` to target_key and delete source_key in a single batch,
        so both happen or neither does.
        """
        batch = self.db.batch()
        batch.set(self._ref(target_key), data)
        batch.delete(self._ref(source_key))
        batch.commit()
