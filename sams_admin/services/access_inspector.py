from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from sams_admin.services.legacy_keys import legacy_key_candidates
from sams_admin.services.user_store import UserStore

logger = logging.getLogger('AccessInspector')

PATH_UID = 'uid'
PATH_LEGACY = 'legacy'
PATH_EMAIL_QUERY = 'email-query'


@dataclass(frozen=True)
class LookupResult:
    path: str
    doc_id: Optional[str]
    exists: bool
    email: Optional[str] = None
    client_ids: List[str] = field(default_factory=list)


@dataclass
class AccessReport:
    uid: str
    email: str
    lookups: List[LookupResult] = field(default_factory=list)

    def by_path(self, path: str) -> List[LookupResult]:
        return [r for r in self.lookups if r.path == path]

    @property
    def uid_found(self) -> bool:
        return any(r.exists for r in self.by_path(PATH_UID))

    @property
    def legacy_found(self) -> bool:
        return any(r.exists for r in self.by_path(PATH_LEGACY))

    @property
    def email_hits(self) -> List[str]:
        return [r.doc_id for r in self.by_path(PATH_EMAIL_QUERY) if r.exists]

    @property
    def has_duplicates(self) -> bool:
        """Both the uid record and a separate legacy record exist (interrupted migration)."""
        return self.uid_found and any(
            r.exists and r.doc_id != self.uid for r in self.by_path(PATH_LEGACY)
        )


def inspect_access(db, uid: str, email: str) -> AccessReport:
    """
    Look the user up by uid key, by every legacy key candidate and by an
    `email ==` query. Reads only.
    """
    store = UserStore(db)
    report = AccessReport(uid=uid, email=email)

    record = store.get(uid)
    report.lookups.append(_lookup(PATH_UID, uid, record))

    for key in legacy_key_candidates(email):
        report.lookups.append(_lookup(PATH_LEGACY, key, store.get(key)))

    hits = store.find_by_email(email)
    if not hits:
        report.lookups.append(LookupResult(path=PATH_EMAIL_QUERY, doc_id=None, exists=False))
    for hit in hits:
        report.lookups.append(_lookup(PATH_EMAIL_QUERY, hit.id, hit))

    if report.has_duplicates:
        logger.warning("User %s exists under both uid and legacy key", email)
    return report


def _lookup(path, doc_id, record) -> LookupResult:
    if record is None:
        return LookupResult(path=path, doc_id=doc_id, exists=False)
    return LookupResult(
        path=path,
        doc_id=record.id,
        exists=True,
        email=record.email,
        client_ids=record.client_ids,
    )
