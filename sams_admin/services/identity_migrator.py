"""
Re-key a user record from its legacy email-derived key onto the user's
Firebase Auth UID.

The copy and the delete are committed as one write batch, so the store
never holds both records because of this procedure. A duplicate left by an
older, non-atomic run shows up in `inspect_access(...).has_duplicates` and
is fixed by simply running the migration again: the legacy payload wins.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from sams_admin.services.legacy_keys import legacy_key_candidates
from sams_admin.services.user_store import UserStore

logger = logging.getLogger('IdentityMigrator')

STATUS_MIGRATED = 'migrated'
STATUS_NOT_FOUND = 'not_found'
STATUS_SAME_KEY = 'same_key'
STATUS_DRY_RUN = 'dry_run'


@dataclass
class MigrationResult:
    status: str
    target_uid: str
    email: str
    legacy_key: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    # Documents matching `email ==` when no legacy key was found.
    email_hits: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status != STATUS_NOT_FOUND


def migrate_identity(db, target_uid: str, email: str, dry_run: bool = False) -> MigrationResult:
    if not target_uid:
        raise ValueError("Target UID is required")
    if not email:
        raise ValueError("Email is required")

    store = UserStore(db)

    # 1. Locate the legacy record
    legacy_key = None
    legacy = None
    for key in legacy_key_candidates(email):
        legacy = store.get(key)
        if legacy:
            legacy_key = key
            break

    if legacy is None:
        hits = [r.id for r in store.find_by_email(email)]
        logger.info("No legacy record for %s (email query hits: %s)", email, hits or 'none')
        return MigrationResult(
            status=STATUS_NOT_FOUND,
            target_uid=target_uid,
            email=email,
            email_hits=hits,
        )

    # 2. Payload is moved untouched
    payload = legacy.to_dict()

    if legacy_key == target_uid:
        logger.info("Legacy key for %s already equals target %s", email, target_uid)
        return MigrationResult(STATUS_SAME_KEY, target_uid, email, legacy_key, payload)

    if dry_run:
        logger.info("[DRY RUN] Would move users/%s -> users/%s", legacy_key, target_uid)
        return MigrationResult(STATUS_DRY_RUN, target_uid, email, legacy_key, payload)

    # 3 + 4. Overwrite target and delete legacy together
    store.move(legacy_key, target_uid, payload)
    logger.info("Moved users/%s -> users/%s", legacy_key, target_uid)

    # 5. Only reached once the batch has committed
    return MigrationResult(STATUS_MIGRATED, target_uid, email, legacy_key, payload)
