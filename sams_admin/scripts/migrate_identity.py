"""
Move a user record from its legacy email-derived key to the Firebase Auth UID.

Examples:
  python -m sams_admin.scripts.migrate_identity
  python -m sams_admin.scripts.migrate_identity --uid <FIREBASE_UID> --email user@example.com --dry-run
"""

from __future__ import annotations

import argparse

from sams_admin.config import MIGRATE_EMAIL, MIGRATE_UID, ConfigError, configure_logging, require
from sams_admin.extensions import get_db
from sams_admin.services.identity_migrator import (
    STATUS_DRY_RUN,
    STATUS_MIGRATED,
    STATUS_NOT_FOUND,
    STATUS_SAME_KEY,
    MigrationResult,
    migrate_identity,
)


def print_result(result: MigrationResult) -> None:
    if result.status == STATUS_NOT_FOUND:
        print(f"[NOT FOUND] No legacy record for {result.email}. Nothing was written.")
        if result.email_hits:
            print(f"  - Documents with email == {result.email}: {', '.join(result.email_hits)}")
            if result.target_uid in result.email_hits:
                print("  -> Looks already migrated.")
        return

    access = ', '.join(sorted((result.payload.get('clientAccess') or {}).keys())) or '(none)'
    if result.status == STATUS_SAME_KEY:
        print(f"[SKIP] Legacy key {result.legacy_key} is already the target key.")
    elif result.status == STATUS_DRY_RUN:
        print(f"  [DRY RUN] Would write users/{result.target_uid} (clientAccess: {access})")
        print(f"  [DRY RUN] Would delete old doc users/{result.legacy_key}")
    elif result.status == STATUS_MIGRATED:
        print(f"  [SUCCESS] Written to users/{result.target_uid} (clientAccess: {access})")
        print(f"  [SUCCESS] Deleted old doc users/{result.legacy_key}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Re-key a user record from legacy email key to UID')
    parser.add_argument('--uid', default=MIGRATE_UID, help='Target Firebase Auth UID (default: SAMS_MIGRATE_UID)')
    parser.add_argument('--email', default=MIGRATE_EMAIL, help='User email (default: SAMS_MIGRATE_EMAIL)')
    parser.add_argument('--dry-run', action='store_true', help='Report the move without writing')
    args = parser.parse_args(argv)

    try:
        uid = require(args.uid, 'SAMS_MIGRATE_UID')
        email = require(args.email, 'SAMS_MIGRATE_EMAIL')
    except ConfigError as e:
        parser.error(e.message)

    configure_logging()
    print(f"[MIGRATE] {email} -> users/{uid} (Mode: {'DRY RUN' if args.dry_run else 'EXECUTE'})")
    result = migrate_identity(get_db(), uid, email, dry_run=args.dry_run)
    print_result(result)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
