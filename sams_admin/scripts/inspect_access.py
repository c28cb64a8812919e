"""
Show where a user's record lives and what client access each copy grants.

Read-only. Use it before and after `migrate_identity` to check that exactly
one record remains, under the UID.

Examples:
  python -m sams_admin.scripts.inspect_access
  python -m sams_admin.scripts.inspect_access --uid <FIREBASE_UID> --email user@example.com
"""

from __future__ import annotations

import argparse

from sams_admin.config import INSPECT_EMAIL, INSPECT_UID, ConfigError, configure_logging, require
from sams_admin.extensions import get_db
from sams_admin.services.access_inspector import (
    PATH_EMAIL_QUERY,
    PATH_LEGACY,
    PATH_UID,
    AccessReport,
    inspect_access,
)

_LABELS = {
    PATH_UID: 'UID key',
    PATH_LEGACY: 'Legacy key',
    PATH_EMAIL_QUERY: 'Email query',
}


def print_report(report: AccessReport) -> None:
    print(f"--- Access Inspection: {report.email} (UID: {report.uid}) ---")
    for r in report.lookups:
        label = _LABELS.get(r.path, r.path)
        if r.exists:
            print(f"[FOUND] {label}: users/{r.doc_id}")
            print(f"  - email: {r.email}")
            print(f"  - clientAccess: {', '.join(r.client_ids) if r.client_ids else '(none)'}")
        elif r.doc_id:
            print(f"[MISSING] {label}: users/{r.doc_id}")
        else:
            print(f"[MISSING] {label}: no documents with email == {report.email}")

    print()
    if report.has_duplicates:
        print("WARNING: Record exists under both the UID and a legacy key.")
        print("  -> RECOMMENDED FIX: Run 'migrate_identity' again; the legacy copy overwrites the UID copy.")
    elif report.uid_found:
        print("OK: single record under the UID key.")
    elif report.legacy_found:
        print("Legacy record only. Run 'migrate_identity' to move it to the UID key.")
    else:
        print("No record found under the UID or legacy key.")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Inspect where a user record lives')
    parser.add_argument('--uid', default=INSPECT_UID, help='Firebase Auth UID (default: SAMS_INSPECT_UID)')
    parser.add_argument('--email', default=INSPECT_EMAIL, help='User email (default: SAMS_INSPECT_EMAIL)')
    args = parser.parse_args(argv)

    try:
        uid = require(args.uid, 'SAMS_INSPECT_UID')
        email = require(args.email, 'SAMS_INSPECT_EMAIL')
    except ConfigError as e:
        parser.error(e.message)

    configure_logging()
    report = inspect_access(get_db(), uid, email)
    print_report(report)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
