"""
Enable the List Management modules for a tenant.

Examples:
  python -m sams_admin.scripts.seed_tenant_config
  python -m sams_admin.scripts.seed_tenant_config --tenant AVII
  python -m sams_admin.scripts.seed_tenant_config --enable-units-all
  python -m sams_admin.scripts.seed_tenant_config --status
"""

from __future__ import annotations

import argparse

from sams_admin.config import configure_logging
from sams_admin.extensions import get_db
from sams_admin.services.tenant_config import (
    DEFAULT_TENANT_ID,
    LIST_TOGGLES,
    activities_config_path,
    enable_unit_management,
    lists_config_status,
    seed_lists_config,
)


def seed(db, tenant_id):
    print(f"--- Seeding List Management config for {tenant_id} ---")
    path = seed_lists_config(db, tenant_id, LIST_TOGGLES)
    print(f"Written {path}:")
    for name, enabled in LIST_TOGGLES.items():
        print(f"  {name}: {enabled}")
    print()
    print(f"Note: the 'List Management' menu item is configured separately in {activities_config_path(tenant_id)}.")


def enable_units(db):
    print("--- Enabling Unit Management for all clients ---")
    details = enable_unit_management(db)
    print(f"Processed: {details['processed']}")
    print(f"Updated: {details['updated']}")
    print(f"Created: {details['created']}")
    print(f"Already enabled: {details['alreadyEnabled']}")
    for err in details['errors']:
        print(f"[ERROR] {err['clientId']}: {err['error']}")
    return details


def status(db):
    print("--- Unit Management status ---")
    results = lists_config_status(db)
    for r in results:
        line = f"{r['clientId']}: {r['status']} (units: {r['unitsCount']})"
        if r.get('error'):
            line += f" - {r['error']}"
        print(line)
    if not results:
        print("No clients found.")
    return results


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Seed tenant List Management config')
    parser.add_argument('--tenant', default=DEFAULT_TENANT_ID, help=f'Tenant id (default: {DEFAULT_TENANT_ID})')
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument('--enable-units-all', action='store_true', help='Enable Unit Management for every client')
    mode.add_argument('--status', action='store_true', help='Report Unit Management status per client')
    args = parser.parse_args(argv)

    configure_logging()
    db = get_db()

    if args.status:
        status(db)
    elif args.enable_units_all:
        details = enable_units(db)
        return 1 if details['errors'] else 0
    else:
        seed(db, args.tenant)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
