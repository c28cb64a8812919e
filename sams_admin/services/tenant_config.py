from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from firebase_admin import firestore

from sams_admin.config import TENANT_ID

logger = logging.getLogger('TenantConfig')

CLIENTS_COLLECTION = 'clients'
LISTS_CONFIG_DOC = 'lists'
ACTIVITIES_CONFIG_DOC = 'activities'

DEFAULT_TENANT_ID = TENANT_ID

# List Management modules enabled for a seeded tenant
LIST_TOGGLES: Dict[str, bool] = {
    'vendor': True,
    'category': True,
    'method': True,
    'unit': True,
}

# Created for tenants that have no lists config yet
DEFAULT_LISTS_CONFIG: Dict[str, bool] = {**LIST_TOGGLES, 'exchangerates': True}

UPDATED_BY = 'sams-admin-scripts'


def _client_doc(db, tenant_id: str):
    return db.collection(CLIENTS_COLLECTION).document(tenant_id)


def _config_doc(db, tenant_id: str, name: str):
    return _client_doc(db, tenant_id).collection('config').document(name)


def lists_config_path(tenant_id: str) -> str:
    return f"{CLIENTS_COLLECTION}/{tenant_id}/config/{LISTS_CONFIG_DOC}"


def activities_config_path(tenant_id: str) -> str:
    return f"{CLIENTS_COLLECTION}/{tenant_id}/config/{ACTIVITIES_CONFIG_DOC}"


def seed_lists_config(db, tenant_id: Optional[str] = None, toggles: Optional[Dict[str, bool]] = None) -> str:
    """
    Replace the tenant's lists config with the toggle mapping.
    Running it again with the same mapping leaves the same document.
    """
    if not db:
        raise ValueError("Database not available")
    tenant_id = tenant_id or DEFAULT_TENANT_ID
    toggles = dict(LIST_TOGGLES if toggles is None else toggles)

    for name, enabled in toggles.items():
        if not isinstance(enabled, bool):
            raise ValueError(f"Toggle {name!r} must be a bool, got {enabled!r}")

    _config_doc(db, tenant_id, LISTS_CONFIG_DOC).set(toggles)
    logger.info("Seeded %s with %s", lists_config_path(tenant_id), toggles)
    return lists_config_path(tenant_id)


def enable_unit_management(db) -> Dict[str, Any]:
    """
    Turn on Unit Management for every tenant. Existing configs get `unit: true`,
    tenants without a lists config get the default one. A failing tenant is
    recorded in `errors` and the sweep carries on.
    """
    if not db:
        raise ValueError("Database not available")

    details: Dict[str, Any] = {
        'processed': 0,
        'updated': 0,
        'created': 0,
        'alreadyEnabled': 0,
        'errors': [],
    }

    for client_doc in db.collection(CLIENTS_COLLECTION).stream():
        tenant_id = client_doc.id
        details['processed'] += 1
        try:
            ref = _config_doc(db, tenant_id, LISTS_CONFIG_DOC)
            snap = ref.get()

            if snap.exists:
                current = snap.to_dict() or {}
                if current.get('unit') is True:
                    logger.info("Unit Management already enabled for %s", tenant_id)
                    details['alreadyEnabled'] += 1
                    continue

                ref.update({
                    'unit': True,
                    'updatedAt': firestore.SERVER_TIMESTAMP,
                    'updatedBy': UPDATED_BY,
                })
                logger.info("Enabled Unit Management for %s", tenant_id)
                details['updated'] += 1
            else:
                ref.set({
                    **DEFAULT_LISTS_CONFIG,
                    'createdAt': firestore.SERVER_TIMESTAMP,
                    'createdBy': UPDATED_BY,
                })
                logger.info("Created lists config with Unit Management for %s", tenant_id)
                details['created'] += 1
        except Exception as e:
            logger.error("Error processing client %s: %s", tenant_id, e)
            details['errors'].append({'clientId': tenant_id, 'error': str(e)})

    return details


def lists_config_status(db) -> List[Dict[str, Any]]:
    if not db:
        raise ValueError("Database not available")

    results = []
    for client_doc in db.collection(CLIENTS_COLLECTION).stream():
        tenant_id = client_doc.id
        result: Dict[str, Any] = {
            'clientId': tenant_id,
            'configExists': False,
            'unitsEnabled': False,
            'unitsCount': 0,
            'status': 'unknown',
        }
        try:
            snap = _config_doc(db, tenant_id, LISTS_CONFIG_DOC).get()
            if snap.exists:
                result['configExists'] = True
                result['unitsEnabled'] = (snap.to_dict() or {}).get('unit') is True

            result['unitsCount'] = len(list(_client_doc(db, tenant_id).collection('units').stream()))

            if result['configExists'] and result['unitsEnabled']:
                result['status'] = 'enabled'
            elif result['configExists']:
                result['status'] = 'disabled'
            else:
                result['status'] = 'no-config'
        except Exception as e:
            result['status'] = 'error'
            result['error'] = str(e)
        results.append(result)

    return results
