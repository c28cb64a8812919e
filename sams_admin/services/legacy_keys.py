"""
Legacy user document keys.

Before user records were keyed by Firebase Auth UID, the `users` collection
keyed them by an encoding of the user's email address:

    key = base64url(utf8(email)) with the trailing '=' padding stripped

Every script that needs to find a legacy record must derive the key through
this module so the encoding only lives in one place.
"""

from __future__ import annotations

import base64
import binascii
import re
from typing import List

LEGACY_KEY_VERSION = 1

_KEY_RE = re.compile(r"[A-Za-z0-9_-]+")


class LegacyKeyError(ValueError):
    pass


def encode_legacy_key(email: str) -> str:
    """
    Derive the legacy document key for an email. The email is used exactly as
    given (no trimming, no case folding).
    """
    if not email:
        raise LegacyKeyError("Email is required to derive a legacy key")
    return base64.urlsafe_b64encode(email.encode('utf-8')).rstrip(b'=').decode('ascii')


def decode_legacy_key(key: str) -> str:
    if not key or not _KEY_RE.fullmatch(key):
        raise LegacyKeyError(f"Not a legacy key: {key!r}")
    padded = key + '=' * (-len(key) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded)
        return raw.decode('utf-8')
    except (binascii.Error, UnicodeDecodeError) as e:
        raise LegacyKeyError(f"Not a legacy key: {key!r}") from e


def legacy_key_candidates(email: str) -> List[str]:
    """
    Keys a legacy record for this email may be stored under, most likely first.
    The lowercased variant covers records written by clients that normalised
    the address before encoding it.
    """
    keys = [encode_legacy_key(email)]
    lowered = encode_legacy_key(email.lower())
    if lowered not in keys:
        keys.append(lowered)
    return keys
