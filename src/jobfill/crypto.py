"""Passphrase-based profile encryption.

Keys are derived with PBKDF2-HMAC-SHA256 over a fixed salt, so the same
passphrase always yields the same key. Payloads are sealed with AES-GCM
under a fresh random nonce; the nonce and ciphertext (tag appended) are
kept as lists of byte values so the envelope stays plain JSON::

    {"_enc": true, "iv": [12 ints], "ct": [... ints]}
"""

from __future__ import annotations

import json
import logging
import os
from typing import TYPE_CHECKING, Any, Mapping

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from jobfill.exceptions import DecryptionError
from jobfill.models.profile import EncryptedProfile

if TYPE_CHECKING:
    from jobfill.settings.config import CryptoSettings

logger = logging.getLogger(__name__)


def _crypto_settings(settings: CryptoSettings | None) -> CryptoSettings:
    if settings is not None:
        return settings
    from jobfill.settings import get_settings

    return get_settings().crypto


def derive_key(passphrase: str, settings: CryptoSettings | None = None) -> bytes:
    """Derive the AES key for *passphrase*.

    Args:
        passphrase: User passphrase, encoded as UTF-8.
        settings: Crypto section to use; defaults to the global settings.

    Returns:
        ``key_length`` raw key bytes (32 for AES-256).
    """
    cfg = _crypto_settings(settings)
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=cfg.key_length,
        salt=cfg.salt.encode("utf-8"),
        iterations=cfg.iterations,
    )
    return kdf.derive(passphrase.encode("utf-8"))


def encrypt_json(data: Any, key: bytes, settings: CryptoSettings | None = None) -> dict[str, list[int]]:
    """Serialize *data* to JSON and seal it with AES-GCM.

    Returns:
        ``{"iv": [...], "ct": [...]}`` with both parts as byte-value lists.
    """
    nonce = os.urandom(_crypto_settings(settings).nonce_length)
    plaintext = json.dumps(data, separators=(",", ":")).encode("utf-8")
    ciphertext = AESGCM(key).encrypt(nonce, plaintext, None)
    return {"iv": list(nonce), "ct": list(ciphertext)}


def decrypt_json(payload: Mapping[str, Any], key: bytes) -> Any:
    """Open an ``{iv, ct}`` payload produced by ``encrypt_json``.

    Raises:
        DecryptionError: Wrong key, tampered ciphertext, or a payload that
            does not decode to JSON.
    """
    try:
        nonce = bytes(payload["iv"])
        ciphertext = bytes(payload["ct"])
    except (KeyError, TypeError, ValueError) as exc:
        raise DecryptionError("Malformed encrypted payload") from exc

    try:
        plaintext = AESGCM(key).decrypt(nonce, ciphertext, None)
    except (InvalidTag, ValueError) as exc:
        raise DecryptionError("Could not decrypt profile: wrong passphrase or corrupted data") from exc

    try:
        return json.loads(plaintext.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecryptionError("Decrypted payload is not valid JSON") from exc


def encrypt_profile(
    profile: Mapping[str, Any],
    passphrase: str,
    settings: CryptoSettings | None = None,
) -> dict[str, Any]:
    """Build the stored ``{"_enc": true, "iv", "ct"}`` envelope for a profile dict."""
    sealed = encrypt_json(dict(profile), derive_key(passphrase, settings), settings)
    return EncryptedProfile(iv=sealed["iv"], ct=sealed["ct"]).to_payload()


def decrypt_profile(
    envelope: Mapping[str, Any],
    passphrase: str,
    settings: CryptoSettings | None = None,
) -> dict[str, Any]:
    """Inverse of ``encrypt_profile``; returns the plain profile dict."""
    data = decrypt_json(envelope, derive_key(passphrase, settings))
    if not isinstance(data, dict):
        raise DecryptionError("Decrypted payload is not a profile object")
    return data
