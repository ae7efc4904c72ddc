"""Crypto bridge: Ed25519 signing keys via PyNaCl (libsodium).

Key file format
---------------
Secret keys are stored password-protected in an armored text file::

    -----BEGIN PUBFORGE SIGNING KEY-----
    <base64(salt || nonce || ciphertext)>
    -----END PUBFORGE SIGNING KEY-----

The 32-byte Ed25519 seed is encrypted with ``nacl.secret.SecretBox`` under
a key derived from the password with Argon2id (``nacl.pwhash.argon2id``).

Key ids
-------
A key id is the first 16 hex characters of SHA-256 over the hex-encoded
verify key.  Configured ids may be given in short form: any case-insensitive
suffix of at least 8 characters matches.
"""

from __future__ import annotations

import base64
import hashlib
import logging

import nacl.pwhash
import nacl.secret
import nacl.signing
import nacl.utils
from nacl.exceptions import BadSignatureError

logger = logging.getLogger(__name__)

ARMOR_BEGIN = "-----BEGIN PUBFORGE SIGNING KEY-----"
ARMOR_END = "-----END PUBFORGE SIGNING KEY-----"

_KDF = nacl.pwhash.argon2id
_SALT_BYTES = _KDF.SALTBYTES
_MIN_KEY_ID_LENGTH = 8
_SEED_BYTES = 32


# ---------------------------------------------------------------------------
# Key generation and identification
# ---------------------------------------------------------------------------


def generate_keypair() -> tuple[str, str]:
    """Generate an Ed25519 key-pair.

    Returns
    -------
    tuple[str, str]
        ``(private_key_hex, public_key_hex)``; the private key is the
        32-byte seed.
    """
    sk = nacl.signing.SigningKey.generate()
    return (sk.encode().hex(), sk.verify_key.encode().hex())


def public_key_for(private_key: str) -> str:
    """Hex verify key for a hex-encoded seed."""
    sk = nacl.signing.SigningKey(bytes.fromhex(private_key))
    return sk.verify_key.encode().hex()


def key_fingerprint(public_key: str) -> str:
    """First 16 hex characters of SHA-256(public_key).  Empty for empty keys."""
    if not public_key:
        return ""
    return hashlib.sha256(public_key.encode("utf-8")).hexdigest()[:16]


def key_id_matches(configured: str, public_key: str) -> bool:
    """Whether *configured* names the key with the given public key."""
    wanted = configured.strip().lower()
    if len(wanted) < _MIN_KEY_ID_LENGTH:
        return False
    return key_fingerprint(public_key).endswith(wanted)


# ---------------------------------------------------------------------------
# Password-protected key files
# ---------------------------------------------------------------------------


def _derive_box(password: str, salt: bytes) -> nacl.secret.SecretBox:
    key = _KDF.kdf(
        nacl.secret.SecretBox.KEY_SIZE,
        password.encode("utf-8"),
        salt,
        opslimit=_KDF.OPSLIMIT_INTERACTIVE,
        memlimit=_KDF.MEMLIMIT_INTERACTIVE,
    )
    return nacl.secret.SecretBox(key)


def export_signing_key(private_key: str, password: str) -> str:
    """Armor and encrypt a hex-encoded seed with *password*."""
    salt = nacl.utils.random(_SALT_BYTES)
    encrypted = _derive_box(password, salt).encrypt(bytes.fromhex(private_key))
    body = base64.b64encode(salt + bytes(encrypted)).decode("ascii")
    lines = [body[i:i + 64] for i in range(0, len(body), 64)]
    return "\n".join([ARMOR_BEGIN, *lines, ARMOR_END]) + "\n"


def import_signing_key(armored: str, password: str) -> str:
    """Decrypt an armored key and return the hex-encoded seed.

    Raises
    ------
    ValueError
        If the armor or base64 body is malformed.
    nacl.exceptions.CryptoError
        If the password is wrong or the ciphertext was altered.
    """
    lines = [line.strip() for line in armored.strip().splitlines() if line.strip()]
    if len(lines) < 3 or lines[0] != ARMOR_BEGIN or lines[-1] != ARMOR_END:
        raise ValueError("not an armored pubforge signing key")
    raw = base64.b64decode("".join(lines[1:-1]), validate=True)
    if len(raw) <= _SALT_BYTES:
        raise ValueError("signing key body is truncated")
    salt, encrypted = raw[:_SALT_BYTES], raw[_SALT_BYTES:]
    seed = _derive_box(password, salt).decrypt(encrypted)
    if len(seed) != _SEED_BYTES:
        raise ValueError(f"decrypted seed has {len(seed)} bytes, expected {_SEED_BYTES}")
    logger.debug("Decrypted signing key for %s", key_fingerprint(public_key_for(seed.hex())))
    return seed.hex()


# ---------------------------------------------------------------------------
# Sign / verify
# ---------------------------------------------------------------------------


def sign_data(data: bytes, private_key: str) -> str:
    """Sign *data* with the hex seed *private_key*; return the hex signature."""
    sk = nacl.signing.SigningKey(bytes.fromhex(private_key))
    return sk.sign(data).signature.hex()


def verify_data(data: bytes, signature: str, public_key: str) -> bool:
    """Verify *signature* over *data*.  Malformed input returns ``False``."""
    if not signature:
        return False
    try:
        vk = nacl.signing.VerifyKey(bytes.fromhex(public_key))
        vk.verify(data, bytes.fromhex(signature))
        return True
    except (BadSignatureError, ValueError, TypeError):
        return False
