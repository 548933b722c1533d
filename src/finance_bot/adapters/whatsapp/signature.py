"""Assinatura X-Hub-Signature-256 dos webhooks da Meta.

A Meta assina o corpo bruto com o app secret (HMAC SHA-256). Sem secret
configurado (development), a checagem é pulada e o resultado diz isso.
"""

from __future__ import annotations

import hashlib
import hmac
from collections.abc import Mapping
from dataclasses import dataclass

SIGNATURE_HEADER = "x-hub-signature-256"
_SCHEME = "sha256="


@dataclass(frozen=True, slots=True)
class SignatureResult:
    valid: bool
    skipped: bool = False
    error: str | None = None


def sign_body(raw_body: bytes, app_secret: str) -> str:
    """Valor do header que a Meta enviaria para este corpo."""
    mac = hmac.new(app_secret.encode("utf-8"), raw_body, hashlib.sha256)
    return _SCHEME + mac.hexdigest()


def verify_meta_signature(
    raw_body: bytes,
    headers: Mapping[str, str],
    app_secret: str | None,
) -> SignatureResult:
    if not app_secret:
        return SignatureResult(valid=True, skipped=True)

    received = headers.get(SIGNATURE_HEADER) or ""
    if not received:
        error = "missing_signature"
    elif not received.startswith(_SCHEME):
        error = "invalid_signature_format"
    elif not hmac.compare_digest(received, sign_body(raw_body, app_secret)):
        error = "signature_mismatch"
    else:
        return SignatureResult(valid=True)
    return SignatureResult(valid=False, error=error)
