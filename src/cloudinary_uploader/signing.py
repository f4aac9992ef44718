"""Signed request support for the Cloudinary upload API.

The service recomputes the signature from the transmitted fields and the
shared secret, so the canonical form below must match it byte for byte:
every field except api_key, sorted by key, joined as key=value with "&",
immediately followed by the secret, hashed with SHA-1.
"""

from __future__ import annotations

import hashlib
import time
from collections.abc import Mapping
from dataclasses import dataclass

API_KEY_FIELD = "api_key"
SIGNATURE_FIELD = "signature"


@dataclass(frozen=True)
class SignedRequest:
    """Signature and the ordered fields to transmit with it."""

    signature: str
    fields: list[tuple[str, str]]

    def as_dict(self) -> dict[str, str]:
        return dict(self.fields)


def timestamp() -> str:
    """Current Unix time in seconds, as sent in signed requests."""
    return str(int(time.time()))


def string_to_sign(fields: Mapping[str, str], api_secret: str) -> str:
    """Build the canonical string hashed for the signature."""
    pairs = [
        f"{key}={fields[key]}"
        for key in sorted(fields)
        if key not in (API_KEY_FIELD, SIGNATURE_FIELD)
    ]
    return "&".join(pairs) + api_secret


def compute_signature(fields: Mapping[str, str], api_secret: str) -> str:
    """Return the lowercase hex SHA-1 signature of fields plus secret."""
    payload = string_to_sign(fields, api_secret)
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()


def sign(fields: Mapping[str, str], api_secret: str) -> SignedRequest:
    """Sign a set of request fields.

    Args:
        fields: Request fields, api_key included (it is sent but not signed)
        api_secret: Shared account secret

    Returns:
        SignedRequest with the signature and the sorted fields to send,
        signature last
    """
    signature = compute_signature(fields, api_secret)
    ordered = [(key, fields[key]) for key in sorted(fields) if key != SIGNATURE_FIELD]
    ordered.append((SIGNATURE_FIELD, signature))
    return SignedRequest(signature=signature, fields=ordered)


def api_sign_request(
    params: Mapping[str, str], api_key: str, api_secret: str
) -> dict[str, str]:
    """Return a copy of params with api_key and signature added."""
    fields = dict(params)
    fields[API_KEY_FIELD] = api_key
    return sign(fields, api_secret).as_dict()
