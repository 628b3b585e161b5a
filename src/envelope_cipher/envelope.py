"""
Envelope wire format.

An envelope is::

    base64(json({"iv": base64(nonce), "tag": base64(tag), "value": base64(ciphertext)}))

The field names and the unescaped forward slashes in the inner JSON are
fixed so existing stored ciphertexts stay readable.
"""

from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Union

from .crypto import NONCE_SIZE, TAG_SIZE, SealedData
from .errors import EncodingError, ValidationError

REQUIRED_FIELDS = ("iv", "value", "tag")


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def b64decode(data: Union[str, bytes], what: str) -> bytes:
    """
    Strictly decode base64.

    Non-alphabet characters, bad padding and non-canonical trailing bits are
    all rejected, so every accepted string maps to exactly one byte sequence.

    Raises:
        EncodingError: If ``data`` is not canonical base64
    """
    try:
        raw = data.encode("ascii") if isinstance(data, str) else bytes(data)
        decoded = base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError, TypeError) as e:
        raise EncodingError(f"Invalid base64 in {what}.") from e

    if base64.b64encode(decoded) != raw:
        raise EncodingError(f"Invalid base64 in {what}.")
    return decoded


@dataclass(frozen=True)
class Envelope:
    """Decoded envelope fields, each still base64 text."""

    iv: str
    tag: str
    value: str

    @classmethod
    def from_sealed(cls, sealed: SealedData) -> Envelope:
        return cls(
            iv=b64encode(sealed.nonce),
            tag=b64encode(sealed.tag),
            value=b64encode(sealed.ciphertext),
        )

    def to_sealed(self) -> SealedData:
        """
        Decode the fields into raw cipher inputs.

        Raises:
            EncodingError: If a field is not valid base64
            ValidationError: If the nonce or tag has the wrong length
        """
        nonce = b64decode(self.iv, "iv")
        if len(nonce) != NONCE_SIZE:
            raise ValidationError("IV", NONCE_SIZE, len(nonce))

        tag = b64decode(self.tag, "tag")
        if len(tag) != TAG_SIZE:
            raise ValidationError("tag", TAG_SIZE, len(tag))

        ciphertext = b64decode(self.value, "value")
        return SealedData(nonce=nonce, ciphertext=ciphertext, tag=tag)

    def to_json(self) -> str:
        # json.dumps never escapes "/", matching the stored format.
        return json.dumps(
            {"iv": self.iv, "tag": self.tag, "value": self.value},
            separators=(",", ":"),
        )

    def to_text(self) -> str:
        """Serialize to the transportable envelope string."""
        return b64encode(self.to_json().encode("utf-8"))

    @classmethod
    def from_text(cls, text: Union[str, bytes]) -> Envelope:
        """
        Parse an envelope string.

        Raises:
            EncodingError: If the outer base64 or inner JSON is invalid, or a
                required field is missing or not a string
        """
        inner = b64decode(text, "envelope")

        try:
            payload = json.loads(inner)
        except (ValueError, RecursionError) as e:
            raise EncodingError("Cipher-text payload is not valid JSON.") from e

        if not isinstance(payload, dict):
            raise EncodingError("Cipher-text payload is invalid: expected a JSON object.")

        for key in REQUIRED_FIELDS:
            if not isinstance(payload.get(key), str):
                raise EncodingError(f"Cipher-text payload is invalid: {key} not given.")

        return cls(iv=payload["iv"], tag=payload["tag"], value=payload["value"])
