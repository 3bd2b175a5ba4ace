"""
Signer Verification Schema Models

Pydantic models and enums shared by the EOA and contract verification paths.

    - SignerKind: Explicit tag choosing which verification path runs.
    - ECDSASignature: Parsed ``r || s || v`` secp256k1 signature.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .constants import ECDSA_SIGNATURE_LENGTH, SECP256K1_N
from .exceptions import MalformedSignatureError


class SignerKind(str, Enum):
    """
    Signer model of the claimed address.

    * ``EOA`` - a single private key signs the challenge digest directly.
    * ``CONTRACT`` - a smart-contract wallet validates the signature bytes
      through ``isValidSignature``.
    """
    EOA = "eoa"
    CONTRACT = "contract"


def classify_signature(signature: bytes) -> SignerKind:
    """
    Derive the signer kind from the signature shape.

    Exactly one packed ECDSA signature (65 bytes) is treated as an EOA
    signature; any other length can only be checked by a contract wallet.
    Contract wallets that accept a single 65-byte signature must be verified
    with an explicit ``SignerKind.CONTRACT``.
    """
    if len(signature) == ECDSA_SIGNATURE_LENGTH:
        return SignerKind.EOA
    return SignerKind.CONTRACT


class ECDSASignature(BaseModel):
    """
    Packed secp256k1 ECDSA signature (r, s, v).

    Attributes:
        v: Recovery ID, normalised to 27 or 28 (0/1 accepted on input).
        r: r component, in ``[1, n - 1]``.
        s: s component, in ``[1, n - 1]``.

    Example::

        sig = ECDSASignature.from_bytes(signature_bytes)
        sig.recovery_id  # 0 or 1
    """

    model_config = ConfigDict(frozen=True)

    v: int = Field(..., description="ECDSA recovery ID (27 or 28)")
    r: int = Field(..., description="Signature r component")
    s: int = Field(..., description="Signature s component")

    @field_validator("v")
    @classmethod
    def _normalise_v(cls, v: int) -> int:
        if v in (0, 1):
            v += 27
        if v not in (27, 28):
            raise ValueError(f"Invalid recovery ID: {v}. Must be 27 or 28")
        return v

    @field_validator("r", "s")
    @classmethod
    def _check_range(cls, value: int) -> int:
        if not 0 < value < SECP256K1_N:
            raise ValueError("component outside the secp256k1 group order")
        return value

    @property
    def recovery_id(self) -> int:
        """Recovery ID in the 0/1 form used by secp256k1 libraries."""
        return self.v - 27

    @classmethod
    def from_bytes(cls, signature: bytes) -> "ECDSASignature":
        """
        Parse a packed 65-byte ``r || s || v`` signature.

        Raises:
            MalformedSignatureError: On wrong length, invalid v, or
                out-of-range r/s.
        """
        if len(signature) != ECDSA_SIGNATURE_LENGTH:
            raise MalformedSignatureError(
                f"Invalid ECDSA signature length: expected {ECDSA_SIGNATURE_LENGTH} bytes, "
                f"got {len(signature)}"
            )
        try:
            return cls(
                r=int.from_bytes(signature[0:32], "big"),
                s=int.from_bytes(signature[32:64], "big"),
                v=signature[64],
            )
        except ValidationError as exc:
            raise MalformedSignatureError(f"Invalid ECDSA signature: {exc}") from exc

    def to_bytes(self) -> bytes:
        """Encode back into the packed 65-byte form."""
        return (
            self.r.to_bytes(32, "big")
            + self.s.to_bytes(32, "big")
            + bytes([self.v])
        )
