"""
Signer Verification Helpers

Verification functions for the two signer models. Each takes the challenge
digest (see ``hashing.hash_personal_message``) and the raw signature bytes as
keyword arguments, so the dispatcher and direct callers share one code path.

Current coverage
----------------
verify_eoa_signature
    Recover the signer of a single packed ECDSA signature (secp256k1) over
    the digest and compare it to the claimed address.

verify_contract_signature
    Ask the claimed address (a smart-contract wallet) whether it accepts the
    signature bytes for the digest through
    ``isValidSignature(bytes32, bytes) returns (bytes4)``.

Outcome contract
----------------
``True`` / ``False`` are determined answers. Malformed input raises
``MalformedSignatureError``; a failed or undecodable contract call raises
``ProviderError``. Neither path falls back to the other.
"""

from typing import Union

import structlog
from eth_abi import decode, encode
from eth_keys import keys
from eth_keys.exceptions import BadSignature
from eth_utils import ValidationError

from .constants import (
    ERC1654_INPUT_TYPES,
    ERC1654_MAGIC_VALUE,
    ERC1654_OUTPUT_TYPES,
    ERC1654_SELECTOR,
)
from .exceptions import MalformedSignatureError, ProviderError
from .providers import ContractCaller
from .schemas import ECDSASignature

logger = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# EOA verification
# ---------------------------------------------------------------------------


def recover_eoa_signer(*, digest: bytes, signature: Union[bytes, ECDSASignature]) -> str:
    """
    Recover the checksummed address that produced ``signature`` over ``digest``.

    Args:
        digest:    32-byte message hash.
        signature: Packed 65-byte ``r || s || v`` signature, or a parsed
                   ``ECDSASignature``.

    Returns:
        Checksummed address of the signer.

    Raises:
        MalformedSignatureError: If the signature cannot be parsed or no
            public key can be recovered from it.
    """
    sig = signature if isinstance(signature, ECDSASignature) else ECDSASignature.from_bytes(signature)
    try:
        public_key = keys.Signature(vrs=(sig.recovery_id, sig.r, sig.s)).recover_public_key_from_msg_hash(digest)
    except (BadSignature, ValidationError) as exc:
        raise MalformedSignatureError(f"Public key recovery failed: {exc}") from exc
    return public_key.to_checksum_address()


def verify_eoa_signature(*, digest: bytes, signature: bytes, claimed_address: str) -> bool:
    """
    Check whether ``claimed_address`` signed ``digest``.

    Only a single 65-byte signature is accepted. Concatenated multi-signature
    input is rejected as malformed rather than truncated to its first entry.

    Args:
        digest:          32-byte personal-message hash.
        signature:       Packed 65-byte ``r || s || v`` signature.
        claimed_address: Address asserted to be the signer (0x-prefixed hex).

    Returns:
        ``True`` if the recovered address equals ``claimed_address``
        (case-insensitive), ``False`` otherwise.

    Raises:
        MalformedSignatureError: On wrong length, invalid recovery ID,
            out-of-range r/s, or failed recovery.
    """
    try:
        recovered = recover_eoa_signer(digest=digest, signature=signature)
    except MalformedSignatureError as exc:
        logger.warning(
            "eoa_signature_malformed",
            claimed_address=claimed_address,
            signature_length=len(signature),
            error=str(exc),
        )
        raise

    is_valid = recovered.lower() == claimed_address.lower()
    if is_valid:
        logger.debug("eoa_signature_verified", claimed_address=claimed_address)
    else:
        logger.info(
            "eoa_signature_mismatch",
            claimed_address=claimed_address,
            recovered_address=recovered,
        )
    return is_valid


# ---------------------------------------------------------------------------
# Contract wallet verification
# ---------------------------------------------------------------------------


def encode_is_valid_signature_call(digest: bytes, signature: bytes) -> bytes:
    """Build calldata for ``isValidSignature(bytes32 digest, bytes signature)``."""
    return ERC1654_SELECTOR + encode(ERC1654_INPUT_TYPES, [digest, signature])


async def verify_contract_signature(
    *,
    digest: bytes,
    signature: bytes,
    claimed_address: str,
    caller: ContractCaller,
) -> bool:
    """
    Check whether the smart-contract wallet at ``claimed_address`` accepts
    ``signature`` for ``digest``.

    The signature is passed through untouched; its layout (e.g. several
    concatenated owner signatures) is the wallet's concern.

    Args:
        digest:          32-byte personal-message hash.
        signature:       Signature bytes of any length.
        claimed_address: Wallet contract address (0x-prefixed hex).
        caller:          Read-only contract call collaborator.

    Returns:
        ``True`` if the wallet returns the magic value ``0x20c13b0b``,
        ``False`` for any other 4-byte answer.

    Raises:
        ProviderError: If the call fails (network error, revert) or its
            return data does not decode as ``bytes4``. The underlying
            exception is chained.
    """
    calldata = encode_is_valid_signature_call(digest, signature)

    try:
        raw = await caller.call(claimed_address, calldata)
    except Exception as exc:
        logger.error(
            "contract_signature_call_error",
            claimed_address=claimed_address,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        raise ProviderError(
            f"isValidSignature call to {claimed_address} failed: {exc}",
            address=claimed_address,
        ) from exc

    try:
        if not isinstance(raw, (bytes, bytearray, memoryview)):
            raise TypeError(f"expected bytes, got {type(raw).__name__}")
        (magic_value,) = decode(ERC1654_OUTPUT_TYPES, bytes(raw))
    except Exception as exc:
        logger.error(
            "contract_signature_bad_return",
            claimed_address=claimed_address,
            return_type=type(raw).__name__,
            error_type=type(exc).__name__,
        )
        raise ProviderError(
            f"isValidSignature at {claimed_address} returned malformed data: {exc}",
            address=claimed_address,
        ) from exc

    is_valid = magic_value == ERC1654_MAGIC_VALUE
    if is_valid:
        logger.debug("contract_signature_verified", claimed_address=claimed_address)
    else:
        logger.info(
            "contract_signature_rejected",
            claimed_address=claimed_address,
            magic_value=magic_value.hex(),
            expected=ERC1654_MAGIC_VALUE.hex(),
        )
    return is_valid
