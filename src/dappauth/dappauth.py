"""
Authorized Signer Dispatcher

``DappAuth`` answers one question: did the holder of ``address`` sign
``challenge``? It hashes the challenge, picks the EOA or contract-wallet path
from an explicit ``SignerKind``, and runs exactly that path.

Example::

    auth = DappAuth(Web3ContractCaller.from_env())

    # EOA: a single 65-byte personal_sign signature
    ok = await auth.is_authorized_signer("foo", "0x...", "0xAbC...")

    # Smart-contract wallet that accepts a single owner signature
    ok = await auth.is_authorized_signer(
        "foo", "0x...", wallet_address, signer_kind=SignerKind.CONTRACT
    )
"""

import re
from typing import Optional, Union

import structlog
from eth_utils import is_hex_address, to_checksum_address

from .exceptions import MalformedAddressError, MalformedSignatureError, UnknownSignerKindError
from .hashing import hash_personal_message
from .providers import ContractCaller
from .schemas import SignerKind, classify_signature
from .verifies import verify_contract_signature, verify_eoa_signature

logger = structlog.get_logger(__name__)

_HEX_SIGNATURE = re.compile(r"0x(?:[0-9a-fA-F]{2})*")

SignatureLike = Union[bytes, bytearray, str]
AddressLike = Union[bytes, str]


def _decode_signature(signature: SignatureLike) -> bytes:
    if isinstance(signature, (bytes, bytearray)):
        raw = bytes(signature)
    elif isinstance(signature, str) and _HEX_SIGNATURE.fullmatch(signature):
        raw = bytes.fromhex(signature[2:])
    else:
        logger.warning(
            "signature_decode_error",
            signature_type=type(signature).__name__,
            signature_prefix=signature[:10] if isinstance(signature, str) else None,
        )
        raise MalformedSignatureError(
            f"signature must be bytes or a 0x-prefixed even-length hex string, "
            f"got {type(signature).__name__}"
        )

    if not raw:
        logger.warning("signature_empty")
        raise MalformedSignatureError("Empty signature")
    return raw


def _normalize_address(address: AddressLike) -> str:
    if isinstance(address, (bytes, bytearray)) and len(address) == 20:
        return to_checksum_address(bytes(address))
    if isinstance(address, str) and address.startswith("0x") and is_hex_address(address):
        return to_checksum_address(address)
    logger.warning("claimed_address_invalid", address=repr(address)[:50])
    raise MalformedAddressError(f"Invalid address: {address!r}")


def _resolve_signer_kind(signer_kind, signature: bytes) -> SignerKind:
    if signer_kind is None:
        return classify_signature(signature)
    try:
        return SignerKind(signer_kind)
    except ValueError as exc:
        logger.warning("signer_kind_unknown", signer_kind=repr(signer_kind))
        raise UnknownSignerKindError(f"Unknown signer kind: {signer_kind!r}") from exc


class DappAuth:
    """
    Stateless verifier for EOA and smart-contract wallet signers.

    Attributes:
        caller: Contract call collaborator used for the contract-wallet path.
    """

    def __init__(self, caller: ContractCaller):
        self.caller = caller

    async def is_authorized_signer(
        self,
        challenge: str,
        signature: SignatureLike,
        address: AddressLike,
        signer_kind: Optional[SignerKind] = None,
    ) -> bool:
        """
        Check whether ``address`` is an authorized signer of ``challenge``.

        Args:
            challenge:   Challenge string issued by the relying party.
            signature:   Signature as bytes or a 0x-prefixed hex string.
            address:     Claimed signer address.
            signer_kind: Verification path to run. When ``None`` it is
                         derived from the signature length: 65 bytes runs
                         the EOA path, anything else the contract path.

        Returns:
            ``True`` if the signature authorizes ``address``, ``False`` if it
            was determined not to.

        Raises:
            MalformedSignatureError: Signature is not valid hex, is empty, or
                does not parse for the chosen path.
            MalformedAddressError: ``address`` is not a 20-byte address.
            UnknownSignerKindError: ``signer_kind`` is not a ``SignerKind`` value.
            ProviderError: The contract call failed.
        """
        claimed_address = _normalize_address(address)
        signature_bytes = _decode_signature(signature)
        digest = hash_personal_message(challenge)

        kind = _resolve_signer_kind(signer_kind, signature_bytes)
        logger.debug(
            "authorized_signer_check",
            claimed_address=claimed_address,
            signer_kind=kind.value,
            signature_length=len(signature_bytes),
        )

        if kind is SignerKind.EOA:
            return verify_eoa_signature(
                digest=digest,
                signature=signature_bytes,
                claimed_address=claimed_address,
            )
        return await verify_contract_signature(
            digest=digest,
            signature=signature_bytes,
            claimed_address=claimed_address,
            caller=self.caller,
        )


async def is_authorized_signer(
    challenge: str,
    signature: SignatureLike,
    address: AddressLike,
    *,
    caller: ContractCaller,
    signer_kind: Optional[SignerKind] = None,
) -> bool:
    """Shortcut for ``DappAuth(caller).is_authorized_signer(...)``."""
    return await DappAuth(caller).is_authorized_signer(
        challenge, signature, address, signer_kind=signer_kind
    )
