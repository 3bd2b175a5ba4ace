"""
Challenge Hashing

Turns a challenge string into the 32-byte personal-message digest a wallet
signs with ``personal_sign``.

A challenge that looks like a hex literal (``0x`` followed by an even number
of hex digits) is decoded as raw bytes; anything else is UTF-8 text. The two
readings of the same string hash to unrelated digests, so a signer and a
verifier must agree on which one was signed. See
https://github.com/MetaMask/eth-sig-util/issues/60 for the wallet-side
behaviour this mirrors.
"""

import re

from eth_account.messages import encode_defunct
from eth_utils import keccak, to_bytes

_HEX_CHALLENGE = re.compile(r"0x(?:[0-9a-fA-F]{2})*")


def is_hex_challenge(challenge: str) -> bool:
    """Return ``True`` when ``challenge`` is decoded as raw hex bytes."""
    return _HEX_CHALLENGE.fullmatch(challenge) is not None


def decode_challenge(challenge: str) -> bytes:
    """
    Decode a challenge into the byte payload that gets signed.

    Args:
        challenge: Challenge string issued by the relying party.

    Returns:
        Raw bytes for a hex literal, UTF-8 bytes otherwise.

    Raises:
        TypeError: If ``challenge`` is not a ``str``.
    """
    if not isinstance(challenge, str):
        raise TypeError(f"challenge must be str, got {type(challenge).__name__}")

    if is_hex_challenge(challenge):
        return to_bytes(hexstr=challenge)
    return challenge.encode("utf-8")


def hash_personal_message(challenge: str) -> bytes:
    """
    Compute the personal-message digest of ``challenge``.

    ``keccak256(b"\\x19Ethereum Signed Message:\\n" + len(payload) + payload)``
    where ``payload`` is ``decode_challenge(challenge)``.

    Example::

        >>> hash_personal_message("foo").hex()
        '76b2e96714d3b5e6eb1d1c509265430b907b44f72b2a22b06fcd4d96372b8565'
    """
    signable = encode_defunct(primitive=decode_challenge(challenge))
    return keccak(b"\x19" + signable.version + signable.header + signable.body)
