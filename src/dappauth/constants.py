"""
Signer Verification Constants and Settings

Holds the ERC-1654 wallet interface definition (ABI entry, function selector,
magic value), the personal-message prefix, and environment-aware settings for
building an RPC-backed contract caller.
"""

import os
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field
from eth_utils import function_signature_to_4byte_selector
import dotenv

dotenv.load_dotenv()

# ---------------------------------------------------------------------------
# ERC-1654 constants
# ---------------------------------------------------------------------------

#: Magic value returned by a wallet that accepts the signature.
ERC1654_MAGIC_VALUE: bytes = b"\x20\xc1\x3b\x0b"

#: Canonical signature of the validation method.
ERC1654_FUNCTION_SIGNATURE: str = "isValidSignature(bytes32,bytes)"

#: 4-byte selector prepended to the ABI-encoded call arguments.
ERC1654_SELECTOR: bytes = function_signature_to_4byte_selector(ERC1654_FUNCTION_SIGNATURE)

#: Argument types for ``isValidSignature``.
ERC1654_INPUT_TYPES: List[str] = ["bytes32", "bytes"]

#: Return type for ``isValidSignature``.
ERC1654_OUTPUT_TYPES: List[str] = ["bytes4"]

ERC1654_ABI: List[Dict[str, Any]] = [
    {
        "inputs": [
            {"name": "_hash", "type": "bytes32"},
            {"name": "_signature", "type": "bytes"},
        ],
        "name": "isValidSignature",
        "outputs": [{"name": "magicValue", "type": "bytes4"}],
        "stateMutability": "view",
        "type": "function",
    }
]

# ---------------------------------------------------------------------------
# ECDSA / personal message constants
# ---------------------------------------------------------------------------

#: Length of a single packed ``r || s || v`` signature.
ECDSA_SIGNATURE_LENGTH: int = 65

#: secp256k1 group order; r and s must lie in [1, n - 1].
SECP256K1_N: int = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141

#: Prefix hashed in front of every personal message (EIP-191 version 0x45).
PERSONAL_MESSAGE_PREFIX: bytes = b"\x19Ethereum Signed Message:\n"

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

RPC_URL_ENV: str = "DAPPAUTH_RPC_URL"


class DappAuthSettings(BaseModel):
    """Runtime settings resolved from the environment."""
    rpc_url: Optional[str] = Field(
        default=None, description="JSON-RPC endpoint used for contract wallet calls"
    )


def load_settings() -> DappAuthSettings:
    """
    Load settings from environment variables.

    ``.env`` files are picked up through ``python-dotenv`` when this module
    is imported.

    Returns:
        DappAuthSettings: Settings with ``rpc_url`` taken from
        ``DAPPAUTH_RPC_URL`` (``None`` when unset or blank).

    Example:
        # In your .env file or environment setup:
        # DAPPAUTH_RPC_URL=https://mainnet.infura.io/v3/<key>

        settings = load_settings()
    """
    rpc_url = (os.getenv(RPC_URL_ENV) or "").strip()
    return DappAuthSettings(rpc_url=rpc_url or None)
