from .dappauth import DappAuth, is_authorized_signer
from .hashing import hash_personal_message, decode_challenge, is_hex_challenge
from .schemas import SignerKind, ECDSASignature, classify_signature
from .verifies import (
    verify_eoa_signature,
    recover_eoa_signer,
    verify_contract_signature,
    encode_is_valid_signature_call,
)
from .providers import ContractCaller, Web3ContractCaller
from .constants import (
    ERC1654_MAGIC_VALUE,
    ERC1654_SELECTOR,
    ERC1654_ABI,
    DappAuthSettings,
    load_settings,
)
from .exceptions import (
    VerificationError,
    MalformedSignatureError,
    MalformedAddressError,
    UnknownSignerKindError,
    ProviderError,
    ConfigurationError,
)

__all__ = [
    "DappAuth",
    "is_authorized_signer",
    "hash_personal_message",
    "decode_challenge",
    "is_hex_challenge",
    "SignerKind",
    "ECDSASignature",
    "classify_signature",
    "verify_eoa_signature",
    "recover_eoa_signer",
    "verify_contract_signature",
    "encode_is_valid_signature_call",
    "ContractCaller",
    "Web3ContractCaller",
    "ERC1654_MAGIC_VALUE",
    "ERC1654_SELECTOR",
    "ERC1654_ABI",
    "DappAuthSettings",
    "load_settings",
    "VerificationError",
    "MalformedSignatureError",
    "MalformedAddressError",
    "UnknownSignerKindError",
    "ProviderError",
    "ConfigurationError",
]
