"""
Exception and Error Definitions Module

Defines the exception hierarchy raised by signer verification. A structurally
valid signature that simply does not belong to the claimed address is NOT an
error: it is reported as ``False``. Exceptions mean the outcome could not be
determined and must be treated as inconclusive, not as a denial.

Exception Hierarchy:
    VerificationError (root)
    ├── MalformedSignatureError
    ├── MalformedAddressError
    ├── UnknownSignerKindError
    ├── ProviderError
    └── ConfigurationError
"""

from typing import Optional


class VerificationError(Exception):
    """
    Root exception class for all dappauth exceptions.

    Catch this to handle every "could not determine" outcome of
    ``is_authorized_signer`` in one place.
    """
    pass


class MalformedSignatureError(VerificationError):
    """
    Raised when signature bytes cannot be parsed for the chosen path.

    This includes scenarios such as:
    - Signature is not valid hexadecimal
    - Empty signature
    - EOA signature that is not exactly 65 bytes
    - Invalid recovery ID (v)
    - r or s outside the secp256k1 group order
    """
    pass


class MalformedAddressError(VerificationError):
    """
    Raised when the claimed address is not a 20-byte account identifier.
    """
    pass


class UnknownSignerKindError(VerificationError):
    """
    Raised when the requested verification path is not a ``SignerKind``.
    """
    pass


class ProviderError(VerificationError):
    """
    Raised when the contract-call collaborator fails.

    This includes scenarios such as:
    - RPC call timeout or network connectivity issues
    - Contract call revert (e.g. no code at the address)
    - Return data that does not decode as ``bytes4``

    The original exception is always available as ``__cause__``.

    Attributes:
        address: Contract address that was called
    """

    def __init__(self, message: str, address: Optional[str] = None):
        super().__init__(message)
        self.address = address


class ConfigurationError(VerificationError):
    """
    Raised when configuration is missing or invalid.

    This includes scenarios such as:
    - Missing ``DAPPAUTH_RPC_URL`` when building a caller from the environment
    """
    pass
