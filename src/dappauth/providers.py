"""
Contract Call Providers

The contract verifier depends on a single capability: run a read-only call
against a contract address and get the raw return bytes back. That capability
is expressed by ``ContractCaller``; ``Web3ContractCaller`` implements it over
an ``AsyncWeb3`` instance (``eth_call``).

Tests and alternative transports substitute their own ``ContractCaller``.
"""

from abc import ABC, abstractmethod
from typing import Optional

from web3 import AsyncWeb3

from .constants import RPC_URL_ENV, load_settings
from .exceptions import ConfigurationError


class ContractCaller(ABC):
    """
    Abstract read-only contract call collaborator.

    Implementations must not retry or swallow errors: any failure is raised
    so the verifier can report it as ``ProviderError``.
    """

    @abstractmethod
    async def call(self, address: str, data: bytes) -> bytes:
        """
        Execute a read-only call.

        Args:
            address: Contract address (0x-prefixed hex).
            data:    ABI-encoded calldata (selector + arguments).

        Returns:
            Raw return data.
        """
        pass


class Web3ContractCaller(ContractCaller):
    """
    ``ContractCaller`` backed by ``AsyncWeb3.eth.call``.

    Example::

        caller = Web3ContractCaller.from_rpc_url("https://sepolia.infura.io/v3/<key>")
        auth = DappAuth(caller)
    """

    def __init__(self, w3: AsyncWeb3):
        self._w3 = w3

    @property
    def w3(self) -> AsyncWeb3:
        return self._w3

    @classmethod
    def from_rpc_url(cls, rpc_url: str, request_timeout: Optional[float] = None) -> "Web3ContractCaller":
        """
        Build a caller over an HTTP JSON-RPC endpoint.

        Args:
            rpc_url:         JSON-RPC endpoint URL.
            request_timeout: Optional HTTP request timeout in seconds, passed
                             to the transport. No timeout is applied by
                             dappauth itself.
        """
        request_kwargs = {"timeout": request_timeout} if request_timeout is not None else None
        return cls(AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url, request_kwargs=request_kwargs)))

    @classmethod
    def from_env(cls) -> "Web3ContractCaller":
        """
        Build a caller from the ``DAPPAUTH_RPC_URL`` environment variable.

        Raises:
            ConfigurationError: If ``DAPPAUTH_RPC_URL`` is not set.
        """
        settings = load_settings()
        if not settings.rpc_url:
            raise ConfigurationError(
                f"RPC URL not configured. Set the '{RPC_URL_ENV}' environment variable."
            )
        return cls.from_rpc_url(settings.rpc_url)

    async def call(self, address: str, data: bytes) -> bytes:
        result = await self._w3.eth.call(
            {"to": AsyncWeb3.to_checksum_address(address), "data": data}
        )
        return bytes(result)
