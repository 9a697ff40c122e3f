"""Provider implementations."""
from .base import BaseProvider
from .bitcoin import BitcoinRpcProvider
from .jsonrpc import JsonRpcProvider, RpcError

__all__ = ["BaseProvider", "BitcoinRpcProvider", "JsonRpcProvider", "RpcError"]
