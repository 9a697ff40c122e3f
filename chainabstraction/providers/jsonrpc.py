"""JSON-RPC transport provider with endpoint fallback."""
from __future__ import annotations

import logging
import ssl
from typing import Any

import aiohttp
import certifi

from ..config import ProviderConfig
from .base import BaseProvider

logger = logging.getLogger(__name__)


class RpcError(RuntimeError):
    """JSON-RPC call failed: the node returned an error or no endpoint answered."""

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.code = code


class JsonRpcProvider(BaseProvider):
    """Posts JSON-RPC 2.0 requests, falling back across configured endpoints."""

    def __init__(self, config: ProviderConfig) -> None:
        super().__init__()
        if not config.rpc_endpoints:
            raise ValueError(f"Provider '{config.kind}' has no RPC endpoints")
        self.endpoints = list(config.rpc_endpoints)
        self.timeout = config.rpc_timeout
        self.current_rpc_index = 0
        self._request_id = 0
        self._headers: dict[str, str] = {}
        if config.rpc_username:
            self._headers["Authorization"] = aiohttp.BasicAuth(
                config.rpc_username, config.rpc_password
            ).encode()

    def _next_request_id(self) -> int:
        self._request_id += 1
        return self._request_id

    async def rpc_call(self, method: str, params: list[Any] | None = None) -> Any:
        """Make RPC call with fallback to alternative endpoints."""
        payload = {
            "jsonrpc": "2.0",
            "id": self._next_request_id(),
            "method": method,
            "params": params or [],
        }

        ssl_context = ssl.create_default_context(cafile=certifi.where())

        last_error: Exception | None = None
        for attempt in range(len(self.endpoints)):
            rpc_index = (self.current_rpc_index + attempt) % len(self.endpoints)
            rpc_url = self.endpoints[rpc_index]

            try:
                connector = aiohttp.TCPConnector(ssl=ssl_context)
                async with aiohttp.ClientSession(connector=connector) as session:
                    async with session.post(
                        rpc_url,
                        json=payload,
                        headers=self._headers,
                        timeout=aiohttp.ClientTimeout(total=self.timeout),
                    ) as response:
                        result = await response.json(content_type=None)
                        if not isinstance(result, dict):
                            raise RpcError(
                                f"HTTP {response.status}: unexpected response body"
                            )
            except Exception as e:
                last_error = e
                logger.warning("RPC endpoint %s failed on %s: %s", rpc_url, method, e)
                if attempt < len(self.endpoints) - 1:
                    logger.info("Trying next endpoint...")
                continue

            if rpc_index != self.current_rpc_index:
                logger.info("Switched to RPC endpoint: %s", rpc_url)
                self.current_rpc_index = rpc_index

            # node-level errors are answers, not endpoint failures
            error = result.get("error")
            if error:
                code = error.get("code") if isinstance(error, dict) else None
                message = error.get("message") if isinstance(error, dict) else error
                raise RpcError(f"RPC Error on {method}: {message}", code=code)

            return result.get("result")

        raise RpcError(f"All RPC endpoints failed. Last error: {last_error}")
