import logging

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class RpcError(Exception):
    def __init__(self, code: int, msg: str, data=None):
        super().__init__(f"RPC error {code}: {msg}")
        self.code = code
        self.msg = msg
        self.data = data


class JsonrpcClient:
    """
    Minimal JSON-RPC 2.0 client. Any attribute is treated as a method name:
    `client.eth_blockNumber()` calls `eth_blockNumber` with no params.
    """

    def __init__(self, url: str, timeout: float = DEFAULT_TIMEOUT):
        self.url = url
        self.timeout = timeout
        self._req_id = 0
        self._pre_call_hook = None

    def _call(self, method: str, args):
        if self._pre_call_hook is not None:
            self._pre_call_hook(method)

        self._req_id += 1
        req = {"jsonrpc": "2.0", "method": method, "id": self._req_id, "params": list(args)}
        logger.debug(f"{self.url} <- {method}{tuple(args)}")

        resp = httpx.post(self.url, json=req, timeout=self.timeout)
        resp.raise_for_status()
        body = resp.json()
        if body.get("error") is not None:
            err = body["error"]
            raise RpcError(err.get("code", 0), err.get("message", ""), err.get("data"))
        return body["result"]

    def __getattr__(self, name: str):
        if name.startswith("_"):
            raise AttributeError(name)

        def _method(*args):
            return self._call(name, args)

        return _method
