"""
RPC Client — JSON-RPC транспорт до Solana-узла

Только вызовы, нужные SDK: чтение аккаунтов, последний blockhash,
симуляция и отправка транзакции.

Любой отказ транспорта (сеть, HTTP-статус, ошибка узла, ответ не той формы)
поднимается как RPCError. Уровнем выше он превращается в UpstreamUnavailable.
"""

import base64
import logging
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


class RPCError(Exception):
    """Отказ JSON-RPC вызова (code = -1 для отказов на стороне клиента)."""
    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"RPC Error {code}: {message}")


class RPCClient:
    """
    JSON-RPC клиент Solana-узла.

    Usage:
        rpc = RPCClient("https://api.devnet.solana.com")
        info = rpc.get_account_info("FQCK...")
        data = rpc.get_account_data("FQCK...")
    """

    def __init__(self, url: str = "https://api.mainnet-beta.solana.com",
                 commitment: str = "confirmed", timeout: float = 30,
                 session: Optional[requests.Session] = None):
        self.url = url
        self.commitment = commitment
        self.timeout = timeout
        self._session = session or requests.Session()
        self._id = 0

    def _call(self, method: str, params: list = None) -> Any:
        """
        Один JSON-RPC вызов.

        Returns:
            Поле result ответа (может быть None)

        Raises:
            RPCError: Сеть/HTTP, ошибка узла или тело ответа не JSON-RPC объект
        """
        self._id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._id,
            "method": method,
            "params": params or []
        }
        logger.debug("rpc %s id=%d", method, self._id)

        try:
            response = self._session.post(
                self.url,
                json=payload,
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise RPCError(-1, f"Connection failed: {e}")

        try:
            body = response.json()
        except ValueError as e:
            raise RPCError(-1, f"Malformed response: {e}")

        if not isinstance(body, dict):
            raise RPCError(-1, f"Malformed response: expected object, got {type(body).__name__}")

        error = body.get("error")
        if error:
            if not isinstance(error, dict):
                raise RPCError(-1, f"Malformed response: error is not an object: {error!r}")
            raise RPCError(error.get("code", -1), error.get("message", str(error)))

        return body.get("result")

    def _call_value(self, method: str, params: list) -> Any:
        """Вызов, чей result имеет форму {"context": ..., "value": ...}."""
        result = self._call(method, params)
        if not isinstance(result, dict) or "value" not in result:
            raise RPCError(-1, f"Malformed response: {method} result has no value: {result!r}")
        return result["value"]

    # =========================================================================
    # ACCOUNTS
    # =========================================================================

    def get_account_info(self, address: str) -> Dict[str, Any]:
        """
        getAccountInfo (encoding=base64) как есть; форму проверяет ledger reader.

        Returns:
            {"context": {"slot": ...}, "value": null | {"data": [b64, "base64"], ...}}
        """
        return self._call("getAccountInfo", [
            address,
            {"encoding": "base64", "commitment": self.commitment}
        ])

    def get_account_data(self, address: str) -> Optional[bytes]:
        """Декодированные данные аккаунта; None, если аккаунта нет."""
        value = self._call_value("getAccountInfo", [
            address,
            {"encoding": "base64", "commitment": self.commitment}
        ])
        if value is None:
            return None
        try:
            return base64.b64decode(value["data"][0])
        except (TypeError, KeyError, IndexError, ValueError) as e:
            raise RPCError(-1, f"Malformed response: account data for {address}: {e}")

    # =========================================================================
    # TRANSACTIONS
    # =========================================================================

    def get_latest_blockhash(self) -> str:
        """Последний blockhash (base58)."""
        value = self._call_value("getLatestBlockhash", [{"commitment": self.commitment}])
        if not isinstance(value, dict) or not isinstance(value.get("blockhash"), str):
            raise RPCError(-1, f"Malformed response: getLatestBlockhash value: {value!r}")
        return value["blockhash"]

    def simulate_transaction(self, tx: bytes, sig_verify: bool = False) -> Dict[str, Any]:
        """
        Симуляция сериализованной транзакции.

        Returns:
            {"err": ..., "logs": [...], "unitsConsumed": ...}
        """
        value = self._call_value("simulateTransaction", [
            base64.b64encode(tx).decode("ascii"),
            {
                "encoding": "base64",
                "commitment": self.commitment,
                "sigVerify": sig_verify,
                "replaceRecentBlockhash": not sig_verify,
            }
        ])
        if not isinstance(value, dict):
            raise RPCError(-1, f"Malformed response: simulateTransaction value: {value!r}")
        return value

    def send_transaction(self, tx: bytes, skip_preflight: bool = False) -> str:
        """Отправка подписанной сериализованной транзакции. Returns: signature."""
        signature = self._call("sendTransaction", [
            base64.b64encode(tx).decode("ascii"),
            {
                "encoding": "base64",
                "skipPreflight": skip_preflight,
                "preflightCommitment": self.commitment,
            }
        ])
        if not isinstance(signature, str):
            raise RPCError(-1, f"Malformed response: sendTransaction result: {signature!r}")
        return signature
