"""JSON-RPC 2.0 envelopes for the tool-invocation protocol."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class JSONRPCRequest(BaseModel):
    """An inbound request or notification. Notifications carry no ``id`` member."""

    jsonrpc: Literal["2.0"]
    method: str
    params: dict[str, Any] | None = None
    id: int | str | None = None

    @property
    def is_notification(self) -> bool:
        # "id": null is still a request and gets an answer
        return "id" not in self.model_fields_set


def request_id_of(message: Any) -> int | str | None:
    """Best-effort id for an error reply; ids that are not int or str become null."""
    if not isinstance(message, dict):
        return None
    raw = message.get("id")
    if isinstance(raw, bool) or not isinstance(raw, (int, str)):
        return None
    return raw


class JSONRPCError(BaseModel):
    code: int
    message: str
    data: Any = None


class JSONRPCResponse(BaseModel):
    jsonrpc: str = "2.0"
    id: int | str | None = None
    result: Any = None
    error: JSONRPCError | None = None

    @classmethod
    def success(cls, request_id: int | str | None, result: Any) -> JSONRPCResponse:
        return cls(id=request_id, result=result)

    @classmethod
    def failure(
        cls, request_id: int | str | None, code: int, message: str, data: Any = None,
    ) -> JSONRPCResponse:
        return cls(id=request_id, error=JSONRPCError(code=code, message=message, data=data))

    def to_wire(self) -> dict[str, Any]:
        """Serialise with exactly one of ``result`` / ``error``."""
        body: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            body["error"] = self.error.model_dump(exclude_none=True)
        else:
            body["result"] = self.result if self.result is not None else {}
        return body
