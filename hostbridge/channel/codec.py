"""JSON method codec for channel messages.

Wire shapes (UTF-8 JSON):

- call: ``{"method": str, "args": any}``
- success envelope: ``[value]``
- error envelope: ``[code, message, details]``
- not implemented: empty reply (``None`` or zero bytes)
"""

from __future__ import annotations

import json
from typing import Any

from hostbridge.channel.protocol import NOT_IMPLEMENTED, CallError, CallResult, MethodCall, MethodNotImplemented, Success
from hostbridge.utils.exceptions import CodecError


def _dumps(value: Any) -> bytes:
    try:
        return json.dumps(value, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise CodecError(f"value is not JSON encodable: {exc}") from exc


def _loads(payload: bytes) -> Any:
    try:
        return json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise CodecError(f"payload is not valid JSON: {exc}") from exc


def encode_method_call(call: MethodCall) -> bytes:
    """Encode a call; the launch context never crosses the boundary."""
    return _dumps({"method": call.method, "args": call.arguments})


def decode_method_call(payload: bytes | None) -> MethodCall:
    if not payload:
        raise CodecError("empty method call")
    row = _loads(payload)
    if not isinstance(row, dict):
        raise CodecError("method call must be a JSON object", payload=row)
    method = row.get("method")
    if not isinstance(method, str):
        raise CodecError("method call is missing a string 'method'", payload=row)
    return MethodCall(method=method, arguments=row.get("args"))


def encode_success_envelope(value: Any) -> bytes:
    return _dumps([value])


def encode_error_envelope(code: str, message: str | None = None, details: Any = None) -> bytes:
    return _dumps([code, message, details])


def encode_result(result: CallResult) -> bytes | None:
    """Encode a result variant; not-implemented becomes an empty reply."""
    if isinstance(result, Success):
        return encode_success_envelope(result.value)
    if isinstance(result, CallError):
        return encode_error_envelope(result.code, result.message, result.details)
    if isinstance(result, MethodNotImplemented):
        return None
    raise CodecError(f"unsupported result type: {type(result).__name__}")


def decode_envelope(payload: bytes | None) -> CallResult:
    """Decode a reply into a result variant."""
    if not payload:
        return NOT_IMPLEMENTED
    row = _loads(payload)
    if isinstance(row, list) and len(row) == 1:
        return Success(row[0])
    if isinstance(row, list) and len(row) == 3 and isinstance(row[0], str):
        message = row[1] if isinstance(row[1], str) or row[1] is None else str(row[1])
        return CallError(code=row[0], message=message, details=row[2])
    raise CodecError("invalid envelope", payload=row)
