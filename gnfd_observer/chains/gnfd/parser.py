"""Pure parsing functions for Greenfield REST gateway payloads — no I/O."""
from __future__ import annotations

from typing import Any

from ...models import ObjectInfo, ObjectStatus, TxResult

# Numeric enum values as emitted by some gateway versions.
_STATUS_BY_NUMBER = {
    0: ObjectStatus.CREATED,
    1: ObjectStatus.SEALED,
    2: ObjectStatus.DISCONTINUED,
}


def _as_int(value: Any, default: int = 0) -> int:
    """Cosmos gateways encode 64-bit integers as strings."""
    if value is None or value == "":
        return default
    return int(value)


def parse_block_height(payload: dict[str, Any]) -> int:
    """Extract the header height from a ``blocks/latest`` response.

    Newer gateways return ``sdk_block``; older ones only ``block``.
    """
    block = payload.get("sdk_block") or payload.get("block") or {}
    header = block.get("header", {})
    if "height" not in header:
        raise ValueError("latest block response carries no header height")
    return _as_int(header["height"])


def parse_object_status(raw: Any) -> ObjectStatus:
    """Parse an object status given either as enum name or number."""
    if isinstance(raw, int):
        return _STATUS_BY_NUMBER[raw]
    if isinstance(raw, str) and raw.isdigit():
        return _STATUS_BY_NUMBER[int(raw)]
    return ObjectStatus(raw)


def parse_object_info(payload: dict[str, Any]) -> ObjectInfo:
    """Parse a ``head_object_by_id`` response into :class:`ObjectInfo`."""
    info = payload.get("object_info")
    if not info:
        raise ValueError("head object response carries no object_info")

    return ObjectInfo(
        object_id=_as_int(info.get("id")),
        bucket_name=info.get("bucket_name", ""),
        object_name=info.get("object_name", ""),
        owner=info.get("owner", ""),
        payload_size=_as_int(info.get("payload_size")),
        object_status=parse_object_status(
            info.get("object_status", ObjectStatus.CREATED.value)
        ),
        is_updating=bool(info.get("is_updating", False)),
    )


def parse_tx_response(payload: dict[str, Any]) -> TxResult:
    """Parse a ``txs/{hash}`` response into :class:`TxResult`."""
    tx = payload.get("tx_response")
    if not tx:
        raise ValueError("tx response carries no tx_response")

    return TxResult(
        tx_hash=tx.get("txhash", ""),
        height=_as_int(tx.get("height")),
        code=_as_int(tx.get("code")),
        codespace=tx.get("codespace", ""),
        raw_log=tx.get("raw_log", ""),
        gas_wanted=_as_int(tx.get("gas_wanted")),
        gas_used=_as_int(tx.get("gas_used")),
    )


def parse_error_body(payload: Any) -> tuple[int | None, str]:
    """Extract ``(grpc_code, message)`` from a gateway error body.

    Examples:
        {"code": 5, "message": "tx not found: AB12"} → (5, "tx not found: AB12")
        {"error": "No such object"} → (None, "No such object")
    """
    if not isinstance(payload, dict):
        return None, str(payload or "")

    code = payload.get("code")
    message = payload.get("message") or payload.get("error") or ""
    if isinstance(message, dict):
        message = message.get("message", "")
    try:
        code = int(code) if code is not None else None
    except (TypeError, ValueError):
        code = None
    return code, str(message)
