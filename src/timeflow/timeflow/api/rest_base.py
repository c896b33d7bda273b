from __future__ import annotations

from typing import Any, Dict, List, Optional


def ensure_list(payload: Any) -> List[Dict[str, Any]]:
    """Normalize a bare array or a ``{"results": [...]}`` page to a flat list."""

    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict) and isinstance(payload.get("results"), list):
        return payload["results"]
    return []


def ref_id(value: Any) -> Optional[str]:
    """Normalize a foreign reference across serializer styles.

    The backend can return a reference as:
    - a plain id (string/int)
    - a nested object with an ``id`` key
    - null
    """

    if value is None or value == "":
        return None
    if isinstance(value, dict):
        inner = value.get("id")
        return str(inner) if inner not in (None, "") else None
    return str(value)


def pick_ref(row: Dict[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        ref = ref_id(row.get(key))
        if ref:
            return ref
    return None


def optional_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def to_backend_payload(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Rename ``employee_id``/``company_id`` the way the write endpoints expect."""

    body = dict(fields)
    if "employee_id" in body:
        body["employee"] = body.pop("employee_id")
    if "company_id" in body:
        body["company"] = body.pop("company_id")
    return body
