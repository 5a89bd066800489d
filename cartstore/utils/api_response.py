"""
Response envelopes for the cart endpoints.

Success: ``{"success": true, "data": ..., "message": ...}``; keys without a
value are left out. Failure: ``{"success": false, "error": {"message": ...,
"code": ..., "details": ...}}``, again without empty keys.
"""

from typing import Any, Dict, Optional


def _without_empty(**fields: Any) -> Dict[str, Any]:
    return {key: value for key, value in fields.items() if value is not None and value != {}}


def success_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    """Wrap a payload and/or message in the success envelope."""
    return {"success": True, **_without_empty(data=data, message=message or None)}


def error_response(
    message: str,
    code: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None
) -> Dict[str, Any]:
    """
    Build the failure envelope.

    Args:
        message: Human-readable reason; never contains credentials
        code: Machine-readable classification, e.g. ``storage_precondition_failed``
        details: Extra context such as validation messages
    """
    return {
        "success": False,
        "error": _without_empty(message=message, code=code or None, details=details),
    }
