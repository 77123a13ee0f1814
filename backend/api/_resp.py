# api/_resp.py
from typing import Any, Optional


def ok(message: Optional[str] = None, **data: Any) -> dict:
    """Success envelope: {"status": "success", "message"?, ...fields}."""
    payload: dict = {"status": "success"}
    if message:
        payload["message"] = message
    payload.update(data)
    return payload


def error(message: str) -> dict:
    """Error envelope rendered for every AppError."""
    return {"status": "error", "message": message}
