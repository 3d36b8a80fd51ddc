from typing import Any, Optional, Tuple

from pydantic import ValidationError

from retell_proxy.schemas.call_schemas import ListCallsRequest, OutboundCallRequest


def as_body(payload: Any) -> dict:
    """Тело запроса, не являющееся JSON-объектом, считается пустым."""
    return payload if isinstance(payload, dict) else {}


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else err.get("msg", ""))
    return "Invalid request body: " + "; ".join(parts)


def validate_outbound_call(body: dict) -> Tuple[Optional[OutboundCallRequest], Optional[str]]:
    """
    Проверяет тело POST /outbound-call.
    Возвращает (модель, None) либо (None, текст ошибки для 400).
    """
    if not body.get("to_number"):
        return None, "Missing 'to_number' in request body"
    try:
        return OutboundCallRequest.model_validate(body), None
    except ValidationError as e:
        return None, _describe(e)


def validate_call_id(call_id: Optional[str]) -> Optional[str]:
    """Пустой callId в пути — ошибка 400."""
    if not call_id:
        return "Missing 'callId' in URL"
    return None


def validate_list_calls(body: dict) -> Tuple[Optional[ListCallsRequest], Optional[str]]:
    if not body.get("agent_id"):
        return None, "Missing 'agent_id' in request body"
    try:
        return ListCallsRequest.model_validate(body), None
    except ValidationError as e:
        return None, _describe(e)
