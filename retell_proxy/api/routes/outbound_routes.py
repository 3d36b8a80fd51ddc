"""
Endpoints для исходящих звонков через Retell API.

Каждый обработчик: проверка входа → один запрос к Retell → ответ в
едином формате {success, ...}. Ошибки Retell и любые непредвиденные
исключения превращаются в 500 {success: false, error}.
"""

from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from retell_proxy.api.request_body import read_request_body
from retell_proxy.config.settings import ConfigurationError, Settings
from retell_proxy.schemas.call_schemas import (
    CallCreatedResponse,
    CallInfoResponse,
    CallListResponse,
    ErrorResponse,
)
from retell_proxy.utils.logger import get_logger
from retell_proxy.utils.retell_client import RetellClient
from retell_proxy.utils.validation import (
    as_body,
    validate_call_id,
    validate_list_calls,
    validate_outbound_call,
)

router = APIRouter(tags=["outbound"])
logger = get_logger(__name__)

DEFAULT_LIST_LIMIT = 50


def get_retell_client(request: Request) -> RetellClient:
    """Зависимость FastAPI: общий RetellClient приложения."""
    return request.app.state.retell_client


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def register_outbound_routes(app: FastAPI, settings: Settings) -> None:
    """
    Подключает исходящие маршруты.
    Без RETELL_API_KEY / RETELL_PHONE_NUMBER выбрасывает ConfigurationError.
    """
    try:
        settings.require_retell()
    except ConfigurationError:
        logger.error("Missing RETELL_API_KEY or RETELL_PHONE_NUMBER in env")
        raise
    app.include_router(router)


def bad_request(error: str) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": error})


def server_error(message: Optional[str], fallback: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(error=message or fallback).model_dump(),
    )


@router.post("/outbound-call")
async def create_outbound_call(
    request: Request,
    retell: RetellClient = Depends(get_retell_client),
    settings: Settings = Depends(get_settings),
):
    """
    Создать исходящий звонок через Retell (POST /v2/create-phone-call).
    from_number всегда берётся из настроек сервера.
    """
    fallback = "Unknown Retell call creation error"
    try:
        body = as_body(await read_request_body(request))
        call, error = validate_outbound_call(body)
        if error:
            return bad_request(error)

        payload = {
            # Должен быть номером, купленным в Retell
            "from_number": settings.retell_phone_number,
            "to_number": call.to_number,
            "metadata": call.metadata or {},
        }
        if call.override_agent_id is not None:
            payload["override_agent_id"] = call.override_agent_id
        if call.dynamic_variables is not None:
            payload["retell_llm_dynamic_variables"] = call.dynamic_variables

        result = await retell.post("/v2/create-phone-call", payload)
        if not result.ok:
            logger.error(f"Error creating Retell call: {result.error.message}")
            return server_error(result.error.message, fallback)

        logger.info(f"retellResponse => {result.data}")
        return CallCreatedResponse(callDetails=result.data).model_dump()

    except Exception as e:
        logger.error(f"Error creating Retell call: {str(e)}", exc_info=True)
        return server_error(str(e), fallback)


@router.get("/call-status/")
@router.get("/call-status/{call_id}")
async def get_call_status(
    call_id: str = "",
    retell: RetellClient = Depends(get_retell_client),
):
    """
    Получить информацию о звонке (GET /v2/get-call/{call_id}):
    статус, транскрипт и т.д.
    """
    fallback = "Unknown error fetching call data"
    try:
        error = validate_call_id(call_id)
        if error:
            return bad_request(error)

        result = await retell.get(f"/v2/get-call/{quote(call_id, safe='')}")
        if not result.ok:
            logger.error(f"Error fetching call info: {result.error.message}")
            return server_error(result.error.message, fallback)

        return CallInfoResponse(callInfo=result.data).model_dump()

    except Exception as e:
        logger.error(f"Error fetching call info: {str(e)}", exc_info=True)
        return server_error(str(e), fallback)


@router.post("/list-calls-by-agent")
async def list_calls_by_agent(
    request: Request,
    retell: RetellClient = Depends(get_retell_client),
):
    """
    Список звонков агента (POST /v2/list-calls) с limit и pagination_key.
    """
    fallback = "Unknown Retell list-calls error"
    try:
        body = as_body(await read_request_body(request))
        query, error = validate_list_calls(body)
        if error:
            return bad_request(error)

        payload = {
            # Retell ожидает список agent_id
            "filter_criteria": {"agent_id": [query.agent_id]},
            "limit": query.limit if query.limit is not None else DEFAULT_LIST_LIMIT,
            "pagination_key": query.pagination_key,
        }

        result = await retell.post("/v2/list-calls", payload)
        if not result.ok:
            logger.error(f"Error listing Retell calls: {result.error.message}")
            return server_error(result.error.message, fallback)

        data = result.data if isinstance(result.data, dict) else {}
        return CallListResponse(
            calls=data.get("calls") or [],
            pagination_key=data.get("pagination_key") or None,
        ).model_dump()

    except Exception as e:
        logger.error(f"Error listing Retell calls: {str(e)}", exc_info=True)
        return server_error(str(e), fallback)
