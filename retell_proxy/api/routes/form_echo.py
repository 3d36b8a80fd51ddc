from fastapi import APIRouter, Request

from retell_proxy.api.request_body import read_request_body

router = APIRouter(tags=["diagnostics"])


@router.post("/test-form")
async def test_form(request: Request):
    """Публичный диагностический endpoint: возвращает полученное тело как есть."""
    return {"received": await read_request_body(request)}
