import json
from typing import Any

from fastapi import Request
from starlette.datastructures import UploadFile

FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _form_value(value: Any) -> Any:
    # Содержимое файла не возвращаем, только описание
    if isinstance(value, UploadFile):
        return {"filename": value.filename, "content_type": value.content_type}
    return value


async def read_form(request: Request) -> dict:
    """
    Форма → dict. Повторяющийся ключ даёт список значений
    в порядке их следования (a=1&a=2 → {"a": ["1", "2"]}).
    """
    form = await request.form()
    result = {}
    for key, value in form.multi_items():
        value = _form_value(value)
        if key not in result:
            result[key] = value
        elif isinstance(result[key], list):
            result[key].append(value)
        else:
            result[key] = [result[key], value]
    return result


async def read_request_body(request: Request) -> Any:
    """
    Читает тело запроса как JSON или форму (urlencoded / multipart).
    Пустое или нечитаемое тело → None.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type in FORM_TYPES:
        return await read_form(request)

    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return None
