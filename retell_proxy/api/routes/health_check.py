"""
Проверка здоровья сервиса. Закрыта x-api-key, как и все непубличные пути.
"""

from datetime import datetime
from typing import Any, Dict

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "service": "retell-proxy",
        "version": "1.0.0",
    }
