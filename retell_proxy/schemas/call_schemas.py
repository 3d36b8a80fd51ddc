from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Optional

class OutboundCallRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    to_number: str
    metadata: Optional[Dict[str, Any]] = None
    override_agent_id: Optional[str] = None
    dynamic_variables: Optional[Dict[str, Any]] = Field(
        default=None, alias="retell_llm_dynamic_variables"
    )

class ListCallsRequest(BaseModel):
    agent_id: str
    limit: Optional[int] = None
    pagination_key: Optional[str] = None

class ErrorResponse(BaseModel):
    success: bool = False
    error: str

class CallCreatedResponse(BaseModel):
    success: bool = True
    message: str = "Retell call initiated successfully"
    callDetails: Any = None

class CallInfoResponse(BaseModel):
    success: bool = True
    callInfo: Any = None

class CallListResponse(BaseModel):
    success: bool = True
    calls: List[Any] = Field(default_factory=list)
    pagination_key: Any = None
