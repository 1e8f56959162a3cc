# In src/hello_service/schemas.py

from typing import Any, TypedDict

from pydantic import BaseModel, ConfigDict, Field

# --- Static Type Hinting (for mypy and IDEs) ---


class ProxyResponse(TypedDict):
    """
    The response shape API Gateway expects back from a Lambda proxy integration.
    `body` is always JSON text.
    """

    statusCode: int
    headers: dict[str, str]
    body: str


# --- Runtime Validation (using Pydantic) ---


class ApiGatewayRequest(BaseModel):
    """
    Pydantic model for the parts of an API Gateway proxy event the handler reads.
    Everything else in the event is carried along untouched.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    body: str | None = None
    is_base64_encoded: bool = Field(False, alias="isBase64Encoded")
    http_method: str | None = Field(None, alias="httpMethod")
    path: str | None = None


class GreetingPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    timestamp: str
    request_id: str = Field(..., alias="requestId")
    body: Any = Field(default_factory=dict)


class ErrorDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    code: str
    message: str
    request_id: str = Field(..., alias="requestId")


class ErrorPayload(BaseModel):
    error: ErrorDetail
