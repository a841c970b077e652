from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Raw JSON value; shape is checked by validate_catalog so the error names the intent
    intents: Optional[Any] = None
    threshold: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    min_margin: Optional[float] = Field(default=None, ge=0.0, le=1.0, alias="minMargin")


class ClassifyRequest(_Request):
    text: StrictStr = Field(min_length=1)


class BatchClassifyRequest(_Request):
    texts: List[StrictStr] = Field(min_length=1)


class ResultPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    intent: str
    confidence: float
    matched_example: Optional[str] = Field(default=None, alias="matchedExample")


class ClassifyResponse(BaseModel):
    text: str
    result: ResultPayload
    timestamp: str


class BatchItem(BaseModel):
    text: str
    result: ResultPayload


class BatchClassifyResponse(BaseModel):
    results: List[BatchItem]
    total: int
    timestamp: str


class IntentsResponse(BaseModel):
    intents: List[str]
    total: int


class ErrorResponse(BaseModel):
    error: str
    code: Optional[str] = None
    message: Optional[str] = None
    details: Optional[List[Dict[str, Any]]] = None
