from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ResolveRequestModel(BaseModel):
    method: str = Field(..., description="HTTP verb of the call being authorized")
    path: str = Field(..., description="Request path, e.g. /api/v3/find/object")
    body: Any = Field(default=None, description="JSON body of the call; a string is taken as raw JSON text")
    metadata: Optional[Dict[str, Any]] = Field(
        default=None, description="Transport metadata; overrides the body's own metadata field"
    )
    version: str = "latest"


class ItemModel(BaseModel):
    type: str
    instance_id: int = 0
    name: str = ""


class ResourceModel(BaseModel):
    type: str
    action: str
    instance_id: int = 0
    name: str = ""
    business_id: int = 0
    layers: List[ItemModel] = Field(default_factory=list)


class ResolveFailureModel(BaseModel):
    kind: str
    message: str


class ResolveResponseModel(BaseModel):
    version: str
    matched: bool
    family: Optional[str] = None
    resources: List[ResourceModel] = Field(default_factory=list)
    error: Optional[ResolveFailureModel] = None
    decision: Optional[str] = Field(default=None, description="null when the policy engine must decide")


class RouteModel(BaseModel):
    family: str
    method: str
    pattern: str
    kind: str


class RoutesResponseModel(BaseModel):
    version: str
    routes: List[RouteModel]
