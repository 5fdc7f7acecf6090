"""Pydantic models for ElectroMind API requests and responses."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from engine import ToolCategory


# --- Tool metadata ---

class InputOptionInfo(BaseModel):
    label: str
    value: float


class InputInfo(BaseModel):
    name: str = Field(..., description="Input key used in field updates")
    label: str
    unit: str = ""
    required: bool = True
    options: Optional[list[InputOptionInfo]] = Field(None, description="Closed set of values, or null for free entry")


class ToolInfo(BaseModel):
    id: str
    name: str
    description: str
    category: ToolCategory
    inputs: list[InputInfo]


class ToolListResponse(BaseModel):
    tools: list[ToolInfo]


# --- Instances ---

class CreateInstanceRequest(BaseModel):
    tool_id: str = Field(..., min_length=1, max_length=100)


class SetFieldRequest(BaseModel):
    value: str = Field(..., max_length=100, description="Raw entered text, may be partial (e.g. '-' or '3.')")


class CalculationResultInfo(BaseModel):
    result: float
    unit: str
    steps: str
    values: dict[str, float] = Field(default_factory=dict)
    summary: str = ""


class InstanceResponse(BaseModel):
    id: str
    tool_id: str
    fields: dict[str, str]
    errors: dict[str, str] = Field(default_factory=dict)
    result: Optional[CalculationResultInfo] = None


class CalculateResponse(BaseModel):
    ok: bool
    result: Optional[CalculationResultInfo] = None
    errors: dict[str, str] = Field(default_factory=dict)
