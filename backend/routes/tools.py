"""Calculator routes — tool catalogue and per-instance field editing."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Request, Response

from backend.instance_store import ToolInstance
from backend.models import (
    CalculateResponse,
    CalculationResultInfo,
    CreateInstanceRequest,
    InstanceResponse,
    SetFieldRequest,
    ToolInfo,
    ToolListResponse,
)
from engine import (
    CalculationResult,
    InvalidOption,
    InvariantViolation,
    ToolCategory,
    ToolNotFound,
    UnknownInput,
    get_tool,
    list_tools,
    tool_metadata,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _result_info(result: Optional[CalculationResult]) -> Optional[CalculationResultInfo]:
    if result is None:
        return None
    return CalculationResultInfo(
        result=result.result,
        unit=result.unit,
        steps=result.steps,
        values=result.values,
        summary=result.summary(),
    )


def _instance_response(instance: ToolInstance) -> InstanceResponse:
    session = instance.session
    return InstanceResponse(
        id=instance.id,
        tool_id=instance.tool_id,
        fields=session.fields,
        errors={name: reason.value for name, reason in session.errors.items()},
        result=_result_info(session.result),
    )


async def _get_instance(request: Request, instance_id: str) -> ToolInstance:
    store = request.app.state.instance_store
    instance = await store.get_instance(instance_id)
    if instance is None:
        raise HTTPException(status_code=404, detail="Instance not found")
    return instance


@router.get("/tools", response_model=ToolListResponse)
async def get_tools(category: Optional[ToolCategory] = Query(None, description="Filter by category")):
    """List calculator tools in display order."""
    tools = list_tools(category.value if category else None)
    return ToolListResponse(tools=[ToolInfo(**tool_metadata(t)) for t in tools])


@router.get("/tools/{tool_id}", response_model=ToolInfo)
async def get_tool_info(tool_id: str):
    """Metadata for a single tool."""
    try:
        tool = get_tool(tool_id)
    except ToolNotFound:
        raise HTTPException(status_code=404, detail="Tool not found")
    return ToolInfo(**tool_metadata(tool))


@router.post("/instances", response_model=InstanceResponse, status_code=201)
async def create_instance(request: Request, body: CreateInstanceRequest):
    """Open a tool instance with default field values."""
    store = request.app.state.instance_store
    await store.cleanup_expired()
    try:
        instance = await store.create_instance(body.tool_id)
    except ToolNotFound:
        raise HTTPException(status_code=404, detail="Tool not found")
    return _instance_response(instance)


@router.get("/instances/{instance_id}", response_model=InstanceResponse)
async def get_instance(request: Request, instance_id: str):
    instance = await _get_instance(request, instance_id)
    return _instance_response(instance)


@router.put("/instances/{instance_id}/fields/{name}", response_model=InstanceResponse)
async def set_field(request: Request, instance_id: str, name: str, body: SetFieldRequest):
    """Record an edit to one field. Clears that field's error."""
    instance = await _get_instance(request, instance_id)
    try:
        instance.session.set_field(name, body.value)
    except UnknownInput:
        raise HTTPException(status_code=404, detail=f"Unknown input '{name}'")
    except InvalidOption as e:
        raise HTTPException(status_code=422, detail=str(e))
    await request.app.state.instance_store.touch(instance)
    return _instance_response(instance)


@router.post("/instances/{instance_id}/calculate", response_model=CalculateResponse)
async def calculate(request: Request, instance_id: str):
    """Validate the instance's fields and run its formula."""
    instance = await _get_instance(request, instance_id)
    try:
        outcome = instance.session.run()
    except InvariantViolation:
        logger.error("Broken tool definition for %s", instance.tool_id, exc_info=True)
        raise HTTPException(status_code=500, detail="Calculation failed due to an internal tool error.")
    await request.app.state.instance_store.touch(instance)

    if outcome.ok:
        return CalculateResponse(ok=True, result=_result_info(outcome.result))
    return CalculateResponse(
        ok=False,
        errors={name: reason.value for name, reason in outcome.errors.items()},
    )


@router.post("/instances/{instance_id}/reset", response_model=InstanceResponse)
async def reset_instance(request: Request, instance_id: str):
    """Discard entered values and the stored result."""
    instance = await _get_instance(request, instance_id)
    instance.session.reset()
    await request.app.state.instance_store.touch(instance)
    return _instance_response(instance)


@router.delete("/instances/{instance_id}", status_code=204)
async def close_instance(request: Request, instance_id: str):
    store = request.app.state.instance_store
    if not await store.delete_instance(instance_id):
        raise HTTPException(status_code=404, detail="Instance not found")
    return Response(status_code=204)
