"""Health check endpoint reporting the resolved route table size."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.dependencies import get_route_table
from app.schemas.health import HealthResponse
from app.services.routing import RouteTable

router = APIRouter()


@router.get("/healthz", response_model=HealthResponse)
async def healthz(route_table: Annotated[RouteTable, Depends(get_route_table)]) -> HealthResponse:
    """Report that the relay is up and how many webhook routes it serves."""
    return HealthResponse(status="ok", routes=len(route_table))
