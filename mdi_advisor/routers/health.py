"""Health check endpoints for container orchestration."""

from typing import Any

from fastapi import APIRouter

router = APIRouter(tags=["Health"])


@router.get("/health/live")
async def liveness_probe() -> dict[str, Any]:
    """
    Liveness probe.

    The engine is stateless and has no external dependencies, so a running
    process is a healthy one.
    """
    return {"status": "alive"}
