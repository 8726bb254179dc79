"""
Health Check Router
==================
Endpoints for health checks and readiness probes.
"""
from fastapi import APIRouter, HTTPException, Request

from tagpress import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint.
    Returns OK if the service is running.
    """
    return {"status": "ok", "version": __version__}


@router.get("/ready")
async def readiness_check(request: Request):
    """
    Readiness check endpoint.
    Returns OK once the configured site root exists.
    """
    root = request.app.state.site_root
    if not root.is_dir():
        raise HTTPException(status_code=503, detail=f"site root not found: {root}")
    return {"status": "ready", "site_root": str(root)}
