"""Health endpoints."""

from fastapi import APIRouter, Depends

from ..runtime import DashboardRuntime, get_runtime

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    """Liveness: responde ok mientras el proceso esté vivo."""
    return {"status": "ok"}


@router.get("/health/feed")
async def feed_health(runtime: DashboardRuntime = Depends(get_runtime)):
    """Estado del fetch loop.

    Un fetch fallido no limpia el estado, así que `stale` indica que el
    último intento falló y se está mostrando el snapshot anterior.
    """
    stats = runtime.loop.stats
    return {
        "running": runtime.loop.is_running,
        "stale": stats.accepted > 0 and stats.consecutive_failures > 0,
        "stats": stats.to_dict(),
    }
