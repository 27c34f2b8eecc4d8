from fastapi import APIRouter, Depends

from initializr.api.deps import get_stats
from initializr.schemas.packages import StatsResponse
from initializr.stats import StatsSink

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/stats", response_model=StatsResponse)
def stats(sink: StatsSink = Depends(get_stats)):
    snapshot = sink.read()
    return StatsResponse(total_generations=snapshot.generations, total_downloads=snapshot.downloads)
