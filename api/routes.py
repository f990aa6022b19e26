"""
API Routes - Endpoint definitions for Market News Triage

Endpoints organized by:
- Health Check
- News (ranked triage, raw global collection)
- Insights (AI market analysis per instrument)
"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from loguru import logger
from pydantic import BaseModel, Field

from processor import InsightsGenerator, TriageOrchestrator, TriageTimeoutError

router = APIRouter()


TIMEOUT_MESSAGE = "News triage timed out, please retry"
NOT_CONFIGURED_MESSAGE = "News service not configured"
INSIGHTS_NOT_CONFIGURED_MESSAGE = "Insights service not configured"


class TriageRequest(BaseModel):
    """Body of a free-form triage request."""
    query: str = Field(..., min_length=1)
    instrument_context: Optional[str] = None


def get_orchestrator(request: Request) -> TriageOrchestrator:
    orchestrator = getattr(request.app.state, "orchestrator", None)
    if orchestrator is None:
        raise HTTPException(status_code=503, detail=NOT_CONFIGURED_MESSAGE)
    return orchestrator


def get_insights_generator(request: Request) -> InsightsGenerator:
    generator = getattr(request.app.state, "insights", None)
    if generator is None:
        raise HTTPException(status_code=503, detail=INSIGHTS_NOT_CONFIGURED_MESSAGE)
    return generator


def _timeout(e: TriageTimeoutError) -> HTTPException:
    logger.warning(f"Triage timeout: {e}")
    return HTTPException(status_code=504, detail=TIMEOUT_MESSAGE)


# ============================================================
# Health Check
# ============================================================
@router.get("/health")
async def health_check(request: Request):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "news_triage": getattr(request.app.state, "orchestrator", None) is not None,
        "insights": getattr(request.app.state, "insights", None) is not None,
    }


# ============================================================
# News
# ============================================================
@router.post("/news/triage")
async def triage_news(
    body: TriageRequest,
    orchestrator: TriageOrchestrator = Depends(get_orchestrator),
):
    """
    Triage news for a free-form query.

    Returns the top 5 items by risk score. `fallback_used` is true when
    AI scoring was unavailable and the heuristic ranking was used.
    """
    try:
        result = await orchestrator.triage(body.query, body.instrument_context)
    except TriageTimeoutError as e:
        raise _timeout(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return result.to_dict()


@router.get("/news/{instrument}/ranked")
async def get_ranked_instrument_news(
    instrument: str,
    orchestrator: TriageOrchestrator = Depends(get_orchestrator),
):
    """Triage news for a dashboard instrument display name (e.g. "Thai Baht")."""
    try:
        result = await orchestrator.triage_instrument(instrument)
    except TriageTimeoutError as e:
        raise _timeout(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return result.to_dict()


@router.get("/news/{instrument}")
async def get_instrument_news(
    instrument: str,
    orchestrator: TriageOrchestrator = Depends(get_orchestrator),
):
    """Unranked, deduplicated news for an instrument from all regions."""
    query = f"{instrument} commodity or currency market news Southeast Asia Thailand"
    try:
        items = await orchestrator.collect_global_news(query)
    except TriageTimeoutError as e:
        raise _timeout(e)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "items": [i.to_dict() for i in items],
        "query": query,
    }


# ============================================================
# Insights
# ============================================================
@router.get("/insights/{symbol}")
async def get_insights(
    symbol: str,
    price: float = Query(..., gt=0, description="Current instrument price"),
    name: Optional[str] = Query(None, description="Instrument display name"),
    generator: InsightsGenerator = Depends(get_insights_generator),
):
    """
    AI market analysis and price estimates for an instrument.

    Always answers with complete insights; `fallback_used` is true when the
    analysis came from the deterministic fallback.
    """
    try:
        insights = await generator.generate(symbol, price, name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return insights.to_dict()
