"""
FastAPI Endpoints for the Lead Scoring Service
==============================================
Base URL: http://localhost:8000

Endpoints:
- GET    /                 - API info
- GET    /api/health       - Health check
- POST   /offer            - Set the offer leads are scored against
- POST   /leads/upload     - Upload leads as CSV (multipart, field "file")
- POST   /score            - Score all uploaded leads
- GET    /results          - Scored leads as JSON
- GET    /results/export   - Scored leads as CSV
- DELETE /session          - Clear offer, leads and results
- GET    /api/stats        - Engine statistics
"""

import logging
import time
from datetime import datetime

from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

from ..config.settings import LLM_CONFIG, UPLOAD_EXTENSIONS
from ..errors import LeadScoringError, ScoringPreconditionError
from ..models.schemas import Intent, Offer, ScoreRunSummary
from ..engine import LeadScoringEngine
from ..tabular import read_leads_csv
from .. import __version__

logger = logging.getLogger(__name__)


# =============================================================================
# FastAPI App Initialization
# =============================================================================

app = FastAPI(
    title="Lead Scoring API",
    description="""
## Buying-Intent Lead Scoring

Scores each uploaded lead against a product offer by combining
deterministic rules (role, industry fit, profile completeness; max 50)
with an LLM intent classification (High 50 / Medium 30 / Low 10).

### Quick Start:
1. `POST /offer` with the offer profile
2. `POST /leads/upload` with a CSV of leads
3. `POST /score`, then `GET /results` or `GET /results/export`
    """,
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Session Engine
# =============================================================================

def get_default_engine() -> LeadScoringEngine:
    return LeadScoringEngine(
        llm_api_key=LLM_CONFIG.get("api_key"),
        llm_provider=LLM_CONFIG.get("provider"),
    )

session_engine = get_default_engine()


# =============================================================================
# Health & Info Endpoints
# =============================================================================

@app.get("/", tags=["Info"])
async def root():
    """API information and available endpoints"""
    return {
        "service": "Lead Scoring API",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
        "endpoints": {
            "Set Offer": "POST /offer",
            "Upload Leads": "POST /leads/upload",
            "Score": "POST /score",
            "Results": "GET /results",
            "Export": "GET /results/export",
            "Health": "GET /api/health",
        },
    }


@app.get("/api/health", tags=["Info"])
async def health_check():
    """Health check endpoint for monitoring"""
    return {
        "status": "healthy",
        "service": "Lead Scoring API",
        "version": __version__,
        "timestamp": datetime.utcnow().isoformat(),
        "llm_configured": session_engine.intent_stage.enabled,
        "llm_provider": session_engine.intent_stage.provider,
    }


# =============================================================================
# Offer & Lead Intake
# =============================================================================

@app.post("/offer", tags=["Intake"])
async def post_offer(offer: Offer):
    """Set (or replace) the offer leads are scored against"""
    session_engine.set_offer(offer)
    return {"status": "ok", "offer": offer.model_dump()}


@app.post("/leads/upload", tags=["Intake"])
async def upload_leads(
    file: UploadFile = File(..., description="CSV with name,role,company,industry,location,linkedin_bio"),
    replace: bool = Query(False, description="Replace previously uploaded leads"),
):
    """Upload leads from a CSV file"""
    if not file.filename or not file.filename.lower().endswith(UPLOAD_EXTENSIONS):
        raise HTTPException(status_code=400, detail="Only CSV files supported.")

    contents = await file.read()
    leads = read_leads_csv(contents)
    imported = session_engine.add_leads(leads, replace=replace)
    return {"status": "ok", "imported": imported, "total": len(session_engine.leads)}


# =============================================================================
# Scoring & Results
# =============================================================================

@app.post("/score", response_model=ScoreRunSummary, tags=["Scoring"])
def run_scoring():
    """
    Score every uploaded lead against the current offer.

    Leads are classified one at a time; results replace the previous run
    only when every lead has been scored. Runs in FastAPI's threadpool
    since the LLM calls block.
    """
    start_time = time.time()
    fallbacks_before = session_engine.stats["llm_fallbacks"]

    results = session_engine.run_scoring()

    return ScoreRunSummary(
        scored=len(results),
        high_intent=sum(1 for r in results if r.intent == Intent.HIGH),
        fallbacks=session_engine.stats["llm_fallbacks"] - fallbacks_before,
        processing_time_ms=round((time.time() - start_time) * 1000, 2),
        offer_name=session_engine.offer.name,
    )


@app.get("/results", tags=["Scoring"])
async def get_results(
    sort_by: str = Query("input", pattern="^(input|score)$", description="input or score"),
):
    """Scored leads from the last successful run"""
    return [r.model_dump(mode="json") for r in session_engine.get_results(sort_by=sort_by)]


@app.get("/results/export", tags=["Scoring"])
async def export_results():
    """Scored leads as a CSV attachment"""
    content = session_engine.export_results_csv()
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=results.csv"},
    )


@app.delete("/session", tags=["Scoring"])
async def clear_session():
    """Clear offer, leads and results"""
    session_engine.reset()
    return {"status": "ok"}


# =============================================================================
# Statistics
# =============================================================================

@app.get("/api/stats", tags=["Info"])
async def get_stats():
    """Get engine statistics"""
    return session_engine.get_stats()


# =============================================================================
# Error Handlers
# =============================================================================

@app.exception_handler(ScoringPreconditionError)
async def precondition_exception_handler(request, exc: ScoringPreconditionError):
    return JSONResponse(
        status_code=400,
        content={"error": str(exc), "missing": exc.missing},
    )


@app.exception_handler(LeadScoringError)
async def scoring_exception_handler(request, exc: LeadScoringError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": str(exc),
            "type": type(exc).__name__,
        }
    )
