"""Main FastAPI application for the Daily Connections editorial service."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
import structlog

from .config import settings
from .models import PuzzleValidationRequest, PuzzleSubmissionRequest
from .database import CachedPuzzleRepository, PuzzleRepository, create_repository
from .pipeline import PuzzleIntakePipeline

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = structlog.get_logger(__name__)

# Global components
repository: Optional[PuzzleRepository] = None
intake_pipeline: Optional[PuzzleIntakePipeline] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager."""
    # Startup
    logger.info("Starting Daily Connections editorial service...")

    global repository, intake_pipeline

    try:
        repository = create_repository()
        intake_pipeline = PuzzleIntakePipeline(repository=repository)

        logger.info("Daily Connections editorial service started", repository=repository.__class__.__name__)

        yield

    except Exception as e:
        logger.error(f"Failed to start application: {e}")
        raise

    finally:
        # Shutdown
        logger.info("Shutting down Daily Connections editorial service...")

        if repository:
            repository.close()

        logger.info("Daily Connections editorial service shut down")


# Create FastAPI app
app = FastAPI(
    title="Daily Connections Editorial Service",
    description="Structural and uniqueness validation for daily Connections puzzles",
    version="1.0.0",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Dependency injection
def get_repository() -> PuzzleRepository:
    """Get puzzle repository dependency."""
    if repository is None:
        raise HTTPException(status_code=503, detail="Puzzle repository not available")
    return repository


def get_intake_pipeline() -> PuzzleIntakePipeline:
    """Get intake pipeline dependency."""
    if intake_pipeline is None:
        raise HTTPException(status_code=503, detail="Intake pipeline not available")
    return intake_pipeline


# Health check endpoints
@app.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "Daily Connections Editorial Service"}


@app.get("/health/detailed")
async def detailed_health_check(repo: PuzzleRepository = Depends(get_repository)):
    """Detailed health check with component status."""
    components = {"repository": repo.health_check()}
    if isinstance(repo, CachedPuzzleRepository):
        components["cache"] = repo.cache_manager.health_check()

    all_healthy = all(components.values())
    health_status = {
        "service": "Daily Connections Editorial Service",
        "status": "healthy" if all_healthy else "degraded",
        "components": components
    }

    status_code = 200 if all_healthy else 503
    return JSONResponse(content=health_status, status_code=status_code)


# Puzzle endpoints
@app.post("/api/v1/puzzles/validate")
async def validate_puzzle(
    request: PuzzleValidationRequest,
    pipeline: PuzzleIntakePipeline = Depends(get_intake_pipeline)
):
    """Check a candidate puzzle against the recent corpus without saving it."""
    try:
        result = await pipeline.check_puzzle(request.puzzle, policy=request.policy)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid puzzle document: {e.error_count()} error(s)")
    except ValueError as e:
        logger.error(f"Error validating puzzle: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if result["stage"] == "structure":
        return JSONResponse(
            status_code=400,
            content={"valid": False, "stage": "structure", "issues": result["issues"]}
        )

    return {"stage": "uniqueness", **result["validation"].model_dump()}


@app.post("/api/v1/puzzles")
async def submit_puzzle(
    request: PuzzleSubmissionRequest,
    pipeline: PuzzleIntakePipeline = Depends(get_intake_pipeline)
):
    """Validate a puzzle and publish it when accepted or forced."""
    try:
        logger.info("Submitting puzzle", date=request.puzzle.get("date"), force=request.force)
        result = await pipeline.submit_puzzle(request.puzzle, force=request.force, policy=request.policy)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=f"Invalid puzzle document: {e.error_count()} error(s)")
    except ValueError as e:
        logger.error(f"Error submitting puzzle: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if result["stage"] == "structure":
        return JSONResponse(
            status_code=400,
            content={"saved": False, "stage": "structure", "issues": result["issues"]}
        )

    content = {
        "saved": result["saved"],
        "created": result["created"],
        "date": result["puzzle"]["date"],
        "validation": result["validation"].model_dump()
    }
    if not result["saved"]:
        return JSONResponse(status_code=409, content=content)

    return JSONResponse(status_code=201 if result["created"] else 200, content=content)


@app.get("/api/v1/puzzles/{date}")
async def get_puzzle(date: str, repo: PuzzleRepository = Depends(get_repository)):
    """Retrieve a published puzzle by date."""
    puzzle = repo.get_by_date(date)

    if puzzle is None:
        raise HTTPException(status_code=404, detail=f"No puzzle published for {date}")

    return {"puzzle": puzzle.model_dump(exclude_none=True)}


@app.get("/api/v1/puzzles/{date}/exists")
async def puzzle_exists(date: str, repo: PuzzleRepository = Depends(get_repository)):
    """Check whether a puzzle is already published for a date."""
    return {"date": date, "exists": repo.exists(date)}


@app.get("/api/v1/statistics")
async def get_statistics(
    limit: Optional[int] = None,
    pipeline: PuzzleIntakePipeline = Depends(get_intake_pipeline)
):
    """Word usage statistics over the recent corpus."""
    if limit is not None and limit < 1:
        raise HTTPException(status_code=400, detail="limit must be positive")

    return {"statistics": pipeline.get_statistics(limit)}


@app.get("/api/v1/pipeline/status")
async def get_pipeline_status(pipeline: PuzzleIntakePipeline = Depends(get_intake_pipeline)):
    """Get current pipeline status and counters."""
    return {"pipeline_status": pipeline.get_status()}


# Cache management endpoints
@app.post("/api/v1/cache/clear")
async def clear_cache(repo: PuzzleRepository = Depends(get_repository)):
    """Clear all cached puzzles and corpus snapshots."""
    if not isinstance(repo, CachedPuzzleRepository):
        raise HTTPException(status_code=503, detail="Corpus cache is not enabled")

    if not repo.cache_manager.clear_all():
        raise HTTPException(status_code=500, detail="Failed to clear cache")

    return {"message": "Cache cleared successfully"}


# Error handlers
@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Handle HTTP exceptions."""
    logger.error(f"HTTP exception: {exc.status_code} - {exc.detail}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail, "status_code": exc.status_code}
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Handle general exceptions."""
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "status_code": 500}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "daily_connections.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.environment == "development"
    )
