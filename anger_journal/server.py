"""
FastAPI server for the Anger Journal service.

This module implements the HTTP API endpoints for creating and reading journal
records, live distortion analysis, and summary statistics. Text fields of new
records run through the distortion classifier before they reach the store.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, HTTPException, Query
from pydantic import Field

from . import __version__
from .classifier import classify
from .config import Settings, load_settings
from .models import (
    AnalyzeRequest,
    CamelModel,
    ClassifiedEntry,
    DailyMood,
    DistortionFinding,
    DistortionType,
    EmotionSummary,
    JournalEntry,
    JournalRecord,
    StatsReport,
)
from .patterns import CATALOG, CATALOG_VERSION
from .stats import compute_stats, mood_trend, summarize_emotions
from .store import MemoryRecordStore, RecordStore

logger = logging.getLogger(__name__)


# API Response Schemas
class DistortionTypeInfo(CamelModel):
    """Catalog entry as exposed by the API."""

    type: DistortionType
    label: str = Field(..., description="Display label for the category")
    description: str
    suggestion: str


def create_app(record_store: RecordStore, settings: Settings | None = None) -> FastAPI:
    """
    Create a FastAPI application with the given record store.

    Args:
        record_store: The RecordStore instance to use for the application
        settings: Application settings (defaults to the environment)

    Returns:
        Configured FastAPI application
    """
    if settings is None:
        settings = load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Lifespan context manager for FastAPI application."""
        logger.info("Anger Journal %s starting", __version__)
        yield

    app = FastAPI(
        title="Anger Journal",
        description="Anger management journal with cognitive distortion detection",
        version=__version__,
        lifespan=lifespan,
    )

    @app.get("/")
    async def root() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "ok", "service": "anger-journal", "catalog": CATALOG_VERSION}

    @app.post("/api/anger-records")
    async def create_record(entry: JournalEntry) -> JournalRecord:
        """
        Create a journal record.

        The thoughts, situation and evidence are classified and the findings
        are stored with the record.

        Args:
            entry: The validated record payload

        Returns:
            The stored record with id, creation time and detected distortions
        """
        findings = classify(entry.thoughts, entry.situation, entry.evidence)
        classified = ClassifiedEntry(
            **entry.model_dump(), detected_distortions=findings
        )
        try:
            return await record_store.create(classified)
        except Exception as e:
            logger.exception("Failed to store record")
            raise HTTPException(
                status_code=500, detail=f"Failed to create record: {str(e)}"
            )

    @app.get("/api/anger-records")
    async def list_records(
        limit: int = Query(settings.page_size, ge=0),
        offset: int = Query(0, ge=0),
    ) -> list[JournalRecord]:
        """Get a page of records, most recent first."""
        return await record_store.list(limit=limit, offset=offset)

    @app.get("/api/anger-records/range/{start_date}/{end_date}")
    async def list_records_in_range(start_date: date, end_date: date) -> list[JournalRecord]:
        """Get records dated between start_date and end_date inclusive."""
        return await record_store.list_by_date_range(start_date, end_date)

    @app.get("/api/anger-records/{record_id}")
    async def get_record(record_id: int) -> JournalRecord:
        """
        Get a single record.

        Raises:
            HTTPException: 404 if no record has the given id
        """
        record = await record_store.get_by_id(record_id)
        if record is None:
            raise HTTPException(status_code=404, detail="Record not found")
        return record

    @app.get("/api/stats")
    async def get_stats() -> StatsReport:
        """Get summary statistics over all records."""
        return compute_stats(await record_store.snapshot())

    @app.get("/api/stats/emotions")
    async def get_emotion_stats(
        limit: int = Query(5, ge=0),
    ) -> list[EmotionSummary]:
        """Get the most frequent emotions with their average intensity."""
        return summarize_emotions(await record_store.snapshot(), limit=limit)

    @app.get("/api/stats/mood-trend")
    async def get_mood_trend(days: int = Query(7, ge=0)) -> list[DailyMood]:
        """Get average moods for the most recent journal dates."""
        return mood_trend(await record_store.snapshot(), days=days)

    @app.post("/api/analyze-distortions")
    async def analyze_distortions(request: AnalyzeRequest) -> list[DistortionFinding]:
        """Detect distortions in text without saving a record."""
        return classify(request.thoughts, request.situation, request.evidence)

    @app.get("/api/distortion-types")
    async def list_distortion_types() -> list[DistortionTypeInfo]:
        """List the distortion categories the classifier knows about."""
        return [
            DistortionTypeInfo(
                type=pattern.type,
                label=pattern.label,
                description=pattern.description,
                suggestion=pattern.suggestion,
            )
            for pattern in CATALOG
        ]

    return app


# Default app instance for uvicorn
app = create_app(MemoryRecordStore())


def main() -> None:
    """Main entry point for the server."""
    import uvicorn

    settings = load_settings()
    logging.basicConfig(level=settings.log_level.upper())
    uvicorn.run(
        "anger_journal.server:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
