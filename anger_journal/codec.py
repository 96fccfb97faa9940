"""
Encoding of journal records to and from their stored form.

Stored rows keep ``emotions`` and ``detected_distortions`` as JSON text. The
rest of the application only sees typed models; this module is the one place
where that text is produced and parsed.
"""

import logging
from datetime import datetime
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from .models import DistortionFinding, Emotion, JournalRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

Row = dict[str, Any]

_emotions = TypeAdapter(list[Emotion])
_distortions = TypeAdapter(list[DistortionFinding])


class MalformedStoredData(ValueError):
    """A stored list payload could not be parsed."""

    def __init__(self, record_id: int, field: str, reason: str) -> None:
        super().__init__(f"record {record_id}: malformed {field}: {reason}")
        self.record_id = record_id
        self.field = field


def encode_record(record: JournalRecord) -> Row:
    """
    Convert a record into its stored row form.

    Args:
        record: The record to encode

    Returns:
        A flat dict of scalars with list fields as JSON text
    """
    return {
        "id": record.id,
        "date": record.date.isoformat(),
        "situation": record.situation,
        "emotions": _emotions.dump_json(record.emotions, by_alias=True).decode(),
        "thoughts": record.thoughts,
        "evidence": record.evidence,
        "counter_evidence": record.counter_evidence,
        "balanced_thinking": record.balanced_thinking,
        "mood_before": record.mood_before,
        "mood_after": record.mood_after,
        "detected_distortions": _distortions.dump_json(
            record.detected_distortions, by_alias=True
        ).decode(),
        "created_at": record.created_at.isoformat(),
    }


def decode_list(
    adapter: TypeAdapter[list[T]], raw: str, *, record_id: int, field: str
) -> list[T]:
    """
    Parse a JSON list payload from a stored row.

    Raises:
        MalformedStoredData: If the payload is not valid JSON or does not
            match the expected item shape
    """
    try:
        return adapter.validate_json(raw)
    except ValidationError as e:
        raise MalformedStoredData(record_id, field, str(e)) from e


def _decode_or_empty(adapter: TypeAdapter[list[T]], row: Row, field: str) -> list[T]:
    try:
        return decode_list(adapter, row[field], record_id=row["id"], field=field)
    except MalformedStoredData as e:
        logger.warning("%s; reading it as empty", e)
        return []


def decode_record(row: Row) -> JournalRecord:
    """
    Rebuild a record from its stored row form.

    A malformed ``emotions`` or ``detected_distortions`` payload is read as an
    empty list so one corrupt row cannot break a listing or stats request.
    """
    return JournalRecord(
        id=row["id"],
        date=row["date"],
        situation=row["situation"],
        emotions=_decode_or_empty(_emotions, row, "emotions"),
        thoughts=row["thoughts"],
        evidence=row["evidence"],
        counter_evidence=row["counter_evidence"],
        balanced_thinking=row["balanced_thinking"],
        mood_before=row["mood_before"],
        mood_after=row["mood_after"],
        detected_distortions=_decode_or_empty(_distortions, row, "detected_distortions"),
        created_at=datetime.fromisoformat(row["created_at"]),
    )
