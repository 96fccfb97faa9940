"""
Command-line interface tools for the Anger Journal service.
"""

import asyncio
import json
from collections.abc import Coroutine
from typing import Any

import httpx
import typer

from .config import load_settings
from .models import DistortionFinding, JournalRecord, StatsReport
from .patterns import distortion_label

DEFAULT_BASE_URL = load_settings().url

app = typer.Typer(help="Anger Journal CLI tools")

UrlOption = typer.Option(
    DEFAULT_BASE_URL, "--url", "-u", help="Base URL of the Anger Journal service"
)
JsonOption = typer.Option(False, "--json", "-j", help="Output raw JSON")


# MARK: - CLI Entry Points


def main() -> None:
    """Entry point for the anger-journal CLI command."""
    app()


# MARK: - Commands


@app.command()
def analyze(
    thoughts: str = typer.Argument(..., help="The automatic thoughts to analyze"),
    situation: str = typer.Option("", "--situation", "-s", help="The situation"),
    evidence: str = typer.Option("", "--evidence", "-e", help="Supporting evidence"),
    base_url: str = UrlOption,
    json_output: bool = JsonOption,
) -> None:
    """Detect cognitive distortions in text without saving a record."""

    async def _analyze() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                f"{base_url}/api/analyze-distortions",
                json={"thoughts": thoughts, "situation": situation, "evidence": evidence},
            )
            response.raise_for_status()
            result = response.json()

            if json_output:
                print(json.dumps(result, indent=2, ensure_ascii=False))
                return

            findings = [DistortionFinding.model_validate(item) for item in result]
            if not findings:
                print("No distortions detected")
            for finding in findings:
                print(_format_finding(finding))

    _run_with_error_handling(_analyze(), base_url)


@app.command()
def records(
    limit: int = typer.Option(50, "--limit", "-n", min=0, help="Number of records"),
    offset: int = typer.Option(0, "--offset", min=0, help="Records to skip"),
    base_url: str = UrlOption,
    json_output: bool = JsonOption,
) -> None:
    """List journal records, most recent first."""

    async def _records() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.get(
                f"{base_url}/api/anger-records",
                params={"limit": limit, "offset": offset},
            )
            response.raise_for_status()
            result = response.json()

            if json_output:
                print(json.dumps(result, indent=2, ensure_ascii=False))
                return

            if not result:
                print("No records")
            for item in result:
                print(_format_record_line(JournalRecord.model_validate(item)))

    _run_with_error_handling(_records(), base_url)


@app.command()
def record(
    record_id: int = typer.Argument(..., help="Id of the record to show"),
    base_url: str = UrlOption,
    json_output: bool = JsonOption,
) -> None:
    """Show a single journal record."""

    async def _record() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.get(f"{base_url}/api/anger-records/{record_id}")
            if response.status_code == 404:
                print(f"Record {record_id} not found")
                raise typer.Exit(1)
            response.raise_for_status()
            result = response.json()

            if json_output:
                print(json.dumps(result, indent=2, ensure_ascii=False))
                return

            print(_format_record(JournalRecord.model_validate(result)))

    _run_with_error_handling(_record(), base_url)


@app.command()
def stats(
    base_url: str = UrlOption,
    json_output: bool = JsonOption,
) -> None:
    """Show summary statistics."""

    async def _stats() -> None:
        async with httpx.AsyncClient() as client:
            response = await client.get(f"{base_url}/api/stats")
            response.raise_for_status()
            result = response.json()

            if json_output:
                print(json.dumps(result, indent=2, ensure_ascii=False))
                return

            print(_format_stats(StatsReport.model_validate(result)))

    _run_with_error_handling(_stats(), base_url)


# MARK: - Private Helpers


def _format_finding(finding: DistortionFinding) -> str:
    """Format a finding as its label, description and suggestion."""
    label = distortion_label(finding.type)
    return f"[{label}] {finding.description}\n  -> {finding.suggestion}"


def _format_record_line(record: JournalRecord) -> str:
    """Format a record as one summary line."""
    labels = ", ".join(distortion_label(f.type) for f in record.detected_distortions)
    mood = f"mood {record.mood_before} -> {record.mood_after}"
    line = f"#{record.id} {record.date.isoformat()} {mood}"
    return f"{line} [{labels}]" if labels else line


def _format_record(record: JournalRecord) -> str:
    emotions = ", ".join(f"{e.type} ({e.intensity})" for e in record.emotions)
    lines = [
        _format_record_line(record),
        f"Situation: {record.situation}",
        f"Emotions: {emotions}",
        f"Thoughts: {record.thoughts}",
        f"Evidence: {record.evidence}",
        f"Counter-evidence: {record.counter_evidence}",
        f"Balanced thinking: {record.balanced_thinking}",
    ]
    lines.extend(_format_finding(f) for f in record.detected_distortions)
    return "\n".join(lines)


def _format_stats(report: StatsReport) -> str:
    lines = [
        f"Total records: {report.total_records}",
        f"This week: {report.weekly_records}",
        f"Average mood improvement: {report.avg_mood_improvement:.1f}",
    ]
    for entry in report.common_distortions:
        lines.append(f"  {distortion_label(entry.type)}: {entry.count}")
    return "\n".join(lines)


def _run_with_error_handling(coro: Coroutine[Any, Any, Any], base_url: str) -> None:
    """Run an async coroutine with standardized error handling."""
    try:
        asyncio.run(coro)
    except typer.Exit:
        raise
    except KeyboardInterrupt:
        print("\nStopped")
        raise typer.Exit(0)
    except httpx.ConnectError:
        print(f"Error: Could not connect to {base_url}")
        raise typer.Exit(1)
    except httpx.HTTPStatusError as e:
        print(f"Error: HTTP {e.response.status_code}")
        raise typer.Exit(1)
    except Exception as e:
        error_msg = str(e) if str(e) else f"Unknown error of type {type(e).__name__}"
        print(f"Error: {error_msg}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
