from datetime import date, datetime
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from searchsuite_client.config import Config

# log_level usage:
# - DEBUG: Detailed info for debugging (absorbed not-found, client construction). Not shown in stderr.
# - INFO: Progress, completion, results. Shown in stderr.
# - WARNING: Succeeded but incomplete. Shown in stderr.
# - ERROR: Operation failed. Shown in stderr.
# - CRITICAL: Fatal, processing stops (raises exception). Shown in stderr.
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# lifecycle is expressed in the extra field:
# - lifecycle="start": run started
# - lifecycle="end": run completed successfully
# - lifecycle="failed": run failed
Lifecycle = Literal["start", "end", "failed"]


class Extra(BaseModel):
    """
    Additional structured data for log records.

    Reserved fields have predefined meanings.
    Additional arbitrary fields are allowed via extra="allow".
    """
    model_config = ConfigDict(extra="allow")

    lifecycle: Optional[Lifecycle] = Field(
        default=None,
        description="Run lifecycle stage: start, end, or failed",
    )
    index: Optional[str] = Field(
        default=None,
        description="Elasticsearch index name",
        examples=["products_20240101"],
    )
    alias: Optional[str] = Field(
        default=None,
        description="Elasticsearch alias name",
        examples=["products"],
    )
    file: Optional[str] = Field(
        default=None,
        description="File path being read",
        examples=["/path/to/settings.json"],
    )
    count: Optional[int] = Field(
        default=None,
        description="Count of items (for summary logs)",
        ge=0,
    )


class LoggerContext(BaseModel):
    """Runtime context for logger."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    run_name: str = Field(
        ...,
        description="Name of the run",
    )
    run_id: str = Field(
        ...,
        description="Unique run identifier: {YYYYMMDD}_{run_name}_{hex4}",
    )
    run_date: date = Field(
        ...,
        description="Run date (TODAY when logger was initialized)",
    )
    log_file: Path = Field(
        ...,
        description="Path to the JSONL log file",
    )
    config: Config = Field(
        ...,
        description="Config instance",
    )


class ErrorInfo(BaseModel):
    """Exception information for error logs."""

    type: str = Field(
        ...,
        description="Exception class name",
        examples=["NotFoundError", "ConnectionError"],
    )
    message: str = Field(
        ...,
        description="Exception message (str(e))",
    )
    traceback: Optional[str] = Field(
        default=None,
        description="Full traceback string",
    )


class LogRecord(BaseModel):
    """Single log record."""

    timestamp: datetime = Field(
        ...,
        description="Log timestamp",
        examples=["2026-01-13T10:30:00+00:00"],
    )

    # run identifiers
    run_date: Optional[date] = Field(
        default=None,
        description="Run date (TODAY when logger was initialized)",
    )
    run_id: Optional[str] = Field(
        default=None,
        description="Unique run identifier: {YYYYMMDD}_{run_name}_{hex4}",
        examples=["20260113_searchsuite_info_a1b2"],
    )
    run_name: str = Field(
        ...,
        description="Name of the run (CLI command name or 'adhoc')",
        examples=["searchsuite_info", "adhoc"],
    )

    source: str = Field(
        ...,
        description="Python module path where log was emitted",
        examples=["searchsuite_client.es.client"],
    )

    log_level: LogLevel = Field(
        ...,
        description="Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    message: Optional[str] = Field(
        default=None,
        description="Human-readable log message",
    )
    error: Optional[ErrorInfo] = Field(
        default=None,
        description="Error information (set when exception occurred)",
    )
    extra: Extra = Field(
        default_factory=Extra,
        description="Additional structured data (lifecycle, index, alias, etc.)",
    )
