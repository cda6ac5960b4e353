import inspect
import sys
import traceback
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime
from pathlib import Path
from secrets import token_hex
from typing import Any, Dict, Iterator, Optional

from searchsuite_client.config import (LOCAL_TZ, LOG_DIR_NAME, TODAY,
                                       TODAY_STR, Config, default_config)
from searchsuite_client.logging.schema import (ErrorInfo, Extra, LoggerContext,
                                               LogLevel, LogRecord)

_ctx: ContextVar[Optional[LoggerContext]] = ContextVar("_ctx", default=None)

ADHOC_RUN_NAME = "adhoc"


def init_logger(
    *,
    run_name: Optional[str] = None,
    config: Optional[Config] = None,
) -> LoggerContext:
    if config is None:
        config = default_config
    if run_name is None:
        run_name = _infer_run_name()
    run_id = f"{TODAY_STR}_{run_name}_{token_hex(2)}"
    log_file = config.result_dir.joinpath(LOG_DIR_NAME, f"{run_id}.log.jsonl")
    log_file.parent.mkdir(parents=True, exist_ok=True)

    ctx = LoggerContext(
        run_name=run_name,
        run_id=run_id,
        run_date=TODAY,
        log_file=log_file,
        config=config,
    )
    _ctx.set(ctx)

    return ctx


@contextmanager
def run_logger(
    *,
    run_name: Optional[str] = None,
    config: Optional[Config] = None,
) -> Iterator[LoggerContext]:
    """Initialize the logger for one run and record its lifecycle.

    Logs "start" on entry, "end" on normal exit and "failed" (CRITICAL)
    when an exception escapes; the exception is re-raised.
    """
    ctx = init_logger(run_name=run_name, config=config)
    log_info(f"{ctx.run_name} started", lifecycle="start")
    try:
        yield ctx
    except BaseException as e:
        log_critical(f"{ctx.run_name} failed", error=e, lifecycle="failed")
        raise
    else:
        log_info(f"{ctx.run_name} completed", lifecycle="end")
    finally:
        _ctx.set(None)


def log_debug(message: str, *, error: Optional[BaseException] = None, **extra: Any) -> None:
    _log("DEBUG", message, error=error, extra=extra)


def log_info(message: str, *, error: Optional[BaseException] = None, **extra: Any) -> None:
    _log("INFO", message, error=error, extra=extra)


def log_warn(message: str, *, error: Optional[BaseException] = None, **extra: Any) -> None:
    _log("WARNING", message, error=error, extra=extra)


def log_error(message: str, *, error: Optional[BaseException] = None, **extra: Any) -> None:
    _log("ERROR", message, error=error, extra=extra)


def log_critical(message: str, *, error: Optional[BaseException] = None, **extra: Any) -> None:
    _log("CRITICAL", message, error=error, extra=extra)


def _log(
    level: LogLevel,
    message: str,
    *,
    error: Optional[BaseException] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    ctx = _ctx.get()

    error_info: Optional[ErrorInfo] = None
    if error is not None:
        error_info = ErrorInfo(
            type=type(error).__name__,
            message=str(error),
            traceback="".join(traceback.format_exception(type(error), error, error.__traceback__)),
        )

    record = LogRecord(
        timestamp=datetime.now(LOCAL_TZ),
        run_date=ctx.run_date if ctx else None,
        run_id=ctx.run_id if ctx else None,
        run_name=ctx.run_name if ctx else ADHOC_RUN_NAME,
        source=_detect_source(),
        log_level=level,
        message=message,
        error=error_info,
        extra=Extra(**_normalize_extra(extra or {})),
    )

    # Outside a run (library use) nothing is written to file
    if ctx is not None:
        _append_jsonl(ctx.log_file, record)
    _emit_stderr(record, debug=ctx.config.debug if ctx is not None else False)


def _normalize_extra(extra: Dict[str, Any]) -> Dict[str, Any]:
    return {k: str(v) if isinstance(v, Path) else v for k, v in extra.items()}


def _append_jsonl(path: Path, record: LogRecord) -> None:
    with path.open("a", encoding="utf-8") as f:
        f.write(record.model_dump_json())
        f.write("\n")


def _emit_stderr(record: LogRecord, debug: bool = False) -> None:
    if record.log_level == "DEBUG" and not debug:
        return
    if record.extra.lifecycle is not None:
        return

    ts = record.timestamp.isoformat(timespec="seconds")
    line = f"{ts} - {record.run_name} - {record.log_level} - {record.message or ''}"

    fields = record.extra.model_dump(exclude_none=True)
    if fields:
        line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
    if record.error is not None:
        line += f" error={record.error.type}: {record.error.message}"

    sys.stderr.write(line + "\n")
    sys.stderr.flush()


def _infer_run_name() -> str:
    if sys.argv and sys.argv[0]:
        name = Path(sys.argv[0]).stem
        if name:
            return name
    return ADHOC_RUN_NAME


def _detect_source() -> str:
    frame = inspect.currentframe()
    try:
        # skip _detect_source, _log and the public log_* helper
        caller = frame
        for _ in range(3):
            if caller is None:
                return "<unknown>"
            caller = caller.f_back
        if caller is None:
            return "<unknown>"

        module = inspect.getmodule(caller)
        if module and module.__name__:
            return module.__name__

        return "<unknown>"
    finally:
        del frame
