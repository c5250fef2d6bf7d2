"""Opt-in loguru output for treekit training runs.

treekit logs through loguru under the ``treekit`` name and stays silent until
``enable_logging()`` adds a handler. What comes out:

- ``TRAINING`` (25, between INFO and WARNING): one record when a run starts
  and one when its tree has been scored.
- ``DEBUG``: one record per node the builder splits or declines to split,
  carrying ``depth``, ``attribute``, ``threshold``, ``gain`` and ``samples``.
  These lines are indented by their depth so a DEBUG run reads like the tree.
- ``INFO`` / ``WARNING``: dataset and record loading, skipped rows, empty
  test splits.

Structured context is rendered as ``key=value`` pairs after the message.

Note:
    Importing this module removes loguru's default stderr handler (ID 0) so
    that enabled treekit records are not printed twice. Configure your own
    loguru handlers after importing treekit.
"""

from __future__ import annotations

import contextlib
import sys
import threading
import warnings
from collections.abc import Callable
from typing import TYPE_CHECKING, Final, Literal, TextIO

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

TRAINING_LEVEL: Final[str] = "TRAINING"
TRAINING_LEVEL_NUMBER: Final[int] = 25

# Module whose DEBUG records describe individual split decisions.
SPLIT_LOGGER_NAME: Final[str] = f"{PACKAGE_NAME}.id3.building"

type LogLevel = Literal["TRACE", "DEBUG", "INFO", "TRAINING", "WARNING", "ERROR", "CRITICAL"]

type LogFormat = Literal["short", "full"]

with contextlib.suppress(ValueError):
    logger.remove(0)


def _register_training_level() -> None:
    """Add the TRAINING level, warning when the name is already taken at another severity."""
    try:
        logger.level(TRAINING_LEVEL, no=TRAINING_LEVEL_NUMBER, color="<magenta><bold>")
    except ValueError:
        existing = logger.level(TRAINING_LEVEL)
        warnings.warn(
            f"{TRAINING_LEVEL} level already registered with numeric value {existing.no},"
            f" expected {TRAINING_LEVEL_NUMBER}",
            stacklevel=2,
        )


_register_training_level()

# ---------------------------------------------------------------------------
# Handles
# ---------------------------------------------------------------------------

_active_handler_ids: set[int] = set()
_handler_lock = threading.Lock()


class LoggingHandle:
    """One handler added by `enable_logging`.

    Disabling the last open handle turns treekit logging off again. Handles
    are context managers.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     train_and_evaluate(records)
    """

    def __init__(self, handler_id: int) -> None:
        self.handler_id: int | None = handler_id
        with _handler_lock:
            _active_handler_ids.add(handler_id)

    def disable(self) -> None:
        """Remove this handle's handler; safe to call more than once."""
        with _handler_lock:
            if self.handler_id is None:
                return
            _active_handler_ids.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not _active_handler_ids:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disable()


def active_handle_count() -> int:
    """Return how many handles from `enable_logging` are still open.

    Returns:
        int: Count of handles not yet disabled.
    """
    with _handler_lock:
        return len(_active_handler_ids)


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------


def enable_logging(
    *,
    level: LogLevel = TRAINING_LEVEL,
    log_format: LogFormat = "short",
    show_splits: bool = True,
    sink: TextIO | None = None,
) -> LoggingHandle:
    """Send treekit log records to a text stream.

    Args:
        level (LogLevel): Minimum level written. The default "TRAINING" shows
            run milestones and warnings; "DEBUG" adds one line per split.
        log_format (LogFormat): "short" writes time, level and message;
            "full" adds the date and the emitting ``module:function:line``.
        show_splits (bool): When False, the builder's per-node DEBUG records
            are dropped even at DEBUG level.
        sink (TextIO | None): Stream to write to; defaults to ``sys.stderr``
            at the time of the call.

    Returns:
        LoggingHandle: Handle that removes the handler again.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sys.stderr if sink is None else sink,
        level=level,
        filter=_make_filter(show_splits=show_splits),
        format=_make_formatter(log_format),
    )
    return LoggingHandle(handler_id)


# ---------------------------------------------------------------------------
# Private helpers -- Filtering and formatting
# ---------------------------------------------------------------------------

_PREFIXES: Final[dict[str, str]] = {
    "short": "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | ",
    "full": (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    ),
}


def _is_treekit_record(record: Record) -> bool:
    """Whether `record` was emitted from inside the treekit package."""
    name = record["name"] or ""
    return name == PACKAGE_NAME or name.startswith(f"{PACKAGE_NAME}.")


def _is_split_record(record: Record) -> bool:
    """Whether `record` is one of the builder's per-node split decisions."""
    return record["name"] == SPLIT_LOGGER_NAME and "depth" in record["extra"]


def _make_filter(*, show_splits: bool) -> Callable[[Record], bool]:
    def _filter(record: Record) -> bool:
        if not _is_treekit_record(record):
            return False
        return show_splits or not _is_split_record(record)

    return _filter


def _render_context(extra: dict[str, object]) -> str:
    """Render structured context as `key=value` pairs, skipping rendering keys."""
    pairs = " ".join(f"{key}={value}" for key, value in extra.items() if not key.startswith("_"))
    return f"  {pairs}" if pairs else ""


def _make_formatter(log_format: LogFormat) -> Callable[[Record], str]:
    prefix = _PREFIXES[log_format]

    def _format(record: Record) -> str:
        extra = record["extra"]
        depth = extra.get("depth", 0) if _is_split_record(record) else 0
        # Values are substituted through `extra` so braces in them are never parsed as fields.
        extra["_indent"] = "  " * depth
        extra["_context"] = _render_context(extra)
        return prefix + "{extra[_indent]}<level>{message}</level>{extra[_context]}\n{exception}"

    return _format
