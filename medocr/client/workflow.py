"""
Client workflow as an explicit state machine.

Phases:
    IDLE -> IMAGE_SELECTED -> OCR_RUNNING -> TEXT_READY -> SUMMARIZING -> RESULT_READY

`transition(state, event)` is pure: it returns the next state and at most one
effect for the caller to run (start OCR, start summarize). Re-entry guards
live here: an OcrRequested while OCR_RUNNING, or a SummarizeRequested while
SUMMARIZING, returns the state untouched and no effect.

Every started operation and every reset bumps `run_id`. Effects carry the id
of the run they belong to, and result events must echo it back; events from
a superseded run are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple, Union

from medocr.ocr.text_cleaner import clean_or_placeholder

NO_RESPONSE_PLACEHOLDER = "(No response)"


class Phase(str, Enum):
    IDLE = "idle"
    IMAGE_SELECTED = "image_selected"
    OCR_RUNNING = "ocr_running"
    TEXT_READY = "text_ready"
    SUMMARIZING = "summarizing"
    RESULT_READY = "result_ready"


@dataclass(frozen=True)
class ImageRef:
    """A selected image: where it came from and, optionally, its bytes."""
    name: str
    data: Optional[bytes] = None
    path: Optional[str] = None


@dataclass(frozen=True)
class WorkflowState:
    phase: Phase = Phase.IDLE
    image: Optional[ImageRef] = None
    progress: int = 0
    ocr_text: str = ""
    explanation: str = ""
    error: str = ""
    run_id: int = 0


INITIAL_STATE = WorkflowState()


# ---- events ----

@dataclass(frozen=True)
class FileSelected:
    image: Optional[ImageRef]


@dataclass(frozen=True)
class Cleared:
    pass


@dataclass(frozen=True)
class OcrRequested:
    pass


@dataclass(frozen=True)
class OcrProgress:
    fraction: float
    run_id: int


@dataclass(frozen=True)
class OcrSucceeded:
    raw_text: str
    run_id: int


@dataclass(frozen=True)
class OcrFailed:
    message: str
    run_id: int


@dataclass(frozen=True)
class SummarizeRequested:
    pass


@dataclass(frozen=True)
class SummarizeSucceeded:
    text: str
    run_id: int


@dataclass(frozen=True)
class SummarizeFailed:
    message: str
    run_id: int


Event = Union[
    FileSelected, Cleared, OcrRequested, OcrProgress, OcrSucceeded, OcrFailed,
    SummarizeRequested, SummarizeSucceeded, SummarizeFailed,
]


# ---- effects ----

@dataclass(frozen=True)
class StartOcr:
    image: ImageRef
    run_id: int


@dataclass(frozen=True)
class StartSummarize:
    text: str
    run_id: int


Effect = Union[StartOcr, StartSummarize, None]


# ---- guards ----

def is_busy(state: WorkflowState) -> bool:
    return state.phase in (Phase.OCR_RUNNING, Phase.SUMMARIZING)


def can_run_ocr(state: WorkflowState) -> bool:
    return state.image is not None and not is_busy(state)


def can_summarize(state: WorkflowState) -> bool:
    return (
        bool(state.ocr_text.strip())
        and state.phase in (Phase.TEXT_READY, Phase.RESULT_READY)
    )


def status_label(state: WorkflowState) -> str:
    return "Working…" if is_busy(state) else "Ready"


def progress_percent(fraction: float) -> int:
    return max(0, min(100, round(fraction * 100)))


# ---- transition ----

def _current(state: WorkflowState, phase: Phase, run_id: int) -> bool:
    return state.phase is phase and state.run_id == run_id


def transition(state: WorkflowState, event: Event) -> Tuple[WorkflowState, Effect]:
    if isinstance(event, Cleared):
        return WorkflowState(run_id=state.run_id + 1), None

    if isinstance(event, FileSelected):
        if event.image is None:
            return WorkflowState(run_id=state.run_id + 1), None
        return WorkflowState(
            phase=Phase.IMAGE_SELECTED,
            image=event.image,
            run_id=state.run_id + 1,
        ), None

    if isinstance(event, OcrRequested):
        if not can_run_ocr(state):
            return state, None
        running = replace(
            state,
            phase=Phase.OCR_RUNNING,
            progress=0,
            ocr_text="",
            explanation="",
            error="",
            run_id=state.run_id + 1,
        )
        return running, StartOcr(state.image, running.run_id)

    if isinstance(event, OcrProgress):
        if not _current(state, Phase.OCR_RUNNING, event.run_id):
            return state, None
        return replace(state, progress=progress_percent(event.fraction)), None

    if isinstance(event, OcrSucceeded):
        if not _current(state, Phase.OCR_RUNNING, event.run_id):
            return state, None
        return replace(
            state,
            phase=Phase.TEXT_READY,
            ocr_text=clean_or_placeholder(event.raw_text),
        ), None

    if isinstance(event, OcrFailed):
        if not _current(state, Phase.OCR_RUNNING, event.run_id):
            return state, None
        return replace(
            state,
            phase=Phase.IMAGE_SELECTED,
            ocr_text="",
            error=event.message,
        ), None

    if isinstance(event, SummarizeRequested):
        if not can_summarize(state):
            return state, None
        summarizing = replace(
            state,
            phase=Phase.SUMMARIZING,
            explanation="",
            error="",
            run_id=state.run_id + 1,
        )
        return summarizing, StartSummarize(state.ocr_text, summarizing.run_id)

    if isinstance(event, SummarizeSucceeded):
        if not _current(state, Phase.SUMMARIZING, event.run_id):
            return state, None
        return replace(
            state,
            phase=Phase.RESULT_READY,
            explanation=event.text or NO_RESPONSE_PLACEHOLDER,
        ), None

    if isinstance(event, SummarizeFailed):
        if not _current(state, Phase.SUMMARIZING, event.run_id):
            return state, None
        return replace(
            state,
            phase=Phase.TEXT_READY,
            explanation="",
            error=event.message,
        ), None

    raise TypeError(f"Unknown workflow event: {event!r}")
