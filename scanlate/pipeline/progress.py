"""Pipeline stages and progress reporting."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional


class Stage(str, enum.Enum):
    IDLE = "idle"
    PREPROCESSING = "preprocessing"
    SCRIPT_DETECTION = "script_detection"
    LOADING_MODELS = "loading_models"
    RECOGNIZING = "recognizing"
    DONE = "done"
    FAILED = "failed"


# Fraction reported when a stage is entered.
CHECKPOINTS: Dict[Stage, float] = {
    Stage.PREPROCESSING: 0.1,
    Stage.SCRIPT_DETECTION: 0.2,
    Stage.LOADING_MODELS: 0.3,
    Stage.RECOGNIZING: 0.5,
    Stage.DONE: 1.0,
}

STATUS_TEXT: Dict[Stage, str] = {
    Stage.PREPROCESSING: "Preprocessing image...",
    Stage.SCRIPT_DETECTION: "Detecting script...",
    Stage.LOADING_MODELS: "Loading language models...",
    Stage.RECOGNIZING: "Extracting text...",
    Stage.DONE: "Done",
}


@dataclass(frozen=True)
class ProgressEvent:
    stage: Stage
    progress: float
    status: str = ""


ProgressObserver = Callable[[ProgressEvent], None]


class ProgressReporter:
    """Forward events to an observer while keeping ``progress`` monotonic.

    Collaborator callbacks report their own 0..1 fraction; `sub_progress`
    maps it into the window between the current checkpoint and the next one.
    """

    def __init__(self, observer: Optional[ProgressObserver] = None) -> None:
        self._observer = observer
        self._last = 0.0
        self._stage = Stage.IDLE
        self.events: List[ProgressEvent] = []

    @property
    def last(self) -> float:
        return self._last

    def checkpoint(self, stage: Stage) -> ProgressEvent:
        self._stage = stage
        return self._emit(stage, CHECKPOINTS[stage], STATUS_TEXT[stage])

    def sub_progress(self, fraction: float, status: str | None = None) -> ProgressEvent:
        start = CHECKPOINTS.get(self._stage, self._last)
        end = _next_checkpoint(start)
        try:
            frac = min(1.0, max(0.0, float(fraction or 0.0)))
        except (TypeError, ValueError):
            frac = 0.0
        # Stay strictly below the next checkpoint so DONE is the only 1.0.
        value = start + (end - start) * frac * 0.99
        return self._emit(self._stage, value, status or STATUS_TEXT.get(self._stage, ""))

    def _emit(self, stage: Stage, value: float, status: str) -> ProgressEvent:
        self._last = max(self._last, min(1.0, value))
        event = ProgressEvent(stage=stage, progress=self._last, status=status)
        self.events.append(event)
        if self._observer is not None:
            self._observer(event)
        return event


def _next_checkpoint(value: float) -> float:
    later = [v for v in CHECKPOINTS.values() if v > value]
    return min(later) if later else 1.0


def print_progress_bar(event: ProgressEvent, width: int = 10) -> None:
    """Render a colored one-line progress bar (``width`` fixed segments)."""
    segments = max(1, int(width))
    filled = int(event.progress * segments)
    if event.progress >= 1.0:
        filled = segments
    pending = max(0, segments - filled)
    GREEN = "\x1b[32m"
    RED = "\x1b[31m"
    RESET = "\x1b[0m"
    bar = f"{GREEN}{'█'*filled}{RESET}{RED}{'█'*pending}{RESET} {event.progress:4.0%} {event.status}"
    end = "\n" if event.stage is Stage.DONE else ""
    print(f"\r{bar}\x1b[K", end=end, flush=True)
