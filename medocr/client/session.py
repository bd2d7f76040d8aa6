# medocr/client/session.py
import threading
from pathlib import Path
from typing import Callable, Optional

from medocr.client.progress import ProgressChannel
from medocr.client.workflow import (
    INITIAL_STATE,
    Cleared,
    Event,
    FileSelected,
    ImageRef,
    OcrFailed,
    OcrProgress,
    OcrRequested,
    OcrSucceeded,
    StartOcr,
    StartSummarize,
    SummarizeFailed,
    SummarizeRequested,
    SummarizeSucceeded,
    WorkflowState,
    transition,
)
from medocr.core.logger import get_logger

log = get_logger("session")

Listener = Callable[[WorkflowState], None]


def image_from_path(path: str | Path) -> ImageRef:
    p = Path(path)
    return ImageRef(name=p.name, data=p.read_bytes(), path=str(p))


class ClientSession:
    """
    Drives one workflow: applies events through `transition` and runs the
    effect it asks for. Failures of OCR or the relay end up in
    `state.error`; nothing is raised to the caller.
    """

    def __init__(self, engine, relay, listener: Optional[Listener] = None):
        self.engine = engine
        self.relay = relay
        self.listener = listener
        self._lock = threading.Lock()
        self._state = INITIAL_STATE

    @property
    def state(self) -> WorkflowState:
        return self._state

    def dispatch(self, event: Event) -> WorkflowState:
        with self._lock:
            before = self._state
            self._state, effect = transition(before, event)
            state = self._state

        if state is not before and self.listener:
            self.listener(state)

        if isinstance(effect, StartOcr):
            self._run_ocr(effect.image, effect.run_id)
        elif isinstance(effect, StartSummarize):
            self._run_summarize(effect.text, effect.run_id)
        return self._state

    # ---- user actions ----

    def select_file(self, path: str | Path | None) -> WorkflowState:
        image = image_from_path(path) if path else None
        return self.dispatch(FileSelected(image))

    def select_image(self, image: ImageRef | None) -> WorkflowState:
        return self.dispatch(FileSelected(image))

    def clear(self) -> WorkflowState:
        return self.dispatch(Cleared())

    def run_ocr(self) -> WorkflowState:
        return self.dispatch(OcrRequested())

    def summarize(self) -> WorkflowState:
        return self.dispatch(SummarizeRequested())

    # ---- effects ----

    def _run_ocr(self, image: ImageRef, run_id: int) -> None:
        channel = ProgressChannel()
        outcome = {}

        def work():
            try:
                outcome["text"] = self.engine.recognize(image, channel)
            except Exception as e:
                outcome["error"] = e
            finally:
                channel.close()

        worker = threading.Thread(target=work, name="medocr-ocr", daemon=True)
        worker.start()
        for fraction in channel:
            self.dispatch(OcrProgress(fraction, run_id))
        worker.join()

        if "error" in outcome:
            log.warning(f"OCR failed for {image.name}: {outcome['error']}")
            self.dispatch(OcrFailed(str(outcome["error"]), run_id))
        else:
            self.dispatch(OcrSucceeded(outcome.get("text") or "", run_id))

    def _run_summarize(self, text: str, run_id: int) -> None:
        try:
            explanation = self.relay.summarize(text)
        except Exception as e:
            log.warning(f"Summarize failed: {e}")
            self.dispatch(SummarizeFailed(str(e), run_id))
            return
        self.dispatch(SummarizeSucceeded(explanation, run_id))
