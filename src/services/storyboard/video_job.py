"""
Video generation job lifecycle.

    SUBMITTED --task_id--> POLLING --completed/success--> COMPLETED
        |                     |------failed-------------> FAILED
        |                     `------attempts exhausted-> TIMED_OUT
        `--direct url--> COMPLETED

Provider statuses are mapped onto transitions through `classify_status`;
anything unrecognised counts as still processing.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class VideoJobState(str, Enum):
    SUBMITTED = "submitted"
    POLLING = "polling"
    COMPLETED = "completed"
    FAILED = "failed"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES = frozenset(
    {VideoJobState.COMPLETED, VideoJobState.FAILED, VideoJobState.TIMED_OUT}
)

ALLOWED_TRANSITIONS: dict[VideoJobState, frozenset[VideoJobState]] = {
    VideoJobState.SUBMITTED: frozenset({VideoJobState.POLLING, VideoJobState.COMPLETED}),
    VideoJobState.POLLING: frozenset(
        {
            VideoJobState.POLLING,
            VideoJobState.COMPLETED,
            VideoJobState.FAILED,
            VideoJobState.TIMED_OUT,
        }
    ),
    VideoJobState.COMPLETED: frozenset(),
    VideoJobState.FAILED: frozenset(),
    VideoJobState.TIMED_OUT: frozenset(),
}

COMPLETED_STATUSES = frozenset({"completed", "success"})
FAILED_STATUSES = frozenset({"failed"})


def classify_status(provider_status: Optional[str]) -> VideoJobState:
    """Map a provider task status onto the job state it leads to."""
    normalized = (provider_status or "").strip().lower()
    if normalized in COMPLETED_STATUSES:
        return VideoJobState.COMPLETED
    if normalized in FAILED_STATUSES:
        return VideoJobState.FAILED
    return VideoJobState.POLLING


@dataclass
class VideoGenerationJob:
    """Tracks one video generation request from submission to a terminal state."""

    max_attempts: int
    task_id: Optional[str] = None
    state: VideoJobState = VideoJobState.SUBMITTED
    attempts: int = 0
    video_url: Optional[str] = None
    history: list[VideoJobState] = field(default_factory=list)

    def _transition(self, new_state: VideoJobState) -> None:
        if new_state not in ALLOWED_TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Illegal video job transition {self.state.value} -> {new_state.value}"
            )
        self.history.append(self.state)
        self.state = new_state

    def start_polling(self, task_id: str) -> None:
        self.task_id = task_id
        self._transition(VideoJobState.POLLING)

    def complete(self, video_url: str) -> None:
        self.video_url = video_url
        self._transition(VideoJobState.COMPLETED)

    @property
    def attempts_remaining(self) -> bool:
        return self.attempts < self.max_attempts

    def record_poll(self, provider_status: Optional[str], video_url: Optional[str] = None) -> VideoJobState:
        """Apply one poll result; times out once max_attempts polls have been made."""
        if self.state is not VideoJobState.POLLING:
            raise RuntimeError(f"Cannot poll a job in state {self.state.value}")

        self.attempts += 1
        outcome = classify_status(provider_status)

        if outcome is VideoJobState.COMPLETED and video_url:
            self.complete(video_url)
        elif outcome is VideoJobState.FAILED:
            self._transition(VideoJobState.FAILED)
        elif not self.attempts_remaining:
            self._transition(VideoJobState.TIMED_OUT)
        return self.state

    def record_poll_error(self) -> VideoJobState:
        """A transient poll failure spends an attempt but keeps the job polling."""
        return self.record_poll(None)
