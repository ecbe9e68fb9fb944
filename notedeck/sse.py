"""Server-sent events understood by the Datastar client."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Protocol

DEFAULT_SETTLE_DURATION = 300
DEFAULT_RETRY = 1000


class FragmentMergeMode(str, Enum):
    """How the client merges an HTML fragment into the page."""

    MORPH = "morph"
    INNER = "inner"
    OUTER = "outer"
    PREPEND = "prepend"
    APPEND = "append"
    BEFORE = "before"
    AFTER = "after"
    UPSERT_ATTRIBUTES = "upsertAttributes"


class SseEvent(Protocol):
    def to_sse(self) -> str: ...


def _frame(
    event_type: str,
    data_lines: Iterable[str],
    event_id: Optional[str],
    retry: int,
) -> str:
    lines = [f"event: {event_type}"]
    if event_id is not None:
        lines.append(f"id: {event_id}")
    if retry != DEFAULT_RETRY:
        lines.append(f"retry: {retry}")
    lines.extend(f"data: {line}" for line in data_lines)
    return "\n".join(lines) + "\n\n"


@dataclass(frozen=True)
class MergeFragments:
    """Merge one or more HTML fragments into the page."""

    fragments: str
    selector: Optional[str] = None
    merge_mode: FragmentMergeMode = FragmentMergeMode.MORPH
    settle_duration: int = DEFAULT_SETTLE_DURATION
    use_view_transition: bool = False
    event_id: Optional[str] = None
    retry: int = DEFAULT_RETRY

    def to_sse(self) -> str:
        data = []
        if self.selector is not None:
            data.append(f"selector {self.selector}")
        if self.merge_mode is not FragmentMergeMode.MORPH:
            data.append(f"mergeMode {self.merge_mode.value}")
        if self.settle_duration != DEFAULT_SETTLE_DURATION:
            data.append(f"settleDuration {self.settle_duration}")
        if self.use_view_transition:
            data.append("useViewTransition true")
        data.extend(f"fragments {line}" for line in self.fragments.splitlines())
        return _frame("datastar-merge-fragments", data, self.event_id, self.retry)


@dataclass(frozen=True)
class RemoveFragments:
    """Remove the elements matching a CSS selector."""

    selector: str
    settle_duration: int = DEFAULT_SETTLE_DURATION
    use_view_transition: bool = False
    event_id: Optional[str] = None
    retry: int = DEFAULT_RETRY

    def to_sse(self) -> str:
        data = [f"selector {self.selector}"]
        if self.settle_duration != DEFAULT_SETTLE_DURATION:
            data.append(f"settleDuration {self.settle_duration}")
        if self.use_view_transition:
            data.append("useViewTransition true")
        return _frame("datastar-remove-fragments", data, self.event_id, self.retry)


@dataclass(frozen=True)
class MergeSignals:
    """Merge client-side signals, given as a JavaScript object literal."""

    signals: str
    only_if_missing: bool = False
    event_id: Optional[str] = None
    retry: int = DEFAULT_RETRY

    def to_sse(self) -> str:
        data = []
        if self.only_if_missing:
            data.append("onlyIfMissing true")
        data.extend(f"signals {line}" for line in self.signals.splitlines())
        return _frame("datastar-merge-signals", data, self.event_id, self.retry)


def format_stream(events: Iterable[SseEvent]) -> str:
    """Serialise a sequence of events into one event-stream body."""
    return "".join(event.to_sse() for event in events)