"""Per-operation timing for service calls.

``--verbose`` turns timing on for the process. Each ``@traced`` service
method then records a root span named after the result's ``op``
(``search_images``, ``create_order``...) with one child span per
``trace_span`` step (``validate``, ``query``, ``existence_check``,
``insert``). The finished tree lands in ``ServiceResult.meta["timing"]``
and one ``service.timing`` debug event is logged per call.

With timing off, both helpers cost a single ContextVar lookup.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from satorder.services.result import ServiceResult

log = structlog.get_logger("satorder.telemetry")

_timing_on: ContextVar[bool] = ContextVar("satorder_timing_on", default=False)
_open_span: ContextVar[Span | None] = ContextVar("satorder_open_span", default=None)


@dataclass
class Span:
    """One timed step; ``steps`` are the nested ``trace_span`` blocks."""

    name: str
    steps: list[Span] = field(default_factory=list)
    notes: dict[str, Any] = field(default_factory=dict)
    started: float = field(default_factory=time.perf_counter)
    finished: float | None = None

    @property
    def elapsed_ms(self) -> float:
        if self.finished is None:
            return 0.0
        return round((self.finished - self.started) * 1000, 2)

    def close(self) -> None:
        if self.finished is None:
            self.finished = time.perf_counter()

    def annotate(self, key: str, value: Any) -> None:
        """Attach a count or flag (``total``, ``rows``...) to the step."""
        self.notes[key] = value

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "ms": self.elapsed_ms}
        if self.notes:
            out["notes"] = dict(self.notes)
        if self.steps:
            out["steps"] = [step.as_dict() for step in self.steps]
        return out


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time a step of the enclosing ``@traced`` call.

    Yields ``None`` when timing is off or no traced call is running, so
    callers guard ``annotate`` with ``if span is not None``.
    """
    parent = _open_span.get() if _timing_on.get() else None
    if parent is None:
        yield None
        return

    step = Span(name=name)
    parent.steps.append(step)
    token = _open_span.set(step)
    try:
        yield step
    finally:
        step.close()
        _open_span.reset(token)


_P = ParamSpec("_P")
_R = TypeVar("_R")


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Time a service method and attach the span tree to its result."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _timing_on.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        token = _open_span.set(root)
        try:
            result = func(*args, **kwargs)
        except Exception:
            root.close()
            log.debug("service.timing", op=root.name, ms=root.elapsed_ms, ok=False)
            raise
        finally:
            _open_span.reset(token)
        root.close()

        if not isinstance(result, ServiceResult):
            return result
        root.name = result.op
        log.debug(
            "service.timing",
            op=result.op,
            ms=root.elapsed_ms,
            ok=result.ok,
            steps={step.name: step.elapsed_ms for step in root.steps},
        )
        meta = {**(result.meta or {}), "timing": root.as_dict()}
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper


def enable_telemetry() -> None:
    _timing_on.set(True)


def disable_telemetry() -> None:
    _timing_on.set(False)
