"""结构化日志 — JSON line 格式，每个规划阶段一对 phase_start / phase_end"""

from __future__ import annotations

import json
import sys
import time
import uuid
from typing import Any, Optional


class StructuredLogger:
    """结构化日志器，输出 JSON line。"""

    def __init__(self, trace_id: Optional[str] = None, output=None):
        self.trace_id = trace_id or str(uuid.uuid4())[:8]
        self._output = output or sys.stderr
        self._timers: dict[str, float] = {}

    def _emit(self, data: dict[str, Any]) -> None:
        data["trace_id"] = self.trace_id
        data["timestamp"] = time.time()
        try:
            line = json.dumps(data, ensure_ascii=False, default=str)
            self._output.write(line + "\n")
            self._output.flush()
        except Exception as exc:
            # Last-resort fallback to avoid silent logger failures.
            try:
                fallback = {
                    "event": "logger_internal_error",
                    "trace_id": self.trace_id,
                    "timestamp": time.time(),
                    "error": str(exc),
                }
                sys.stderr.write(json.dumps(fallback, ensure_ascii=False, default=str) + "\n")
                sys.stderr.flush()
            except Exception:
                return

    def phase_start(self, phase: str, **extra: Any) -> None:
        self._timers[phase] = time.time()
        self._emit({"event": "phase_start", "phase": phase, **extra})

    def phase_end(self, phase: str, **extra: Any) -> None:
        start = self._timers.pop(phase, time.time())
        duration_ms = round((time.time() - start) * 1000, 1)
        self._emit({"event": "phase_end", "phase": phase, "duration_ms": duration_ms, **extra})

    def warning(self, phase: str, message: str, **extra: Any) -> None:
        self._emit({"event": "warning", "phase": phase, "message": message, **extra})

    def summary(self, **extra: Any) -> None:
        self._emit({"event": "summary", **extra})

