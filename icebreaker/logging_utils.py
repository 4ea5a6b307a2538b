import json
import time
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def append_ndjson(path: Path, record: dict[str, Any]) -> None:
    """Append one JSON object as a single line.

    Never raises: logging must not break the request path.
    """

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(record, ensure_ascii=True, separators=(",", ":"), default=str)
        with path.open("a", encoding="utf-8") as f:
            f.write(line)
            f.write("\n")
    except Exception:
        return


class RequestLog:
    """One NDJSON record per lead request, written once on success or failure."""

    def __init__(self, path: Path, event: str, **fields: Any) -> None:
        self.path = path
        self.request_id = uuid.uuid4().hex
        self.stage = "start"
        self._start = time.perf_counter()
        self.record: dict[str, Any] = {
            "ts": utc_now_iso(),
            "request_id": self.request_id,
            "event": event,
            **fields,
        }

    def __setitem__(self, key: str, value: Any) -> None:
        self.record[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self.record.get(key, default)

    def fail(self, exc: BaseException) -> None:
        self.record["error"] = {
            "stage": self.stage,
            "type": type(exc).__name__,
            "msg": str(exc),
        }
        self._write("error")

    def succeed(self) -> None:
        self._write("ok")

    def _write(self, status: str) -> None:
        self.record["status"] = status
        self.record["latency_ms"] = int((time.perf_counter() - self._start) * 1000)
        append_ndjson(self.path, self.record)
