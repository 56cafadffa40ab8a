import json
import threading
from typing import Any, Dict, TextIO

from .job import Job, JobResult


class JsonLinesChannel:
    """Writes one JSON message per line to ``stream``."""

    def __init__(self, stream: TextIO):
        self.stream = stream
        self._lock = threading.Lock()

    def _write(self, message: Dict[str, Any]):
        line = json.dumps(message, ensure_ascii=False)
        with self._lock:
            self.stream.write(line + "\n")
            self.stream.flush()

    def publish_job_progression(self, job: Job, progression: int):
        self._write({"type": "job_progression", "job_id": job.job_id, "progression": progression})

    def publish_job_result(self, job_result: JobResult):
        self._write({"type": "job_result", **job_result.to_dict()})

    def publish_error(self, error: str, job_id=None):
        message: Dict[str, Any] = {"type": "job_result", "job_id": job_id, "status": "error", "message": error}
        self._write(message)
