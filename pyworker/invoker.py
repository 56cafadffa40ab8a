import contextlib
import os
import traceback
from typing import Any, List, Optional

from .errors import MarshallingError, StartupError
from .job import Job, JobResult, JobStatus
from .logger import get_logger, sanitize, summarize
from .parameters import build_parameters
from .progress import ProgressHandle
from .script import call_entry_point, interpreter_session

log = get_logger("worker.invoker")

NO_STACKTRACE = "Unknown python error, no stacktrace"

HOST_FILES = (os.path.dirname(os.path.abspath(__file__)) + os.sep, contextlib.__file__)


def get_destination_paths(response: Any) -> Optional[List[str]]:
    if isinstance(response, (list, tuple)) and all(isinstance(p, str) for p in response):
        return list(response)
    return None


def _script_frames(tb) -> traceback.StackSummary:
    frames = traceback.extract_tb(tb)
    script = [f for f in frames if not os.path.abspath(f.filename).startswith(HOST_FILES)]
    return traceback.StackSummary.from_list(script or frames)


def format_failure(exc: BaseException) -> str:
    if exc.__traceback__ is not None:
        stacktrace = "".join(_script_frames(exc.__traceback__).format())
    else:
        stacktrace = NO_STACKTRACE
    return f"{exc!r}\n\nStacktrace:\n{stacktrace}"


class Invoker:
    def __init__(self, credential_store, filename: Optional[str] = None):
        self.credential_store = credential_store
        self.filename = filename

    def process(self, channel, job: Job, job_result: JobResult) -> JobResult:
        """Run the script's ``process`` for one job.

        Always returns ``job_result`` with a terminal status; errors raised while
        loading, marshalling or running the script end up in its message.
        """
        log.info(f"job.start {sanitize({'job_id': job.job_id, 'parameters': len(job.parameters)})}")
        try:
            with interpreter_session(self.filename) as module:
                parameters = build_parameters(job, self.credential_store)
                handle = ProgressHandle(channel, job)
                response = call_entry_point(module, "process", handle, parameters)
        except (StartupError, MarshallingError) as exc:
            log.error(f"job.error {sanitize({'job_id': job.job_id, 'error': repr(exc)})}")
            return job_result.with_status(JobStatus.ERROR).with_message(repr(exc))
        except (Exception, SystemExit) as exc:
            message = format_failure(exc)
            log.error(f"job.failed {sanitize({'job_id': job.job_id, 'error': repr(exc)})}")
            return job_result.with_status(JobStatus.ERROR).with_message(message)

        destination_paths = get_destination_paths(response)
        if destination_paths is not None:
            job_result.with_destination_paths(destination_paths)
        else:
            log.debug(f"job.response ignored {sanitize(summarize(response))}")
        log.info(f"job.completed {sanitize({'job_id': job.job_id, 'destination_paths': destination_paths})}")
        return job_result.with_status(JobStatus.COMPLETED)
