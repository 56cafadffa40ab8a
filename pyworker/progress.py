from .job import Job
from .logger import get_logger

log = get_logger("worker.progress")


class ProgressHandle:
    """Handed to the script's ``process`` to report completion percentage.

    Publishing is best effort: failures are logged and reported as ``False``,
    never raised into the script.
    """

    def __init__(self, channel, job: Job):
        self._channel = channel
        self._job = job

    def report_progress(self, percentage) -> bool:
        if isinstance(percentage, bool) or not isinstance(percentage, int) or not 0 <= percentage <= 100:
            log.warning(f"invalid progression {percentage!r} for job {self._job.job_id}")
            return False
        if self._channel is None:
            log.warning(f"no channel to publish progression of job {self._job.job_id}")
            return False
        try:
            self._channel.publish_job_progression(self._job, percentage)
        except Exception as exc:
            log.warning(f"unable to publish progression of job {self._job.job_id}: {exc}")
            return False
        return True

    publish_job_progression = report_progress

    def __repr__(self):
        return f"<ProgressHandle job_id={self._job.job_id}>"
