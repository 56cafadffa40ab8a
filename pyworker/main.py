import json
import sys

from .channel import JsonLinesChannel
from .config import load_config
from .credentials import BackendClient, BackendCredentialStore
from .errors import JobParseError, StartupError
from .event import PythonWorkerEvent
from .job import Job, JobResult
from .logger import setup_logging, get_logger, sanitize


def run(event: PythonWorkerEvent, stdin, channel: JsonLinesChannel) -> int:
    log = get_logger("worker")
    try:
        description = event.describe()
    except StartupError as exc:
        log.error(f"worker not started: {exc}")
        return 1
    log.info(
        f"worker ready {sanitize({'name': description['name'], 'version': description['version'], 'parameters': len(description['parameters'])})}"
    )

    for line in stdin:
        line = line.strip()
        if not line:
            continue
        try:
            message = json.loads(line)
        except json.JSONDecodeError as exc:
            log.error(f"invalid json: {exc}")
            channel.publish_error(f"invalid json: {exc}")
            continue
        try:
            job = Job.from_message(message)
        except JobParseError as exc:
            job_id = message.get("job_id") if isinstance(message, dict) else None
            log.error(f"invalid job message {sanitize({'job_id': job_id, 'error': str(exc)})}")
            channel.publish_error(f"invalid job message: {exc}", job_id=job_id)
            continue

        job_result = event.process(channel, job, JobResult.for_job(job))
        channel.publish_job_result(job_result)

    log.info("stdin closed; worker stopped")
    return 0


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    setup_logging()
    config = load_config()
    log = get_logger("worker")
    log.debug(f"config {sanitize(config.__dict__)}")

    store = BackendCredentialStore(BackendClient.from_config(config))
    event = PythonWorkerEvent(store, config.python_worker_filename)

    if argv and argv[0] == "describe":
        try:
            description = event.describe()
        except StartupError as exc:
            log.error(f"unable to describe worker: {exc}")
            return 1
        print(json.dumps(description, ensure_ascii=False, indent=2), flush=True)
        return 0
    if argv:
        log.error(f"unknown command {argv[0]!r}")
        return 2

    return run(event, sys.stdin, JsonLinesChannel(sys.stdout))


if __name__ == "__main__":
    sys.exit(main())
