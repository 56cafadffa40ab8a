from conftest import FakeChannel

from pyworker.job import Job
from pyworker.progress import ProgressHandle


def test_report_progress_publishes_on_channel(channel):
    handle = ProgressHandle(channel, Job(job_id=9))
    assert handle.report_progress(0) is True
    assert handle.report_progress(55) is True
    assert handle.publish_job_progression(100) is True
    assert channel.published == [(9, 0), (9, 55), (9, 100)]


def test_channel_failure_is_reported_as_false():
    handle = ProgressHandle(FakeChannel(fail=True), Job(job_id=9))
    assert handle.report_progress(10) is False


def test_missing_channel_is_reported_as_false():
    assert ProgressHandle(None, Job(job_id=9)).report_progress(10) is False


def test_out_of_range_progression_is_refused(channel):
    handle = ProgressHandle(channel, Job(job_id=9))
    assert handle.report_progress(101) is False
    assert handle.report_progress(-1) is False
    assert handle.report_progress(12.5) is False
    assert handle.report_progress(True) is False
    assert channel.published == []
