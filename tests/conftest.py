"""Shared fixtures: script modules written to tmp_path plus fake collaborators."""
import os
import sys
import textwrap

import pytest

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from pyworker.errors import CredentialError  # noqa: E402


METADATA = '''
def get_name():
    return "test worker"

def get_short_description():
    return "short"

def get_description():
    return "long description"

def get_version():
    return "1.2.3"

def get_parameters():
    return [
        {"label": "Input path", "identifier": "input_path", "kind": ["string"], "required": True},
        {"label": "Names", "identifier": "names", "kind": ["array_of_strings", "string"]},
    ]
'''


@pytest.fixture
def write_script(tmp_path):
    def _write(body: str, with_metadata: bool = True, name: str = "worker.py") -> str:
        path = tmp_path / name
        source = textwrap.dedent(body)
        if with_metadata:
            source = METADATA + "\n" + source
        path.write_text(source, encoding="utf-8")
        return str(path)

    return _write


class FakeChannel:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.published = []

    def publish_job_progression(self, job, progression):
        if self.fail:
            raise ConnectionError("channel closed")
        self.published.append((job.job_id, progression))


class FakeCredentialStore:
    def __init__(self, values=None):
        self.values = values or {}
        self.requests = []

    def request_value(self, credential, job):
        self.requests.append(credential.key)
        if credential.key not in self.values:
            raise CredentialError(f"unknown credential {credential.key}")
        return self.values[credential.key]


@pytest.fixture
def channel():
    return FakeChannel()


@pytest.fixture
def credential_store():
    return FakeCredentialStore({"AWS_KEY": "s3cr3t"})
