import logging

import pytest

from pyworker.errors import MarshallingError
from pyworker.job import (
    ArrayOfStringsParam,
    BooleanParam,
    CredentialParam,
    IntegerParam,
    Job,
    RequirementParam,
    StringParam,
)
from pyworker.parameters import build_parameters


def test_every_kind_is_marshalled(credential_store):
    job = Job(
        job_id=1,
        parameters=[
            ArrayOfStringsParam(id="names", value=["a", "b"]),
            BooleanParam(id="overwrite", default=False),
            IntegerParam(id="period", value=14),
            StringParam(id="input_path", value="/tmp/a.mov"),
            CredentialParam(id="token", default="AWS_KEY"),
            RequirementParam(id="requirements", value={"paths": ["/tmp/a.mov"]}),
        ],
    )
    assert build_parameters(job, credential_store) == {
        "names": ["a", "b"],
        "overwrite": False,
        "period": 14,
        "input_path": "/tmp/a.mov",
        "token": "s3cr3t",
    }


def test_parameter_without_value_or_default_is_omitted(credential_store):
    job = Job(
        job_id=1,
        parameters=[
            StringParam(id="a"),
            IntegerParam(id="b"),
            BooleanParam(id="c"),
            ArrayOfStringsParam(id="d"),
        ],
    )
    assert build_parameters(job, credential_store) == {}


def test_value_takes_precedence_over_default(credential_store):
    job = Job(
        job_id=1,
        parameters=[
            StringParam(id="a", default="default", value="value"),
            BooleanParam(id="b", default=True, value=False),
            IntegerParam(id="c", default=1, value=0),
            CredentialParam(id="d", default="OTHER_KEY", value="AWS_KEY"),
        ],
    )
    assert build_parameters(job, credential_store) == {"a": "value", "b": False, "c": 0, "d": "s3cr3t"}
    assert credential_store.requests == ["AWS_KEY"]


def test_failed_credential_is_omitted(credential_store, caplog):
    job = Job(
        job_id=7,
        parameters=[
            CredentialParam(id="token", value="MISSING_KEY"),
            StringParam(id="input_path", value="/tmp/a.mov"),
        ],
    )
    with caplog.at_level(logging.WARNING):
        parameters = build_parameters(job, credential_store)
    assert parameters == {"input_path": "/tmp/a.mov"}
    assert "unable to retrieve the credential value" in caplog.text


def test_credential_without_key_is_omitted(credential_store, caplog):
    job = Job(job_id=7, parameters=[CredentialParam(id="token")])
    with caplog.at_level(logging.WARNING):
        assert build_parameters(job, credential_store) == {}
    assert credential_store.requests == []
    assert "no value or default for the credential value" in caplog.text


@pytest.mark.parametrize(
    "param",
    [
        IntegerParam(id="period", value="fourteen"),
        IntegerParam(id="period", value=True),
        BooleanParam(id="flag", value="yes"),
        StringParam(id="path", value=3),
        ArrayOfStringsParam(id="names", value=["a", 1]),
        ArrayOfStringsParam(id="names", value="a"),
    ],
)
def test_conversion_failure_raises(param, credential_store):
    with pytest.raises(MarshallingError):
        build_parameters(Job(job_id=1, parameters=[param]), credential_store)
