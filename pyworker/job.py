from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Type

from .errors import JobParseError


class ParameterType(str, Enum):
    ARRAY_OF_STRINGS = "array_of_strings"
    BOOLEAN = "boolean"
    CREDENTIAL = "credential"
    INTEGER = "integer"
    REQUIREMENTS = "requirements"
    STRING = "string"


class JobStatus(str, Enum):
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class Parameter:
    id: str
    default: Any = None
    value: Any = None

    kind = None  # type: ParameterType

    def chosen(self) -> Any:
        """Supplied value if any, otherwise the default (may be None)."""
        if self.value is not None:
            return self.value
        return self.default


@dataclass(frozen=True)
class ArrayOfStringsParam(Parameter):
    kind = ParameterType.ARRAY_OF_STRINGS


@dataclass(frozen=True)
class BooleanParam(Parameter):
    kind = ParameterType.BOOLEAN


@dataclass(frozen=True)
class CredentialParam(Parameter):
    kind = ParameterType.CREDENTIAL


@dataclass(frozen=True)
class IntegerParam(Parameter):
    kind = ParameterType.INTEGER


@dataclass(frozen=True)
class RequirementParam(Parameter):
    kind = ParameterType.REQUIREMENTS


@dataclass(frozen=True)
class StringParam(Parameter):
    kind = ParameterType.STRING


PARAMETER_CLASSES: Dict[ParameterType, Type[Parameter]] = {
    cls.kind: cls
    for cls in (
        ArrayOfStringsParam,
        BooleanParam,
        CredentialParam,
        IntegerParam,
        RequirementParam,
        StringParam,
    )
}


def parse_parameter(raw: Any) -> Parameter:
    if not isinstance(raw, dict):
        raise JobParseError(f"parameter must be an object, got {type(raw).__name__}")
    identifier = raw.get("id")
    if not isinstance(identifier, str) or not identifier:
        raise JobParseError(f"parameter without id: {raw!r}")
    try:
        kind = ParameterType(raw.get("type"))
    except ValueError:
        raise JobParseError(f"unknown type {raw.get('type')!r} for parameter {identifier}") from None
    return PARAMETER_CLASSES[kind](
        id=identifier,
        default=raw.get("default"),
        value=raw.get("value"),
    )


@dataclass(frozen=True)
class Job:
    job_id: int
    parameters: List[Parameter] = field(default_factory=list)

    @classmethod
    def from_message(cls, message: Any) -> "Job":
        if not isinstance(message, dict):
            raise JobParseError("job message must be an object")
        job_id = message.get("job_id")
        if not isinstance(job_id, int) or isinstance(job_id, bool):
            raise JobParseError(f"invalid job_id: {job_id!r}")
        raw_parameters = message.get("parameters", [])
        if not isinstance(raw_parameters, list):
            raise JobParseError(f"parameters of job {job_id} must be a list")
        return cls(job_id=job_id, parameters=[parse_parameter(p) for p in raw_parameters])


@dataclass(frozen=True)
class Credential:
    key: str


@dataclass
class ParameterSchemaEntry:
    label: str
    identifier: str
    kind: List[ParameterType]
    required: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "identifier": self.identifier,
            "kind": [k.value for k in self.kind],
            "required": self.required,
        }


@dataclass
class JobResult:
    job_id: int
    status: Optional[JobStatus] = None
    message: Optional[str] = None
    destination_paths: List[str] = field(default_factory=list)

    @classmethod
    def for_job(cls, job: Job) -> "JobResult":
        return cls(job_id=job.job_id)

    def with_status(self, status: JobStatus) -> "JobResult":
        self.status = status
        return self

    def with_message(self, message: str) -> "JobResult":
        self.message = message
        return self

    def with_destination_paths(self, paths: List[str]) -> "JobResult":
        self.destination_paths = list(paths)
        return self

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "job_id": self.job_id,
            "status": self.status.value if self.status else None,
        }
        if self.message:
            out["message"] = self.message
        if self.destination_paths:
            out["destination_paths"] = list(self.destination_paths)
        return out
