from typing import Any, Dict, List

from .errors import MarshallingError
from .job import (
    ArrayOfStringsParam,
    BooleanParam,
    Credential,
    CredentialParam,
    IntegerParam,
    Job,
    Parameter,
    RequirementParam,
    StringParam,
)
from .logger import get_logger, sanitize

log = get_logger("worker.parameters")


def _strings(param: Parameter, value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise MarshallingError(f"{param.id}: expected a list of strings, got {value!r}")
    return list(value)


def _boolean(param: Parameter, value: Any) -> bool:
    if not isinstance(value, bool):
        raise MarshallingError(f"{param.id}: expected a boolean, got {value!r}")
    return value


def _integer(param: Parameter, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise MarshallingError(f"{param.id}: expected an integer, got {value!r}")
    return value


def _string(param: Parameter, value: Any) -> str:
    if not isinstance(value, str):
        raise MarshallingError(f"{param.id}: expected a string, got {value!r}")
    return value


def _credential(param: CredentialParam, job: Job, credential_store) -> Any:
    key = param.chosen()
    if key is None:
        log.warning(f"no value or default for the credential value {sanitize({'parameter': param.id})}")
        return None
    if not isinstance(key, str):
        raise MarshallingError(f"{param.id}: expected a credential key string, got {key!r}")
    try:
        value = credential_store.request_value(Credential(key=key), job)
    except Exception as exc:
        log.warning(
            f"unable to retrieve the credential value "
            f"{sanitize({'job_id': job.job_id, 'parameter': param.id, 'error': str(exc)})}"
        )
        return None
    return _string(param, value)


def build_parameters(job: Job, credential_store) -> Dict[str, Any]:
    """Convert the job parameters into the dict handed to ``process``.

    Value wins over default, parameters with neither are left out and
    requirement parameters are never passed. A credential that cannot be
    resolved is logged and left out.
    """
    parameters: Dict[str, Any] = {}
    for param in job.parameters:
        if isinstance(param, RequirementParam):
            continue
        if isinstance(param, CredentialParam):
            resolved = _credential(param, job, credential_store)
            if resolved is not None:
                parameters[param.id] = resolved
            continue

        value = param.chosen()
        if value is None:
            continue
        if isinstance(param, ArrayOfStringsParam):
            parameters[param.id] = _strings(param, value)
        elif isinstance(param, BooleanParam):
            parameters[param.id] = _boolean(param, value)
        elif isinstance(param, IntegerParam):
            parameters[param.id] = _integer(param, value)
        elif isinstance(param, StringParam):
            parameters[param.id] = _string(param, value)
        else:
            raise MarshallingError(f"{param.id}: unsupported parameter kind {type(param).__name__}")

    log.debug(f"parameters built {sanitize({'job_id': job.job_id, 'keys': list(parameters.keys())})}")
    return parameters
