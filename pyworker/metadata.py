from typing import Any, List, Optional

import semver

from .errors import MetadataError, MissingEntryPointError, SchemaError, VersionError
from .job import ParameterSchemaEntry, ParameterType
from .logger import get_logger, sanitize
from .script import call_entry_point, interpreter_session

log = get_logger("worker.metadata")


def parse_version(text: str) -> semver.Version:
    """Parse a strict SemVer 2.0 string (``major.minor.patch[-pre][+build]``)."""
    try:
        return semver.Version.parse(text)
    except (TypeError, ValueError) as exc:
        raise VersionError(f"unable to parse version {text!r} (please use SemVer format)") from exc


class MetadataReader:
    def __init__(self, filename: Optional[str] = None):
        self.filename = filename

    def _get_string(self, method: str) -> str:
        with interpreter_session(self.filename) as module:
            try:
                response = call_entry_point(module, method)
            except MissingEntryPointError:
                raise
            except (Exception, SystemExit) as exc:
                raise MetadataError(f"unable to call {method} in your module: {exc!r}") from exc
        if not isinstance(response, str):
            raise MetadataError(
                f"unable to found a return value for {method} function "
                f"(expected str, got {type(response).__name__})"
            )
        return response

    def get_name(self) -> str:
        return self._get_string("get_name")

    def get_short_description(self) -> str:
        return self._get_string("get_short_description")

    def get_description(self) -> str:
        return self._get_string("get_description")

    def get_version(self) -> semver.Version:
        return parse_version(self._get_string("get_version"))


def _require(record: dict, field: str, index: int) -> Any:
    if field not in record:
        raise SchemaError(f"missing {field} in parameter #{index}")
    return record[field]


def parse_schema_entry(record: Any, index: int) -> ParameterSchemaEntry:
    if not isinstance(record, dict):
        raise SchemaError(f"parameter #{index} is not a python dict")

    label = _require(record, "label", index)
    identifier = _require(record, "identifier", index)
    for field, value in (("label", label), ("identifier", identifier)):
        if not isinstance(value, str):
            raise SchemaError(f"{field} of parameter #{index} must be a string")

    kind_list = _require(record, "kind", index)
    if not isinstance(kind_list, (list, tuple)):
        raise SchemaError(f"kind of parameter {identifier} must be a list")
    kinds: List[ParameterType] = []
    for kind in kind_list:
        if not isinstance(kind, str):
            raise SchemaError(f"kind of parameter {identifier} contains a non string value: {kind!r}")
        try:
            kinds.append(ParameterType(kind))
        except ValueError:
            raise SchemaError(f"unknown kind {kind!r} for parameter {identifier}") from None

    required = record.get("required", False)
    if not isinstance(required, bool):
        raise SchemaError(f"required of parameter {identifier} must be a boolean")

    return ParameterSchemaEntry(label=label, identifier=identifier, kind=kinds, required=required)


class ParameterSchemaReader:
    def __init__(self, filename: Optional[str] = None):
        self.filename = filename

    def get_parameters(self) -> List[ParameterSchemaEntry]:
        with interpreter_session(self.filename) as module:
            try:
                response = call_entry_point(module, "get_parameters")
            except MissingEntryPointError:
                raise
            except (Exception, SystemExit) as exc:
                raise SchemaError(f"unable to call get_parameters in your module: {exc!r}") from exc
            if not isinstance(response, (list, tuple)):
                raise SchemaError(
                    f"get_parameters must return a list, got {type(response).__name__}"
                )
            parameters = [parse_schema_entry(item, idx) for idx, item in enumerate(response)]
        log.debug(f"schema {sanitize([p.to_dict() for p in parameters])}")
        return parameters
