from typing import Any, Dict, List, Optional

import semver

from .invoker import Invoker
from .job import Job, JobResult, ParameterSchemaEntry
from .metadata import MetadataReader, ParameterSchemaReader


class PythonWorkerEvent:
    """Worker event backed by a python script module.

    Metadata and parameter schema are read from the module at discovery
    time; ``process`` runs one job through it.
    """

    def __init__(self, credential_store, filename: Optional[str] = None):
        self.metadata = MetadataReader(filename)
        self.schema = ParameterSchemaReader(filename)
        self.invoker = Invoker(credential_store, filename)

    def get_name(self) -> str:
        return self.metadata.get_name()

    def get_short_description(self) -> str:
        return self.metadata.get_short_description()

    def get_description(self) -> str:
        return self.metadata.get_description()

    def get_version(self) -> semver.Version:
        return self.metadata.get_version()

    def get_parameters(self) -> List[ParameterSchemaEntry]:
        return self.schema.get_parameters()

    def process(self, channel, job: Job, job_result: JobResult) -> JobResult:
        return self.invoker.process(channel, job, job_result)

    def describe(self) -> Dict[str, Any]:
        return {
            "name": self.get_name(),
            "short_description": self.get_short_description(),
            "description": self.get_description(),
            "version": str(self.get_version()),
            "parameters": [p.to_dict() for p in self.get_parameters()],
        }
