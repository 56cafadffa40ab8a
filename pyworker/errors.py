"""Exception hierarchy of the python worker.

``StartupError`` subclasses describe a broken script module or configuration
and stop the worker before it accepts jobs. The other errors are per job and
end up in a ``JobResult`` instead of escaping the worker.
"""


class WorkerError(Exception):
    """Base class for all worker errors."""


class StartupError(WorkerError):
    pass


class ScriptSourceError(StartupError):
    pass


class ModuleCompilationError(StartupError):
    pass


class MissingEntryPointError(StartupError):
    pass


class MetadataError(StartupError):
    pass


class VersionError(MetadataError):
    pass


class SchemaError(StartupError):
    pass


class JobParseError(WorkerError):
    pass


class MarshallingError(WorkerError):
    pass


class CredentialError(WorkerError):
    pass
