"""Script module lifecycle.

The script source is read and compiled into a brand new module object for
every call into the script. Nothing is registered in ``sys.modules`` so an
edited script is picked up by the next job and two calls never share module
globals. All entries into script code go through ``interpreter_session``,
which holds ``INTERPRETER_LOCK`` for the whole call and sends anything the
script prints to stderr, since stdout carries the worker protocol.
"""
import importlib.util
import sys
import threading
import traceback
from contextlib import contextmanager, redirect_stdout
from pathlib import Path
from types import ModuleType
from typing import Iterator, Optional

from .config import load_config
from .errors import MissingEntryPointError, ModuleCompilationError, ScriptSourceError
from .logger import get_logger

log = get_logger("worker.script")

MODULE_NAME = "worker"

INTERPRETER_LOCK = threading.Lock()


def read_python_file(filename: Optional[str] = None) -> str:
    if filename is None:
        filename = load_config().python_worker_filename
    try:
        return Path(filename).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ScriptSourceError(f"unable to open and read file: {filename} ({exc})") from exc


def load_module(source: str, filename: str = "worker.py", name: str = MODULE_NAME) -> ModuleType:
    spec = importlib.util.spec_from_loader(name, loader=None, origin=filename)
    module = importlib.util.module_from_spec(spec)
    module.__file__ = filename
    try:
        code = compile(source, filename, "exec")
        exec(code, module.__dict__)
    except (Exception, SystemExit) as exc:
        diagnostic = "".join(traceback.format_exception_only(type(exc), exc)).strip()
        raise ModuleCompilationError(f"unable to create the python module: {diagnostic}") from exc
    return module


@contextmanager
def interpreter_session(filename: Optional[str] = None) -> Iterator[ModuleType]:
    """Hold the interpreter lock and yield a freshly loaded script module."""
    if filename is None:
        filename = load_config().python_worker_filename
    with INTERPRETER_LOCK, redirect_stdout(sys.stderr):
        source = read_python_file(filename)
        module = load_module(source, filename=filename)
        log.debug(f"module loaded filename={filename}")
        yield module


def call_entry_point(module: ModuleType, name: str, *args):
    func = getattr(module, name, None)
    if not callable(func):
        raise MissingEntryPointError(f"unable to call {name} in your module")
    return func(*args)
