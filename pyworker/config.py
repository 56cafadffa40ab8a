import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

DEFAULT_WORKER_FILENAME = "worker.py"
DEFAULT_BACKEND_HOSTNAME = "http://127.0.0.1:4000/api"


def _int(key: str, default: int) -> int:
    val = os.getenv(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


@dataclass
class Config:
    python_worker_filename: str

    backend_hostname: str
    backend_username: str
    backend_password: str
    backend_timeout_sec: int


def load_config() -> Config:
    return Config(
        python_worker_filename=os.getenv("PYTHON_WORKER_FILENAME", DEFAULT_WORKER_FILENAME),
        backend_hostname=os.getenv("BACKEND_HOSTNAME", DEFAULT_BACKEND_HOSTNAME).rstrip("/"),
        backend_username=os.getenv("BACKEND_USERNAME", ""),
        backend_password=os.getenv("BACKEND_PASSWORD", ""),
        backend_timeout_sec=_int("BACKEND_TIMEOUT_SEC", 30),
    )
