import asyncio
from typing import Optional, Protocol

import aiohttp

from .config import Config
from .errors import CredentialError
from .job import Credential, Job
from .logger import get_logger, sanitize

log = get_logger("worker.credentials")


class CredentialStore(Protocol):
    def request_value(self, credential: Credential, job: Job) -> str:
        ...


class BackendClient:
    def __init__(self, hostname: str, username: str, password: str, timeout_sec: int = 30):
        self.hostname = hostname.rstrip("/")
        self.username = username
        self.password = password
        self.timeout = aiohttp.ClientTimeout(total=timeout_sec)
        self._access_token: Optional[str] = None

    @classmethod
    def from_config(cls, config: Config) -> "BackendClient":
        return cls(
            config.backend_hostname,
            config.backend_username,
            config.backend_password,
            config.backend_timeout_sec,
        )

    async def _login(self, session: aiohttp.ClientSession) -> str:
        log.debug("session.start")
        data = {"session": {"email": self.username, "password": self.password}}
        async with session.post(f"{self.hostname}/sessions", json=data) as resp:
            if resp.status != 200:
                text = await resp.text()
                log.error(f"session.error status={resp.status} body={text[:280]}")
                raise CredentialError(f"backend login failed: {resp.status}")
            payload = await resp.json()
        token = payload.get("access_token")
        if not isinstance(token, str) or not token:
            raise CredentialError("backend login response without access_token")
        log.debug("session.ok")
        return token

    async def get_credential(self, key: str) -> str:
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            if self._access_token is None:
                self._access_token = await self._login(session)
            headers = {"Authorization": self._access_token}
            async with session.get(f"{self.hostname}/credentials/{key}", headers=headers) as resp:
                if resp.status == 401:
                    self._access_token = None
                if resp.status != 200:
                    log.error(f"credential.error {sanitize({'key': key, 'status': resp.status})}")
                    raise CredentialError(f"unable to retrieve credential {key}: {resp.status}")
                payload = await resp.json()
        value = (payload.get("data") or {}).get("value")
        if value is None:
            raise CredentialError(f"credential {key} has no value")
        return value


class BackendCredentialStore:
    """Synchronous adapter used while building job parameters."""

    def __init__(self, client: BackendClient):
        self.client = client

    def request_value(self, credential: Credential, job: Job) -> str:
        log.debug(f"credential.request {sanitize({'job_id': job.job_id, 'key': credential.key})}")
        return asyncio.run(self.client.get_credential(credential.key))
