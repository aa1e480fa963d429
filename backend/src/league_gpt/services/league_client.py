"""Local League client (LCU) API access.

The client exposes a REST API on localhost; its port and password are read
from the ``lockfile`` the client writes while running.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

from league_gpt.models.ready_check import ReadyCheckState

logger = logging.getLogger(__name__)

CHAMP_SELECT_SESSION = "/lol-champ-select/v1/session"
CURRENT_SUMMONER = "/lol-summoner/v1/current-summoner"
READY_CHECK = "/lol-matchmaking/v1/ready-check"
READY_CHECK_ACCEPT = "/lol-matchmaking/v1/ready-check/accept"


class LeagueClientError(Exception):
    """The League client could not be reached or answered with an error."""


@dataclass(frozen=True)
class LockfileCredentials:
    """Connection details read from the client lockfile."""

    port: int
    password: str
    protocol: str = "https"
    username: str = "riot"

    @classmethod
    def parse(cls, content: str) -> "LockfileCredentials":
        """Parse ``name:pid:port:password:protocol``."""
        parts = content.strip().split(":")
        if len(parts) < 4:
            raise LeagueClientError(f"Malformed lockfile: expected at least 4 fields, got {len(parts)}")
        try:
            port = int(parts[2])
        except ValueError as e:
            raise LeagueClientError(f"Malformed lockfile port: {parts[2]!r}") from e
        protocol = parts[4] if len(parts) > 4 and parts[4] else "https"
        return cls(port=port, password=parts[3], protocol=protocol)

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://127.0.0.1:{self.port}"


def default_lockfile_paths() -> list[Path]:
    """Standard lockfile locations of a Windows install."""
    return [
        Path("C:/Riot Games/League of Legends/lockfile"),
        Path(os.environ.get("ProgramData", "C:/ProgramData")) / "Riot Games" / "League of Legends" / "lockfile",
        Path(os.environ.get("LOCALAPPDATA", "")) / "Riot Games" / "League of Legends" / "lockfile",
    ]


def find_lockfile(explicit_path: Optional[str] = None) -> Path:
    """Locate the lockfile.

    Raises:
        LeagueClientError: if no lockfile exists
    """
    candidates = [Path(explicit_path)] if explicit_path else default_lockfile_paths()
    for path in candidates:
        if path.is_file():
            return path
    raise LeagueClientError(
        "League Client lockfile not found. Make sure League of Legends client is running."
    )


class LeagueClient:
    """Async client for the local League client API."""

    def __init__(
        self,
        lockfile_path: Optional[str] = None,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the client.

        Args:
            lockfile_path: Explicit lockfile path; default locations are probed if empty
            timeout: Request timeout in seconds
            transport: Optional httpx transport override
        """
        self.lockfile_path = lockfile_path
        self.timeout = timeout
        self._transport = transport
        self.credentials: Optional[LockfileCredentials] = None
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None and not self._client.is_closed

    async def connect(self) -> bool:
        """Read the lockfile and open the HTTP client.

        Returns:
            True if connected, False if the lockfile was missing or unreadable
        """
        try:
            path = find_lockfile(self.lockfile_path)
            self.credentials = LockfileCredentials.parse(path.read_text(encoding="utf-8"))
        except (LeagueClientError, OSError) as e:
            logger.error(f"Failed to connect to League Client: {e}")
            return False

        await self.close()
        # The client serves a self-signed certificate
        self._client = httpx.AsyncClient(
            base_url=self.credentials.base_url,
            auth=(self.credentials.username, self.credentials.password),
            headers={"Content-Type": "application/json"},
            verify=False,
            timeout=self.timeout,
            transport=self._transport,
        )
        logger.info(f"Connected to League Client on port {self.credentials.port}")
        return True

    async def close(self):
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()

    async def _request(self, method: str, endpoint: str) -> httpx.Response:
        if not self.is_connected:
            raise LeagueClientError("Not connected to League Client. Call connect() first.")
        try:
            return await self._client.request(method, endpoint)
        except httpx.HTTPError as e:
            raise LeagueClientError(f"League Client request failed: {e}") from e

    async def _get_json(self, endpoint: str, missing_ok: bool = False):
        response = await self._request("GET", endpoint)
        if missing_ok and response.status_code == 404:
            return None
        if response.is_error:
            raise LeagueClientError(
                f"League Client API error: {response.status_code} - {response.text}"
            )
        try:
            return response.json()
        except ValueError as e:
            raise LeagueClientError(f"Invalid JSON from {endpoint}") from e

    async def get_current_summoner(self) -> dict:
        """Get the logged-in summoner."""
        return await self._get_json(CURRENT_SUMMONER)

    async def get_champ_select_session(self) -> Optional[dict]:
        """Get the champion select session, or None outside champion select."""
        return await self._get_json(CHAMP_SELECT_SESSION, missing_ok=True)

    async def get_ready_check(self) -> Optional[ReadyCheckState]:
        """Get the matchmaking ready check, or None if there is none."""
        raw = await self._get_json(READY_CHECK, missing_ok=True)
        return ReadyCheckState.from_raw(raw)

    async def accept_ready_check(self) -> bool:
        """Accept the current ready check.

        Returns:
            True if the client accepted the request
        """
        try:
            response = await self._request("POST", READY_CHECK_ACCEPT)
        except LeagueClientError as e:
            logger.warning(f"Ready check accept failed: {e}")
            return False
        if response.is_error:
            logger.warning(f"Ready check accept rejected: {response.status_code} - {response.text}")
            return False
        return True
