# cafe_pos/domain/sync/service.py
from typing import Awaitable, Callable, Optional, TypeVar

import httpx
import structlog
from pydantic import ValidationError

from cafe_pos.core.exceptions import RemoteBackendError, RemoteInitError
from cafe_pos.domain.settings.schemas import AppSettings
from cafe_pos.remote.backend import RemoteClient, create_remote_client

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class SyncPolicy:
    """Chooses the backend for every catalog and ledger call.

    Reads go to the remote backend when cloud mode is active and fall back to
    the local store on any remote failure. Writes go to the remote backend
    first (outcome ignored) and then always to the local store, so local
    storage mirrors every intended change. Remote and local may diverge when a
    remote write fails; nothing reconciles them.

    The remote client handle belongs to the policy. It is rebuilt on every
    ``configure`` call and handed to each remote operation explicitly.
    """

    def __init__(
        self,
        remote_timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._settings = AppSettings()
        self._remote: Optional[RemoteClient] = None
        self._remote_timeout = remote_timeout
        self._transport = transport

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def cloud_active(self) -> bool:
        return self._settings.use_cloud and self._remote is not None

    async def configure(self, app_settings: AppSettings) -> bool:
        """Adopt new settings and rebuild the remote handle.

        Returns True when cloud mode is active afterwards. A failed
        initialization leaves the policy local-only until the next call.
        """
        await self.close()
        self._settings = app_settings

        if not app_settings.use_cloud:
            logger.info("sync_mode_local")
            return False

        try:
            self._remote = create_remote_client(
                app_settings, timeout=self._remote_timeout, transport=self._transport
            )
        except RemoteInitError as e:
            logger.warning("remote_init_failed", error=str(e))
            return False

        logger.info("sync_mode_cloud", endpoint=self._remote.endpoint)
        return True

    async def close(self) -> None:
        remote, self._remote = self._remote, None
        if remote is not None:
            await remote.aclose()

    async def read(
        self,
        entity: str,
        remote_read: Callable[[RemoteClient], Awaitable[T]],
        local_read: Callable[[], Awaitable[T]],
    ) -> T:
        if self.cloud_active:
            try:
                return await remote_read(self._remote)
            except (RemoteBackendError, ValidationError) as e:
                logger.warning("remote_read_failed", entity=entity, error=str(e))
        return await local_read()

    async def write(
        self,
        entity: str,
        operation: str,
        remote_write: Callable[[RemoteClient], Awaitable[None]],
        local_write: Callable[[], Awaitable[None]],
    ) -> None:
        if self.cloud_active:
            try:
                await remote_write(self._remote)
            except RemoteBackendError as e:
                logger.warning(
                    "remote_write_failed", entity=entity, operation=operation, error=str(e)
                )
        await local_write()
