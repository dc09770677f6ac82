"""
Site activity log.

Entries go to the log_entries table, where administrators can review them,
and are mirrored to the application logger.
"""

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.requests import Request

from kindred.core.logging_config import logger
from kindred.models.log import LogEntry, LogType


class LogService:

    def __init__(self, db: AsyncSession, request: Optional[Request] = None, user_id: Optional[str] = None):
        self.db = db
        self.request = request
        self.user_id = user_id

    @property
    def ip_address(self) -> str:
        if self.request is not None and self.request.client is not None:
            return self.request.client.host
        return ""

    async def add_log(self, message: str, log_type: LogType) -> LogEntry:
        entry = LogEntry(
            log_type=log_type,
            log_message=message,
            ip_address=self.ip_address,
            user_id=self.user_id,
        )
        self.db.add(entry)
        await self.db.flush()

        logger.info(
            f"[{log_type.value}] {message}",
            extra={"event_type": "site_log", "log_type": log_type.value, "client_ip": self.ip_address},
        )
        return entry

    async def add_authentication_log(self, message: str) -> LogEntry:
        return await self.add_log(message, LogType.AUTH)

    async def add_configuration_log(self, message: str) -> LogEntry:
        return await self.add_log(message, LogType.CONFIG)

    async def add_error_log(self, message: str) -> LogEntry:
        return await self.add_log(message, LogType.ERROR)
