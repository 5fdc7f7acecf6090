"""In-memory store of open calculator instances with idle expiry."""

import asyncio
import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional

from engine import CalculationSession, create_instance

logger = logging.getLogger(__name__)


@dataclass
class ToolInstance:
    session: CalculationSession
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def tool_id(self) -> str:
        return self.session.tool.id


class InMemoryInstanceStore:
    """Open calculator instances, kept only for the life of the process."""

    def __init__(self, ttl_hours: int = 24):
        self._instances: dict[str, ToolInstance] = {}
        self._lock = asyncio.Lock()
        self._ttl = timedelta(hours=ttl_hours)

    async def create_instance(self, tool_id: str) -> ToolInstance:
        instance = ToolInstance(session=create_instance(tool_id))
        async with self._lock:
            self._instances[instance.id] = instance
        return instance

    async def get_instance(self, instance_id: str) -> Optional[ToolInstance]:
        async with self._lock:
            return self._instances.get(instance_id)

    async def touch(self, instance: ToolInstance) -> None:
        instance.updated_at = datetime.utcnow()

    async def delete_instance(self, instance_id: str) -> bool:
        async with self._lock:
            return self._instances.pop(instance_id, None) is not None

    async def cleanup_expired(self) -> int:
        now = datetime.utcnow()
        async with self._lock:
            expired = [iid for iid, inst in self._instances.items() if now - inst.updated_at > self._ttl]
            for iid in expired:
                del self._instances[iid]
        if expired:
            logger.info("Expired %d idle tool instances", len(expired))
        return len(expired)
