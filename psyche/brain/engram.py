"""
PSYCHE/BRAIN/ENGRAM.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: ENGRAM (LA TRACE MNÉSIQUE) 📜
PURPOSE: Le souvenir (RuneMemory) et son support durable.
      EngramStore = contrat étroit du stockage long terme.
      SQLiteEngram = implémentation SQLite Async (aiosqlite).
══════════════════════════════════════════════════════════════════════════════
"""

import json
import uuid
from pathlib import Path
from datetime import datetime
from enum import Enum
from typing import List, Optional, Protocol

import aiosqlite
from loguru import logger
from pydantic import BaseModel, Field

from psyche.brain.emotions import EmotionValue, EmotionVector
from psyche.dna.genome import MIND_DB_FILE


class MemoryTier(str, Enum):
    STM = "STM"
    LTM = "LTM"


class RuneMemory(BaseModel):
    """Un épisode vécu, coloré par les émotions du moment."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    text: str
    emotions: List[EmotionValue] = Field(default_factory=list)
    weight: float = Field(default=0.5, ge=0.0, le=1.0)
    tier: MemoryTier = MemoryTier.STM
    created_at: datetime = Field(default_factory=datetime.now)
    last_access: datetime = Field(default_factory=datetime.now)
    recall_count: int = Field(default=0, ge=0)
    tags: List[str] = Field(default_factory=list)

    def emotion_vector(self) -> EmotionVector:
        return EmotionVector(self.emotions)


class EngramStore(Protocol):
    """Durable long-tier storage. Implementations raise on failure."""

    async def initialize(self) -> None: ...

    async def save(self, memory: RuneMemory) -> None: ...

    async def query_recent(self, limit: int) -> List[RuneMemory]: ...

    async def count(self, tier: MemoryTier = MemoryTier.LTM) -> int: ...

    async def delete_excess(self, tier: MemoryTier, keep: int) -> int: ...

    async def get_by_id(self, memory_id: str) -> Optional[RuneMemory]: ...

    async def close(self) -> None: ...


_COLUMNS = "id, text, emotions, weight, tier, created_at, last_access, recall_count, tags"


class SQLiteEngram:
    """
    Le Cortex de stockage (SQLite Async).
    Une connexion par opération, comme le reste du système.
    """

    def __init__(self, db_path: str = str(MIND_DB_FILE)):
        self.db_path = db_path

    async def initialize(self):
        """Prépare les synapses (Tables)."""
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        async with aiosqlite.connect(self.db_path) as db:
            await db.executescript("""
                CREATE TABLE IF NOT EXISTS memories (
                    id TEXT PRIMARY KEY,
                    text TEXT NOT NULL,
                    emotions TEXT NOT NULL,
                    weight REAL NOT NULL,
                    tier TEXT NOT NULL,
                    created_at REAL NOT NULL,
                    last_access REAL NOT NULL,
                    recall_count INTEGER NOT NULL DEFAULT 0,
                    tags TEXT NOT NULL
                );
                CREATE INDEX IF NOT EXISTS idx_memories_tier ON memories(tier);
                CREATE INDEX IF NOT EXISTS idx_memories_weight ON memories(weight);
                CREATE INDEX IF NOT EXISTS idx_memories_last_access ON memories(last_access);
            """)
            await db.commit()
        logger.info(f"📜 [ENGRAM] Store ready ({self.db_path})")

    async def save(self, memory: RuneMemory):
        """Insert or replace (same id = same memory)."""
        emotions_json = json.dumps(
            [{"code": e.code.value, "value": e.value} for e in memory.emotions],
            ensure_ascii=False,
        )
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                f"INSERT OR REPLACE INTO memories ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    memory.id,
                    memory.text,
                    emotions_json,
                    memory.weight,
                    memory.tier.value,
                    memory.created_at.timestamp(),
                    memory.last_access.timestamp(),
                    memory.recall_count,
                    json.dumps(memory.tags, ensure_ascii=False),
                ),
            )
            await db.commit()

    async def query_recent(self, limit: int) -> List[RuneMemory]:
        """Most recently accessed first."""
        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute(
                f"SELECT {_COLUMNS} FROM memories ORDER BY last_access DESC LIMIT ?",
                (limit,),
            ) as cursor:
                rows = await cursor.fetchall()
        return [self._to_memory(row) for row in rows]

    async def count(self, tier: MemoryTier = MemoryTier.LTM) -> int:
        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute(
                "SELECT COUNT(*) FROM memories WHERE tier = ?", (tier.value,)
            ) as cursor:
                row = await cursor.fetchone()
        return row[0] if row else 0

    async def delete_excess(self, tier: MemoryTier, keep: int) -> int:
        """Keeps `keep` rows of a tier. Lightest first, then least recently used."""
        total = await self.count(tier)
        excess = total - keep
        if excess <= 0:
            return 0

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                DELETE FROM memories WHERE id IN (
                    SELECT id FROM memories
                    WHERE tier = ?
                    ORDER BY weight ASC, last_access ASC
                    LIMIT ?
                )
                """,
                (tier.value, excess),
            )
            await db.commit()
        logger.info(f"📜 [ENGRAM] Pruned {excess} faded memories")
        return excess

    async def get_by_id(self, memory_id: str) -> Optional[RuneMemory]:
        async with aiosqlite.connect(self.db_path) as db:
            async with db.execute(
                f"SELECT {_COLUMNS} FROM memories WHERE id = ?", (memory_id,)
            ) as cursor:
                row = await cursor.fetchone()
        return self._to_memory(row) if row else None

    async def close(self):
        # Connections are per-operation, nothing is held open.
        logger.debug("📜 [ENGRAM] Store closed")

    @staticmethod
    def _to_memory(row) -> RuneMemory:
        return RuneMemory(
            id=row[0],
            text=row[1],
            emotions=[EmotionValue(**e) for e in json.loads(row[2])],
            weight=row[3],
            tier=MemoryTier(row[4]),
            created_at=datetime.fromtimestamp(row[5]),
            last_access=datetime.fromtimestamp(row[6]),
            recall_count=row[7],
            tags=json.loads(row[8]),
        )
