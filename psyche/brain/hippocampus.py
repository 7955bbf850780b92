"""
PSYCHE/BRAIN/HIPPOCAMPUS.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: HIPPOCAMPUS (LA MÉMOIRE ÉPISODIQUE) 💾
PURPOSE: Mémoire à deux étages.
      STM : tampon borné en RAM (FIFO).
      LTM : EngramStore durable, alimenté pendant le sommeil (consolidation).
      Rappel = reconsolidation (le présent recolore le passé) + tirage
      pondéré sans remise, biaisé par l'humeur.
══════════════════════════════════════════════════════════════════════════════
"""

import asyncio
import heapq
import random
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Deque, Iterable, List, Optional
from loguru import logger

from psyche.brain.emotions import (
    EmotionValue,
    EmotionVector,
    NEGATIVE_EMOTIONS,
    POSITIVE_EMOTIONS,
)
from psyche.brain.engram import EngramStore, MemoryTier, RuneMemory
from psyche.dna.conscience import clamp_intensity

RECONSOLIDATION_BLEND = 0.1
RECALL_WEIGHT_BONUS = 0.05
MOOD_CONGRUENCE_BONUS = 0.02
DIVERSITY_BONUS = 0.05
LONG_TEXT = 100
SHORT_TEXT = 20


class MoodTendency(str, Enum):
    NEGATIVE = "negative"
    POSITIVE = "positive"
    NEUTRAL = "neutral"


_MOOD_CONGRUENT = {
    MoodTendency.NEGATIVE: NEGATIVE_EMOTIONS,
    MoodTendency.POSITIVE: POSITIVE_EMOTIONS,
    MoodTendency.NEUTRAL: frozenset(),
}


@dataclass(frozen=True)
class ConsolidationReport:
    consolidated: int
    forgotten: int


def _by_last_access(memory: RuneMemory) -> datetime:
    return memory.last_access


def merge_recent(
    *sources: Iterable[RuneMemory],
    limit: int,
    key: Callable[[RuneMemory], datetime] = _by_last_access,
) -> List[RuneMemory]:
    """
    Merges already-sorted (newest first) memory streams into one view.
    A memory present in several streams is kept once.
    """
    seen = set()
    merged = []
    for memory in heapq.merge(*sources, key=key, reverse=True):
        if memory.id in seen:
            continue
        seen.add(memory.id)
        merged.append(memory)
        if len(merged) >= limit:
            break
    return merged


def memory_weight(emotions: EmotionVector) -> float:
    """Intense and varied feelings make memorable episodes."""
    if not emotions:
        return 0.5
    weight = emotions.average() / 100.0 + DIVERSITY_BONUS * len(emotions)
    return min(1.0, weight)


def memory_tags(text: str, emotions: EmotionVector) -> List[str]:
    tags = [code.value for code in emotions.codes()]
    if len(text) > LONG_TEXT:
        tags.append("long")
    elif len(text) < SHORT_TEXT:
        tags.append("short")
    return tags


class Hippocampus:
    """
    L'Hippocampe.
    Sans EngramStore, il fonctionne en STM seule (la LTM compte toujours 0).
    """

    def __init__(
        self,
        store: Optional[EngramStore] = None,
        stm_max_size: int = 100,
        ltm_max_size: int = 1000,
        consolidation_threshold: float = 0.6,
        recall_pool_size: int = 10,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._lock = asyncio.Lock()
        self.store = store
        self.stm: Deque[RuneMemory] = deque(maxlen=stm_max_size)
        self.ltm_max_size = ltm_max_size
        self.consolidation_threshold = consolidation_threshold
        self.recall_pool_size = recall_pool_size
        self.rng = rng or random.Random()
        self.clock = clock

    # ════════════════════════════════════════════════════════════════════════
    # ENCODING
    # ════════════════════════════════════════════════════════════════════════

    async def add_memory(self, text: str, emotions: EmotionVector) -> RuneMemory:
        now = self.clock()
        memory = RuneMemory(
            text=text,
            emotions=emotions.to_values(),
            weight=memory_weight(emotions),
            tier=MemoryTier.STM,
            created_at=now,
            last_access=now,
            tags=memory_tags(text, emotions),
        )
        async with self._lock:
            # deque(maxlen) drops the oldest episode
            self.stm.append(memory)
        return memory

    async def consolidate(self) -> ConsolidationReport:
        """Sleep: heavy STM episodes move to the LTM, the rest is forgotten."""
        async with self._lock:
            pending = list(self.stm)
            self.stm.clear()

            if self.store is None:
                logger.info(f"💾 [HIPPO] No long-term store, {len(pending)} memories forgotten")
                return ConsolidationReport(consolidated=0, forgotten=len(pending))

            consolidated = 0
            for memory in pending:
                if memory.weight < self.consolidation_threshold:
                    continue
                engram = memory.model_copy(
                    update={"tier": MemoryTier.LTM, "last_access": self.clock()}
                )
                try:
                    await self.store.save(engram)
                    consolidated += 1
                except Exception as e:
                    logger.error(f"💾 [HIPPO] Consolidation failed for {memory.id}: {e}")

            try:
                await self.store.delete_excess(MemoryTier.LTM, self.ltm_max_size)
            except Exception as e:
                logger.warning(f"💾 [HIPPO] LTM pruning failed: {e}")

        report = ConsolidationReport(
            consolidated=consolidated, forgotten=len(pending) - consolidated
        )
        logger.info(
            f"💾 [HIPPO] Consolidated {report.consolidated}, forgot {report.forgotten}"
        )
        return report

    # ════════════════════════════════════════════════════════════════════════
    # RETRIEVAL
    # ════════════════════════════════════════════════════════════════════════

    async def recent_context(self, limit: int = 10) -> List[RuneMemory]:
        """STM and LTM as one list, most recently accessed first."""
        async with self._lock:
            view = await self._merged_view(limit)
        return [memory.model_copy(deep=True) for memory in view]

    async def reconsolidate(self, memory: RuneMemory, current: EmotionVector) -> RuneMemory:
        async with self._lock:
            return await self._reconsolidate(memory, current)

    async def recall(
        self, count: int, mood: MoodTendency, current: EmotionVector
    ) -> List[RuneMemory]:
        """
        Involuntary recall.
        Every fetched memory is reconsolidated, then `count` of them are
        drawn without replacement, mood-congruent ones being favoured.
        """
        if count <= 0:
            return []

        async with self._lock:
            pool = await self._merged_view(self.recall_pool_size)
            for memory in pool:
                await self._reconsolidate(memory, current)
            pool = [memory.model_copy(deep=True) for memory in pool]

        congruent = _MOOD_CONGRUENT[mood]
        weights = [
            memory.weight
            + MOOD_CONGRUENCE_BONUS
            * sum(e.value for e in memory.emotions if e.code in congruent)
            for memory in pool
        ]
        return self._sample(pool, weights, count)

    async def get_memory(self, memory_id: str) -> Optional[RuneMemory]:
        async with self._lock:
            for memory in self.stm:
                if memory.id == memory_id:
                    return memory.model_copy(deep=True)

        if self.store is None:
            return None
        try:
            return await self.store.get_by_id(memory_id)
        except Exception as e:
            logger.warning(f"💾 [HIPPO] Lookup failed for {memory_id}: {e}")
            return None

    def stm_count(self) -> int:
        return len(self.stm)

    async def ltm_count(self) -> int:
        if self.store is None:
            return 0
        try:
            return await self.store.count(MemoryTier.LTM)
        except Exception as e:
            logger.error(f"💾 [HIPPO] LTM count failed: {e}")
            return 0

    # ════════════════════════════════════════════════════════════════════════
    # INTERNALS (lock held)
    # ════════════════════════════════════════════════════════════════════════

    async def _merged_view(self, limit: int) -> List[RuneMemory]:
        stm = sorted(self.stm, key=_by_last_access, reverse=True)
        ltm: List[RuneMemory] = []
        if self.store is not None:
            try:
                ltm = await self.store.query_recent(limit)
            except Exception as e:
                logger.error(f"💾 [HIPPO] Failed to fetch LTM: {e}")
        return merge_recent(stm, ltm, limit=limit)

    async def _reconsolidate(self, memory: RuneMemory, current: EmotionVector) -> RuneMemory:
        """Recalling rewrites: 90% original, 10% present feeling per shared code."""
        memory.emotions = [
            EmotionValue(
                code=e.code,
                value=clamp_intensity(
                    e.value * (1.0 - RECONSOLIDATION_BLEND)
                    + current.get(e.code) * RECONSOLIDATION_BLEND
                ),
            )
            if e.code in current
            else e
            for e in memory.emotions
        ]
        memory.recall_count += 1
        memory.last_access = self.clock()
        memory.weight = min(1.0, memory.weight + RECALL_WEIGHT_BONUS * memory.recall_count)

        if memory.tier == MemoryTier.LTM and self.store is not None:
            try:
                await self.store.save(memory)
            except Exception as e:
                logger.warning(f"💾 [HIPPO] Reconsolidation not persisted for {memory.id}: {e}")
        return memory

    def _sample(
        self, pool: List[RuneMemory], weights: List[float], count: int
    ) -> List[RuneMemory]:
        """Roulette wheel without replacement (uniform when every weight is 0)."""
        candidates = list(pool)
        weights = list(weights)
        chosen: List[RuneMemory] = []

        while candidates and len(chosen) < count:
            total = sum(weights)
            if total <= 0:
                index = self.rng.randrange(len(candidates))
            else:
                draw = self.rng.random() * total
                cumulative = 0.0
                index = len(candidates) - 1
                for i, weight in enumerate(weights):
                    cumulative += weight
                    if draw < cumulative:
                        index = i
                        break
            chosen.append(candidates.pop(index))
            weights.pop(index)

        return chosen
