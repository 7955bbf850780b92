"""
PSYCHE/BRAIN/MIND.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: MIND (L'ORCHESTRATEUR) 🧠
PURPOSE: Assemble les modules et déroule le pipeline cognitivo-affectif :
      Thalamus -> (Amygdale + Miroir | signal physique) -> Hormones + Dopamine
      -> Préfrontal -> Hippocampe -> Wernicke -> Instantané -> Broca.
CONCURRENCE: Un verrou lecteurs/rédacteur (CortexLock) par cerveau.
      Toute opération qui modifie l'état est exclusive.
      Les lectures d'état sont partagées.
══════════════════════════════════════════════════════════════════════════════
"""

import asyncio
import random
from contextlib import asynccontextmanager
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from psyche.brain.amygdala import Amygdala
from psyche.brain.broca import BrocaArea
from psyche.brain.circadian import BiologicalClock
from psyche.brain.dreaming import Dreamer
from psyche.brain.emotions import (
    AFFILIATIVE_EMOTIONS,
    EmotionCode,
    EmotionValue,
    EmotionVector,
    NEGATIVE_EMOTIONS,
    NOCTURNAL_EMOTIONS,
)
from psyche.brain.engram import EngramStore, RuneMemory, SQLiteEngram
from psyche.brain.hippocampus import Hippocampus
from psyche.brain.hormones import HormonalSystem
from psyche.brain.mirror import MirrorSystem
from psyche.brain.prefrontal import PrefrontalCortex
from psyche.brain.thalamus import Thalamus
from psyche.brain.wernicke import WernickeArea
from psyche.dna.conscience import (
    NEUTRAL_BIAS_INTENSITY,
    NEUTRAL_FALLBACK_INTENSITY,
    PERSONALITY_THRESHOLD,
)
from psyche.dna.genome import MindConfig, genome
from psyche.dopamine.ganglia import BasalGanglia, level_label
from psyche.soma.nerves import logger, mask_text
from psyche.soma.senses import Tokenizer

MAX_INPUT_LENGTH = 500
HORMONE_INPUT_RATE = 0.5


# ════════════════════════════════════════════════════════════════════════════
# MODELS
# ════════════════════════════════════════════════════════════════════════════


class SensoryInput(BaseModel):
    """Validated before anything in the brain moves."""

    kind: Literal["chat", "physical"] = "chat"
    text: str = Field(max_length=MAX_INPUT_LENGTH)
    signal_value: int = Field(default=0, ge=-100, le=100)

    @field_validator("text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("text is required")
        return value


class MindState(BaseModel):
    current_reaction: List[EmotionValue]
    mood_stability: float
    personality_bias: List[EmotionValue]
    motivation: float  # 0.0-1.0, capped by melatonin
    sanity: float  # 0.0-1.0
    cortisol: float
    oxytocin: float
    melatonin: float
    serotonin: float
    predicted_reward: float
    reply_text: Optional[str] = None
    daydream_log: Optional[str] = None


class BrainState(BaseModel):
    motivation: int
    motivation_level: str
    sanity: int
    sanity_level: str
    stm_count: int
    ltm_count: int


class SleepReport(BaseModel):
    consolidated_count: int
    forgotten_count: int
    stm_count: int
    ltm_count: int


# ════════════════════════════════════════════════════════════════════════════
# LOCK
# ════════════════════════════════════════════════════════════════════════════


class CortexLock:
    """
    Async readers/writer lock.
    Writers are preferred: once one is waiting, new readers queue behind it.
    """

    def __init__(self):
        self._condition = asyncio.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @asynccontextmanager
    async def read(self):
        async with self._condition:
            await self._condition.wait_for(
                lambda: not self._writer and self._writers_waiting == 0
            )
            self._readers += 1
        try:
            yield
        finally:
            async with self._condition:
                self._readers -= 1
                if self._readers == 0:
                    self._condition.notify_all()

    @asynccontextmanager
    async def write(self):
        async with self._condition:
            self._writers_waiting += 1
            try:
                await self._condition.wait_for(
                    lambda: not self._writer and self._readers == 0
                )
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            async with self._condition:
                self._writer = False
                self._condition.notify_all()


# ════════════════════════════════════════════════════════════════════════════
# SNAPSHOT HELPERS
# ════════════════════════════════════════════════════════════════════════════


def personality_bias(memories: List[RuneMemory]) -> EmotionVector:
    """Per-code integer average over recent episodes, strong traits only."""
    sums: Dict[EmotionCode, int] = {}
    counts: Dict[EmotionCode, int] = {}
    for memory in memories:
        for emotion in memory.emotions:
            sums[emotion.code] = sums.get(emotion.code, 0) + emotion.value
            counts[emotion.code] = counts.get(emotion.code, 0) + 1

    bias = EmotionVector(
        (code, total // counts[code])
        for code, total in sums.items()
        if total // counts[code] > PERSONALITY_THRESHOLD
    )
    if not bias:
        return EmotionVector.neutral(NEUTRAL_BIAS_INTENSITY)
    return bias.sorted()


def mood_stability(emotions: EmotionVector) -> float:
    """1 - variance / 10000: the flatter the reaction, the steadier the mood."""
    if not emotions:
        return 0.5
    average = emotions.average()
    variance = sum((value - average) ** 2 for _, value in emotions.items()) / len(emotions)
    return max(0.0, min(1.0, 1.0 - variance / 10000.0))


def _check_level(name: str, value: int) -> int:
    if not 0 <= value <= 100:
        raise ValueError(f"{name} must be between 0 and 100 (got {value})")
    return value


# ════════════════════════════════════════════════════════════════════════════
# BRAIN
# ════════════════════════════════════════════════════════════════════════════


class Brain:
    """
    Le Cerveau.
    Possède exactement une instance de chaque module.
    Sans initialize(), la mémoire reste en STM seule.
    """

    def __init__(
        self,
        config: Optional[MindConfig] = None,
        store: Optional[EngramStore] = None,
        tokenizer: Optional[Tokenizer] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = datetime.now,
        memory_only: bool = False,
    ):
        self.config = config or genome.config
        self.clock = clock
        rng = rng or random.Random()

        if store is None and not memory_only:
            store = SQLiteEngram(self.config.db_path)
        self.store = store

        self._cortex = CortexLock()
        self._daydream_log: Optional[str] = None

        self.thalamus = Thalamus()
        self.amygdala = Amygdala(tokenizer=tokenizer)
        self.mirror = MirrorSystem(self.amygdala)
        self.hormones = HormonalSystem(
            decay_rate=self.config.hormone_decay_rate,
            clock=BiologicalClock(
                day_start=self.config.day_time_start,
                night_start=self.config.night_time_start,
            ),
            time_provider=clock,
        )
        self.ganglia = BasalGanglia()
        self.prefrontal = PrefrontalCortex(rng=rng)
        # Attached to the store once initialize() succeeds
        self.hippocampus = Hippocampus(
            store=None,
            stm_max_size=self.config.stm_max_size,
            ltm_max_size=self.config.ltm_max_size,
            consolidation_threshold=self.config.consolidation_threshold,
            recall_pool_size=self.config.recall_pool_size,
            rng=rng,
            clock=clock,
        )
        self.wernicke = WernickeArea(tokenizer=self.amygdala.tokenizer)
        self.broca = BrocaArea(rng=rng)
        self.dreamer = Dreamer(self.hippocampus, self.hormones, self.prefrontal, self.ganglia)

    # ════════════════════════════════════════════════════════════════════════
    # LIFECYCLE
    # ════════════════════════════════════════════════════════════════════════

    async def initialize(self) -> bool:
        """Opens long-term memory. Returns False when running STM-only."""
        if self.store is None:
            logger.info("🧠 [BRAIN] Awake (short-term memory only)")
            return False
        try:
            await self.store.initialize()
        except Exception as e:
            logger.warning(f"🧠 [BRAIN] Long-term memory unavailable, STM only: {e}")
            return False

        self.hippocampus.store = self.store
        logger.success(f"🧠 [BRAIN] Awake ({self.config.service_name})")
        return True

    async def close(self):
        if self.hippocampus.store is not None:
            await self.hippocampus.store.close()
            self.hippocampus.store = None
        logger.info("🧠 [BRAIN] Asleep")

    # ════════════════════════════════════════════════════════════════════════
    # PIPELINE
    # ════════════════════════════════════════════════════════════════════════

    async def process_input(
        self, kind: str = "chat", text: str = "", signal_value: int = 0
    ) -> MindState:
        sensory = SensoryInput(kind=kind, text=text, signal_value=signal_value)
        async with self._cortex.write():
            return await self._process(sensory)

    async def _process(self, sensory: SensoryInput) -> MindState:
        # 1. Body clock, then metabolism at the current daylight
        self.hormones.update_circadian_rhythm(self.clock())
        effects = self.hormones.get_circadian_effects()
        self.hormones.decay(stress_boost=effects.cortisol_decay_boost)

        # 2. Habituation
        gain = self.thalamus.filter(sensory.text)

        # 3. Feeling
        if sensory.kind == "physical":
            raw = self._feel_signal(sensory.signal_value, gain)
        else:
            raw = self._feel_words(sensory.text, gain)

        # 4. Reason
        cortisol, oxytocin = self.hormones.get_status()
        displayed = self.prefrontal.arbitrate(raw, cortisol, oxytocin).sorted()

        # 5. Episode
        await self.hippocampus.add_memory(sensory.text, displayed)

        # 6. Understanding
        concepts, intent = self.wernicke.comprehend(sensory.text)

        # 7. Snapshot
        state = await self._snapshot(displayed)

        # 8. Speech (conversation only)
        if sensory.kind == "chat":
            state.reply_text = self.broca.generate_response(
                displayed, state.motivation, state.sanity, concepts, intent
            )

        logger.info(
            f"🧠 [BRAIN] {sensory.kind} '{mask_text(sensory.text)}' -> {displayed!r} "
            f"(gain {gain:.2f}, intent {intent.value})"
        )
        return state

    def _feel_signal(self, signal_value: int, gain: float) -> EmotionVector:
        """Physical stimulus: no appraisal, the signal maps straight to Joy or Disgust."""
        value = float(signal_value)
        felt = EmotionVector()
        stressor = 0.0
        affection = 0.0

        if value > 0:
            felt.add(EmotionCode.JOY, value * gain)
            affection = value * gain
        elif value < 0:
            felt.add(EmotionCode.DISGUST, -value * gain)
            stressor = -value * gain
        else:
            felt.add(EmotionCode.NEUTRAL, NEUTRAL_FALLBACK_INTENSITY)

        self.hormones.update(stressor, affection)
        # -100 -> 0, 0 -> 50, 100 -> 100
        self.ganglia.update_motivation((value * gain + 100.0) / 2.0)
        return felt

    def _feel_words(self, text: str, gain: float) -> EmotionVector:
        raw = self.amygdala.assess(text)

        other = self.mirror.simulate_other_emotion(text)
        _, oxytocin = self.hormones.get_status()
        self.mirror.update_empathy_level(oxytocin)
        blended = self.mirror.blend(other, raw, self.mirror.get_empathy_level())

        # Night makes grief, love and fear louder
        sensitivity = self.hormones.get_circadian_effects().emotional_sensitivity
        felt = EmotionVector()
        for code, value in blended.items():
            scale = gain * (sensitivity if code in NOCTURNAL_EMOTIONS else 1.0)
            felt.add(code, value * scale)

        stressor = sum(v for code, v in felt.items() if code in NEGATIVE_EMOTIONS)
        affection = sum(v for code, v in felt.items() if code in AFFILIATIVE_EMOTIONS)
        self.hormones.update(stressor * HORMONE_INPUT_RATE, affection * HORMONE_INPUT_RATE)

        if felt:
            self.ganglia.reward_from_emotion(felt.average())
        return felt

    async def _snapshot(self, emotions: EmotionVector) -> MindState:
        context = await self.hippocampus.recent_context(self.config.recall_pool_size)
        levels = self.hormones.get_state()
        effects = self.hormones.get_circadian_effects()

        return MindState(
            current_reaction=emotions.to_values(),
            mood_stability=mood_stability(emotions),
            personality_bias=personality_bias(context).to_values(),
            motivation=self.ganglia.get_motivation() / 100.0 * effects.motivation_cap,
            sanity=self.prefrontal.get_sanity() / 100.0,
            cortisol=levels["cortisol"],
            oxytocin=levels["oxytocin"],
            melatonin=levels["melatonin"],
            serotonin=levels["serotonin"],
            predicted_reward=self.ganglia.get_predicted_reward(),
            daydream_log=self._pop_daydream_log(),
        )

    # ════════════════════════════════════════════════════════════════════════
    # STATE & CARE
    # ════════════════════════════════════════════════════════════════════════

    async def get_state(self) -> BrainState:
        async with self._cortex.read():
            motivation = self.ganglia.get_motivation()
            sanity = self.prefrontal.get_sanity()
            return BrainState(
                motivation=motivation,
                motivation_level=level_label(motivation),
                sanity=sanity,
                sanity_level=level_label(sanity),
                stm_count=self.hippocampus.stm_count(),
                ltm_count=await self.hippocampus.ltm_count(),
            )

    async def sleep(self) -> SleepReport:
        """Consolidates the day and lets motivation settle."""
        async with self._cortex.write():
            report = await self.hippocampus.consolidate()
            self.ganglia.decay()
            sleep_report = SleepReport(
                consolidated_count=report.consolidated,
                forgotten_count=report.forgotten,
                stm_count=self.hippocampus.stm_count(),
                ltm_count=await self.hippocampus.ltm_count(),
            )
        logger.info(f"🌙 [BRAIN] Slept: {sleep_report.model_dump()}")
        return sleep_report

    async def apply_stress(self, level: int):
        _check_level("stress level", level)
        async with self._cortex.write():
            self.prefrontal.apply_stress(level)

    async def rest(self, quality: int):
        _check_level("rest quality", quality)
        async with self._cortex.write():
            self.prefrontal.rest(quality)

    async def feedback(self, positive: bool) -> int:
        """Explicit reward (100) or punishment (0). Returns the new motivation."""
        async with self._cortex.write():
            self.ganglia.update_motivation(100.0 if positive else 0.0)
            return self.ganglia.get_motivation()

    async def daydream(self, duration: timedelta) -> str:
        async with self._cortex.write():
            log = await self.dreamer.wander(duration)
            self._daydream_log = log
            return log

    def _pop_daydream_log(self) -> Optional[str]:
        """The last wandering narrative, reported once with the next state."""
        log, self._daydream_log = self._daydream_log, None
        return log

    async def get_recent_memories(self, limit: int = 10) -> List[RuneMemory]:
        async with self._cortex.read():
            return await self.hippocampus.recent_context(limit)

    async def get_memory(self, memory_id: str) -> Optional[RuneMemory]:
        async with self._cortex.read():
            return await self.hippocampus.get_memory(memory_id)
