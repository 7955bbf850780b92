"""
PSYCHE/DNA/GENOME.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: CONFIG LOADER (L'ADN) 🧬
PURPOSE: Charge la configuration avec validation stricte (Pydantic).
      Définit les chemins vitaux et les paramètres du cerveau.
══════════════════════════════════════════════════════════════════════════════
"""

import os
import sys
from pathlib import Path
from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

# VITALS PATHS
ROOT_DIR = Path(__file__).resolve().parent.parent.parent

load_dotenv(dotenv_path=ROOT_DIR / ".env")

# If PSYCHE_ENV is 'test', we switch to a disposable memory cortex.
PSYCHE_ENV = os.getenv("PSYCHE_ENV", "dev").lower()

if PSYCHE_ENV == "test":
    # This prevents ANY test from ever touching real memories.
    import tempfile

    MEMORIES_DIR = Path(tempfile.gettempdir()) / "psyche_test_isolation"
    MEMORIES_DIR.mkdir(exist_ok=True)
    (MEMORIES_DIR / "logs").mkdir(exist_ok=True)

    logger.warning(
        f"🧬 [GENOME] TEST MODE DETECTED. Memories redirected to: {MEMORIES_DIR}"
    )

else:
    MEMORIES_DIR = ROOT_DIR / "memories"

LOGS_DIR = MEMORIES_DIR / "logs"
MIND_DB_FILE = MEMORIES_DIR / "mind.db"

_DB_EXTENSIONS = (".db", ".sqlite", ".sqlite3")


class MindConfig(BaseModel):
    """
    Validation stricte de la Configuration ADN.
    """

    env: str = Field(default="dev", description="Environment (dev/test/prod)")
    service_name: str = "Mind OS"
    db_path: str = str(MIND_DB_FILE)
    log_level: str = "INFO"
    debug_mode: bool = False

    # Brain parameters
    stm_max_size: int = Field(default=100, gt=0)
    ltm_max_size: int = Field(default=1000, gt=0)
    consolidation_threshold: float = Field(default=0.6, ge=0.0, le=1.0)
    recall_pool_size: int = Field(default=10, gt=0)

    # Hormones
    hormone_decay_rate: float = Field(default=10.0, ge=0.0)

    # Circadian rhythm
    day_time_start: int = Field(default=6, ge=0, le=23)
    night_time_start: int = Field(default=22, ge=1, le=23)

    @field_validator("db_path")
    @classmethod
    def _check_db_path(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("DB_PATH is required")
        if Path(value).suffix not in _DB_EXTENSIONS:
            raise ValueError(
                f"Invalid DB_PATH extension: {value} (expected .db, .sqlite, .sqlite3)"
            )
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level

    @model_validator(mode="after")
    def _check_day_cycle(self) -> "MindConfig":
        if self.day_time_start >= self.night_time_start:
            raise ValueError("DAY_TIME_START must be before NIGHT_TIME_START")
        return self


# Env var -> config field
_ENV_MAPPING = {
    "SERVICE_NAME": "service_name",
    "DB_PATH": "db_path",
    "LOG_LEVEL": "log_level",
    "DEBUG_MODE": "debug_mode",
    "STM_MAX_SIZE": "stm_max_size",
    "LTM_MAX_SIZE": "ltm_max_size",
    "CONSOLIDATION_THRESHOLD": "consolidation_threshold",
    "RECALL_POOL_SIZE": "recall_pool_size",
    "HORMONE_DECAY_RATE": "hormone_decay_rate",
    "DAY_TIME_START": "day_time_start",
    "NIGHT_TIME_START": "night_time_start",
}


class Genome:
    """
    Le Loader de Configuration.
    """

    def __init__(self):
        self.config = self._load_config()

    def _load_config(self) -> MindConfig:
        overrides = {"env": PSYCHE_ENV}
        for env_key, field_name in _ENV_MAPPING.items():
            value = os.getenv(env_key)
            if value is not None and value != "":
                overrides[field_name] = value

        try:
            return MindConfig(**overrides)
        except ValidationError as e:
            # Fail fast: a brain built on a broken genome is worse than no brain.
            logger.critical(f"🧬 [GENOME] Mutation Detected (Config Error): {e}")
            sys.exit(1)

    @property
    def ROOT_DIR(self) -> Path:
        """Expose ROOT_DIR as property for robustness."""
        return ROOT_DIR


# Singleton
genome = Genome()
