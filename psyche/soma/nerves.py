"""
PSYCHE/SOMA/NERVES.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: CENTRAL NERVOUS SYSTEM (Logging) ⚡
PURPOSE: Unified logging with dual output: Console (human) + JSONL (machines).
══════════════════════════════════════════════════════════════════════════════
"""

import json
import sys
from datetime import datetime
from loguru import logger
from psyche.dna.genome import LOGS_DIR, genome


# ════════════════════════════════════════════════════════════════════════════
# CONFIGURATION
# ════════════════════════════════════════════════════════════════════════════

JSONL_LOGS = {
    "mind": LOGS_DIR / "mind.jsonl",  # Every brain module
    "alerts": LOGS_DIR / "alerts.jsonl",  # WARNING and above
}

# Log Rotation Settings
MAX_LOG_SIZE_BYTES = 10 * 1024 * 1024  # 10MB
MAX_ROTATED_FILES = 7

# ════════════════════════════════════════════════════════════════════════════
# 1. RESET LOGURU
# ════════════════════════════════════════════════════════════════════════════

logger.remove()

# ════════════════════════════════════════════════════════════════════════════
# 2. CONSOLE SINK
# ════════════════════════════════════════════════════════════════════════════

logger.add(
    sys.stderr,
    level="DEBUG" if genome.config.debug_mode else genome.config.log_level,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
)

LOGS_DIR.mkdir(parents=True, exist_ok=True)

# ════════════════════════════════════════════════════════════════════════════
# 3. JSONL SINK
# ════════════════════════════════════════════════════════════════════════════


def _rotate_log_if_needed(filepath):
    """Rotate log file if it exceeds MAX_LOG_SIZE_BYTES."""
    try:
        if filepath.exists() and filepath.stat().st_size > MAX_LOG_SIZE_BYTES:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            rotated_path = filepath.with_suffix(f".{timestamp}.jsonl")
            filepath.rename(rotated_path)

            pattern = filepath.stem + ".*.jsonl"
            rotated_files = sorted(filepath.parent.glob(pattern), reverse=True)
            for old_file in rotated_files[MAX_ROTATED_FILES:]:
                old_file.unlink()
    except OSError:
        pass  # Never crash the logger


def _write_jsonl(filepath, entry):
    """Helper to write a single JSONL entry with auto-rotation."""
    try:
        _rotate_log_if_needed(filepath)
        with open(filepath, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, ensure_ascii=False) + "\n")
    except OSError:
        pass


def jsonl_sink(message):
    """
    Custom sink that routes logs to the JSONL files.
    - Every log goes to mind.jsonl
    - WARNING/ERROR/CRITICAL also go to alerts.jsonl
    """
    record = message.record

    entry = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "module": record["name"],
        "function": record["function"],
        "message": record["message"],
    }

    _write_jsonl(JSONL_LOGS["mind"], entry)

    if record["level"].name in ["WARNING", "ERROR", "CRITICAL"]:
        _write_jsonl(JSONL_LOGS["alerts"], entry)


logger.add(jsonl_sink, level="DEBUG", format="{message}")

# ════════════════════════════════════════════════════════════════════════════
# 4. PRIVACY
# ════════════════════════════════════════════════════════════════════════════


def mask_text(text: str) -> str:
    """Masks user text for logs: only the first 3 characters survive."""
    if len(text) > 3:
        return text[:3] + "***"
    return "***"


__all__ = ["logger", "mask_text", "JSONL_LOGS"]
