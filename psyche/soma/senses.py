"""
PSYCHE/SOMA/SENSES.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: SENSES (L'OREILLE) 👂
PURPOSE: Découpe le texte entrant en morphèmes (surface + forme de base).
      Capacité enfichable : l'Amygdale et Wernicke ne connaissent que le
      protocole Tokenizer. Implémentation par défaut : Janome (dictionnaire IPA).
DEPENDANCES: janome
══════════════════════════════════════════════════════════════════════════════
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Protocol
from loguru import logger


@dataclass(frozen=True)
class Morpheme:
    """Un morphème : forme de surface, forme de base, catégorie grammaticale."""

    surface: str
    base_form: str
    pos: str  # Part of speech (first IPA feature, ex: "名詞")


class Tokenizer(Protocol):
    def tokenize(self, text: str) -> List[Morpheme]: ...


class JanomeSenses:
    """
    L'oreille par défaut.
    Janome est l'analyseur morphologique pur-Python (IPA dict embarqué).
    """

    def __init__(self):
        from janome.tokenizer import Tokenizer as JanomeTokenizer

        self._tokenizer = JanomeTokenizer()

    def tokenize(self, text: str) -> List[Morpheme]:
        if not text:
            return []

        morphemes = []
        for token in self._tokenizer.tokenize(text):
            surface = token.surface
            base_form = token.base_form
            if not base_form or base_form == "*":
                base_form = surface
            pos = token.part_of_speech.split(",")[0]
            morphemes.append(Morpheme(surface=surface, base_form=base_form, pos=pos))
        return morphemes


@lru_cache(maxsize=1)
def default_senses() -> JanomeSenses:
    """
    Loads the dictionary once per process (it is the slow part).
    Any failure here is fatal: a brain that cannot hear has no degraded mode.
    """
    try:
        senses = JanomeSenses()
    except Exception as e:
        logger.critical(f"👂 [SENSES] Tokenizer initialization failed: {e}")
        raise
    logger.info("👂 [SENSES] Janome tokenizer ready")
    return senses
