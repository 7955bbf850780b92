"""
PSYCHE/BRAIN/WERNICKE.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: WERNICKE AREA (LA COMPRÉHENSION) 👂
PURPOSE: Extrait les concepts (noms) et l'intention d'un message.
      Intention : question > salutation > affirmation > inconnue.
══════════════════════════════════════════════════════════════════════════════
"""

from enum import Enum
from typing import List, NamedTuple, Optional

from psyche.soma.senses import Tokenizer, default_senses

NOUN = "名詞"
QUESTION_MARKS = ("？", "?")
QUESTION_WORDS = ("何", "どう", "いつ")
GREETINGS = ("こんにちは", "おはよう", "こんばんは", "ありがとう")


class Intent(str, Enum):
    QUESTION = "question"
    GREETING = "greeting"
    STATEMENT = "statement"
    UNKNOWN = "unknown"


class Comprehension(NamedTuple):
    concepts: List[str]
    intent: Intent


def _is_concept(surface: str) -> bool:
    """Single ASCII letters are noise, a single kanji like 愛 is a concept."""
    return len(surface) > 1 or not surface.isascii()


class WernickeArea:
    def __init__(self, tokenizer: Optional[Tokenizer] = None):
        self.tokenizer = tokenizer or default_senses()

    def comprehend(self, text: str) -> Comprehension:
        concepts = []
        has_question = False
        has_greeting = False

        for morpheme in self.tokenizer.tokenize(text):
            surface = morpheme.surface
            if morpheme.pos == NOUN and _is_concept(surface):
                concepts.append(surface)

            if surface in QUESTION_MARKS or any(w in text for w in QUESTION_WORDS):
                has_question = True
            if any(g in surface for g in GREETINGS):
                has_greeting = True

        if has_question:
            intent = Intent.QUESTION
        elif has_greeting:
            intent = Intent.GREETING
        elif concepts:
            intent = Intent.STATEMENT
        else:
            intent = Intent.UNKNOWN
        return Comprehension(concepts=concepts, intent=intent)
