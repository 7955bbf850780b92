"""
PSYCHE/BRAIN/AMYGDALA.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: AMYGDALA (LE RÉFLEXE ÉMOTIONNEL) 🔥
PURPOSE: Extrait un vecteur émotionnel d'un texte par lexique fixe.
      Déterministe : pas d'apprentissage, pas de modèle.
      1. Découpe en morphèmes (Senses)
      2. Recherche forme de surface, puis forme de base
      3. Cumule (additif, borné à 100)
      Rien trouvé → [(Neutral, 10)].
══════════════════════════════════════════════════════════════════════════════
"""

from typing import Dict, Optional
from loguru import logger

from psyche.brain.emotions import EmotionCode, EmotionValue, EmotionVector
from psyche.dna.conscience import NEUTRAL_FALLBACK_INTENSITY
from psyche.soma.senses import Tokenizer, default_senses

J, L, A, G, S, F, D = (
    EmotionCode.JOY,
    EmotionCode.LOVE,
    EmotionCode.ANGER,
    EmotionCode.SADNESS,
    EmotionCode.SURPRISE,
    EmotionCode.FEAR,
    EmotionCode.DISGUST,
)

# Fixed lexicon. Stored memories and tuned thresholds depend on these exact values.
EMOTION_LEXICON: Dict[str, EmotionValue] = {
    word: EmotionValue(code=code, value=value)
    for word, (code, value) in {
        # Joy
        "最高": (J, 90),
        "楽しい": (J, 80),
        "嬉しい": (J, 85),
        "笑": (J, 60),
        "良": (J, 50),
        "好き": (J, 70),
        "良い": (J, 50),
        "やった": (J, 80),
        "美味しい": (J, 85),
        "旨い": (J, 80),
        # Love / Trust
        "愛": (L, 90),
        "信頼": (L, 80),
        "相棒": (L, 85),
        "一緒": (L, 60),
        "味方": (L, 70),
        "なでなで": (L, 65),
        "ありがとう": (L, 60),
        # Anger
        "バカ": (A, 80),
        "うざい": (A, 70),
        "嫌い": (A, 80),
        "クソ": (A, 85),
        "怒": (A, 90),
        "ふざけるな": (A, 75),
        # Sadness
        "悲しい": (G, 80),
        "辛い": (G, 85),
        "泣": (G, 70),
        "だめ": (G, 60),
        "無理": (G, 65),
        "最悪": (G, 90),
        "ごめん": (G, 50),
        # Surprise
        "えっ": (S, 60),
        "すごい": (S, 70),
        "まさか": (S, 80),
        "！？": (S, 75),
        "びっくり": (S, 80),
        # Fear
        "怖い": (F, 85),
        "やばい": (F, 70),
        "逃げ": (F, 80),
        "不安": (F, 60),
        "警告": (F, 75),
        "エラー": (F, 65),
        "バグ": (F, 80),
        # Disgust
        "苦い": (D, 70),
        "不味い": (D, 80),
        "臭い": (D, 85),
        "キモい": (D, 90),
        "汚い": (D, 85),
    }.items()
}


class Amygdala:
    """
    Le Réflexe Émotionnel.
    Transforme un texte en vecteur d'intensités.
    """

    def __init__(
        self,
        tokenizer: Optional[Tokenizer] = None,
        lexicon: Optional[Dict[str, EmotionValue]] = None,
    ):
        self.tokenizer = tokenizer if tokenizer is not None else default_senses()
        self.lexicon = lexicon if lexicon is not None else EMOTION_LEXICON

    def assess(self, text: str) -> EmotionVector:
        """Returns the reflex emotion vector, strongest first."""
        vector = EmotionVector()
        hit = False

        for morpheme in self.tokenizer.tokenize(text):
            entry = self.lexicon.get(morpheme.surface)
            if entry is None:
                entry = self.lexicon.get(morpheme.base_form)
            if entry is None:
                continue

            vector.add(entry.code, entry.value)
            hit = True
            logger.debug(
                f"🔥 [AMYGDALA] Hit '{morpheme.surface}' → {entry.code.value}:{entry.value}"
            )

        if not hit:
            return EmotionVector.neutral(NEUTRAL_FALLBACK_INTENSITY)

        return vector.sorted()
