"""
PSYCHE/BRAIN/BROCA.PY
══════════════════════════════════════════════════════════════════════════════
MODULE: BROCA AREA (LA PAROLE) 🗣️
PURPOSE: Choisit une réplique selon l'émotion dominante, la motivation
      et la raison. Pas de génération apprise : des gabarits.
      Motivation < 0.2 -> silence ("...").
      Raison < 0.3 -> la phrase se trouble.
══════════════════════════════════════════════════════════════════════════════
"""

import random
from typing import Dict, List, Optional, Sequence

from psyche.brain.emotions import EmotionCode, EmotionVector
from psyche.brain.wernicke import Intent

SILENT = "..."

TEMPLATES: Dict[EmotionCode, List[str]] = {
    EmotionCode.JOY: ["いいね！", "嬉しいな！", "楽しい！", "最高だね！"],
    EmotionCode.ANGER: ["ふざけないで", "もういい", "イライラする..."],
    EmotionCode.FEAR: ["怖い...", "大丈夫かな...", "不安だよ..."],
    EmotionCode.LOVE: ["ありがとう、大好きだよ", "そばにいてくれて嬉しい", "大切に思ってる"],
    EmotionCode.DISGUST: ["うわ...", "それは嫌だな", "気持ち悪い..."],
    EmotionCode.GRIEF: ["悲しいな...", "つらいね...", "寂しい..."],
    EmotionCode.NEUTRAL: ["そうなんだ", "なるほど", "ふーん"],
}

CONFUSIONS = ["...", "あれ？", "どうだっけ...", "頭が回らない...", "何か変だな..."]


class BrocaArea:
    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def generate_response(
        self,
        emotions: EmotionVector,
        motivation: float,
        sanity: float,
        concepts: Sequence[str],
        intent: Intent,
    ) -> str:
        """`motivation` and `sanity` are fractions (0.0-1.0)."""
        if motivation < 0.2:
            return SILENT

        dominant = emotions.dominant()
        emotion = dominant.code if dominant else EmotionCode.NEUTRAL
        concept = concepts[0] if concepts else ""

        if intent == Intent.GREETING:
            reply = self._greeting(emotion, motivation)
        elif intent == Intent.QUESTION:
            reply = self._answer(emotion, sanity, concept)
        elif intent == Intent.STATEMENT:
            reply = self._statement(emotion, concept)
        else:
            reply = SILENT if motivation < 0.3 else self._pick(emotion)

        if sanity < 0.3:
            reply = f"{reply} {self.rng.choice(CONFUSIONS)}"
        return reply

    def _greeting(self, emotion: EmotionCode, motivation: float) -> str:
        if motivation < 0.3:
            return "...こんにちは"
        if emotion == EmotionCode.JOY:
            return "こんにちは、元気だね！"
        if emotion == EmotionCode.ANGER:
            return "...何？"
        if emotion == EmotionCode.GRIEF:
            return "...こんにちは..."
        return "こんにちは"

    def _answer(self, emotion: EmotionCode, sanity: float, concept: str) -> str:
        if sanity < 0.3:
            return "よくわからない..."
        if emotion == EmotionCode.JOY:
            return f"{concept}のこと？知ってるよ！" if concept else "何だろう？教えて！"
        if emotion == EmotionCode.ANGER:
            return "今はそんな気分じゃない"
        if emotion == EmotionCode.FEAR:
            return "わからない...怖い..."
        return f"{concept}について？うーん..." if concept else "何だろう..."

    def _statement(self, emotion: EmotionCode, concept: str) -> str:
        reply = self._pick(emotion)
        if concept and emotion == EmotionCode.JOY:
            return f"{concept}って{reply}"
        return reply

    def _pick(self, emotion: EmotionCode) -> str:
        # Surprise and Hope have no voice of their own
        templates = TEMPLATES.get(emotion) or TEMPLATES[EmotionCode.NEUTRAL]
        return self.rng.choice(templates)
