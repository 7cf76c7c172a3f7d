"""
Классификация респондента по профилю AI-мышления
Без зависимостей от FastAPI - для тестирования
"""

import re
from enum import Enum
from typing import Tuple

_RATING_RE = re.compile(r'[+-]?[0-9]+')


class Profile(str, Enum):
    """Пять фиксированных профилей (значение - подпись для UI и промпта)"""
    AWARE_BUT_ANXIOUS = 'Aware but Anxious'
    LOW_CONFIDENCE = 'Low Confidence'
    CONFIDENT_AND_ADAPTIVE = 'Confident and Adaptive'
    HUMAN_CENTERED_LEARNER = 'Human-Centered Learner'
    CURIOUS_LEARNER = 'Curious Learner'

    @property
    def label(self) -> str:
        return self.value


# Локальные советы - показываются только если AI совет недоступен
PROFILE_ADVICE = {
    Profile.AWARE_BUT_ANXIOUS: (
        'You understand AI well, but you’re concerned about job impact. '
        'Focus on adapting and building human-AI collaboration skills.'
    ),
    Profile.LOW_CONFIDENCE: (
        'Start small. Try simple, hands-on AI tasks — '
        'your confidence will grow quickly through experience.'
    ),
    Profile.CONFIDENT_AND_ADAPTIVE: (
        'You’re ready to lead. Share what you know '
        'and help others understand AI’s potential.'
    ),
    Profile.HUMAN_CENTERED_LEARNER: (
        'You value creativity and empathy — keep combining those '
        'with AI skills for the best of both worlds.'
    ),
    Profile.CURIOUS_LEARNER: (
        'Stay curious. Keep exploring AI and how it fits with your strengths.'
    ),
}


def classify_profile(confidence: int, worry: int, human_skills: int) -> Tuple[Profile, str]:
    """
    Определяет профиль по трём оценкам.
    Правила проверяются по порядку, срабатывает первое подходящее.
    """
    if confidence >= 4 and worry >= 4:
        profile = Profile.AWARE_BUT_ANXIOUS
    elif confidence <= 2:
        profile = Profile.LOW_CONFIDENCE
    elif confidence >= 4 and worry <= 2:
        profile = Profile.CONFIDENT_AND_ADAPTIVE
    elif human_skills >= 4:
        profile = Profile.HUMAN_CENTERED_LEARNER
    else:
        profile = Profile.CURIOUS_LEARNER

    return profile, PROFILE_ADVICE[profile]


def parse_rating(value) -> int:
    """
    Поле формы -> int, всё остальное (отсутствует, пробелы, '1_0', не-ASCII цифры) даёт 0.
    Принимается только необязательный знак и ASCII цифры.
    """
    if value is None:
        return 0
    text = str(value)
    if not _RATING_RE.fullmatch(text):
        return 0
    return int(text)
