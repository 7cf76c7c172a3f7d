"""
Сервис опроса: классификация -> AI совет -> fallback на локальный совет
"""

import logging
from dataclasses import dataclass
from typing import Optional

from config import Settings
from llm import AdviceClient
from metrics import log_survey_submission
from profiles import Profile, classify_profile
from prompts import with_fallback_note

logger = logging.getLogger('Survey')

ADVICE_SOURCE_AI = 'ai'
ADVICE_SOURCE_FALLBACK = 'fallback'


@dataclass
class SurveyInput:
    confidence: int = 0
    worry: int = 0
    human_skills: int = 0


@dataclass
class SurveyResult:
    """То, что уходит в шаблон results.html"""
    profile: Profile
    advice: str
    conf: int
    worry: int
    human: int
    advice_source: str = ADVICE_SOURCE_AI
    fallback_reason: Optional[str] = None

    def to_template_context(self) -> dict:
        return {
            'Profile': self.profile.label,
            'Advice': self.advice,
            'Conf': self.conf,
            'Worry': self.worry,
            'Human': self.human
        }


class SurveyService:
    """Обработка одной анкеты. Общего изменяемого состояния между запросами нет."""

    def __init__(self, settings: Settings, client: AdviceClient = None):
        self.settings = settings
        self.client = client or AdviceClient(settings)

    async def evaluate(self, survey: SurveyInput) -> SurveyResult:
        profile, local_advice = classify_profile(survey.confidence, survey.worry, survey.human_skills)
        logger.info(
            f'[SURVEY] conf={survey.confidence}, worry={survey.worry}, '
            f'human={survey.human_skills} -> {profile.label}'
        )
        log_survey_submission(profile.label, survey.confidence, survey.worry, survey.human_skills)

        outcome = await self.client.fetch_advice(profile.label, self.settings.request_timeout)

        if outcome.ok:
            advice = outcome.text
            source = ADVICE_SOURCE_AI
            reason = None
        else:
            # Только целиком локальный совет, без частичного AI текста
            logger.info(f'[SURVEY] Fallback на локальный совет ({outcome.kind.value})')
            advice = with_fallback_note(local_advice)
            source = ADVICE_SOURCE_FALLBACK
            reason = outcome.kind.value

        return SurveyResult(
            profile=profile,
            advice=advice,
            conf=survey.confidence,
            worry=survey.worry,
            human=survey.human_skills,
            advice_source=source,
            fallback_reason=reason
        )
