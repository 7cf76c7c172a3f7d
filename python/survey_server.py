"""
Survey Server - веб-анкета AI-мышления с AI советом (Groq) и локальным fallback
"""

import logging
import sys
from typing import Optional

import uvicorn
from fastapi import FastAPI, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

import metrics
from config import Settings, load_settings
from profiles import parse_rating
from survey_assets import STATIC_DIR, TEMPLATES_DIR
from survey_service import SurveyInput, SurveyService

# Настройка логирования
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger('Survey')


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


class SurveyRequest(BaseModel):
    confidence: int = 0
    worry: int = 0
    human_skills: int = 0


class SurveyResponse(BaseModel):
    profile: str
    advice: str
    advice_source: str
    fallback_reason: Optional[str] = None
    conf: int
    worry: int
    human: int


def create_app(settings: Settings = None, service: SurveyService = None) -> FastAPI:
    """Собирает FastAPI приложение с явно переданными настройками"""
    settings = settings or load_settings()
    service = service or SurveyService(settings)
    metrics.set_enabled(settings.metrics_enabled)

    app = FastAPI(title='AI Mindset Survey')
    app.state.settings = settings
    app.state.service = service

    app.mount('/static', StaticFiles(directory=str(STATIC_DIR)), name='static')

    @app.get('/')
    async def index():
        return RedirectResponse('/survey', status_code=302)

    @app.get('/survey', response_class=HTMLResponse)
    async def survey_form(request: Request):
        """Страница анкеты"""
        return templates.TemplateResponse(request, 'survey.html', {})

    @app.post('/results', response_class=HTMLResponse)
    async def survey_results(
        request: Request,
        confidence: str = Form(''),
        worry: str = Form(''),
        human_skills: str = Form('')
    ):
        """Обработка анкеты из формы, нечисловые поля считаются нулём"""
        survey = SurveyInput(
            confidence=parse_rating(confidence),
            worry=parse_rating(worry),
            human_skills=parse_rating(human_skills)
        )
        result = await service.evaluate(survey)
        return templates.TemplateResponse(request, 'results.html', result.to_template_context())

    @app.post('/api/survey', response_model=SurveyResponse)
    async def survey_api(payload: SurveyRequest):
        """JSON вариант /results"""
        result = await service.evaluate(SurveyInput(
            confidence=payload.confidence,
            worry=payload.worry,
            human_skills=payload.human_skills
        ))
        return SurveyResponse(
            profile=result.profile.label,
            advice=result.advice,
            advice_source=result.advice_source,
            fallback_reason=result.fallback_reason,
            conf=result.conf,
            worry=result.worry,
            human=result.human
        )

    @app.get('/health')
    def health():
        """Проверка здоровья сервера и доступности AI API"""
        if not settings.has_api_key:
            status = 'no_api_key'
        elif service.client.check_available():
            status = 'ok'
        else:
            status = 'llm_unavailable'
        return {
            'status': status,
            'model': settings.model,
            'api_url': settings.api_url
        }

    @app.get('/api/stats')
    async def get_stats():
        """Статистика по анкетам и AI советам"""
        return metrics.get_metrics_stats()

    return app


app = create_app()


def main():
    settings = load_settings()
    logging.getLogger().setLevel(getattr(logging, settings.log_level, logging.INFO))

    if not settings.has_api_key:
        logger.warning('[SERVER] GROQ_API_KEY не задан, будут показываться только локальные советы')

    logger.info(f'[SERVER] Server running on :{settings.port}')
    logger.info(f'[SERVER] Model: {settings.model}, timeout: {settings.effective_timeout:g}s')

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level='warning'
    )


# ========== MAIN ==========
if __name__ == '__main__':
    main()
