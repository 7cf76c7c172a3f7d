"""
Advice Client - запрос короткого совета у Groq (OpenAI-совместимый chat completions)
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import List, Optional

import aiohttp
import requests
from pydantic import BaseModel, Field, ValidationError

from config import Settings
from prompts import SYSTEM_PROMPT, build_advice_prompt
from metrics import log_advice_response, log_error
from .errors import (
    AdviceError,
    AdviceKind,
    ConfigurationError,
    EmptyResultError,
    ProtocolError,
    TransportError,
)

logger = logging.getLogger('Advice')

_CHAT_PATH = '/chat/completions'


# ========== WIRE МОДЕЛИ ==========
class ChatMessage(BaseModel):
    role: str
    content: str


class ChatRequest(BaseModel):
    model: str
    messages: List[ChatMessage]
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None


class ChoiceMessage(BaseModel):
    role: Optional[str] = ''
    content: Optional[str] = ''


class ChatChoice(BaseModel):
    index: int = 0
    message: ChoiceMessage = Field(default_factory=ChoiceMessage)


class ChatResponse(BaseModel):
    id: Optional[str] = ''
    choices: Optional[List[ChatChoice]] = None


@dataclass
class AdviceOutcome:
    """Результат запроса: либо текст, либо вид ошибки"""
    kind: AdviceKind
    text: str = ''
    error: Optional[str] = None
    latency_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.kind == AdviceKind.OK


class AdviceMetrics:
    """Метрики latency одного запроса"""
    def __init__(self):
        self.reset()

    def reset(self):
        self.request_start = None
        self.done_time = None

    def request_started(self):
        self.request_start = time.time()

    def done(self):
        self.done_time = time.time()

    def get_stats(self) -> dict:
        total = 0
        if self.request_start and self.done_time:
            total = int((self.done_time - self.request_start) * 1000)
        return {'total_ms': total}


def build_messages(system_prompt: str, user_prompt: str) -> list:
    """Построение messages: system + user"""
    return [
        {
            'role': 'system',
            'content': system_prompt
        },
        {
            'role': 'user',
            'content': user_prompt
        }
    ]


class AdviceClient:
    """
    Клиент chat completions API.
    Создаётся один раз, состояния между запросами не хранит.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.api_url = settings.api_url
        self.model = settings.model
        self.timeout = aiohttp.ClientTimeout(total=settings.client_timeout)

    @property
    def models_url(self) -> str:
        if self.api_url.endswith(_CHAT_PATH):
            base = self.api_url[:-len(_CHAT_PATH)]
        else:
            base = self.api_url.rsplit('/', 1)[0]
        return f'{base}/models'

    def _headers(self) -> dict:
        return {
            'Content-Type': 'application/json',
            'Authorization': f'Bearer {self.settings.groq_api_key}'
        }

    def build_request(self, profile: str) -> ChatRequest:
        messages = build_messages(SYSTEM_PROMPT, build_advice_prompt(profile))
        return ChatRequest(
            model=self.model,
            messages=[ChatMessage(**m) for m in messages],
            max_tokens=self.settings.max_tokens,
            temperature=self.settings.temperature
        )

    def check_available(self) -> bool:
        """Быстрая проверка доступности API (для /health)"""
        if not self.settings.has_api_key:
            return False
        try:
            resp = requests.get(self.models_url, headers=self._headers(), timeout=2)
            return resp.status_code == 200
        except requests.exceptions.RequestException as e:
            logger.warning(f'[ADVICE] API недоступен: {e}')
            return False

    async def _post(self, payload: dict) -> tuple:
        async with aiohttp.ClientSession(timeout=self.timeout) as session:
            async with session.post(self.api_url, json=payload, headers=self._headers()) as resp:
                body = await resp.read()
                return resp.status, body

    def _extract_advice(self, status: int, body: bytes) -> str:
        """Разбор ответа: статус -> структура -> первый choice"""
        if status < 200 or status >= 300:
            raise ProtocolError(f'API вернул статус {status}', status=status)

        try:
            data = ChatResponse.model_validate_json(body)
        except ValidationError as e:
            raise ProtocolError(f'Некорректный ответ API ({e.error_count()} ошибок)', status=status) from e

        if not data.choices:
            raise EmptyResultError('no choices returned')

        advice = data.choices[0].message.content or ''
        if not advice.strip():
            raise EmptyResultError('first choice has empty content')
        return advice

    async def request_advice(self, profile: str, timeout: Optional[float] = None) -> str:
        """
        Один POST к API без повторов.
        Бросает AdviceError; ожидание ограничено min(timeout, client_timeout).
        """
        if not self.settings.has_api_key:
            raise ConfigurationError('GROQ_API_KEY is not set')

        requested = self.settings.request_timeout if timeout is None else timeout
        budget = min(requested, self.settings.client_timeout)
        if budget <= 0:
            raise TransportError(f'Бюджет времени исчерпан ({budget:g} сек)')
        payload = self.build_request(profile).model_dump(exclude_none=True)

        logger.info(f'[ADVICE] profile={profile!r}, model={self.model}, timeout={budget:g}s')

        try:
            status, body = await asyncio.wait_for(self._post(payload), timeout=budget)
        except asyncio.TimeoutError:
            raise TransportError(f'Таймаут запроса к API ({budget:g} сек)') from None
        except (aiohttp.InvalidURL, ValueError) as e:
            raise ConfigurationError(f'Не удалось собрать запрос: {e}') from e
        except aiohttp.ClientError as e:
            raise TransportError(f'Ошибка соединения: {e}') from e

        return self._extract_advice(status, body)

    async def fetch_advice(self, profile: str, timeout: Optional[float] = None) -> AdviceOutcome:
        """Как request_advice, но без исключений: любая ошибка -> AdviceOutcome с kind"""
        metrics = AdviceMetrics()
        metrics.request_started()

        try:
            advice = await self.request_advice(profile, timeout)
        except AdviceError as e:
            metrics.done()
            total_ms = metrics.get_stats()['total_ms']
            logger.warning(f'[ADVICE] {e.kind.value}: {e} ({total_ms}ms)')
            log_error('advice', e.kind.value, str(e))
            log_advice_response(total_ms, 0, e.kind.value, profile)
            return AdviceOutcome(kind=e.kind, error=str(e), latency_ms=total_ms)
        except asyncio.CancelledError:
            metrics.done()
            logger.warning(f'[ADVICE] Запрос отменён, profile={profile!r}')
            log_advice_response(metrics.get_stats()['total_ms'], 0, 'cancelled', profile)
            raise

        metrics.done()
        total_ms = metrics.get_stats()['total_ms']
        logger.info(f'[ADVICE] Совет за {total_ms}ms, len={len(advice)}')
        log_advice_response(total_ms, len(advice), AdviceKind.OK.value, profile)
        return AdviceOutcome(kind=AdviceKind.OK, text=advice, latency_ms=total_ms)
