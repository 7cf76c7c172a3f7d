"""
Конфигурация приложения опроса
Читается из переменных окружения один раз при старте и передаётся в сервисы явно
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger('Survey')

# ========== ДЕФОЛТЫ ==========
GROQ_API_URL = 'https://api.groq.com/openai/v1/chat/completions'
GROQ_MODEL = 'openai/gpt-oss-20b'
ADVICE_MAX_TOKENS = 200
ADVICE_TEMPERATURE = 0.6
REQUEST_TIMEOUT = 15.0  # секунды, потолок на один запрос
CLIENT_TIMEOUT = 20.0  # секунды, потолок HTTP клиента
HTTP_HOST = '0.0.0.0'
HTTP_PORT = 8080


@dataclass(frozen=True)
class Settings:
    """Настройки процесса (секрет, модель, таймауты, порт)"""
    groq_api_key: Optional[str] = None
    api_url: str = GROQ_API_URL
    model: str = GROQ_MODEL
    max_tokens: int = ADVICE_MAX_TOKENS
    temperature: float = ADVICE_TEMPERATURE
    request_timeout: float = REQUEST_TIMEOUT
    client_timeout: float = CLIENT_TIMEOUT
    host: str = HTTP_HOST
    port: int = HTTP_PORT
    log_level: str = 'INFO'
    metrics_enabled: bool = True

    @property
    def has_api_key(self) -> bool:
        return bool(self.groq_api_key)

    @property
    def effective_timeout(self) -> float:
        """Реальный потолок ожидания - меньший из двух таймаутов"""
        return min(self.request_timeout, self.client_timeout)


def _get_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f'[CONFIG] {name}={raw!r} не число, используется {default}')
        return default
    if value <= 0:
        logger.warning(f'[CONFIG] {name}={raw!r} должен быть > 0, используется {default}')
        return default
    return value


def _get_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f'[CONFIG] {name}={raw!r} не целое число, используется {default}')
        return default


def _get_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Собирает Settings из окружения.
    Пустой GROQ_API_KEY считается отсутствующим.
    """
    env = os.environ if environ is None else environ

    api_key = (env.get('GROQ_API_KEY') or '').strip() or None

    return Settings(
        groq_api_key=api_key,
        api_url=env.get('GROQ_API_URL') or GROQ_API_URL,
        model=env.get('GROQ_MODEL') or GROQ_MODEL,
        request_timeout=_get_float(env, 'ADVICE_TIMEOUT', REQUEST_TIMEOUT),
        host=env.get('HOST') or HTTP_HOST,
        port=_get_int(env, 'PORT', HTTP_PORT),
        log_level=(env.get('LOG_LEVEL') or 'INFO').upper(),
        metrics_enabled=_get_bool(env, 'METRICS_ENABLED', True),
    )
