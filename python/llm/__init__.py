"""
LLM модуль - клиент chat completions API для AI советов
"""

from .advice_client import (
    AdviceClient,
    AdviceMetrics,
    AdviceOutcome,
    ChatRequest,
    ChatResponse,
    build_messages,
)
from .errors import (
    AdviceError,
    AdviceKind,
    ConfigurationError,
    EmptyResultError,
    ProtocolError,
    TransportError,
)

__all__ = [
    'AdviceClient',
    'AdviceMetrics',
    'AdviceOutcome',
    'ChatRequest',
    'ChatResponse',
    'build_messages',
    'AdviceError',
    'AdviceKind',
    'ConfigurationError',
    'EmptyResultError',
    'ProtocolError',
    'TransportError',
]
