"""
Ошибки получения AI совета
Все четыре вида обрабатываются вызывающим кодом одинаково (fallback),
но различаются в логах и метриках через kind
"""

from enum import Enum


class AdviceKind(str, Enum):
    """Тег результата запроса совета"""
    OK = 'ok'
    CONFIGURATION_ERROR = 'configuration_error'
    TRANSPORT_ERROR = 'transport_error'
    PROTOCOL_ERROR = 'protocol_error'
    EMPTY_RESULT = 'empty_result'


class AdviceError(Exception):
    """Базовая ошибка запроса совета"""
    kind = AdviceKind.PROTOCOL_ERROR


class ConfigurationError(AdviceError):
    """Нет API ключа или запрос нельзя собрать"""
    kind = AdviceKind.CONFIGURATION_ERROR


class TransportError(AdviceError):
    """Сеть, таймаут"""
    kind = AdviceKind.TRANSPORT_ERROR


class ProtocolError(AdviceError):
    """Не-2xx статус или тело ответа не той структуры"""
    kind = AdviceKind.PROTOCOL_ERROR

    def __init__(self, message: str, status: int = None):
        super().__init__(message)
        self.status = status


class EmptyResultError(AdviceError):
    """В ответе нет choices"""
    kind = AdviceKind.EMPTY_RESULT
