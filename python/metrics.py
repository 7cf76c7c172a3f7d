"""
Модуль логирования метрик опроса и AI советов
Записывает события в JSON Lines файл для последующего анализа
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Dict, Any
from dataclasses import dataclass, asdict
from threading import Lock

logger = logging.getLogger('Metrics')

# Путь к файлу логов
METRICS_DIR = Path(__file__).parent.parent / 'logs'
METRICS_FILE = METRICS_DIR / 'metrics.jsonl'

# Блокировка для thread-safe записи
_write_lock = Lock()
_enabled = True


@dataclass
class MetricEvent:
    """Событие метрики"""
    timestamp: str
    event_type: str
    component: str  # survey, advice, server
    data: Dict[str, Any]

    def to_dict(self) -> dict:
        return asdict(self)


def set_enabled(flag: bool):
    """Включает/выключает запись метрик (METRICS_ENABLED)"""
    global _enabled
    _enabled = bool(flag)


def _ensure_dir():
    """Создаёт директорию логов если не существует"""
    METRICS_DIR.mkdir(parents=True, exist_ok=True)


def log_metric(event_type: str, component: str, **data):
    """
    Логирует метрику в файл

    Args:
        event_type: тип события (survey_submission, advice_response, error)
        component: компонент (survey, advice, server)
        **data: произвольные данные метрики
    """
    if not _enabled:
        return

    event = MetricEvent(
        timestamp=datetime.now().isoformat(),
        event_type=event_type,
        component=component,
        data=data
    )

    try:
        _ensure_dir()
        with _write_lock:
            with open(METRICS_FILE, 'a', encoding='utf-8') as f:
                f.write(json.dumps(event.to_dict(), ensure_ascii=False) + '\n')
    except OSError as e:
        # Метрики не должны ронять обработку запроса
        logger.warning(f'[METRICS] Не удалось записать событие {event_type}: {e}')


def log_survey_submission(profile: str, conf: int, worry: int, human: int):
    """Логирует отправку анкеты"""
    log_metric(
        'survey_submission',
        'survey',
        profile=profile,
        conf=conf,
        worry=worry,
        human=human
    )


def log_advice_response(total_ms: int, advice_length: int, kind: str, profile: str):
    """Логирует результат запроса AI совета (kind = ok или вид ошибки)"""
    log_metric(
        'advice_response',
        'advice',
        total_ms=total_ms,
        advice_length=advice_length,
        kind=kind,
        profile=profile
    )


def log_error(component: str, error_type: str, message: str):
    """Логирует ошибку"""
    log_metric(
        'error',
        component,
        error_type=error_type,
        message=message[:500]
    )


def _data(event: dict) -> dict:
    data = event.get('data')
    return data if isinstance(data, dict) else {}


def get_metrics_stats() -> Dict[str, Any]:
    """
    Анализирует файл метрик и возвращает статистику
    """
    if not METRICS_FILE.exists():
        return {'error': 'Файл метрик не найден'}

    events = []
    with open(METRICS_FILE, 'r', encoding='utf-8') as f:
        for line in f:
            if line.strip():
                try:
                    event = json.loads(line)
                except json.JSONDecodeError:
                    continue
                if isinstance(event, dict):
                    events.append(event)

    if not events:
        return {'error': 'Нет данных'}

    # Распределение профилей
    submissions = [e for e in events if e.get('event_type') == 'survey_submission']
    profiles = {}
    for e in submissions:
        name = str(_data(e).get('profile', 'unknown'))
        profiles[name] = profiles.get(name, 0) + 1

    # Статистика по AI советам
    responses = [e for e in events if e.get('event_type') == 'advice_response']
    ok_responses = [e for e in responses if _data(e).get('kind') == 'ok']
    latencies = [_data(e)['total_ms'] for e in ok_responses if isinstance(_data(e).get('total_ms'), int)]
    fallbacks = len(responses) - len(ok_responses)

    # Ошибки по типам
    errors = [e for e in events if e.get('event_type') == 'error']
    by_type = {}
    for e in errors:
        error_type = str(_data(e).get('error_type', 'unknown'))
        by_type[error_type] = by_type.get(error_type, 0) + 1

    def calc_stats(values):
        if not values:
            return {'min': 0, 'max': 0, 'avg': 0, 'count': 0}
        return {
            'min': min(values),
            'max': max(values),
            'avg': round(sum(values) / len(values)),
            'count': len(values)
        }

    return {
        'total_events': len(events),
        'period': {
            'from': events[0].get('timestamp'),
            'to': events[-1].get('timestamp')
        },
        'survey': {
            'submissions': len(submissions),
            'profiles': profiles
        },
        'advice': {
            'requests': len(responses),
            'ai_success': len(ok_responses),
            'fallbacks': fallbacks,
            'fallback_rate': round(fallbacks / len(responses) * 100, 1) if responses else 0,
            'total_ms': calc_stats(latencies)
        },
        'errors': {
            'count': len(errors),
            'by_type': by_type
        }
    }


def clear_metrics():
    """Очищает файл метрик"""
    if METRICS_FILE.exists():
        METRICS_FILE.unlink()
