"""
Конфигурация pytest для корректных импортов
"""
import sys
from pathlib import Path

import pytest

# Добавляем python/ в PYTHONPATH для импортов
project_root = Path(__file__).parent.parent
python_dir = project_root / 'python'

sys.path.insert(0, str(project_root))
sys.path.insert(0, str(python_dir))


@pytest.fixture(autouse=True)
def metrics_file(tmp_path, monkeypatch):
    """Метрики тестов пишутся во временную директорию"""
    import metrics

    monkeypatch.setattr(metrics, 'METRICS_DIR', tmp_path)
    monkeypatch.setattr(metrics, 'METRICS_FILE', tmp_path / 'metrics.jsonl')
    monkeypatch.setattr(metrics, '_enabled', True)
    return tmp_path / 'metrics.jsonl'


@pytest.fixture
def settings():
    """Настройки с фейковым ключом"""
    from config import Settings

    return Settings(groq_api_key='test-key', api_url='http://127.0.0.1:9/openai/v1/chat/completions')


@pytest.fixture
def settings_no_key():
    from config import Settings

    return Settings(groq_api_key=None)
