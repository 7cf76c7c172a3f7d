"""
Тесты для python/survey_server.py
"""
from unittest.mock import MagicMock, AsyncMock

import pytest
from fastapi.testclient import TestClient

from llm import AdviceKind, AdviceOutcome
from survey_server import create_app
from survey_service import SurveyService


@pytest.fixture
def advice_client():
    client = MagicMock()
    client.fetch_advice = AsyncMock(return_value=AdviceOutcome(kind=AdviceKind.OK, text='Go build things.'))
    client.check_available.return_value = True
    return client


@pytest.fixture
def client(settings, advice_client):
    app = create_app(settings, SurveyService(settings, client=advice_client))
    return TestClient(app)


class TestPages:
    """Тесты для HTML страниц"""

    def test_root_redirects(self, client):
        response = client.get('/', follow_redirects=False)

        assert response.status_code == 302
        assert response.headers['location'] == '/survey'

    def test_survey_form(self, client):
        response = client.get('/survey')

        assert response.status_code == 200
        assert 'name="confidence"' in response.text
        assert 'name="worry"' in response.text
        assert 'name="human_skills"' in response.text

    def test_static_css(self, client):
        response = client.get('/static/style.css')

        assert response.status_code == 200

    def test_no_cross_origin_headers(self, client):
        """Чужой Origin не получает разрешающих CORS заголовков"""
        response = client.get('/survey', headers={'Origin': 'http://evil.example'})

        assert response.status_code == 200
        assert 'access-control-allow-origin' not in response.headers
        assert 'access-control-allow-credentials' not in response.headers

    def test_no_cors_preflight(self, client):
        response = client.options('/api/survey', headers={
            'Origin': 'http://evil.example',
            'Access-Control-Request-Method': 'POST'
        })

        assert 'access-control-allow-origin' not in response.headers


class TestResultsEndpoint:
    """Тесты для POST /results"""

    def test_results_ai_advice(self, client, advice_client):
        response = client.post('/results', data={'confidence': '5', 'worry': '5', 'human_skills': '1'})

        assert response.status_code == 200
        assert 'Aware but Anxious' in response.text
        assert 'Go build things.' in response.text
        advice_client.fetch_advice.assert_awaited_once()

    def test_results_fallback(self, client, advice_client):
        advice_client.fetch_advice.return_value = AdviceOutcome(kind=AdviceKind.TRANSPORT_ERROR, error='timeout')

        response = client.post('/results', data={'confidence': '3', 'worry': '3', 'human_skills': '4'})

        assert response.status_code == 200
        assert 'Human-Centered Learner' in response.text
        assert 'AI advice unavailable' in response.text

    def test_results_bad_input_is_zero(self, client):
        """Нечисловые и пропущенные поля -> 0 -> Low Confidence"""
        response = client.post('/results', data={'confidence': 'abc'})

        assert response.status_code == 200
        assert 'Low Confidence' in response.text
        assert '<strong>0</strong>' in response.text

    def test_results_escapes_advice(self, client, advice_client):
        advice_client.fetch_advice.return_value = AdviceOutcome(kind=AdviceKind.OK, text='<script>x</script>')

        response = client.post('/results', data={'confidence': '3', 'worry': '3', 'human_skills': '3'})

        assert '<script>x</script>' not in response.text
        assert '&lt;script&gt;' in response.text


class TestSurveyApi:
    """Тесты для POST /api/survey"""

    def test_api_success(self, client):
        response = client.post('/api/survey', json={'confidence': 5, 'worry': 1, 'human_skills': 1})

        assert response.status_code == 200
        data = response.json()
        assert data['profile'] == 'Confident and Adaptive'
        assert data['advice'] == 'Go build things.'
        assert data['advice_source'] == 'ai'
        assert data['conf'] == 5

    def test_api_fallback_reason(self, client, advice_client):
        advice_client.fetch_advice.return_value = AdviceOutcome(kind=AdviceKind.EMPTY_RESULT, error='no choices')

        response = client.post('/api/survey', json={'confidence': 1})

        data = response.json()
        assert data['profile'] == 'Low Confidence'
        assert data['advice_source'] == 'fallback'
        assert data['fallback_reason'] == 'empty_result'
        assert data['worry'] == 0


class TestHealthEndpoint:
    """Тесты для /health"""

    def test_health_ok(self, client):
        response = client.get('/health')

        assert response.status_code == 200
        assert response.json()['status'] == 'ok'

    def test_health_llm_unavailable(self, client, advice_client):
        advice_client.check_available.return_value = False

        response = client.get('/health')

        assert response.json()['status'] == 'llm_unavailable'

    def test_health_no_key(self, settings_no_key, advice_client):
        app = create_app(settings_no_key, SurveyService(settings_no_key, client=advice_client))

        response = TestClient(app).get('/health')

        assert response.json()['status'] == 'no_api_key'
        advice_client.check_available.assert_not_called()


class TestStatsEndpoint:
    """Тесты для /api/stats"""

    def test_stats_after_submission(self, client):
        client.post('/api/survey', json={'confidence': 3, 'worry': 3, 'human_skills': 2})

        response = client.get('/api/stats')

        assert response.status_code == 200
        assert response.json()['survey']['profiles'] == {'Curious Learner': 1}

    def test_stats_empty(self, client):
        response = client.get('/api/stats')

        assert 'error' in response.json()
