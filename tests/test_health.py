import pytest
from unittest.mock import patch


@pytest.mark.django_db
class TestHealthCheck:
    def test_healthy(self, api_client):
        response = api_client.get('/health/')

        assert response.status_code == 200
        assert response.data == {'status': 'ok', 'database': 'healthy'}

    def test_database_unavailable(self, api_client):
        with patch('apps.presentation.health.check_database', return_value=False):
            response = api_client.get('/health/')

        assert response.status_code == 503
        assert response.data['database'] == 'unhealthy'
