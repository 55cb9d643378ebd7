"""Tests for security and authentication middleware."""

from fastapi import status

ANALYZE_URL = "/api/v1/subtitles/analyze"
PAYLOAD = {"srt_content": "1\n00:00:01,000 --> 00:00:03,000\nHello"}


class TestAuthenticationMiddleware:
    """Tests for API key authentication."""

    def test_health_no_auth_required(self, client_with_auth):
        """Test health endpoint accessible without auth when API key is configured."""
        response = client_with_auth.get("/api/v1/health")
        assert response.status_code == status.HTTP_200_OK

    def test_root_no_auth_required(self, client_with_auth):
        """Test service root accessible without auth when API key is configured."""
        response = client_with_auth.get("/api/v1/")
        assert response.status_code == status.HTTP_200_OK

    def test_docs_no_auth_required(self, client_with_auth):
        """Test docs endpoints accessible without auth."""
        response = client_with_auth.get("/docs")
        assert response.status_code == status.HTTP_200_OK

    def test_openapi_no_auth_required(self, client_with_auth):
        """Test OpenAPI JSON accessible without auth."""
        response = client_with_auth.get("/openapi.json")
        assert response.status_code == status.HTTP_200_OK

    def test_no_auth_configured(self, client):
        """Test protected endpoint accessible when auth not configured."""
        response = client.post(ANALYZE_URL, json=PAYLOAD)
        assert response.status_code == status.HTTP_200_OK

    def test_missing_api_key_header(self, client_with_auth):
        """Test protected endpoint rejects request without API key header."""
        response = client_with_auth.post(ANALYZE_URL, json=PAYLOAD)
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert "Missing X-API-Key header" in response.json()["detail"]

    def test_invalid_api_key(self, client_with_auth):
        """Test protected endpoint rejects invalid API key."""
        response = client_with_auth.post(
            ANALYZE_URL, json=PAYLOAD, headers={"X-API-Key": "wrong_key"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert "Invalid API key" in response.json()["detail"]

    def test_valid_api_key(self, client_with_auth):
        """Test protected endpoint accepts valid API key."""
        response = client_with_auth.post(
            ANALYZE_URL, json=PAYLOAD, headers={"X-API-Key": "test_secret_key_12345"}
        )
        assert response.status_code == status.HTTP_200_OK

    def test_case_sensitive_api_key(self, client_with_auth):
        """Test API key comparison is case-sensitive."""
        response = client_with_auth.post(
            ANALYZE_URL, json=PAYLOAD, headers={"X-API-Key": "TEST_SECRET_KEY_12345"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_empty_api_key_header(self, client_with_auth):
        """Test empty API key header is rejected."""
        response = client_with_auth.post(ANALYZE_URL, json=PAYLOAD, headers={"X-API-Key": ""})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
