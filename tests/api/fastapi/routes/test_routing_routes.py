"""API tests for the routing endpoints, wired over the bundled resources."""

import logging

import pytest
from fastapi.testclient import TestClient

from src.api.fastapi import FastAPIApp
from src.core.config import Settings
from src.core.container import build_services
from src.services.feature_flags import SettingsFeatureFlagEvaluator
from src.utils.exception import add_exception_handlers


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def client(mock_llm_client):
    app = FastAPIApp().get_app()
    add_exception_handlers(app, logging.getLogger("test"))
    app.state.services = build_services(
        Settings(SELECTION_BACKOFF_SECONDS=0.0),
        llm_client=mock_llm_client,
        feature_flags=SettingsFeatureFlagEvaluator(),
    )
    return TestClient(app)


# ============================================================================
# ROUTE TESTS
# ============================================================================

class TestRouteEndpoint:
    """POST /api/route"""

    def test_route_query(self, client, mock_llm_client, make_completion):
        mock_llm_client.generate_completion.return_value = make_completion(
            {"Names": ["HelmDeployment.md"], "Reason": "Kubernetes"}
        )

        response = client.post("/api/route", json={"query": "deploy on k8s", "namespace": "deployments"})

        assert response.status_code == 200
        body = response.json()
        assert body["kind"] == "document"
        assert body["sources"] == ["HelmDeployment.md"]
        assert "Helm" in body["text"]
        assert response.headers["x-request-id"]

    def test_unknown_namespace_is_bad_request(self, client, mock_llm_client):
        response = client.post("/api/route", json={"query": "anything", "namespace": "Sdks.Cobol"})

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert "Known namespaces: deployments, sdks/dotnet, docs" in body["errorMessage"]
        mock_llm_client.generate_completion.assert_not_called()

    def test_route_docs_namespace_returns_urls(self, client, mock_llm_client, make_completion):
        url = "https://docs.featbit.co/feature-flags/targeting-rules"
        mock_llm_client.generate_completion.side_effect = [
            make_completion({"Title": "Feature Flags", "Reason": "flags"}),
            make_completion({"Urls": [url], "Reason": "direct"}),
        ]

        response = client.post(
            "/api/route", json={"query": "targeting rules", "namespace": "docs", "max_results": 3}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["kind"] == "urls"
        assert body["urls"] == [url]

    def test_invalid_body(self, client):
        response = client.post("/api/route", json={"query": "", "namespace": "deployments"})

        assert response.status_code == 422


class TestDocsEndpoint:
    def test_search(self, client, mock_llm_client, make_completion):
        url = "https://docs.featbit.co/feature-flags/targeting-rules"
        mock_llm_client.generate_completion.side_effect = [
            make_completion({"Title": "Feature Flags", "Reason": "flags"}),
            make_completion({"Urls": [url], "Reason": "direct"}),
        ]

        response = client.post("/api/docs/search", json={"topic": "targeting rules"})

        assert response.status_code == 200
        assert response.json() == {"success": True, "urls": [url]}


class TestSdkEndpoints:
    def test_list(self, client):
        response = client.get("/api/sdks")

        assert response.status_code == 200
        assert {"sdk": "node-sdk", "language": "Node.js", "type": "Server", "description": "Node.js Backend Services"} in response.json()["items"]

    def test_integration_without_topic(self, client, mock_llm_client):
        response = client.post("/api/sdks/integration", json={"sdk": "dotnet-server-sdk"})

        assert response.status_code == 200
        assert "ASP.NET Core" in response.json()["content"]
        mock_llm_client.generate_completion.assert_not_called()

    def test_unknown_sdk(self, client):
        response = client.post("/api/sdks/integration", json={"sdk": "cobol-sdk"})

        assert response.status_code == 200
        assert response.json()["content"].startswith("Unknown SDK identifier: 'cobol-sdk'")


class TestDeploymentEndpoints:
    def test_methods(self, client):
        items = client.get("/api/deployments/methods").json()["items"]

        assert len(items) == 5

    def test_how_to_falls_back_when_llm_fails(self, client, mock_llm_client):
        mock_llm_client.generate_completion.side_effect = RuntimeError("provider down")

        response = client.post(
            "/api/deployments/how-to",
            json={"method": "docker-compose", "where_to_deploy": "on-premises"},
        )

        assert response.status_code == 200
        assert "Docker Compose" in response.json()["content"]
