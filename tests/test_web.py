import pytest

from lottie_animator.web import create_app


@pytest.fixture
def client():
    app = create_app()
    app.config["TESTING"] = True
    return app.test_client()


def test_export_returns_attachment(client, editor_project_json):
    response = client.post("/api/export", json=editor_project_json)
    assert response.status_code == 200
    assert 'filename="Editor_Export.json"' in response.headers["Content-Disposition"]
    lottie = response.get_json()
    assert lottie["fr"] == 30
    assert lottie["layers"][0]["ks"]["p"]["a"] == 1


def test_export_without_layers_is_rejected(client, editor_project_json):
    editor_project_json["layers"] = []
    response = client.post("/api/export", json=editor_project_json)
    assert response.status_code == 400
    assert response.get_json()["error"] == "Project has no layers"


def test_export_with_bad_project(client):
    response = client.post("/api/export", json={"fps": -1, "layers": [{"id": "x"}]})
    assert response.status_code == 400
    assert response.get_json()["details"]


def test_export_blocked_when_invalid(client, editor_project_json, monkeypatch):
    from lottie_animator.web import views

    monkeypatch.setattr(views, "export_to_lottie", lambda project: {"v": "5.5.7"})
    response = client.post("/api/export", json=editor_project_json)
    assert response.status_code == 422
    assert response.get_json()["errors"]


def test_export_failure_is_reported(client, editor_project_json, monkeypatch):
    from lottie_animator.web import views

    def boom(project):
        raise ValueError("Unsupported element type")

    monkeypatch.setattr(views, "export_to_lottie", boom)
    response = client.post("/api/export", json=editor_project_json)
    assert response.status_code == 500
    assert response.get_json() == {"error": "Export failed"}


def test_validate_endpoint(client):
    response = client.post("/api/validate", json={"v": "5.5.7", "ip": 0})
    body = response.get_json()
    assert body["valid"] is False
    assert any(error.startswith("op") for error in body["errors"])


def test_value_endpoint(client):
    keyframes = [
        {"id": "a", "time": 0, "property": "x", "value": 0, "layerId": "l"},
        {"id": "b", "time": 2, "property": "x", "value": 100, "layerId": "l"},
    ]
    response = client.post("/api/value", json={"keyframes": keyframes, "time": 0.5})
    assert response.get_json() == {"value": 25.0}


def test_value_rejects_non_object_body(client):
    response = client.post("/api/value", json=[1, 2])
    assert response.status_code == 400
    assert response.get_json() == {"error": "Request body must be a JSON object"}
