import requests

from conftest import fake_response
from georef.services.ollama.client import project_model


TAGS = {
    "models": [
        {
            "name": "llava:13b",
            "model": "llava:13b",
            "modified_at": "2024-05-01T10:00:00Z",
            "size": 8000000000,
            "details": {"parameter_size": "13B", "quantization_level": "Q4_0", "family": "llama"},
        },
        {"name": "bare", "model": "bare-family", "size": 1},
    ]
}


def test_list_models_projects_records(client, session):
    session.get.return_value = fake_response(200, TAGS)
    res = client.get("/api/ollama/models")
    assert res.status_code == 200
    assert res.json() == {
        "success": True,
        "models": [
            {
                "name": "llava:13b",
                "modified": "2024-05-01T10:00:00Z",
                "size": 8000000000,
                "parameterSize": "13B",
                "quantization": "Q4_0",
                "family": "llama",
            },
            {
                "name": "bare",
                "modified": None,
                "size": 1,
                "parameterSize": None,
                "quantization": None,
                "family": "bare-family",
            },
        ],
    }
    # trailing slash of the configured base URL is dropped
    assert session.get.call_args.args[0] == "http://ollama.test:11434/api/tags"


def test_list_models_without_models_array(client, session):
    session.get.return_value = fake_response(200, {"unexpected": True})
    res = client.get("/api/ollama/models")
    assert res.status_code == 200
    assert res.json() == {"success": True, "models": []}


def test_list_models_upstream_status_is_502(client, session):
    session.get.return_value = fake_response(503, text="x" * 1000)
    res = client.get("/api/ollama/models")
    assert res.status_code == 502
    body = res.json()
    assert body["success"] is False
    assert body["error"] == "Impossibile recuperare i modelli disponibili da Ollama"
    assert "503" in body["details"]
    assert body["details"] == "Status 503: " + "x" * 400


def test_list_models_connection_error_is_502(client, session):
    session.get.side_effect = requests.ConnectionError("connection refused")
    res = client.get("/api/ollama/models")
    assert res.status_code == 502
    assert "connection refused" in res.json()["details"]


def test_list_models_invalid_json_is_502(client, session):
    resp = fake_response(200)
    resp.json.side_effect = ValueError("Expecting value")
    session.get.return_value = resp
    res = client.get("/api/ollama/models")
    assert res.status_code == 502


def test_project_model_null_family():
    assert project_model({"name": "x"})["family"] is None


def test_list_models_tolerates_non_dict_details(client, session):
    session.get.return_value = fake_response(200, {"models": [{"name": "x", "model": "fam", "details": "weird"}]})
    res = client.get("/api/ollama/models")
    assert res.status_code == 200
    model = res.json()["models"][0]
    assert model["name"] == "x"
    assert model["parameterSize"] is None
    assert model["family"] == "fam"
