def test_health_returns_ok(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "message": "Server is healthy"}


def test_health_does_not_touch_upstream(client, mock_llm_provider):
    mock_llm_provider.error = RuntimeError("upstream down")

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert mock_llm_provider.calls == []


def test_root_lists_endpoints(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["endpoints"]["chat"] == "POST /chat"
