import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from neurocare.api.deps import get_live_session_registry
from neurocare.api.routers.live_session import router as live_session_router
from neurocare.application.services import LiveSessionRegistry
from neurocare.core.exceptions import PersistenceError

HEADERS = {"X-User-ID": "alice"}


@pytest.fixture
def registry(device_channel, mock_repository, therapy_settings):
    return LiveSessionRegistry(
        channel=device_channel,
        repository=mock_repository,
        settings=therapy_settings,
    )


@pytest.fixture
def app(registry):
    app = FastAPI()
    app.include_router(live_session_router)
    app.dependency_overrides[get_live_session_registry] = lambda: registry
    return app


@pytest.fixture
def client(app, registry):
    # One event loop for the whole test so the session timer survives between requests
    with TestClient(app) as client:
        yield client
        client.portal.call(registry.close_all)


def test_status_requires_user(client):
    response = client.get("/live-session")

    assert response.status_code == 401


def test_initial_status(client):
    response = client.get("/live-session", headers=HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["state"] == "idle"
    assert data["elapsed_display"] == "00:00"
    assert data["vibration_intensity"] == 50
    assert data["device_connected"] is True


def test_start_with_disconnected_device(client, device_channel):
    device_channel.set_connected(False)

    response = client.post("/live-session/start", headers=HEADERS)

    assert response.status_code == 409
    assert response.json()["detail"] == "start session failed: therapy device is not connected"
    assert client.get("/live-session", headers=HEADERS).json()["is_active"] is False


def test_start_adjust_stop(client, mock_repository, device_channel):
    started = client.post("/live-session/start", headers=HEADERS)
    adjusted = client.put("/live-session/intensity", json={"value": 60}, headers=HEADERS)
    stopped = client.post("/live-session/stop", headers=HEADERS)

    assert started.status_code == 200
    assert started.json()["state"] == "active"
    assert adjusted.json()["vibration_intensity"] == 60
    assert device_channel.intensity == 60
    assert stopped.status_code == 200
    data = stopped.json()
    assert data["record"]["user_id"] == "alice"
    assert data["record"]["vibration_intensity"] == 60
    assert data["message"].startswith("Your therapy session has been saved.")
    mock_repository.save.assert_awaited_once()


def test_start_twice_conflicts(client):
    client.post("/live-session/start", headers=HEADERS)

    response = client.post("/live-session/start", headers=HEADERS)

    assert response.status_code == 409


def test_intensity_out_of_range(client):
    response = client.put("/live-session/intensity", json={"value": 150}, headers=HEADERS)

    assert response.status_code == 400
    assert response.json()["detail"].startswith("adjust intensity failed")
    assert client.get("/live-session", headers=HEADERS).json()["vibration_intensity"] == 50


def test_stop_without_session_conflicts(client):
    response = client.post("/live-session/stop", headers=HEADERS)

    assert response.status_code == 409


def test_emergency_stop_and_acknowledge(client):
    client.post("/live-session/start", headers=HEADERS)

    stopped = client.post("/live-session/emergency-stop", headers=HEADERS)
    acknowledged = client.post("/live-session/acknowledge", headers=HEADERS)

    assert stopped.status_code == 200
    assert acknowledged.status_code == 200
    assert acknowledged.json()["state"] == "idle"
    assert acknowledged.json()["elapsed_seconds"] == 0


def test_failed_save_can_be_retried(client, mock_repository):
    saved_id = mock_repository.save.return_value
    mock_repository.save.side_effect = [
        PersistenceError("save session failed: session store unavailable"),
        saved_id,
    ]
    client.post("/live-session/start", headers=HEADERS)

    failed = client.post("/live-session/stop", headers=HEADERS)
    status = client.get("/live-session", headers=HEADERS).json()
    retried = client.post("/live-session/retry-save", headers=HEADERS)

    assert failed.status_code == 503
    assert failed.json()["detail"] == "save session failed: session store unavailable"
    assert status["state"] == "idle"
    assert status["pending_record"] is not None
    assert retried.status_code == 200
    assert retried.json()["record"]["id"] == str(saved_id)


def test_failed_save_can_be_discarded(client, mock_repository):
    mock_repository.save.side_effect = PersistenceError("save session failed")
    client.post("/live-session/start", headers=HEADERS)
    client.post("/live-session/stop", headers=HEADERS)

    response = client.post("/live-session/discard", headers=HEADERS)

    assert response.status_code == 200
    assert response.json()["pending_record"] is None
    assert client.post("/live-session/retry-save", headers=HEADERS).status_code == 409


def test_users_have_separate_sessions(client):
    client.post("/live-session/start", headers=HEADERS)

    other = client.get("/live-session", headers={"X-User-ID": "bob"})

    assert other.json()["state"] == "idle"


def test_unsaved_record_blocks_new_session(client, mock_repository):
    mock_repository.save.side_effect = PersistenceError("save session failed")
    client.post("/live-session/start", headers=HEADERS)
    client.post("/live-session/stop", headers=HEADERS)

    response = client.post("/live-session/start", headers=HEADERS)

    assert response.status_code == 409
    assert response.json()["detail"].startswith("start session failed")
    assert client.get("/live-session", headers=HEADERS).json()["pending_record"] is not None
