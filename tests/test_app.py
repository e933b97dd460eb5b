import numpy as np
import pytest

import app as quadpic_app
from quadpic.io import decode_image
from quadpic.pipeline import FrameParams


@pytest.fixture
def client(monkeypatch):
    pixels = np.zeros((8, 8, 3), dtype=np.uint8)
    pixels[:, 4:] = (200, 100, 50)
    monkeypatch.setitem(quadpic_app.STATE, "pixels", pixels)
    monkeypatch.setitem(quadpic_app.STATE, "params", FrameParams())
    monkeypatch.setitem(quadpic_app.STATE, "stats", {})
    monkeypatch.setitem(quadpic_app.STATE, "error", "")
    quadpic_app.app.config["TESTING"] = True
    with quadpic_app.app.test_client() as test_client:
        yield test_client


def test_landing_page(client):
    response = client.get("/")
    assert response.status_code == 200
    assert b"quadpic" in response.data


def test_get_params(client):
    data = client.get("/api/params").get_json()
    assert data["max_diff"] == 5.0
    assert data["max_depth"] == 7
    assert data["outline"] is True


def test_set_params(client):
    data = client.post("/api/params", json={"max_diff": 2.5, "grid": True}).get_json()
    assert data["max_diff"] == 2.5
    assert data["grid"] is True
    assert quadpic_app.STATE["params"].grid


@pytest.mark.parametrize(
    "payload",
    [{"max_depth": 99}, {"max_diff": -1}, {"outline": "yes"}, {"max_diff": "abc"}],
)
def test_set_params_rejects_bad_values(client, payload):
    response = client.post("/api/params", json=payload)
    assert response.status_code == 400
    assert "error" in response.get_json()
    assert quadpic_app.STATE["params"] == FrameParams()


def test_keys_update_params(client):
    data = client.post("/api/keys", json={"keys": ["q", "w"]}).get_json()
    assert data["max_diff"] == pytest.approx(5.1)
    assert data["outline"] is False


def test_keys_reject_bad_payload(client):
    response = client.post("/api/keys", json={"keys": "q"})
    assert response.status_code == 400


def test_frame_png_and_stats(client):
    client.post("/api/params", json={"outline": False})
    response = client.get("/frame.png")
    assert response.status_code == 200
    assert response.mimetype == "image/png"

    frame = decode_image(response.data)
    assert np.array_equal(frame, quadpic_app.STATE["pixels"])

    stats = client.get("/api/stats").get_json()
    assert stats["stats"]["leaves"] == 4
    assert stats["error"] == ""


@pytest.mark.parametrize(
    "payload",
    [
        {"max_diff": "nan"},
        {"max_diff": "inf"},
        {"max_diff": True},
        {"max_diff": False},
        {"max_depth": True},
    ],
)
def test_set_params_rejects_non_finite_and_boolean_numbers(client, payload):
    response = client.post("/api/params", json=payload)
    assert response.status_code == 400
    assert quadpic_app.STATE["params"] == FrameParams()

    keys = client.post("/api/keys", json={"keys": []})
    assert b"NaN" not in keys.data
    assert keys.get_json()["max_diff"] == 5.0


def test_frame_png_reports_unreadable_image(client, monkeypatch, tmp_path):
    broken = tmp_path / "broken.jpg"
    broken.write_bytes(b"not an image")
    monkeypatch.setitem(quadpic_app.STATE, "pixels", None)
    monkeypatch.setitem(quadpic_app.CONFIG, "input_image", str(broken))

    response = client.get("/frame.png")
    assert response.status_code == 400
    assert "Unable to read image" in response.get_json()["error"]
    assert client.get("/api/stats").get_json()["error"] != ""


def test_landing_page_tracks_keys_by_code(client):
    page = client.get("/").data
    assert b"e.code" in page
    assert b'"blur"' in page
