from unittest.mock import patch

import pytest

from postboard.app import create_app, hello, main


def test_hello_text():
    assert hello() == "Hello from Actix + SeaORM!"


def test_create_app_serves_routes(tmp_path):
    app = create_app(tmp_path / "board.db")
    client = app.test_client()
    user = client.post("/create_user", json={"name": "Ann", "surname": "Lee"}).get_json()
    post = client.post(
        "/posts", json={"title": "T", "text": "X", "user_id": user["id"]}
    ).get_json()
    assert client.get("/posts").get_json() == [post]
    assert client.get(f"/users/{user['id']}").get_json() == user


def test_create_app_keeps_field_order(tmp_path):
    client = create_app(tmp_path / "board.db").test_client()
    resp = client.post("/create_user", json={"name": "Ann", "surname": "Lee"})
    text = resp.get_data(as_text=True)
    assert text.index('"id"') < text.index('"name"') < text.index('"surname"')


def test_data_persists_across_apps(tmp_path):
    path = tmp_path / "board.db"
    first = create_app(path).test_client()
    user = first.post("/create_user", json={"name": "Ann", "surname": "Lee"}).get_json()
    second = create_app(path).test_client()
    assert second.get("/users").get_json() == [user]


def test_root_is_not_routed(tmp_path):
    client = create_app(tmp_path / "board.db").test_client()
    assert client.get("/").status_code == 404


def test_main_requires_database_url(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    with pytest.raises(SystemExit) as info:
        main([])
    assert info.value.code == 2


def test_main_runs_server(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    db_file = tmp_path / "served.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite://{db_file}")
    with patch("flask.Flask.run") as run:
        assert main([]) == 0
    run.assert_called_once_with(host="127.0.0.1", port=8080)
    assert db_file.exists()


def test_main_accepts_host_and_port(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    db_file = tmp_path / "other.db"
    with patch("flask.Flask.run") as run:
        assert main(["-u", str(db_file), "--host", "0.0.0.0", "--port", "9000"]) == 0
    run.assert_called_once_with(host="0.0.0.0", port=9000)
    assert db_file.exists()