from swapdesk import server


def test_resolve_port():
    assert server.resolve_port(None) == 8000
    assert server.resolve_port("9001") == 9001
    assert server.resolve_port("not-a-port") == 8000


def test_run_starts_uvicorn_with_env_port(monkeypatch):
    calls = {}

    def fake_run(target, **kwargs):
        calls["target"] = target
        calls.update(kwargs)

    monkeypatch.setenv("PORT", "8123")
    monkeypatch.setattr(server.uvicorn, "run", fake_run)

    server.run()

    assert calls["target"] == "swapdesk.main:app"
    assert calls["port"] == 8123
    assert calls["proxy_headers"] is True
