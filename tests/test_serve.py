from kpi_dashboard_functions.api import serve


def test_serve_runs_application_with_uvicorn(monkeypatch) -> None:
    captured: dict = {}

    def fake_run(app: str, **kwargs) -> None:
        captured["app"] = app
        captured.update(kwargs)

    monkeypatch.setattr(serve.uvicorn, "run", fake_run)

    assert serve.main(["--host", "0.0.0.0", "--port", "9000"]) == 0
    assert captured == {
        "app": "kpi_dashboard_functions.api.app:app",
        "host": "0.0.0.0",
        "port": 9000,
        "reload": False,
    }
