import importlib
import json
import sys

import pytest


@pytest.fixture()
def run_module(monkeypatch):
    # Fresh import each time since run.py reads VERSION at import
    if "run" in sys.modules:
        del sys.modules["run"]
    mod = importlib.import_module("run")
    # Keep pytest's own SIGINT handling intact
    monkeypatch.setattr(mod.signal, "signal", lambda *a, **k: None)
    for key in ("DUNGEON_WIDTH", "DUNGEON_HEIGHT", "DUNGEON_SEED", "DUNGEON_ROOM_ATTEMPTS"):
        monkeypatch.delenv(key, raising=False)
    return mod


def test_version_flag_outputs_version(run_module, capsys):
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert "Undercroft" in out
    assert run_module.__version__ in out


def test_default_command_is_server(run_module):
    assert run_module.parse_args([]).command == "server"


def test_server_main_invokes_start_server(monkeypatch, run_module):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    server = importlib.import_module("undercroft.server")
    monkeypatch.setattr(server, "start_server", fake_start_server)
    assert run_module.main(["server", "--host", "127.0.0.1", "--port", "5055", "--debug"]) == 0
    assert calls == {"host": "127.0.0.1", "port": 5055, "debug": True}


def test_generate_writes_json(run_module, tmp_path, capsys):
    out_path = tmp_path / "dungeon.json"
    rc = run_module.main(["generate", "--seed", "5", "--width", "21", "--height", "21", "--json", str(out_path)])
    assert rc == 0
    assert "seed=5" in capsys.readouterr().out
    data = json.loads(out_path.read_text())
    assert data["seed"] == 5
    assert len(data["grid"]) == 21


def test_diagnose_exit_code(run_module, capsys):
    rc = run_module.main(["diagnose", "4", "8", "--width", "31", "--height", "31"])
    assert rc == 0
    report = json.loads(capsys.readouterr().out)
    assert report["ok"] is True
    assert len(report["results"]) == 2


def test_invalid_generation_flags_raise(run_module):
    from undercroft.dungeon import InvalidConfig

    with pytest.raises(InvalidConfig):
        run_module.main(["generate", "--width", "20"])
