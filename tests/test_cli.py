import importlib
import json
import sys

import pytest

# Import run.py as a module and exercise parse_args + main with a patched
# start_server so no network listener is opened.


@pytest.fixture()
def run_module(monkeypatch):
    # Clean import each time (run.py reads VERSION once)
    if "run" in sys.modules:
        del sys.modules["run"]
    mod = importlib.import_module("run")
    return mod


def test_version_flag_outputs_version(run_module, capsys):
    ver = run_module.__version__
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    captured = capsys.readouterr().out
    assert ver in captured
    assert "tilegen layout server" in captured


def test_default_command_is_server(run_module):
    ns = run_module.parse_args([])
    assert ns.command == "server"


def test_server_main_invokes_start_server(monkeypatch, run_module, capsys):
    calls = {}

    def fake_start_server(host, port, debug):
        calls["called"] = True
        calls["host"] = host
        calls["port"] = port
        calls["debug"] = debug

    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")

    import tilegen.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)

    exit_code = run_module.main(["server"])
    assert exit_code == 0
    assert calls == {"called": True, "host": "127.0.0.1", "port": 5555, "debug": False}
    assert "tilegen Layout Server" in capsys.readouterr().out


def test_server_flags_override_env(monkeypatch, run_module):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    monkeypatch.setenv("PORT", "5555")
    import tilegen.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)
    assert run_module.main(["server", "--host", "0.0.0.0", "--port", "6001", "--debug"]) == 0
    assert calls == {"host": "0.0.0.0", "port": 6001, "debug": True}


def test_generate_ascii_to_stdout(run_module, capsys):
    assert run_module.main(["generate", "--width", "10", "--height", "8", "--seed", "5"]) == 0
    lines = capsys.readouterr().out.rstrip("\n").split("\n")
    assert len(lines) == 8
    assert all(len(line) == 10 for line in lines)


def test_generate_json_to_file(run_module, tmp_path, capsys):
    out = tmp_path / "layout.json"
    code = run_module.main(
        ["generate", "--width", "12", "--height", "9", "--seed", "crypt", "--format", "json", "--output", str(out)]
    )
    assert code == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert (data["width"], data["height"]) == (12, 9)
    assert "Wrote json layout" in capsys.readouterr().out


def test_generate_tiled(run_module, capsys):
    assert run_module.main(["generate", "--width", "8", "--height", "8", "--seed", "1", "--format", "tiled"]) == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["type"] == "map"


def test_generate_negative_size_fails(run_module, capsys):
    assert run_module.main(["generate", "--width", "-3", "--seed", "1"]) == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_generate_same_seed_same_output(run_module, capsys):
    run_module.main(["generate", "--width", "15", "--height", "10", "--seed", "99"])
    first = capsys.readouterr().out
    run_module.main(["generate", "--width", "15", "--height", "10", "--seed", "99"])
    assert capsys.readouterr().out == first
