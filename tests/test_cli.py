import importlib
import json
import sys

import pytest

# run.py is imported as a module; main() is exercised with start_server patched
# so no networking happens.


@pytest.fixture()
def run_module():
    # run.py reads VERSION once at import
    if "run" in sys.modules:
        del sys.modules["run"]
    return importlib.import_module("run")


def test_version_flag_outputs_version(run_module, capsys):
    ver = run_module.__version__
    with pytest.raises(SystemExit) as exc:
        run_module.parse_args(["--version"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert ver in out
    assert "Roomwalk" in out


def test_default_command_is_generate(run_module):
    ns = run_module.parse_args([])
    assert ns.command == "generate"
    assert ns.seed is None
    assert ns.json is False


def test_generate_prints_map(run_module, capsys):
    assert run_module.main(["generate", "--seed", "42"]) == 0
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0].startswith("seed=42 ")
    assert "rooms=20" in lines[0]
    assert len(lines[1:]) == 4
    assert sum(row.count("S") for row in lines[1:]) == 1


def test_generate_json(run_module, capsys):
    assert run_module.main(["generate", "--seed", "42", "--json", "--max-x", "2000"]) == 0
    data = json.loads(capsys.readouterr().out)
    assert data["seed"] == 42
    assert data["config"]["max_x"] == 2000
    assert len(data["rooms"]) == 15


def test_string_seed_matches_api_hashing(run_module, capsys):
    from roomwalk.routes.layout_api import _coerce_seed

    run_module.main(["generate", "--seed", "dragon", "--json"])
    assert json.loads(capsys.readouterr().out)["seed"] == _coerce_seed("dragon")


def test_rate_reports_each_step(run_module, capsys):
    assert run_module.main(["generate", "--seed", "3", "--rate", "0.001"]) == 0
    out = capsys.readouterr().out
    assert "step 1:" in out


def test_invalid_bounds_exit_code(run_module, capsys):
    assert run_module.main(["generate", "--min-y", "4000", "--max-y", "0"]) == 2
    assert "min_y" in capsys.readouterr().err


def test_bad_env_exit_code(run_module, monkeypatch):
    monkeypatch.setenv("ROOMWALK_MOVE_AMOUNT", "lots")
    assert run_module.main(["generate"]) == 2


def test_server_main_invokes_start_server(monkeypatch, run_module):
    calls = {}

    def fake_start_server(host, port, debug):
        calls.update(host=host, port=port, debug=debug)

    monkeypatch.setenv("PORT", "5555")
    monkeypatch.setenv("HOST", "127.0.0.1")
    import roomwalk.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", fake_start_server)
    assert run_module.main(["server"]) == 0
    assert calls == {"host": "127.0.0.1", "port": 5555, "debug": False}


def test_server_flags_win(monkeypatch, run_module):
    calls = {}
    import roomwalk.server as server_mod

    monkeypatch.setattr(server_mod, "start_server", lambda host, port, debug: calls.update(port=port, debug=debug))
    run_module.main(["server", "--port", "6001", "--debug"])
    assert calls == {"port": 6001, "debug": True}


def test_env_file_argument(monkeypatch, tmp_path, run_module, capsys):
    env_file = tmp_path / ".env"
    env_file.write_text("ROOMWALK_MAX_X=1000\n")
    # registered with monkeypatch so teardown drops what load_dotenv writes
    monkeypatch.setenv("ROOMWALK_MAX_X", "0")
    monkeypatch.delenv("ROOMWALK_MAX_X")
    run_module.main(["--env-file", str(env_file), "generate", "--seed", "1", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data["config"]["max_x"] == 1000


def test_oversized_grid_exit_code(run_module, capsys):
    assert run_module.main(["generate", "--move", "1", "--max-y", "100000", "--max-x", "100000"]) == 2
    assert "cell limit" in capsys.readouterr().err
