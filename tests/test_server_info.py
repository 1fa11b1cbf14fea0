from dicepoker.server_info import (
    GAME_DEFAULTS,
    format_motd,
    get_game_settings,
    get_server_info,
    load_env_file,
)
from dicepoker.version import get_version_info


def test_load_env_file(tmp_path):
    env_path = tmp_path / ".env"
    env_path.write_text("SERVER_ENV=Production\nSERVER_HOST=example.com\n# comment\nNAME=value=with=equals\n")
    env_vars = load_env_file(str(env_path))
    assert env_vars["SERVER_ENV"] == "Production"
    assert env_vars["SERVER_HOST"] == "example.com"
    # Ensure values with multiple equals are preserved
    assert env_vars["NAME"] == "value=with=equals"

    assert load_env_file(str(tmp_path / "missing.env")) == {}


def test_get_server_info_uses_environment(monkeypatch, tmp_path):
    env_path = tmp_path / ".env"
    env_path.write_text("SERVER_ENV=Staging\nSERVER_PORT=10022\n")

    monkeypatch.setenv("SERVER_ENV", "Public Stable")
    monkeypatch.setenv("SERVER_HOST", "dice.example")
    monkeypatch.setenv("SERVER_PORT", "22222")
    monkeypatch.setenv("SERVER_NAME", "Prod Dice")
    monkeypatch.chdir(tmp_path)

    info = get_server_info()
    assert info["server_env"] == "Public Stable"
    assert info["server_host"] == "dice.example"
    assert info["server_port"] == "22222"
    assert info["server_name"] == "Prod Dice"
    assert info["ssh_connection_string"] == "dice.example -p 22222"
    for key, value in get_version_info().items():
        assert info[key] == value

    monkeypatch.setenv("SERVER_PORT", "22")
    assert get_server_info()["ssh_connection_string"] == "dice.example"


def test_env_file_used_when_environment_missing(monkeypatch, tmp_path):
    (tmp_path / ".env").write_text("SERVER_ENV=Staging\nSERVER_PORT=10022\n")
    for key in ("SERVER_ENV", "SERVER_HOST", "SERVER_PORT", "SERVER_NAME"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)

    info = get_server_info()
    assert info["server_env"] == "Staging"
    assert info["server_port"] == "10022"
    assert info["server_host"] == "localhost"


def test_game_settings(monkeypatch, tmp_path, caplog):
    monkeypatch.chdir(tmp_path)
    for key in GAME_DEFAULTS:
        monkeypatch.delenv(key, raising=False)
    settings = get_game_settings()
    assert settings["bot_action_delay"] == 1.5
    assert settings["phase_advance_delay"] == 1.0
    assert settings["room_idle_timeout"] == 1800.0
    assert settings["healthcheck_port"] == 22223

    monkeypatch.setenv("BOT_ACTION_DELAY", "0.25")
    monkeypatch.setenv("HEALTHCHECK_PORT", "not-a-port")
    settings = get_game_settings()
    assert settings["bot_action_delay"] == 0.25
    assert settings["healthcheck_port"] == 22223
    assert "Invalid value for HEALTHCHECK_PORT" in caplog.text


def test_format_motd():
    info = {
        'server_name': 'Dice Room',
        'server_env': 'Development',
        'ssh_connection_string': 'localhost -p 22222',
        'version': 'dev',
        'build_date': 'dev',
    }
    motd = format_motd(info)
    assert "Dice Room" in motd
    assert "ssh <username>@localhost -p 22222" in motd
    assert "Version" not in motd

    info['version'] = '1.2.3'
    assert "1.2.3" in format_motd(info)
