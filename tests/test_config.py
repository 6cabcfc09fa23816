import tomllib

import pytest

from ordermenu.config import (
    JwtConfig,
    ServerConfig,
    check_config_file,
    generate_secret,
    get_config,
    load_config,
)
from ordermenu.logsetup import LogConfig


def test_init_config(tmp_path):
    loaded = load_config(tmp_path)
    assert get_config() == loaded
    assert (tmp_path / "data" / "config.toml").exists()


def test_defaults():
    config = ServerConfig()
    assert config.listen_addr == "127.0.0.1:8008"
    assert config.jwt.expiry == 3600
    assert len(config.jwt.secret) == 32


def test_generate_secret_is_alphanumeric():
    value = generate_secret(50)
    assert len(value) == 50
    assert value.isalnum() and value.isascii()


def test_reload_keeps_written_config(tmp_path):
    first = load_config(tmp_path)
    second = load_config(tmp_path)
    assert first == second


def test_existing_valid_file_is_read(tmp_path):
    path = tmp_path / "data" / "config.toml"
    path.parent.mkdir(parents=True)
    secret = "secret"
    original = ServerConfig(
        listen_addr="0.0.0.0:9000",
        jwt=JwtConfig(secret=secret, expiry=60),
        log=LogConfig(file_name="x", level="debug", rolling="never"),
    )
    import tomli_w

    path.write_text(tomli_w.dumps(original.to_dict()), encoding="utf-8")
    assert check_config_file(path, tmp_path) == original


def test_malformed_file_is_rewritten(tmp_path):
    path = tmp_path / "data" / "config.toml"
    path.parent.mkdir(parents=True)
    path.write_text("listen_addr = 5\n", encoding="utf-8")
    config = check_config_file(path, tmp_path)
    assert config.listen_addr == "127.0.0.1:8008"
    on_disk = ServerConfig.from_dict(tomllib.loads(path.read_text(encoding="utf-8")))
    assert on_disk == config


def test_dict_round_trip():
    config = ServerConfig()
    assert ServerConfig.from_dict(config.to_dict()) == config


def test_from_dict_missing_key():
    data = ServerConfig().to_dict()
    del data["log"]
    with pytest.raises(ValueError):
        ServerConfig.from_dict(data)


def test_from_dict_wrong_type():
    data = ServerConfig().to_dict()
    data["jwt"]["expiry"] = "soon"
    with pytest.raises(ValueError):
        ServerConfig.from_dict(data)