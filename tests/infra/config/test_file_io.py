import json
from pathlib import Path

import pytest

from streamcrypt.infra.config.file_io import (
    _load_by_extension,
    copy_default_config,
    load_config,
    load_config_or_default,
    save_config,
    save_config_file,
)


@pytest.fixture
def no_user_settings(tmp_path, monkeypatch):
    """Point the per-user fallback at a file that does not exist."""
    fake = tmp_path / "user" / "settings.json"
    monkeypatch.setattr("streamcrypt.infra.config.file_io.SETTING_PATH", fake)
    return fake


# ================================================================
# load_config() and _resolve_file_path behavior tests
# ================================================================


def test_load_config_user_path_exists(tmp_path, monkeypatch):
    """User passed config_path and the file exists -> load it directly."""
    cfgfile = tmp_path / "custom.toml"
    cfgfile.write_text("[rc4]\nchunk_size = 1024", encoding="utf-8")

    monkeypatch.chdir(tmp_path)

    assert load_config(config_path=cfgfile) == {"rc4": {"chunk_size": 1024}}


def test_load_config_user_path_not_exists_ignores_local(
    tmp_path, monkeypatch, no_user_settings
):
    """A missing explicit path is an error even if ./settings.toml exists."""
    (tmp_path / "settings.toml").write_text("a = 1", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    with pytest.raises(FileNotFoundError):
        load_config(config_path=tmp_path / "not_exists.toml")


def test_load_config_local_settings_toml(tmp_path, monkeypatch, no_user_settings):
    settings = tmp_path / "settings.toml"
    settings.write_text("[general]\nlog_level = 'DEBUG'", encoding="utf-8")

    monkeypatch.chdir(tmp_path)

    assert load_config() == {"general": {"log_level": "DEBUG"}}


def test_load_config_local_settings_json(tmp_path, monkeypatch, no_user_settings):
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"a": 1}), encoding="utf-8")

    monkeypatch.chdir(tmp_path)

    assert load_config() == {"a": 1}


def test_load_config_toml_preferred_over_json(tmp_path, monkeypatch, no_user_settings):
    (tmp_path / "settings.toml").write_text("src = 'toml'", encoding="utf-8")
    (tmp_path / "settings.json").write_text('{"src": "json"}', encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    assert load_config() == {"src": "toml"}


def test_load_config_fallback_setting_file(tmp_path, monkeypatch):
    """No config_path, no local file, but SETTING_PATH exists -> load fallback."""
    fallback = tmp_path / "fallback.json"
    fallback.write_text(json.dumps({"a": 1}), encoding="utf-8")

    monkeypatch.setattr("streamcrypt.infra.config.file_io.SETTING_PATH", fallback)
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)

    assert load_config() == {"a": 1}


def test_load_config_none_found(tmp_path, monkeypatch, no_user_settings):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(FileNotFoundError):
        load_config()


def test_load_config_or_default_empty_when_nothing_found(
    tmp_path, monkeypatch, no_user_settings
):
    monkeypatch.chdir(tmp_path)
    assert load_config_or_default() == {}


def test_load_config_or_default_explicit_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config_or_default(tmp_path / "missing.toml")


# ================================================================
# _load_by_extension JSON/TOML errors
# ================================================================


def test_load_by_extension_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{ invalid json", encoding="utf-8")

    with pytest.raises(ValueError) as exc:
        _load_by_extension(path)

    assert "Invalid JSON in" in str(exc.value)


def test_load_by_extension_invalid_toml(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("a = [1,2,,3]", encoding="utf-8")

    with pytest.raises(ValueError) as exc:
        _load_by_extension(path)

    assert "Invalid TOML in" in str(exc.value)


def test_load_by_extension_unsupported_ext(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("hello: 1")

    with pytest.raises(ValueError) as exc:
        _load_by_extension(path)

    assert "Unsupported config file extension" in str(exc.value)


def test_load_by_extension_root_not_dict(tmp_path):
    path = tmp_path / "not_dict.json"
    path.write_text(json.dumps([1, 2, 3]), encoding="utf-8")

    with pytest.raises(ValueError) as exc:
        _load_by_extension(path)

    assert "Config root must be a dict" in str(exc.value)


# ================================================================
# copy_default_config
# ================================================================


def test_copy_default_config_bundled_sample(tmp_path):
    """The shipped sample parses and carries every section."""
    target = tmp_path / "out" / "settings.toml"
    copy_default_config(target)

    cfg = _load_by_extension(target)
    assert set(cfg) == {"general", "rc4", "aead"}
    assert cfg["rc4"]["chunk_size"] == 65536


def test_copy_default_config_uses_resource(tmp_path, monkeypatch):
    dummy = tmp_path / "dummy.toml"
    dummy.write_text("a = 1", encoding="utf-8")

    monkeypatch.setattr("streamcrypt.infra.config.file_io.DEFAULT_CONFIG_FILE", dummy)

    target = tmp_path / "out" / "settings.toml"
    copy_default_config(target)

    assert target.read_text(encoding="utf-8") == "a = 1"


# ================================================================
# save_config / save_config_file
# ================================================================


def test_save_config_creates_parent_and_saves(tmp_path):
    outfile = tmp_path / "nested" / "config.json"

    save_config({"a": 1}, outfile)
    assert json.loads(outfile.read_text(encoding="utf-8")) == {"a": 1}


def test_save_config_failure_propagates(tmp_path, monkeypatch):
    outfile = tmp_path / "cannot_write.json"

    def fake_open(*args, **kwargs):
        raise OSError("write fail")

    monkeypatch.setattr(Path, "open", fake_open)

    with pytest.raises(OSError):
        save_config({"a": 1}, outfile)


def test_save_config_file_source_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        save_config_file(tmp_path / "missing.toml", tmp_path / "out.json")


def test_save_config_file_valid(tmp_path):
    source = tmp_path / "in.toml"
    source.write_text("[aead]\nkey_file = 'k.hex'", encoding="utf-8")

    out = tmp_path / "out.json"
    save_config_file(source, out)

    assert json.loads(out.read_text(encoding="utf-8")) == {
        "aead": {"key_file": "k.hex"}
    }
