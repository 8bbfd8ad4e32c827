import pytest

from streamcrypt.infra.config.adapter import ConfigAdapter
from streamcrypt.schemas import AEADConfig, GeneralConfig, RC4Config


@pytest.fixture
def sample_config(tmp_path) -> dict:
    """Construct a representative configuration mapping for tests."""
    return {
        "general": {
            "log_level": "debug",
            "log_dir": str(tmp_path / "logs"),
        },
        "rc4": {"chunk_size": 4096},
        "aead": {"key_file": str(tmp_path / "k.hex")},
    }


def test_get_config_returns_copy(sample_config):
    adapter = ConfigAdapter(sample_config)
    assert adapter.get_config() == sample_config
    assert adapter.get_config() is not sample_config


def test_sections_resolved(sample_config, tmp_path):
    adapter = ConfigAdapter(sample_config)

    assert adapter.get_general_config() == GeneralConfig(
        log_level="DEBUG", log_dir=str(tmp_path / "logs")
    )
    assert adapter.get_rc4_config() == RC4Config(chunk_size=4096)
    assert adapter.get_aead_config() == AEADConfig(key_file=str(tmp_path / "k.hex"))


def test_defaults_when_empty():
    adapter = ConfigAdapter({})

    assert adapter.get_general_config() == GeneralConfig()
    assert adapter.get_rc4_config() == RC4Config()
    assert adapter.get_aead_config() == AEADConfig()


def test_empty_strings_mean_unset():
    """The sample file uses "" for optional paths."""
    adapter = ConfigAdapter({"general": {"log_dir": ""}, "aead": {"key_file": ""}})

    assert adapter.get_general_config().log_dir is None
    assert adapter.get_aead_config().key_file is None


@pytest.mark.parametrize("chunk_size", [0, -1])
def test_rc4_chunk_size_must_be_positive(chunk_size):
    adapter = ConfigAdapter({"rc4": {"chunk_size": chunk_size}})
    with pytest.raises(ValueError):
        adapter.get_rc4_config()


def test_section_must_be_table():
    adapter = ConfigAdapter({"rc4": 5})
    with pytest.raises(ValueError):
        adapter.get_rc4_config()
