import pytest

from payrex.core.config import (
    API_BASE_URL,
    ClientParameters,
    Config,
    ConfigBuilder,
    ConfigError,
    Environment,
    load_config,
)
from payrex.core.environment import build_environment, load_env_file


def test_builder_applies_defaults():
    config = ConfigBuilder().api_key("sk_live_abcdef123456").build()

    assert config.api_base_url == API_BASE_URL
    assert config.timeout == 30.0
    assert config.max_retries == 3
    assert config.retry_delay == 0.5
    assert config.environment is Environment.LIVE
    assert not config.is_test_mode


def test_builder_is_immutable():
    base = ConfigBuilder().api_key("sk_test_abcdef123456")
    tuned = base.max_retries(5)

    assert base.build().max_retries == 3
    assert tuned.build().max_retries == 5


def test_build_rejects_empty_credential():
    with pytest.raises(ConfigError) as excinfo:
        ConfigBuilder().api_key("   ").build()

    assert excinfo.value.fields == ("api_key",)


@pytest.mark.parametrize("retries", [-1, 11, 2.5, True])
def test_build_rejects_out_of_range_retries(retries):
    with pytest.raises(ConfigError) as excinfo:
        ConfigBuilder().api_key("sk_test_abcdef123456").max_retries(retries).build()

    assert "max_retries" in excinfo.value.fields


def test_build_reports_every_invalid_field():
    builder = (
        ConfigBuilder()
        .api_key("")
        .timeout(0)
        .api_base_url("ftp://example.com")
        .environment("staging")
    )

    with pytest.raises(ConfigError) as excinfo:
        builder.build()

    assert set(excinfo.value.fields) == {"api_key", "timeout", "api_base_url", "environment"}


def test_max_retry_delay_must_cover_initial_delay():
    with pytest.raises(ConfigError) as excinfo:
        ConfigBuilder().api_key("sk_test_abcdef123456").retry_delay(5).max_retry_delay(1).build()

    assert excinfo.value.fields == ("max_retry_delay",)


def test_test_mode_switches_environment():
    config = ConfigBuilder().api_key("sk_test_abcdef123456").test_mode().build()

    assert config.environment is Environment.TEST
    assert config.is_test_mode


def test_repr_masks_the_credential():
    config = Config.new("sk_test_abcdef123456")

    assert "sk_test_abcdef123456" not in repr(config)
    assert "3456" in repr(config)


def test_url_for_joins_without_double_slashes():
    config = ConfigBuilder().api_key("sk_test_abcdef123456").api_base_url("https://x.test/").build()

    assert config.url_for("/payment_intents") == "https://x.test/payment_intents"


def test_from_mapping_reads_payrex_variables():
    config = Config.from_mapping(
        {
            "PAYREX_API_KEY": "sk_test_abcdef123456",
            "PAYREX_TIMEOUT_SECONDS": "12.5",
            "PAYREX_MAX_RETRIES": "0",
            "PAYREX_ENVIRONMENT": "TEST",
        }
    )

    assert config.timeout == 12.5
    assert config.max_retries == 0
    assert config.environment is Environment.TEST


def test_from_mapping_rejects_unparsable_numbers():
    with pytest.raises(ConfigError) as excinfo:
        Config.from_mapping({"PAYREX_API_KEY": "sk_test_x", "PAYREX_MAX_RETRIES": "many"})

    assert excinfo.value.fields == ("PAYREX_MAX_RETRIES",)


def test_load_config_layers_file_base_and_keywords(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text(
        "# local settings\n"
        "export PAYREX_API_KEY='sk_test_from_file'\n"
        "PAYREX_TIMEOUT_SECONDS=10\n"
        'PAYREX_MAX_RETRIES="2"\n'
    )

    config = load_config(
        env_file=str(env_file),
        base={"PAYREX_TIMEOUT_SECONDS": "20"},
        max_retries=4,
    )

    assert config.api_key == "sk_test_from_file"
    assert config.timeout == 20.0
    assert config.max_retries == 4


def test_load_config_accepts_parameter_bundle(tmp_path):
    config = load_config(
        env_file=str(tmp_path / "missing.env"),
        base={},
        parameters=ClientParameters(api_key="sk_test_bundle", environment=Environment.TEST),
    )

    assert config.api_key == "sk_test_bundle"
    assert config.is_test_mode


def test_load_config_rejects_unknown_keyword():
    with pytest.raises(TypeError):
        load_config(env_file=None, base={}, api_key="sk_test_x", colour="blue")


def test_build_environment_overrides_win(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("PAYREX_API_KEY=file\nPAYREX_USER_AGENT=agent-from-file\n")

    environment = build_environment(
        env_file=str(env_file),
        base={"PAYREX_API_KEY": "base"},
        overrides={"PAYREX_API_KEY": "override"},
    )

    assert environment.get("PAYREX_API_KEY") == "override"
    assert environment.get("PAYREX_USER_AGENT") == "agent-from-file"
    assert environment.get("PAYREX_MISSING", "fallback") == "fallback"


def test_load_env_file_keeps_existing_values(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("PAYREX_API_KEY=file\nPAYREX_ENVIRONMENT=test\n")
    target = {"PAYREX_API_KEY": "already-set"}

    merged = load_env_file(str(env_file), environ=target)

    assert merged == {"PAYREX_API_KEY": "already-set", "PAYREX_ENVIRONMENT": "test"}
