"""Tests for configuration loading."""

import pytest

from tierfix.infrastructure.config import (
    DictConfigSource,
    EnvConfigSource,
    load_config,
)
from tierfix.stores.tiering.base import (
    ConfigurationError,
    ListingMode,
    TierType,
)


class TestEnvConfigSource:
    """Tests for EnvConfigSource."""

    def test_load_with_prefix(self):
        """Test only prefixed variables are read."""
        source = EnvConfigSource(
            environ={
                "TIERFIX_CONTAINER": "backups",
                "TIERFIX_MAX_OBJECTS": "100",
                "TIERFIX_DRY_RUN": "true",
                "OTHER_CONTAINER": "ignored",
            }
        )

        values = source.load()

        assert values == {"container": "backups", "max_objects": 100, "dry_run": True}

    def test_parse_values(self):
        """Test value type inference."""
        source = EnvConfigSource(
            environ={
                "TIERFIX_A": "no",
                "TIERFIX_B": "none",
                "TIERFIX_C": "text",
                "TIERFIX_D": "7",
            }
        )

        assert source.load() == {"a": False, "b": None, "c": "text", "d": 7}

    def test_reads_process_environment(self, monkeypatch):
        """Test os.environ is used by default."""
        monkeypatch.setenv("TIERFIX_CONTAINER", "from-env")

        assert EnvConfigSource().load()["container"] == "from-env"


class TestDictConfigSource:
    """Tests for DictConfigSource."""

    def test_none_values_dropped(self):
        """Test None means 'not given'."""
        source = DictConfigSource({"container": "c", "blob_path": None})

        assert source.load() == {"container": "c"}


class TestLoadConfig:
    """Tests for load_config."""

    def test_overrides_win(self):
        """Test explicit values override the environment."""
        env = EnvConfigSource(
            environ={"TIERFIX_CONTAINER": "env", "TIERFIX_MAX_OBJECTS": "10"}
        )

        config = load_config([env], container="cli")

        assert config.container == "cli"
        assert config.max_objects == 10

    def test_none_override_keeps_environment(self):
        """Test unset options fall back to the environment."""
        env = EnvConfigSource(environ={"TIERFIX_CONTAINER": "env", "TIERFIX_DRY_RUN": "yes"})

        config = load_config([env], container=None, dry_run=None)

        assert config.container == "env"
        assert config.dry_run is True

    def test_string_coercion(self):
        """Test loose values become typed fields."""
        config = load_config(
            [],
            container=123,
            target_tier="Cool",
            listing="all",
            max_workers="3",
            fail_fast="false",
        )

        assert config.container == "123"
        assert config.target_tier is TierType.COOL
        assert config.listing is ListingMode.ALL
        assert config.max_workers == 3
        assert config.fail_fast is False

    def test_unknown_keys_ignored(self):
        """Test unrelated environment keys do not break loading."""
        env = EnvConfigSource(
            environ={"TIERFIX_CONTAINER": "c", "TIERFIX_LOG_LEVEL": "debug"}
        )

        assert load_config([env]).container == "c"

    def test_invalid_tier(self):
        """Test an unknown tier name is reported."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_config([], container="c", target_tier="glacier")

        assert "invalid value for target_tier" in exc_info.value.errors[0]

    def test_validation_error(self):
        """Test validation runs on the merged values."""
        with pytest.raises(ConfigurationError):
            load_config([], container="c", max_objects=0)

    def test_missing_container(self):
        """Test a container is required."""
        with pytest.raises(ConfigurationError):
            load_config([])
