"""Tests for validation thresholds."""

import pytest

from lineage.config import DEFAULT_CONFIG, ValidationConfig


class TestValidationConfig:
    def test_defaults(self):
        assert DEFAULT_CONFIG.min_parent_age == 12
        assert DEFAULT_CONFIG.max_parent_age == 80
        assert DEFAULT_CONFIG.max_children == 20
        assert DEFAULT_CONFIG.min_marriage_age == 14
        assert DEFAULT_CONFIG.max_spouse_age_gap == 50
        assert DEFAULT_CONFIG.max_lifespan == 200
        assert DEFAULT_CONFIG.max_ancestry_depth == 10

    def test_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.max_lifespan = 900

    def test_with_overrides(self):
        elves = DEFAULT_CONFIG.with_overrides(max_lifespan=3000, max_parent_age=2000)
        assert elves.max_lifespan == 3000
        assert DEFAULT_CONFIG.max_lifespan == 200

    @pytest.mark.parametrize(
        "changes",
        [
            {"min_parent_age": -1},
            {"min_parent_age": 90, "max_parent_age": 80},
            {"duplicate_name_threshold": 150.0},
            {"max_ancestry_depth": 0},
        ],
    )
    def test_rejects_inconsistent_values(self, changes):
        with pytest.raises(ValueError):
            ValidationConfig(**changes)


class TestFromEnv:
    def test_reads_prefixed_variables(self, monkeypatch):
        monkeypatch.setenv("LINEAGE_MAX_LIFESPAN", "900")
        monkeypatch.setenv("LINEAGE_DUPLICATE_NAME_THRESHOLD", "85.5")
        config = ValidationConfig.from_env()
        assert config.max_lifespan == 900
        assert config.duplicate_name_threshold == 85.5
        assert config.min_parent_age == 12

    def test_bad_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("LINEAGE_MAX_CHILDREN", "plenty")
        assert ValidationConfig.from_env().max_children == 20

    def test_custom_prefix(self, monkeypatch):
        monkeypatch.setenv("SAGA_MIN_MARRIAGE_AGE", "16")
        assert ValidationConfig.from_env(prefix="SAGA_").min_marriage_age == 16
