"""Tests for configuration dataclasses and YAML/environment loading."""

import dataclasses

import pytest

from docsorter.config import (
    DEFAULT_FORBIDDEN_PATTERNS,
    DEFAULT_WEIGHTS,
    ExtractionConfig,
    QualityConfig,
    load_config,
)


class TestExtractionConfig:
    def test_defaults(self) -> None:
        config = ExtractionConfig()

        assert config.enabled is True
        assert config.model == "gpt-3.5-turbo"
        assert config.confidence_threshold == 0.5
        assert config.batch_size == 5
        assert config.timeout_seconds == 30.0

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"batch_size": 0}, "batch_size"),
            ({"timeout_seconds": 0}, "timeout_seconds"),
            ({"batch_delay": -1}, "batch_delay"),
        ],
    )
    def test_invalid_values(self, kwargs, message) -> None:
        with pytest.raises(ValueError, match=message):
            ExtractionConfig(**kwargs)

    def test_is_immutable(self) -> None:
        config = ExtractionConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.enabled = False  # type: ignore[misc]

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("USE_AI", "true")
        monkeypatch.setenv("AI_MODEL", "llama-3.1-8b-instant")
        monkeypatch.setenv("AI_CONFIDENCE_THRESHOLD", "0.75")
        monkeypatch.setenv("AI_BATCH_SIZE", "8")

        config = ExtractionConfig.from_env()

        assert config.enabled is True
        assert config.model == "llama-3.1-8b-instant"
        assert config.confidence_threshold == 0.75
        assert config.batch_size == 8

    def test_from_env_defaults_to_disabled(self, monkeypatch) -> None:
        for name in ("USE_AI", "AI_MODEL", "AI_CONFIDENCE_THRESHOLD", "AI_BATCH_SIZE"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setattr("docsorter.config.load_dotenv", lambda: None)

        config = ExtractionConfig.from_env()

        assert config.enabled is False
        assert config.model == "gpt-3.5-turbo"
        assert config.batch_size == 5

    def test_from_env_ignores_malformed_numbers(self, monkeypatch) -> None:
        monkeypatch.setenv("AI_CONFIDENCE_THRESHOLD", "high")
        monkeypatch.setenv("AI_BATCH_SIZE", "")

        config = ExtractionConfig.from_env()

        assert config.confidence_threshold == 0.5
        assert config.batch_size == 5


class TestQualityConfig:
    def test_defaults(self) -> None:
        config = QualityConfig()

        assert config.min_filename_length == 10
        assert config.max_filename_length == 100
        assert config.forbidden_patterns == DEFAULT_FORBIDDEN_PATTERNS
        assert config.weights == DEFAULT_WEIGHTS
        assert sum(config.weights.values()) == pytest.approx(1.0)

    def test_weights_are_not_shared(self) -> None:
        QualityConfig().weights["accuracy"] = 0.0

        assert QualityConfig().weights["accuracy"] == 0.35


class TestLoadConfig:
    def test_full_file(self, tmp_path) -> None:
        path = tmp_path / "config.yml"
        path.write_text(
            "extraction:\n"
            "  model: llama-3.1-8b-instant\n"
            "  batch_size: 3\n"
            "quality:\n"
            "  min_filename_length: 5\n"
            "  forbidden_patterns:\n"
            "    - '^IMG_\\d+$'\n"
            "llm:\n"
            "  model: llama-3.1-8b-instant\n"
            "pipeline:\n"
            "  input_path: suggestions.jsonl\n"
        )

        config = load_config(str(path))

        assert config.extraction.model == "llama-3.1-8b-instant"
        assert config.extraction.batch_size == 3
        assert config.quality.min_filename_length == 5
        assert config.quality.forbidden_patterns == (r"^IMG_\d+$",)
        assert config.llm == {"model": "llama-3.1-8b-instant"}
        assert config.pipeline == {"input_path": "suggestions.jsonl"}

    def test_empty_file_uses_defaults(self, tmp_path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("")

        config = load_config(str(path))

        assert config.extraction == ExtractionConfig()
        assert config.quality == QualityConfig()

    def test_non_mapping_file(self, tmp_path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ValueError, match="mapping"):
            load_config(str(path))

    def test_invalid_section_values(self, tmp_path) -> None:
        path = tmp_path / "config.yml"
        path.write_text("extraction:\n  batch_size: 0\n")

        with pytest.raises(ValueError, match="batch_size"):
            load_config(str(path))
