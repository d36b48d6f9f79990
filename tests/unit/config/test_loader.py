"""Tests for config discovery, loading and directive parsing."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from spritely.core.config import (
    GlobalDirective,
    SpriteDirective,
    detect_format,
    find_config,
    load_config,
    load_directives,
    parse_directives,
)
from spritely.core.config.loader import parse_sprite_directive
from spritely.core.errors import ConfigurationError, MissingMappingError, MissingProjectError


class TestDetectFormat:
    """Tests for detect_format."""

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("spritely.json", "json"),
            ("spritely.yml", "yaml"),
            ("spritely.YAML", "yaml"),
            (".spritely", "yaml"),
        ],
    )
    def test_known_formats(self, name: str, expected: str) -> None:
        assert detect_format(name) == expected

    def test_unknown_format_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="Unsupported config format"):
            detect_format("spritely.toml")


class TestLoadConfig:
    """Tests for load_config."""

    def test_loads_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / ".spritely"
        path.write_text("padding: 5\nsprites:\n  - 'a/*': 'a.png'\n")

        assert load_config(path) == {"padding": 5, "sprites": [{"a/*": "a.png"}]}

    def test_loads_json(self, tmp_path: Path) -> None:
        path = tmp_path / "spritely.json"
        path.write_text(json.dumps({"sass": False}))

        assert load_config(path) == {"sass": False}

    def test_empty_document_is_empty_table(self, tmp_path: Path) -> None:
        path = tmp_path / ".spritely"
        path.write_text("")

        assert load_config(path) == {}

    def test_invalid_yaml_names_file(self, tmp_path: Path) -> None:
        path = tmp_path / ".spritely"
        path.write_text("sprites: [unclosed\n")

        with pytest.raises(ConfigurationError, match=r"\.spritely"):
            load_config(path)

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        path = tmp_path / "spritely.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / ".spritely"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(path)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(MissingProjectError):
            load_config(tmp_path / ".spritely")


class TestFindConfig:
    """Tests for find_config."""

    def test_file_is_its_own_config(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yml"
        path.write_text("")

        assert find_config(path) == path.resolve()

    def test_ascends_to_parent(self, tmp_path: Path) -> None:
        config = tmp_path / ".spritely"
        config.write_text("")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)

        assert find_config(nested) == config.resolve()

    def test_first_filename_wins(self, tmp_path: Path) -> None:
        (tmp_path / "spritely.json").write_text("{}")
        (tmp_path / ".spritely").write_text("")

        assert find_config(tmp_path).name == ".spritely"

    def test_nearest_directory_wins(self, tmp_path: Path) -> None:
        (tmp_path / ".spritely").write_text("")
        inner = tmp_path / "inner"
        inner.mkdir()
        (inner / "spritely.yml").write_text("")

        assert find_config(inner) == (inner / "spritely.yml").resolve()

    def test_missing_project_names_start(self, tmp_path: Path) -> None:
        with pytest.raises(MissingProjectError) as exc_info:
            find_config(tmp_path / "does-not-exist")

        assert exc_info.value.path.name == "does-not-exist"


class TestParseDirectives:
    """Tests for parse_directives."""

    def test_preserves_document_order(self) -> None:
        directives = parse_directives(
            {
                "sprites": [{"a/*": "a.png"}],
                "padding": 4,
            }
        )

        assert isinstance(directives[0], SpriteDirective)
        assert directives[1] == GlobalDirective(key="padding", value=4)

    def test_accepts_config_prefix(self) -> None:
        directives = parse_directives({"config.sass": False, "config.url": "/s/:name.png"})

        assert [d.key for d in directives] == ["sass", "url"]

    def test_unknown_key_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown configuration key"):
            parse_directives({"colour": "red"})

    def test_sprites_must_be_list(self) -> None:
        with pytest.raises(ConfigurationError, match="list"):
            parse_directives({"sprites": {"a/*": "a.png"}})


class TestParseSpriteDirective:
    """Tests for parse_sprite_directive."""

    def test_splits_pair_from_options(self) -> None:
        directive = parse_sprite_directive({"src/*": "out.png", "padding": 5, "url": "/x.png"})

        assert directive.source == "src/*"
        assert directive.destination == "out.png"
        assert directive.options.padding == 5
        assert directive.options.url == "/x.png"

    def test_padding_false_means_zero(self) -> None:
        directive = parse_sprite_directive({"src/*": "out.png", "padding": False})

        assert directive.options.padding == 0

    def test_missing_pair_raises(self) -> None:
        with pytest.raises(MissingMappingError):
            parse_sprite_directive({"name": "lonely"})

    def test_non_mapping_raises_missing_mapping(self) -> None:
        with pytest.raises(MissingMappingError):
            parse_sprite_directive("src/*")

    def test_two_pairs_raise(self) -> None:
        with pytest.raises(ConfigurationError, match="more than one"):
            parse_sprite_directive({"a/*": "a.png", "b/*": "b.png"})

    def test_negative_padding_raises(self) -> None:
        with pytest.raises(ConfigurationError, match="padding"):
            parse_sprite_directive({"src/*": "out.png", "padding": -1})

    def test_data_uri_aliases(self) -> None:
        assert parse_sprite_directive({"src/*": "data_uri", "name": "x"}).is_data_uri
        assert parse_sprite_directive({"src/*": ":data_uri", "name": "x"}).is_data_uri


def test_load_directives_reads_file(tmp_path: Path) -> None:
    """load_directives chains loading and parsing."""
    path = tmp_path / "spritely.json"
    path.write_text(json.dumps({"padding": 3, "sprites": [{"a/*": "a.png"}]}))

    directives = load_directives(path)

    assert len(directives) == 2
    assert str(directives[1]) == "a/* => a.png"
