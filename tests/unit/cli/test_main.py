"""Tests for the command-line interface."""

from __future__ import annotations

from pathlib import Path

from PIL import Image
import pytest

from spritely.cli import main as cli
from tests.conftest import write_config, write_png


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Leave the root logger alone while running commands."""
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)


@pytest.fixture
def in_fry(fry_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(fry_dir)
    return fry_dir


class TestBuildCommand:
    """Tests for `spritely build`."""

    def test_builds_project(self, in_fry: Path, capsys) -> None:
        assert cli.run(["build", "--fast"]) == 0

        out = capsys.readouterr().out
        assert "generated  fry" in out
        assert "written  Sass mixins" in out
        with Image.open(in_fry / "images" / "fry.png") as image:
            assert image.size == (10, 60)

    def test_second_build_is_quiet(self, in_fry: Path, capsys) -> None:
        cli.run(["build", "--fast"])
        capsys.readouterr()

        assert cli.run(["build", "--fast"]) == 0

        assert "generated" not in capsys.readouterr().out

    def test_unknown_sprite(self, in_fry: Path, capsys) -> None:
        assert cli.run(["build", "bender"]) == 1

        assert "No such sprite: bender" in capsys.readouterr().out

    def test_unwritable_sprite_exits_1(self, in_fry: Path, capsys) -> None:
        (in_fry / "images").write_text("a file where a directory should be")

        assert cli.run(["build", "--fast"]) == 1

        assert "not writable" in capsys.readouterr().out

    def test_invalid_jobs(self, in_fry: Path, capsys) -> None:
        assert cli.run(["build", "--jobs", "0"]) == 1

        assert "--jobs" in capsys.readouterr().out

    def test_no_project(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.chdir(tmp_path)

        assert cli.run(["build"]) == 1

        assert "Couldn't find a Spritely project" in capsys.readouterr().out

    def test_bad_config(self, project_dir: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        (project_dir / ".spritely").write_text("colour: red\n")
        monkeypatch.chdir(project_dir)

        assert cli.run(["build"]) == 1

        assert "Unknown configuration key" in capsys.readouterr().out


class TestPositionCommand:
    """Tests for `spritely position`."""

    def test_sprite_and_source(self, in_fry: Path, capsys) -> None:
        assert cli.run(["position", "fry/two"]) == 0

        out = capsys.readouterr().out
        assert "fry/two: 40px" in out
        assert "    background: url(/images/fry.png) 0px -40px no-repeat;" in out
        assert "    background-position: 0px -40px;" in out

    def test_source_name_searches_all_sprites(self, in_fry: Path, capsys) -> None:
        assert cli.run(["position", "one"]) == 0

        assert "fry/one: 0px" in capsys.readouterr().out

    def test_data_uri_before_first_build(self, in_fry: Path, capsys) -> None:
        write_config(in_fry, {"sprites": [{"sources/fry/*": "data_uri", "name": "fry"}]})

        assert cli.run(["position", "fry/two"]) == 0

        out = capsys.readouterr().out
        assert "    background-position: 0px -40px;" in out
        assert "url()" not in out
        assert "run `spritely build` first" in out

    def test_unknown_sprite(self, in_fry: Path, capsys) -> None:
        assert cli.run(["position", "bender/one"]) == 1

        assert "No such sprite: bender" in capsys.readouterr().out

    def test_unknown_source(self, in_fry: Path, capsys) -> None:
        assert cli.run(["position", "three"]) == 1

        assert "No such source: three" in capsys.readouterr().out


class TestOptimiseCommand:
    """Tests for `spritely optimise`."""

    @pytest.fixture(autouse=True)
    def fake_optimiser(self, monkeypatch: pytest.MonkeyPatch) -> list[Path]:
        calls: list[Path] = []

        class FakeOptimiser:
            def optimise(self, path: Path) -> int:
                calls.append(path)
                return 10

        monkeypatch.setattr(cli, "ExternalToolOptimiser", FakeOptimiser)
        return calls

    def test_outside_project(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys, fake_optimiser
    ) -> None:
        write_png(tmp_path / "img" / "a.png")
        (tmp_path / "img" / "b.gif").write_bytes(b"GIF89a")
        monkeypatch.chdir(tmp_path)

        assert cli.run(["optimise", "img", "img/b.gif"]) == 0

        out = capsys.readouterr().out
        assert "img/a.png - saved 0.01kb" in out
        assert "img/b.gif - not a PNG" in out
        assert fake_optimiser == [tmp_path / "img" / "a.png"]

    def test_project_cache_skips_unchanged(self, in_fry: Path, fake_optimiser) -> None:
        assert cli.run(["optimize", "sources"]) == 0
        assert len(fake_optimiser) == 2

        assert cli.run(["optimise", "sources"]) == 0
        assert len(fake_optimiser) == 2

        assert cli.run(["optimise", "--force", "sources"]) == 0
        assert len(fake_optimiser) == 4

    def test_missing_file(self, in_fry: Path, capsys) -> None:
        assert cli.run(["optimise", "nope.png"]) == 1

        assert "nope.png: no such file" in capsys.readouterr().out


class TestInitCommand:
    """Tests for `spritely init`."""

    def test_creates_project(self, project_dir: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.chdir(project_dir)

        assert cli.run(["init"]) == 0

        assert (project_dir / ".spritely").is_file()
        assert (project_dir / "public/images/sprites/fry/one.png").is_file()
        assert "Your project was created!" in capsys.readouterr().out

    def test_init_then_build(self, project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(project_dir)
        cli.run(["init"])

        assert cli.run(["build", "--fast"]) == 0
        assert (project_dir / "public/images/fry.png").is_file()

    def test_existing_config(self, fry_dir: Path, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
        monkeypatch.chdir(fry_dir)

        assert cli.run(["init"]) == 1

        assert "already exists" in capsys.readouterr().out

    def test_no_examples(self, project_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(project_dir)

        assert cli.run(["init", "--no-examples", "--sprites", "img"]) == 0

        assert not (project_dir / "img").exists()
        assert "img/sprites/:name/*" in (project_dir / ".spritely").read_text()


def test_version(capsys) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.run(["--version"])

    assert exc_info.value.code == 0
    assert "Spritely 0.1.0" in capsys.readouterr().out


def test_no_color_flag(in_fry: Path) -> None:
    assert cli.run(["--no-color", "position", "fry/one"]) == 0

    assert cli.console.no_color
    cli.console.no_color = False
