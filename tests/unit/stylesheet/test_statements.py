"""Tests for concrete CSS statements."""

from __future__ import annotations

from pathlib import Path

import pytest

from spritely.core.layout import Placement, stack
from spritely.core.project import Source, Sprite
from spritely.core.stylesheet import background_statement, data_uri, offset, position_statement


@pytest.fixture
def fry() -> Sprite:
    sources = tuple(Source(path=Path(f"/s/{n}.png"), name=n) for n in ("one", "two"))
    return Sprite(
        name="fry",
        sources=sources,
        save_path=Path("/site/images/fry.png"),
        padding=20,
        url="/images/fry.png",
    )


@pytest.fixture
def layout():
    return stack([("one", 10, 20), ("two", 10, 20)], padding=20)


class TestOffset:
    """Tests for offset."""

    def test_negates_stored_position(self) -> None:
        placement = Placement(name="two", x=0, y=40, width=10, height=20)

        assert offset(placement) == "0px -40px"

    def test_x_adjustment(self) -> None:
        placement = Placement(name="one", x=0, y=0, width=10, height=20)

        assert offset(placement, x_adjust=5) == "5px 0px"

    def test_y_adjustment(self) -> None:
        placement = Placement(name="two", x=0, y=40, width=10, height=20)

        assert offset(placement, 0, -10) == "0px -50px"


class TestStatements:
    """Tests for background_statement and position_statement."""

    def test_background_statement(self, fry: Sprite, layout) -> None:
        assert (
            background_statement(fry, layout, "two")
            == "background: url(/images/fry.png) 0px -40px no-repeat;"
        )

    def test_position_statement(self, fry: Sprite, layout) -> None:
        assert position_statement(fry, layout, "two") == "background-position: 0px -40px;"

    def test_adjustments_do_not_change_layout(self, fry: Sprite, layout) -> None:
        position_statement(fry, layout, "two", x_adjust=3, y_adjust=3)

        assert layout.position_of("two") == 40

    def test_unknown_source(self, fry: Sprite, layout) -> None:
        with pytest.raises(KeyError, match="fry/three"):
            position_statement(fry, layout, "three")

    def test_data_uri_sprite_inlines_payload(self, layout) -> None:
        sprite = Sprite(name="inline", sources=(), save_path=None, padding=20)

        statement = background_statement(sprite, layout, "one", payload="QUJD")

        assert statement == "background: url(data:image/png;base64,QUJD) 0px 0px no-repeat;"

    def test_data_uri_sprite_without_payload(self, layout) -> None:
        sprite = Sprite(name="inline", sources=(), save_path=None, padding=20)

        assert background_statement(sprite, layout, "one") is None
        assert position_statement(sprite, layout, "one") == "background-position: 0px 0px;"


def test_data_uri() -> None:
    assert data_uri("QUJD") == "data:image/png;base64,QUJD"
