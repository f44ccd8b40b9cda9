import pytest

from metafield.palettes import (
    SCHEMES,
    ColorScheme,
    complementary,
    create_custom_scheme,
    get_scheme,
    hex_to_rgb,
    list_schemes,
    rgb_to_hex,
    triadic,
)


def test_hex_conversion():
    assert hex_to_rgb("#25CED1") == (0x25, 0xCE, 0xD1)
    assert hex_to_rgb("fff") == (255, 255, 255)
    assert rgb_to_hex((236, 64, 122)) == "#ec407a"
    with pytest.raises(ValueError):
        hex_to_rgb("#12345")


def test_original_scheme_colours():
    s = get_scheme("original")
    assert s.inner_hex == "#25ced1"
    assert s.outer_hex == "#ec407a"


def test_unknown_scheme():
    with pytest.raises(KeyError):
        get_scheme("plaid")


def test_list_schemes_sorted():
    names = list_schemes()
    assert names == sorted(SCHEMES)
    assert "original" in names


def test_hue_rotations():
    assert complementary((255, 0, 0)) == (0, 255, 255)
    assert triadic((255, 0, 0)) == (0, 255, 0)


def test_custom_scheme():
    s = create_custom_scheme("Mine", (255, 0, 0))
    assert isinstance(s, ColorScheme)
    assert s.outer == (0, 255, 255)
    assert s.background == (21, 1, 1)
    with pytest.raises(ValueError):
        create_custom_scheme("Bad", (255, 0, 0), contrast_mode="plaid")
