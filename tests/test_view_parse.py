from __future__ import annotations

import pytest

from leaflet_notebook.errors import MissingOptionValueError
from leaflet_notebook.view.parse import Option, is_option_marker, opt, parse_args
from leaflet_notebook.view.types import LeafletView, leaflet

GEOM_A = ["points", [[1, 2], [3, 4]]]
GEOM_B = ["line", [[5, 6], [7, 8]]]


def test_options_are_pulled_out_of_interleaved_args():
    geometries, options = parse_args([GEOM_A, ":color", "red", GEOM_B, ":opacity", 0.5])
    assert geometries == [GEOM_A, GEOM_B]
    assert options == {"color": "red", "opacity": 0.5}


def test_duplicate_marker_last_write_wins():
    _geoms, options = parse_args([":color", "red", ":color", "blue"])
    assert options == {"color": "blue"}


def test_trailing_marker_without_value_fails():
    with pytest.raises(MissingOptionValueError):
        parse_args([GEOM_A, ":color"])
    with pytest.raises(MissingOptionValueError):
        leaflet(GEOM_A, opt.color)


def test_marker_value_is_consumed_even_if_it_looks_like_a_marker():
    geometries, options = parse_args([":color", ":opacity", GEOM_A])
    assert geometries == [GEOM_A]
    assert options == {"color": ":opacity"}


def test_marker_spellings_are_equivalent():
    assert parse_args([Option("color"), "red"]) == parse_args([":color", "red"])
    assert parse_args([opt.tile_layer_url, "u"])[1] == {"tile-layer-url": "u"}
    assert parse_args([Option(":view"), [1, 2, 3]])[1] == {"view": [1, 2, 3]}


def test_is_option_marker():
    assert is_option_marker(":color")
    assert is_option_marker(Option("color"))
    assert not is_option_marker("color")
    assert not is_option_marker(":")
    assert not is_option_marker([[1, 2]])


def test_empty_option_name_is_rejected():
    with pytest.raises(ValueError):
        Option(":")


def test_leaflet_builds_an_immutable_view():
    view = leaflet(GEOM_A, ":color", "red", GEOM_B)
    assert isinstance(view, LeafletView)
    assert view.geometries == (GEOM_A, GEOM_B)
    assert dict(view.opts) == {"color": "red"}
    with pytest.raises(TypeError):
        view.opts["color"] = "blue"  # type: ignore[index]


def test_keyword_options_apply_after_markers():
    view = leaflet(GEOM_A, ":color", "red", color="green", tile_layer_url="t")
    assert dict(view.opts) == {"color": "green", "tile-layer-url": "t"}


def test_unrecognized_options_pass_through():
    view = leaflet(GEOM_A, ":zoom-control", False)
    assert view.opts["zoom-control"] is False


def test_view_repr_echoes_input():
    view = leaflet(GEOM_A, ":color", "red")
    assert repr(view) == (
        "LeafletView(geometries=[['points', [[1, 2], [3, 4]]]], opts={'color': 'red'})"
    )


def test_view_is_unaffected_by_later_caller_mutation():
    geom = ["points", [[1, 2], [3, 4]]]
    view_opt = [50, 14, 10]
    view = leaflet(geom, ":view", view_opt)

    geom[1].append([5, 6])
    geom[1][0][0] = 99
    view_opt[2] = 3

    assert view.geometries == (["points", [[1, 2], [3, 4]]],)
    assert view.opts["view"] == [50, 14, 10]


def test_generator_descriptor_survives_repeated_renders():
    rows = [("a", 50.0, 14.0), ("b", 51.0, 15.0)]
    view = leaflet(map(lambda r: [r[1], r[2]], rows))
    assert view.geometries == ([[50.0, 14.0], [51.0, 15.0]],)

    a = view.render(map_id="m").content
    b = view.render(map_id="m").content
    assert a == b
    assert '"coordinates":[[14.0,50.0],[15.0,51.0]]' in a
