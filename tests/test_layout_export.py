import json

from tilegen.layout import LAYER_NAMES, LayoutGenerator
from tilegen.layout.autotile import autotile_walls
from tilegen.layout.export import GLYPHS, to_ascii, to_json, to_tiled
from tilegen.layout.tiles import GROUND, OPEN, SOLID, WALL_VOCABULARY
from tilegen.utils.tile_compress import decompress_layer

from tests.layout_test_utils import grid_from_rows


def test_every_wall_code_has_a_glyph():
    assert set(GLYPHS) == set(WALL_VOCABULARY)


def test_ascii_preview_of_small_room():
    walls = grid_from_rows(["######", "######", "##..##", "##..##", "######", "######"], {"#": SOLID, ".": OPEN})
    autotile_walls(walls)
    assert to_ascii(walls).split("\n") == [
        "      ",
        " *__* ",
        " ]..[ ",
        " ]..[ ",
        " *--* ",
        "      ",
    ]


def test_ascii_unknown_code():
    assert to_ascii([[OPEN, 999]]) == ".?"


def test_ascii_shape(medium_layout):
    lines = to_ascii(medium_layout.layers.walls).split("\n")
    assert len(lines) == 30
    assert all(len(line) == 40 for line in lines)


def test_json_payload(medium_layout):
    payload = to_json(medium_layout)
    assert payload["seed"] == 1234
    assert (payload["width"], payload["height"]) == (40, 30)
    assert payload["compact"] is False
    assert list(payload["layers"].keys()) == list(LAYER_NAMES)
    assert payload["layers"]["walls"] == medium_layout.layers.walls
    assert payload["layers"]["walls"] is not medium_layout.layers.walls
    assert len(payload["rooms"]) == len(medium_layout.rooms)
    assert set(payload["rooms"][0]) == {"x", "y", "width", "height", "connected"}
    json.dumps(payload)


def test_json_compact_layers_decode(medium_layout):
    payload = to_json(medium_layout, compact=True)
    assert payload["compact"] is True
    for name, layer in medium_layout.layers.items():
        encoded = payload["layers"][name]
        assert encoded.startswith("R:")
        assert decompress_layer(encoded, 40) == layer


def test_tiled_document_shape():
    result = LayoutGenerator(width=20, height=15, seed=3).run()
    doc = to_tiled(result.layers)
    assert doc["type"] == "map"
    assert doc["orientation"] == "orthogonal"
    assert (doc["width"], doc["height"]) == (20, 15)
    assert doc["tilewidth"] == doc["tileheight"] == 16
    assert [layer["name"] for layer in doc["layers"]] == ["Ground", "Floor", "Walls", "Decals", "Upper", "Leaves"]
    assert [layer["id"] for layer in doc["layers"]] == [1, 2, 3, 4, 5, 6]
    assert doc["nextlayerid"] == 7
    for layer in doc["layers"]:
        assert layer["type"] == "tilelayer"
        assert len(layer["data"]) == 20 * 15
    json.dumps(doc)


def test_tiled_gids_offset_by_firstgid():
    result = LayoutGenerator(width=20, height=15, seed=3).run()
    doc = to_tiled(result.layers)
    by_name = {layer["name"]: layer["data"] for layer in doc["layers"]}
    assert set(by_name["Ground"]) == {GROUND + 1}
    flat_walls = [code for row in result.layers.walls for code in row]
    assert by_name["Walls"] == [code + 1 for code in flat_walls]
    for sparse in ("Decals", "Upper", "Leaves"):
        assert set(by_name[sparse]) == {0}


def test_tiled_tileset_covers_all_gids():
    result = LayoutGenerator(width=30, height=20, seed=8).run()
    doc = to_tiled(result.layers, tile_size=32, columns=8, firstgid=5)
    ts = doc["tilesets"][0]
    assert ts["firstgid"] == 5
    assert ts["columns"] == 8
    assert ts["tilecount"] % 8 == 0
    assert ts["imagewidth"] == 8 * 32
    assert ts["imageheight"] == (ts["tilecount"] // 8) * 32
    max_gid = max(max(layer["data"]) for layer in doc["layers"])
    assert max_gid - ts["firstgid"] < ts["tilecount"]
