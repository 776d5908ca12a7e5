from tilegen.layout import LAYER_NAMES, LayoutGenerator, generate
from tilegen.layout.tiles import EMPTY, FULL_FLOORS, GROUND, WALL_VOCABULARY


def test_generate_returns_six_layers_of_requested_shape():
    layers = generate(40, 30, seed=1234)
    for name, layer in layers.items():
        assert len(layer) == 30, name
        assert all(len(row) == 40 for row in layer), name
    assert [name for name, _ in layers.items()] == list(LAYER_NAMES)


def test_bottom_layers_filled():
    layers = generate(30, 20, seed=5)
    assert all(code == GROUND for row in layers.ground for code in row)
    assert all(code in FULL_FLOORS for row in layers.floor for code in row)


def test_filler_layers_empty():
    layers = generate(30, 20, seed=5)
    for layer in (layers.decals, layers.upper, layers.leaves):
        assert all(code == EMPTY for row in layer for code in row)


def test_walls_only_use_wall_vocabulary():
    for seed in (1, 2, 3, 99, 1234):
        layers = generate(50, 40, seed=seed)
        codes = {code for row in layers.walls for code in row}
        assert codes <= WALL_VOCABULARY, f"seed {seed}: {codes - WALL_VOCABULARY}"


def test_layers_do_not_share_rows():
    layers = generate(10, 10, seed=3)
    rows = [id(row) for _, layer in layers.items() for row in layer]
    assert len(rows) == len(set(rows))


def test_result_exposes_rooms_and_metrics(medium_layout):
    assert medium_layout.width == 40
    assert medium_layout.height == 30
    assert medium_layout.seed == 1234
    assert medium_layout.rooms
    m = medium_layout.metrics
    for key in (
        "rooms",
        "rooms_unconnected",
        "connectors",
        "connectors_orphaned",
        "holes_carved",
        "tiles_open",
        "tiles_wall",
        "runtime_ms",
        "phase_ms",
        "autotile",
    ):
        assert key in m
    assert m["rooms"] == len(medium_layout.rooms)
    assert m["tiles_open"] + m["tiles_wall"] == 40 * 30
    assert list(m["phase_ms"].keys()) == [
        "allocate",
        "fill_bottom",
        "pack_rooms",
        "detect",
        "connect",
        "autotile",
        "fill_empty",
    ]


def test_metrics_disabled():
    result = LayoutGenerator(width=20, height=20, seed=8, enable_metrics=False).run()
    assert result.metrics == {}


def test_metrics_env_toggle(monkeypatch):
    monkeypatch.setenv("LAYOUT_ENABLE_METRICS", "0")
    assert LayoutGenerator(width=20, height=20, seed=8).run().metrics == {}
    monkeypatch.setenv("LAYOUT_ENABLE_METRICS", "1")
    assert LayoutGenerator(width=20, height=20, seed=8).run().metrics["rooms"] >= 1


def test_missing_seed_is_chosen_and_reported():
    gen = LayoutGenerator(width=12, height=12)
    assert isinstance(gen.seed, int)
    result = gen.run()
    assert result.seed == gen.seed
    assert result.metrics["seed"] == gen.seed
