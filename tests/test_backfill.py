import random

from roomwalk.layout import GridPlaceholders, RecordingSpawner, RoomTemplateCatalog
from roomwalk.layout.backfill import backfill_unvisited
from roomwalk.layout.catalog import DEFAULT_VARIANTS

from tests.layout_test_utils import build_generator, walk_to_end


def test_backfill_is_idempotent(scenario_config):
    gen, spawner, placeholders = build_generator(scenario_config)
    walk_to_end(gen)
    before = dict(spawner.spawn_counts)
    again = backfill_unvisited(gen.state, placeholders, gen.catalog, spawner, random.Random(0))
    assert again == []
    assert spawner.spawn_counts == before


def test_backfill_uses_filler_and_skips_visited(scenario_config, catalog):
    gen, spawner, placeholders = build_generator(scenario_config)
    gen.choose_starting_point()
    start = gen.state.start.cell
    assert gen.state.visited == {start}
    filled = backfill_unvisited(gen.state, placeholders, catalog, spawner, random.Random(1))
    assert len(filled) == scenario_config.rows * scenario_config.columns - 1
    assert start not in {p.position.cell for p in filled}
    assert {p.variant for p in filled} == {"solid_rock"}
    assert all(p.category is None and p.source == "backfill" for p in filled)


def test_backfill_without_filler_uses_room_variants(scenario_config):
    catalog = RoomTemplateCatalog(DEFAULT_VARIANTS)
    spawner = RecordingSpawner()
    placeholders = GridPlaceholders(scenario_config)
    gen, _, _ = build_generator(scenario_config, spawner=spawner, catalog=catalog)
    gen.choose_starting_point()
    filled = backfill_unvisited(gen.state, placeholders, catalog, spawner, random.Random(2))
    every_variant = {v for names in DEFAULT_VARIANTS.values() for v in names}
    assert filled
    for p in filled:
        assert p.category is not None
        assert p.variant in every_variant


def test_cells_filled_elsewhere_are_left_alone(scenario_config, catalog):
    gen, spawner, placeholders = build_generator(scenario_config)
    gen.choose_starting_point()
    cells = sorted(placeholders.register_placeholder_cells())
    placeholders.mark_filled(cells[-1])
    filled = backfill_unvisited(gen.state, placeholders, catalog, spawner, random.Random(3))
    assert cells[-1].cell not in {p.position.cell for p in filled}
