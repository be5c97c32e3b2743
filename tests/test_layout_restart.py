import pytest

from roomwalk.layout import Direction, GenerationAborted, StepOutcome

from tests.layout_test_utils import (
    FailingSpawner,
    ReadyRecorder,
    ScriptedRandom,
    build_generator,
    start_at,
    walk_to_end,
)


def _gen(config):
    return build_generator(
        config,
        anchors=start_at(config, 0, 2000),
        rng=ScriptedRandom([Direction.DOWN]),
        initial_direction=Direction.DOWN,
    )[0]


def test_request_before_any_walk_just_starts(scenario_config):
    gen = _gen(scenario_config)
    gen.request_new_starting_point()
    rec = gen.step()
    assert rec.index == 1
    assert gen.state.starting_point_chosen
    assert gen.metrics["restarts"] == 0


def test_request_at_zero_steps_replaces_walk(scenario_config):
    gen = _gen(scenario_config)
    first = gen.choose_starting_point()
    gen.request_new_starting_point()
    gen.step()
    assert gen.state is not first
    assert gen.state.steps == 1
    assert gen.metrics["restarts"] == 1


def test_request_mid_walk_is_deferred(scenario_config):
    gen = _gen(scenario_config)
    gen.step()
    walk = gen.state
    gen.request_new_starting_point()
    rec = gen.step()
    assert gen.state is walk
    assert rec.index == 2
    assert gen.metrics["restarts"] == 0


def test_deferred_request_honored_after_walk_ends(scenario_config):
    recorder = ReadyRecorder()
    gen, spawner, _ = build_generator(
        scenario_config,
        anchors=start_at(scenario_config, 0, 2000),
        rng=ScriptedRandom([Direction.DOWN]),
        initial_direction=Direction.DOWN,
    )
    recorder.spawner = spawner
    gen.add_listener(recorder)
    gen.step()
    first = gen.state
    gen.request_new_starting_point()
    walk_to_end(gen)
    assert first.out_of_bounds
    assert len(recorder.calls) == 1

    rec = gen.step()
    assert rec is not None
    assert rec.outcome is StepOutcome.MOVED
    assert gen.state is not first
    assert gen.metrics["restarts"] == 1
    walk_to_end(gen)

    # the second walk owns a fully populated grid, one spawn per cell
    cells = scenario_config.rows * scenario_config.columns
    assert len(gen.state.placements) == cells
    assert len(spawner.spawn_counts) == cells
    assert set(spawner.spawn_counts.values()) == {1}
    assert gen.metrics["rooms_backfilled"] == cells - 4
    assert gen.metrics["steps"] == gen.state.steps
    # each walk announces its own level once
    assert len(recorder.calls) == 2
    state, counts_at_ready = recorder.calls[1]
    assert state is gen.state
    assert len(counts_at_ready) == cells


def test_restart_at_zero_steps_leaves_one_start_room(scenario_config):
    gen, spawner, _ = build_generator(scenario_config)
    gen.choose_starting_point()
    gen.request_new_starting_point()
    walk_to_end(gen)
    cells = scenario_config.rows * scenario_config.columns
    assert set(spawner.spawn_counts.values()) == {1}
    assert len(spawner.spawn_counts) == cells
    assert [p.source for p in gen.state.placements.values()].count("start") <= 1


def test_restart_after_failed_walk(scenario_config):
    gen, spawner, _ = build_generator(
        scenario_config,
        anchors=start_at(scenario_config, 0, 2000),
        spawner=FailingSpawner(fail_on=3),
        rng=ScriptedRandom([Direction.DOWN]),
        initial_direction=Direction.DOWN,
    )
    gen.step()
    with pytest.raises(GenerationAborted):
        gen.step()
    assert gen.state.failed

    spawner.fail_on = 10_000
    gen.request_new_starting_point()
    assert gen.step() is not None
    walk_to_end(gen)
    assert gen.state.out_of_bounds
    assert not gen.state.failed
    assert set(spawner.spawn_counts.values()) == {1}
    assert len(gen.state.placements) == scenario_config.rows * scenario_config.columns
