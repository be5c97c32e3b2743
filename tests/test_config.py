import pytest

from roomwalk.layout import ConfigurationError, LayoutConfig
from roomwalk.layout.config import MAX_GRID_CELLS


def test_defaults():
    cfg = LayoutConfig()
    assert (cfg.move_amount, cfg.min_y, cfg.max_y, cfg.max_x) == (1000, 0, 4000, 3000)
    assert cfg.z_pos == 150.0
    assert cfg.time_per_step == 0.25
    assert cfg.rows == 4
    assert cfg.columns == 5
    assert cfg.validate() is cfg


def test_from_env_overlay():
    env = {"ROOMWALK_MAX_Y": "6000", "ROOMWALK_MOVE_AMOUNT": "500", "ROOMWALK_SEED": "9", "ROOMWALK_MIN_Y": " "}
    cfg = LayoutConfig.from_env(env)
    assert cfg.max_y == 6000
    assert cfg.move_amount == 500
    assert cfg.seed == 9
    assert cfg.min_y == 0
    assert cfg.columns == 13


def test_overrides_win_over_env(monkeypatch):
    monkeypatch.setenv("ROOMWALK_MAX_X", "5000")
    cfg = LayoutConfig.from_env(max_x=2000, min_y=None)
    assert cfg.max_x == 2000
    assert cfg.min_y == 0


def test_bad_env_value():
    with pytest.raises(ConfigurationError, match="ROOMWALK_MAX_X"):
        LayoutConfig.from_env({"ROOMWALK_MAX_X": "far"})


def test_to_dict():
    assert LayoutConfig(seed=3).to_dict()["seed"] == 3


def test_grid_cell_limit():
    # 100 x 100 fits exactly, one more row does not
    LayoutConfig(move_amount=1, min_y=0, max_y=99, max_x=99).validate()
    assert 100 * 100 == MAX_GRID_CELLS
    with pytest.raises(ConfigurationError, match="cell limit"):
        LayoutConfig(move_amount=1, min_y=0, max_y=99, max_x=100).validate()
