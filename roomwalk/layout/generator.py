"""Random-walk layout generator.

A cursor starts on one of the anchor cells and walks the grid one cell per
``step()``: sideways sweeps that never reverse, occasional descents, and a
forced descent whenever a sweep hits the side bounds. Each cell the cursor
enters gets a room whose door openings match how it was entered; a cell the
cursor leaves downward is swapped for a room with a bottom opening first.

When the cursor is asked to descend from the last row the walk ends, every
registered placeholder cell the walk never touched is back-filled, and the
level-ready listeners fire once.
"""
from __future__ import annotations

import random
from typing import Iterable, List, Optional

from ..logging_utils import get_logger
from .backfill import backfill_unvisited
from .catalog import TOP_OPENING, RoomCategory, RoomTemplateCatalog
from .cells import ZERO_ROTATION, Position
from .collaborators import AnchorProvider, LevelReadyListener, PlaceholderRegistry, SpawnSink
from .config import LayoutConfig
from .directions import Direction, Heading, next_direction, roll_direction
from .errors import ConfigurationError, GenerationAborted, NoAnchorsAvailable, SpawnError
from .metrics import init_metrics
from .walk import Bounds, Placement, StepOutcome, StepRecord, WalkState

log = get_logger("roomwalk.layout")

# first descent may open the bottom only or fully; SIDES_TOP is folded into SIDES_BOTTOM
FIRST_DESCENT_ROLL = (RoomCategory.SIDES_BOTTOM, RoomCategory.SIDES_TOP, RoomCategory.SIDES_TOP_BOTTOM)


class LayoutGenerator:
    def __init__(
        self,
        config: LayoutConfig,
        catalog: RoomTemplateCatalog,
        anchors: AnchorProvider,
        spawner: SpawnSink,
        placeholders: PlaceholderRegistry,
        listeners: Iterable[LevelReadyListener] = (),
        *,
        rng: Optional[random.Random] = None,
        initial_direction: Optional[Direction] = None,
    ):
        try:
            self.config = config.validate()
            self.catalog = catalog.validate()
        except ConfigurationError as exc:
            log.error(event="layout_config_error", code=exc.code, reason=exc.message)
            raise
        if self.config.seed is None:
            self.config.seed = random.randint(0, 2**31 - 1)
        self.seed = self.config.seed
        self._rng = rng if rng is not None else random.Random(self.seed)
        self.anchors = anchors
        self.spawner = spawner
        self.placeholders = placeholders
        self.listeners: List = list(listeners)
        self.initial_direction = initial_direction
        self.state: Optional[WalkState] = None
        self.metrics = init_metrics()
        self._restart_requested = False
        self._level_ready_fired = False

    # ------------------------------------------------------------------
    # Public surface
    # ------------------------------------------------------------------
    @property
    def finished(self) -> bool:
        return self.state is not None and self.state.finished

    @property
    def level_ready(self) -> bool:
        return self._level_ready_fired

    def add_listener(self, listener) -> None:
        self.listeners.append(listener)

    def step_budget(self) -> int:
        """Upper bound on steps for one walk: per row every column, one edge turn, one descent."""
        return self.config.rows * (self.config.columns + 1)

    def request_new_starting_point(self) -> None:
        self._restart_requested = True
        if not self._can_restart():
            log.info(event="layout_restart_deferred", seed=self.seed, steps=self.state.steps)

    def choose_starting_point(self) -> WalkState:
        anchors = self.anchors.choose_start_anchors()
        if not anchors:
            log.error(event="layout_config_error", code=NoAnchorsAvailable.code, seed=self.seed)
            raise NoAnchorsAvailable()
        for anchor in anchors:
            self._check_anchor(anchor)
        if self.state is not None:
            self._discard_walk()
        anchor = self._rng.choice(sorted(anchors))
        direction = self.initial_direction or roll_direction(self._rng)
        cfg = self.config
        self.state = WalkState(
            position=anchor,
            direction=direction,
            bounds=Bounds(cfg.min_y, cfg.max_y, cfg.max_x, cfg.start_x),
            start=anchor,
        )
        self._level_ready_fired = False
        # start room has no inbound side to honor
        self._spawn(self._rng.choice(self.catalog.categories), anchor, "start")
        self.state.starting_point_chosen = True
        log.info(event="layout_start", seed=self.seed, x=anchor.x, y=anchor.y, direction=direction.name)
        return self.state

    def step(self) -> Optional[StepRecord]:
        """Advance the walk by one cell. Returns None once the walk is over."""
        if self._restart_requested and self._can_restart():
            self._restart_requested = False
            if self.state is not None:
                self.metrics["restarts"] += 1
            self.choose_starting_point()
        if self.state is None:
            self.choose_starting_point()
        state = self.state
        if state.finished:
            return None
        before_dir, before_pos = state.direction, state.position
        outcome, category = self._advance(state)
        state.steps += 1
        self.metrics["steps"] += 1
        record = StepRecord(
            state.steps, outcome, before_dir, state.direction, before_pos, state.position,
            state.down_counter, category,
        )
        state.history.append(record)
        return record

    # ------------------------------------------------------------------
    # Walk internals
    # ------------------------------------------------------------------
    def _discard_walk(self) -> None:
        """Tear down the previous walk so the next one fills an empty grid."""
        self.spawner.clear_rooms()
        self.placeholders.reset()
        restarts = self.metrics["restarts"]
        self.metrics = init_metrics()
        self.metrics["restarts"] = restarts

    def _can_restart(self) -> bool:
        return self.state is None or self.state.steps == 0 or self.state.finished

    def _check_anchor(self, anchor: Position) -> None:
        cfg = self.config
        problem = None
        if not (cfg.min_y <= anchor.y <= cfg.max_y) or not (cfg.start_x <= anchor.x < cfg.max_x):
            problem = "lies outside the walk bounds"
        elif (anchor.y - cfg.min_y) % cfg.move_amount or (anchor.x - cfg.start_x) % cfg.move_amount:
            problem = "is not grid aligned"
        if problem:
            log.error(event="layout_config_error", code="anchor", seed=self.seed, x=anchor.x, y=anchor.y, reason=problem)
            raise ConfigurationError(f"anchor {tuple(anchor)} {problem}", position=anchor)

    def _advance(self, state: WalkState):
        pos = state.position
        step = self.config.move_amount
        heading = state.direction.heading
        if heading is Heading.DOWN:
            state.down_counter += 1
            if pos.x >= state.bounds.max_x:
                self._finish(state)
                return StepOutcome.FINISHED, None
            self._open_bottom(state)
            state.position = Position(pos.x + step, pos.y, self.config.z_pos)
            if state.down_counter >= 2:
                category = RoomCategory.SIDES_TOP_BOTTOM
                self.metrics["corridor_overrides"] += 1
            else:
                category = self._rng.choice(TOP_OPENING)
            self._spawn(category, state.position, "walk")
            state.direction = roll_direction(self._rng)
            self.metrics["descents"] += 1
            return StepOutcome.MOVED, category

        if heading is Heading.RIGHT:
            can_move, dy = pos.y > state.bounds.min_y, -step
        else:
            can_move, dy = pos.y < state.bounds.max_y, step
        if not can_move:
            state.direction = Direction.DOWN
            self.metrics["edge_turns"] += 1
            log.debug(event="layout_turn", seed=self.seed, x=pos.x, y=pos.y, heading=heading.value)
            return StepOutcome.TURNED, None
        state.down_counter = 0
        state.position = Position(pos.x, pos.y + dy, self.config.z_pos)
        # every category opens left and right
        category = self._rng.choice(self.catalog.categories)
        self._spawn(category, state.position, "walk")
        state.direction = next_direction(state.direction, self._rng)
        self.metrics["horizontal_moves"] += 1
        return StepOutcome.MOVED, category

    def _open_bottom(self, state: WalkState) -> None:
        """Make sure the room being left downward has a bottom opening."""
        current = state.category_at(state.position)
        if current is not None and current.has_bottom:
            return
        if state.down_counter >= 2:
            # entered from above, keep the top opening
            category = RoomCategory.SIDES_TOP_BOTTOM
            self.metrics["corridor_overrides"] += 1
        else:
            category = self._rng.choice(FIRST_DESCENT_ROLL)
            if category is RoomCategory.SIDES_TOP:
                category = RoomCategory.SIDES_BOTTOM
        self._spawn(category, state.position, "exit", replace=True)

    def _spawn(self, category: RoomCategory, position: Position, source: str, replace: bool = False) -> None:
        state = self.state
        variant = self.catalog.pick_variant(category, self._rng)
        try:
            if replace:
                self.spawner.replace_room(variant, position, ZERO_ROTATION)
            else:
                self.spawner.spawn_room(variant, position, ZERO_ROTATION)
        except SpawnError as exc:
            self._abort(exc, position, category)
        state.record(Placement(position, category, variant, ZERO_ROTATION, source))
        self.placeholders.mark_filled(position)
        self.metrics["rooms_replaced" if replace else "rooms_spawned"] += 1

    def _abort(self, exc: SpawnError, position: Position, category) -> None:
        state = self.state
        state.failed = True
        log.error(
            event="layout_abort", seed=self.seed, x=position.x, y=position.y,
            direction=state.direction.name, category=getattr(category, "name", None), reason=str(exc),
        )
        raise GenerationAborted(
            f"spawn failed at {tuple(position)}: {exc}",
            position=position,
            direction=state.direction,
            category=category,
        ) from exc

    def _finish(self, state: WalkState) -> None:
        state.out_of_bounds = True
        try:
            filled = backfill_unvisited(state, self.placeholders, self.catalog, self.spawner, self._rng)
        except SpawnError as exc:
            self._abort(exc, state.position, None)
        self.metrics["rooms_backfilled"] += len(filled)
        self.metrics["rooms_spawned"] += len(filled)
        log.debug(event="layout_backfill", seed=self.seed, filled=len(filled))
        log.info(
            event="layout_finished", seed=self.seed, steps=state.steps + 1,
            rooms=len(state.placements), backfilled=len(filled),
        )
        self._notify_level_ready(state)

    def _notify_level_ready(self, state: WalkState) -> None:
        if self._level_ready_fired:
            return
        self._level_ready_fired = True
        for listener in self.listeners:
            listener.on_level_ready(state)


__all__ = ["LayoutGenerator", "FIRST_DESCENT_ROLL"]
