"""
model.py — Model layer (simulation engine).

Owns ALL game rules. Zero rendering, zero input handling, zero lifecycle.
Every operation is a pure function of a GameData value plus an injected
random source, so the session layer can swap whole states atomically.

Classes / functions:
    Direction          — immutable (dx, dy) unit vector
    GameData           — snake, directions, food, score, level, speed, best
    Tick / Collision   — the two possible outcomes of advance()
    new_game()         — seed a fresh GameData
    request_direction()— buffer a turn (reversals rejected)
    spawn_food()       — uniform free-cell sampling
    advance()          — one simulation step
    cell_kind()        — classify a grid cell for the renderer
"""

from dataclasses import dataclass, replace
from typing import Optional, Union

from .config import (
    GRID_SIZE, INITIAL_SNAKE, INITIAL_DIRECTION, INITIAL_SPEED,
    SPEED_STEP, MIN_SPEED, FOOD_POINTS, POINTS_PER_LEVEL,
    FOOD_SAMPLE_LIMIT,
)

Position = tuple[int, int]

# Side signals for the audio collaborator
FOOD_EATEN = "food_eaten"
LEVEL_UP   = "level_up"
GAME_OVER  = "game_over"

# Cell kinds for the renderer
CELL_EMPTY = "empty"
CELL_HEAD  = "snake-head"
CELL_BODY  = "snake-body"
CELL_FOOD  = "food"


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction."""
    __slots__ = ("x", "y")

    LEFT  = None  # filled below after class definition
    RIGHT = None
    UP    = None
    DOWN  = None

    def __init__(self, x: int, y: int):
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def __setattr__(self, name, value):
        raise AttributeError("Direction is immutable")

    def is_perpendicular(self, other: "Direction") -> bool:
        return self.x * other.x + self.y * other.y == 0

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction({self.x}, {self.y})"


Direction.LEFT  = Direction(-1,  0)
Direction.RIGHT = Direction( 1,  0)
Direction.UP    = Direction( 0, -1)
Direction.DOWN  = Direction( 0,  1)
ALL_DIRS = (Direction.RIGHT, Direction.LEFT, Direction.DOWN, Direction.UP)


# ─────────────────────────── GameData ────────────────────────────
@dataclass(frozen=True)
class GameData:
    """
    Authoritative game state. `snake` is head-first.

    `next_direction` is the buffered turn; it only becomes `direction`
    when a tick commits it, so two key presses inside one tick cannot
    fold the snake back onto itself.
    """
    snake: tuple[Position, ...]
    direction: Direction
    next_direction: Direction
    food: Optional[Position]
    score: int = 0
    level: int = 1
    speed: int = INITIAL_SPEED
    high_score: int = 0

    @property
    def head(self) -> Position:
        return self.snake[0]


@dataclass(frozen=True)
class Tick:
    """A successful step: the next state plus any side signals it raised."""
    data: GameData
    signals: tuple[str, ...] = ()


@dataclass(frozen=True)
class Collision:
    """
    Terminal outcome. `board_cleared` marks a full grid (an implicit win);
    `signals` then carries the FOOD_EATEN / LEVEL_UP of the winning bite.
    """
    final_score: int
    board_cleared: bool = False
    signals: tuple[str, ...] = ()


# ─────────────────────────── Rules ───────────────────────────────
def in_bounds(pos: Position) -> bool:
    x, y = pos
    return 0 <= x < GRID_SIZE and 0 <= y < GRID_SIZE


def spawn_food(snake, rng) -> Optional[Position]:
    """
    Pick a cell not covered by `snake`, uniformly at random.

    Rejection sampling first; if that keeps missing (a crowded board) fall
    back to choosing from the explicit list of free cells. Returns None
    only when the snake covers the whole grid.
    """
    occupied = set(snake)
    for _ in range(FOOD_SAMPLE_LIMIT):
        pos = (rng.randrange(GRID_SIZE), rng.randrange(GRID_SIZE))
        if pos not in occupied:
            return pos

    free = [
        (x, y)
        for y in range(GRID_SIZE)
        for x in range(GRID_SIZE)
        if (x, y) not in occupied
    ]
    if not free:
        return None
    return rng.choice(free)


def new_game(rng, high_score: int = 0, food: Optional[Position] = None) -> GameData:
    """Fresh state at level 1. `food` pins the first food cell when given."""
    snake = tuple(INITIAL_SNAKE)
    start = Direction(*INITIAL_DIRECTION)
    if food is None or food in snake:
        food = spawn_food(snake, rng)
    return GameData(
        snake=snake,
        direction=start,
        next_direction=start,
        food=food,
        score=0,
        level=1,
        speed=INITIAL_SPEED,
        high_score=high_score,
    )


def request_direction(data: GameData, new_dir: Direction) -> GameData:
    """
    Buffer a turn. Only turns across the committed axis of travel are
    accepted; anything else (a reversal, or the current axis) is ignored.
    """
    if not new_dir.is_perpendicular(data.direction):
        return data
    return replace(data, next_direction=new_dir)


def advance(data: GameData, rng) -> Union[Tick, Collision]:
    """Advance one cell. Returns a Tick, or a Collision if the move is fatal."""
    direction = data.next_direction
    hx, hy = data.head
    new_head = (hx + direction.x, hy + direction.y)

    if not in_bounds(new_head):
        return Collision(data.score)

    eating = new_head == data.food
    # The tail vacates its cell this tick unless the snake is growing
    blocking = data.snake if eating else data.snake[:-1]
    if new_head in blocking:
        return Collision(data.score)

    snake = (new_head,) + data.snake
    if not eating:
        return Tick(replace(data, snake=snake[:-1], direction=direction))

    signals = [FOOD_EATEN]
    score = data.score + FOOD_POINTS * data.level
    level, speed = data.level, data.speed
    if score // POINTS_PER_LEVEL > level - 1:
        level += 1
        speed = max(MIN_SPEED, speed - SPEED_STEP)
        signals.append(LEVEL_UP)

    food = spawn_food(snake, rng)
    if food is None:
        return Collision(score, board_cleared=True, signals=tuple(signals))

    return Tick(
        replace(
            data,
            snake=snake,
            direction=direction,
            food=food,
            score=score,
            level=level,
            speed=speed,
        ),
        tuple(signals),
    )


# ─────────────────────────── Queries ─────────────────────────────
def cell_kind(data: GameData, pos: Position) -> str:
    if pos == data.head:
        return CELL_HEAD
    if pos in data.snake:
        return CELL_BODY
    if pos == data.food:
        return CELL_FOOD
    return CELL_EMPTY
