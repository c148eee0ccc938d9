import argparse
import logging
import sys
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import FrozenSet, Iterable, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class IllegalChar(ValueError):
    def __init__(self, char: str):
        super().__init__(f"illegal character {char!r} in instructions")
        self.char = char

    def __eq__(self, other: object) -> bool:
        return isinstance(other, IllegalChar) and other.char == self.char

    def __hash__(self) -> int:
        return hash(self.char)


class Direction(Enum):
    NORTH = (0, 1)
    SOUTH = (0, -1)
    EAST = (1, 0)
    WEST = (-1, 0)

    @classmethod
    def from_char(cls, char: str) -> "Direction":
        try:
            return _CHAR_TO_DIRECTION[char]
        except KeyError:
            raise IllegalChar(char) from None

    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))


_CHAR_TO_DIRECTION = {
    "^": Direction.NORTH,
    "v": Direction.SOUTH,
    ">": Direction.EAST,
    "<": Direction.WEST,
}


@dataclass(frozen=True)
class Pos:
    x: int = 0
    y: int = 0

    def __add__(self, direction: Direction) -> "Pos":
        if not isinstance(direction, Direction):
            return NotImplemented
        dx, dy = direction.value
        return Pos(self.x + dx, self.y + dy)


IndexedMove = Tuple[int, Direction]
Move = Union[Direction, IndexedMove]


@dataclass
class ParseResult:
    """
    Outcome of parsing an instruction string.

    Either `moves` holds every parsed direction and `error` is None, or
    `error` holds the first illegal character and `moves` is empty.
    """

    moves: List[Direction] = field(default_factory=list)
    error: Optional[IllegalChar] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> List[Direction]:
        if self.error is not None:
            raise self.error
        return self.moves


def parse_moves(instructions: str) -> ParseResult:
    moves = []
    for char in instructions:
        try:
            moves.append(Direction.from_char(char))
        except IllegalChar as e:
            return ParseResult(error=e)

    logger.debug("parsed %d moves", len(moves))
    return ParseResult(moves=moves)


def index_moves(moves: Iterable[Direction]) -> List[IndexedMove]:
    # index is the position in the original input, it decides which agent moves
    return list(enumerate(moves))


class SantaTracker:
    HUMAN = 0
    ROBOT = 1

    def __init__(self, agents: int = 1):
        if agents < 1:
            raise ValueError(f"agents must be at least 1, got {agents}")

        self.agents = agents
        self._positions: List[Pos] = [Pos(0, 0)] * agents
        self._visited_houses = {Pos(0, 0)}

    def num_visited_houses(self) -> int:
        return len(self._visited_houses)

    def visited_houses(self) -> FrozenSet[Pos]:
        return frozenset(self._visited_houses)

    def current_pos(self, agent: int = 0) -> Pos:
        if not 0 <= agent < self.agents:
            raise ValueError(f"no agent {agent} on a tracker with {self.agents} agents")
        return self._positions[agent]

    def current_human_pos(self) -> Pos:
        return self.current_pos(self.HUMAN)

    def current_robo_pos(self) -> Pos:
        if self.agents < 2:
            raise ValueError("tracker has no robot agent")
        return self.current_pos(self.ROBOT)

    def perform_move(self, move: Move, index: Optional[int] = None) -> None:
        """
        Move the agent picked by the move's index in the original input.

        `move` is either an `(index, direction)` pair or a bare direction with
        `index` given separately. A single-agent tracker accepts a bare
        direction without an index.
        """
        if isinstance(move, tuple):
            index, direction = move
        else:
            direction = move

        if index is None:
            if self.agents > 1:
                raise ValueError("index is required when tracking more than one agent")
            index = 0

        agent = index % self.agents
        new_position = self._positions[agent] + direction
        self._positions[agent] = new_position
        self._visited_houses.add(new_position)

        logger.debug("move %d: agent %d -> (%d, %d)", index, agent, new_position.x, new_position.y)

    def perform_moves(self, moves: Iterable[Move]) -> None:
        for i, move in enumerate(moves):
            self.perform_move(move, i)


class Day3:
    def __init__(self, filepath: str):
        self.filepath = filepath

    def _read_instructions(self) -> str:
        return Path(self.filepath).read_text(encoding="utf-8").strip()

    def _deliver(self, agents: int) -> int:
        moves = parse_moves(self._read_instructions()).unwrap()
        tracker = SantaTracker(agents)
        if agents == 1:
            tracker.perform_moves(moves)
        else:
            tracker.perform_moves(index_moves(moves))

        return tracker.num_visited_houses()

    def part1(self) -> int:
        return self._deliver(agents=1)

    def part2(self) -> int:
        return self._deliver(agents=2)


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Count houses that receive presents.")
    parser.add_argument("filepath", nargs="?", default="./input3.txt")
    parser.add_argument("--part", type=int, choices=(1, 2), help="run only this part")
    parser.add_argument("-v", "--verbose", action="store_true", help="log every move")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    day = Day3(args.filepath)
    try:
        if args.part in (None, 1):
            print(f"Santa delivered presents to {day.part1()} houses.")
        if args.part in (None, 2):
            print(f"Santa and Robo-Santa delivered presents to {day.part2()} houses.")
    except (OSError, UnicodeDecodeError) as e:
        sys.exit(f"Failed to read the input file: {e}")
    except IllegalChar as e:
        sys.exit(f"Failed to parse the input file to a list of moves: {e}")


if __name__ == "__main__":
    main()
