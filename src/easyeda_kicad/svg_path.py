"""Parse the SVG-like path strings EasyEDA uses for arcs and regions.

Only the ``M``, ``L``, ``A`` and ``Z`` commands are understood. Letter case
is ignored: EasyEDA writes absolute coordinates in both cases.
"""

from __future__ import annotations

import math
import re

from .exceptions import PathSyntaxError
from .models import ArcTo, ClosePath, LineTo, MoveTo, PathCommand, Point, SingleArc

_TOKEN_RE = re.compile(
    r"""
    (?P<command>[MLAZmlaz])
    | (?P<number>[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)
    | (?P<separator>[\s,]+)
    | (?P<invalid>.)
    """,
    re.VERBOSE,
)

# Number of arguments consumed by one coordinate group of each command
_ARITY = {"M": 2, "L": 2, "A": 7, "Z": 0}

_RADIUS_TOLERANCE = 1e-6


def _tokenize(path: str) -> list[str | float]:
    tokens: list[str | float] = []
    for match in _TOKEN_RE.finditer(path):
        kind = match.lastgroup
        if kind == "command":
            tokens.append(match.group().upper())
        elif kind == "number":
            tokens.append(float(match.group()))
        elif kind == "invalid":
            msg = f"Unexpected character {match.group()!r} at offset {match.start()}"
            raise PathSyntaxError(msg, path)
    return tokens


def _flag(value: float, path: str) -> bool:
    if value not in (0.0, 1.0):
        msg = f"Arc flag must be 0 or 1, got {value:g}"
        raise PathSyntaxError(msg, path)
    return value == 1.0


def _build(command: str, args: list[float], first_group: bool, path: str) -> PathCommand:
    if command == "M":
        point = Point(args[0], args[1])
        # Extra coordinate pairs after a move are implicit line-tos
        return MoveTo(point) if first_group else LineTo(point)
    if command == "L":
        return LineTo(Point(args[0], args[1]))
    return ArcTo(
        end=Point(args[5], args[6]),
        rx=abs(args[0]),
        ry=abs(args[1]),
        rotation=args[2],
        large_arc=_flag(args[3], path),
        sweep=_flag(args[4], path),
    )


def parse_path(path: str) -> list[PathCommand]:
    """Parse a path string into an ordered list of commands.

    Raises:
        PathSyntaxError: on unknown characters, coordinates before the first
            command, or argument counts that do not fill whole groups.
    """
    tokens = _tokenize(path)
    commands: list[PathCommand] = []
    i = 0
    while i < len(tokens):
        command = tokens[i]
        if not isinstance(command, str):
            msg = f"Expected a command letter, got {command:g}"
            raise PathSyntaxError(msg, path)
        i += 1

        args: list[float] = []
        while i < len(tokens) and not isinstance(tokens[i], str):
            args.append(tokens[i])
            i += 1

        arity = _ARITY[command]
        if arity == 0:
            if args:
                msg = "Close command takes no arguments"
                raise PathSyntaxError(msg, path)
            commands.append(ClosePath())
            continue
        if not args or len(args) % arity:
            msg = f"Command {command} expects groups of {arity} numbers, got {len(args)}"
            raise PathSyntaxError(msg, path)
        for start in range(0, len(args), arity):
            group = args[start:start + arity]
            commands.append(_build(command, group, start == 0, path))

    return commands


def has_arc(path: str) -> bool:
    return any(isinstance(cmd, ArcTo) for cmd in parse_path(path))


def extract_polygon(path: str) -> list[Point] | None:
    """Return the vertices of a straight-edged single-subpath path.

    The ring is implicitly closed; no closing vertex is appended. Returns
    None for paths containing arcs, several subpaths or fewer than 3 points.
    """
    points: list[Point] = []
    moves = 0
    for cmd in parse_path(path):
        if isinstance(cmd, ArcTo):
            return None
        if isinstance(cmd, MoveTo):
            moves += 1
            points.append(cmd.point)
        elif isinstance(cmd, LineTo):
            points.append(cmd.point)

    if moves != 1 or len(points) < 3:
        return None
    return points


def extract_single_arc(path: str) -> SingleArc | None:
    """Return the parameters of a ``M x y A ...`` path, or None."""
    commands = parse_path(path)
    if len(commands) != 2:
        return None
    move, arc = commands
    if not isinstance(move, MoveTo) or not isinstance(arc, ArcTo):
        return None
    if not math.isclose(arc.rx, arc.ry, rel_tol=_RADIUS_TOLERANCE):
        return None
    return SingleArc(
        start=move.point,
        end=arc.end,
        radius=arc.rx,
        large_arc=arc.large_arc,
        sweep=arc.sweep,
    )
