"""Screen routing.

Two routes, no back stack: every navigation replaces the current screen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Route(str, Enum):
    """Screens the app can show."""

    ENTRY = "entry"
    PRACTICE = "practice"
    EXIT = "exit"


@dataclass(frozen=True)
class Location:
    """A route plus its parameters."""

    route: Route
    params: dict[str, Any] = field(default_factory=dict)


class Router:
    """Tracks the current screen.

    Attributes:
        current: Location being shown
        visited: Every location shown so far, for inspection
    """

    def __init__(self, initial: Location | None = None):
        self.current = initial or Location(Route.ENTRY)
        self.visited: list[Location] = [self.current]

    def replace(self, route: Route | str, **params: Any) -> Location:
        """Replace the current screen.

        Args:
            route: Screen to show
            **params: Route parameters, e.g. ``word`` for the practice screen

        Returns:
            The new current location
        """
        route = Route(route)
        if route == Route.PRACTICE and not params.get("word"):
            raise ValueError("practice route requires a 'word' parameter")
        self.current = Location(route, dict(params))
        self.visited.append(self.current)
        return self.current

    @property
    def finished(self) -> bool:
        return self.current.route == Route.EXIT
