"""Weather and day/night state shared by every organism in a run."""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass
class Weather:
    """Three independently toggled flags. ``condition`` reports the dominant one."""
    raining: bool = False
    snowing: bool = False
    sunny: bool = True

    def toggle_rain(self) -> None:
        self.raining = not self.raining

    def toggle_snow(self) -> None:
        self.snowing = not self.snowing

    def toggle_sun(self) -> None:
        self.sunny = not self.sunny

    @property
    def storm(self) -> bool:
        """Rain and snow at once. Nothing moves in a storm."""
        return self.raining and self.snowing

    @property
    def condition(self) -> str:
        if self.snowing:
            return "snow"
        if self.raining:
            return "rain"
        return "sun"

    def update(self, rng: random.Random, rain_p: float, snow_p: float, sun_p: float) -> None:
        """Roll rain, then snow, then sun. Each roll is a fresh draw and only
        happens if the previous one missed, so at most one flag flips per tick."""
        if rng.random() <= rain_p:
            self.toggle_rain()
        elif rng.random() <= snow_p:
            self.toggle_snow()
        elif rng.random() <= sun_p:
            self.toggle_sun()


@dataclass
class DayNightCycle:
    is_day: bool = True

    def toggle(self) -> None:
        self.is_day = not self.is_day

    def advance(self, tick: int) -> None:
        """Flip on every second tick; one full day is four ticks."""
        if tick % 2 == 0:
            self.toggle()

    @property
    def time_of_day(self) -> str:
        return "day" if self.is_day else "night"
