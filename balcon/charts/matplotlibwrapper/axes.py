from abc import ABC, abstractmethod
from typing import Sequence
from matplotlib.axes import Axes


class Axis(ABC):

    def __init__(self, axes: Axes):
        self._axes = axes

    @property
    def axes(self) -> Axes:
        return self._axes

    @abstractmethod
    def add_title(self, title: str):
        ...

    @abstractmethod
    def set_limits(self, lower_limit: float, upper_limit: float):
        ...

    @abstractmethod
    def set_ticks(self, positions: Sequence[float], labels: Sequence[str] | None = None):
        """Place major ticks at `positions`, with `labels` if given."""
        ...


class X1Axis(Axis):

    def add_title(self, title: str):
        self._axes.set_xlabel(title)

    def set_limits(self, lower_limit: float, upper_limit: float):
        self._axes.set_xlim(lower_limit, upper_limit)

    def set_ticks(self, positions: Sequence[float], labels: Sequence[str] | None = None):
        self._axes.set_xticks(positions, labels=labels)


class Y1Axis(Axis):

    def add_title(self, title: str):
        self._axes.set_ylabel(title)

    def set_limits(self, lower_limit: float, upper_limit: float):
        self._axes.set_ylim(lower_limit, upper_limit)

    def set_ticks(self, positions: Sequence[float], labels: Sequence[str] | None = None):
        self._axes.set_yticks(positions, labels=labels)
