from typing import Any, Sequence
from dataclasses import dataclass, field
from abc import ABC, abstractmethod
from pathlib import Path
import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import to_rgba
from matplotlib.figure import Figure
from matplotlib.axes import Axes
from .axes import X1Axis, Y1Axis


@dataclass
class Dataset:
    label: str
    x_values: np.ndarray
    y_values: np.ndarray
    style_props: dict[str, Any] = field(default_factory=dict)


@dataclass
class Legend:
    anchor: str = 'upper center'
    position: tuple[float, float] = (0.5, -0.1)
    columns: int = 2

    def draw(self, axes: Axes):
        axes.legend(loc=self.anchor, ncol=self.columns, bbox_to_anchor=self.position)


class Chart(ABC):
    """
    Thin layer on top of a matplotlib figure with a single pair of axes.
    Data is collected first with `add_xy_data`; it is only plotted when the
    chart is drawn, shown or saved.
    """

    def __init__(
        self,
        size: tuple[float, float] | None = None,
        dpi: int | None = None,
        constructs: tuple[Figure, Axes] | None = None
    ):
        if constructs is None:
            constructs = plt.subplots(figsize=size, dpi=dpi, layout='constrained')
        self.figure, self.axes = constructs
        self.x1 = X1Axis(self.axes)
        self.y1 = Y1Axis(self.axes)
        self.datasets: list[Dataset] = []
        self.legend: Legend | None = None

    def add_xy_data(
        self,
        label: str,
        x1_values: Sequence[float] | np.ndarray,
        y1_values: Sequence[float] | np.ndarray,
        style_props: dict[str, Any] | None = None
    ) -> Dataset:
        """
        Add a dataset to the chart.

        `style_props` holds the keyword arguments that style the dataset when
        it is plotted (e.g. {'marker': 'o', 'linestyle': 'none'}). Which
        properties apply depends on the type of chart.
        """
        dataset = Dataset(
            label,
            np.asarray(x1_values, dtype=float),
            np.asarray(y1_values, dtype=float),
            dict(style_props or {})
        )
        self.datasets.append(dataset)
        return dataset

    @abstractmethod
    def _draw_dataset(self, dataset: Dataset):
        ...

    def add_legend(
        self,
        anchor: str = 'upper center',
        position: tuple[float, float] = (0.5, -0.1),
        columns: int = 2
    ):
        """
        Add a legend to the chart.

        Parameters
        ----------
        anchor:
            Point on the border of the legend box that is placed at `position`
            (any location string accepted by matplotlib, e.g. 'upper center').
        position:
            Coordinates of the anchor relative to the axes; by default centred
            under the x-axis.
        columns:
            Number of columns the labels are divided in.
        """
        self.legend = Legend(anchor, position, columns)

    def add_title(self, title: str):
        self.axes.set_title(title)

    def add_vline(self, x: float, label: str | None = None, **style_props):
        """Add a vertical marker line at `x` (e.g. sunrise on a time axis)."""
        self.axes.axvline(x, label=label, **style_props)

    def draw(self, with_grid: bool = True):
        """Plot the datasets without showing the chart."""
        for dataset in self.datasets:
            self._draw_dataset(dataset)
        self._finish()
        if self.legend is not None:
            self.legend.draw(self.axes)
        self.axes.grid(with_grid)

    def _finish(self):
        pass

    def show(self, with_grid: bool = True):
        self.draw(with_grid)
        plt.show()

    def save(
        self,
        name: str,
        location: Path | str | None = None,
        fmt: str = 'png',
        with_grid: bool = True
    ) -> Path:
        """Draw the chart, save it as `name`.`fmt` in directory `location`
        (the working directory by default) and close it. Returns the path of
        the saved file.
        """
        self.draw(with_grid)
        path = Path(location or Path.cwd()) / f'{name}.{fmt}'
        self.figure.savefig(path, bbox_inches='tight')
        self.close()
        return path

    def close(self):
        plt.close(self.figure)


class LineChart(Chart):

    def _draw_dataset(self, dataset: Dataset):
        self.axes.plot(
            dataset.x_values,
            dataset.y_values,
            label=dataset.label,
            **dataset.style_props
        )


class BandChart(Chart):
    """
    Chart of horizontal bands, one band per dataset. A band is divided in
    segments that all have the same color but a different opacity.

    For each dataset, `x1_values` are the left edges of the segments and
    `y1_values` their opacities (0..1). The style properties must contain the
    `row` of the band (0 is the top band), the `width` of the segments and the
    `color` of the band; `height` (default 0.8) and `background` (default
    '#f5f5f5') are optional.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._rows: dict[int, str] = {}

    def _draw_dataset(self, dataset: Dataset):
        props = dict(dataset.style_props)
        row = props.pop('row')
        width = props.pop('width')
        color = props.pop('color')
        height = props.pop('height', 0.8)
        background = props.pop('background', '#f5f5f5')
        x = dataset.x_values
        opacities = np.clip(np.nan_to_num(dataset.y_values, nan=0.0), 0.0, 1.0)
        y_range = (-row - height / 2, height)
        if x.size:
            self.axes.broken_barh([(x[0], x[-1] + width - x[0])], y_range, facecolors=background)
        self.axes.broken_barh(
            [(xi, width) for xi in x],
            y_range,
            facecolors=[to_rgba(color, a) for a in opacities],
            **props
        )
        self._rows[row] = dataset.label

    def _finish(self):
        rows = sorted(self._rows)
        self.y1.set_ticks([-row for row in rows], [self._rows[row] for row in rows])
