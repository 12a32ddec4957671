from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

import numpy as np
import matplotlib.pyplot as plt

if TYPE_CHECKING:
    import numpy.typing as npt


class Curve(ABC):
    """
    Abstract base class for generated property curves.
    """
    NAME: str = "Curve"
    X_LABEL: str = "x"
    Y_LABEL: str = "y"
    LOG_X: bool = False

    @abstractmethod
    def points(self) -> tuple[npt.NDArray[np.float64], npt.NDArray[np.float64]]:
        """
        Get the sampled curve.

        Returns:
            Arrays of abscissae and ordinates.
        """
        pass

    def plot(self, show: bool = True) -> plt.Figure:
        """
        Plot the curve.

        Args:
            show: Call ``plt.show()`` after drawing.

        Returns:
            The created figure.
        """
        x, y = self.points()

        plt.rcParams["figure.constrained_layout.use"] = True
        fig = plt.figure(figsize=(7, 5))

        plt.plot(x, y, 'r', lw=2)
        if self.LOG_X:
            plt.xscale("log")

        plt.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
        plt.minorticks_on()
        plt.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

        plt.title(self.NAME)
        plt.xlabel(self.X_LABEL)
        plt.ylabel(self.Y_LABEL)

        if show:
            plt.show()
        return fig
