"""
Stockpile history chart for Star Colony.
Plots the stored amount of every resource per finished turn with matplotlib.
"""

import logging
import os
import warnings
from typing import Dict, List, Optional, Tuple

import matplotlib
# Use non-interactive backend for thread safety and server environments
matplotlib.use('Agg')

import matplotlib.pyplot as plt
import numpy as np

from ..core.constants import DEFAULT_CHART_DIR
from ..core.enums import Resource


class EconomyChartGenerator:
    """Renders stockpile history as an SVG line chart."""

    def __init__(self, figsize=(10, 6)):
        self.figsize = figsize
        self.resource_colors = {
            Resource.ENERGY: '#FFB000',    # Amber
            Resource.MINERALS: '#3366FF',  # Blue
            Resource.GAS: '#00CC99',       # Teal
        }

    def build_series(self, history: List[Tuple[int, Dict[Resource, int]]]) -> Tuple[np.ndarray, Dict[Resource, np.ndarray]]:
        """Turn numbers and one amount array per resource."""
        turns = np.array([turn for turn, _ in history], dtype=int)
        series = {
            resource: np.array([stockpile.get(resource, 0) for _, stockpile in history], dtype=int)
            for resource in Resource
        }
        return turns, series

    def create_stockpile_chart(self, history: List[Tuple[int, Dict[Resource, int]]],
                               save_path: Optional[str] = None,
                               player_name: str = "") -> str:
        """Create the stockpile chart and return the path it was saved to."""
        if not history:
            raise ValueError("Cannot chart an empty stockpile history")

        turns, series = self.build_series(history)

        fig, ax = plt.subplots(figsize=self.figsize)
        for resource, amounts in series.items():
            ax.plot(turns, amounts, label=resource.value,
                    color=self.resource_colors[resource], linewidth=2)

        ax.set_xlabel("Turn")
        ax.set_ylabel("Stored amount")
        title = "Stockpile history"
        if player_name:
            title = f"{title}: {player_name}"
        ax.set_title(title)
        ax.set_xlim(turns.min(), max(turns.max(), turns.min() + 1))
        ax.set_ylim(0, max(1, int(np.max([a.max() for a in series.values()])) * 1.1))
        ax.grid(True, alpha=0.3)
        ax.legend(loc='upper left')

        if save_path is None:
            os.makedirs(DEFAULT_CHART_DIR, exist_ok=True)
            save_path = f"{DEFAULT_CHART_DIR}/stockpile_turn_{int(turns.max())}.svg"
        else:
            directory = os.path.dirname(save_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

        # Suppress tight layout warnings when using bbox_inches='tight'
        with warnings.catch_warnings():
            warnings.filterwarnings('ignore', message='.*tight layout.*')
            try:
                fig.savefig(save_path, format='svg', bbox_inches='tight',
                            facecolor='#f8f9fa', transparent=False)
                logging.info(f"Stockpile chart saved: {save_path}")
            finally:
                plt.close(fig)  # Always close to free memory
        return save_path
