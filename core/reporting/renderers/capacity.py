from pathlib import Path
from typing import List

import matplotlib.pyplot as plt
from matplotlib import ticker

from core.services.forecasting import CapacityWeek


class CapacityChartRenderer:
    def render(self, weeks: List[CapacityWeek], output_path: Path) -> Path:
        if not weeks:
            raise ValueError("No allocated weeks available for capacity chart")

        weeks = sorted(weeks, key=lambda w: w.week)
        labels = [w.week.strftime("%d %b") for w in weeks]
        positions = range(len(weeks))
        capacity = [w.total_capacity for w in weeks]
        allocated = [w.total_allocated for w in weeks]

        fig, ax = plt.subplots(figsize=(12, 5))

        ax.bar(positions, capacity, width=0.6, color="#d0e8d0", edgecolor="black",
               linewidth=0.6, label="Capacity")
        ax.bar(positions, allocated, width=0.35,
               color=["#ff6666" if w.deficit > 0 else "#8080ff" for w in weeks],
               label="Allocated")

        ax.set_xticks(list(positions))
        ax.set_xticklabels(labels, fontsize=9, rotation=45, ha="right")
        ax.yaxis.set_major_formatter(ticker.FormatStrFormatter("%.0f h"))

        ax.set_title("Team Capacity vs Allocation")
        ax.grid(True, axis="y", linestyle=":", linewidth=0.5)
        ax.legend(loc="upper right")

        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)

        return output_path
