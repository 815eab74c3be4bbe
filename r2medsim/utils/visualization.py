"""
Visualization utilities for R2MedSim.

This module draws the distribution of replication-level bootstrap means.
"""

__all__ = []


def _create_histogram_plot(result, bins: int = 40, title=None, show: bool = True):
    """Histogram of bootstrap means with the 95% interval and zero marked.

    Bin edges are spaced linearly between ``summary.min`` and
    ``summary.max``.

    Args:
        result: ``SimulationResult`` to draw.
        bins: Number of bins.
        title: Plot title; defaults to the configuration name.
        show: Call ``plt.show()`` after drawing.

    Returns:
        The matplotlib ``(fig, ax)`` pair.

    Raises:
        ImportError: If ``matplotlib`` is not installed.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError("matplotlib required for plotting: pip install matplotlib") from None

    counts, edges = result.histogram(bins)
    summary = result.summary

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.bar(edges[:-1], counts, width=edges[1:] - edges[:-1], align="edge", color="#4f46e5", alpha=0.7, edgecolor="white")

    ax.axvline(summary.ci_lower, color="red", linestyle="--", linewidth=1.5, label="95% interval")
    ax.axvline(summary.ci_upper, color="red", linestyle="--", linewidth=1.5)
    ax.axvline(summary.median, color="black", linewidth=1.5, label=f"Median ({summary.median:.4f})")
    ax.axvline(0.0, color="#888888", linestyle=":", linewidth=1.5, label="Zero")

    cfg = result.config
    ax.set_title(title or f"{cfg.name}: bootstrap means of R²med", fontsize=14, fontweight="bold")
    ax.set_xlabel("Mean R²med per replication", fontsize=12)
    ax.set_ylabel("Replications", fontsize=12)
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper right")

    plt.tight_layout()
    if show:
        plt.show()
    return fig, ax
