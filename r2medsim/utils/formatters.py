"""
Plain-text formatting of simulation results for console output.
"""

from typing import Any, Dict, List, Optional

__all__ = []


class _TableFormatter:
    """Minimal fixed-width table builder."""

    def _create_table(self, headers: List[str], rows: List[List[str]], col_widths: Optional[List[int]] = None) -> str:
        """Render *headers* and *rows* as aligned columns with a dashed separator."""
        if col_widths is None:
            col_widths = [max(len(str(h)), *(len(str(r[i])) for r in rows)) if rows else len(str(h)) for i, h in enumerate(headers)]

        def _line(cells):
            return " ".join(f"{str(c):<{w}}" for c, w in zip(cells, col_widths))

        lines = [_line(headers), "-" * (sum(col_widths) + len(col_widths) - 1)]
        lines.extend(_line(r) for r in rows)
        return "\n".join(lines)

    def _format_value(self, value: Any, spec: Optional[str] = None) -> str:
        """Format floats compactly; other values via ``str``."""
        if isinstance(value, float):
            if spec:
                return format(value, spec)
            if value != 0 and abs(value) < 0.001:
                return f"{value:.6f}"
            return f"{value:.4f}"
        return str(value)


class _ResultFormatter(_TableFormatter):
    """Builds the short and long text reports for a simulation run."""

    def _format_short_simulation(self, data: Dict[str, Any]) -> str:
        model = data["model"]
        res = data["results"]
        s = res["summary"]
        verdict = "contains 0" if res["ci_contains_zero"] else "excludes 0"
        lines = [
            f"R²med Simulation Results ({model['name']}, N={model['n']}, "
            f"{model['replications']} replications x {model['bootstrap_samples']} bootstraps)",
            f"Paths: a={model['a']}, c'={model['c_prime']}, b={model['b']}, SD(e_M)={model['sigma_em']}",
            f"Median bootstrap mean: {self._format_value(s['median'])}",
            f"95% interval: [{self._format_value(s['ci_lower'])}, {self._format_value(s['ci_upper'])}] ({verdict})",
        ]
        return "\n".join(lines)

    def _format_long_simulation(self, data: Dict[str, Any]) -> str:
        res = data["results"]
        s = res["summary"]
        rows = [
            ["Min", self._format_value(s["min"])],
            ["2.5%", self._format_value(s["ci_lower"])],
            ["25%", self._format_value(s["p25"])],
            ["Median", self._format_value(s["median"])],
            ["75%", self._format_value(s["p75"])],
            ["97.5%", self._format_value(s["ci_upper"])],
            ["Max", self._format_value(s["max"])],
        ]
        parts = [
            self._format_short_simulation(data),
            "",
            "Distribution of bootstrap means:",
            self._create_table(["Statistic", "Value"], rows),
            "",
            f"Population R²med: {self._format_value(res['population_r2med'])}",
            f"Seed: {data['model']['seed']}",
        ]
        if res["n_degenerate"]:
            parts.append(f"Non-finite replication means excluded: {res['n_degenerate']}")
        return "\n".join(parts)

    def _format_scenarios(self, rows: List[Dict[str, Any]]) -> str:
        headers = ["Scenario", "a", "c'", "SD(e_M)", "Median", "2.5%", "97.5%", "Contains 0"]
        body = [
            [
                r["scenario"],
                self._format_value(r["a"], ".2f"),
                self._format_value(r["c_prime"], ".2f"),
                self._format_value(r["sigma_em"], ".2f"),
                self._format_value(r["median"]),
                self._format_value(r["ci_lower"]),
                self._format_value(r["ci_upper"]),
                "yes" if r["ci_contains_zero"] else "no",
            ]
            for r in rows
        ]
        return "Scenario Comparison\n" + self._create_table(headers, body)


def _format_results(result_type: str, data: Any, summary: str = "short") -> str:
    """Dispatch to the right report.

    Args:
        result_type: ``"simulation"`` (a result dict) or ``"scenarios"``
            (a list of comparison-row dicts).
        data: Result payload.
        summary: ``"short"`` or ``"long"`` (simulation reports only).
    """
    formatter = _ResultFormatter()
    if result_type == "simulation":
        if summary == "long":
            return formatter._format_long_simulation(data)
        return formatter._format_short_simulation(data)
    if result_type == "scenarios":
        return formatter._format_scenarios(data)
    raise ValueError(f"Unknown result type: {result_type!r}")
