"""
Parsing utilities for R2MedSim.

Parses comma-separated ``name=value`` strings such as
``"a=0.5, c_prime=0.5, b=0"`` into structural parameters.
"""

from typing import Dict, List, Tuple

__all__ = []

# Accepted spellings for each structural parameter
_ALIASES = {
    "a": "a",
    "b": "b",
    "c_prime": "c_prime",
    "c'": "c_prime",
    "cp": "c_prime",
    "sigma_em": "sigma_em",
    "sd_em": "sigma_em",
}


class _AssignmentParser:
    """Parses comma-separated ``name=value`` assignment strings.

    Names are matched case-insensitively against *available_items* after
    alias resolution (``c'`` and ``cp`` map to ``c_prime``).

    A module-level singleton ``_parser`` is used throughout the codebase.
    """

    def _parse(self, input_string: str, available_items: List[str]) -> Tuple[Dict[str, float], List[str]]:
        """Parse a comma-separated assignment string.

        Args:
            input_string: Raw user input (e.g. ``"a=0.5, b=0"``).
            available_items: Valid names for the left-hand side.

        Returns:
            Tuple of ``(parsed_dict, error_list)``.
        """
        parsed_items: Dict[str, float] = {}
        errors = []

        for assignment in self._split_assignments(input_string):
            try:
                name, value = self._parse_assignment(assignment)
            except ValueError as e:
                errors.append(str(e))
                continue

            canonical = _ALIASES.get(name.lower(), name)
            if canonical not in available_items:
                errors.append(f"'{name}' not found. Available: {', '.join(available_items)}")
                continue

            parsed_value, error = self._parse_number(value)
            if error:
                errors.append(f"{name}: {error}")
                continue
            if canonical in parsed_items:
                errors.append(f"'{canonical}' assigned more than once")
                continue
            parsed_items[canonical] = parsed_value

        return parsed_items, errors

    def _split_assignments(self, input_string: str) -> List[str]:
        """Split on commas, dropping empty pieces."""
        return [part.strip() for part in input_string.split(",") if part.strip()]

    def _parse_assignment(self, assignment: str) -> Tuple[str, str]:
        """Parse single assignment into name and value parts."""
        if "=" not in assignment:
            raise ValueError(f"Invalid format: '{assignment}'. Expected 'name=value'")
        name, value = assignment.split("=", 1)
        return name.strip(), value.strip()

    def _parse_number(self, value: str) -> Tuple[float, str]:
        """Parse a real-valued parameter."""
        try:
            return float(value), ""
        except ValueError:
            return 0.0, f"Invalid value '{value}'. Must be a number"


_parser = _AssignmentParser()
