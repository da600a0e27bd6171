# src/taskdeck/forms/form.py

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

Rule = Callable[[Any], str | None]
# A rule returns an error message, or None when the value is fine.


class Form:
    """
    Field-level validation state for one form.

    - values: current field values
    - errors: field -> message, only for fields that failed their last check
    - touched: fields the user has left at least once

    Typing into a field clears its error; the error comes back only on the
    next explicit validation (mark_touched / validate).
    """

    def __init__(self, initial_values: Mapping[str, Any], rules: Mapping[str, Rule] | None = None) -> None:
        self._initial = dict(initial_values)
        self._rules = dict(rules or {})
        self.values: dict[str, Any] = dict(self._initial)
        self.errors: dict[str, str] = {}
        self.touched: set[str] = set()

    def set_value(self, field: str, value: Any) -> None:
        self.values[field] = value
        self.errors.pop(field, None)

    def mark_touched(self, field: str) -> bool:
        self.touched.add(field)
        return self.validate(field)

    def validate(self, field: str | None = None) -> bool:
        """
        Check one field, or every field with a rule.
        Returns True when none of the checked fields failed.
        """
        names = [field] if field is not None else list(self._rules)

        ok = True
        for name in names:
            rule = self._rules.get(name)
            if rule is None:
                continue
            message = rule(self.values.get(name))
            if message:
                self.errors[name] = message
                ok = False
            else:
                self.errors.pop(name, None)
        return ok

    def reset(self) -> None:
        self.values = dict(self._initial)
        self.errors = {}
        self.touched = set()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def visible_error(self, field: str) -> str | None:
        """Error to show next to a field: only once the field was touched."""
        if field not in self.touched:
            return None
        return self.errors.get(field)
