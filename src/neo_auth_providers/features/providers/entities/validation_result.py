"""Field validation result."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ValidationResult:
    """Maps each required field to whether it is invalid.

    Field order is the order in which a form should draw attention to
    problems, so ``first_invalid`` is deterministic.
    """

    fields: Dict[str, bool] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not any(self.fields.values())

    @property
    def invalid_fields(self) -> List[str]:
        return [name for name, invalid in self.fields.items() if invalid]

    @property
    def first_invalid(self) -> Optional[str]:
        for name, invalid in self.fields.items():
            if invalid:
                return name
        return None

    def is_invalid(self, name: str) -> bool:
        """Check a single field; unknown fields are never invalid."""
        return self.fields.get(name, False)
