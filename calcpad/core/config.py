"""Calculator settings."""

from pydantic import BaseModel, Field


class CalculatorConfig(BaseModel):
    """Display limits and rendering options for a calculator session."""
    max_digits: int = Field(default=12, ge=3)
    group_separator: str = ","
    scientific_precision: int = Field(default=6, ge=0)
    error_text: str = "Error"

    @property
    def scientific_upper(self) -> float:
        """Magnitudes at or above this render in scientific notation."""
        return 10.0 ** self.max_digits

    @property
    def scientific_lower(self) -> float:
        """Non-zero magnitudes below this render in scientific notation."""
        return 10.0 ** -(self.max_digits - 2)


DEFAULT_CONFIG = CalculatorConfig()
