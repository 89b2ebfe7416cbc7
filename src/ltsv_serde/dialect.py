"""
Dialect: the configurable parts of the LTSV line format.

The defaults describe standard LTSV. A Dialect is immutable and shared
freely between threads.
"""

from dataclasses import dataclass
from enum import Enum


class DuplicateLabels(Enum):
    """What the decoder does when a label repeats within one line."""

    OVERWRITE = "overwrite"  # last occurrence wins
    ERROR = "error"          # raise InvalidInput


@dataclass(frozen=True)
class Dialect:
    """
    Separators and policies for one LTSV flavour.

    Properties:
        field_separator: Separates "label:value" chunks (default TAB)
        label_separator: Separates label from value; only the first
            occurrence in a chunk splits (default ':')
        duplicate_labels: DuplicateLabels policy for the decoder
    """

    field_separator: str = "\t"
    label_separator: str = ":"
    duplicate_labels: DuplicateLabels = DuplicateLabels.OVERWRITE

    def __post_init__(self):
        if not self.field_separator or not self.label_separator:
            raise ValueError("Separators must be non-empty strings")
        if self.field_separator == self.label_separator:
            raise ValueError(
                f"Field and label separators must differ, both are {self.field_separator!r}"
            )


DEFAULT_DIALECT = Dialect()
STRICT_DIALECT = Dialect(duplicate_labels=DuplicateLabels.ERROR)


__all__ = ["DuplicateLabels", "Dialect", "DEFAULT_DIALECT", "STRICT_DIALECT"]
