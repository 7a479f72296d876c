"""Parsing of the --show option into an immutable field selection."""
from dataclasses import dataclass
from typing import FrozenSet, List, Optional

# Canonical field -> tokens that request it, in display order
FIELD_SYNONYMS = {
    "condition": ("condition",),
    "temperature": ("temperature", "temp"),
    "humidity": ("humidity",),
    "pressure": ("pressure",),
    "wind-speed": ("wind-speed", "wind"),
    "cloudiness": ("cloudiness", "clouds"),
    "sunrise": ("sunrise",),
    "sunset": ("sunset",),
    "precipitation": ("precipitation", "rain", "snow"),
    "time": ("time", "current-time"),
}

ALL_TOKEN = "all"

KNOWN_TOKENS = frozenset(
    token for tokens in FIELD_SYNONYMS.values() for token in tokens
) | {ALL_TOKEN}


@dataclass(frozen=True)
class FieldSelection:
    """Which report fields the user asked for."""
    fields: FrozenSet[str] = frozenset()
    provided: bool = False  # True once --show was given, even if empty

    @property
    def display_all(self) -> bool:
        return not self.provided or ALL_TOKEN in self.fields

    def wants(self, field: str) -> bool:
        """Return True if the canonical field should be displayed."""
        if self.display_all:
            return True
        return any(token in self.fields for token in FIELD_SYNONYMS[field])

    def unknown_tokens(self) -> List[str]:
        return sorted(self.fields - KNOWN_TOKENS)


def parse_field_selection(raw: Optional[str]) -> FieldSelection:
    """
    Build a FieldSelection from the raw --show value.

    Args:
        raw: Comma-separated field names, or None if the option was omitted

    Returns:
        FieldSelection with lower-cased, trimmed, non-empty tokens
    """
    if raw is None:
        return FieldSelection()

    tokens = (part.strip().lower() for part in raw.split(","))
    return FieldSelection(fields=frozenset(t for t in tokens if t), provided=True)
