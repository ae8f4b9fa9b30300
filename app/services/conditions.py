from enum import Enum
from typing import Optional, Tuple


class ConditionCategory(str, Enum):
    """Presentation categories used by clients to pick an icon."""

    SUNNY = "sunny"
    RAIN = "rain"
    DRIZZLE = "drizzle"
    SNOW = "snow"
    STORM = "storm"
    FOG = "fog"
    PARTLY_CLOUDY = "partly-cloudy"
    OVERCAST = "overcast"


# Checked top to bottom, first match wins.
# "overcast clouds" must hit OVERCAST before the generic "cloud" rule,
# and "thunderstorm with rain" must hit STORM before RAIN.
CONDITION_RULES: Tuple[Tuple[ConditionCategory, Tuple[str, ...]], ...] = (
    (ConditionCategory.STORM, ("storm", "thunder")),
    (ConditionCategory.DRIZZLE, ("drizzle",)),
    (ConditionCategory.RAIN, ("rain",)),
    (ConditionCategory.SNOW, ("snow",)),
    (ConditionCategory.FOG, ("fog", "mist", "haze")),
    (ConditionCategory.OVERCAST, ("overcast",)),
    (ConditionCategory.PARTLY_CLOUDY, ("cloud",)),
    (ConditionCategory.SUNNY, ("clear", "sunny")),
)


def classify_condition(condition: Optional[str]) -> ConditionCategory:
    """
    Map a free-text provider condition (e.g. "Clouds", "light rain") to a category.

    Matching is a case-insensitive substring test against `CONDITION_RULES`.
    Missing, empty or unmatched text falls back to SUNNY.
    """
    if not condition:
        return ConditionCategory.SUNNY

    text = condition.lower()
    for category, needles in CONDITION_RULES:
        if any(needle in text for needle in needles):
            return category
    return ConditionCategory.SUNNY
