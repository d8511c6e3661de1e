"""
Constants for scroll settings defaults and the messages used when raw
settings fail validation.
"""
from typing import Final, Dict, Any, Tuple


class ConfigMessages:
    """Log message templates for settings validation."""
    INVALID_BOOLEAN: Final[str] = "Invalid {key} '{value}', resetting to boolean default '{default}'"
    INVALID_CHOICE: Final[str] = "Invalid {key} '{value}', resetting to default '{default}'. Valid choices: {choices}"
    INVALID_MASK: Final[str] = "Invalid modifier mask {key} '{value}', resetting to default '{default}'"
    UNKNOWN_KEYS: Final[str] = "Ignoring unknown scroll settings fields: {keys}"

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        for attr_name in dir(self):
            if not attr_name.startswith('_') and attr_name.isupper():
                value = getattr(self, attr_name)
                if not isinstance(value, str) or not value:
                    raise ValueError(f"ConfigMessages.{attr_name} must be a non-empty string.")


class ConfigConstants:
    """Defines default values and valid choices for the raw scroll settings."""
    SMOOTHNESS_CHOICES: Final[Tuple[str, ...]] = ("off", "low", "regular", "high")
    SPEED_CHOICES: Final[Tuple[str, ...]] = ("system", "low", "medium", "high")

    DEFAULT_SMOOTHNESS: Final[str] = "regular"
    DEFAULT_SPEED: Final[str] = "medium"
    DEFAULT_PRECISE: Final[bool] = False
    DEFAULT_TRACKPAD_SIMULATION: Final[bool] = True
    DEFAULT_REVERSE_DIRECTION: Final[bool] = False
    DEFAULT_MODIFIER_MASK: Final[int] = 0

    # CGEventFlags-style masks are 64 bit wide.
    MAX_MODIFIER_MASK: Final[int] = (1 << 64) - 1

    DEFAULT_SETTINGS: Final[Dict[str, Any]] = {
        "smooth": DEFAULT_SMOOTHNESS,
        "speed": DEFAULT_SPEED,
        "precise": DEFAULT_PRECISE,
        "trackpadSimulation": DEFAULT_TRACKPAD_SIMULATION,
        "reverseDirection": DEFAULT_REVERSE_DIRECTION,
        "modifiers.horizontal": DEFAULT_MODIFIER_MASK,
        "modifiers.zoom": DEFAULT_MODIFIER_MASK,
    }

    def __init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.DEFAULT_SMOOTHNESS not in self.SMOOTHNESS_CHOICES:
            raise ValueError("DEFAULT_SMOOTHNESS must be one of SMOOTHNESS_CHOICES")
        if self.DEFAULT_SPEED not in self.SPEED_CHOICES:
            raise ValueError("DEFAULT_SPEED must be one of SPEED_CHOICES")
        if not (0 <= self.DEFAULT_MODIFIER_MASK <= self.MAX_MODIFIER_MASK):
            raise ValueError("DEFAULT_MODIFIER_MASK out of range")

        expected_keys = {
            "smooth", "speed", "precise", "trackpadSimulation", "reverseDirection",
            "modifiers.horizontal", "modifiers.zoom",
        }
        actual_keys = set(self.DEFAULT_SETTINGS.keys())
        if actual_keys != expected_keys:
            missing = expected_keys - actual_keys
            extra = actual_keys - expected_keys
            raise ValueError(f"DEFAULT_SETTINGS key mismatch. Missing: {missing or 'None'}. Extra: {extra or 'None'}.")


class ConfigurationConstants:
    """Container for configuration-related constant groups."""
    def __init__(self) -> None:
        self.defaults = ConfigConstants()
        self.messages = ConfigMessages()

# Singleton instance for easy access
config = ConfigurationConstants()
