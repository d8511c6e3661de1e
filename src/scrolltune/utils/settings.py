"""
Settings parsing for ScrollTune.

This module is the validation boundary between the raw scroll settings handed
over by the config storage and the typed `SettingsSnapshot` the core works
with. Bad values never reach the core: they are logged and replaced with
their defaults, the same way the rest of the application treats config.
"""

import logging
from typing import Any, Dict, List, Mapping

from scrolltune import constants
from scrolltune.core.model import ScrollConfigError, SettingsSnapshot, SmoothnessTier, SpeedTier


class SettingsError(ScrollConfigError):
    """Raised when the raw settings are not a mapping at all."""


class SettingsParser:
    """
    Turns raw scroll settings into a `SettingsSnapshot`.

    Accepts both dotted keys ("modifiers.horizontal") and a nested
    {"modifiers": {...}} mapping. Missing keys take their defaults.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{constants.app.APP_NAME}.Settings")

    def _validate_boolean(self, key: str, value: Any, default: bool) -> bool:
        """Validates a value is a boolean."""
        if isinstance(value, bool):
            return value
        self.logger.warning(constants.config.messages.INVALID_BOOLEAN.format(key=key, value=value, default=default))
        return default

    def _validate_choice(self, key: str, value: Any, default: str, choices: List[str]) -> str:
        """Validates a value is one of the allowed choices (case-insensitive)."""
        if isinstance(value, str):
            for choice in choices:
                if choice.lower() == value.lower():
                    return choice
        self.logger.warning(constants.config.messages.INVALID_CHOICE.format(key=key, value=value, default=default, choices=choices))
        return default

    def _validate_mask(self, key: str, value: Any, default: int) -> int:
        """Validates a value is a non-negative 64 bit modifier mask."""
        if isinstance(value, int) and not isinstance(value, bool) \
                and 0 <= value <= constants.config.defaults.MAX_MODIFIER_MASK:
            return value
        self.logger.warning(constants.config.messages.INVALID_MASK.format(key=key, value=value, default=default))
        return default

    @staticmethod
    def _flatten(raw: Mapping[str, Any]) -> Dict[str, Any]:
        flat: Dict[str, Any] = {}
        for key, value in raw.items():
            if key == "modifiers" and isinstance(value, Mapping):
                for sub_key, sub_value in value.items():
                    flat[f"modifiers.{sub_key}"] = sub_value
            else:
                flat[key] = value
        return flat

    def validate(self, raw: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Merges `raw` with the defaults and sanitizes every value.

        Returns:
            Dict[str, Any]: Flat settings dict with exactly the default keys.

        Raises:
            SettingsError: If `raw` is not a mapping.
        """
        if not isinstance(raw, Mapping):
            raise SettingsError(f"Scroll settings must be a mapping, got {type(raw).__name__}")

        defaults = constants.config.defaults
        default_ref = defaults.DEFAULT_SETTINGS
        loaded = self._flatten(raw)

        unknown_keys = set(loaded.keys()) - set(default_ref.keys())
        if unknown_keys:
            self.logger.warning(constants.config.messages.UNKNOWN_KEYS.format(keys=", ".join(sorted(unknown_keys))))

        validated = dict(default_ref)
        validated.update({k: v for k, v in loaded.items() if k in default_ref})

        validated["smooth"] = self._validate_choice("smooth", validated["smooth"], default_ref["smooth"], list(defaults.SMOOTHNESS_CHOICES))
        validated["speed"] = self._validate_choice("speed", validated["speed"], default_ref["speed"], list(defaults.SPEED_CHOICES))
        for key in ["precise", "trackpadSimulation", "reverseDirection"]:
            validated[key] = self._validate_boolean(key, validated[key], default_ref[key])
        for key in ["modifiers.horizontal", "modifiers.zoom"]:
            validated[key] = self._validate_mask(key, validated[key], default_ref[key])

        return validated

    def parse(self, raw: Mapping[str, Any]) -> SettingsSnapshot:
        """Validates `raw` and builds a new snapshot from it."""
        validated = self.validate(raw)
        snapshot = SettingsSnapshot(
            smoothness=SmoothnessTier(validated["smooth"]),
            speed=SpeedTier(validated["speed"]),
            precise=validated["precise"],
            trackpad_simulation=validated["trackpadSimulation"],
            reverse_direction=validated["reverseDirection"],
            horizontal_modifier_mask=validated["modifiers.horizontal"],
            zoom_modifier_mask=validated["modifiers.zoom"],
        )
        self.logger.debug("Parsed scroll settings: %s", snapshot)
        return snapshot
