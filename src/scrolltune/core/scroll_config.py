"""
Scroll configuration resolution for ScrollTune.

`ScrollConfigResolver` is the entry point of the core. It owns the current
settings snapshot and a cache of resolved configurations, and turns a
per-event modification context into a `ResolvedScrollConfig` that the
animator and event pipeline consume.

A settings reload swaps the snapshot and empties the cache as one unit, so no
resolution ever pairs new settings with an entry built from old ones.
"""

from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from typing import Hashable, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from scrolltune import constants
from scrolltune.core.acceleration import AccelerationCurveBuilder, AccelerationResult, NativeAcceleration
from scrolltune.core.animation_curves import AnimationCurveParameters, resolve_animation_curve
from scrolltune.core.config_cache import ResolvedConfigCache, ScrollConfigKey
from scrolltune.core.display import DisplayGeometryProvider, StaticDisplayGeometry
from scrolltune.core.model import CurveVariant, EffectModification, ModificationContext, SettingsSnapshot, SpeedTier
from scrolltune.core.override_resolver import (
    ConsecutiveScrollTiming, FastScrollSpeedupCurve, ModifierOverrideResolver,
)


@dataclass(frozen=True, slots=True)
class TickSpeedSmoothing:
    """Weights used when smoothing the measured tick speed."""
    double_exponential_input_weight: float
    double_exponential_trend_weight: float
    exponential_input_weight: float

    @classmethod
    def default(cls) -> TickSpeedSmoothing:
        s = constants.timing.smoothing
        return cls(s.DOUBLE_EXPONENTIAL_INPUT_WEIGHT, s.DOUBLE_EXPONENTIAL_TREND_WEIGHT, s.EXPONENTIAL_INPUT_WEIGHT)


@dataclass(frozen=True, slots=True, eq=False)
class ResolvedScrollConfig:
    """
    Complete scroll configuration for one (modification, axis, display) key.

    Attributes:
        key: The key this configuration was resolved for.
        settings: The settings snapshot it was built from.
        variant: Effective animation curve variant.
        animation: Animation parameters, None when scrolling is not animated.
        acceleration: NativeAcceleration or a CustomCurve.
        fast_scroll_curve: Fast scroll speedup, None when disabled.
        timing: Consecutive tick and swipe thresholds.
        smoothing: Tick speed smoothing weights.
        speed: Effective speed tier.
        precise: Effective precise flag.
        scale_to_display: Whether max sensitivity was scaled to the display.
        invert_direction: Whether the user reversed the scroll direction.
        inverted_from_device: Whether incoming deltas are already inverted by the device.
    """
    key: ScrollConfigKey
    settings: SettingsSnapshot
    variant: CurveVariant
    animation: Optional[AnimationCurveParameters]
    acceleration: AccelerationResult
    fast_scroll_curve: Optional[FastScrollSpeedupCurve]
    timing: ConsecutiveScrollTiming
    smoothing: TickSpeedSmoothing
    speed: SpeedTier
    precise: bool
    scale_to_display: bool
    invert_direction: bool
    inverted_from_device: bool = True

    @property
    def smooth_enabled(self) -> bool:
        return self.variant.is_animated

    @property
    def use_native_acceleration(self) -> bool:
        return isinstance(self.acceleration, NativeAcceleration)

    @property
    def send_gesture_events(self) -> bool:
        return self.animation is not None and self.animation.send_gesture_events

    @property
    def send_momentum_events(self) -> bool:
        return self.animation is not None and self.animation.send_momentum_events

    @property
    def horizontal_modifier_mask(self) -> int:
        return self.settings.horizontal_modifier_mask

    @property
    def zoom_modifier_mask(self) -> int:
        return self.settings.zoom_modifier_mask


class ScrollConfigResolver(QObject):
    """
    Resolves scroll configurations against the current settings.

    Signals:
        settings_reloaded (object): Emitted with the new SettingsSnapshot after a reload.
        cache_cleared (void): Emitted after an explicit cache clear.
    """

    settings_reloaded = pyqtSignal(object)
    cache_cleared = pyqtSignal()

    def __init__(self, settings: SettingsSnapshot,
                 display_geometry: Optional[DisplayGeometryProvider] = None,
                 parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self.logger = logging.getLogger(f"{constants.app.APP_NAME}.ScrollConfigResolver")
        self._lock = threading.Lock()
        self._settings = settings
        self._cache = ResolvedConfigCache()
        self._display_geometry: DisplayGeometryProvider = display_geometry or StaticDisplayGeometry()
        self._override_resolver = ModifierOverrideResolver()
        self._acceleration_builder = AccelerationCurveBuilder()
        self._build_count = 0
        self.logger.debug("ScrollConfigResolver initialized (smoothness=%s, speed=%s)",
                          settings.smoothness.value, settings.speed.value)

    @property
    def settings(self) -> SettingsSnapshot:
        return self._settings

    @property
    def build_count(self) -> int:
        """Number of configurations built so far. Cache hits do not count."""
        return self._build_count

    @property
    def cached_count(self) -> int:
        return len(self._cache)

    def resolve(self, context: ModificationContext, display_id: Hashable = None) -> ResolvedScrollConfig:
        """
        Returns the configuration for `context` on the given display.

        Repeated calls with the same context and display return the same object
        until the settings are reloaded or the cache is cleared.
        """
        key = ScrollConfigKey(context.effect, context.input, context.axis, display_id)
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                return cached
            settings = self._settings
            epoch = self._cache.epoch

        config = self._build(settings, key)

        with self._lock:
            self._build_count += 1
            # A reload during the build leaves the cache untouched.
            self._cache.put(key, config, epoch=epoch)
        return config

    def reload(self, settings: SettingsSnapshot) -> bool:
        """
        Installs a new settings snapshot and clears the cache.

        Returns:
            bool: False if `settings` is the snapshot already in use.
        """
        with self._lock:
            if settings is self._settings:
                self.logger.debug("Reload skipped, settings snapshot unchanged.")
                return False
            self._settings = settings
            self._cache.clear_all()
        self.logger.info("Scroll settings reloaded (smoothness=%s, speed=%s, precise=%s).",
                         settings.smoothness.value, settings.speed.value, settings.precise)
        self.settings_reloaded.emit(settings)
        return True

    def clear_cache(self) -> None:
        """Drops every resolved configuration. Idempotent."""
        with self._lock:
            self._cache.clear_all()
        self.logger.info("Scroll config cache cleared.")
        self.cache_cleared.emit()

    def _build(self, settings: SettingsSnapshot, key: ScrollConfigKey) -> ResolvedScrollConfig:
        context = ModificationContext(effect=key.effect, input=key.input, axis=key.axis)
        overrides = self._override_resolver.resolve(settings, context)

        display_extent = None
        if key.display_id is not None:
            display_extent = self._display_geometry.pixel_extent(key.display_id)

        acceleration = self._acceleration_builder.build(
            speed=overrides.speed,
            precise=overrides.precise,
            smoothness=settings.smoothness,
            variant=overrides.variant,
            axis=key.axis,
            display_extent=display_extent,
            scale_to_display=overrides.scale_to_display,
            use_quick_mod=overrides.use_quick_mod,
            use_precise_mod=overrides.use_precise_mod,
            tick_interval_max=overrides.timing.tick_interval_max,
            tick_interval_acceleration_end=overrides.timing.tick_interval_acceleration_end,
            horizontal_effect=key.effect is EffectModification.HORIZONTAL_SCROLL,
        )

        self.logger.debug("Built scroll config for %s: variant=%s, native=%s",
                          key, overrides.variant.value,
                          isinstance(acceleration, NativeAcceleration))

        return ResolvedScrollConfig(
            key=key,
            settings=settings,
            variant=overrides.variant,
            animation=resolve_animation_curve(overrides.variant),
            acceleration=acceleration,
            fast_scroll_curve=overrides.fast_scroll_curve,
            timing=overrides.timing,
            smoothing=TickSpeedSmoothing.default(),
            speed=overrides.speed,
            precise=overrides.precise,
            scale_to_display=overrides.scale_to_display,
            invert_direction=settings.reverse_direction,
        )
