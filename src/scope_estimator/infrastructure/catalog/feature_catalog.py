"""
Scope Estimator - Feature Catalog

Static table of baseline three-point estimates with alias and analogy fallback.
"""
import logging
from typing import Iterable, Mapping

from scope_estimator.domain.exceptions import ConfigurationError
from scope_estimator.domain.interfaces import AnalogyMatcher
from scope_estimator.domain.models import (
    FeaturePreset,
    PresetResolution,
    ResolutionSource,
    normalize_feature_name,
)

logger = logging.getLogger(__name__)

GENERIC_FEATURE_NAME = "Generic Feature"

# (optimistic, most likely, pessimistic) hours
DEFAULT_PRESETS: tuple[FeaturePreset, ...] = (
    FeaturePreset("User Authentication", 10, 15, 24),
    FeaturePreset("Admin Dashboard", 14, 20, 32),
    FeaturePreset("Notifications", 5, 8, 14),
    FeaturePreset("Calendar Integration", 8, 12, 20),
    FeaturePreset("Settings/Profile Page", 6, 10, 16),
    FeaturePreset("Onboarding Flow", 4, 6, 10),
    FeaturePreset("Reusable UI System", 8, 12, 20),
    FeaturePreset("Mobile Responsiveness", 3, 5, 8),
)

# Synonyms -> preset name
DEFAULT_ALIASES: dict[str, str] = {
    "authentication": "User Authentication",
    "auth": "User Authentication",
    "login": "User Authentication",
    "login flow": "User Authentication",
    "sign up / login": "User Authentication",
    "admin panel": "Admin Dashboard",
    "dashboard": "Admin Dashboard",
    "notification system": "Notifications",
    "email notifications": "Notifications",
    "push notifications": "Notifications",
    "calendar": "Calendar Integration",
    "calendar view": "Calendar Integration",
    "settings page": "Settings/Profile Page",
    "profile page": "Settings/Profile Page",
    "user profile": "Settings/Profile Page",
    "onboarding": "Onboarding Flow",
    "onboarding tour": "Onboarding Flow",
    "design system": "Reusable UI System",
    "ui kit": "Reusable UI System",
    "component library": "Reusable UI System",
    "responsive design": "Mobile Responsiveness",
    "mobile responsive": "Mobile Responsiveness",
}


class PresetFeatureCatalog:
    """
    In-memory feature catalog.

    Lookup order: exact normalized name, alias, analogy (via matcher),
    generic baseline. The table is validated once at construction.
    """

    def __init__(
        self,
        presets: Iterable[FeaturePreset] = DEFAULT_PRESETS,
        aliases: Mapping[str, str] | None = None,
        matcher: AnalogyMatcher | None = None,
        generic_baseline: tuple[float, float, float] = (4.0, 8.0, 16.0),
    ):
        """
        Initialize catalog.

        Args:
            presets: Baseline presets
            aliases: Synonym -> preset name map (defaults to DEFAULT_ALIASES)
            matcher: Analogy strategy for unknown names (None disables analogy)
            generic_baseline: (O, M, P) used when no analogy is found

        Raises:
            ConfigurationError: If the preset table or aliases are inconsistent
        """
        self._presets: dict[str, FeaturePreset] = {}
        for preset in presets:
            if preset.key in self._presets:
                raise ConfigurationError(
                    f"Duplicate feature preset: '{preset.name}'", config_key="presets"
                )
            self._presets[preset.key] = preset

        self._aliases: dict[str, str] = {}
        for alias, target in (DEFAULT_ALIASES if aliases is None else aliases).items():
            target_key = normalize_feature_name(target)
            if target_key not in self._presets:
                raise ConfigurationError(
                    f"Alias '{alias}' points to unknown preset '{target}'", config_key="aliases"
                )
            self._aliases[normalize_feature_name(alias)] = target_key

        try:
            self.generic_preset = FeaturePreset(GENERIC_FEATURE_NAME, *generic_baseline)
        except ValueError as e:
            raise ConfigurationError(f"Invalid generic baseline: {e}", config_key="generic_baseline")

        self.matcher = matcher

    def __len__(self) -> int:
        return len(self._presets)

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    @property
    def preset_names(self) -> list[str]:
        """Display names in table order."""
        return [preset.name for preset in self._presets.values()]

    def lookup(self, name: str) -> FeaturePreset | None:
        """Exact or alias lookup; None when not found."""
        key = normalize_feature_name(name)
        preset = self._presets.get(key)
        if preset is not None:
            return preset
        alias_target = self._aliases.get(key)
        if alias_target is not None:
            return self._presets[alias_target]
        return None

    def resolve(self, name: str) -> PresetResolution:
        """
        Resolve any feature name to a preset.

        Unknown names borrow the baseline of the closest preset according
        to the configured matcher. Accuracy is traded for availability:
        with no close analogy the generic baseline applies.
        """
        key = normalize_feature_name(name)

        if key in self._presets:
            preset = self._presets[key]
            return PresetResolution(name, preset, ResolutionSource.EXACT, preset.name)

        if key in self._aliases:
            preset = self._presets[self._aliases[key]]
            return PresetResolution(name, preset, ResolutionSource.ALIAS, preset.name)

        if self.matcher is not None:
            match = self.matcher.best_match(name, self.preset_names)
            if match is not None:
                matched_name, score = match
                preset = self._presets[normalize_feature_name(matched_name)]
                logger.warning(
                    f"Unknown feature '{name}': using analogy '{preset.name}' (score {score})"
                )
                return PresetResolution(name, preset, ResolutionSource.ANALOGY, preset.name, score)

        logger.warning(f"Unknown feature '{name}': no analogy found, using generic baseline")
        return PresetResolution(name, self.generic_preset, ResolutionSource.GENERIC)
