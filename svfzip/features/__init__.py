# Feature module
# Export feature catalog, cross-feature rules and selection state

from .catalog import (
    FeatureType,
    FeatureInfo,
    FeatureRule,
    FeatureSet,
    DEFAULT_RULES,
    create_default_catalog,
)
from .selection import seed_from_persisted, apply_interactive_toggle, snapshot_selected_types

__all__ = [
    "FeatureType",
    "FeatureInfo",
    "FeatureRule",
    "FeatureSet",
    "DEFAULT_RULES",
    "create_default_catalog",
    "seed_from_persisted",
    "apply_interactive_toggle",
    "snapshot_selected_types",
]
