"""
Feature selection state - seeding from persisted settings and interactive toggles
"""
from typing import Iterable, List
import logging

from .catalog import FeatureSet, FeatureType

logger = logging.getLogger(__name__)


def seed_from_persisted(feature_set: FeatureSet, persisted_types: Iterable) -> FeatureSet:
    """
    Select every persisted feature that exists in the set.

    Codes that no longer resolve (features removed from the catalog) are
    skipped so older settings files keep loading.
    """
    for code in persisted_types or ():
        feature_type = FeatureType.coerce(code)
        if feature_type is None or feature_type not in feature_set:
            logger.debug(f"Ignoring unknown persisted feature: {code!r}")
            continue
        feature_set.change_selected(feature_type, True)
    return feature_set


def apply_interactive_toggle(feature_set: FeatureSet, feature_type, new_selected: bool):
    """Apply a user toggle; unknown types are a no-op"""
    resolved = FeatureType.coerce(feature_type)
    if resolved is None:
        return
    feature_set.change_selected(resolved, new_selected)


def snapshot_selected_types(feature_set: FeatureSet) -> List[FeatureType]:
    """Selected types in catalog order, for persistence"""
    return [f.type for f in feature_set if f.selected]
