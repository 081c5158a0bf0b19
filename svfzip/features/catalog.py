"""
Feature Catalog - The fixed set of toggleable export features
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple
import logging

logger = logging.getLogger(__name__)


class FeatureType(Enum):
    EXCLUDE_PROPERTIES = "ExcludeProperties"
    EXCLUDE_TEXTURE = "ExcludeTexture"
    EXCLUDE_LINES = "ExcludeLines"
    EXCLUDE_POINTS = "ExcludePoints"
    USE_LEVEL_CATEGORY = "UseLevelCategory"
    ONLY_SELECTED = "OnlySelected"
    GENERATE_ELEMENT_DATA = "GenerateElementData"
    EXPORT_GRIDS = "ExportGrids"
    EXPORT_ROOMS = "ExportRooms"
    CONSOLIDATE_GROUP = "ConsolidateGroup"

    @classmethod
    def coerce(cls, code) -> Optional["FeatureType"]:
        """
        Resolve a persisted code; None if unknown.

        Accepts a member, its value or name, or an integer ordinal in
        declaration order (0 = ExcludeProperties).
        """
        if isinstance(code, cls):
            return code
        if isinstance(code, int) and not isinstance(code, bool):
            members = list(cls)
            return members[code] if 0 <= code < len(members) else None
        if isinstance(code, str):
            try:
                return cls(code)
            except ValueError:
                return cls.__members__.get(code)
        return None


@dataclass
class FeatureInfo:
    """A single export feature and its current state"""
    type: FeatureType
    title: str
    description: str
    selected: bool = False
    enabled: bool = True


@dataclass(frozen=True)
class FeatureRule:
    """
    Cross-feature dependency.

    `target` is enabled only while `trigger.selected == enabled_when_selected`.
    """
    trigger: FeatureType
    target: FeatureType
    enabled_when_selected: bool = False


# Element data is generated from element properties
DEFAULT_RULES: Tuple[FeatureRule, ...] = (
    FeatureRule(FeatureType.EXCLUDE_PROPERTIES, FeatureType.GENERATE_ELEMENT_DATA, enabled_when_selected=False),
)

_DEFAULT_FEATURES = (
    (FeatureType.EXCLUDE_PROPERTIES, "Exclude properties",
     "Do not export element properties."),
    (FeatureType.EXCLUDE_TEXTURE, "Exclude textures",
     "Export materials as plain colors without texture images."),
    (FeatureType.EXCLUDE_LINES, "Exclude lines",
     "Do not export model lines and curves."),
    (FeatureType.EXCLUDE_POINTS, "Exclude points",
     "Do not export point geometry."),
    (FeatureType.USE_LEVEL_CATEGORY, "Group by level",
     "Build the model tree by level and then by category."),
    (FeatureType.ONLY_SELECTED, "Only selected elements",
     "Export only the elements selected in the current view."),
    (FeatureType.GENERATE_ELEMENT_DATA, "Generate element data",
     "Write a per-element data file for downstream queries."),
    (FeatureType.EXPORT_GRIDS, "Export grids",
     "Include grid lines in the exported scene."),
    (FeatureType.EXPORT_ROOMS, "Export rooms",
     "Include room volumes in the exported scene."),
    (FeatureType.CONSOLIDATE_GROUP, "Consolidate groups",
     "Merge group members into a single scene node."),
)


class FeatureSet:
    """
    Ordered, fixed set of features owned by one export session.

    Selection changes always go through `change_selected`, which recomputes
    the `enabled` flag of every feature from the rule table and the scope
    availability. Applying the same change twice leaves the same state.
    """

    def __init__(self, features: Iterable[FeatureInfo], rules: Iterable[FeatureRule] = ()):
        self._features: List[FeatureInfo] = list(features)
        self._index: Dict[FeatureType, FeatureInfo] = {}
        for feature in self._features:
            if feature.type in self._index:
                raise ValueError(f"Duplicate feature type: {feature.type.value}")
            self._index[feature.type] = feature
        self.rules: Tuple[FeatureRule, ...] = tuple(rules)
        self._unavailable: Set[FeatureType] = set()
        self._refresh_enabled()

    def __iter__(self) -> Iterator[FeatureInfo]:
        return iter(self._features)

    def __len__(self) -> int:
        return len(self._features)

    def __contains__(self, feature_type) -> bool:
        return feature_type in self._index

    def get(self, feature_type: FeatureType) -> Optional[FeatureInfo]:
        return self._index.get(feature_type)

    def change_selected(self, feature_type: FeatureType, selected: bool) -> bool:
        """Select or deselect a feature; returns False if it is not in the set"""
        feature = self._index.get(feature_type)
        if feature is None:
            return False
        feature.selected = bool(selected)
        self._refresh_enabled()
        return True

    def set_available(self, feature_type: FeatureType, available: bool):
        """Mark a feature as outside (or back inside) the current scope, e.g. license"""
        if feature_type not in self._index:
            return
        if available:
            self._unavailable.discard(feature_type)
        else:
            self._unavailable.add(feature_type)
        self._refresh_enabled()

    def is_active(self, feature_type: FeatureType) -> bool:
        feature = self._index.get(feature_type)
        return bool(feature and feature.selected and feature.enabled)

    def active_types(self) -> List[FeatureType]:
        return [f.type for f in self._features if f.selected and f.enabled]

    def _refresh_enabled(self):
        disabled = set(self._unavailable)
        for rule in self.rules:
            trigger = self._index.get(rule.trigger)
            if trigger is None or rule.target not in self._index:
                continue
            if trigger.selected != rule.enabled_when_selected:
                disabled.add(rule.target)

        for feature in self._features:
            enabled = feature.type not in disabled
            if feature.enabled != enabled:
                logger.debug(f"Feature {feature.type.value} {'enabled' if enabled else 'disabled'}")
            feature.enabled = enabled


def create_default_catalog() -> FeatureSet:
    """Fresh feature set with every feature unselected"""
    return FeatureSet(
        (FeatureInfo(type=t, title=title, description=desc) for t, title, desc in _DEFAULT_FEATURES),
        rules=DEFAULT_RULES,
    )
