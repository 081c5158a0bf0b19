"""
Tests for export configuration assembly
"""
import io
import pytest


def _catalog(*selected):
    from svfzip.features import create_default_catalog

    catalog = create_default_catalog()
    for feature_type in selected:
        catalog.change_selected(feature_type, True)
    return catalog


class TestExportConfigBuilder:
    """Test ExportConfigBuilder.build"""

    def test_only_grids_selected(self):
        """Grids only, no restricted set"""
        from svfzip.export import ExportConfigBuilder, ExportType
        from svfzip.features import FeatureType

        config = ExportConfigBuilder().build(
            "C:\\out.svfzip", ExportType.ZIP, _catalog(FeatureType.EXPORT_GRIDS),
        )

        assert dict(config.active_features) == {FeatureType.EXPORT_GRIDS: True}
        assert config.element_ids is None
        assert config.target_path == "C:\\out.svfzip"

    def test_only_selected_with_element_ids(self):
        from svfzip.export import ExportConfigBuilder, ExportType
        from svfzip.features import FeatureType

        ids = [101, 102, 103, 104, 105]
        config = ExportConfigBuilder().build(
            "out.svfzip", ExportType.ZIP, _catalog(FeatureType.ONLY_SELECTED), restricted_element_ids=ids,
        )

        assert config.active_features[FeatureType.ONLY_SELECTED] is True
        assert config.element_ids == frozenset(ids)
        assert len(config.element_ids) == 5

    def test_element_ids_dropped_when_feature_off(self):
        from svfzip.export import ExportConfigBuilder, ExportType

        config = ExportConfigBuilder().build(
            "out.svfzip", ExportType.ZIP, _catalog(), restricted_element_ids=[1, 2, 3],
        )
        assert config.element_ids is None

    def test_element_ids_dropped_when_feature_disabled(self):
        from svfzip.export import ExportConfigBuilder, ExportType
        from svfzip.features import FeatureType

        catalog = _catalog(FeatureType.ONLY_SELECTED)
        catalog.set_available(FeatureType.ONLY_SELECTED, False)

        config = ExportConfigBuilder().build("out.svfzip", ExportType.ZIP, catalog, restricted_element_ids=[1])

        assert FeatureType.ONLY_SELECTED not in config.active_features
        assert config.element_ids is None

    @pytest.mark.parametrize("selected_only", [True, False])
    def test_element_ids_invariant(self, selected_only):
        from svfzip.export import ExportConfigBuilder, ExportType
        from svfzip.features import FeatureType

        selected = [FeatureType.ONLY_SELECTED] if selected_only else [FeatureType.EXPORT_ROOMS]
        config = ExportConfigBuilder().build(
            "out.svfzip", ExportType.ZIP, _catalog(*selected), restricted_element_ids=[7],
        )

        assert (config.element_ids is not None) == config.has_feature(FeatureType.ONLY_SELECTED)

    @pytest.mark.parametrize("ids", [None, []])
    def test_only_selected_with_empty_ids(self, ids):
        """Empty restricted set is passed through, not rejected"""
        from svfzip.export import ExportConfigBuilder, ExportType
        from svfzip.features import FeatureType

        config = ExportConfigBuilder().build(
            "out.svfzip", ExportType.ZIP, _catalog(FeatureType.ONLY_SELECTED), restricted_element_ids=ids,
        )

        assert config.has_feature(FeatureType.ONLY_SELECTED)
        assert config.element_ids == frozenset()
        assert config.element_ids is not None

    def test_disabled_features_not_active(self):
        from svfzip.export import ExportConfigBuilder, ExportType
        from svfzip.features import FeatureType

        catalog = _catalog(FeatureType.EXCLUDE_PROPERTIES, FeatureType.GENERATE_ELEMENT_DATA)
        config = ExportConfigBuilder().build("out.svfzip", ExportType.ZIP, catalog)

        assert dict(config.active_features) == {FeatureType.EXCLUDE_PROPERTIES: True}

    @pytest.mark.parametrize("target", ["", "   ", None])
    def test_empty_target_path(self, target):
        from svfzip import ConfigError, ConfigErrorKind
        from svfzip.export import ExportConfigBuilder, ExportType

        with pytest.raises(ConfigError) as exc_info:
            ExportConfigBuilder().build(target, ExportType.ZIP, _catalog())
        assert exc_info.value.kind == ConfigErrorKind.EMPTY_TARGET_PATH

    def test_empty_target_path_with_stream(self):
        from svfzip.export import ExportConfigBuilder, ExportType

        stream = io.BytesIO()
        config = ExportConfigBuilder().build("", ExportType.ZIP, _catalog(), output_stream=stream)

        assert config.output_stream is stream
        assert config.target_path == ""

    def test_export_type_from_string(self):
        from svfzip.export import ExportConfigBuilder, ExportType

        config = ExportConfigBuilder().build("out", "FOLDER", _catalog())
        assert config.export_type == ExportType.FOLDER

    def test_unsupported_export_type(self):
        from svfzip import ConfigError, ConfigErrorKind
        from svfzip.export import ExportConfigBuilder

        with pytest.raises(ConfigError) as exc_info:
            ExportConfigBuilder().build("out.svfzip", "ifc", _catalog())
        assert exc_info.value.kind == ConfigErrorKind.UNSUPPORTED_EXPORT_TYPE

    def test_config_is_immutable(self):
        import dataclasses
        from svfzip.export import ExportConfigBuilder, ExportType
        from svfzip.features import FeatureType

        catalog = _catalog(FeatureType.EXPORT_GRIDS)
        config = ExportConfigBuilder().build("out.svfzip", ExportType.ZIP, catalog)

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.target_path = "other.svfzip"
        with pytest.raises(TypeError):
            config.active_features[FeatureType.EXPORT_ROOMS] = True

        # Later toggles do not leak into a built config
        catalog.change_selected(FeatureType.EXPORT_ROOMS, True)
        assert FeatureType.EXPORT_ROOMS not in config.active_features

    def test_trace_closed_until_run(self, recording_sink):
        from svfzip.export import ExportConfigBuilder, ExportType

        config = ExportConfigBuilder().build("out.svfzip", ExportType.ZIP, _catalog(), trace_sink=recording_sink)
        config.trace("too early")

        assert recording_sink.lines == []
        assert config.trace.is_open is False


class TestNormalizeTargetPath:
    """Test default extension handling"""

    def test_adds_extension_to_zip_target(self):
        from svfzip.export import normalize_target_path, ExportType

        assert normalize_target_path("exports/model", ExportType.ZIP) == "exports/model.svfzip"

    def test_keeps_existing_extension(self):
        from svfzip.export import normalize_target_path, ExportType

        assert normalize_target_path("model.zip", ExportType.ZIP) == "model.zip"

    def test_custom_extension(self):
        from svfzip.export import normalize_target_path, ExportType

        assert normalize_target_path("exports/model", ExportType.ZIP, ".zip") == "exports/model.zip"
        assert normalize_target_path("exports/model", ExportType.ZIP, "svf") == "exports/model.svf"

    def test_folder_target_unchanged(self):
        from svfzip.export import normalize_target_path, ExportType

        assert normalize_target_path("exports/model", ExportType.FOLDER) == "exports/model"

    def test_empty_stays_empty(self):
        from svfzip.export import normalize_target_path

        assert normalize_target_path("  ") == ""
