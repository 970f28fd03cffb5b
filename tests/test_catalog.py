import pathlib
import sys
from types import SimpleNamespace

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from helpers import ALL_CONFIGS, config_id

from feareport.core.config import AnalysisConfig, GeometryMode, TimeMode
from feareport.core.errors import ConfigurationError, UnregisteredFieldError
from feareport.core.fields import FieldCatalog, FieldDescriptor, FieldKind, FormatClass
from feareport.output.catalog import build_history_catalog, build_volume_catalog, history_residual_ids

Z_FIELDS = {
    "RMS_DISP_Z",
    "RMS_ETOL",
    "BGS_DISP_Z",
    "COORD-Z",
    "DISPLACEMENT-Z",
    "VELOCITY-Z",
    "ACCELERATION-Z",
    "STRESS-ZZ",
    "STRESS-XZ",
    "STRESS-YZ",
}


@pytest.mark.parametrize("config", ALL_CONFIGS, ids=config_id)
def test_catalogs_are_deterministic(config):
    first = build_history_catalog(config)
    second = build_history_catalog(config)
    assert first.ids() == second.ids()
    assert first.labels() == second.labels()
    assert first == second
    assert build_volume_catalog(config) == build_volume_catalog(config)


@pytest.mark.parametrize("config", ALL_CONFIGS, ids=config_id)
def test_two_dimensional_runs_have_no_out_of_plane_fields(config):
    ids = set(build_history_catalog(config).ids()) | set(build_volume_catalog(config).ids())
    if config.spatial_dim == 2:
        assert not ids & Z_FIELDS
    else:
        assert {"COORD-Z", "DISPLACEMENT-Z", "STRESS-ZZ", "STRESS-XZ", "STRESS-YZ"} <= ids


@pytest.mark.parametrize("config", ALL_CONFIGS, ids=config_id)
def test_velocity_and_acceleration_only_for_dynamic_runs(config):
    ids = build_volume_catalog(config).ids()
    dynamic_ids = [fid for fid in ids if fid.startswith(("VELOCITY-", "ACCELERATION-"))]
    if config.time_mode is TimeMode.STATIC:
        assert dynamic_ids == []
    else:
        assert len(dynamic_ids) == 2 * config.spatial_dim


@pytest.mark.parametrize("config", ALL_CONFIGS, ids=config_id)
def test_residual_fields_follow_geometry_mode(config):
    ids = build_history_catalog(config).ids()
    disp = {"RMS_DISP_X", "RMS_DISP_Y", "RMS_DISP_Z"}
    if config.geometry_mode is GeometryMode.LARGE_DEFORMATIONS:
        assert "RMS_UTOL" in ids and "RMS_RTOL" in ids
        assert ("RMS_ETOL" in ids) == (config.spatial_dim == 3)
        assert not disp & set(ids)
    else:
        assert "RMS_DISP_X" in ids and "RMS_DISP_Y" in ids
        assert ("RMS_DISP_Z" in ids) == (config.spatial_dim == 3)
        assert not {"RMS_UTOL", "RMS_RTOL", "RMS_ETOL"} & set(ids)


@pytest.mark.parametrize("config", ALL_CONFIGS, ids=config_id)
def test_coupling_residuals_only_for_multizone(config):
    ids = build_history_catalog(config).ids()
    bgs = [fid for fid in ids if fid.startswith("BGS_")]
    if config.multizone:
        assert bgs == [f"BGS_DISP_{axis}" for axis in config.axes]
    else:
        assert bgs == []


@pytest.mark.parametrize("config", ALL_CONFIGS, ids=config_id)
def test_counters_and_summary_fields_always_present(config):
    catalog = build_history_catalog(config)
    ids = catalog.ids()
    assert ids[:3] == ("TIME_ITER", "OUTER_ITER", "INNER_ITER")
    assert ids[-3:] == ("VMS", "LOAD_INCREMENT", "LOAD_RAMP")
    assert catalog["INNER_ITER"].fmt is FormatClass.INTEGER
    assert catalog["VMS"].fmt is FormatClass.SCIENTIFIC
    assert build_volume_catalog(config).ids()[-1] == "VON_MISES_STRESS"


def test_linear_static_planar_history_catalog():
    config = AnalysisConfig(GeometryMode.SMALL_DEFORMATIONS, TimeMode.STATIC, 2, False)
    catalog = build_history_catalog(config)
    assert catalog.ids() == (
        "TIME_ITER",
        "OUTER_ITER",
        "INNER_ITER",
        "RMS_DISP_X",
        "RMS_DISP_Y",
        "VMS",
        "LOAD_INCREMENT",
        "LOAD_RAMP",
    )
    assert catalog["RMS_DISP_Y"].label == "rms[DispY]"
    assert catalog["RMS_DISP_Y"].kind is FieldKind.RESIDUAL
    assert catalog["VMS"].kind is FieldKind.VALUE


def test_nonlinear_multizone_history_order():
    config = AnalysisConfig("large_deformations", "dynamic", 3, True)
    assert build_history_catalog(config).ids() == (
        "TIME_ITER",
        "OUTER_ITER",
        "INNER_ITER",
        "RMS_UTOL",
        "RMS_RTOL",
        "RMS_ETOL",
        "BGS_DISP_X",
        "BGS_DISP_Y",
        "BGS_DISP_Z",
        "VMS",
        "LOAD_INCREMENT",
        "LOAD_RAMP",
    )


def test_dynamic_solid_volume_order():
    config = AnalysisConfig("small_deformations", "dynamic", 3, False)
    catalog = build_volume_catalog(config)
    assert catalog.ids() == (
        "COORD-X",
        "COORD-Y",
        "COORD-Z",
        "DISPLACEMENT-X",
        "DISPLACEMENT-Y",
        "DISPLACEMENT-Z",
        "VELOCITY-X",
        "VELOCITY-Y",
        "VELOCITY-Z",
        "ACCELERATION-X",
        "ACCELERATION-Y",
        "ACCELERATION-Z",
        "STRESS-XX",
        "STRESS-YY",
        "STRESS-XY",
        "STRESS-ZZ",
        "STRESS-XZ",
        "STRESS-YZ",
        "VON_MISES_STRESS",
    )
    assert catalog.labels()[:4] == ("x", "y", "z", "Displacement_x")
    assert catalog.groups() == ("COORDINATES", "SOLUTION", "VELOCITY", "ACCELERATION", "STRESS")


def test_unknown_geometry_mode_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        AnalysisConfig(geometry_mode="plastic_hinges")
    with pytest.raises(ConfigurationError):
        AnalysisConfig(spatial_dim=1)

    rogue = SimpleNamespace(geometry_mode="plastic_hinges", spatial_dim=2)
    with pytest.raises(ConfigurationError):
        build_history_catalog(rogue)
    with pytest.raises(ConfigurationError):
        build_volume_catalog(rogue)


def test_select_resolves_groups_in_catalog_order():
    catalog = build_history_catalog(AnalysisConfig(spatial_dim=3, multizone=True))
    selected = catalog.select(["VMS", "RMS_RES", "ITER"])
    assert [d.field_id for d in selected] == [
        "TIME_ITER",
        "OUTER_ITER",
        "INNER_ITER",
        "RMS_DISP_X",
        "RMS_DISP_Y",
        "RMS_DISP_Z",
        "VMS",
    ]
    with pytest.raises(ConfigurationError):
        catalog.select(["RMS_UTOL"])


def test_columns_and_lookup():
    catalog = build_history_catalog(AnalysisConfig())
    assert catalog.columns()[2] == ("INNER_ITER", "Inner_Iter", FormatClass.INTEGER, "ITER")
    assert catalog.position("VMS") == 5
    with pytest.raises(UnregisteredFieldError):
        catalog["RMS_DISP_Q"]
    with pytest.raises(KeyError):
        catalog.position("RMS_DISP_Q")


def test_duplicate_field_ids_are_rejected():
    desc = FieldDescriptor("VMS", "VonMises")
    with pytest.raises(ConfigurationError):
        FieldCatalog("history", [desc, desc])


def test_descriptor_formatting():
    assert FieldDescriptor("INNER_ITER", "Inner_Iter", FormatClass.INTEGER).format(7, 4) == "   7"
    assert FieldDescriptor("A", "a", FormatClass.FIXED).format(-3.0) == "-3.000000"
    assert FieldDescriptor("B", "b", FormatClass.SCIENTIFIC).format(12345.0) == "1.2345e+04"
    assert FieldDescriptor("C", "c", FormatClass.FIXED).format(float("-inf")) == "-inf"


@pytest.mark.parametrize("config", ALL_CONFIGS, ids=config_id)
def test_rms_group_matches_active_residual_ids(config):
    catalog = build_history_catalog(config)
    rms = [d.field_id for d in catalog.select(["RMS_RES"])]
    assert rms == history_residual_ids(config)
    assert all(catalog[fid].label.startswith("rms[") for fid in rms)
