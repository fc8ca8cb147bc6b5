import pytest

from core.metrics import (
    DARK_RED,
    Metric,
    MetricRegistry,
    color_from_hex,
    color_to_hex,
    default_metrics,
    validate_color,
    x_axis_metrics,
)
from shared.app_settings import InMemoryPersistence
from shared.kinematics import METERS_TO_FEET, MPS_TO_KMH, MPS_TO_MPH
from shared.models import Sample, UnitSystem


def _sample() -> Sample:
    return Sample(t=3.0, z=1000.0, vel_n=30.0, vel_e=40.0, vel_d=50.0, curv=2.0,
                  h_acc=1.5, v_acc=2.5, s_acc=0.5, num_sv=11, dist_2d=120.0, dist_3d=300.0)


def test_default_catalogue_order_and_keys():
    registry = default_metrics()
    assert registry.keys()[:4] == ("elevation", "vertical_speed", "horizontal_speed", "total_speed")
    assert len(registry) == 16
    assert len(set(registry.keys())) == len(registry)
    # Only elevation is shown out of the box
    assert [m.key for m in registry.visible()] == ["elevation"]


def test_fresh_registries_do_not_share_state():
    a = default_metrics()
    b = default_metrics()
    a["vertical_speed"].set_visible(True)
    assert not b["vertical_speed"].visible
    assert a["vertical_speed"] is not b["vertical_speed"]


def test_titles_follow_unit_system():
    registry = default_metrics()
    assert registry["elevation"].title(UnitSystem.METRIC) == "Elevation (m)"
    assert registry["elevation"].title(UnitSystem.IMPERIAL) == "Elevation (ft)"
    assert registry["vertical_speed"].title(UnitSystem.METRIC) == "Vertical Speed (km/h)"
    assert registry["vertical_speed"].title(UnitSystem.IMPERIAL) == "Vertical Speed (mph)"
    assert registry["dive_angle"].title(UnitSystem.IMPERIAL) == "Dive Angle (deg)"
    assert registry["curvature"].title(UnitSystem.METRIC) == "Dive Rate (deg/s)"
    assert registry["glide_ratio"].title(UnitSystem.METRIC) == "Glide Ratio"
    assert registry["num_satellites"].title(UnitSystem.IMPERIAL) == "Number of Satellites"


def test_values_convert_between_unit_systems():
    registry = default_metrics()
    s = _sample()
    assert registry["elevation"].value(s, UnitSystem.METRIC) == pytest.approx(1000.0)
    assert registry["elevation"].value(s, UnitSystem.IMPERIAL) == pytest.approx(1000.0 * METERS_TO_FEET)
    assert registry["horizontal_speed"].value(s, UnitSystem.METRIC) == pytest.approx(50.0 * MPS_TO_KMH)
    assert registry["horizontal_speed"].value(s, UnitSystem.IMPERIAL) == pytest.approx(50.0 * MPS_TO_MPH)
    assert registry["vertical_speed"].value(s, UnitSystem.METRIC) == pytest.approx(50.0 * MPS_TO_KMH)
    assert registry["dive_angle"].value(s, UnitSystem.METRIC) == pytest.approx(45.0)


@pytest.mark.parametrize("key", ["dive_angle", "curvature", "glide_ratio", "num_satellites",
                                 "acceleration", "total_energy", "energy_rate"])
def test_unitless_and_si_only_metrics_ignore_unit_system(key):
    metric = default_metrics()[key]
    s = _sample()
    assert metric.value(s, UnitSystem.METRIC) == metric.value(s, UnitSystem.IMPERIAL)
    assert metric.title(UnitSystem.METRIC) == metric.title(UnitSystem.IMPERIAL)


def test_x_axis_catalogue():
    axes = x_axis_metrics()
    assert axes.keys() == ("time", "distance_2d", "distance_3d")
    s = _sample()
    assert axes["time"].value(s, UnitSystem.IMPERIAL) == 3.0
    assert axes["distance_2d"].value(s, UnitSystem.IMPERIAL) == pytest.approx(120.0 * METERS_TO_FEET)
    assert axes["distance_3d"].title(UnitSystem.METRIC) == "Total Distance (m)"


def test_registry_lookup_and_duplicate_keys():
    a = Metric("a", "A", lambda s, u: 1.0)
    b = Metric("b", "B", lambda s, u: 2.0)
    registry = MetricRegistry([a, b])
    assert registry["b"] is b
    assert "a" in registry
    assert "zzz" not in registry
    assert registry.get("zzz") is None
    assert registry.index_of(b) == 1
    with pytest.raises(KeyError):
        registry["zzz"]
    with pytest.raises(ValueError):
        registry.index_of(Metric("a", "A", lambda s, u: 1.0))
    with pytest.raises(ValueError):
        MetricRegistry([a, Metric("a", "Again", lambda s, u: 0.0)])


def test_metric_requires_a_key():
    with pytest.raises(ValueError):
        Metric("", "Nameless", lambda s, u: 0.0)


def test_color_validation_and_hex_codec():
    assert validate_color([1, 2, 3]) == (1, 2, 3)
    with pytest.raises(ValueError):
        validate_color((256, 0, 0))
    with pytest.raises(ValueError):
        validate_color((1, 2))
    assert color_to_hex(DARK_RED) == "#800000"
    assert color_from_hex("#b5d92a") == (181, 217, 42)
    with pytest.raises(ValueError):
        color_from_hex("red")
    with pytest.raises(ValueError):
        color_from_hex("#zzzzzz")

    metric = default_metrics()["elevation"]
    with pytest.raises(ValueError):
        metric.set_color((0, 0, -1))


def test_settings_round_trip_through_persistence():
    store = InMemoryPersistence()
    registry = default_metrics()
    registry["elevation"].set_visible(False)
    registry["total_speed"].set_visible(True)
    registry["total_speed"].set_color((10, 20, 30))
    registry.save_settings(store)

    data = store.load()
    assert data["plotValue/total_speed/visible"] == 1
    assert data["plotValue/total_speed/color"] == "#0a141e"

    restored = default_metrics()
    restored.load_settings(store)
    assert [m.key for m in restored.visible()] == ["total_speed"]
    assert restored["total_speed"].color == (10, 20, 30)
    assert restored["elevation"].color == restored["elevation"].default_color


def test_missing_or_corrupt_settings_fall_back_to_defaults():
    store = InMemoryPersistence({
        "plotValue/elevation/visible": "maybe",
        "plotValue/elevation/color": "not-a-color",
        "plotValue/glide_ratio/visible": "true",
    })
    registry = default_metrics()
    registry.load_settings(store)

    elevation = registry["elevation"]
    assert elevation.visible is True
    assert elevation.color == elevation.default_color
    assert registry["glide_ratio"].visible is True
    assert registry["vertical_speed"].visible is False


def test_reset_defaults_restores_visibility_and_color():
    registry = default_metrics()
    registry["elevation"].set_visible(False)
    registry["elevation"].set_color((1, 1, 1))
    registry["lift_coefficient"].set_visible(True)
    registry.reset_defaults()
    assert [m.key for m in registry.visible()] == ["elevation"]
    assert registry["elevation"].color == (0, 0, 0)
