import pytest

from shared.app_settings import AppSettings, AppSettingsStore, InMemoryPersistence, coerce_bool
from shared.models import Tool, UnitSystem


def test_defaults_when_nothing_is_stored():
    store = AppSettingsStore()
    settings = store.get()
    assert settings == AppSettings()
    assert settings.unit_system is UnitSystem.METRIC
    assert settings.selected_tool is Tool.PAN
    assert settings.x_axis_key == "time"


def test_update_persists_and_accepts_enums():
    persistence = InMemoryPersistence()
    store = AppSettingsStore(persistence)
    store.update(units=UnitSystem.IMPERIAL, tool=Tool.MEASURE, x_axis_key="distance_2d")
    assert persistence.load() == {"units": "imperial", "tool": "measure", "x_axis_key": "distance_2d"}

    reloaded = AppSettingsStore(persistence).get()
    assert reloaded.unit_system is UnitSystem.IMPERIAL
    assert reloaded.selected_tool is Tool.MEASURE


def test_update_rejects_unknown_values():
    store = AppSettingsStore()
    with pytest.raises(ValueError):
        store.update(units="furlongs")
    with pytest.raises(ValueError):
        store.update(tool="lasso")
    assert store.get() == AppSettings()


def test_invalid_stored_values_fall_back_to_defaults():
    persistence = InMemoryPersistence({"units": "cubits", "tool": "hammer", "x_axis_key": ""})
    settings = AppSettingsStore(persistence).get()
    assert settings == AppSettings()


def test_subscribers_are_replayed_and_notified():
    store = AppSettingsStore()
    seen = []
    unsubscribe = store.subscribe(seen.append)
    assert seen == [AppSettings()]

    store.update(tool="zoom")
    assert seen[-1].selected_tool is Tool.ZOOM

    unsubscribe()
    store.update(tool="pan")
    assert len(seen) == 2


def test_failing_subscriber_does_not_block_others():
    store = AppSettingsStore()
    seen = []

    def broken(_settings):
        raise RuntimeError("boom")

    store.subscribe(broken, replay=False)
    store.subscribe(seen.append, replay=False)
    store.update(units="imperial")
    assert [s.units for s in seen] == ["imperial"]


def test_in_memory_persistence_removes_none_values():
    persistence = InMemoryPersistence({"a": 1, "b": 2})
    persistence.save({"a": None, "c": 3})
    assert persistence.load() == {"b": 2, "c": 3}


@pytest.mark.parametrize(
    "value, expected",
    [(True, True), (0, False), (1, True), ("true", True), ("0", False), (" Yes ", True), ("off", False)],
)
def test_coerce_bool(value, expected):
    assert coerce_bool(value, default=not expected) is expected


def test_coerce_bool_falls_back_on_garbage():
    assert coerce_bool("sometimes", default=True) is True
    assert coerce_bool(None, default=False) is False
