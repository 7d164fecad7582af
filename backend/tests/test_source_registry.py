import pytest

from idv.services.source_registry import (
    DEFAULT_SOURCES, SourceDescriptor, SourceRegistry, epos_source_name, short_display_name,
)


def test_default_registry_is_priority_ordered():
    registry = SourceRegistry()
    sources = registry.list_sources_by_priority()

    assert len(registry) == 11
    assert [s.source_name for s in sources[:3]] == ["INRIS", "ZRA", "MNO_AIRTEL"]
    assert sources[-1].source_name == "RTSA"
    assert [s.priority for s in sources] == sorted(s.priority for s in DEFAULT_SOURCES)


def test_registry_sorts_unordered_input():
    registry = SourceRegistry([
        SourceDescriptor("B", "Second", 2),
        SourceDescriptor("A", "First", 1),
    ])
    assert [s.source_name for s in registry.list_sources_by_priority()] == ["A", "B"]


def test_duplicate_priority_rejected():
    with pytest.raises(ValueError):
        SourceRegistry([SourceDescriptor("A", "A", 1), SourceDescriptor("B", "B", 1)])


def test_duplicate_name_rejected():
    with pytest.raises(ValueError):
        SourceRegistry([SourceDescriptor("A", "A", 1), SourceDescriptor("A", "Again", 2)])


def test_short_and_epos_names():
    assert short_display_name("PASSPORT_OFFICE") == "Passport Office"
    assert short_display_name("ZRA") == "ZRA"
    assert epos_source_name("MNO_AIRTEL") == "airtel_network"
    assert epos_source_name("PASSPORT_OFFICE") == "id_system"
    assert epos_source_name(None) == "id_system"
