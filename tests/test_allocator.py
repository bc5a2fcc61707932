"""Tests for the fleet address allocator."""

from __future__ import annotations

from collections import Counter
from ipaddress import IPv4Address, IPv4Network

import pytest

from fleetplan.core import (
    DEFAULT_PROFILES,
    DeviceProfile,
    InvalidCount,
    MissingManagementHost,
    OverlappingSubnets,
    SubnetExhausted,
    SubnetOutsideAddressSpace,
    allocate,
    build_plan,
)
from fleetplan.models import INTERNET, DeviceClass, FleetSpec


def test_event_fleet_addresses(event_spec):
    instances = allocate(event_spec)

    assert [str(i.address) for i in instances] == [
        "10.0.1.4",
        "10.0.2.10",
        "10.0.2.11",
        "10.0.3.10",
        "10.0.3.11",
        "10.0.3.12",
        "10.0.4.10",
        "10.0.4.11",
    ]
    assert [i.name for i in instances] == [
        "mgmt-1",
        "camera-1",
        "camera-2",
        "wap-1",
        "wap-2",
        "wap-3",
        "printer-1",
        "printer-2",
    ]
    assert instances[0].vm_size == "Standard_B2s"
    assert {i.vm_size for i in instances[1:]} == {"Standard_B1s"}


def test_instances_ordered_by_class_then_ordinal(event_spec):
    instances = allocate(event_spec)

    keys = [(list(DeviceClass).index(i.device_class), i.ordinal) for i in instances]
    assert keys == sorted(keys)
    assert [i.ordinal for i in instances if i.device_class == DeviceClass.CAMERA] == [
        0,
        1,
    ]


def test_allocation_is_deterministic(event_spec):
    first = build_plan(event_spec)
    second = build_plan(event_spec)

    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


def test_addresses_unique_across_fleet():
    spec = FleetSpec(
        counts={
            DeviceClass.MANAGEMENT_HOST: 3,
            DeviceClass.CAMERA: 120,
            DeviceClass.WIRELESS_ACCESS_POINT: 80,
            DeviceClass.PRINTER: 40,
        }
    )
    instances = allocate(spec)

    addresses = [i.address for i in instances]
    assert len(addresses) == len(set(addresses))
    for instance in instances:
        assert instance.address in instance.subnet


def test_per_class_totals_match_request(event_spec):
    counts = Counter(i.device_class for i in allocate(event_spec))

    assert counts == {
        DeviceClass.MANAGEMENT_HOST: 1,
        DeviceClass.CAMERA: 2,
        DeviceClass.WIRELESS_ACCESS_POINT: 3,
        DeviceClass.PRINTER: 2,
    }


def test_missing_class_counts_as_zero():
    instances = allocate(
        FleetSpec(counts={DeviceClass.MANAGEMENT_HOST: 1, DeviceClass.PRINTER: 1})
    )

    assert [i.device_class for i in instances] == [
        DeviceClass.MANAGEMENT_HOST,
        DeviceClass.PRINTER,
    ]
    assert str(instances[1].address) == "10.0.4.10"


def test_subnet_fills_to_last_host():
    spec = FleetSpec(counts={DeviceClass.MANAGEMENT_HOST: 1, DeviceClass.CAMERA: 245})
    instances = allocate(spec)

    assert instances[-1].address == IPv4Address("10.0.2.254")


@pytest.mark.parametrize("count", [246, 255])
def test_subnet_exhausted(count):
    spec = FleetSpec(counts={DeviceClass.MANAGEMENT_HOST: 1, DeviceClass.CAMERA: count})

    with pytest.raises(SubnetExhausted) as exc_info:
        allocate(spec)

    assert exc_info.value.device_class == DeviceClass.CAMERA
    assert exc_info.value.requested_count == count
    assert exc_info.value.capacity == 245


def test_missing_management_host():
    with pytest.raises(MissingManagementHost):
        allocate(FleetSpec(counts={DeviceClass.CAMERA: 2}))


def test_empty_spec_has_no_management_host():
    with pytest.raises(MissingManagementHost):
        allocate(FleetSpec())


def test_negative_count_rejected():
    spec = FleetSpec(counts={DeviceClass.MANAGEMENT_HOST: 1, DeviceClass.PRINTER: -1})

    with pytest.raises(InvalidCount) as exc_info:
        allocate(spec)

    assert exc_info.value.device_class == DeviceClass.PRINTER
    assert exc_info.value.count == -1


def test_negative_count_checked_before_management_host():
    with pytest.raises(InvalidCount):
        allocate(FleetSpec(counts={DeviceClass.CAMERA: -3}))


def test_subnet_outside_address_space():
    spec = FleetSpec(
        counts={DeviceClass.MANAGEMENT_HOST: 1, DeviceClass.CAMERA: 1},
        address_space=IPv4Network("10.0.0.0/23"),
    )

    with pytest.raises(SubnetOutsideAddressSpace) as exc_info:
        allocate(spec)

    assert exc_info.value.device_class == DeviceClass.CAMERA


def test_unused_class_may_sit_outside_address_space():
    spec = FleetSpec(
        counts={DeviceClass.MANAGEMENT_HOST: 1},
        address_space=IPv4Network("10.0.1.0/24"),
    )

    assert len(allocate(spec)) == 1


def test_overlapping_profiles_rejected(event_spec):
    profiles = dict(DEFAULT_PROFILES)
    profiles[DeviceClass.PRINTER] = DeviceProfile(
        subnet=IPv4Network("10.0.2.0/24"),
        base_offset=100,
        service_ports=(),
        name_prefix="printer",
        vm_size="Standard_B1s",
    )

    with pytest.raises(OverlappingSubnets) as exc_info:
        allocate(event_spec, profiles)

    assert exc_info.value.classes == (DeviceClass.CAMERA, DeviceClass.PRINTER)


@pytest.mark.parametrize(
    ("subnet", "base_offset"),
    [("10.0.9.0/25", 10), ("10.0.9.0/24", 1), ("10.0.9.0/24", 255)],
)
def test_profile_rejects_bad_layout(subnet, base_offset):
    with pytest.raises(ValueError):
        DeviceProfile(
            subnet=IPv4Network(subnet),
            base_offset=base_offset,
            service_ports=(),
            name_prefix="x",
            vm_size="Standard_B1s",
        )


def test_rules_identical_within_class(event_spec):
    instances = allocate(event_spec)

    for device_class in DeviceClass:
        rule_sets = {i.rules for i in instances if i.device_class == device_class}
        assert len(rule_sets) == 1


def test_admin_rule_bound_to_management_host(event_spec):
    instances = allocate(event_spec)

    for instance in instances:
        admin = [r for r in instance.rules if r.name == "allow-admin-ssh"]
        assert len(admin) == 1
        assert admin[0].source == "10.0.1.4/32"
        assert admin[0].port == 22


def test_second_management_host_uses_first_as_jump():
    spec = FleetSpec(counts={DeviceClass.MANAGEMENT_HOST: 2, DeviceClass.CAMERA: 1})
    plan = build_plan(spec)

    assert [str(i.address) for i in plan.by_class(DeviceClass.MANAGEMENT_HOST)] == [
        "10.0.1.4",
        "10.0.1.5",
    ]
    assert plan.management_address == IPv4Address("10.0.1.4")


def test_service_ports_only_open_to_own_subnet(event_spec):
    instances = allocate(event_spec)
    camera = next(i for i in instances if i.device_class == DeviceClass.CAMERA)

    services = {r.name: r for r in camera.rules if r.name not in {"allow-admin-ssh"}}
    assert services["allow-rtsp"].port == 554
    assert services["allow-rtsp"].source == "10.0.2.0/24"
    assert services["deny-vnet-inbound"].access == "deny"
    assert services["deny-vnet-inbound"].source == "10.0.0.0/16"


def test_only_management_host_reachable_from_internet(event_spec):
    instances = allocate(event_spec)

    exposed = {
        i.device_class
        for i in instances
        if any(r.source == INTERNET for r in i.rules)
    }
    assert exposed == {DeviceClass.MANAGEMENT_HOST}
