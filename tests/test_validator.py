from __future__ import annotations

from ipaddress import IPv4Address, IPv4Network

from fleetplan.core import DEFAULT_PROFILES, DeviceProfile, build_plan, validate_plan
from fleetplan.models import DeviceClass, FirewallRule, FleetSpec


def _replace_instance(plan, index, **changes):
    instances = list(plan.instances)
    instances[index] = instances[index].model_copy(update=changes)
    return plan.model_copy(update={"instances": tuple(instances)})


def test_fresh_plan_is_valid(event_spec):
    result = validate_plan(build_plan(event_spec))

    assert result.ok
    assert result.errors == []
    assert result.warnings == []
    assert result.instance_count == 8
    assert result.utilization[DeviceClass.CAMERA] == 2 / 245


def test_duplicate_address_detected(event_spec):
    plan = build_plan(event_spec)
    tampered = _replace_instance(plan, 2, address=IPv4Address("10.0.2.10"))

    result = validate_plan(tampered)

    assert not result.ok
    assert any("assigned to both" in e for e in result.errors)


def test_address_outside_subnet_detected(event_spec):
    plan = build_plan(event_spec)
    tampered = _replace_instance(plan, 1, address=IPv4Address("10.0.9.10"))

    result = validate_plan(tampered)

    assert any("outside its subnet" in e for e in result.errors)


def test_admin_rule_rebinding_detected(event_spec):
    plan = build_plan(event_spec)
    printer = plan.instances[-1]
    rules = tuple(
        rule.model_copy(update={"source": "10.0.4.10/32"})
        if rule.name == "allow-admin-ssh"
        else rule
        for rule in printer.rules
    )
    tampered = _replace_instance(plan, 7, rules=rules)

    result = validate_plan(tampered)

    assert any("not bound to the management host" in e for e in result.errors)
    assert any("rules differ" in e for e in result.errors)


def test_cross_class_rule_detected(event_spec):
    plan = build_plan(event_spec)
    camera = plan.instances[1]
    leak = FirewallRule(
        name="allow-printer-feed",
        priority=250,
        protocol="tcp",
        port=9100,
        source="10.0.4.0/24",
    )
    tampered = _replace_instance(plan, 1, rules=camera.rules + (leak,))

    result = validate_plan(tampered)

    assert any(
        "admits traffic from printer subnet 10.0.4.0/24" in e for e in result.errors
    )


def test_unrecognized_rule_source_detected(event_spec):
    plan = build_plan(event_spec)
    odd = FirewallRule(
        name="allow-any", priority=260, protocol="*", port="*", source="VirtualNetwork"
    )
    tampered = _replace_instance(plan, 3, rules=plan.instances[3].rules + (odd,))

    result = validate_plan(tampered)

    assert any("unrecognized source" in e for e in result.errors)


def test_reordered_plan_detected(event_spec):
    plan = build_plan(event_spec)
    reordered = plan.model_copy(update={"instances": tuple(reversed(plan.instances))})

    result = validate_plan(reordered)

    assert any("out of canonical order" in e for e in result.errors)


def test_high_utilization_warns():
    spec = FleetSpec(counts={DeviceClass.MANAGEMENT_HOST: 1, DeviceClass.CAMERA: 200})

    result = validate_plan(build_plan(spec))

    assert result.ok
    assert len(result.warnings) == 1
    assert "10.0.2.0/24" in result.warnings[0]


def test_rule_from_absent_class_subnet_detected():
    plan = build_plan(
        FleetSpec(counts={DeviceClass.MANAGEMENT_HOST: 1, DeviceClass.CAMERA: 1})
    )
    leak = FirewallRule(
        name="allow-raw-print",
        priority=250,
        protocol="tcp",
        port=9100,
        source="10.0.4.0/24",
    )
    tampered = _replace_instance(plan, 1, rules=plan.instances[1].rules + (leak,))

    result = validate_plan(tampered)

    assert not result.ok
    assert any(
        "admits traffic from printer subnet 10.0.4.0/24" in e for e in result.errors
    )


def test_address_in_reserved_range_detected(event_spec):
    plan = build_plan(event_spec)
    tampered = _replace_instance(plan, 1, address=IPv4Address("10.0.2.1"))

    result = validate_plan(tampered)

    assert any("outside the assignable range .10-.254" in e for e in result.errors)
    assert result.utilization[DeviceClass.CAMERA] == 2 / 245


def test_instance_moved_off_class_subnet_detected():
    plan = build_plan(
        FleetSpec(counts={DeviceClass.MANAGEMENT_HOST: 1, DeviceClass.CAMERA: 1})
    )
    camera = plan.instances[1]
    rules = tuple(
        rule.model_copy(update={"source": "10.0.9.0/24"})
        if rule.source == "10.0.2.0/24"
        else rule
        for rule in camera.rules
    )
    tampered = _replace_instance(
        plan,
        1,
        subnet=IPv4Network("10.0.9.0/24"),
        address=IPv4Address("10.0.9.10"),
        rules=rules,
    )

    result = validate_plan(tampered)

    assert any(
        "uses subnet 10.0.9.0/24, expected 10.0.2.0/24" in e for e in result.errors
    )


def test_subnet_outside_address_space_detected(event_spec):
    plan = build_plan(event_spec)
    narrowed = plan.model_copy(update={"address_space": IPv4Network("10.0.0.0/23")})

    result = validate_plan(narrowed)

    assert any(
        "Subnet 10.0.2.0/24 (camera) is outside address space" in e
        for e in result.errors
    )


def test_missing_admin_rule_detected(event_spec):
    plan = build_plan(event_spec)
    rules = tuple(r for r in plan.instances[3].rules if r.name != "allow-admin-ssh")
    tampered = _replace_instance(plan, 3, rules=rules)

    result = validate_plan(tampered)

    assert any("'wap-1' has no administrative access rule" in e for e in result.errors)


def test_unassigned_management_address_detected(event_spec):
    plan = build_plan(event_spec)
    moved = plan.model_copy(update={"management_address": IPv4Address("10.0.1.99")})

    result = validate_plan(moved)

    assert any("10.0.1.99 is not assigned to any instance" in e for e in result.errors)


def test_plan_checked_against_custom_profiles(event_spec):
    profiles = dict(DEFAULT_PROFILES)
    profiles[DeviceClass.PRINTER] = DeviceProfile(
        subnet=IPv4Network("10.0.40.0/24"),
        base_offset=20,
        service_ports=(),
        name_prefix="printer",
        vm_size="Standard_B1s",
    )
    plan = build_plan(event_spec, profiles)

    assert validate_plan(plan, profiles).ok
    assert not validate_plan(plan).ok
