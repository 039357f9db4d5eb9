# tests/core/test_address.py

import pytest
from kubernetes_asyncio import client

from kubestats.core.address import get_node_hostname_and_ip, get_node_schedulable_status
from kubestats.core.exceptions import NodeAddressError, NodeNotReadyError


def make_node(name="node-1", addresses=(), ready="True", unschedulable=None):
    """Builds a V1Node with the given (type, address) pairs."""
    conditions = []
    if ready is not None:
        conditions.append(client.V1NodeCondition(type="Ready", status=ready))
    return client.V1Node(
        metadata=client.V1ObjectMeta(name=name),
        spec=client.V1NodeSpec(unschedulable=unschedulable),
        status=client.V1NodeStatus(
            conditions=conditions,
            addresses=[client.V1NodeAddress(type=kind, address=addr) for kind, addr in addresses],
        ),
    )


def test_internal_ip_preferred_over_external():
    node = make_node(addresses=[("ExternalIP", "203.0.113.7"), ("InternalIP", "10.0.0.5")])

    assert get_node_hostname_and_ip(node) == ("node-1", "10.0.0.5")


def test_not_ready_node_fails_regardless_of_addresses():
    node = make_node(ready="False", addresses=[("InternalIP", "10.0.0.5")])

    with pytest.raises(NodeNotReadyError, match="node-1 is not ready"):
        get_node_hostname_and_ip(node)


def test_unknown_ready_status_fails():
    node = make_node(ready="Unknown", addresses=[("InternalIP", "10.0.0.5")])

    with pytest.raises(NodeNotReadyError):
        get_node_hostname_and_ip(node)


def test_other_false_conditions_do_not_block():
    node = make_node(addresses=[("InternalIP", "10.0.0.5")])
    node.status.conditions.append(client.V1NodeCondition(type="MemoryPressure", status="False"))

    assert get_node_hostname_and_ip(node)[1] == "10.0.0.5"


def test_hostname_address_overrides_name_last_wins():
    node = make_node(
        addresses=[
            ("Hostname", "first.example"),
            ("InternalIP", "10.0.0.5"),
            ("Hostname", "second.example"),
        ]
    )

    assert get_node_hostname_and_ip(node) == ("second.example", "10.0.0.5")


def test_first_internal_ip_is_kept():
    node = make_node(addresses=[("InternalIP", "10.0.0.5"), ("InternalIP", "10.0.0.6")])

    assert get_node_hostname_and_ip(node)[1] == "10.0.0.5"


def test_legacy_host_ip_before_external_ip():
    node = make_node(addresses=[("ExternalIP", "203.0.113.7"), ("LegacyHostIP", "192.168.1.9")])

    assert get_node_hostname_and_ip(node)[1] == "192.168.1.9"


def test_external_ip_used_as_last_resort():
    node = make_node(addresses=[("Hostname", "edge"), ("ExternalIP", "2001:db8::1")])

    assert get_node_hostname_and_ip(node) == ("edge", "2001:db8::1")


def test_invalid_candidates_are_ignored():
    node = make_node(addresses=[("InternalIP", "not-an-ip"), ("ExternalIP", "203.0.113.7")])

    assert get_node_hostname_and_ip(node)[1] == "203.0.113.7"


def test_only_malformed_ips_fail_with_node_name():
    node = make_node(
        name="broken-node",
        addresses=[("InternalIP", "10.0.0.999"), ("LegacyHostIP", "host"), ("ExternalIP", "x.y.z.w")],
    )

    with pytest.raises(NodeAddressError, match="broken-node") as excinfo:
        get_node_hostname_and_ip(node)
    assert not isinstance(excinfo.value, NodeNotReadyError)


def test_node_without_conditions_or_addresses_fails():
    node = make_node(ready=None)

    with pytest.raises(NodeAddressError, match="node-1 has no valid hostname and/or IP address: node-1"):
        get_node_hostname_and_ip(node)


@pytest.mark.parametrize("unschedulable,expected", [(True, "false"), (False, "true"), (None, "true")])
def test_schedulable_status(unschedulable, expected):
    assert get_node_schedulable_status(make_node(unschedulable=unschedulable)) == expected
