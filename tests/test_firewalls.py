import json

import pytest
import respx
from conftest import BASE_URL, ScriptedTransport
from httpx import Response

from clouding.clients.firewalls import FirewallsClient
from clouding.core.errors import APIError, ErrorEnvelopeDecodeError
from clouding.domain.models import Firewall, FirewallRule, FirewallRuleBinding

FIREWALL_ID = "LywOkvx5LWAp28NP"

FIREWALL_BODY = {
    "id": FIREWALL_ID,
    "name": "Allow MySQL",
    "description": "Open 3306 to the app tier",
    "rules": [
        {
            "id": "r1",
            "sourceIp": "10.0.0.0/8",
            "protocol": "tcp",
            "description": "mysql",
            "portRangeMin": 3306,
            "portRangeMax": 3306,
            "enabled": True,
        }
    ],
    "attachments": [{"serverId": "ke8vlrXPjxO1oq3m", "serverName": "database-server"}],
}


@pytest.mark.asyncio
async def test_get_firewall(transport):
    with respx.mock:
        respx.get(f"{BASE_URL}/firewalls/{FIREWALL_ID}").mock(return_value=Response(200, json=FIREWALL_BODY))
        firewall = await FirewallsClient(transport).get_firewall(FIREWALL_ID)

    assert firewall.name == "Allow MySQL"
    assert firewall.rules[0].source_ip == "10.0.0.0/8"
    assert firewall.rules[0].port_range_max == 3306
    assert firewall.attachments[0].server_name == "database-server"
    assert firewall.new_name is None


@pytest.mark.asyncio
async def test_get_firewall_error_message_embeds_title(transport):
    envelope = {"type": "about:blank", "title": "Firewall Not Found", "status": 404}
    with respx.mock:
        respx.get(f"{BASE_URL}/firewalls/missing").mock(return_value=Response(404, json=envelope))
        with pytest.raises(APIError) as excinfo:
            await FirewallsClient(transport).get_firewall("missing")

    assert "Firewall Not Found" in str(excinfo.value)
    assert excinfo.value.operation == "getting firewall"


@pytest.mark.asyncio
async def test_get_firewall_empty_error_body():
    transport = ScriptedTransport((500, None))

    with pytest.raises(ErrorEnvelopeDecodeError) as excinfo:
        await FirewallsClient(transport).get_firewall(FIREWALL_ID)

    assert excinfo.value.status_code == 500


@pytest.mark.asyncio
async def test_create_firewall_decodes_into_input(transport):
    firewall = Firewall(name="Allow MySQL", description="Open 3306 to the app tier")
    with respx.mock:
        route = respx.post(f"{BASE_URL}/firewalls").mock(return_value=Response(201, json=FIREWALL_BODY))
        result = await FirewallsClient(transport).create_firewall(firewall)

    assert json.loads(route.calls.last.request.content) == {
        "name": "Allow MySQL",
        "description": "Open 3306 to the app tier",
    }
    assert result is firewall
    assert firewall.id == FIREWALL_ID
    assert len(firewall.rules) == 1


@pytest.mark.asyncio
async def test_create_firewall_requires_created_status():
    transport = ScriptedTransport((200, FIREWALL_BODY))

    with pytest.raises(APIError) as excinfo:
        await FirewallsClient(transport).create_firewall(Firewall(name="x"))

    assert excinfo.value.status_code == 200


@pytest.mark.asyncio
async def test_update_firewall_sends_write_only_fields():
    transport = ScriptedTransport((204, None))

    await FirewallsClient(transport).update_firewall(
        FIREWALL_ID, Firewall(new_name="Allow Postgres", new_description="5432")
    )

    assert transport.calls == [
        ("PATCH", f"firewalls/{FIREWALL_ID}", {"newName": "Allow Postgres", "newDescription": "5432"})
    ]


@pytest.mark.asyncio
async def test_update_firewall_failure_reports_status():
    transport = ScriptedTransport((400, {"title": "Bad Request", "status": 400}))

    with pytest.raises(APIError) as excinfo:
        await FirewallsClient(transport).update_firewall(FIREWALL_ID, Firewall(new_name=""))

    assert "status code: 400" in str(excinfo.value)


@pytest.mark.asyncio
async def test_delete_firewall():
    transport = ScriptedTransport((204, None))
    await FirewallsClient(transport).delete_firewall(FIREWALL_ID)
    assert transport.calls == [("DELETE", f"firewalls/{FIREWALL_ID}", None)]


@pytest.mark.asyncio
async def test_create_firewall_rule_round_trip(transport):
    binding = FirewallRuleBinding(
        firewall_id=FIREWALL_ID,
        firewall_rule=FirewallRule(
            source_ip="192.168.1.0/24",
            protocol="tcp",
            description="ssh from office",
            port_range_min=22,
            port_range_max=22,
        ),
    )
    created = {
        "id": "Wq7QxDPGRZ6N29ko",
        "sourceIp": "192.168.1.0/24",
        "protocol": "tcp",
        "description": "ssh from office",
        "portRangeMin": 22,
        "portRangeMax": 22,
        "enabled": True,
    }
    with respx.mock:
        route = respx.post(f"{BASE_URL}/firewalls/{FIREWALL_ID}/rules").mock(
            return_value=Response(201, json=created)
        )
        result = await FirewallsClient(transport).create_firewall_rule(binding)

    assert json.loads(route.calls.last.request.content) == {
        "sourceIp": "192.168.1.0/24",
        "protocol": "tcp",
        "description": "ssh from office",
        "portRangeMin": 22,
        "portRangeMax": 22,
    }
    rule = result.firewall_rule
    assert result.firewall_id == FIREWALL_ID
    assert rule.id == "Wq7QxDPGRZ6N29ko"
    assert rule.source_ip == "192.168.1.0/24"
    assert rule.protocol == "tcp"
    assert rule.description == "ssh from office"
    assert (rule.port_range_min, rule.port_range_max) == (22, 22)
    assert rule.enabled is True


@pytest.mark.asyncio
async def test_get_and_delete_firewall_rule():
    body = {
        "firewallId": FIREWALL_ID,
        "firewallRule": {"id": "r1", "sourceIp": "0.0.0.0/0", "protocol": "icmp", "enabled": False},
    }
    transport = ScriptedTransport((200, body), (204, None))
    client = FirewallsClient(transport)

    binding = await client.get_firewall_rule("r1")
    await client.delete_firewall_rule("r1")

    assert binding.firewall_id == FIREWALL_ID
    assert binding.firewall_rule.protocol == "icmp"
    assert binding.firewall_rule.enabled is False
    assert transport.calls == [("GET", "firewalls/rules/r1", None), ("DELETE", "firewalls/rules/r1", None)]
