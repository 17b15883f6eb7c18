from __future__ import annotations

from clouding.clients.base import ResourceClient
from clouding.domain.models import Firewall, FirewallRule, FirewallRuleBinding
from clouding.reconcile import merge_fetched

FIREWALL_PATH = "firewalls"
RULES_PATH = f"{FIREWALL_PATH}/rules"


class FirewallsClient(ResourceClient):
    async def get_firewall(self, firewall_id: str) -> Firewall:
        operation = "getting firewall"
        response = await self._exchange(
            "GET",
            f"{FIREWALL_PATH}/{firewall_id}",
            operation=operation,
            expected=(200,),
        )
        return self._decode(response, Firewall, operation)

    async def create_firewall(self, firewall: Firewall) -> Firewall:
        operation = "creating firewall"
        response = await self._exchange(
            "POST",
            FIREWALL_PATH,
            operation=operation,
            expected=(201,),
            body=firewall.to_payload(),
        )
        return merge_fetched(firewall, self._decode(response, Firewall, operation))

    async def update_firewall(self, firewall_id: str, firewall: Firewall) -> None:
        """Send ``new_name``/``new_description``; nothing is echoed back."""
        await self._exchange(
            "PATCH",
            f"{FIREWALL_PATH}/{firewall_id}",
            operation="updating firewall",
            expected=(204, 200),
            body=firewall.to_payload(),
        )

    async def delete_firewall(self, firewall_id: str) -> None:
        await self._exchange(
            "DELETE",
            f"{FIREWALL_PATH}/{firewall_id}",
            operation="deleting firewall",
            expected=(204,),
        )

    async def get_firewall_rule(self, rule_id: str) -> FirewallRuleBinding:
        operation = "getting firewall rule"
        response = await self._exchange(
            "GET",
            f"{RULES_PATH}/{rule_id}",
            operation=operation,
            expected=(200,),
        )
        return self._decode(response, FirewallRuleBinding, operation)

    async def create_firewall_rule(self, binding: FirewallRuleBinding) -> FirewallRuleBinding:
        """Create ``binding.firewall_rule`` under ``binding.firewall_id``."""
        operation = "creating firewall rule"
        response = await self._exchange(
            "POST",
            f"{FIREWALL_PATH}/{binding.firewall_id}/rules",
            operation=operation,
            expected=(201,),
            body=binding.firewall_rule.to_payload(),
        )
        merge_fetched(binding.firewall_rule, self._decode(response, FirewallRule, operation))
        return binding

    async def delete_firewall_rule(self, rule_id: str) -> None:
        await self._exchange(
            "DELETE",
            f"{RULES_PATH}/{rule_id}",
            operation="deleting firewall rule",
            expected=(204,),
        )
