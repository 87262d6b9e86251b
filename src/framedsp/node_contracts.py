"""Static contracts describing the role and frame domains of each node type."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable

from .state import ANY_DOMAIN, FREQUENCY_DOMAIN, TIME_DOMAIN

PRODUCER = "producer"
TRANSFORMER = "transformer"
COMBINER = "combiner"
CONSUMER = "consumer"

ROLES = (PRODUCER, TRANSFORMER, COMBINER, CONSUMER)


@dataclass(frozen=True)
class NodeContract:
    """Captures which capability a node type offers and the frames it handles."""

    type_name: str
    role: str
    input_domain: str | None = None
    output_domain: str | None = None
    notes: str | None = None

    def accepts(self, domain: str | None) -> bool:
        """Return ``True`` when frames of ``domain`` may be fed to this node."""

        if self.input_domain == ANY_DOMAIN:
            return True
        return self.input_domain == domain


class NodeContractRegistry:
    """Registry of node contracts keyed by configuration type name."""

    def __init__(self) -> None:
        self._contracts: Dict[str, NodeContract] = {}

    def register(self, contract: NodeContract) -> None:
        if contract.role not in ROLES:
            raise ValueError(f"Unknown role '{contract.role}' for {contract.type_name}")
        if contract.type_name in self._contracts:
            raise ValueError(f"Duplicate contract registration for {contract.type_name}")
        self._contracts[contract.type_name] = contract

    def get(self, type_name: str) -> NodeContract | None:
        return self._contracts.get(type_name)

    def contracts(self) -> Iterable[NodeContract]:
        return tuple(self._contracts.values())


_REGISTRY = NodeContractRegistry()


def get_node_contract(type_name: str) -> NodeContract | None:
    """Return the registered contract for ``type_name`` (if any)."""

    return _REGISTRY.get(type_name)


def register_node_contract(contract: NodeContract) -> None:
    """Register ``contract`` for the associated configuration type."""

    _REGISTRY.register(contract)


def node_contracts() -> Iterable[NodeContract]:
    return _REGISTRY.contracts()


def _bootstrap() -> None:
    """Populate the registry with built-in contracts."""

    for type_name in ("sine", "step", "impulse", "noise"):
        register_node_contract(
            NodeContract(type_name=type_name, role=PRODUCER, output_domain=TIME_DOMAIN)
        )
    register_node_contract(
        NodeContract(
            type_name="sum",
            role=COMBINER,
            input_domain=TIME_DOMAIN,
            output_domain=TIME_DOMAIN,
            notes="Binary: process(a, b); not chainable as a single-input stage.",
        )
    )
    for type_name, src, dst in (
        ("gain", TIME_DOMAIN, TIME_DOMAIN),
        ("window", TIME_DOMAIN, TIME_DOMAIN),
        ("real_to_complex", TIME_DOMAIN, FREQUENCY_DOMAIN),
        ("complex_to_real", FREQUENCY_DOMAIN, TIME_DOMAIN),
        ("fft", TIME_DOMAIN, FREQUENCY_DOMAIN),
        ("ifft", FREQUENCY_DOMAIN, TIME_DOMAIN),
        ("spectrum", FREQUENCY_DOMAIN, TIME_DOMAIN),
    ):
        register_node_contract(
            NodeContract(type_name=type_name, role=TRANSFORMER, input_domain=src, output_domain=dst)
        )
    for type_name in ("collector", "level_meter", "null"):
        register_node_contract(
            NodeContract(type_name=type_name, role=CONSUMER, input_domain=ANY_DOMAIN)
        )


_bootstrap()
