from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from web3 import Web3

from app.config.settings import NetworkSettings, settings


def build_network_config(network_settings: NetworkSettings) -> Mapping[str, str | None]:
    return MappingProxyType(
        {
            "sepolia": network_settings.sepolia_url,
            "mainnet": network_settings.mainnet_url,
        }
    )


NETWORKS = build_network_config(settings.networks)


def resolve_network(network: str | None) -> str:
    """Known network name, or the default network for unknown/missing names."""
    if network and network in NETWORKS:
        return network
    return settings.networks.default_network


def resolve_rpc_url(network: str | None) -> str:
    name = resolve_network(network)
    url = NETWORKS.get(name)
    if not url:
        raise ValueError(f"No RPC URL configured for network '{name}'")
    return url


def get_web3(network: str | None) -> Web3:
    url = resolve_rpc_url(network)
    return Web3(
        Web3.HTTPProvider(
            url, request_kwargs={"timeout": settings.networks.rpc_timeout_seconds}
        )
    )
