from .network import NetworkSimulator, classify_network

__all__ = [
    "NetworkSimulator",
    "classify_network",
]
