"""Threaded token ring LAN simulation with a command line runner."""

__version__ = "0.1.0"
__all__ = ["model", "node", "simulation", "cli"]