"""Resource models, a MAC-to-IP cache and option parsing for a VM DHCP controller."""

__version__ = "0.1.0"

__all__ = ["apis", "cache", "config", "cli"]