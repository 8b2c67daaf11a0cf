"""
ri_exporter/inventory - EC2 인벤토리 수집

Usage:
    from ri_exporter.inventory import collect_inventory
"""

from .ec2 import collect_active_reservations, collect_inventory, collect_running_instances

__all__: list[str] = [
    "collect_running_instances",
    "collect_active_reservations",
    "collect_inventory",
]
