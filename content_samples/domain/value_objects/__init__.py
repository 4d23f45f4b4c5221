"""
Value objects for the orders domain.
"""

from .shipment import ShipmentRecord

__all__ = ["ShipmentRecord"]
