"""
Shipment record value object.

Holds the identifiers generated locally when line items are shipped, so the
same values can be replayed when the shipment is later reported as delivered.
"""

import random
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ShipmentRecord:
    """
    Immutable identifiers of a shipment created by the merchant.

    Attributes:
        shipment_id: Merchant-generated shipment id
        tracking_id: Carrier tracking id
        carrier: Carrier taken from the line item's shipping method
    """

    shipment_id: str
    tracking_id: str
    carrier: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.shipment_id:
            raise ValueError("Shipment id is required")
        if not self.tracking_id:
            raise ValueError("Tracking id is required")

    @classmethod
    def generate(cls, carrier: Optional[str], rng: Optional[random.Random] = None) -> "ShipmentRecord":
        """Create a record with random shipment and tracking ids."""
        rng = rng or random.Random()
        return cls(
            shipment_id=str(rng.getrandbits(63)),
            tracking_id=str(rng.getrandbits(63)),
            carrier=carrier,
        )
