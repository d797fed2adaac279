"""NormalizedOrder — the supplier-agnostic shape of an order submission.

Built fresh from the Order, its items and their products on every dispatch;
never persisted or cached.
"""

from dataclasses import asdict, dataclass, field


@dataclass(frozen=True)
class NormalizedCustomer:
    name: str
    email: str | None = None
    phone: str | None = None


@dataclass(frozen=True)
class NormalizedAddress:
    line1: str = ""
    line2: str = ""
    city: str = ""
    postal_code: str = ""
    country: str = "NO"
    region: str = ""

    @classmethod
    def from_checkout(cls, address: dict) -> "NormalizedAddress":
        """Read an address blob whatever key names checkout used."""
        return cls(
            line1=address.get("address") or address.get("addressLine1") or "",
            line2=address.get("addressLine2") or address.get("address2") or "",
            city=address.get("city") or "",
            postal_code=str(address.get("zip") or address.get("zipCode") or ""),
            country=address.get("country") or "NO",
            region=address.get("region") or address.get("state") or "",
        )


@dataclass(frozen=True)
class NormalizedItem:
    name: str
    quantity: int
    supplier_sku: str


@dataclass(frozen=True)
class NormalizedOrder:
    order_id: str
    store_id: str | None
    customer: NormalizedCustomer
    shipping_address: NormalizedAddress
    items: list[NormalizedItem] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
