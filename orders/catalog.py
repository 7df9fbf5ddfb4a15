"""
Read-only catalog snapshot consumed by the pricing engine.

The snapshot is loaded once per operation from the catalog tables and handed to
the pure pricing functions, so those functions never query the database.
"""
from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

from django.conf import settings

from .exceptions import Mismatch, NotFound


@dataclass(frozen=True)
class SizeInfo:
    size_id: int
    label: str
    shirt_type: str


@dataclass(frozen=True)
class PriceEntry:
    print_type: str
    size_id: int
    shirt_type: Optional[str]  # None matches any shirt type
    amount: Decimal


@dataclass(frozen=True)
class DesignerRate:
    normal_amount: Decimal
    revision_fee: Decimal


def policy():
    return settings.TECHSHIRT


def _default_yard_table():
    conf = policy()
    return MappingProxyType({k.upper(): Decimal(str(v)) for k, v in conf["YARDS_PER_SIZE"].items()})


def _default_yards():
    return Decimal(str(policy()["DEFAULT_YARDS_PER_SHIRT"]))


@dataclass(frozen=True)
class CatalogSnapshot:
    sizes: Mapping[int, SizeInfo] = field(default_factory=dict)
    print_pricing: Tuple[PriceEntry, ...] = ()
    designer_rates: Mapping[int, DesignerRate] = field(default_factory=dict)
    default_designer_rate: Optional[DesignerRate] = None
    yards_per_size: Optional[Mapping[str, Decimal]] = None
    default_yards: Optional[Decimal] = None

    def size(self, size_id) -> SizeInfo:
        try:
            return self.sizes[int(size_id)]
        except (KeyError, TypeError, ValueError):
            raise NotFound(f"Shirt size {size_id} not found")

    def print_price(self, print_type: str, size_id: int, shirt_type: str) -> Decimal:
        """
        Unit print price for one size of the requested shirt type.

        Raises NotFound when the catalog has no entry for (print_type, size) and
        Mismatch when entries exist but none is bound to the requested shirt type.
        """
        wanted = (shirt_type or "").strip()
        entries = [
            p for p in self.print_pricing
            if p.print_type == print_type and p.size_id == int(size_id)
        ]
        if not entries:
            label = self.sizes[size_id].label if size_id in self.sizes else size_id
            raise NotFound(f"No print pricing for print type '{print_type}' and size {label}")

        for entry in entries:
            if entry.shirt_type is not None and entry.shirt_type.strip() == wanted:
                return entry.amount
        for entry in entries:
            if entry.shirt_type is None:
                return entry.amount
        raise Mismatch(f"Print pricing for '{print_type}' does not cover shirt type '{wanted}'")

    def quantity_price(self, size_id: int, print_type: Optional[str] = None,
                       shirt_type: Optional[str] = None) -> Decimal:
        """Unit price of an extra shirt; prefers the order's own print type."""
        entries = [p for p in self.print_pricing if p.size_id == int(size_id)]
        if not entries:
            raise NotFound(f"No print pricing for size {size_id}")
        if print_type:
            try:
                return self.print_price(print_type, size_id, shirt_type or "")
            except (NotFound, Mismatch):
                pass
        return entries[0].amount

    def designer_rate(self, designer_id) -> DesignerRate:
        rate = self.designer_rates.get(designer_id)
        if rate is None or not rate.normal_amount:
            rate = self.default_designer_rate
        if rate is None:
            raise NotFound("Default designer pricing not set")
        return rate

    def yards_for(self, size_label: str) -> Decimal:
        table = self.yards_per_size if self.yards_per_size is not None else _default_yard_table()
        default = self.default_yards if self.default_yards is not None else _default_yards()
        return table.get((size_label or "").strip().upper(), default)


def estimate_yardage(sizes: Iterable[Tuple[str, int]], catalog: Optional[CatalogSnapshot] = None) -> Decimal:
    """Fabric yards needed for an iterable of (size_label, quantity) pairs."""
    catalog = catalog or CatalogSnapshot()
    total = Decimal("0")
    for label, quantity in sizes:
        total += catalog.yards_for(label) * int(quantity)
    return total


def has_enough_fabric(stock, sizes, catalog: Optional[CatalogSnapshot] = None) -> bool:
    return estimate_yardage(sizes, catalog) <= Decimal(str(stock or 0))


def load_catalog() -> CatalogSnapshot:
    """Build an immutable snapshot of the catalog tables."""
    from .models import DesignerPricing, PrintPricing, ShirtSize

    sizes: Dict[int, SizeInfo] = {
        s.id: SizeInfo(size_id=s.id, label=s.size_label, shirt_type=s.type.type_name)
        for s in ShirtSize.objects.select_related("type")
    }
    pricing = tuple(
        PriceEntry(
            print_type=p.print_type,
            size_id=p.size_id,
            shirt_type=p.shirt_type.type_name if p.shirt_type_id else None,
            amount=p.amount,
        )
        for p in PrintPricing.objects.select_related("shirt_type").order_by("id")
    )

    rates: Dict[int, DesignerRate] = {}
    default_rate = None
    for record in DesignerPricing.objects.order_by("id"):
        rate = DesignerRate(normal_amount=record.normal_amount, revision_fee=record.revision_fee)
        if record.designer_id is None:
            default_rate = default_rate or rate
        else:
            rates[record.designer_id] = rate

    return CatalogSnapshot(
        sizes=MappingProxyType(sizes),
        print_pricing=pricing,
        designer_rates=MappingProxyType(rates),
        default_designer_rate=default_rate,
        yards_per_size=_default_yard_table(),
        default_yards=_default_yards(),
    )
