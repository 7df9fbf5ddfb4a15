"""
Pricing engine: print fee, designer fee and revision fee for an approved design.

Everything here is a pure function of its arguments and a CatalogSnapshot.
"""
from dataclasses import asdict, dataclass
from decimal import ROUND_CEILING, Decimal
from typing import Iterable, Optional, Tuple

from .catalog import CatalogSnapshot, policy
from .exceptions import InvalidState

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class ShirtLine:
    size_id: int
    size_label: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal

    def as_dict(self):
        data = asdict(self)
        data["unit_price"] = str(self.unit_price)
        data["total_price"] = str(self.total_price)
        return data


@dataclass(frozen=True)
class PricingBreakdown:
    shirts: Tuple[ShirtLine, ...]
    total_shirts: int
    printing_fee: Decimal
    designer_fee: Decimal
    revision_fee: Decimal

    @property
    def starting_amount(self) -> Decimal:
        return self.printing_fee + self.revision_fee + self.designer_fee


def designer_fee_for(shirt_count: int, normal_amount: Decimal, bulk_threshold: Optional[int] = None) -> Decimal:
    # Bulk orders above the threshold waive the designer fee
    threshold = policy()["BULK_ORDER_THRESHOLD"] if bulk_threshold is None else bulk_threshold
    return Decimal(normal_amount) if shirt_count <= threshold else Decimal("0")


def revision_fee_for(shirt_count: int, revision_count: int, unit_fee: Decimal,
                     bulk_threshold: Optional[int] = None, free_revisions: Optional[int] = None) -> Decimal:
    conf = policy()
    threshold = conf["BULK_ORDER_THRESHOLD"] if bulk_threshold is None else bulk_threshold
    free = conf["FREE_REVISIONS_FOR_BULK"] if free_revisions is None else free_revisions
    if shirt_count >= threshold:
        billable = max(0, revision_count - free)
    else:
        billable = revision_count
    return Decimal(unit_fee) * billable


def compute_bill(print_type: str, shirt_type: str, sizes: Iterable[Tuple[int, int]],
                 designer_id: int, revision_count: int, catalog: CatalogSnapshot) -> PricingBreakdown:
    """
    Price an order from its (size_id, quantity) pairs.

    Raises NotFound for an unpriced size or a missing default designer rate and
    Mismatch when the print pricing is bound to another shirt type.
    """
    if not print_type:
        raise InvalidState("Print type not set on request")

    lines = []
    printing_fee = Decimal("0")
    shirt_count = 0
    for size_id, quantity in sizes:
        unit = catalog.print_price(print_type, size_id, shirt_type)
        total = unit * int(quantity)
        lines.append(ShirtLine(
            size_id=size_id,
            size_label=catalog.size(size_id).label,
            quantity=int(quantity),
            unit_price=unit,
            total_price=total,
        ))
        printing_fee += total
        shirt_count += int(quantity)

    if not lines:
        raise InvalidState("No shirt sizes found for request")

    rate = catalog.designer_rate(designer_id)
    return PricingBreakdown(
        shirts=tuple(lines),
        total_shirts=shirt_count,
        printing_fee=printing_fee,
        designer_fee=designer_fee_for(shirt_count, rate.normal_amount),
        revision_fee=revision_fee_for(shirt_count, revision_count, rate.revision_fee),
    )


def negotiation_floor(starting_amount: Decimal) -> Decimal:
    ratio = Decimal(str(policy()["NEGOTIATION_FLOOR_RATIO"]))
    # Rounded up so the floor never drops below the exact ratio
    return (Decimal(starting_amount) * ratio).quantize(CENTS, rounding=ROUND_CEILING)


def quantity_price(sizes: Iterable[Tuple[int, int]], catalog: CatalogSnapshot,
                   print_type: Optional[str] = None, shirt_type: Optional[str] = None) -> Decimal:
    """Price of the extra shirts an add-on asks for."""
    total = Decimal("0")
    for size_id, quantity in sizes:
        total += catalog.quantity_price(size_id, print_type, shirt_type) * int(quantity)
    return total
