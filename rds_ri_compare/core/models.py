"""
Value objects for RDS pricing comparison.

Defines engines, terms, payment options and the cost records produced
by the pricing pipeline.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, List, NamedTuple, Optional


class Engine(Enum):
    """Database engines that can be priced."""
    MYSQL = "MySQL"
    POSTGRESQL = "PostgreSQL"
    UNKNOWN = "Unknown"


class Term(Enum):
    """Commitment term of a cost record."""
    ON_DEMAND = "On-Demand"
    ONE_YEAR = "1 Year"
    THREE_YEAR = "3 Year"

    @property
    def years(self) -> int:
        """Length of a reserved term in years."""
        if self is Term.ON_DEMAND:
            raise ValueError("On-Demand has no fixed term length")
        return 1 if self is Term.ONE_YEAR else 3

    @property
    def months(self) -> int:
        return self.years * 12


RESERVED_TERMS = (Term.ONE_YEAR, Term.THREE_YEAR)


class OfferingClass(Enum):
    """Reserved instance offering class."""
    STANDARD = "Standard"
    CONVERTIBLE = "Convertible"


class PaymentOption(Enum):
    """How the reserved commitment is paid."""
    NOT_APPLICABLE = "N/A"  # On-Demand
    NO_UPFRONT = "noUpfront"
    PARTIAL_UPFRONT = "partialUpfront"
    ALL_UPFRONT = "allUpfront"


RESERVED_PAYMENT_OPTIONS = (
    PaymentOption.NO_UPFRONT,
    PaymentOption.PARTIAL_UPFRONT,
    PaymentOption.ALL_UPFRONT,
)


class InstanceKey(NamedTuple):
    """Inventory grouping key."""
    instance_type: str
    engine: Engine


class ReservedSlot(NamedTuple):
    """One of the twelve reserved price slots of a price point."""
    term: Term
    offering_class: OfferingClass
    payment_option: PaymentOption


RESERVED_SLOTS: List[ReservedSlot] = [
    ReservedSlot(term, offering, payment)
    for offering in OfferingClass
    for payment in RESERVED_PAYMENT_OPTIONS
    for term in RESERVED_TERMS
]


@dataclass(frozen=True)
class RunningInstance:
    """A database instance observed in the provider inventory."""
    instance_type: str
    engine: Engine
    count: int = 1
    identifier: Optional[str] = None

    def __post_init__(self):
        if self.count < 1:
            raise ValueError("count must be >= 1")

    @property
    def key(self) -> InstanceKey:
        return InstanceKey(self.instance_type, self.engine)


InventoryCount = Dict[InstanceKey, int]


@dataclass(frozen=True)
class RawPricePoint:
    """Hourly prices for one instance type and engine in one region.

    A reserved rate of 0 (or a missing slot) means the offering does not
    exist for this instance type.
    """
    instance_type: str
    region: str
    engine: Engine
    on_demand_hourly: float
    reserved_hourly: Dict[ReservedSlot, float] = field(default_factory=dict)

    def __post_init__(self):
        if self.on_demand_hourly < 0:
            raise ValueError("on_demand_hourly cannot be negative")
        for slot, rate in self.reserved_hourly.items():
            if rate < 0:
                raise ValueError(f"reserved rate for {slot} cannot be negative")

    @property
    def key(self) -> InstanceKey:
        return InstanceKey(self.instance_type, self.engine)

    def reserved_rate(self, slot: ReservedSlot) -> float:
        return self.reserved_hourly.get(slot, 0.0)


@dataclass(frozen=True)
class CostRecord:
    """Normalized cost breakdown for one instance type, term and payment option.

    Per-instance figures never change once built. Count-weighted totals
    are derived from them; ``with_count`` returns a new record for a
    different count.
    """
    region: str
    instance_type: str
    engine: Engine
    term: Term
    payment_option: PaymentOption
    offering_class: Optional[OfferingClass]
    count: int
    amortized_monthly_cost: float
    monthly_cost: float
    upfront_cost: float
    cost_for_term: float
    savings: float = 0.0
    savings_percent: float = 0.0
    total_upfront_cost: float = 0.0
    total_monthly_cost: float = 0.0
    total_amortized_monthly_cost: float = 0.0
    total_cost_for_term: float = 0.0

    def __post_init__(self):
        if self.count < 0:
            raise ValueError("count cannot be negative")
        if self.term is Term.ON_DEMAND and (self.upfront_cost != 0 or self.savings != 0):
            raise ValueError("On-Demand records carry no upfront cost or savings")

    @property
    def key(self) -> InstanceKey:
        return InstanceKey(self.instance_type, self.engine)

    @property
    def is_on_demand(self) -> bool:
        return self.term is Term.ON_DEMAND

    def with_count(self, count: int) -> "CostRecord":
        """Return a copy whose count and count-weighted totals use ``count``."""
        return replace(
            self,
            count=count,
            total_upfront_cost=self.upfront_cost * count,
            total_monthly_cost=self.monthly_cost * count,
            total_amortized_monthly_cost=self.amortized_monthly_cost * count,
            total_cost_for_term=self.cost_for_term * count,
        )


@dataclass
class PricingViews:
    """Cost records for the 1-year and 3-year horizons."""
    one_year: List[CostRecord] = field(default_factory=list)
    three_year: List[CostRecord] = field(default_factory=list)

    def for_term(self, term: Term) -> List[CostRecord]:
        if term is Term.ONE_YEAR:
            return self.one_year
        if term is Term.THREE_YEAR:
            return self.three_year
        raise ValueError(f"No pricing view for term: {term.value}")

    def extend(self, other: "PricingViews") -> None:
        self.one_year.extend(other.one_year)
        self.three_year.extend(other.three_year)
