"""Cost and income accounting from market prices."""

from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass

from gym_progression_sim.events import DayPlan
from gym_progression_sim.params import (
    CANDY_ECSTASY_ID,
    DVD_ID,
    ECSTASY_ID,
    POINTS_ID,
    REFILL_COUPON_ID,
    XANAX_ID,
    TrainingSection,
)

PriceTable = Mapping[int, float | None]  # item id -> market price (None = unknown)

POINTS_PER_REFILL = 30
XANAX_PER_FULL_JUMP = 4  # three stacked the day before, one on the morning of the jump

COST_KEYS = (
    "edvd",
    "stacked_candy",
    "candy",
    "energy_drink",
    "refill_coupon",
    "xanax",
    "points_refill",
    "island",
)


@dataclass(frozen=True)
class CostLine:
    uses: int  # jumps, days or units
    unit_cost: float  # average per use
    total: float


@dataclass(frozen=True)
class CostSummary:
    """Itemized totals. A line is None when it never ran or a price is missing."""

    edvd: CostLine | None = None
    stacked_candy: CostLine | None = None
    candy: CostLine | None = None
    energy_drink: CostLine | None = None
    refill_coupon: CostLine | None = None
    xanax: CostLine | None = None
    points_refill: CostLine | None = None
    island: CostLine | None = None
    loss_revive_income: CostLine | None = None

    def lines(self) -> dict[str, CostLine]:
        """Known cost lines, in display order."""
        result = {}
        for key in COST_KEYS:
            line = getattr(self, key)
            if line is not None:
                result[key] = line
        return result

    @property
    def total_cost(self) -> float:
        return sum(line.total for line in self.lines().values())

    @property
    def total_income(self) -> float:
        return self.loss_revive_income.total if self.loss_revive_income else 0.0

    @property
    def net_cost(self) -> float:
        return self.total_cost - self.total_income


class CostLedger:
    """Running per-family totals for one simulation run."""

    def __init__(self, prices: PriceTable):
        self.prices = prices
        self._uses: dict[str, int] = defaultdict(int)
        self._totals: dict[str, float] = defaultdict(float)
        self._unpriced: set[str] = set()

    def _charge(self, key: str, *items: tuple[int, float]) -> None:
        cost = 0.0
        for item_id, quantity in items:
            if quantity <= 0:
                continue
            price = self.prices.get(item_id)
            if price is None:
                self._unpriced.add(key)
                continue
            cost += price * quantity
        self._uses[key] += 1
        self._totals[key] += cost

    def _add(self, key: str, amount: float, uses: int = 1) -> None:
        self._uses[key] += uses
        self._totals[key] += amount

    def record_day(self, section: TrainingSection, plan: DayPlan) -> None:
        for jump in plan.jumps:
            if jump == "edvd":
                self._charge(jump, (DVD_ID, section.edvd.quantity),
                             (XANAX_ID, XANAX_PER_FULL_JUMP), (ECSTASY_ID, 1))
            elif jump == "stacked_candy":
                c = section.stacked_candy
                self._charge(jump, (c.item_id, c.quantity),
                             (XANAX_ID, XANAX_PER_FULL_JUMP), (ECSTASY_ID, 1))
            elif jump == "candy":
                c = section.candy
                extra_drug = not c.drug_already_included
                self._charge(jump, (c.item_id, c.quantity),
                             (CANDY_ECSTASY_ID, 1 if c.drug == "ecstasy" and extra_drug else 0),
                             (XANAX_ID, 1 if c.drug == "xanax" and extra_drug else 0))
            elif jump == "energy_drink":
                c = section.energy_drink
                self._charge(jump, (c.item_id, c.quantity))
            elif jump == "refill_coupon":
                self._charge(jump, (REFILL_COUPON_ID, section.refill_coupon.quantity))

        policy = section.energy
        if not plan.skipped and policy.manual_energy is None:
            if policy.stimulants_per_day > 0:
                self._charge("xanax", (XANAX_ID, policy.stimulants_per_day))
            if policy.daily_refill:
                self._charge("points_refill", (POINTS_ID, POINTS_PER_REFILL))
        if section.island_cost_per_day > 0:
            self._add("island", section.island_cost_per_day)
        if plan.loss_revive_units > 0:
            self._add("loss_revive_income",
                      plan.loss_revive_units * section.loss_revive.price_per_unit)

    def _line(self, key: str) -> CostLine | None:
        uses = self._uses.get(key, 0)
        if uses == 0 or key in self._unpriced:
            return None
        total = self._totals[key]
        return CostLine(uses=uses, unit_cost=total / uses, total=total)

    def summary(self) -> CostSummary:
        return CostSummary(
            **{key: self._line(key) for key in COST_KEYS},
            loss_revive_income=self._line("loss_revive_income"),
        )
