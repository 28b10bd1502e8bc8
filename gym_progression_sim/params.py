"""Training configuration types and game constants."""

from dataclasses import dataclass, field

STATS = ("strength", "speed", "defense", "dexterity")

HAPPY_CAP = 99999
XANAX_ENERGY = 250  # flat energy per stimulant dose, over the bar
MAX_ENERGY_DEFAULT = 150  # subscriber bar
MAX_ENERGY_ALTERNATIVE = 100  # non-subscriber bar

# Item ids used by jump families and the price table
POINTS_ID = 0  # price per point; a daily refill costs 30 points
DVD_ID = 366
XANAX_ID = 206
ECSTASY_ID = 196  # taken with full jumps
CANDY_ECSTASY_ID = 197  # taken with candy half jumps
REFILL_COUPON_ID = 367  # refills the whole bar

# Happiness per candy
CANDY_HAPPINESS: dict[int, int] = {
    310: 25,
    36: 35,
    528: 75,
    529: 100,
    151: 150,
}

# Energy per drink
ENERGY_ITEMS: dict[int, int] = {
    985: 5,
    986: 10,
    987: 15,
    530: 20,
    532: 25,
    533: 30,
}


def combine_perks(*percents: float) -> float:
    """Combine independent percentage bonuses multiplicatively.

    >>> round(combine_perks(5, 2), 6)
    1.071
    """
    multiplier = 1.0
    for p in percents:
        multiplier *= 1 + p / 100
    return multiplier


@dataclass(frozen=True)
class StatBlock:
    """Four values, one per battle stat, in STATS order."""

    strength: float = 0.0
    speed: float = 0.0
    defense: float = 0.0
    dexterity: float = 0.0

    @classmethod
    def uniform(cls, value: float):
        return cls(value, value, value, value)

    def get(self, stat: str) -> float:
        return getattr(self, stat)

    def values(self) -> tuple[float, float, float, float]:
        return (self.strength, self.speed, self.defense, self.dexterity)

    def total(self) -> float:
        return sum(self.values())

    def plus(self, other: "StatBlock"):
        return type(self)(*(a + b for a, b in zip(self.values(), other.values())))

    def only(self, stats: set[str] | frozenset[str]):
        """Copy with every stat outside `stats` set to zero."""
        return type(self)(*(v if s in stats else 0.0 for s, v in zip(STATS, self.values())))


class PlayerStats(StatBlock):
    """Battle stats of the player. Non-negative, never decrease during a run."""


class StatWeights(StatBlock):
    """Target training ratio. Need not sum to 1; zero means never train."""


@dataclass(frozen=True)
class PerkPercentages:
    """Gym gain perks per stat.

    Each stat holds the percentages of its independent sources (education,
    faction, merits, job...). Sources multiply, they never add.
    """

    strength: tuple[float, ...] = ()
    speed: tuple[float, ...] = ()
    defense: tuple[float, ...] = ()
    dexterity: tuple[float, ...] = ()

    @classmethod
    def uniform(cls, *percents: float) -> "PerkPercentages":
        return cls(percents, percents, percents, percents)

    @classmethod
    def flat(cls, strength: float = 0.0, speed: float = 0.0,
             defense: float = 0.0, dexterity: float = 0.0) -> "PerkPercentages":
        """One source per stat (the common "2% all gains" input)."""
        return cls((strength,), (speed,), (defense,), (dexterity,))

    def sources(self, stat: str) -> tuple[float, ...]:
        return getattr(self, stat)

    def multiplier(self, stat: str) -> float:
        return combine_perks(*self.sources(stat))


@dataclass(frozen=True)
class CompanyBenefit:
    name: str = "No Benefits"
    gym_unlock_speed_multiplier: float = 1.0
    bonus_energy_per_day: float = 0.0
    gym_gain_multiplier: float = 1.0


COMPANY_BENEFIT_KEYS = ("none", "music_store", "candle_shop", "fitness_center")
DEFAULT_CANDLE_SHOP_STARS = 10


def company_benefit(key: str, candle_shop_stars: int = DEFAULT_CANDLE_SHOP_STARS) -> CompanyBenefit:
    """Build a known company benefit bundle. Raises ValueError for unknown keys."""
    if key == "none":
        return CompanyBenefit()
    if key == "music_store":
        return CompanyBenefit(name="3★ Music Store", gym_unlock_speed_multiplier=1.3)
    if key == "candle_shop":
        return CompanyBenefit(
            name=f"{candle_shop_stars}★ Candle Shop",
            bonus_energy_per_day=candle_shop_stars * 5,
        )
    if key == "fitness_center":
        return CompanyBenefit(name="10★ Fitness Center", gym_gain_multiplier=1.03)
    raise ValueError(
        f"Unknown company benefit: {key!r} (choose from {', '.join(COMPANY_BENEFIT_KEYS)})"
    )


# --- Jump termination -------------------------------------------------------


@dataclass(frozen=True)
class Indefinite:
    """Keep jumping until the section ends."""


@dataclass(frozen=True)
class Count:
    """Jump exactly n times, then stop for the rest of the run."""

    n: int


@dataclass(frozen=True)
class StatTarget:
    """Jump until a stat reaches `value`.

    With `stat=None` every weighted stat must reach it.
    """

    value: float
    stat: str | None = None


JumpTermination = Indefinite | Count | StatTarget


# --- Jump families ----------------------------------------------------------


@dataclass(frozen=True)
class JumpConfig:
    enabled: bool = False
    frequency_days: int = 7
    quantity: int = 1
    faction_bonus_percent: float = 0.0
    termination: JumpTermination = field(default_factory=Indefinite)
    gain_multiplier: float = 1.0  # temporary multiplier on the jump session's gains


@dataclass(frozen=True)
class EdvdJump(JumpConfig):
    """Educational DVD jump: stack xanax, take DVDs and ecstasy, train 1150e."""

    adult_novelties: bool = False  # doubles DVD happiness


@dataclass(frozen=True)
class StackedCandyJump(JumpConfig):
    item_id: int = 310
    quantity: int = 48


@dataclass(frozen=True)
class CandyJump(JumpConfig):
    """Half jump: candies (optionally with ecstasy) over one bar of energy."""

    frequency_days: int = 1
    item_id: int = 310
    quantity: int = 48
    drug: str = "none"  # none | xanax | ecstasy
    drug_already_included: bool = False  # xanax already counted in daily stimulants
    use_point_refill: bool = False


@dataclass(frozen=True)
class EnergyDrinkJump(JumpConfig):
    frequency_days: int = 1
    item_id: int = 985
    quantity: int = 12


@dataclass(frozen=True)
class RefillCouponJump(JumpConfig):
    """Full-refill coupons, each one worth a whole bar."""

    frequency_days: int = 1
    quantity: int = 4


@dataclass(frozen=True)
class LossReviveConfig:
    enabled: bool = False
    number_per_day: int = 1
    energy_cost: float = 25
    days_between: int = 7
    price_per_unit: float = 10_000_000


@dataclass(frozen=True)
class DiabetesDayConfig:
    """Yearly event: 99,999 happy jumps on Nov 13 and/or Nov 15."""

    enabled: bool = False
    number_of_jumps: int = 1  # 1 = Nov 15 only, 2 = Nov 13 and Nov 15
    green_eggs: int = 0  # +500 energy per jump, at most one per jump
    refill_coupons: int = 0  # +one bar per jump, used when no egg is left
    seasonal_mail: bool = False  # +250 energy on the first jump
    logo_click: bool = False  # +50 energy on the second jump


@dataclass(frozen=True)
class EnergyPolicy:
    hours_played_per_day: float = 16
    stimulants_per_day: int = 3
    daily_refill: bool = True
    max_energy: float = MAX_ENERGY_DEFAULT
    manual_energy: float | None = None  # fixed daily total, bypasses the formula
    days_skipped_per_month: int = 0  # wars, vacations


@dataclass(frozen=True)
class TrainingSection:
    """A contiguous day range [start_day, end_day] with its own configuration."""

    start_day: int = 1
    end_day: int = 360
    name: str = ""
    weights: StatWeights = field(default_factory=lambda: StatWeights.uniform(1.0))
    perks: PerkPercentages = field(default_factory=lambda: PerkPercentages.uniform(2.0))
    happy: float = 5025
    energy: EnergyPolicy = field(default_factory=EnergyPolicy)
    company: CompanyBenefit = field(default_factory=CompanyBenefit)
    drift_percent: float = 0.0  # 0 = strict ratio, 100 = always the best stat
    balance_after_gym_index: int = 19  # Cha Cha's; negative = never rebalance
    ignore_perks_for_selection: bool = False
    edvd: EdvdJump = field(default_factory=EdvdJump)
    candy: CandyJump = field(default_factory=CandyJump)
    stacked_candy: StackedCandyJump = field(default_factory=StackedCandyJump)
    energy_drink: EnergyDrinkJump = field(default_factory=EnergyDrinkJump)
    refill_coupon: RefillCouponJump = field(default_factory=RefillCouponJump)
    loss_revive: LossReviveConfig = field(default_factory=LossReviveConfig)
    diabetes_day: DiabetesDayConfig = field(default_factory=DiabetesDayConfig)
    island_cost_per_day: float = 0.0

    @property
    def days(self) -> int:
        return self.end_day - self.start_day + 1

    def jump_families(self) -> dict[str, JumpConfig]:
        return {
            "edvd": self.edvd,
            "stacked_candy": self.stacked_candy,
            "candy": self.candy,
            "energy_drink": self.energy_drink,
            "refill_coupon": self.refill_coupon,
        }
