"""TOML config loader with CLI > config > default resolution."""

import argparse
import dataclasses
import sys
import tomllib
from datetime import date
from pathlib import Path
from typing import Callable

from gym_progression_sim.comparison import ComparisonState
from gym_progression_sim.energy import DAYS_PER_MONTH
from gym_progression_sim.gyms import find_gym
from gym_progression_sim.params import (
    COMPANY_BENEFIT_KEYS,
    STATS,
    CandyJump,
    Count,
    DiabetesDayConfig,
    EdvdJump,
    EnergyDrinkJump,
    Indefinite,
    JumpConfig,
    JumpTermination,
    LossReviveConfig,
    PerkPercentages,
    PlayerStats,
    RefillCouponJump,
    StackedCandyJump,
    StatTarget,
    StatWeights,
    TrainingSection,
    company_benefit,
)
from gym_progression_sim.presets import preset_weights
from gym_progression_sim.sections import segments_to_sections

DEFAULT_CONFIG_PATH = Path("config.toml")

DEFAULTS = {
    "months": 12,
    "start_date": "",
    "starting_gym": "premierfitness",
    "lock_gym": False,
    "strength": 1000.0,
    "speed": 1000.0,
    "defense": 1000.0,
    "dexterity": 1000.0,
    "weights": "1,1,1,1",
    "perks": "2,2,2,2",
    "happy": 5025.0,
    "hours": 16.0,
    "xanax": 3,
    "refill": True,
    "max_energy": 150.0,
    "manual_energy": None,
    "days_skipped": 0,
    "company": "none",
    "candle_stars": 10,
    "drift": 0.0,
    "balance_after_gym": 19,
    "ignore_perks": False,
    "island_cost": 0.0,
    "edvd_every": 0,
}

# Flat keys -> TrainingSection / EnergyPolicy fields
_SECTION_KEYS = {
    "name": "name",
    "happy": "happy",
    "drift": "drift_percent",
    "balance_after_gym": "balance_after_gym_index",
    "ignore_perks": "ignore_perks_for_selection",
    "island_cost": "island_cost_per_day",
}
_ENERGY_KEYS = {
    "hours": "hours_played_per_day",
    "xanax": "stimulants_per_day",
    "refill": "daily_refill",
    "max_energy": "max_energy",
    "manual_energy": "manual_energy",
    "days_skipped": "days_skipped_per_month",
}
JUMP_TABLES: dict[str, type[JumpConfig]] = {
    "edvd": EdvdJump,
    "candy": CandyJump,
    "stacked_candy": StackedCandyJump,
    "energy_drink": EnergyDrinkJump,
    "refill_coupon": RefillCouponJump,
}
EVENT_TABLES = {
    "loss_revive": LossReviveConfig,
    "diabetes_day": DiabetesDayConfig,
}


def _join(v) -> str:
    if isinstance(v, list):
        return ",".join(str(x) for x in v)
    return str(v)


def _normalize(raw: dict) -> dict:
    """TOML lists -> CLI-compatible strings (weights, perks)."""
    if "weights" in raw:
        raw["weights"] = _join(raw["weights"])
    if "perks" in raw:
        v = raw["perks"]
        if isinstance(v, list):
            # [2, 2, 2, 2] or [[5, 2], 2, 2, 2] (sources per stat)
            raw["perks"] = ",".join("+".join(str(p) for p in x) if isinstance(x, list) else str(x) for x in v)
        elif isinstance(v, (int, float)):
            raw["perks"] = ",".join([str(v)] * len(STATS))
    if "start_date" in raw and isinstance(raw["start_date"], date):
        raw["start_date"] = raw["start_date"].isoformat()
    if "starting_gym" in raw and isinstance(raw["starting_gym"], int):
        raw["starting_gym"] = str(raw["starting_gym"])
    return raw


def load_config(path: Path | None = None) -> dict:
    """Load TOML config file. Returns empty dict if file doesn't exist."""
    if path is None:
        path = DEFAULT_CONFIG_PATH
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        print(f"Failed to read config file: {path}: {e}", file=sys.stderr)
        raise SystemExit(1)
    # Initial stats may be grouped under [stats]
    for stat, value in raw.pop("stats", {}).items():
        raw.setdefault(stat, value)
    _normalize(raw)
    for segment in raw.get("segments", []):
        _normalize(segment)
    for state in raw.get("states", []):
        _normalize(state)
        for segment in state.get("segments", []):
            _normalize(segment)
    return raw


def create_parser(description: str) -> argparse.ArgumentParser:
    """Create argparse parser with shared simulation flags."""
    d = DEFAULTS
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument("--config", type=Path, default=None, help="config file path (default: config.toml)")
    parser.add_argument("--months", type=int, default=None, help=f"months of {DAYS_PER_MONTH} days to simulate, 1-36 (default: {d['months']})")
    parser.add_argument("--start-date", type=str, default=None, help="simulated start date YYYY-MM-DD, enables Diabetes Day")
    parser.add_argument("--starting-gym", type=str, default=None, help=f"starting gym key, name or index (default: {d['starting_gym']})")
    parser.add_argument("--lock-gym", action="store_true", default=None, help="hold the starting gym for the whole run")
    for stat in STATS:
        parser.add_argument(f"--{stat}", type=float, default=None, help=f"initial {stat} (default: {d[stat]:.0f})")
    parser.add_argument("--weights", type=str, default=None, help=f"stat weights str,spd,def,dex or a preset like hanks:defense (default: {d['weights']})")
    parser.add_argument("--perks", type=str, default=None, help=f"gym gain perks %% str,spd,def,dex; join sources with + (default: {d['perks']})")
    parser.add_argument("--happy", type=float, default=None, help=f"base happiness (default: {d['happy']:.0f})")
    parser.add_argument("--hours", type=float, default=None, help=f"hours played per day (default: {d['hours']:.0f})")
    parser.add_argument("--xanax", type=int, default=None, help=f"stimulant doses per day (default: {d['xanax']})")
    parser.add_argument("--refill", action=argparse.BooleanOptionalAction, default=None, help="daily points refill (default: on)")
    parser.add_argument("--max-energy", type=float, default=None, help=f"energy bar size, 100 or 150 (default: {d['max_energy']:.0f})")
    parser.add_argument("--manual-energy", type=float, default=None, help="fixed daily energy, bypasses the energy formula")
    parser.add_argument("--days-skipped", type=int, default=None, help="days per month without training (default: 0)")
    parser.add_argument("--company", type=str, default=None, choices=COMPANY_BENEFIT_KEYS, help=f"company benefit (default: {d['company']})")
    parser.add_argument("--candle-stars", type=int, default=None, help=f"candle shop stars (default: {d['candle_stars']})")
    parser.add_argument("--drift", type=float, default=None, help="allowed drift from the ratio toward the best stat, 0-100 (default: 0)")
    parser.add_argument("--balance-after-gym", type=int, default=None, help=f"gym index after which strict ratio resumes, -1 = never (default: {d['balance_after_gym']})")
    parser.add_argument("--ignore-perks", action="store_true", default=None, help="ignore perks when choosing what to train")
    parser.add_argument("--island-cost", type=float, default=None, help="island cost per day for cost estimates")
    parser.add_argument("--edvd-every", type=int, default=None, help="eDVD jump every N days (default: off, or [edvd] in config)")
    return parser


def resolve(args: argparse.Namespace, config: dict) -> dict:
    """Resolve values with priority: CLI flag > config.toml > hardcoded default."""
    resolved = {}
    for key, default in DEFAULTS.items():
        cli_val = getattr(args, key, None)
        resolved[key] = cli_val if cli_val is not None else config.get(key, default)
    return resolved


def parse_weights(s: str) -> StatWeights:
    """Parse "1,1,1,1" or a preset "name[:primary]" (e.g. "hanks:defense")."""
    s = str(s).strip()
    if s and (s[0].isalpha()):
        name, _, primary = s.partition(":")
        return preset_weights(name.strip().lower(), primary.strip().lower() or "strength")
    parts = [float(x) for x in s.split(",")]
    if len(parts) != len(STATS):
        raise ValueError(f"Expected 4 stat weights, got {len(parts)}: {s!r}")
    return StatWeights(*parts)


def parse_perks(s: str) -> PerkPercentages:
    """Parse "2,2,2,2"; a stat's independent sources are joined with "+" ("5+2,2,2,2")."""
    parts = [x.strip() for x in str(s).split(",")]
    if len(parts) == 1:
        parts = parts * len(STATS)
    if len(parts) != len(STATS):
        raise ValueError(f"Expected 4 perk values, got {len(parts)}: {s!r}")
    sources = [tuple(float(p) for p in part.split("+") if p.strip()) for part in parts]
    return PerkPercentages(*sources)


def parse_termination(table: dict) -> JumpTermination:
    """Jump limit: "indefinite", "count" (count = n) or "stat" (target, target_stat)."""
    limit = table.pop("limit", "indefinite")
    count = table.pop("count", None)
    target = table.pop("target", None)
    target_stat = table.pop("target_stat", None)
    if limit == "indefinite":
        return Indefinite()
    if limit == "count":
        if count is None:
            raise ValueError("limit = \"count\" needs count")
        return Count(int(count))
    if limit == "stat":
        if target is None:
            raise ValueError("limit = \"stat\" needs target")
        return StatTarget(float(target), target_stat)
    raise ValueError(f"Unknown jump limit: {limit!r} (choose from indefinite, count, stat)")


def build_table(cls: type, table: dict):
    """Build a jump or event config from its TOML table. Presence enables it."""
    kwargs = dict(table)
    kwargs.setdefault("enabled", True)
    if "every" in kwargs:
        kwargs["frequency_days"] = kwargs.pop("every")
    if "dvds" in kwargs:
        kwargs["quantity"] = kwargs.pop("dvds")
    if issubclass(cls, JumpConfig):
        kwargs["termination"] = parse_termination(kwargs)
    allowed = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(kwargs) - allowed)
    if unknown:
        raise ValueError(f"Unknown keys for {cls.__name__}: {', '.join(unknown)}")
    return cls(**kwargs)


def section_overrides(raw: dict, base: TrainingSection) -> dict:
    """TrainingSection field overrides for the flat keys and tables present in `raw`."""
    overrides = {}
    for key, field_name in _SECTION_KEYS.items():
        if key in raw:
            overrides[field_name] = raw[key]
    energy = {field_name: raw[key] for key, field_name in _ENERGY_KEYS.items() if key in raw}
    if energy:
        overrides["energy"] = dataclasses.replace(base.energy, **energy)
    if "weights" in raw:
        overrides["weights"] = parse_weights(raw["weights"])
    if "perks" in raw:
        overrides["perks"] = parse_perks(raw["perks"])
    if "company" in raw:
        overrides["company"] = company_benefit(raw["company"], raw.get("candle_stars", DEFAULTS["candle_stars"]))
    for key, cls in {**JUMP_TABLES, **EVENT_TABLES}.items():
        if key in raw:
            overrides[key] = build_table(cls, raw[key])
    if raw.get("edvd_every"):
        edvd = overrides.get("edvd", base.edvd)
        overrides["edvd"] = dataclasses.replace(edvd, enabled=True, frequency_days=raw["edvd_every"])
    return overrides


def build_base_section(r: dict, config: dict) -> TrainingSection:
    """Base section from resolved flat values plus the config's jump/event tables."""
    raw = {k: config[k] for k in (*JUMP_TABLES, *EVENT_TABLES) if k in config}
    raw.update(r)
    base = TrainingSection()
    return dataclasses.replace(base, **section_overrides(raw, base))


def build_sections(base: TrainingSection, segments: list[dict], total_days: int) -> list[TrainingSection]:
    """Sections from [[segments]] tables: start_day + overrides over `base`."""
    parsed = []
    for segment in segments:
        segment = dict(segment)
        start = int(segment.pop("start_day"))
        parsed.append((start, section_overrides(segment, base)))
    return segments_to_sections(base, parsed, total_days)


def build_states(base: TrainingSection, config: dict, total_days: int) -> list[ComparisonState]:
    """Comparison states from [[states]]; without any, a single state from the base run."""
    states = []
    for state in config.get("states", []):
        state = dict(state)
        name = state.pop("name")
        segments = state.pop("segments", config.get("segments", []))
        starting_gym = state.pop("starting_gym", None)
        lock_gym = state.pop("lock_gym", None)
        state_base = dataclasses.replace(base, **section_overrides(state, base))
        states.append(ComparisonState(
            name=name,
            sections=tuple(build_sections(state_base, segments, total_days)),
            starting_gym_index=parse_gym(starting_gym) if starting_gym is not None else None,
            lock_gym=lock_gym,
        ))
    if not states:
        sections = build_sections(base, config.get("segments", []), total_days)
        states.append(ComparisonState(name=base.name or "Current plan", sections=tuple(sections)))
    return states


def parse_gym(v) -> int:
    """Gym index from an index or a gym key/display name."""
    s = str(v).strip()
    if s.lstrip("-").isdigit():
        return int(s)
    return find_gym(s)


def parse_start_date(s: str) -> date | None:
    s = str(s).strip()
    return date.fromisoformat(s) if s else None


def parse_prices(config: dict) -> dict[int, float] | None:
    """[prices] table (item id -> price). None disables cost accounting."""
    table = config.get("prices")
    if not table:
        return None
    return {int(k): float(v) for k, v in table.items()}


def initial_stats(r: dict) -> PlayerStats:
    return PlayerStats(*(float(r[s]) for s in STATS))


def total_days(r: dict) -> int:
    return int(r["months"]) * DAYS_PER_MONTH


def parse_args(
    description: str,
    add_args_fn: Callable[[argparse.ArgumentParser], None] | None = None,
) -> tuple[dict, dict, argparse.Namespace]:
    """Parse CLI args, load config, resolve values.

    Returns (resolved_dict, raw_config, namespace). The raw config keeps the
    tables (jumps, segments, states, prices) that have no CLI flag.
    """
    parser = create_parser(description)
    if add_args_fn:
        add_args_fn(parser)
    args = parser.parse_args()
    config = load_config(args.config)
    r = resolve(args, config)
    return r, config, args
