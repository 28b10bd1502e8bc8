"""Tests for config loading, resolution and table parsing."""

import argparse

import pytest
from gym_progression_sim import Count, EdvdJump, Indefinite, StatTarget, find_gym
from gym_progression_sim.config import (
    DEFAULTS,
    build_base_section,
    build_sections,
    build_states,
    build_table,
    load_config,
    parse_gym,
    parse_perks,
    parse_prices,
    parse_start_date,
    parse_termination,
    parse_weights,
    resolve,
    total_days,
)
from gym_progression_sim.params import LossReviveConfig


def _resolve(config: dict, **cli) -> dict:
    ns = argparse.Namespace(**{k: None for k in DEFAULTS})
    for k, v in cli.items():
        setattr(ns, k, v)
    return resolve(ns, config)


class TestResolve:
    """CLI > config > default resolution."""

    def test_defaults(self):
        r = _resolve({})
        assert r["months"] == 12
        assert r["happy"] == 5025

    def test_config_over_default(self):
        assert _resolve({"months": 3})["months"] == 3

    def test_cli_over_config(self):
        assert _resolve({"months": 3}, months=6)["months"] == 6

    def test_false_cli_flag_wins(self):
        assert _resolve({"refill": True}, refill=False)["refill"] is False

    def test_total_days(self):
        assert total_days(_resolve({"months": 36})) == 1080


class TestLoadConfig:
    """TOML loading and flattening."""

    def test_missing_file(self, tmp_path):
        assert load_config(tmp_path / "nope.toml") == {}

    def test_flattens_stats_and_lists(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            'weights = [1, 2, 3, 4]\n'
            'perks = [[5, 2], 2, 2, 2]\n'
            'start_date = 2026-11-01\n'
            '[stats]\nstrength = 5000\n',
            encoding="utf-8",
        )
        config = load_config(path)
        assert config["weights"] == "1,2,3,4"
        assert config["perks"] == "5+2,2,2,2"
        assert config["start_date"] == "2026-11-01"
        assert config["strength"] == 5000

    def test_invalid_toml_exits(self, tmp_path, capsys):
        path = tmp_path / "bad.toml"
        path.write_text("months = = 3\n", encoding="utf-8")
        with pytest.raises(SystemExit):
            load_config(path)
        assert "Failed to read config file" in capsys.readouterr().err


class TestParsers:
    """Value parsers for weights, perks, gyms, dates and prices."""

    def test_weights(self):
        assert parse_weights("1,2,3,4").values() == (1, 2, 3, 4)

    def test_weights_preset(self):
        assert parse_weights("hanks:defense").defense == 3.57

    def test_weights_wrong_count(self):
        with pytest.raises(ValueError, match="Expected 4 stat weights"):
            parse_weights("1,2,3")

    def test_perks_sources(self):
        perks = parse_perks("5+2,2,2,2")
        assert perks.multiplier("strength") == pytest.approx(1.071)
        assert perks.multiplier("speed") == pytest.approx(1.02)

    def test_perks_single_value(self):
        perks = parse_perks("3")
        assert perks.multiplier("dexterity") == pytest.approx(1.03)

    def test_gym(self):
        assert parse_gym("19") == 19
        assert parse_gym("georges") == find_gym("George's")

    def test_start_date(self):
        assert parse_start_date("") is None
        assert parse_start_date("2026-11-13").day == 13

    def test_prices(self):
        assert parse_prices({"prices": {"206": 800000}}) == {206: 800000.0}
        assert parse_prices({}) is None


class TestTables:
    """Jump and event table parsing."""

    def test_termination_default(self):
        assert parse_termination({}) == Indefinite()

    def test_termination_count(self):
        assert parse_termination({"limit": "count", "count": 5}) == Count(5)

    def test_termination_stat(self):
        assert parse_termination({"limit": "stat", "target": 1e6, "target_stat": "speed"}) == StatTarget(1e6, "speed")

    def test_termination_unknown(self):
        with pytest.raises(ValueError, match="Unknown jump limit"):
            parse_termination({"limit": "forever"})

    def test_termination_count_missing(self):
        with pytest.raises(ValueError, match="needs count"):
            parse_termination({"limit": "count"})

    def test_edvd_aliases(self):
        edvd = build_table(EdvdJump, {"every": 14, "dvds": 2, "limit": "count", "count": 5})
        assert edvd == EdvdJump(enabled=True, frequency_days=14, quantity=2, termination=Count(5))

    def test_event_table(self):
        lr = build_table(LossReviveConfig, {"number_per_day": 3})
        assert lr.enabled
        assert lr.number_per_day == 3

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown keys for EdvdJump: colour"):
            build_table(EdvdJump, {"colour": "blue"})


class TestBuild:
    """Base section, segments and comparison states from a config file."""

    def test_base_section(self):
        config = {"edvd": {"every": 7}}
        r = _resolve(config, weights="hanks:speed", company="fitness_center", xanax=2)
        base = build_base_section(r, config)
        assert base.edvd.enabled
        assert base.weights.speed == 3.57
        assert base.company.gym_gain_multiplier == pytest.approx(1.03)
        assert base.energy.stimulants_per_day == 2

    def test_edvd_every_flag(self):
        r = _resolve({}, edvd_every=10)
        base = build_base_section(r, {})
        assert base.edvd.enabled
        assert base.edvd.frequency_days == 10

    def test_segments(self):
        base = build_base_section(_resolve({}), {})
        sections = build_sections(base, [{"start_day": 181, "happy": 7000, "candy": {"drug": "ecstasy"}}], 360)
        assert [(s.start_day, s.end_day) for s in sections] == [(1, 180), (181, 360)]
        assert sections[1].happy == 7000
        assert sections[1].candy.enabled
        assert not sections[0].candy.enabled

    def test_states(self):
        config = {
            "states": [
                {"name": "Plain"},
                {"name": "Locked", "starting_gym": "georges", "lock_gym": True, "xanax": 0},
            ],
        }
        base = build_base_section(_resolve(config), config)
        states = build_states(base, config, 60)
        assert [s.name for s in states] == ["Plain", "Locked"]
        assert states[0].starting_gym_index is None
        assert states[1].starting_gym_index == 23
        assert states[1].lock_gym is True
        assert states[1].sections[0].energy.stimulants_per_day == 0

    def test_single_state_without_states_table(self):
        base = build_base_section(_resolve({}), {})
        states = build_states(base, {}, 30)
        assert len(states) == 1
        assert states[0].sections[0].end_day == 30
