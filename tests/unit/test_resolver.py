"""Unit tests for action resolution.

Covers production payouts, robbery, trading, purchases and the optional
placement checks. Each ``do_*`` function is exercised directly; dispatch
through ``resolve`` is tested at the end.
"""

from __future__ import annotations

import logging
from dataclasses import replace

import pytest
from hypothesis import given
from hypothesis import strategies as st

from settlers.domain.actions import (
    ACTION_TYPES,
    BuildCity,
    BuildRoad,
    BuildSettlement,
    BuyDevCard,
    Offer,
    Rob,
    Roll,
    Trade,
)
from settlers.domain.applier import apply_effects
from settlers.domain.effects import (
    AddCity,
    AddDevCard,
    AddResources,
    AddRoad,
    AddSettlement,
    RemoveResources,
)
from settlers.domain.enums import PRODUCTIVE_RESOURCES, DevelopmentCard, Resource
from settlers.domain.errors import (
    DevelopmentCardUnavailable,
    EmptyRobVictimResources,
    InsufficientResources,
    InvalidPlacement,
    InvalidRoll,
    InvalidTrade,
    PlayerNotFound,
    UnsupportedAction,
)
from settlers.domain.game import play
from settlers.domain.models import (
    Board,
    City,
    Player,
    PlayerID,
    Resources,
    Road,
    Settlement,
    Tile,
)
from settlers.domain.resolver import (
    _ACTION_HANDLERS,
    do_build_city,
    do_build_road,
    do_build_settlement,
    do_buy_dev_card,
    do_rob,
    do_roll,
    do_trade,
    resolve,
)
from settlers.domain.rules_config import (
    STRICT_RULES,
    PieceLimits,
    ProductionRules,
    RulesConfig,
)
from settlers.utils.hex_math import Hex
from settlers.utils.rng import seeded_rng

RICH = Resources(brick=5, grain=5, lumber=5, ore=5, wool=5)


def _single_player_board(resources: Resources = RICH, **player_fields) -> Board:
    return Board(
        robber=Hex(0, -2),
        players=(Player(id=PlayerID(1), resources=resources, **player_fields),),
        dev_card_stock=(DevelopmentCard.KNIGHT,),
    )


# ---------------------------------------------------------------------------
# Roll


class TestRoll:
    def test_city_pays_double_settlement_single(self, roll_board):
        effects = do_roll(roll_board, Roll(a=1, b=3))
        assert effects == [
            AddResources(PlayerID(1), {Resource.BRICK: 2}),
            AddResources(PlayerID(2), {Resource.BRICK: 1}),
        ]

    def test_no_matching_tile(self, roll_board):
        assert do_roll(roll_board, Roll(a=3, b=3)) == []

    def test_scans_every_matching_tile(self):
        settlement = Settlement(Hex(0, 0), Hex(0, 1), Hex(-1, 1))
        board = Board(
            robber=Hex(3, 3),
            players=(Player(id=PlayerID(1), settlements=(settlement,)),),
            tiles=(
                Tile(Hex(0, 0), Resource.BRICK, 4),
                Tile(Hex(1, 0), Resource.ORE, 6),
                Tile(Hex(0, 1), Resource.WOOL, 4),
            ),
        )
        assert do_roll(board, Roll(a=2, b=2)) == [
            AddResources(PlayerID(1), {Resource.BRICK: 1}),
            AddResources(PlayerID(1), {Resource.WOOL: 1}),
        ]

    def test_counts_multiple_structures(self):
        board = Board(
            robber=Hex(3, 3),
            players=(
                Player(
                    id=PlayerID(1),
                    settlements=(
                        Settlement(Hex(0, 0), Hex(0, 1), Hex(-1, 1)),
                        Settlement(Hex(0, 0), Hex(1, 0), Hex(1, -1)),
                    ),
                    cities=(
                        City(Hex(0, 0), Hex(-1, 0), Hex(-1, 1)),
                        City(Hex(0, 0), Hex(0, -1), Hex(1, -1)),
                    ),
                ),
            ),
            tiles=(Tile(Hex(0, 0), Resource.GRAIN, 9),),
        )
        assert do_roll(board, Roll(a=4, b=5)) == [
            AddResources(PlayerID(1), {Resource.GRAIN: 4}),
            AddResources(PlayerID(1), {Resource.GRAIN: 2}),
        ]

    def test_non_productive_tiles_never_pay(self):
        board = Board(
            robber=Hex(3, 3),
            players=(
                Player(id=PlayerID(1), settlements=(Settlement(Hex(0, 0), Hex(0, 1), Hex(-1, 1)),)),
            ),
            tiles=(Tile(Hex(0, 0), Resource.DESERT, 7), Tile(Hex(0, 1), Resource.SEA, 7)),
        )
        assert do_roll(board, Roll(a=3, b=4)) == []

    def test_robber_blocks_tile(self, roll_board):
        blocked = replace(roll_board, robber=Hex(0, 0))
        assert do_roll(blocked, Roll(a=1, b=3)) == []

    def test_robber_blocking_can_be_disabled(self, roll_board):
        rules = RulesConfig(production=ProductionRules(robber_blocks_production=False))
        blocked = replace(roll_board, robber=Hex(0, 0))
        assert len(do_roll(blocked, Roll(a=1, b=3), rules=rules)) == 2

    @pytest.mark.parametrize(("a", "b"), [(0, 3), (7, 1), (3, -1)])
    def test_invalid_die(self, roll_board, a, b):
        with pytest.raises(InvalidRoll):
            do_roll(roll_board, Roll(a=a, b=b))

    def test_does_not_mutate_board(self, roll_board):
        before = roll_board
        do_roll(roll_board, Roll(a=1, b=3))
        assert roll_board == before
        assert roll_board.players[0].resources == Resources()


# ---------------------------------------------------------------------------
# Rob


class TestRob:
    def test_moves_one_card(self, two_player_board):
        effects = do_rob(two_player_board, Rob(robber=PlayerID(1), victim=PlayerID(2)), rng=seeded_rng("rob"))
        assert len(effects) == 2
        removed, added = effects
        assert isinstance(removed, RemoveResources)
        assert isinstance(added, AddResources)
        assert removed.player_id == 2
        assert added.player_id == 1
        assert removed.resources == added.resources
        ((stolen, amount),) = removed.resources.items()
        assert stolen in (Resource.BRICK, Resource.GRAIN)
        assert amount == 1

    def test_seeded_choice_is_reproducible(self, two_player_board):
        action = Rob(robber=PlayerID(1), victim=PlayerID(2))
        first = do_rob(two_player_board, action, rng=seeded_rng("1:3:rob"))
        second = do_rob(two_player_board, action, rng=seeded_rng("1:3:rob"))
        assert first == second

    def test_single_card_victim(self, two_player_board):
        board = two_player_board.with_player(Player(id=PlayerID(2), resources=Resources(wool=1)))
        effects = do_rob(board, Rob(robber=PlayerID(1), victim=PlayerID(2)))
        assert effects == [
            RemoveResources(PlayerID(2), {Resource.WOOL: 1}),
            AddResources(PlayerID(1), {Resource.WOOL: 1}),
        ]

    def test_empty_victim_yields_nothing(self, two_player_board):
        board = two_player_board.with_player(Player(id=PlayerID(2)))
        assert do_rob(board, Rob(robber=PlayerID(1), victim=PlayerID(2))) == []

    def test_empty_victim_strict(self, two_player_board):
        board = two_player_board.with_player(Player(id=PlayerID(2)))
        with pytest.raises(EmptyRobVictimResources) as exc_info:
            do_rob(board, Rob(robber=PlayerID(1), victim=PlayerID(2)), rules=STRICT_RULES)
        assert exc_info.value.victim == 2

    @pytest.mark.parametrize(("robber", "victim"), [(1, 9), (9, 2)])
    def test_unknown_players(self, two_player_board, robber, victim):
        with pytest.raises(PlayerNotFound):
            do_rob(two_player_board, Rob(robber=PlayerID(robber), victim=PlayerID(victim)))

    @given(seed=st.text(max_size=16))
    def test_balance(self, seed):
        board = Board(
            robber=Hex(0, -2),
            players=(
                Player(id=PlayerID(1), resources=Resources(ore=3)),
                Player(id=PlayerID(2), resources=Resources(brick=2, grain=4, wool=1)),
            ),
        )
        effects = do_rob(board, Rob(robber=PlayerID(1), victim=PlayerID(2)), rng=seeded_rng(seed))
        after = apply_effects(board, effects)
        robber, victim = after.players
        assert robber.resources.total == 4
        assert victim.resources.total == 6
        for resource in PRODUCTIVE_RESOURCES:
            assert robber.resources.get(resource) + victim.resources.get(resource) == (
                board.players[0].resources.get(resource) + board.players[1].resources.get(resource)
            )


# ---------------------------------------------------------------------------
# Trade


def _trade(party: dict, counterparty: dict) -> Trade:
    return Trade(
        party=Offer(player_id=PlayerID(1), resources=party),
        counterparty=Offer(player_id=PlayerID(2), resources=counterparty),
    )


class TestTrade:
    def test_four_effects_in_order(self, two_player_board):
        effects = do_trade(two_player_board, _trade({Resource.ORE: 1}, {Resource.GRAIN: 2}))
        assert effects == [
            AddResources(PlayerID(1), {Resource.GRAIN: 2}),
            RemoveResources(PlayerID(1), {Resource.ORE: 1}),
            AddResources(PlayerID(2), {Resource.ORE: 1}),
            RemoveResources(PlayerID(2), {Resource.GRAIN: 2}),
        ]

    def test_zero_amounts_dropped(self, two_player_board):
        effects = do_trade(
            two_player_board, _trade({Resource.ORE: 1, Resource.WOOL: 0}, {Resource.GRAIN: 1})
        )
        assert effects[1] == RemoveResources(PlayerID(1), {Resource.ORE: 1})

    def test_permissive_does_not_check_holdings(self, two_player_board):
        effects = do_trade(two_player_board, _trade({Resource.WOOL: 3}, {Resource.BRICK: 1}))
        assert len(effects) == 4

    def test_strict_checks_holdings(self, two_player_board):
        with pytest.raises(InsufficientResources) as exc_info:
            do_trade(
                two_player_board,
                _trade({Resource.WOOL: 3}, {Resource.BRICK: 1}),
                rules=STRICT_RULES,
            )
        assert exc_info.value.player_id == 1
        assert exc_info.value.missing == {Resource.WOOL: 3}

    def test_strict_unknown_player(self, two_player_board):
        trade = Trade(
            party=Offer(player_id=PlayerID(1), resources={Resource.ORE: 1}),
            counterparty=Offer(player_id=PlayerID(5), resources={}),
        )
        with pytest.raises(PlayerNotFound):
            do_trade(two_player_board, trade, rules=STRICT_RULES)

    def test_negative_amount_rejected(self, two_player_board):
        with pytest.raises(InvalidTrade):
            do_trade(two_player_board, _trade({Resource.ORE: -1}, {}))

    def test_pseudo_resource_rejected(self, two_player_board):
        with pytest.raises(InvalidTrade):
            do_trade(two_player_board, _trade({}, {Resource.DESERT: 1}))

    @given(
        give=st.dictionaries(st.sampled_from(PRODUCTIVE_RESOURCES), st.integers(0, 5)),
        take=st.dictionaries(st.sampled_from(PRODUCTIVE_RESOURCES), st.integers(0, 5)),
    )
    def test_symmetry_and_conservation(self, give, take):
        board = Board(
            robber=Hex(0, -2),
            players=(
                Player(id=PlayerID(1), resources=RICH),
                Player(id=PlayerID(2), resources=RICH),
            ),
        )
        effects = do_trade(board, _trade(give, take), rules=STRICT_RULES)
        after = apply_effects(board, effects)
        party, counterparty = after.players
        for resource in PRODUCTIVE_RESOURCES:
            delta = take.get(resource, 0) - give.get(resource, 0)
            assert party.resources.get(resource) == 5 + delta
            assert counterparty.resources.get(resource) == 5 - delta
            assert party.resources.get(resource) + counterparty.resources.get(resource) == 10


# ---------------------------------------------------------------------------
# Purchases


class TestPurchases:
    def test_dev_card(self):
        effects = do_buy_dev_card(
            _single_player_board(), BuyDevCard(player_id=PlayerID(1), card=DevelopmentCard.KNIGHT)
        )
        assert effects == [
            AddDevCard(PlayerID(1), DevelopmentCard.KNIGHT),
            RemoveResources(PlayerID(1), {Resource.GRAIN: 1, Resource.WOOL: 1, Resource.ORE: 1}),
        ]

    def test_road(self):
        road = Road(Hex(0, 0), Hex(1, 0))
        effects = do_build_road(_single_player_board(), BuildRoad(PlayerID(1), road))
        assert effects == [
            AddRoad(PlayerID(1), road),
            RemoveResources(PlayerID(1), {Resource.LUMBER: 1, Resource.BRICK: 1}),
        ]

    def test_settlement(self):
        settlement = Settlement(Hex(0, 0), Hex(0, 1), Hex(-1, 1))
        effects = do_build_settlement(
            _single_player_board(), BuildSettlement(PlayerID(1), settlement)
        )
        assert effects == [
            AddSettlement(PlayerID(1), settlement),
            RemoveResources(
                PlayerID(1),
                {Resource.LUMBER: 1, Resource.BRICK: 1, Resource.GRAIN: 1, Resource.WOOL: 1},
            ),
        ]

    def test_permissive_settlement_accepts_any_hexes(self):
        settlement = Settlement(Hex(0, 0), Hex(0, 1), Hex(1, 1))
        effects = do_build_settlement(
            _single_player_board(), BuildSettlement(PlayerID(1), settlement)
        )
        assert effects[0] == AddSettlement(PlayerID(1), settlement)

    def test_city(self):
        city = City(Hex(0, 0), Hex(0, 1), Hex(-1, 1))
        effects = do_build_city(_single_player_board(), BuildCity(PlayerID(1), city))
        assert effects == [
            AddCity(PlayerID(1), city),
            RemoveResources(PlayerID(1), {Resource.ORE: 3, Resource.GRAIN: 2}),
        ]

    @pytest.mark.parametrize(
        ("resolver", "action", "hand", "missing", "purpose"),
        [
            (
                do_buy_dev_card,
                BuyDevCard(PlayerID(1), DevelopmentCard.KNIGHT),
                Resources(grain=1, ore=1),
                {Resource.WOOL: 1},
                "a development card",
            ),
            (
                do_build_road,
                BuildRoad(PlayerID(1), Road(Hex(0, 0), Hex(1, 0))),
                Resources(lumber=1),
                {Resource.BRICK: 1},
                "a road",
            ),
            (
                do_build_settlement,
                BuildSettlement(PlayerID(1), Settlement(Hex(0, 0), Hex(0, 1), Hex(-1, 1))),
                Resources(lumber=1, brick=1, grain=1),
                {Resource.WOOL: 1},
                "a settlement",
            ),
            (
                do_build_city,
                BuildCity(PlayerID(1), City(Hex(0, 0), Hex(0, 1), Hex(-1, 1))),
                Resources(ore=2, grain=2),
                {Resource.ORE: 1},
                "a city",
            ),
        ],
        ids=["dev_card", "road", "settlement", "city"],
    )
    def test_insufficient_resources(self, resolver, action, hand, missing, purpose):
        with pytest.raises(InsufficientResources) as exc_info:
            resolver(_single_player_board(hand), action)
        assert exc_info.value.missing == missing
        assert exc_info.value.purpose == purpose
        assert f"cannot afford {purpose}" in str(exc_info.value)

    @pytest.mark.parametrize(
        "action",
        [
            BuyDevCard(PlayerID(1), DevelopmentCard.KNIGHT),
            BuildRoad(PlayerID(1), Road(Hex(0, 0), Hex(1, 0))),
            BuildSettlement(PlayerID(1), Settlement(Hex(0, 0), Hex(0, 1), Hex(-1, 1))),
            BuildCity(PlayerID(1), City(Hex(0, 0), Hex(0, 1), Hex(-1, 1))),
        ],
        ids=["dev_card", "road", "settlement", "city"],
    )
    def test_rejected_purchase_leaves_hand(self, action):
        hand = Resources(grain=1)
        result = play(_single_player_board(hand), action)
        assert not result.success
        assert result.error_code == "INSUFFICIENT_RESOURCES"
        player = result.board.require_player(PlayerID(1))
        assert player.resources == hand
        assert not (player.roads or player.settlements or player.cities or player.dev_cards_in_hand)

    def test_unknown_player(self):
        with pytest.raises(PlayerNotFound):
            do_build_road(_single_player_board(), BuildRoad(PlayerID(4), Road(Hex(0, 0), Hex(1, 0))))

    def test_dev_card_stock_checked_when_strict(self):
        action = BuyDevCard(player_id=PlayerID(1), card=DevelopmentCard.MONOPOLY)
        assert len(do_buy_dev_card(_single_player_board(), action)) == 2
        with pytest.raises(DevelopmentCardUnavailable) as exc_info:
            do_buy_dev_card(_single_player_board(), action, rules=STRICT_RULES)
        assert exc_info.value.card is DevelopmentCard.MONOPOLY

    def test_stock_checked_before_cost(self):
        board = _single_player_board(Resources())
        action = BuyDevCard(player_id=PlayerID(1), card=DevelopmentCard.MONOPOLY)
        with pytest.raises(DevelopmentCardUnavailable):
            do_buy_dev_card(board, action, rules=STRICT_RULES)


# ---------------------------------------------------------------------------
# Strict placement


class TestStrictPlacement:
    def test_road_must_be_an_edge(self):
        action = BuildRoad(PlayerID(1), Road(Hex(0, 0), Hex(2, 0)))
        with pytest.raises(InvalidPlacement, match="not neighbours"):
            do_build_road(_single_player_board(), action, rules=STRICT_RULES)

    def test_road_edge_occupied(self):
        board = _single_player_board(roads=(Road(Hex(0, 0), Hex(1, 0)),))
        action = BuildRoad(PlayerID(1), Road(Hex(1, 0), Hex(0, 0)))
        with pytest.raises(InvalidPlacement, match="already has a road"):
            do_build_road(board, action, rules=STRICT_RULES)

    def test_road_limit(self):
        rules = replace(STRICT_RULES, limits=PieceLimits(roads=1))
        board = _single_player_board(roads=(Road(Hex(0, 0), Hex(1, 0)),))
        action = BuildRoad(PlayerID(1), Road(Hex(0, 0), Hex(0, 1)))
        with pytest.raises(InvalidPlacement, match="no roads left"):
            do_build_road(board, action, rules=rules)

    def test_valid_road(self):
        action = BuildRoad(PlayerID(1), Road(Hex(0, 0), Hex(0, 1)))
        assert len(do_build_road(_single_player_board(), action, rules=STRICT_RULES)) == 2

    def test_settlement_must_be_a_vertex(self):
        action = BuildSettlement(PlayerID(1), Settlement(Hex(0, 0), Hex(0, 1), Hex(1, 1)))
        with pytest.raises(InvalidPlacement, match="vertex"):
            do_build_settlement(_single_player_board(), action, rules=STRICT_RULES)

    def test_settlement_vertex_occupied(self):
        board = _single_player_board(cities=(City(Hex(0, 0), Hex(0, 1), Hex(-1, 1)),))
        action = BuildSettlement(PlayerID(1), Settlement(Hex(-1, 1), Hex(0, 1), Hex(0, 0)))
        with pytest.raises(InvalidPlacement, match="already occupied"):
            do_build_settlement(board, action, rules=STRICT_RULES)

    def test_settlement_distance_rule(self):
        board = _single_player_board(settlements=(Settlement(Hex(0, 0), Hex(1, 0), Hex(1, -1)),))
        action = BuildSettlement(PlayerID(1), Settlement(Hex(0, 0), Hex(1, 0), Hex(0, 1)))
        with pytest.raises(InvalidPlacement, match="next to another"):
            do_build_settlement(board, action, rules=STRICT_RULES)

    def test_settlement_ignores_roads_for_distance(self):
        board = _single_player_board(roads=(Road(Hex(0, 0), Hex(1, 0)),))
        action = BuildSettlement(PlayerID(1), Settlement(Hex(0, 0), Hex(1, 0), Hex(0, 1)))
        assert len(do_build_settlement(board, action, rules=STRICT_RULES)) == 2

    def test_settlement_limit(self):
        rules = replace(STRICT_RULES, limits=PieceLimits(settlements=1))
        board = _single_player_board(settlements=(Settlement(Hex(3, 0), Hex(3, 1), Hex(2, 1)),))
        action = BuildSettlement(PlayerID(1), Settlement(Hex(0, 0), Hex(0, 1), Hex(-1, 1)))
        with pytest.raises(InvalidPlacement, match="no settlements left"):
            do_build_settlement(board, action, rules=rules)

    def test_city_needs_a_settlement(self):
        action = BuildCity(PlayerID(1), City(Hex(0, 0), Hex(0, 1), Hex(-1, 1)))
        with pytest.raises(InvalidPlacement, match="must replace a settlement"):
            do_build_city(_single_player_board(), action, rules=STRICT_RULES)

    def test_city_on_another_players_settlement(self):
        vertex = (Hex(0, 0), Hex(0, 1), Hex(-1, 1))
        board = Board(
            robber=Hex(0, -2),
            players=(
                Player(id=PlayerID(1), resources=RICH),
                Player(id=PlayerID(2), settlements=(Settlement(*vertex),)),
            ),
        )
        with pytest.raises(InvalidPlacement, match="belongs to player 2"):
            do_build_city(board, BuildCity(PlayerID(1), City(*vertex)), rules=STRICT_RULES)

    def test_city_limit(self):
        vertex = (Hex(0, 0), Hex(0, 1), Hex(-1, 1))
        rules = replace(STRICT_RULES, limits=PieceLimits(cities=0))
        board = _single_player_board(settlements=(Settlement(*vertex),))
        with pytest.raises(InvalidPlacement, match="no cities left"):
            do_build_city(board, BuildCity(PlayerID(1), City(*vertex)), rules=rules)

    def test_valid_city_upgrade(self):
        vertex = (Hex(0, 0), Hex(0, 1), Hex(-1, 1))
        board = _single_player_board(settlements=(Settlement(*vertex),))
        effects = do_build_city(board, BuildCity(PlayerID(1), City(*vertex)), rules=STRICT_RULES)
        assert effects[0] == AddCity(PlayerID(1), City(*vertex))

    def test_placement_checked_before_cost(self):
        board = _single_player_board(Resources())
        action = BuildRoad(PlayerID(1), Road(Hex(0, 0), Hex(2, 0)))
        with pytest.raises(InvalidPlacement):
            do_build_road(board, action, rules=STRICT_RULES)


# ---------------------------------------------------------------------------
# Dispatch


class TestResolve:
    def test_dispatches_by_type(self, roll_board):
        assert resolve(roll_board, Roll(a=2, b=2)) == do_roll(roll_board, Roll(a=2, b=2))

    def test_passes_rng_to_rob(self, two_player_board):
        action = Rob(robber=PlayerID(1), victim=PlayerID(2))
        assert resolve(two_player_board, action, rng=seeded_rng("r")) == do_rob(
            two_player_board, action, rng=seeded_rng("r")
        )

    def test_unsupported_action(self, roll_board):
        with pytest.raises(UnsupportedAction):
            resolve(roll_board, object())  # type: ignore[arg-type]

    def test_rejection_is_logged(self, roll_board, caplog):
        caplog.set_level(logging.INFO, logger="settlers.domain.resolver")
        with pytest.raises(InvalidRoll):
            resolve(roll_board, Roll(a=9, b=1))
        assert "rejected Roll" in caplog.text

    def test_every_action_type_has_a_handler(self):
        assert set(_ACTION_HANDLERS) == set(ACTION_TYPES)
