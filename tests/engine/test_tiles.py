from functools import partial

from pizza_delivery.core.reports import (
    AttackReport,
    BumpedIntoGhostReport,
    BumpedIntoWallReport,
    ChaseAwayGhostReport,
    FoundHouseReport,
    FoundManholeCoverReport,
    FoundPigReport,
    FoundPizzaReport,
    GhostNotFoundReport,
    MoveReport,
    ReceiveSpecialReport,
    ReceiveTokenReport,
    TeleportReport,
    TurnEndReport,
    TurnStartReport,
    UseSpecialReport,
    WinReport,
)
from pizza_delivery.core.types import ALL_DIRECTIONS, Direction, Topping
from pizza_delivery.engine.actions import AttackAction, MoveAction
from pizza_delivery.engine.tiles import Crow, Empty, Grave, House, Monkey, Pizza
from tests.test_utils import GameScenario

move_east = partial(MoveAction, direction=Direction.EAST)
attack_east = partial(AttackAction, direction=Direction.EAST)


def report_types(game: GameScenario, idx: int = 0) -> list[type]:
    return [type(r) for r in game.player(idx).reports]


def test_move_into_wall_changes_nothing(scenario: type[GameScenario]):
    """
    Scenario: player walks north into a wall.
    Expected: position unchanged, bump reported, nothing else happens that turn.
    """
    game = scenario(
        [
            ". # .",
            ". 0 .",
            ". . .",
        ],
    )
    p0 = game.player(0)
    start = p0.point
    p0.plan(partial(MoveAction, direction=Direction.NORTH))

    game.run_turn()

    assert p0.point == start
    assert report_types(game) == [
        TurnStartReport,
        MoveReport,
        BumpedIntoWallReport,
        TurnEndReport,
    ]


def test_move_off_the_grid_bumps_into_the_border(scenario: type[GameScenario]):
    game = scenario(["0 . ."])
    p0 = game.player(0)
    game.resolve(0, partial(MoveAction, direction=Direction.WEST))

    assert p0.point == game.point(0, 0)
    assert p0.reports_of(BumpedIntoWallReport)


def test_finding_pizza_spawns_ghosts_around_house(scenario: type[GameScenario]):
    """
    Scenario: 2-player 7x7 grid. Player 0 steps onto the Shrimp pizza.
    Expected: FoundPizzaReport(Shrimp) and ghosts on every free tile around the
    Shrimp house, except the one player 1 is standing on.
    """
    game = scenario(
        [
            ". . . . . . .",
            ". 0 S . . . .",
            ". . . . . . .",
            ". . . . . . .",
            ". . . . s . .",
            ". . . . . . .",
            ". . . . . . .",
        ],
    )
    p0 = game.player(0)
    game.place(1, 5, 5)
    p0.plan(move_east)

    game.run_turn()

    assert p0.point == game.point(2, 1)
    assert p0.topping == Topping.SHRIMP
    assert [r.topping for r in p0.reports_of(FoundPizzaReport)] == [Topping.SHRIMP]

    pizza = game.tile(2, 1)
    assert isinstance(pizza, Pizza)
    assert pizza.found
    assert not pizza.report_as_pizza()

    house_point = game.point(4, 4)
    house = game.grid[house_point]
    assert isinstance(house, House)
    assert house.spawned
    assert house.report_as_house()

    haunted = {d for d, t in game.grid.surrounding_tiles(house_point).items() if t.ghost}
    assert haunted == set(ALL_DIRECTIONS) - {Direction.SOUTH_EAST}


def test_second_pizza_is_wasted_when_already_carrying_one(scenario: type[GameScenario]):
    game = scenario(["0 S . s"])
    p0 = game.player(0)
    p0.topping = Topping.CHEESE

    game.resolve(0, move_east)

    assert p0.topping == Topping.CHEESE
    assert [r.topping for r in p0.reports_of(FoundPizzaReport)] == [None]
    pizza = game.tile(1, 0)
    assert isinstance(pizza, Pizza)
    assert pizza.found
    assert not pizza.report_as_pizza()
    house = game.tile(3, 0)
    assert isinstance(house, House)
    assert not house.spawned


def test_delivering_matching_topping_wins(scenario: type[GameScenario]):
    game = scenario(["0 c ."])
    p0 = game.player(0)
    p0.topping = Topping.CHEESE
    house = game.tile(1, 0)
    assert isinstance(house, House)
    house.spawned = True
    p0.plan(move_east)

    game.run_turn()

    assert p0.won == 1
    assert house.delivered
    assert len(p0.reports_of(WinReport)) == 1
    assert p0.reports_of(WinReport)[0].round == 1
    assert p0.reports_of(FoundHouseReport)


def test_unspawned_house_does_not_count(scenario: type[GameScenario]):
    game = scenario(["0 c ."])
    p0 = game.player(0)
    p0.topping = Topping.CHEESE

    game.resolve(0, move_east)

    assert p0.point == game.point(1, 0)
    assert p0.won is None
    assert not p0.reports_of(FoundHouseReport)
    assert not p0.reports_of(WinReport)


def test_wrong_topping_does_not_win(scenario: type[GameScenario]):
    game = scenario(["0 c ."])
    p0 = game.player(0)
    p0.topping = Topping.SHRIMP
    house = game.tile(1, 0)
    assert isinstance(house, House)
    house.spawned = True

    game.resolve(0, move_east)

    assert p0.won is None
    assert p0.reports_of(FoundHouseReport)
    assert not p0.reports_of(WinReport)


def test_ghost_blocks_move_without_barrier(scenario: type[GameScenario]):
    game = scenario(["0 g ."])
    p0 = game.player(0)
    p0.plan(move_east)

    game.run_turn()

    assert p0.point == game.point(0, 0)
    assert game.tile(1, 0).ghost
    assert p0.barrier_prompts == 0
    assert report_types(game) == [
        TurnStartReport,
        MoveReport,
        BumpedIntoGhostReport,
        TurnEndReport,
    ]


def test_barrier_chases_ghost_and_completes_move(scenario: type[GameScenario]):
    game = scenario(["0 g ."])
    p0 = game.player(0)
    p0.specials = ["AntiGhostBarrier", "Rook"]

    game.resolve(0, move_east)

    assert p0.point == game.point(1, 0)
    assert not game.tile(1, 0).ghost
    assert p0.specials == ["Rook"]
    assert game.deck.discard_pile == []
    assert report_types(game) == [
        MoveReport,
        BumpedIntoGhostReport,
        UseSpecialReport,
        ChaseAwayGhostReport,
    ]


def test_declined_barrier_leaves_everything_untouched(scenario: type[GameScenario]):
    game = scenario(["0 g ."])
    p0 = game.player(0)
    p0.specials = ["AntiGhostBarrier"]
    p0.use_barrier = False

    game.resolve(0, move_east)

    assert p0.barrier_prompts == 1
    assert p0.point == game.point(0, 0)
    assert p0.specials == ["AntiGhostBarrier"]
    assert game.tile(1, 0).ghost
    assert not p0.reports_of(UseSpecialReport)


def test_attacking_a_ghost_grants_a_special(scenario: type[GameScenario]):
    game = scenario(["0 g ."], specials=["Rook"])
    p0 = game.player(0)

    game.resolve(0, attack_east)

    assert not game.tile(1, 0).ghost
    assert p0.specials == ["Rook"]
    assert report_types(game) == [
        AttackReport,
        ChaseAwayGhostReport,
        ReceiveSpecialReport,
    ]


def test_attack_without_ghost_grants_nothing(scenario: type[GameScenario]):
    game = scenario(["0 . ."], specials=["Rook"])
    p0 = game.player(0)

    game.resolve(0, attack_east)

    assert p0.specials == []
    assert len(game.deck) == 1
    assert report_types(game) == [AttackReport, GhostNotFoundReport]


def test_grave_ghost_never_returns(scenario: type[GameScenario]):
    """
    Attack the grave twice: the first attack clears it for good,
    the second finds nothing, and even a house spawn cannot re-haunt it.
    """
    game = scenario(["0 G ."], specials=["Rook", "Bishop"])
    p0 = game.player(0)
    grave = game.tile(1, 0)
    assert isinstance(grave, Grave)
    assert grave.ghost

    game.resolve(0, attack_east)
    assert not grave.ghost
    assert len(p0.specials) == 1

    assert grave.spawn_ghost() is False
    assert not grave.ghost

    game.resolve(0, attack_east)
    assert not grave.ghost
    assert len(p0.specials) == 1
    assert isinstance(p0.reports[-1], GhostNotFoundReport)

    game.resolve(0, move_east)
    assert p0.point == game.point(1, 0)


def test_empty_floor_ghost_toggles():
    floor = Empty()
    assert not floor.ghost
    assert floor.spawn_ghost()
    assert floor.ghost
    floor.clear_ghost()
    assert not floor.ghost
    assert floor.spawn_ghost()
    assert floor.ghost


def test_teleporter_moves_player_to_linked_teleporter(scenario: type[GameScenario]):
    game = scenario(["0 T . T"])
    p0 = game.player(0)

    game.resolve(0, move_east)

    assert p0.point == game.point(3, 0)
    assert isinstance(p0.reports[-1], TeleportReport)


def test_monkey_token_senses_pizza_direction(scenario: type[GameScenario]):
    """
    Scenario: player steps onto the monkey next to a pizza and a manhole cover.
    Expected: the Monkey token, and the turn-end survey lists both "pizza" directions.
    """
    game = scenario(
        [
            "0 M S",
            ". . O",
        ],
    )
    p0 = game.player(0)
    p0.plan(move_east)

    game.run_turn()

    assert p0.tokens == ["Monkey"]
    assert [r.token for r in p0.reports_of(ReceiveTokenReport)] == ["Monkey"]
    monkey = game.tile(1, 0)
    assert isinstance(monkey, Monkey)
    assert monkey.claimed

    survey = p0.reports_of(TurnEndReport)[-1]
    assert survey.near_pizza == frozenset({Direction.EAST, Direction.SOUTH_EAST})


def test_monkey_is_claimed_only_once(scenario: type[GameScenario]):
    game = scenario(["0 M 1"])
    game.resolve(0, move_east)
    game.place(1, 2, 0)
    game.resolve(1, partial(MoveAction, direction=Direction.WEST))

    assert game.player(0).tokens == ["Monkey"]
    assert game.player(1).tokens == []


def test_crow_carries_attacker_to_nearest_house(scenario: type[GameScenario]):
    game = scenario(["0 R . . s . c"])
    p0 = game.player(0)
    p0.topping = Topping.SHRIMP
    house = game.tile(4, 0)
    assert isinstance(house, House)
    house.spawned = True
    p0.plan(attack_east)

    game.run_turn()

    crow = game.tile(1, 0)
    assert isinstance(crow, Crow)
    assert crow.claimed
    assert p0.tokens == ["Crow"]
    assert p0.point == game.point(4, 0)
    assert p0.reports_of(TeleportReport)
    assert p0.won == 1

    # The crow only helps once
    game.place(0, 0, 0)
    game.resolve(0, attack_east)
    assert isinstance(p0.reports[-1], GhostNotFoundReport)
    assert p0.point == game.point(0, 0)


def test_crow_skips_delivered_houses(scenario: type[GameScenario]):
    game = scenario(["0 R s . . . c"])
    shrimp = game.tile(2, 0)
    assert isinstance(shrimp, House)
    shrimp.delivered = True

    game.resolve(0, attack_east)

    assert game.player(0).point == game.point(6, 0)


def test_pig_reports_its_family_role(scenario: type[GameScenario]):
    game = scenario(["0 P p"])
    p0 = game.player(0)

    game.resolve(0, move_east)
    game.resolve(0, move_east)

    assert p0.point == game.point(2, 0)
    assert [r.parent for r in p0.reports_of(FoundPigReport)] == [True, False]


def test_manhole_cover_looks_like_pizza(scenario: type[GameScenario]):
    game = scenario(["0 O ."])
    p0 = game.player(0)
    p0.plan(move_east)

    game.run_turn()

    assert p0.point == game.point(1, 0)
    assert p0.reports_of(FoundManholeCoverReport)
    assert p0.topping is None
    assert game.tile(1, 0).report_as_pizza()
    # Standing on it, nothing "pizza" is around any more
    assert p0.reports_of(TurnEndReport)[-1].near_pizza is False
