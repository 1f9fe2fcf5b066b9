import random
import struct

import pygame
import pytest

from spacebattle.game import (
    Assets,
    Game,
    GameState,
    Key,
    SaveFileError,
    load_high_score,
    save_high_score,
)
from spacebattle.ships import Alien
from spacebattle.shots import Laser, Obstacle


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class FakeSound:
    def __init__(self):
        self.plays = 0

    def play(self):
        self.plays += 1


def make_assets(explosion=None):
    def img():
        return pygame.Surface((30, 30))

    return Assets(
        alien_images={1: img(), 2: img(), 3: img()},
        mystery_image=img(),
        spaceship_image=pygame.Surface((40, 40)),
        fighter_image=pygame.Surface((40, 40)),
        explosion_sound=explosion,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def game(tmp_path, clock):
    return Game(make_assets(FakeSound()), 800, 800, data_dir=tmp_path, clock=clock,
                rng=random.Random(1))


def test_high_score_missing_file_is_zero(tmp_path):
    assert load_high_score(tmp_path / "none.txt") == 0


def test_high_score_round_trip(tmp_path):
    path = tmp_path / "highscore.txt"
    save_high_score(path, 1234)
    assert load_high_score(path) == 1234


def test_high_score_garbage_is_zero(tmp_path):
    path = tmp_path / "highscore.txt"
    path.write_text("not a number")
    assert load_high_score(path) == 0


def test_new_game_defaults(game):
    assert game.state is GameState.MAIN_MENU
    assert game.lives == 3
    assert game.score == 0
    assert game.level == 1
    assert len(game.aliens) == 45
    assert len(game.obstacles) == 4


@pytest.mark.parametrize(
    "level,kinds",
    [(1, [1, 2, 1, 2, 1]), (2, [1, 2, 3, 1, 2]), (3, [3, 3, 3, 3, 3]), (7, [1, 1, 1, 1, 1])],
)
def test_create_aliens_kinds_by_level(game, level, kinds):
    game.level = level
    aliens = game.create_aliens()
    rows = [[a.kind for a in aliens[r * 9:(r + 1) * 9]] for r in range(5)]
    assert [row[0] for row in rows] == kinds
    assert all(len(set(row)) == 1 for row in rows)


def test_create_aliens_grid_origin(game):
    aliens = game.create_aliens()
    assert min(a.x for a in aliens) == 130
    assert min(a.y for a in aliens) == 170
    assert len({a.position for a in aliens}) == 45


def test_create_obstacles_layout(game):
    obstacles = game.create_obstacles()
    assert all(o.y == 700 for o in obstacles)
    xs = [o.x for o in obstacles]
    gaps = {b - a for a, b in zip(xs, xs[1:])}
    assert len(gaps) == 1
    cells = sum(line.count("1") for line in Obstacle.GRID)
    assert all(len(o.blocks) == cells for o in obstacles)


def test_move_aliens_bounces_at_right_edge(game):
    game.aliens = [Alien(1, pygame.Surface((30, 30)), 790.0, 200.0)]
    game.move_aliens()
    assert game.aliens_direction == -1
    assert game.aliens[0].y == 204.0
    assert game.aliens[0].x == 789.0


def test_move_aliens_steps_right_inside_screen(game):
    game.aliens = [Alien(1, pygame.Surface((30, 30)), 300.0, 200.0)]
    game.move_aliens()
    assert game.aliens[0].position == (301.0, 200.0)


def test_alien_shoot_respects_interval(game, clock):
    clock.now = 1.0
    game.alien_shoot_laser()
    assert len(game.alien_lasers) == 1
    game.alien_shoot_laser()
    assert len(game.alien_lasers) == 1
    clock.now = 2.0
    game.alien_shoot_laser()
    assert len(game.alien_lasers) == 2
    assert all(laser.speed == 6 for laser in game.alien_lasers)


def test_player_laser_kills_alien(game, tmp_path):
    target = game.aliens[0]
    laser = Laser(target.x + 1, target.y + 1, -6)
    game.spaceship.lasers = [laser]
    game.check_for_collisions()
    assert target not in game.aliens
    assert len(game.aliens) == 44
    assert game.score == 100
    assert not laser.active
    assert game.assets.explosion_sound.plays == 1
    assert load_high_score(tmp_path / "highscore.txt") == 100


def test_player_laser_hits_mystery_ship(game):
    game.mystery_ship.spawn(0)
    game.spaceship.lasers = [Laser(5, 95, -6)]
    game.check_for_collisions()
    assert game.score == 500
    assert not game.mystery_ship.alive


def test_alien_laser_costs_a_life(game):
    ship = game.spaceship
    game.alien_lasers = [Laser(ship.x + 1, ship.y + 1, 6)]
    game.check_for_collisions()
    assert game.lives == 2
    assert game.state is GameState.MAIN_MENU


def test_last_life_ends_game(game):
    ship = game.spaceship
    game.lives = 1
    game.alien_lasers = [Laser(ship.x + 1, ship.y + 1, 6)]
    game.check_for_collisions()
    assert game.lives == 0
    assert game.state is GameState.GAME_OVER


def test_delete_inactive_lasers(game):
    keep = Laser(10, 10, 6)
    gone = Laser(20, 20, 6, active=False)
    game.alien_lasers = [keep, gone]
    game.delete_inactive_lasers()
    assert game.alien_lasers == [keep]


def test_save_and_load_round_trip(game, tmp_path, clock):
    game.score, game.level, game.lives = 700, 2, 1
    game.aliens = game.aliens[:3]
    game.spaceship.move_left()
    saved_ship = game.spaceship.position
    saved_aliens = [a.position for a in game.aliens]
    game.save_game()

    other = Game(make_assets(), 800, 800, data_dir=tmp_path, clock=clock)
    other.load_game()
    assert (other.score, other.level, other.lives) == (700, 2, 1)
    assert other.spaceship.position == saved_ship
    assert [a.position for a in other.aliens] == saved_aliens


def test_load_missing_save_raises(game):
    with pytest.raises(FileNotFoundError):
        game.load_game()


def test_load_rejects_huge_alien_count(game, tmp_path):
    (tmp_path / "save.dat").write_bytes(struct.pack("<iiiiffQ", 1, 1, 3, 1, 0.0, 0.0, 5000))
    with pytest.raises(SaveFileError):
        game.load_game()


def test_load_rejects_truncated_file(game, tmp_path):
    (tmp_path / "save.dat").write_bytes(b"\x01\x02")
    with pytest.raises(SaveFileError):
        game.load_game()


def test_menu_navigation_wraps(game):
    game.handle_input({Key.UP}, set())
    assert game.selected_menu_option == 4
    game.handle_input({Key.DOWN}, set())
    assert game.selected_menu_option == 0


def test_menu_exit(game):
    game.selected_menu_option = 4
    game.handle_input({Key.ENTER}, set())
    assert game.run is False


def test_menu_resume_and_pause_cycle(game):
    game.handle_input({Key.ENTER}, set())
    assert game.state is GameState.GAME_RUNNING
    game.handle_input({Key.P}, set())
    assert game.state is GameState.GAME_PAUSED
    game.handle_input({Key.P}, set())
    assert game.state is GameState.GAME_RUNNING
    game.handle_input({Key.P}, set())
    game.handle_input({Key.ENTER}, set())
    assert game.state is GameState.MAIN_MENU


def test_menu_load_without_save_stays_in_menu(game):
    game.selected_menu_option = 3
    game.handle_input({Key.ENTER}, set())
    assert game.state is GameState.MAIN_MENU


def test_game_over_enter_returns_to_menu(game):
    game.game_over()
    game.handle_input({Key.ENTER}, set())
    assert game.state is GameState.MAIN_MENU


def test_held_keys_move_ship(game):
    game.state = GameState.GAME_RUNNING
    start = game.spaceship.x
    game.handle_input(set(), {Key.LEFT})
    assert game.spaceship.x == start - 4


def test_update_ignored_outside_running(game):
    positions = [a.position for a in game.aliens]
    game.update()
    assert [a.position for a in game.aliens] == positions


def test_update_advances_level_when_fleet_cleared(game):
    game.state = GameState.GAME_RUNNING
    game.aliens = []
    game.update()
    assert game.level == 2
    assert len(game.aliens) == 45
    assert game.aliens_direction == 1


def test_update_spawns_mystery_ship_after_interval(game, clock):
    game.state = GameState.GAME_RUNNING
    clock.now = 25.0
    game.update()
    assert game.mystery_ship.alive
    assert game.time_last_spawn == 25.0
    assert 10 <= game.mystery_ship_spawn_interval <= 20