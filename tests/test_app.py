import pygame
import pytest

from spacebattle.app import key_events
from spacebattle.game import Key


def _down(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


def _up(key):
    return pygame.event.Event(pygame.KEYUP, key=key)


@pytest.mark.parametrize(
    "code, expected",
    [
        (pygame.K_UP, Key.UP),
        (pygame.K_DOWN, Key.DOWN),
        (pygame.K_LEFT, Key.LEFT),
        (pygame.K_RIGHT, Key.RIGHT),
        (pygame.K_RETURN, Key.ENTER),
        (pygame.K_p, Key.P),
    ],
)
def test_each_game_key_is_mapped(code, expected):
    assert key_events([_down(code)]) == {expected}


def test_no_events_gives_no_keys():
    assert key_events([]) == frozenset()


def test_key_releases_are_ignored():
    assert key_events([_up(pygame.K_p), _up(pygame.K_RETURN)]) == frozenset()


def test_unknown_keys_are_ignored():
    events = [_down(pygame.K_z), _down(pygame.K_LEFT), _down(pygame.K_SPACE)]
    assert key_events(events) == {Key.LEFT}


def test_non_key_events_are_ignored():
    events = [pygame.event.Event(pygame.QUIT), _down(pygame.K_DOWN)]
    assert key_events(events) == {Key.DOWN}


def test_repeated_presses_collapse():
    events = [_down(pygame.K_UP), _down(pygame.K_UP), _down(pygame.K_DOWN)]
    result = key_events(events)
    assert result == {Key.UP, Key.DOWN}
    assert len(result) == 2


def test_accepts_generator():
    result = key_events(_down(code) for code in (pygame.K_p, pygame.K_RETURN))
    assert result == {Key.P, Key.ENTER}


def test_main_rejects_unknown_option():
    from spacebattle.app import main

    with pytest.raises(SystemExit) as info:
        main(["--no-such-option"])
    assert info.value.code == 2


def test_main_help_exits_cleanly(capsys):
    from spacebattle.app import main

    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0
    assert "--assets" in capsys.readouterr().out