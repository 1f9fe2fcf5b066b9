# spacebattle

A space shooter arcade game built on pygame. A fleet of aliens marches
sideways across the screen and drops down each time it reaches an edge.
Take cover behind the four shields, shoot the aliens down, and hit the
mystery ship when it crosses the top of the screen for bonus points.

## Installing

```
pip install .
```

## Playing

```
spacebattle
```

Options:

- `--assets DIR`: directory holding the images, sounds and music
  (default: the current directory)
- `--data-dir DIR`: directory for `highscore.txt` and `save.dat`
  (default: the current directory)

The assets directory must contain `EnemyShip_1.png`, `EnemyShip_2.png`,
`EnemyShip_3.png`, `Mystery.png`, `FighterShip.png`, `FighterShip_2.png`,
`Sounds_explosion.ogg`, `Sounds_laser.ogg` and `interstellar.mp3`. The music
loops for as long as the window is open.

### Main menu

- Up / Down: choose an option
- Enter: confirm

The options are:

- **Resume**: continue the current game, as long as lives remain
- **New Game**: start over from level 1
- **Save**: write the current game to `save.dat`
- **Load**: restore the game from `save.dat` and continue playing
- **Exit**: quit

### In game

- Left / Right: move the fighter
- Up: fire (at most one shot every 0.35 seconds)
- P: pause or resume
- Enter (while paused): return to the menu

Each alien shot down is worth 100 points and the mystery ship 500. The high
score is written to `highscore.txt` as soon as it is beaten. Every alien laser
that hits the fighter costs a life, and you start with three. Alien lasers and
your own shots also chip away at the shields, and aliens that reach a shield
destroy the blocks they touch. The game is over when the last life is lost or
an alien touches the fighter; press Enter on the results screen to return to
the menu. Clearing a wave starts the next level, where the aliens fire more
often.

## Using the modules

- `spacebattle.shots`: `Rect`, `Block`, `Laser` and `Obstacle`
- `spacebattle.ships`: `Ship`, `Alien`, `MysteryShip`, `SpaceShip` and
  `FighterJet`
- `spacebattle.game`: `Game`, `GameState`, `Key`, `Assets`,
  `load_high_score` and `save_high_score`
- `spacebattle.app`: `main` and `key_events`

`Game` takes an `Assets` object and may be given its own `clock` and `rng`,
so the rules can be driven frame by frame without a window through
`handle_input`, `update` and `check_for_collisions`.

## What it does not do

- The menu lists "FighterJets(Currently Unavailable)", but it cannot be
  selected. `FighterJet` exists as a class, but the game always flies the
  standard fighter.
- A saved game keeps the score, level, lives, fleet direction, the fighter's
  position and the aliens' positions. Shields, lasers and the mystery ship
  are not saved, and loaded aliens all come back as the first kind.

## Development

```
pip install -e .[test]
pytest
```