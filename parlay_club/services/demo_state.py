"""
Simulated game states for demo/time-travel mode

While the clock is overridden, games whose kickoff has passed are still stored
as scheduled. This generator fabricates a plausible in-progress or final state
for them. Pass a seed for reproducible output.
"""

import copy
import logging
import random
from datetime import timedelta, timezone

from parlay_club.models.game import GameState, GameStatus

logger = logging.getLogger(__name__)

GAME_LENGTH_MINUTES = 180
QUARTER_MINUTES = 15

# Games are simulated from kickoff until this long afterwards
SIMULATION_WINDOW = timedelta(hours=4)


class DemoGameStateGenerator:
    def __init__(self, seed=None):
        self.seed = seed

    def _rng_for(self, game, now):
        """RNG for one game at one instant (repeatable when seeded)"""
        if self.seed is None:
            return random.Random()
        now_utc = now.astimezone(timezone.utc).isoformat()
        return random.Random(f"{self.seed}:{game.id}:{now_utc}")

    def applies_to(self, game, now):
        """Check if ``now`` falls inside the game's simulation window"""
        kickoff = game.kickoff_utc
        return kickoff <= now < kickoff + SIMULATION_WINDOW

    def simulate(self, game, now):
        """Return a copy of the game with a simulated live or final state"""
        rng = self._rng_for(game, now)
        demo_game = copy.copy(game)
        elapsed_minutes = int((now - game.kickoff_utc).total_seconds() // 60)

        if elapsed_minutes > GAME_LENGTH_MINUTES:
            demo_game.state = GameState.COMPLETED
            demo_game.away_score = 14 + rng.randint(0, 21)
            demo_game.home_score = 14 + rng.randint(0, 21)
            demo_game.status = None
            return demo_game

        demo_game.state = GameState.IN_PLAY

        # Stay in the 4th quarter for overtime scenarios
        quarter = min(elapsed_minutes // QUARTER_MINUTES + 1, 4)
        clock_minutes = QUARTER_MINUTES - elapsed_minutes % QUARTER_MINUTES

        base_score = int(elapsed_minutes / GAME_LENGTH_MINUTES * 24)
        demo_game.away_score = base_score + rng.randint(0, 6)
        demo_game.home_score = base_score + rng.randint(0, 6)

        status = GameStatus(
            display_clock=f"{clock_minutes}:{rng.randint(0, 59):02d}",
            quarter=quarter,
            home_timeouts=3 - rng.randint(0, 2),
            away_timeouts=3 - rng.randint(0, 2),
            is_red_zone=rng.random() < 0.2,
        )

        if rng.random() < 0.7:
            status.possession = game.away if rng.random() < 0.5 else game.home
            status.down = rng.randint(1, 4)
            status.distance = rng.randint(1, 15)
            status.yard_line = rng.randint(10, 89)

        demo_game.status = status
        logger.debug(
            f"Simulated game {game.id}: Q{quarter} {status.display_clock} "
            f"{demo_game.away_score}-{demo_game.home_score}"
        )
        return demo_game
