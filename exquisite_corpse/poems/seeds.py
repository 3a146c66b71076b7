"""Opening lines a new poem can start from."""

import random
from typing import Optional

SEED_LINES = (
    "The clock tower swallowed its own shadow at noon",
    "A violin was found asleep inside the lighthouse",
    "My grandmother kept the ocean in a teacup",
    "Somewhere a staircase is climbing itself toward morning",
    "The moths held a council beneath the broken lamp",
    "We planted keys and harvested a field of doors",
    "The river forgot its name and wandered into town",
    "Every mirror in the house began to hum at dusk",
    "A paper boat carried the last letter of winter",
    "The orchard whispered numbers to the passing trains",
    "Under the bridge the echoes were selling old hats",
    "She folded the horizon and tucked it in her coat",
)


def choose_seed_line(rng: Optional[random.Random] = None) -> str:
    """Pick an opening line uniformly at random."""
    return (rng or random).choice(SEED_LINES)
