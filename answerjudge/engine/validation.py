"""
Guess validation shortcut for game code.

Answers the question: "does this guess count as solving the article?"
Callers that only need a yes/no (the game loop, score tallies) use this;
anything that shows diagnostics should call decide() directly.
"""

from typing import Sequence

from .decision import decide


def validate_guess(guess: str, title: str, aliases: Sequence[str] = ()) -> bool:
    """
    Return True if `guess` is accepted for the article `title`.

    Args:
      guess   : player's free-text guess
      title   : canonical article title
      aliases : known alternate names for the article

    Notes:
      - Blank guesses are rejected without scoring.
    """
    if not guess.strip():
        return False
    return decide(title, guess, aliases).accepted
