"""Error taxonomy for the game core."""


class ConfigurationError(RuntimeError):
    """The game cannot start, e.g. the word list is empty."""


class UnrecognizedGuess(ValueError):
    """A submitted guess is not in the word list."""

    def __init__(self, guess: str):
        super().__init__(f"Unrecognized word: {guess!r}")
        self.guess = guess


class ClipboardUnavailable(RuntimeError):
    """A clipboard copy strategy could not place the text."""
