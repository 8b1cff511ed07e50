"""User turn validation, applied before anything is sent to the backend."""

MAX_TURN_CHARS = 32_000


def validate_turn(user_input: str) -> str:
    """Return the user's turn text without surrounding whitespace.

    Raises ValueError for non-text input, a blank turn, or a turn longer
    than MAX_TURN_CHARS.
    """
    if not isinstance(user_input, str):
        raise ValueError(f"A turn must be text, got {type(user_input).__name__}.")
    text = user_input.strip()
    if not text:
        raise ValueError("A turn cannot be blank.")
    if len(text) > MAX_TURN_CHARS:
        raise ValueError(f"A turn is limited to {MAX_TURN_CHARS} characters (got {len(text)}).")
    return text
