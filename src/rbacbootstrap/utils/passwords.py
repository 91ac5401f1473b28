"""Password hashing for locally stored users."""

import bcrypt

# Matches the default cost the management server uses for its own users.
DEFAULT_ROUNDS = 10


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Return a bcrypt hash of ``password`` suitable for ``User.password``."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()

