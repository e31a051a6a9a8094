"""Short opaque record identifiers.

Ids are 9 base-36 characters drawn from a pseudo-random source. They are
not cryptographically unique; for a single-site dataset of a few hundred
records the collision odds are negligible.
"""

import random
import string
from typing import Optional

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9


def new_id(rng: Optional[random.Random] = None) -> str:
    """Return a fresh identifier, optionally drawn from ``rng``."""
    source = rng or random
    return "".join(source.choice(ID_ALPHABET) for _ in range(ID_LENGTH))
