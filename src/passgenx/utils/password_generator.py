import string
import hashlib

from .errors import ConfigurationError, InvalidArgumentError

# ==============================================================
# Algorithm constants (sha256-ctr-v1)
# Changing any of these changes every password ever generated.
# DO NOT CHANGE without bumping ALGORITHM_VERSION.
# ==============================================================
LOWER = string.ascii_lowercase
UPPER = string.ascii_uppercase
DIGITS = string.digits
SYMBOLS = "!@#$%^&*()_+-=[]{};:,.?<>/\\|~`"

SEED_DELIMITER = "|"
SEED_BYTES = 32            # SHA-256 digest size
COUNTER_BYTES = 8
INDEX_BYTES = 4

CASE_POOLS = {
    "lower": (LOWER,),
    "upper": (UPPER,),
    "both": (LOWER, UPPER),
    "none": (),
}


class DigestRandom:
    """
    Deterministic index generator built on SHA-256 in counter mode.

    The seed is written as 32 big-endian bytes (the key). Block i of the
    stream is SHA-256(key || i as 8-byte big-endian). Indices are drawn from
    4-byte big-endian words with rejection sampling, so every index in
    [0, n) is exactly equally likely.

    Security Notes:
        - Output depends only on the seed; no system randomness is read.
        - Anyone holding the seed can reproduce the stream.
    """

    def __init__(self, seed: int):
        if seed < 0 or seed.bit_length() > SEED_BYTES * 8:
            raise InvalidArgumentError(f"Seed must fit in {SEED_BYTES} unsigned bytes")
        self._key = seed.to_bytes(SEED_BYTES, "big")
        self._counter = 0
        self._buffer = b""

    def _next_block(self) -> bytes:
        block = hashlib.sha256(
            self._key + self._counter.to_bytes(COUNTER_BYTES, "big")
        ).digest()
        self._counter += 1
        return block

    def read(self, n: int) -> bytes:
        """Return the next n bytes of the stream."""
        while len(self._buffer) < n:
            self._buffer += self._next_block()
        out, self._buffer = self._buffer[:n], self._buffer[n:]
        return out

    def randbelow(self, n: int) -> int:
        """Return a uniformly distributed integer in [0, n)."""
        if n <= 0 or n > 1 << (INDEX_BYTES * 8):
            raise InvalidArgumentError(f"Range must be between 1 and 2**32, got {n}")
        span = 1 << (INDEX_BYTES * 8)
        limit = span - (span % n)
        while True:
            value = int.from_bytes(self.read(INDEX_BYTES), "big")
            if value < limit:
                return value % n


def build_charset(case_type: str, include_digits: bool, include_symbols: bool) -> str:
    """
    Build the ordered character set for the selected options.

    Pools are always concatenated as lowercase, uppercase, digits, symbols.
    The order feeds the index arithmetic, so it is part of the algorithm.

    Args:
        case_type: One of 'lower', 'upper', 'both' or 'none'.
        include_digits: Whether to add 0-9.
        include_symbols: Whether to add the fixed symbol pool.

    Returns:
        The characters eligible for sampling. May be empty.

    Raises:
        InvalidArgumentError: If case_type is not recognised.
    """
    if case_type not in CASE_POOLS:
        raise InvalidArgumentError(
            f"Unknown case type {case_type!r}. "
            f"Expected one of: {', '.join(CASE_POOLS)}"
        )

    pools = list(CASE_POOLS[case_type])
    if include_digits:
        pools.append(DIGITS)
    if include_symbols:
        pools.append(SYMBOLS)
    return "".join(pools)


def derive_seed(domain: str, master_secret: str, identifier: str) -> int:
    """
    Hash domain|master_secret|identifier into the integer seed.

    Returns:
        The SHA-256 digest of the UTF-8 encoded inputs as a big-endian
        unsigned integer.
    """
    seed_input = SEED_DELIMITER.join((domain, master_secret, identifier))
    digest = hashlib.sha256(seed_input.encode("utf-8")).digest()
    return int.from_bytes(digest, "big")


def generate(domain: str,
    master_secret: str,
    identifier: str,
    length: int,
    case_type: str,
    include_digits: bool,
    include_symbols: bool) -> str:
    """
    Derive a deterministic password.

    The same inputs always give the same password for a given algorithm
    version. Characters are drawn independently with replacement, so a
    requested category may still be absent from a short password.

    Args:
        domain: Site or service name.
        master_secret: The user's master secret. Never stored.
        identifier: Per-domain disambiguator, e.g. 'default' or 'recovery'.
        length: Number of characters to produce. Any positive integer.
        case_type: One of 'lower', 'upper', 'both' or 'none'.
        include_digits: Whether digits are eligible.
        include_symbols: Whether symbols are eligible.

    Returns:
        The derived password.

    Raises:
        InvalidArgumentError: If length is not a positive integer or
            case_type is unknown.
        ConfigurationError: If the options select no characters at all.
    """
    if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
        raise InvalidArgumentError(f"Password length must be a positive integer, got {length!r}")

    charset = build_charset(case_type, include_digits, include_symbols)
    if not charset:
        raise ConfigurationError(
            "Character set cannot be empty! "
            "Choose a case type with letters, or enable digits or symbols."
        )

    rng = DigestRandom(derive_seed(domain, master_secret, identifier))
    return "".join(charset[rng.randbelow(len(charset))] for _ in range(length))
