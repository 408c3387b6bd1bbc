import re

import pytest

from passgenx.utils.errors import ConfigurationError, InvalidArgumentError
from passgenx.utils.password_generator import (
    DIGITS,
    SYMBOLS,
    DigestRandom,
    build_charset,
    derive_seed,
    generate,
)


OPTIONS = {
    "length": 16,
    "case_type": "both",
    "include_digits": True,
    "include_symbols": True,
}


def _gen(domain="github.com", secret="password123", identifier="default", **overrides):
    options = {**OPTIONS, **overrides}
    return generate(domain, secret, identifier, **options)


def test_generate_is_deterministic():
    p1 = _gen()
    p2 = _gen()
    assert p1 == p2
    assert len(p1) == 16


def test_generate_changes_with_domain():
    assert _gen() != _gen(domain="google.com")


def test_generate_changes_with_master_secret():
    assert _gen() != _gen(secret="different_password")


def test_generate_changes_with_identifier():
    assert _gen() != _gen(identifier="v2")


def test_known_answer_lowercase():
    password = _gen(length=8, case_type="lower", include_digits=False, include_symbols=False)
    assert password == "upqerxhe"


def test_known_answer_letters_and_digits():
    password = _gen(length=8, case_type="both", include_digits=True, include_symbols=False)
    assert password == "AT22vF7G"


def test_longer_password_extends_shorter_one():
    # Each character consumes the next draw of the same stream
    short = _gen(length=8)
    long = _gen(length=32)
    assert long.startswith(short)


@pytest.mark.parametrize("length", [1, 8, 32, 64, 200])
def test_length_fidelity(length):
    assert len(_gen(length=length)) == length


def test_lowercase_only():
    password = _gen(case_type="lower", include_digits=False, include_symbols=False)
    assert re.fullmatch(r"[a-z]+", password)


def test_uppercase_only():
    password = _gen(case_type="upper", include_digits=False, include_symbols=False)
    assert re.fullmatch(r"[A-Z]+", password)


def test_digits_only():
    password = _gen(case_type="none", include_digits=True, include_symbols=False, length=40)
    assert re.fullmatch(r"[0-9]+", password)


def test_symbols_only():
    password = _gen(case_type="none", include_digits=False, include_symbols=True, length=40)
    assert set(password) <= set(SYMBOLS)


def test_digits_excluded():
    assert not re.search(r"\d", _gen(include_digits=False, length=64))


def test_symbols_excluded():
    assert not set(_gen(include_symbols=False, length=64)) & set(SYMBOLS)


def test_digits_and_symbols_show_up_across_identifiers():
    passwords = [_gen(identifier=f"id-{i}", length=20) for i in range(10)]
    assert any(set(p) & set(DIGITS) for p in passwords)
    assert any(set(p) & set(SYMBOLS) for p in passwords)


def test_output_within_charset():
    charset = set(build_charset("both", True, True))
    assert set(_gen(length=64)) <= charset


def test_empty_charset_raises():
    with pytest.raises(ConfigurationError, match="Character set cannot be empty"):
        _gen(case_type="none", include_digits=False, include_symbols=False)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        _gen(case_type="none", include_digits=False, include_symbols=False)


@pytest.mark.parametrize("length", [0, -1, 2.5, "16", None, True])
def test_invalid_length_raises(length):
    with pytest.raises(InvalidArgumentError):
        _gen(length=length)


def test_unknown_case_type_raises():
    with pytest.raises(InvalidArgumentError, match="Unknown case type"):
        _gen(case_type="mixed")


def test_charset_order():
    assert build_charset("both", True, True) == (
        "abcdefghijklmnopqrstuvwxyz"
        "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
        "0123456789"
        + SYMBOLS
    )
    assert build_charset("upper", False, True) == "ABCDEFGHIJKLMNOPQRSTUVWXYZ" + SYMBOLS
    assert build_charset("none", False, False) == ""


def test_symbol_pool():
    assert SYMBOLS == "!@#$%^&*()_+-=[]{};:,.?<>/\\|~`"
    assert len(set(SYMBOLS)) == len(SYMBOLS)


def test_derive_seed():
    seed = derive_seed("github.com", "password123", "default")
    assert seed == int("7ab512e917f3eba7995292044a7628fae93cabc0047aaefcc11e77efc4350f85", 16)


def test_derive_seed_uses_delimiter():
    assert derive_seed("ab", "c", "d") != derive_seed("a", "bc", "d")


def test_digest_random_stream():
    rng = DigestRandom(derive_seed("github.com", "password123", "default"))
    assert rng.read(4) == bytes.fromhex("1aca4550")
    assert rng.read(28) == bytes.fromhex(
        "eb5f10b7a2bac08e0a660fbec710c76ffbd02aa17e0b962d36fd6518"
    )
    # Crosses into the second block
    assert rng.read(4) == bytes.fromhex("41b78cbc")


def test_digest_random_rejects_biased_values():
    rng = DigestRandom(1)
    draws = iter([b"\xff\xff\xff\xff", (30).to_bytes(4, "big")])
    rng.read = lambda n: next(draws)
    # 0xffffffff is above the largest multiple of 26 below 2**32
    assert rng.randbelow(26) == 4


@pytest.mark.parametrize("n", [0, -5, 2**32 + 1])
def test_digest_random_invalid_range(n):
    with pytest.raises(InvalidArgumentError):
        DigestRandom(1).randbelow(n)


def test_digest_random_invalid_seed():
    with pytest.raises(InvalidArgumentError):
        DigestRandom(-1)
    with pytest.raises(InvalidArgumentError):
        DigestRandom(1 << 256)
