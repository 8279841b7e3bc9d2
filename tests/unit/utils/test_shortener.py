"""Unit tests for the generate_shortcode function in shortener.py.

This test suite verifies the correctness and robustness of the
generate_shortcode() helper that draws random Base62 shortcodes.

Test coverage includes:

1. Basic functionality
   - Ensures the function returns a 6-character string by default.

2. Output format
   - All characters must belong to the Base62 alphabet (or a custom alphabet).

3. Length parameter enforcement
   - The 'length' argument is respected exactly.

4. Error handling
   - Ensures invalid lengths and empty alphabets raise appropriate exceptions.

5. Randomness sanity
   - Draws don't repeat in a modest sample and cover the alphabet.

6. Performance sanity
   - The function executes efficiently for a large number of iterations.
"""

import string
import time

import pytest

from tinylinks.utils import generate_shortcode


# -------------------------------
# 1. Basic functionality and type
# -------------------------------

def test_generate_shortcode_returns_string():
    """Ensure generate_shortcode() returns a 6-character string by default."""
    result = generate_shortcode()
    assert isinstance(result, str)
    assert len(result) == 6


# -------------------------------
# 2. Output format validation
# -------------------------------

def test_generate_shortcode_is_base62_safe():
    """Ensure output contains only Base62-safe characters."""
    alphabet = set(string.ascii_letters + string.digits)
    for _ in range(100):
        assert set(generate_shortcode()) <= alphabet


def test_generate_shortcode_with_custom_alphabet():
    """Ensure a custom alphabet is honored."""
    assert set(generate_shortcode(length=50, alphabet='ab')) <= {'a', 'b'}


# -------------------------------
# 3. Length enforcement
# -------------------------------

@pytest.mark.parametrize('length', [1, 6, 7, 32])
def test_generate_shortcode_respects_length(length):
    """Ensure output has exactly the requested length."""
    assert len(generate_shortcode(length=length)) == length


# -------------------------------
# 4. Error handling
# -------------------------------

@pytest.mark.parametrize('length', [None, '6', 6.0, True])
def test_invalid_length_type_raises_error(length):
    """Non-integer lengths (bool included) raise TypeError."""
    with pytest.raises(TypeError):
        generate_shortcode(length=length)


@pytest.mark.parametrize('length', [0, -1])
def test_invalid_length_value_raises_error(length):
    """Non-positive lengths raise ValueError."""
    with pytest.raises(ValueError):
        generate_shortcode(length=length)


def test_empty_alphabet_raises_error():
    """An empty alphabet raises ValueError."""
    with pytest.raises(ValueError):
        generate_shortcode(alphabet='')


# -------------------------------
# 5. Randomness sanity
# -------------------------------

def test_generate_shortcode_does_not_repeat():
    """1000 draws from 62^6 codes are expected to be distinct."""
    codes = {generate_shortcode() for _ in range(1000)}
    assert len(codes) == 1000


def test_generate_shortcode_covers_alphabet():
    """Every Base62 symbol shows up in a large enough sample."""
    seen = set(''.join(generate_shortcode() for _ in range(2000)))
    assert seen == set(string.ascii_letters + string.digits)


# -------------------------------
# 6. Performance sanity check
# -------------------------------

@pytest.mark.parametrize('iterations', [40, 400, 4000])
def test_generate_shortcode_performance(iterations):
    """Ensure the function runs efficiently for multiple iterations.

    NOTE: The system must be able to handle 40 link generations per second.
    """
    start = time.perf_counter()
    for _ in range(iterations):
        generate_shortcode()
    duration = time.perf_counter() - start
    assert duration < 1.0
