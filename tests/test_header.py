import random

import numpy as np
import pytest

from huffcodec.errors import CorruptHeaderError
from huffcodec.header import read_header, write_header
from huffcodec.huffman import ALPHABET_SIZE, EOS, count_frequencies


def test_write_header_literal_format():
    assert write_header(count_frequencies(b"aaab")) == b"3\n97 3\n98 1\n256 1\n"


def test_write_header_empty_input():
    assert write_header(count_frequencies(b"")) == b"1\n256 1\n"


def test_read_header_returns_offset_of_packed_section():
    data = b"3\n97 3\n98 1\n256 1\n\xe2\n"
    freqs, offset = read_header(data)
    assert offset == 18
    assert data[offset:] == b"\xe2\n"
    assert np.array_equal(freqs, count_frequencies(b"aaab"))


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_header_round_trip(seed):
    rng = random.Random(seed)
    freqs = np.zeros(ALPHABET_SIZE + 1, dtype=np.int64)
    for s in rng.sample(range(ALPHABET_SIZE + 1), rng.randint(1, ALPHABET_SIZE + 1)):
        freqs[s] = rng.choice([1, 2, 17, 1000, 2 ** 40])
    header = write_header(freqs)
    back, offset = read_header(header)
    assert offset == len(header)
    assert np.array_equal(back, freqs)


def test_zero_count_header_is_an_empty_table():
    freqs, offset = read_header(b"0\n")
    assert offset == 2
    assert freqs.sum() == 0


def test_sentinel_is_a_valid_symbol():
    freqs, _ = read_header(b"1\n256 1\n")
    assert freqs[EOS] == 1


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"3",
        b"x\n",
        b"-1\n",
        b" 1\n256 1\n",
        b"2\n97 3\n",
        b"2\n97 3\n98 1",
        b"1\n257 1\n",
        b"1\n97 0\n",
        b"1\n97  1\n",
        b"1\n-1 1\n",
        b"1\n97 1 \n",
        b"1\n97\n",
        b"2\n97 1\n97 2\n",
        b"300\n",
        b"1\n97 99999999999999999999\n",
        b"1\n97 9999999999999999999\n",
        b"9" * 5000 + b"\n",
        b"1\n" + b"9" * 5000 + b" 1\n\x00",
        b"1\n97 " + b"9" * 5000 + b"\n",
    ],
)
def test_corrupt_headers(data):
    with pytest.raises(CorruptHeaderError):
        read_header(data)


def test_largest_int64_frequency_is_accepted():
    freqs, _ = read_header(b"1\n97 9223372036854775807\n")
    assert freqs[97] == 2 ** 63 - 1
