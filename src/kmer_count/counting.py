"""
Sliding-window k-mer counting.

This module is compiled with Cython by setup.py; it is kept as plain Python
so the package also imports from a source checkout.
"""
from typing import Iterable, Iterator, Mapping

from .errors import IncorrectBases, KmerLengthTooLong, KmerLengthTooSmall
from .types import KmerRecord

VALID_BASES = b"ATCG"


def kmers(sequence: bytes, k: int) -> Iterator[bytes]:
    """
    Return a lazy iterator over every length-k window of sequence.

    The arguments are checked before the iterator is created, so errors are
    raised by this call rather than on first iteration.

    :param sequence: Sequence of single-byte symbols; must be bytes.
    :param k: Window length.
    :raises TypeError: If sequence is not bytes.
    :raises KmerLengthTooSmall: If k is smaller than 1.
    :raises KmerLengthTooLong: If k is larger than the sequence.
    """
    _require_bytes(sequence)
    if k < 1:
        raise KmerLengthTooSmall(k)
    if len(sequence) < k:
        raise KmerLengthTooLong(k, len(sequence))
    return _windows(sequence, k)


def _require_bytes(sequence) -> None:
    # Same check the compiled build applies to the bytes annotation.
    if not isinstance(sequence, bytes):
        raise TypeError(
            f"sequence must be bytes, not {type(sequence).__name__}"
        )


def _windows(sequence: bytes, k: int) -> Iterator[bytes]:
    for start in range(len(sequence) - k + 1):
        yield sequence[start:start + k]


def incorrect_bases(sequence: bytes) -> bytes:
    """Return the distinct non-ATCG symbols of sequence in order of first occurrence."""
    _require_bytes(sequence)
    invalid = sequence.translate(None, VALID_BASES)
    return bytes(dict.fromkeys(invalid))


def check_bases(sequence: bytes) -> None:
    """Raise IncorrectBases if sequence holds anything other than A, T, C or G."""
    bases = incorrect_bases(sequence)
    if bases:
        raise IncorrectBases(bases.decode("latin-1"))


def aggregate_kmers(windows: Iterable[bytes]) -> dict[bytes, int]:
    """Count occurrences of each distinct window."""
    counts: dict[bytes, int] = {}
    for kmer in windows:
        counts[kmer] = counts.get(kmer, 0) + 1
    return counts


def rank_kmers(counts: Mapping[bytes, int]) -> list[KmerRecord]:
    """Order k-mers by descending count, breaking ties alphabetically."""
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [KmerRecord(seq=seq, count=count) for seq, count in ordered]


def count_kmers(sequence: bytes, k: int) -> list[KmerRecord]:
    """Return the frequency of every k-mer in sequence, most abundant first."""
    return rank_kmers(aggregate_kmers(kmers(sequence, k)))
