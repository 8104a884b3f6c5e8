import inspect

import pytest

from kmer_count import (
    IncorrectBases,
    KmerLengthTooLong,
    KmerLengthTooSmall,
    KmerRecord,
    aggregate_kmers,
    check_bases,
    count_kmers,
    incorrect_bases,
    kmers,
    rank_kmers,
)


def records_from_tuples(items):
    return [KmerRecord(seq=seq, count=count) for seq, count in items]


def test_kmers_basic():
    """Test windows of every length over a short sequence."""
    assert list(kmers(b"ABCD", 1)) == [b"A", b"B", b"C", b"D"]
    assert list(kmers(b"ABCD", 2)) == [b"AB", b"BC", b"CD"]
    assert list(kmers(b"ABCD", 3)) == [b"ABC", b"BCD"]
    assert list(kmers(b"ABCD", 4)) == [b"ABCD"]


@pytest.mark.parametrize("k", [1, 2, 5, 17, 40])
def test_window_count_and_length(k):
    """Test that there are len - k + 1 windows, all of length k."""
    sequence = b"ATCGGATCGATTACAGGCATTAGCAATCGGCTAGCTAGGA"
    windows = list(kmers(sequence, k))
    assert len(windows) == len(sequence) - k + 1
    assert all(len(window) == k for window in windows)


def test_kmers_is_single_use():
    """Test that a window iterator is exhausted after one pass."""
    windows = kmers(b"ATCG", 2)
    assert list(windows) == [b"AT", b"TC", b"CG"]
    assert list(windows) == []
    assert list(kmers(b"ATCG", 2)) == [b"AT", b"TC", b"CG"]


@pytest.mark.parametrize("sequence", [b"ABCD", b"", b"A"])
def test_kmer_0(sequence):
    """Test that k = 0 is rejected for any sequence, including the empty one."""
    with pytest.raises(KmerLengthTooSmall) as excinfo:
        kmers(sequence, 0)
    assert excinfo.value.k == 0


def test_negative_k():
    """Test that negative lengths are treated like k = 0."""
    with pytest.raises(KmerLengthTooSmall):
        kmers(b"ATCG", -3)


def test_kmer_k_too_big():
    """Test that k larger than the sequence is rejected eagerly."""
    with pytest.raises(KmerLengthTooLong) as excinfo:
        kmers(b"ABC", 10)
    assert excinfo.value.k == 10
    assert excinfo.value.seq_len == 3
    assert "Sequence length 3 is smaller than requested kmer length 10" in str(
        excinfo.value
    )


def test_kmer_empty_string():
    """Test that the empty sequence is too short for any positive k."""
    with pytest.raises(KmerLengthTooLong) as excinfo:
        kmers(b"", 10)
    assert excinfo.value.seq_len == 0
    with pytest.raises(KmerLengthTooLong):
        kmers(b"", 1)


def test_count_kmers():
    """Test ranking with ties broken alphabetically."""
    expected = records_from_tuples([
        (b"ATC", 2),
        (b"TCG", 2),
        (b"CGG", 1),
        (b"GAT", 1),
        (b"GGA", 1),
    ])
    assert count_kmers(b"ATCGGATCG", 3) == expected


def test_count_kmers_all_equal():
    """Test that equal counts come out in alphabetical order."""
    expected = records_from_tuples([(b"A", 1), (b"B", 1), (b"C", 1), (b"D", 1)])
    assert count_kmers(b"DCBA", 1) == expected
    assert count_kmers(b"ABCD", 1) == expected


def test_count_kmers_sum_of_counts():
    """Test that counts add up to the number of windows."""
    sequence = b"GATTACAGATTACAGATTACA"
    for k in range(1, len(sequence) + 1):
        ranked = count_kmers(sequence, k)
        assert sum(record.count for record in ranked) == len(sequence) - k + 1
        assert len({record.seq for record in ranked}) == len(ranked)


def test_count_kmers_order_invariant():
    """Test that adjacent entries are ordered by count then sequence."""
    ranked = count_kmers(b"AAAAATTTTCCCGGATATATCGCGCG", 2)
    for a, b in zip(ranked, ranked[1:]):
        assert a.count > b.count or (a.count == b.count and a.seq < b.seq)


def test_count_kmers_reproducible():
    """Test that repeated runs give identical output."""
    sequence = b"TTGACCATGGTACCAGTTTGACCA"
    assert count_kmers(sequence, 4) == count_kmers(sequence, 4)


def test_count_kmers_propagates_errors():
    """Test that length errors surface from count_kmers without a result."""
    with pytest.raises(KmerLengthTooSmall):
        count_kmers(b"ATCG", 0)
    with pytest.raises(KmerLengthTooLong):
        count_kmers(b"ATCG", 5)


def test_count_kmers_uses_literal_bases():
    """Test that non-ATCG symbols are counted as ordinary symbols."""
    assert count_kmers(b"ATCNTTZ", 2) == records_from_tuples([
        (b"AT", 1),
        (b"CN", 1),
        (b"NT", 1),
        (b"TC", 1),
        (b"TT", 1),
        (b"TZ", 1),
    ])


def test_aggregate_kmers():
    """Test aggregation by content rather than position."""
    assert aggregate_kmers([b"AT", b"TA", b"AT"]) == {b"AT": 2, b"TA": 1}
    assert aggregate_kmers([]) == {}


def test_rank_kmers_ignores_insertion_order():
    """Test that the ranked list does not depend on mapping order."""
    forward = {b"GG": 1, b"AA": 3, b"CC": 1, b"TT": 3}
    backward = dict(reversed(list(forward.items())))
    expected = records_from_tuples([(b"AA", 3), (b"TT", 3), (b"CC", 1), (b"GG", 1)])
    assert rank_kmers(forward) == expected
    assert rank_kmers(backward) == expected
    assert rank_kmers({}) == []


def test_check_bases_success():
    """Test that a clean sequence passes validation."""
    assert check_bases(b"ATCGATGCAAA") is None
    assert check_bases(b"") is None
    assert incorrect_bases(b"ATCGATGCAAA") == b""


def test_check_bases_bad_base():
    """Test that each offending symbol is reported once."""
    with pytest.raises(IncorrectBases) as excinfo:
        check_bases(b"ATCNTTZ")
    assert excinfo.value.bases == "NZ"
    assert "Suspect base(s) found: 'NZ'" in str(excinfo.value)

    assert incorrect_bases(b"NNATZNZ") == b"NZ"


@pytest.mark.parametrize("sequence", [bytearray(b"ATCG"), "ATCG", memoryview(b"ATCG")])
def test_sequence_must_be_bytes(sequence):
    """Test that only bytes sequences are accepted."""
    with pytest.raises(TypeError):
        kmers(sequence, 2)
    with pytest.raises(TypeError):
        incorrect_bases(sequence)
    with pytest.raises(TypeError):
        count_kmers(sequence, 2)


def test_counting_module_is_reachable():
    """Test that the package exports do not hide the counting module."""
    import kmer_count
    from kmer_count import counting

    assert inspect.ismodule(counting)
    assert kmer_count.kmers is counting.kmers
    assert list(counting.kmers(b"ATC", 2)) == [b"AT", b"TC"]


def test_check_bases_is_case_sensitive():
    """Test that lowercase bases are not normalized."""
    assert incorrect_bases(b"ATcgA") == b"cg"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
