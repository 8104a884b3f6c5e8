class KmerError(ValueError):
    """Base class for errors raised while counting k-mers."""


class KmerLengthTooSmall(KmerError):
    def __init__(self, k: int):
        self.k = k
        super().__init__(
            f"No valid kmers. kmer length is {k}, but must be 1 or greater"
        )


class KmerLengthTooLong(KmerError):
    def __init__(self, k: int, seq_len: int):
        self.k = k
        self.seq_len = seq_len
        super().__init__(
            f"No valid kmers. Sequence length {seq_len} is smaller than "
            f"requested kmer length {k}"
        )


class IncorrectBases(KmerError):
    """Raised as an advisory; counting continues with the literal bytes."""

    def __init__(self, bases: str):
        self.bases = bases
        super().__init__(f"Suspect base(s) found: {bases!r}. Use only ATCG bases")
