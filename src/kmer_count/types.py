from dataclasses import dataclass


@dataclass(slots=True, frozen=True)
class KmerRecord:
    """A distinct k-mer and the number of windows it occurred in."""
    seq: bytes
    count: int


@dataclass(slots=True, frozen=True)
class FastaRecord:
    """Represents one named sequence from a FASTA file."""
    description: str
    sequence: bytes


@dataclass(slots=True)
class CountSummary:
    """Per-file totals reported after counting."""
    records: int = 0
    counted: int = 0
    skipped: int = 0
    warned: int = 0
