from .errors import (
    IncorrectBases,
    KmerError,
    KmerLengthTooLong,
    KmerLengthTooSmall,
)
from .io import (
    FastAReader,
    find_files_with_extensions,
    output_path_from_input,
    read_kmer_tables,
    write_kmer_table,
)
from .counting import (
    aggregate_kmers,
    check_bases,
    count_kmers,
    incorrect_bases,
    kmers,
    rank_kmers,
)
from .types import CountSummary, FastaRecord, KmerRecord
