import csv
from pathlib import Path
from typing import Iterable, Sequence, TextIO

from .types import FastaRecord, KmerRecord

# Every byte maps to exactly one character, so k-mers round-trip unchanged.
TABLE_ENCODING = "latin-1"
TABLE_HEADER = ["kmer", "count"]
RECORD_MARKER = ">"


class FastAReader:
    """
    A simple FASTA file reader that yields records.

    Sequences may be wrapped over several lines; whitespace inside sequence
    lines is dropped.
    """
    def __init__(self, fasta_file: str | Path):
        self.fasta_file = fasta_file
        self.total = 0

    def __iter__(self):
        description = None
        chunks: list[bytes] = []
        with open(self.fasta_file, 'rb') as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                if line.startswith(b">"):
                    if description is not None:
                        self.total += 1
                        yield FastaRecord(description, b"".join(chunks))
                    description = line[1:].strip().decode(TABLE_ENCODING)
                    chunks = []
                    continue
                if description is None:
                    raise ValueError(
                        f"Unexpected FASTA structure in {self.fasta_file}: "
                        "sequence data before the first header"
                    )
                chunks.append(b"".join(line.split()))

        if description is not None:
            self.total += 1
            yield FastaRecord(description, b"".join(chunks))

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        pass


def write_kmer_table(
    handle: TextIO, description: str, records: Sequence[KmerRecord]
) -> None:
    """Append the ranked k-mer table of one record to an open text handle."""
    # Write a marker line naming the record
    handle.write(f"{RECORD_MARKER}{description}\n")

    writer = csv.writer(
        handle,
        delimiter="\t",
        lineterminator="\n",
        quoting=csv.QUOTE_NONE,
        quotechar=None,
    )
    writer.writerow(TABLE_HEADER)
    for record in records:
        writer.writerow([record.seq.decode(TABLE_ENCODING), str(record.count)])


def read_kmer_tables(path: Path) -> list[tuple[str, list[KmerRecord]]]:
    """
    Load every table written by write_kmer_table, keyed by record description.

    A line is a record marker only when the column header follows it; k-mers
    may themselves start with the marker character, but a data row is never
    followed by the header.
    """
    with path.open("r", newline="", encoding=TABLE_ENCODING) as handle:
        reader = csv.reader(handle, delimiter="\t", quoting=csv.QUOTE_NONE)
        rows = [row for row in reader if row]

    def starts_table(index: int) -> bool:
        return index + 1 < len(rows) and rows[index + 1] == TABLE_HEADER

    tables: list[tuple[str, list[KmerRecord]]] = []
    index = 0
    while index < len(rows):
        marker = rows[index]
        if not starts_table(index) or not marker[0].startswith(RECORD_MARKER):
            raise ValueError(f"Missing header in {path}: {marker}")
        description = "\t".join(marker)[len(RECORD_MARKER):]
        records: list[KmerRecord] = []
        tables.append((description, records))
        index += 2

        while index < len(rows) and not starts_table(index):
            row = rows[index]
            if len(row) != 2:
                raise ValueError(f"Malformed row in {path}: {row}")
            records.append(
                KmerRecord(seq=row[0].encode(TABLE_ENCODING), count=int(row[1]))
            )
            index += 1

    return tables


def find_files_with_extensions(
    directory: Path, extensions: Iterable[str]
) -> list[Path]:
    """Return files directly inside directory whose extension is one of extensions."""
    wanted = {extension.lstrip(".") for extension in extensions}
    files: list[Path] = []
    for candidate in directory.iterdir():
        path = candidate.resolve()
        if path.is_file() and path.suffix[1:] in wanted:
            files.append(path)
    return sorted(files)


def output_path_from_input(
    input_path: Path, input_root: Path, output_root: Path
) -> Path:
    """Derive the table path for input_path, mirroring its place under input_root."""
    path_stub = input_path.relative_to(input_root)
    return output_root / path_stub.parent / f"{input_path.stem}_kmer.txt"
