import concurrent.futures
import subprocess
import sys
import time
from pathlib import Path

from .counting import check_bases, count_kmers
from .errors import IncorrectBases, KmerLengthTooLong, KmerLengthTooSmall
from .io import (
    TABLE_ENCODING,
    FastAReader,
    find_files_with_extensions,
    output_path_from_input,
    write_kmer_table,
)
from .types import CountSummary


def run_fasta_kmer_count(fasta_path: Path, k: int, output_path: Path) -> CountSummary:
    """
    Count k-mers for every record of a FASTA file and write one table per record.

    Records that cannot be counted are reported on stderr and skipped; the
    remaining records are still written. Tables are written to a sibling
    ``.part`` file that replaces output_path only once the whole input has
    been read, so an unreadable input leaves any existing output untouched.
    """
    summary = CountSummary()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    partial_path = output_path.with_name(output_path.name + ".part")
    try:
        with FastAReader(fasta_path) as reader, partial_path.open(
            "w", newline="", encoding=TABLE_ENCODING
        ) as handle:
            for record in reader:
                summary.records += 1
                try:
                    check_bases(record.sequence)
                except IncorrectBases as exc:
                    summary.warned += 1
                    print(f"WARNING: {record.description}: {exc}", file=sys.stderr)

                try:
                    ranked = count_kmers(record.sequence, k)
                except (KmerLengthTooSmall, KmerLengthTooLong) as exc:
                    summary.skipped += 1
                    print(
                        f"ERROR: skipping record {record.description!r} in {fasta_path}: {exc}",
                        file=sys.stderr,
                    )
                    continue

                write_kmer_table(handle, record.description, ranked)
                summary.counted += 1
    except BaseException:
        partial_path.unlink(missing_ok=True)
        raise

    partial_path.replace(output_path)
    return summary


def report_summary(fasta_path: Path, summary: CountSummary) -> None:
    print(
        f"{fasta_path}: counted {summary.counted:,} of {summary.records:,} records "
        f"({summary.skipped:,} skipped, {summary.warned:,} with suspect bases)."
    )


def run_count(args) -> None:
    """Count k-mers in a single FASTA file."""
    start = time.time()
    fasta_path = Path(args.fasta)
    output_path = Path(args.output)
    if not args.quiet:
        print(f"Counting kmers in {fasta_path}. Output to {output_path}")

    summary = run_fasta_kmer_count(fasta_path, args.k, output_path)

    if not args.quiet:
        report_summary(fasta_path, summary)
        print(f"Time elapsed: {time.time() - start:.2g} seconds")


def run_count_dir(args) -> None:
    """Count k-mers in every FASTA file of a directory."""
    start = time.time()
    if args.workers < 1:
        raise ValueError(f"--workers must be at least 1, got {args.workers}")

    input_root = Path(args.directory).resolve()
    output_root = Path(args.output_root)
    fasta_paths = find_files_with_extensions(input_root, args.extensions)
    if not fasta_paths:
        if not args.quiet:
            print(f"No files with extensions {args.extensions} found in {input_root}.")
        return

    jobs = [
        (fasta_path, output_path_from_input(fasta_path, input_root, output_root))
        for fasta_path in fasta_paths
    ]

    if args.workers == 1:
        for fasta_path, output_path in jobs:
            if not args.quiet:
                print(f"Counting kmers in {fasta_path}. Output to {output_path}")
            summary = run_fasta_kmer_count(fasta_path, args.k, output_path)
            if not args.quiet:
                report_summary(fasta_path, summary)
    else:
        def launch_file(fasta_path: Path, output_path: Path) -> None:
            cmd = [sys.executable, "-m", "kmer_count"]
            if args.quiet:
                cmd.append("--quiet")
            cmd += [
                "count",
                "--fasta", str(fasta_path),
                "--output", str(output_path),
                "-k", str(args.k),
            ]
            subprocess.run(cmd, check=True)

        with concurrent.futures.ThreadPoolExecutor(max_workers=args.workers) as executor:
            future_to_path = {
                executor.submit(launch_file, fasta_path, output_path): fasta_path
                for fasta_path, output_path in jobs
            }
            for future in concurrent.futures.as_completed(future_to_path):
                fasta_path = future_to_path[future]
                try:
                    future.result()
                except Exception as exc:  # noqa: BLE001
                    raise RuntimeError(
                        f"count command failed for {fasta_path}"
                    ) from exc

    if not args.quiet:
        print(f"Processed {len(jobs):,} FASTA files with {args.workers} workers.")
        print(f"Time elapsed: {time.time() - start:.2g} seconds")
