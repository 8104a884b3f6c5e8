import argparse

from .cmd import run_count, run_count_dir


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kmer_count",
        description="Count frequency of all kmers for all records in FASTA files",
    )
    parser.add_argument(
        "--quiet", "-q", action="store_true", help="Only print warnings and errors"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    count_parser = subparsers.add_parser(
        "count", help="Count kmers in a single FASTA file"
    )
    count_parser.add_argument("--fasta", "-i", required=True, help="Input FASTA file")
    count_parser.add_argument(
        "--output", "-o", required=True, help="Output TSV for kmer counts"
    )
    count_parser.add_argument("-k", type=int, required=True, help="Length of kmer")
    count_parser.set_defaults(func=run_count)

    count_dir_parser = subparsers.add_parser(
        "count-dir", help="Count kmers in every FASTA file of a directory"
    )
    count_dir_parser.add_argument(
        "directory", nargs="?", default=".", help="Input directory"
    )
    count_dir_parser.add_argument(
        "output_root", nargs="?", default="./output", help="Output directory root"
    )
    count_dir_parser.add_argument("-k", type=int, required=True, help="Length of kmer")
    count_dir_parser.add_argument(
        "--extensions",
        "-e",
        nargs="+",
        default=["fa", "fasta"],
        help="Input file extensions to find",
    )
    count_dir_parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Number of FASTA files to count in parallel",
    )
    count_dir_parser.set_defaults(func=run_count_dir)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
