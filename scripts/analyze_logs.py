import argparse
from pathlib import Path

from streamlog.summary import summarize

LOG_DIRECTORY_PATH = Path("logs/")
REPORTS_DIR = Path("reports")


def main():
    parser = argparse.ArgumentParser(description="Summarize streamlog files")
    parser.add_argument("--logs", type=Path, default=LOG_DIRECTORY_PATH, help="Directory holding *.log files")
    parser.add_argument("--reports", type=Path, default=REPORTS_DIR, help="Where latency_summary.txt is written")
    args = parser.parse_args()

    log_files = sorted(p for p in args.logs.iterdir() if p.is_file() and p.suffix == ".log")
    summary = summarize(log_files)

    args.reports.mkdir(parents=True, exist_ok=True)
    text = "\n".join(summary.to_lines()) + "\n"
    with args.reports.joinpath("latency_summary.txt").open("w") as file:
        file.write(text)
    print(text, end="")


if __name__ == "__main__":
    main()
