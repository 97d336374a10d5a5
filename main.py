"""
Command line entry point: flatten JSON records into form-encoded lines.
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, Iterator, List, Optional
from urllib.parse import urlencode

from tqdm import tqdm

import config
from formencoder.adapters import from_json_record
from formencoder.errors import FormEncoderError
from formencoder.form_encoder import Encoder

logger = logging.getLogger(__name__)


def configure_logging(log_file: Optional[str] = None):
    """Log to a file and stderr, leaving stdout for encoded output."""
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file or config.LOG_FILE),
            logging.StreamHandler(sys.stderr)
        ]
    )


def load_records(path: Path) -> Iterator[Dict]:
    """
    Read records from a JSON array file or a JSON-lines file.

    Args:
        path: Input file

    Yields:
        Decoded records in file order
    """
    with open(path, 'r', encoding='utf-8') as f:
        text = f.read()

    if text.lstrip().startswith('['):
        try:
            records = json.loads(text)
        except json.JSONDecodeError:
            # A JSON-lines file whose first record is an array
            records = None
        if records is not None:
            yield from records
            return

    for line_num, line in enumerate(text.splitlines(), 1):
        if not line.strip():
            continue
        try:
            yield json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Skipping line {line_num}: {e}")


def encode_records(encoder: Encoder, records: List[Dict], debug: bool = False) -> Iterator[Optional[str]]:
    """
    Encode each record, yielding its output text or None when it fails.
    """
    for index, record in enumerate(tqdm(records, desc="Encoding", unit="records")):
        try:
            root = from_json_record(record)
            if debug:
                yield "\n".join(encoder.debug_lines(root))
            else:
                yield urlencode(encoder.encode(root))
        except FormEncoderError as e:
            logger.error(f"Failed to encode record {index}: {e}")
            yield None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Flatten JSON records into HTTP form key/value pairs."
    )
    parser.add_argument("input", type=Path, help="JSON array or JSON-lines file")
    parser.add_argument("-o", "--output", type=Path, help="Output file (default: stdout)")
    parser.add_argument("--debug", action="store_true", help="Print aligned key : value listings")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = build_parser().parse_args(argv)
    configure_logging()

    if not args.input.exists():
        logger.error(f"Input file not found at {args.input}")
        return 1

    try:
        encoder = Encoder.default()
    except FormEncoderError as e:
        logger.error(f"Invalid encoder configuration: {e}")
        return 1

    records = list(load_records(args.input))
    logger.info(f"Loaded {len(records)} records from {args.input}")

    failed = 0
    lines = []
    for text in encode_records(encoder, records, debug=args.debug):
        if text is None:
            failed += 1
            continue
        lines.append(text)

    output = "\n".join(lines) + ("\n" if lines else "")
    if args.output:
        args.output.write_text(output, encoding='utf-8')
        logger.info(f"Output file: {args.output}")
    else:
        sys.stdout.write(output)

    logger.info(f"Encoded {len(lines)} records, {failed} failed")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
