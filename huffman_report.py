"""
Text report: Huffman-code a text file and write the code listing,
the encoded bit-string and the decoded text to an output file

How to run:
  python huffman_report.py --input input.txt --output output.txt
  python huffman_report.py --input notes.txt --output notes_report.txt --encoding cp1251 --stats
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence

import huffman as huff


CODES_HEADING = "--- Symbol codes ---"
ENCODED_HEADING = "--- Encoded text ---"
DECODED_HEADING = "--- Decoded text ---"

_ESCAPES: Dict[str, str] = {
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def format_symbol(symbol: str) -> str:
    return "'" + _ESCAPES.get(symbol, symbol) + "'"


def format_code_table(code_table: Mapping[str, str]) -> List[str]:
    # Listing is ordered by code point, not by code
    return [f"{format_symbol(s)}: {code_table[s]}" for s in sorted(code_table)]


def build_codes(text: str):
    """
    Count the text's symbols and build the tree and code table once,
    so the report and the statistics share them
    """
    frequencies = huff.count_frequencies(text)
    root = huff.build_tree(frequencies)
    return frequencies, root, huff.build_code_table(root)


def format_report(text: str, root, code_table: Mapping[str, str]) -> str:
    encoded = huff.encode(text, code_table)
    decoded = "".join(huff.decode(encoded, root))

    lines = [CODES_HEADING]
    lines.extend(format_code_table(code_table))
    lines += ["", ENCODED_HEADING, encoded, "", DECODED_HEADING, decoded]
    return "\n".join(lines)


def render_report(text: str) -> str:
    _, root, code_table = build_codes(text)
    return format_report(text, root, code_table)


def report_stats(frequencies: Mapping[str, int], code_table: Mapping[str, str]) -> Dict[str, float]:
    return {
        "symbols": sum(frequencies.values()),
        "unique_symbols": len(code_table),
        "encoded_bits": sum(len(code_table[s]) * n for s, n in frequencies.items()),
        "avg_code_length": huff.average_code_length(code_table, frequencies),
        "entropy": huff.entropy(frequencies),
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Huffman-code a text file and write a report")
    ap.add_argument("--input", type=str, default="input.txt", help="Text file to encode")
    ap.add_argument("--output", type=str, default="output.txt", help="Where to write the report")
    ap.add_argument("--encoding", type=str, default="utf-8", help="Text encoding of input and output files")
    ap.add_argument("--stats", action="store_true", help="Print code length statistics to stdout")
    args = ap.parse_args(argv)

    in_path = Path(args.input)
    out_path = Path(args.output)

    try:
        text = in_path.read_text(encoding=args.encoding)
        frequencies, root, code_table = build_codes(text)
        out_path.write_text(format_report(text, root, code_table), encoding=args.encoding)
    except huff.EmptyAlphabetError:
        print(f"Nothing to encode: {in_path} is empty", file=sys.stderr)
        return 1
    except (huff.HuffmanError, OSError, UnicodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Wrote report for {len(text)} symbols to {out_path}")
    if args.stats:
        stats = report_stats(frequencies, code_table)
        print(f"Unique symbols: {stats['unique_symbols']}")
        print(f"Encoded length: {stats['encoded_bits']} bits")
        print(f"Average code length: {stats['avg_code_length']:.4f} bits/symbol")
        print(f"Entropy: {stats['entropy']:.4f} bits/symbol")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
