"""
Huffman coding experiments: code quality and speed on synthetic data

Runs repeated experiments and records, per run, how close the Huffman code
gets to the entropy of the input and how long build/encode/decode take

Outputs (in --outdir):
  - metrics.csv     (raw row per run per configuration)
  - summary.csv     (grouped mean/stdev)
  - *.png           (charts, unless --no_plots)

How to run:
  python experiments.py --outdir results --runs 5
  python experiments.py --outdir results --runs 3 --exp1_size_kb 64 --exp2_max_kb 1024
  python experiments.py --outdir results --runs 5 --exp1_generators uniform256,zipf128,english_like
"""

from __future__ import annotations

import argparse
import bisect
import csv
import random
import statistics
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple, Optional

import matplotlib.pyplot as plt

import huffman as huff


# Utilities

def now_ns() -> int:
    return time.perf_counter_ns()

def ns_to_ms(ns: int) -> float:
    return ns / 1_000_000.0

def safe_mkdir(p: Path) -> None:
    p.mkdir(parents=True, exist_ok=True)


# Synthetic dataset generators

def _cdf(weights: Sequence[float]) -> List[float]:
    total = sum(weights)
    out = []
    acc = 0.0
    for w in weights:
        acc += w / total
        out.append(acc)
    out[-1] = 1.0 # guard against float drift on the last bucket
    return out

def _sample(cdf: List[float], size: int, rng: random.Random) -> List[int]:
    return [bisect.bisect_left(cdf, rng.random()) for _ in range(size)]

def gen_uniform(size: int, alphabet: int = 256, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    return bytes(rng.randrange(0, alphabet) for _ in range(size))

def gen_repetitive(size: int, dominant: int = ord('A'), dom_frac: float = 0.90, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    other_symbols = [i for i in range(256) if i != dominant]
    out = bytearray()
    for _ in range(size):
        if rng.random() < dom_frac:
            out.append(dominant)
        else:
            out.append(rng.choice(other_symbols))
    return bytes(out)

def gen_zipf_like(size: int, alphabet: int = 128, s: float = 1.2, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    cdf = _cdf([1.0 / ((i + 1) ** s) for i in range(alphabet)])
    return bytes(_sample(cdf, size, rng))

def gen_english_like(size: int, seed: int = 0) -> bytes:
    rng = random.Random(seed)
    chars = (
        " etaoinshrdlcumwfgypbvkjxq"
        "ETAOINSHRDLCUMWFGYPBVKJXQ"
        "\n"
    )
    weights = []
    for ch in chars:
        if ch == ' ':
            weights.append(13.0)
        elif ch == '\n':
            weights.append(1.5)
        elif ch.lower() in "etaoinshrdlu":
            weights.append(6.0)
        elif ch.lower() in "cmfwgypbvk":
            weights.append(2.5)
        else:
            weights.append(1.2)
    return bytes(ord(chars[i]) for i in _sample(_cdf(weights), size, rng))

def gen_single_symbol(size: int, symbol: int = ord('A')) -> bytes:
    return bytes([symbol]) * size

GENERATOR_REGISTRY: Dict[str, Callable[[int, int], bytes]] = {
    "uniform256": lambda size, seed: gen_uniform(size, alphabet=256, seed=seed),
    "uniform128": lambda size, seed: gen_uniform(size, alphabet=128, seed=seed),
    "zipf128": lambda size, seed: gen_zipf_like(size, alphabet=128, s=1.2, seed=seed),
    "zipf64": lambda size, seed: gen_zipf_like(size, alphabet=64, s=1.2, seed=seed),
    "repetitive90": lambda size, seed: gen_repetitive(size, dominant=ord('A'), dom_frac=0.90, seed=seed),
    "repetitive99": lambda size, seed: gen_repetitive(size, dominant=ord('A'), dom_frac=0.99, seed=seed),
    "english_like": lambda size, seed: gen_english_like(size, seed=seed),
    "single_symbol": lambda size, seed: gen_single_symbol(size),
}

def generate_dataset(name: str, size_bytes: int, seed: int) -> Tuple[str, bytes]:
    """
    Unknown dataset names fall back to uniform256 under a renamed
    dataset label, so one typo does not abort a long run
    """
    fn = GENERATOR_REGISTRY.get(name)
    if fn is None:
        return f"{name}_fallback_uniform256", gen_uniform(size_bytes, alphabet=256, seed=seed)
    return name, fn(size_bytes, seed)


# Experiment runner

@dataclass
class MetricRow:
    exp_name: str
    dataset_name: str
    file_size_bytes: int
    run_id: int
    unique_symbols: int

    build_ms: float
    encode_ms: float
    decode_ms: float
    total_ms: float

    encoded_bits: int
    avg_code_length: float
    entropy_bits: float
    efficiency: float        # entropy / average code length
    compression_ratio: float # encoded bits / (8 * input bytes)
    max_code_length: int
    correctness_ok: int  # 1 or 0


def run_one(data: bytes) -> MetricRow:
    ft = huff.count_frequencies(data)

    # Tree + code table
    t0 = now_ns()
    root = huff.build_tree(ft)
    code_table = huff.build_code_table(root)
    t1 = now_ns()
    build_ms = ns_to_ms(t1 - t0)

    # encode
    t2 = now_ns()
    bits = huff.encode(data, code_table)
    t3 = now_ns()
    encode_ms = ns_to_ms(t3 - t2)

    # decode
    t4 = now_ns()
    decoded = bytes(huff.decode(bits, root))
    t5 = now_ns()
    decode_ms = ns_to_ms(t5 - t4)

    avg_len = huff.average_code_length(code_table, ft)
    h = huff.entropy(ft)

    return MetricRow(
        exp_name="",
        dataset_name="",
        file_size_bytes=len(data),
        run_id=0,
        unique_symbols=len(code_table),
        build_ms=build_ms,
        encode_ms=encode_ms,
        decode_ms=decode_ms,
        total_ms=build_ms + encode_ms + decode_ms,
        encoded_bits=len(bits),
        avg_code_length=avg_len,
        entropy_bits=h,
        efficiency=(h / avg_len) if avg_len > 0 else 0.0,
        compression_ratio=len(bits) / max(1, 8 * len(data)),
        max_code_length=max(len(c) for c in code_table.values()),
        correctness_ok=1 if decoded == data else 0,
    )


def write_csv(path: Path, rows: List[MetricRow]) -> None:
    fields = list(MetricRow.__dataclass_fields__.keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fields)
        w.writeheader()
        for r in rows:
            w.writerow({k: getattr(r, k) for k in fields})


SUMMARIZED_FIELDS = (
    "avg_code_length", "entropy_bits", "efficiency", "compression_ratio",
    "build_ms", "encode_ms", "decode_ms", "total_ms",
)

def mean_stdev(vals: List[float]) -> Tuple[float, float]:
    if len(vals) == 1:
        return vals[0], 0.0
    return statistics.mean(vals), statistics.stdev(vals)

def group_summary(rows: List[MetricRow], out_path: Path) -> None:
    """
    Group by exp_name, dataset_name, file_size_bytes and compute mean/stdev
    """
    key_to: Dict[Tuple[str, str, int], List[MetricRow]] = {}
    for r in rows:
        key = (r.exp_name, r.dataset_name, r.file_size_bytes)
        key_to.setdefault(key, []).append(r)

    summary_fields = ["exp_name", "dataset_name", "file_size_bytes", "n_runs"]
    for name in SUMMARIZED_FIELDS:
        summary_fields += [f"{name}_mean", f"{name}_stdev"]
    summary_fields.append("correctness_ok_rate")

    with out_path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=summary_fields)
        w.writeheader()
        for key, items in sorted(key_to.items()):
            exp_name, dataset_name, size_b = key
            out = {
                "exp_name": exp_name,
                "dataset_name": dataset_name,
                "file_size_bytes": size_b,
                "n_runs": len(items),
            }
            for name in SUMMARIZED_FIELDS:
                m, s = mean_stdev([getattr(x, name) for x in items])
                out[f"{name}_mean"] = m
                out[f"{name}_stdev"] = s
            out["correctness_ok_rate"] = sum(x.correctness_ok for x in items) / len(items)
            w.writerow(out)


# Plotting

def plot_experiment_1(rows: List[MetricRow], outdir: Path) -> List[Path]:
    exp_rows = [r for r in rows if r.exp_name == "exp1_distribution"]
    if not exp_rows:
        return []

    datasets = sorted(set(r.dataset_name for r in exp_rows))

    def mean_for(dataset: str, field: str) -> float:
        vals = [getattr(r, field) for r in exp_rows if r.dataset_name == dataset]
        return statistics.mean(vals) if vals else float("nan")

    x = list(range(len(datasets)))
    written = []

    plt.figure()
    plt.plot(x, [mean_for(d, "avg_code_length") for d in datasets], marker="o", label="Huffman avg code length")
    plt.plot(x, [mean_for(d, "entropy_bits") for d in datasets], marker="s", label="Entropy")
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Bits per Symbol")
    plt.title("Experiment 1: Code Length vs Entropy by Distribution")
    plt.legend()
    plt.tight_layout()
    written.append(outdir / "exp1_code_length.png")
    plt.savefig(written[-1], dpi=200)
    plt.close()

    plt.figure()
    for field, label in (("encode_ms", "encode"), ("decode_ms", "decode")):
        plt.plot(x, [mean_for(d, field) for d in datasets], marker="o", label=label)
    plt.xticks(x, datasets, rotation=20, ha="right")
    plt.ylabel("Time (ms)")
    plt.title("Experiment 1: Encode/Decode Time by Distribution")
    plt.legend()
    plt.tight_layout()
    written.append(outdir / "exp1_time.png")
    plt.savefig(written[-1], dpi=200)
    plt.close()

    return written


def plot_experiment_2(rows: List[MetricRow], outdir: Path) -> List[Path]:
    exp_rows = [r for r in rows if r.exp_name == "exp2_size_scaling"]
    if not exp_rows:
        return []

    written = []
    for dist in sorted(set(r.dataset_name for r in exp_rows)):
        dist_rows = [r for r in exp_rows if r.dataset_name == dist]
        sizes = sorted(set(r.file_size_bytes for r in dist_rows))

        def mean_size(size: int, field: str) -> float:
            vals = [getattr(r, field) for r in dist_rows if r.file_size_bytes == size]
            return statistics.mean(vals) if vals else float("nan")

        plt.figure()
        for field, label in (("build_ms", "build"), ("encode_ms", "encode"), ("decode_ms", "decode")):
            plt.plot(sizes, [mean_size(s, field) for s in sizes], marker="o", label=label)
        plt.xlabel("Input Size (bytes)")
        plt.ylabel("Time (ms)")
        plt.title(f"Experiment 2: Time vs Size ({dist})")
        plt.legend()
        plt.tight_layout()
        written.append(outdir / f"exp2_time_{dist}.png")
        plt.savefig(written[-1], dpi=200)
        plt.close()

        plt.figure()
        plt.plot(sizes, [mean_size(s, "efficiency") for s in sizes], marker="o")
        plt.xlabel("Input Size (bytes)")
        plt.ylabel("Entropy / Avg Code Length")
        plt.title(f"Experiment 2: Code Efficiency vs Size ({dist})")
        plt.tight_layout()
        written.append(outdir / f"exp2_efficiency_{dist}.png")
        plt.savefig(written[-1], dpi=200)
        plt.close()

    return written


# Main

def parse_csv_list(s: str) -> List[str]:
    return [x.strip() for x in s.split(",") if x.strip()]

def power_of_two_sizes(min_bytes: int, max_bytes: int) -> List[int]:
    sizes: List[int] = []
    s = min_bytes
    while s <= max_bytes:
        sizes.append(s)
        s *= 2
    return sizes

def run_experiments(args: argparse.Namespace) -> List[MetricRow]:
    rows: List[MetricRow] = []

    # Experiment 1: distributions (fixed size)
    if not args.no_exp1:
        fixed_size = max(1, args.exp1_size_kb) * 1024
        for gen_name in parse_csv_list(args.exp1_generators):
            for run_id in range(1, args.runs + 1):
                dataset_name, data = generate_dataset(gen_name, fixed_size, args.seed + run_id)
                row = run_one(data)
                row.exp_name = "exp1_distribution"
                row.dataset_name = dataset_name
                row.run_id = run_id
                rows.append(row)

    # Experiment 2: size scaling (powers of 2)
    if not args.no_exp2:
        sizes = power_of_two_sizes(max(1, args.exp2_min_kb) * 1024, max(1, args.exp2_max_kb) * 1024)
        for gen_name in parse_csv_list(args.exp2_generators):
            for size_b in sizes:
                for run_id in range(1, args.runs + 1):
                    dataset_name, data = generate_dataset(gen_name, size_b, args.seed + 10_000 + size_b + run_id)
                    row = run_one(data)
                    row.exp_name = "exp2_size_scaling"
                    row.dataset_name = dataset_name
                    row.run_id = run_id
                    rows.append(row)

    return rows

def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Huffman coding experiments")
    ap.add_argument("--outdir", type=str, default="results", help="Output directory for CSV and plots")
    ap.add_argument("--runs", type=int, default=5, help="Repetitions per configuration (>=3 recommended for timing)")
    ap.add_argument("--seed", type=int, default=123, help="Base random seed")

    # Experiment toggles
    ap.add_argument("--no_exp1", action="store_true", help="Disable experiment 1 (distribution)")
    ap.add_argument("--no_exp2", action="store_true", help="Disable experiment 2 (size scaling)")
    ap.add_argument("--no_plots", action="store_true", help="Write CSV files only")

    # Experiment 1 controls
    ap.add_argument("--exp1_size_kb", type=int, default=256, help="Experiment 1 fixed input size in KB")
    ap.add_argument("--exp1_generators", type=str,
                    default="uniform256,zipf128,repetitive90,english_like,single_symbol",
                    help="Comma-separated dataset generator names for experiment 1")

    # Experiment 2 controls
    ap.add_argument("--exp2_min_kb", type=int, default=4, help="Experiment 2 min size in KB (power-of-two growth)")
    ap.add_argument("--exp2_max_kb", type=int, default=2048, help="Experiment 2 max size in KB (power-of-two growth)")
    ap.add_argument("--exp2_generators", type=str, default="uniform256,zipf128,repetitive90",
                    help="Comma-separated dataset generator names for experiment 2")
    return ap

def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.runs < 1:
        print("Error: --runs must be >= 1", file=sys.stderr)
        return 2

    outdir = Path(args.outdir)
    try:
        safe_mkdir(outdir)
        rows = run_experiments(args)

        metrics_csv = outdir / "metrics.csv"
        summary_csv = outdir / "summary.csv"
        write_csv(metrics_csv, rows)
        group_summary(rows, summary_csv)

        charts: List[Path] = []
        if not args.no_plots:
            charts += plot_experiment_1(rows, outdir)
            charts += plot_experiment_2(rows, outdir)
    except (huff.HuffmanError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    ok_rate = sum(r.correctness_ok for r in rows) / max(1, len(rows))
    print(f"Wrote {len(rows)} rows to {metrics_csv}")
    print(f"Wrote grouped summary to {summary_csv}")
    print(f"Correctness rate across all runs: {ok_rate:.3f}")
    if charts:
        print(f"{len(charts)} charts saved in:", outdir.resolve())
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
