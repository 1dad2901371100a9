#!/usr/bin/env python3
"""
Compression ratio benchmarking for the 16-bit LZW compressor.

Benchmarks the generated data sets (see generate_test_data.py), or the files
given on the command line:

    python3 benchmark_compression_ratios.py
    python3 benchmark_compression_ratios.py some.tar other.bmp
"""

import os
import sys
import time

import lzw16
from generate_test_data import DATASETS

def format_size(size_bytes):
    """Format size in human-readable format."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.2f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.2f} MB"

def measure(data):
    """
    Compress and decompress data in memory.
    Returns: dict with original/compressed size, ratio (% of original),
    number of codes, whether the dictionary filled up, and time taken.
    """
    start_time = time.time()
    encoder = lzw16.Encoder()
    codes = encoder.encode(data)
    compressed = lzw16.pack_codes(codes)
    elapsed = time.time() - start_time

    if lzw16.decompress_bytes(compressed) != bytes(data):
        raise AssertionError("round trip mismatch")

    original_size = len(data)
    return {
        'original_size': original_size,
        'size': len(compressed),
        'ratio': (len(compressed) / original_size * 100) if original_size > 0 else 0,
        'codes': len(codes),
        'full': encoder.table.full,
        'time': elapsed,
    }

def run_benchmark(datasets):
    """Measure every (name, data) pair and print one line each. Returns results."""
    results = {}
    for name, data in datasets:
        print(f"  {name}...", end=' ', flush=True)
        result = measure(data)
        results[name] = result
        frozen = " [dictionary full]" if result['full'] else ""
        print(f"{format_size(result['original_size'])} -> {format_size(result['size'])} "
              f"({result['ratio']:.2f}%) in {result['time']:.2f}s{frozen}")
    return results

def print_comparison_table(results):
    """Print a markdown table of the results."""
    print("| data set | original | compressed | ratio | codes |")
    print("|----------|----------|------------|-------|-------|")
    for name, result in results.items():
        print(f"| {name} | {format_size(result['original_size'])} | "
              f"{format_size(result['size'])} | {result['ratio']:.2f}% | {result['codes']:,} |")
    print()

def load_files(paths):
    for path in paths:
        if not os.path.exists(path):
            print(f"Skipping {path}: not found")
            continue
        with open(path, 'rb') as f:
            yield os.path.basename(path), f.read()

def main(argv=None):
    """Main benchmark runner."""
    paths = sys.argv[1:] if argv is None else argv

    print("LZW16 Compression Ratio Benchmark")
    print("="*80)

    if paths:
        datasets = load_files(paths)
    else:
        datasets = ((name, generate()) for name, generate in DATASETS.items())

    results = run_benchmark(datasets)

    print("\n" + "="*80)
    print("SUMMARY TABLE (Markdown Format)")
    print("="*80)
    print_comparison_table(results)
    return results

if __name__ == '__main__':
    main()
