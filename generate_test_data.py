#!/usr/bin/env python3
"""Generate test data sets for benchmarking the 16-bit LZW compressor."""

import random
import os

def repeated_run(length=100000, byte=0x41):
    """A run of one byte value ('AAAA...'): the best case for LZW."""
    return bytes([byte]) * length

def repeated_pattern(pattern=b'ab', repetitions=250000):
    """A short pattern repeated many times."""
    return pattern * repetitions

def cycling_bytes(length=70000):
    """Bytes cycling 0, 1, ..., 255, 0, 1, ... - every base symbol in turn."""
    return bytes(i % 256 for i in range(length))

def random_bytes(length=500000, seed=0):
    """Incompressible data. Fills the dictionary after roughly 130k bytes."""
    rng = random.Random(seed)
    return bytes(rng.getrandbits(8) for _ in range(length))

def text_like(words=100000, seed=0):
    """Space-separated words drawn from a small vocabulary, like prose."""
    rng = random.Random(seed)
    vocabulary = ['the', 'of', 'and', 'compression', 'dictionary', 'code',
                  'string', 'table', 'a', 'to', 'in', 'is', 'entry', 'byte']
    return ' '.join(rng.choice(vocabulary) for _ in range(words)).encode('ascii')

DATASETS = {
    'run_100k.bin': repeated_run,
    'ab_repeat_250k.txt': repeated_pattern,
    'cycling_70k.bin': cycling_bytes,
    'random_500k.bin': random_bytes,
    'words_100k.txt': text_like,
}

def write_dataset(output_file, data):
    """Write one data set and report its size."""
    print(f"Generating {output_file}...")
    with open(output_file, 'wb') as f:
        f.write(data)
    size = os.path.getsize(output_file)
    print(f"  Created: {size:,} bytes ({size / 1024:.2f} KB)")

def main(output_dir='test_data'):
    """Generate all test data files."""
    os.makedirs(output_dir, exist_ok=True)

    for name, generate in DATASETS.items():
        write_dataset(os.path.join(output_dir, name), generate())

    print("\nTest data generation complete!")

if __name__ == '__main__':
    main()
