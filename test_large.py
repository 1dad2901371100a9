#!/usr/bin/env python3
"""Test with large inputs: dictionary saturation (freeze) and compression ratios"""

import pytest

import lzw16
from lzw16 import Encoder, Decoder, CorruptCodeError, NUM_CODES
import generate_test_data
import benchmark_compression_ratios

def test_cycling_70k_round_trip():
    data = generate_test_data.cycling_bytes(70000)
    codes = lzw16.encode(data)
    assert lzw16.decode(codes) == data
    assert len(codes) < len(data)

def test_dictionary_fills_and_freezes():
    data = generate_test_data.random_bytes(200000, seed=11)

    encoder = Encoder()
    codes = encoder.encode(data)
    assert encoder.table.full
    assert len(encoder.table) == NUM_CODES
    assert max(codes) < NUM_CODES

    decoder = Decoder()
    assert decoder.decode(codes) == data
    assert len(decoder.table) == NUM_CODES
    assert decoder.table.strings == encoder.table.strings

def test_frozen_dictionary_still_matches_known_strings():
    # Fill the table with random data, then repeat the tail: the repeat is
    # coded with entries defined before the freeze
    head = generate_test_data.random_bytes(150000, seed=5)
    data = head + head[:20000]

    encoder = Encoder()
    codes = encoder.encode(data)
    assert encoder.table.full
    assert lzw16.decode(codes) == data

def test_next_code_is_corrupt_once_full():
    data = generate_test_data.random_bytes(150000, seed=8)
    codes = lzw16.encode(data)

    # With a full table there is no pending code left to define
    with pytest.raises(CorruptCodeError) as info:
        lzw16.decode(codes + [NUM_CODES])
    assert info.value.next_code == NUM_CODES

def test_long_run_compresses_well():
    data = generate_test_data.repeated_run(1000000)
    blob = lzw16.compress_bytes(data)
    # About sqrt(2N) codes of 2 bytes each
    assert len(blob) < 3000
    assert lzw16.decompress_bytes(blob) == data

def test_benchmark_measure():
    result = benchmark_compression_ratios.measure(generate_test_data.text_like(2000))
    assert result['original_size'] > 0
    assert result['size'] < result['original_size']
    assert 0 < result['ratio'] < 100
    assert not result['full']

    empty = benchmark_compression_ratios.measure(b'')
    assert empty['size'] == 0
    assert empty['ratio'] == 0

def test_benchmark_run(capsys):
    datasets = [
        ('pattern', generate_test_data.repeated_pattern(b'abc', 1000)),
        ('random', generate_test_data.random_bytes(140000, seed=2)),
    ]
    results = benchmark_compression_ratios.run_benchmark(datasets)
    assert set(results) == {'pattern', 'random'}
    assert results['random']['full']
    # Incompressible data grows: 16-bit codes for matches of under 2 bytes
    assert results['random']['ratio'] > 100
    assert '[dictionary full]' in capsys.readouterr().out

def test_generate_test_data_main(tmp_path, monkeypatch):
    monkeypatch.setattr(generate_test_data, 'DATASETS', {
        'run.bin': lambda: generate_test_data.repeated_run(100),
        'cycle.bin': lambda: generate_test_data.cycling_bytes(300),
    })
    generate_test_data.main(str(tmp_path / 'data'))
    assert (tmp_path / 'data' / 'run.bin').read_bytes() == b'A' * 100
    assert (tmp_path / 'data' / 'cycle.bin').stat().st_size == 300

if __name__ == '__main__':
    raise SystemExit(pytest.main([__file__, '-v']))
