#!/usr/bin/env python3
"""
LZW Compression Tool (fixed 16-bit codes)

Implements LZW compression with fixed-width 16-bit code words and the "freeze"
policy: when the dictionary reaches 65536 entries, both sides stop adding new
entries and continue using the existing dictionary.

The compressed file is nothing but the code words, two bytes each, pinned to
little-endian byte order. There is no header and no EOF marker: the end of the
file is the end of the code sequence.

Usage:
    Compress:   python3 lzw16.py compress input.txt      (writes input.txt.zip)
    Decompress: python3 lzw16.py decompress input.txt.zip (writes input.txt)

Installed as two independent commands:
    lzw-zip input.txt
    lzw-unzip input.txt.zip
"""

import os
import sys
import struct
import argparse
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple, Union

CODE_BITS = 16
NUM_CODES = 1 << CODE_BITS      # 65536 dictionary entries at most
FIRST_FREE_CODE = 256           # Codes 0-255 are the single bytes

CODE_FORMAT = '<H'              # Pinned little-endian, independent of the host
CODE_BYTES = struct.calcsize(CODE_FORMAT)
CODE_STRUCT = struct.Struct(CODE_FORMAT)

ZIP_SUFFIX = '.zip'
CHUNK_SIZE = 64 * 1024          # Bytes per buffered read/write of code streams

# ============================================================================
# ERRORS
# ============================================================================
# The library raises, the command line decides. A full dictionary is not an
# error: coding simply continues with the entries already defined.

class LZWError(Exception):
    """Base class for every error raised by this module."""

class UsageError(LZWError):
    """The command was invoked in a way that cannot work (e.g. no output name)."""

class OpenError(LZWError):
    """A source or destination file could not be opened."""

    def __init__(self, path, reason):
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason

class StreamError(LZWError):
    """Reading or writing failed, or a code stream had a stray trailing byte."""

class CorruptCodeError(LZWError, ValueError):
    """
    The decoder met a code that is neither defined nor the next code to be
    defined. The encoder assigns codes strictly in order, so such a code can
    only come from corrupted (or hand-crafted) input.
    """

    def __init__(self, code, position, next_code):
        super().__init__(
            f"invalid code {code} at position {position} "
            f"(next assignable code is {next_code})")
        self.code = code
        self.position = position
        self.next_code = next_code

class CodecStateError(LZWError):
    """An encoder or decoder instance was used after it finished."""

# ============================================================================
# DICTIONARY
# ============================================================================

class CodeTable:
    """
    Append-only LZW dictionary shared in shape (never in data) by both sides.

    Two structures, one per lookup direction:
    - strings:  list indexed by code, code -> byte-string in O(1)
    - children: trie edges stored in a dict, (prefix_code, next_byte) -> code

    The trie answers the encoder's only question ("is my current match plus
    this byte already a string, and what is its code") in O(1) without building
    the candidate string. Every stored string is immutable bytes owned by the
    table.
    """
    __slots__ = ('strings', 'children')

    def __init__(self) -> None:
        self.strings: List[bytes] = [bytes([i]) for i in range(FIRST_FREE_CODE)]
        self.children: Dict[Tuple[int, int], int] = {}

    def __len__(self) -> int:
        return len(self.strings)

    def __contains__(self, code: int) -> bool:
        return 0 <= code < len(self.strings)

    def __getitem__(self, code: int) -> bytes:
        return self.strings[code]

    @property
    def next_code(self) -> int:
        return len(self.strings)

    @property
    def full(self) -> bool:
        return len(self.strings) >= NUM_CODES

    def child(self, prefix_code: int, byte: int) -> Optional[int]:
        """Code for string(prefix_code) + byte, or None if not assigned."""
        return self.children.get((prefix_code, byte))

    def add(self, prefix_code: int, byte: int) -> Optional[int]:
        """
        Define string(prefix_code) + byte at the next free code.

        Returns the new code, or None when the table is full (freeze policy:
        nothing is inserted, nothing is evicted).
        """
        if self.full:
            return None
        code = len(self.strings)
        self.strings.append(self.strings[prefix_code] + bytes([byte]))
        self.children[(prefix_code, byte)] = code
        return code

    def code_for(self, string: bytes) -> Optional[int]:
        """Reverse lookup: the code assigned to string, or None."""
        if not string:
            return None
        code = string[0]
        for byte in string[1:]:
            code = self.children.get((code, byte))
            if code is None:
                return None
        return code

# ============================================================================
# LZW CODEC
# ============================================================================

class Stage(Enum):
    INIT = 'init'
    RUNNING = 'running'
    FLUSH = 'flush'
    DONE = 'done'

class Encoder:
    """
    One-shot LZW encoder: bytes in, 16-bit codes out.

    Algorithm:
    1. Initialize dictionary with the 256 single-byte strings
    2. Current match = first byte
    3. For each next byte, extend the match while match + byte is known
    4. Otherwise output the match's code, add match + byte to the dictionary
       (unless full), and restart the match at the byte
    5. Output the code of the final match

    The current match is tracked as its code, so no string is built while
    matching.
    """

    def __init__(self) -> None:
        self.table = CodeTable()
        self.stage = Stage.INIT

    def encode(self, data: Union[bytes, Iterable[int]]) -> List[int]:
        if self.stage is not Stage.INIT:
            raise CodecStateError(f"encoder already used (stage: {self.stage.value})")
        self.stage = Stage.RUNNING

        if isinstance(data, memoryview) and (data.format != 'B' or data.ndim != 1):
            if data.itemsize != 1:
                raise ValueError(f"memoryview of format {data.format!r} does not hold bytes")
            data = data.tobytes()
        elif not isinstance(data, (bytes, bytearray, memoryview)):
            data = bytes(data)  # ValueError for ints outside 0-255

        codes: List[int] = []
        if not data:
            self.stage = Stage.DONE
            return codes

        table = self.table
        stream = iter(data)
        current = next(stream)  # Single bytes are their own codes

        for byte in stream:
            extended = table.child(current, byte)
            if extended is not None:
                # Known string - keep extending
                current = extended
            else:
                # Freeze policy lives in add(): a full table ignores the insert
                table.add(current, byte)
                codes.append(current)
                current = byte

        # The pending match is always flushed
        self.stage = Stage.FLUSH
        codes.append(current)

        self.stage = Stage.DONE
        return codes

class Decoder:
    """
    One-shot LZW decoder: 16-bit codes in, bytes out.

    Mirrors the encoder's insertions exactly: after every code but the first,
    the entry previous_string + first byte of the current string is added at
    the next free code (unless the table is full).

    Special LZW case: a code equal to the next free code. The encoder output
    the code of an entry it had just added, before the decoder could add it.
    Pattern "AAAA" encodes as [65, 256, 65] and 256 arrives undefined. The
    missing string is always previous_string + first byte of previous_string.
    Any other undefined code is corruption.
    """

    def __init__(self) -> None:
        self.table = CodeTable()
        self.stage = Stage.INIT

    def decode(self, codes: Iterable[int]) -> bytes:
        if self.stage is not Stage.INIT:
            raise CodecStateError(f"decoder already used (stage: {self.stage.value})")
        self.stage = Stage.RUNNING

        table = self.table
        output = bytearray()
        stream = iter(codes)

        previous = next(stream, None)
        if previous is None:
            self.stage = Stage.DONE
            return bytes(output)

        # First code can only name one of the base entries
        if previous not in table:
            raise CorruptCodeError(previous, 0, table.next_code)
        output += table[previous]

        for position, code in enumerate(stream, start=1):
            if code in table:
                entry = table[code]
            elif code == table.next_code and not table.full:
                prior = table[previous]
                entry = prior + prior[:1]
            else:
                raise CorruptCodeError(code, position, table.next_code)

            output += entry
            table.add(previous, entry[0])
            previous = code

        # No FLUSH stage: every code was expanded as it arrived
        self.stage = Stage.DONE
        return bytes(output)

def encode(data: Union[bytes, Iterable[int]]) -> List[int]:
    """Encode bytes to a list of codes. Empty input gives no codes at all."""
    return Encoder().encode(data)

def decode(codes: Iterable[int]) -> bytes:
    """Decode a code sequence back to bytes. Raises CorruptCodeError on bad input."""
    return Decoder().decode(codes)

# ============================================================================
# WIRE FORMAT
# ============================================================================
# Every code is written as 2 bytes, little-endian, back to back. No header,
# no length, no terminator.

def pack_codes(codes: Iterable[int]) -> bytes:
    codes = list(codes)
    try:
        return struct.pack(f'<{len(codes)}H', *codes)
    except struct.error as e:
        raise ValueError(f"code out of range 0-{NUM_CODES - 1}: {e}") from None

def unpack_codes(blob: bytes) -> List[int]:
    if len(blob) % CODE_BYTES:
        raise StreamError(f"truncated code stream: {len(blob)} bytes is not a "
                          f"multiple of {CODE_BYTES}")
    return [code for (code,) in CODE_STRUCT.iter_unpack(blob)]

def compress_bytes(data: Union[bytes, Iterable[int]]) -> bytes:
    return pack_codes(encode(data))

def decompress_bytes(blob: bytes) -> bytes:
    return decode(unpack_codes(blob))

# ============================================================================
# CODE-LEVEL FILE I/O
# ============================================================================

def _open(filename, mode):
    try:
        return open(filename, mode)
    except OSError as e:
        raise OpenError(filename, e.strerror or e) from e

def _remove_partial(filename):
    """Delete a partially written output. Devices such as /dev/full are left alone."""
    if os.path.isfile(filename):
        os.remove(filename)

class CodeWriter:
    """
    Writes 16-bit codes to a binary file.

    Codes are packed into a buffer and written CHUNK_SIZE bytes at a time.
    Used as a context manager, the file is always closed; if the block raises,
    the partially written file is removed as well.
    """

    def __init__(self, filename):
        self.filename = filename
        self.file = _open(filename, 'wb')
        self.buffer = bytearray()

    def write(self, code):
        if not 0 <= code < NUM_CODES:
            raise ValueError(f"code out of range 0-{NUM_CODES - 1}: {code}")
        self.buffer += CODE_STRUCT.pack(code)
        if len(self.buffer) >= CHUNK_SIZE:
            self._flush()

    def _flush(self):
        try:
            self.file.write(self.buffer)
        except OSError as e:
            raise StreamError(f"{self.filename}: write failed: {e}") from e
        self.buffer.clear()

    def close(self):
        """Flush buffered codes and close the file."""
        try:
            if self.buffer:
                self._flush()
        finally:
            try:
                self.file.close()
            except OSError as e:
                raise StreamError(f"{self.filename}: close failed: {e}") from e

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            self.close()
        except StreamError:
            _remove_partial(self.filename)
            if exc_type is None:
                raise
            return False
        if exc_type is not None:
            _remove_partial(self.filename)
        return False

class CodeReader:
    """
    Reads 16-bit codes from a binary file.

    Mirrors CodeWriter: bytes are read CHUNK_SIZE at a time and codes are
    unpacked from the buffer. A file ending in the middle of a code (odd
    length) is an error, not silently truncated.
    """

    def __init__(self, filename):
        self.filename = filename
        self.file = _open(filename, 'rb')
        self.buffer = b''
        self.pos = 0

    def read(self):
        """Read the next code. Returns None at EOF."""
        if self.pos + CODE_BYTES > len(self.buffer):
            self._fill()
            if self.pos == len(self.buffer):
                return None  # End of file
            if self.pos + CODE_BYTES > len(self.buffer):
                raise StreamError(f"{self.filename}: truncated code stream "
                                  f"(stray trailing byte)")
        (code,) = CODE_STRUCT.unpack_from(self.buffer, self.pos)
        self.pos += CODE_BYTES
        return code

    def _fill(self):
        # Keep the unread tail, then read until a whole code is available
        self.buffer = self.buffer[self.pos:]
        self.pos = 0
        while len(self.buffer) < CODE_BYTES:
            try:
                chunk = self.file.read(CHUNK_SIZE)
            except OSError as e:
                raise StreamError(f"{self.filename}: read failed: {e}") from e
            if not chunk:
                break
            self.buffer += chunk

    def __iter__(self):
        while True:
            code = self.read()
            if code is None:
                return
            yield code

    def close(self):
        """Close the input file."""
        self.file.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

# ============================================================================
# LZW COMPRESSION
# ============================================================================

def compress(input_file, output_file):
    """
    Compress a file to a stream of 16-bit little-endian codes.

    The whole input is encoded before the output file is created, so a failed
    run never leaves a partial output behind.

    Edge cases handled:
    - Empty file: empty output (zero codes)
    - Dictionary full: stop adding, continue with existing entries (freeze)
    - Unreadable input / unwritable output: OpenError or StreamError
    """
    with _open(input_file, 'rb') as f:
        try:
            data = f.read()
        except OSError as e:
            raise StreamError(f"{input_file}: read failed: {e}") from e

    codes = encode(data)

    with CodeWriter(output_file) as writer:
        for code in codes:
            writer.write(code)

    print(f"Compressed: {input_file} -> {output_file}")

# ============================================================================
# LZW DECOMPRESSION
# ============================================================================

def decompress(input_file, output_file):
    """
    Decompress a file produced by compress().

    Edge cases handled:
    - Empty file: empty output
    - Odd file length: StreamError (stray byte is never dropped)
    - Code neither defined nor next to be defined: CorruptCodeError, and no
      output file is written
    """
    with CodeReader(input_file) as reader:
        data = decode(reader)

    # Buffered data may only hit the disk on close, so both are guarded
    out = _open(output_file, 'wb')
    try:
        try:
            out.write(data)
        finally:
            out.close()
    except OSError as e:
        _remove_partial(output_file)
        raise StreamError(f"{output_file}: write failed: {e}") from e

    print(f"Decompressed: {input_file} -> {output_file}")

# ============================================================================
# COMMAND-LINE INTERFACE
# ============================================================================

def zip_name(path):
    """Output name for compress: the input name plus '.zip'."""
    return path + ZIP_SUFFIX

def unzip_name(path):
    """Output name for decompress: the input name minus its 4-character suffix."""
    if len(path) <= len(ZIP_SUFFIX):
        raise UsageError(f"cannot derive an output name from '{path}'")
    return path[:-len(ZIP_SUFFIX)]

def _run(action, input_file):
    """Run one command and turn library errors into a message and exit status."""
    try:
        if action == 'compress':
            compress(input_file, zip_name(input_file))
        else:
            decompress(input_file, unzip_name(input_file))
    except CorruptCodeError as e:
        print(f"Corrupt input: {input_file}: {e}", file=sys.stderr)
        sys.exit(1)
    except LZWError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

def zip_main(argv=None):
    """Entry point of the standalone compress command."""
    parser = argparse.ArgumentParser(
        prog='lzw-zip', description='Compress a file with 16-bit LZW (writes FILE.zip)')
    parser.add_argument('input', metavar='FILE')
    args = parser.parse_args(argv)
    _run('compress', args.input)

def unzip_main(argv=None):
    """Entry point of the standalone decompress command."""
    parser = argparse.ArgumentParser(
        prog='lzw-unzip', description='Decompress a 16-bit LZW file (strips .zip)')
    parser.add_argument('input', metavar='FILE')
    args = parser.parse_args(argv)
    _run('decompress', args.input)

def main(argv=None):
    """Parse command-line arguments and run compression or decompression."""
    parser = argparse.ArgumentParser(description='LZW compression (fixed 16-bit codes)')
    sub = parser.add_subparsers(dest='mode', required=True)

    # Compress subcommand
    c = sub.add_parser('compress')
    c.add_argument('input')

    # Decompress subcommand
    d = sub.add_parser('decompress')
    d.add_argument('input')

    args = parser.parse_args(argv)
    _run(args.mode, args.input)

if __name__ == '__main__':
    main()
