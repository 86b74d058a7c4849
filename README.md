# ppmhuff

A text compressor that combines Prediction by Partial Matching (PPM) with
adaptive Huffman codes. Each character is looked up in the contexts of the
preceding four, three, two and one characters, then in an order-0 table, and
finally in an equiprobable order -1 table over space and `a`–`z`. The Huffman
code of the context that recognises the character is written, preceded by an
escape code for every context that was consulted without finding it. All
tables are updated after each character, and the decoder mirrors this.

The compressor codes only space and the letters `a`–`z`. Other characters are
skipped without being coded, while the size header still counts them, so a
file holding them does not decompress correctly. Normalise text first with
`--format`.

## Installation

```
pip install .
```

Tests need the `test` extra (`pip install .[test]`).

## Command line

The `ppmhuff` command takes an input path, an output path and a mode:

```
ppmhuff INPUT OUTPUT --format
ppmhuff INPUT OUTPUT --compress [--save-model PATH] [--load-model PATH]
ppmhuff INPUT OUTPUT --decompress
```

Normalise a text file:

```
ppmhuff book.txt book.clean.txt --format
```

Normalisation works on bytes:

- ASCII letters are lowercased.
- Bytes `0x21`–`0x40` and `0x5B`–`0x60` (digits and most punctuation) are dropped.
- Runs of spaces are squeezed to one.
- A carriage return and the byte after it (the `\n` of a CRLF pair) become one space. A bare `\n` is kept.
- Two-byte UTF-8 accented Latin letters (`á`, `ê`, `ç`, `ñ`, … in either case) are folded to their plain lower-case letter. Other two-byte sequences become a zero byte.
- Sequences starting with a byte of `0xE0` or above are dropped with the two bytes that follow. A `0xC2` byte is dropped.
- A `0xFF` byte ends the input.

Compress a normalised file:

```
ppmhuff book.clean.txt book.ppm --compress
```

After compressing, the command prints the input size, the number of code
bits counted, that number in bytes, the average bits per input byte and the
measured entropy per input byte.

`--save-model PATH` writes the context counters to a model file after
compressing. `--load-model PATH` primes the order-0 and higher-order contexts
from such a file before compressing. When a model is loaded, the order -1
alphabet starts empty.

```
ppmhuff book.clean.txt book.ppm --compress --save-model book.model
ppmhuff other.clean.txt other.ppm --compress --load-model book.model
```

Decompress:

```
ppmhuff book.ppm book.out.txt --decompress
```

Decompression always starts from an empty model. It cannot read files that
were compressed with `--load-model`.

The command returns exit status 1 and prints an error if fewer than three
arguments are given, if an option lacks its path, or if a file cannot be read
or written, or is malformed. An unknown mode does nothing.

## Library use

```python
from ppmhuff.formatter import format_bytes
from ppmhuff.compressor import compress_bytes
from ppmhuff.decompressor import decompress_bytes

text = format_bytes("Olá, mundo!".encode("utf-8"))   # b"ola mundo"
packed, stats = compress_bytes(text)
assert decompress_bytes(packed) == text
print(stats.bits, stats.average_length, stats.entropy)
```

Modules:

- `ppmhuff.formatter`
  - `format_bytes(data)` and `format_file(input_path, output_path)` normalise text.
  - `is_forbidden(byte)` tests whether a byte is dropped.
  - `conversion_table()` returns the accent folding map.
- `ppmhuff.compressor`
  - `compress_bytes(data, k0=None, tables=None)` returns the compressed bytes and a `CompressionStats`. A `k0` context and a list of four `ContextTable`s may be passed in and are updated in place.
  - `compress(input_path, output_path, save_model_path=None, load_model_path=None)` works on files and returns the statistics.
  - `CompressionStats` has `size`, `bits`, `information`, `byte_count`, `average_length` and `entropy`.
- `ppmhuff.decompressor`
  - `decompress_bytes(data)` decodes compressed bytes.
  - `decompress(input_path, output_path)` works on files and returns the number of bytes written.
  - Both raise `ValueError` on truncated or invalid data.
- `ppmhuff.model`
  - `equiprobable_context(empty)` returns the order -1 context.
  - `update_context_str(context_str, k, symbol)` returns the next context string.
  - `save_model(path, k0, tables)` and `load_model(path, k0, tables)` write and read model files.
- `ppmhuff.context`
  - `SymbolTable`, `Context` and `ContextTable` are the hashed tables behind the model.
  - `hash_key(key)` is their hash.
- `ppmhuff.bitio`
  - `BitWriter` packs codes into bytes.
  - `iter_bits(data)` yields bits most significant first.
- `ppmhuff.huffman`
  - `build_tree(symbols)` builds a Huffman tree with deterministic tie-breaking.
  - `code_to_bits(code)` renders a code as a bit string.
  - `format_tree(root)` returns an indented dump of a tree.

## File formats

A compressed file starts with the original length as a four-byte big-endian
integer. The packed code bits follow, most significant bit first, and the last
byte is padded with zero bits.

A model file is Latin-1 text:

- Lines of `symbol,count` for the order-0 context, ending with a `-1` line.
- Then, for each of the four context orders, `name:count` header lines, each followed by `symbol,count` lines, the order ending with `-1`.

Only the first symbol and the first context of each hash bucket are written.
The count in a context header is the number of symbols in that context. When
symbols in the context share a bucket, this count can exceed the number of
lines that follow it, and such a file does not load back as it was saved.