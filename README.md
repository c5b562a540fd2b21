# satkit

Building blocks for working with SAT problems in DIMACS CNF form.

- `satkit.cnf_reader`: a lenient reader. It drops clauses that hold a
  variable in both phases, accepts a last clause without its closing `0`,
  and checks assignments against a formula.
- `satkit.cnf_stats`: compares the clause and variable counts a file
  declares in its header with those its body actually uses.
- `satkit.dimacs_loader`: a strict loader. It hands the header and every
  literal to callbacks and reports errors with the file name and line
  number.
- `satkit.dimacs_parser`: a streaming parser. It also reads options that
  comments carry as `--name=value`.
- `satkit.options`: typed command-line options of the form `-name=value`
  with ranges and help text.
- `satkit.lingeling_io`: opens compressed inputs and outputs, formats
  `v` witness lines and derives a seed from a name.
- `satkit.parse_utils`: low-level character-stream parsing.
- `satkit.system`: CPU time, wall-clock time and memory use of the
  process.

## What it does not do

satkit does not solve formulas. It has no search engine and no clause
database. It reads problems, checks assignments that some other solver has
found, and handles the input, output and options around such a solver.

## Installation

```
pip install .
```

Python 3.10 or later is needed. There are no runtime dependencies. Inputs
ending in `.7z` are read through the external `7z` program, so it has to be
on the `PATH`.

## Command line

```
satkit-cnf-stats problem.cnf
```

The command prints the claimed and actual clause and variable counts. It
lists each line where a clause with both polarities of a variable was
skipped. It exits with 1 if the file cannot be opened, with 2 if a line is
too long, with 3 if the header is malformed, and with 4 if the last clause
is not terminated by `0`.

## Library use

### Reading a formula and checking a model

```python
from satkit.cnf_reader import CnfError, read_cnf, verify_solution

try:
    formula = read_cnf("problem.cnf")
except CnfError as exc:
    raise SystemExit(exc.exit_code)

# formula.clauses holds tuples of literals encoded as 2 * variable + sign
# (sign 1 means negated). Index the assignment by variable number:
# 1 is true, 0 is false, and index 0 is unused.
assignment = [0] + [1] * formula.num_variables
checked = verify_solution(formula, assignment)  # raises CnfError if a clause is false
```

`parse_cnf_lines(lines)` does the same as `read_cnf` for any iterable of
text lines.

### Strict loading with callbacks

```python
from satkit.dimacs_loader import DimacsError, DimacsLoader

literals = []
with DimacsLoader(header=lambda nvars, nclauses: None, add=literals.append) as loader:
    loader.open_path("problem.cnf")
    nvars, nclauses = loader.parse()
```

`open_path` reads `.gz`, `.bz2` and `.lzma` files directly. It reads `.7z`
files through `7z`. `set_file(file, path)` reads from a file that is
already open and leaves it open afterwards. A malformed input raises
`DimacsError`, whose message has the form `path:line: reason`.

### Streaming with embedded options

```python
from satkit.dimacs_parser import DimacsParseError, parse_dimacs

options = {"seed": 0}
text = "c --seed=7\np cnf 2 1\n1 -2 0\n"
summary = parse_dimacs(text, add=print, options=options)
# options["seed"] == 7; summary.clauses == 1; summary.header == (2, 1)
```

- `force=True` makes the header optional.
- `ignore_extra=True` stops reading once the declared number of clauses
  has been read.
- An embedded option whose name is not in `options` is recorded in
  `summary.warnings`.

### Options

```python
from satkit.options import BoolOption, IntOption, IntRange, OptionRegistry

registry = OptionRegistry(usage="USAGE: %s [options] <input-file>\n")
verb = registry.register(IntOption("MAIN", "verb", "Verbosity level", 1, IntRange(0, 2)))
model = registry.register(BoolOption("MAIN", "model", "Print the model", True))

rest = registry.parse(["prog", "-verb=2", "-no-model", "in.cnf"])
# rest == ["prog", "in.cnf"]; verb.value == 2; model.value is False
print(registry.usage_text("prog"))
```

- A value out of range raises `OptionError`.
- With `strict=True`, an unknown `-flag` raises `OptionError` too.
- `--help` and `--help-verb` print the usage text to standard error and
  exit.

`DoubleOption`, `Int64Option` and `StringOption` work the same way.

### Solver output helpers

```python
from satkit.lingeling_io import open_input, thanks_seed, witness_lines

for line in witness_lines([1, 0, 1]):
    print(line, end="")      # "v 1 -2 3 0"
seed = thanks_seed("everyone")
```

- `open_input(path)` opens an input for binary reading. It decompresses
  `.gz`, `.lzma`, `.bz2` and `.7z` files, and reads standard input when
  `path` is `None`.
- `open_output(path)` opens an output for text writing. It writes a gzip
  file for names ending in `.gz`, and standard output for `-`.

## Running the tests

```
pip install .[test]
pytest
```