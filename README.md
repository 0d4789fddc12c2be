# tinyrt

tinyrt is a small toolkit in pure Python with no runtime dependencies. It has
four modules:

- **`tinyrt.textfuncs`** holds text helpers that behave like their C
  counterparts: `is_digit`, `is_space`, `atoi`, `strtof`, `atof`, `strcmp`,
  `strncmp` and `strstr`. A string ends at its first NUL character.
- **`tinyrt.numfmt`** holds the number conversions the formatter uses:
  `format_integer`, `format_fixed` and `format_exponential`. The `Flags`
  enum selects padding, sign, prefix and letter case.
- **`tinyrt.formatting`** is a printf-style formatter: `vformat`,
  `sprintf`, `snprintf`, `printf` and `fctprintf`.
- **`tinyrt.demo`** is a small program. It prints a file and then runs
  rounds of worker threads. It also provides `Signal`, `read_file` and
  `run_workers`.

## Installation

```
pip install .
```

Python 3.10 or later is required.

## Formatting

The format language is `%[flags][width][.precision][length]specifier`:

- **Flags:** `0 - + space #`.
- **Width and precision:** a number, or `*` to take the value from the
  arguments.
- **Length modifiers:** `hh h l ll t j z`.
- **Specifiers:** `d i u x X o b f F e E g G c s p %`.

Integers are wrapped to the size of the C type that the length modifier
names. For example, `%x` of -1 gives `ffffffff`. A missing argument, or an
argument of the wrong kind, raises `TypeError`. Extra arguments are ignored.

```python
from tinyrt.formatting import sprintf, snprintf, printf, fctprintf, vformat

sprintf("%5d|%-5s|%.3f", 42, "ab", 3.14159)   # '   42|ab   |3.142'
sprintf("%#x %b", 255, 5)                      # '0xff 101'

# snprintf returns the text that fits in a buffer of `count` characters
# (at most count - 1) and the length the full text would have had.
snprintf(4, "%s", "hello")                     # ('hel', 5)

printf("%d items\n", 3)                        # writes to stdout, returns 8

chunks = []
fctprintf(chunks.append, "%c%c", "o", "k")     # each character goes to the callable

vformat("%e", [12345.678])                     # '1.234568e+04'
```

- **`%c`:** takes a one-character string or an integer character code.
- **`%s`:** takes a string.
- **`%f` above 1e9:** magnitudes larger than 1e9 are printed in exponential
  form.
- **`%g`:** values from 1e-4 up to 1e6 are printed in fixed form.

## Text helpers

```python
from tinyrt.textfuncs import atoi, strtof, strstr, strcmp

atoi("  -123abc")        # -123
strtof("1.5e3xyz")       # (1500.0, 5), the value and the index where parsing stopped
strstr("hello", "ll")    # 2, or None when there is no match
strcmp("abc", "abd")     # negative
```

Other behaviour to know:

- **`strtof`:** computes in single precision and does not recognise NaN or
  infinity. It returns index 0 when no digits are found.
- **`strncmp`:** raises `ValueError` for a negative count.

## Demo

```
tinyrt-demo [path] [--threads N] [--tasks N] [--rounds N]
```

The demo first prints the file `path`, which defaults to `Makefile` in the
current directory.

It then runs `--rounds` rounds (default 5). Each round has `--threads`
workers (default 3) that share `--tasks` tasks (default 30). For each task it
claims, a worker prints its own number. After each round the parent prints
`parent continues after iteration N`.

If the file cannot be read, the demo exits with status 1.

The building blocks can also be used directly. `run_workers(thread_count,
task_count, emit)` returns how many tasks each worker handled. `Signal` is a
binary signal: `post` makes it available and `wait` takes it.

## Not included

tinyrt does not provide:

- memory allocation or memory-mapping routines;
- raw system-call wrappers;
- byte-level helpers such as `memcpy` or `memset`.

File access uses ordinary Python file reading (`read_file`). The workers are
standard Python threads.

## Tests

```
pip install .[test]
pytest
```