# labkit

A collection of small exercise programs about functions, arguments and
arrays, a plain-text (P2) PGM image tool, and a compact unit-test runner that
prints readable per-test results and can also produce TAP or XUnit output.

## Installation

```
pip install .
```

To run the package's own tests:

```
pip install ".[test]"
pytest
```

## Commands

| Command             | What it does                                                         |
|---------------------|----------------------------------------------------------------------|
| `labkit-examples`   | Runs the by-value, by-reference and array-argument examples.         |
| `labkit-grid`       | Plots a point on a 21 x 21 character grid, then prints it cleared.   |
| `labkit-bubblesort` | Sorts a sample list with bubble sort and prints it before and after. |
| `labkit-pgm`        | Interactive viewer and editor for plain-text (P2) PGM images.        |

`labkit-examples` takes the names of the examples to run (`array`,
`byreference`, `byvalue`); with none it runs all three.

### Working with PGM images

```
labkit-pgm picture.pgm
```

A menu lets you view the image, invert it, rotate it by 90, 180 or 270
degrees, or scale it down by an integer factor. Each result is written to a
file whose path you type in. The header holds the magic number `P2`, then the
height and width, then the maximum grey value (0 to 255), followed by the
pixel values.

The same operations are available from `labkit.pgm`:

```python
from labkit.pgm import read_image, write_image, invert_image, rotate_image, scale_image

image = read_image("picture.pgm")
write_image("inverted.pgm", invert_image(image))
write_image("rotated.pgm", rotate_image(image, 90))
write_image("half.pgm", scale_image(image, 2))
```

Malformed files, unsupported rotations and scale factors that do not fit the
image raise `PgmError`. `format_image` returns the pixel values as aligned text.

## Exercise functions

`labkit.worksheet` holds small exercise functions: `add_values`,
`swap_values`, `sum_array`, `reverse_array`, `average` and `find_max`.

```python
from labkit.worksheet import add_values, sum_array, average, find_max

add_values(3, 4)            # 7
sum_array([1, 2, 3, 4, 5])  # 15
average([1, 2])             # 1.5
find_max([3, 7, 2, 9, 4])   # (9, 3): the value and its index
```

`labkit.grid` offers `Grid` with `move_point`, `reflect_point` and
`swap_coords`; `labkit.bubblesort` offers `bubble_sort`.

## Writing a test suite

Test functions take a single argument, the `Reporter`, whose `check`,
`case`, `message`, `dump`, `skip` and `abort` methods record conditions and
extra information. Collect them as `UnitTest` entries and hand them to
`labkit.runner.main` with the command-line arguments (program name excluded);
it returns the exit status.

```python
import sys
from labkit.runner import UnitTest, main
from labkit.worksheet import add_values

def test_add(t):
    t.check(add_values(3, 4) == 7, "add_values(3, 4) == 7")
    t.message("Expected add_values(3, 4) = 7")

sys.exit(main([UnitTest("add_values", test_add)]))
```

Options understood by `main`:

- `NAME ...` — run only the matching tests (exact name, then whole word, then substring)
- `-X`, `--exclude` — run every test except the listed ones
- `-l`, `--list` — list the tests and exit
- `-v`, `--verbose[=LEVEL]` — 0 is silent, 1 prints one line per test,
  2 (the default) adds failed conditions, 3 prints every condition and an
  extended summary
- `-q`, `--quiet` — same as `--verbose=0`
- `--tap` — TAP-compliant output
- `-x FILE`, `--xml-output=FILE` — write an XUnit report
- `-t`, `--time[=real|cpu]` — measure test durations
- `--exec[=auto|always|never]`, `-E`, `--no-exec` — run tests in child processes or not
- `--color[=auto|always|never]`, `--no-color`
- `--no-summary`
- `-h`, `--help`

The exit status is 0 when no test failed, 1 otherwise, and 2 for bad
command-line arguments.

## What is not included

The package ships no ready-made test suite or command that checks the
exercise functions in `labkit.worksheet`; write one with `labkit.runner` as
shown above.