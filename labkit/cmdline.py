"""A small command-line option scanner supporting short, grouped and long options."""

from __future__ import annotations

import enum
from collections.abc import Hashable, Iterator, Sequence
from dataclasses import dataclass

_MAX_OPTION_NAME = 32


class OptId(enum.Enum):
    """Special identifiers reported instead of an option's own id."""

    NONE = "none"
    UNKNOWN = "unknown"
    MISSING_ARG = "missing-arg"
    BOGUS_ARG = "bogus-arg"


@dataclass(frozen=True)
class OptionSpec:
    """One recognised option: its id, short letter, long name and argument rules."""

    id: Hashable
    shortname: str | None = None
    longname: str | None = None
    optional_arg: bool = False
    required_arg: bool = False


def _short_group(options: Sequence[OptionSpec], group: str) -> Iterator[tuple[Hashable, str | None]]:
    for letter in group:
        opt = next((o for o in options if o.shortname == letter), None)
        if opt is not None and not opt.required_arg:
            yield opt.id, None
        else:
            kind = OptId.MISSING_ARG if opt is not None else OptId.UNKNOWN
            yield kind, f"-{letter}"


def iter_options(
    options: Sequence[OptionSpec], args: Sequence[str]
) -> Iterator[tuple[Hashable, str | None]]:
    """Yield (id, argument) pairs for the arguments (program name excluded).

    Plain arguments come as (OptId.NONE, arg); problems are reported with
    OptId.UNKNOWN, OptId.MISSING_ARG or OptId.BOGUS_ARG and the offending name.
    """
    after_doubledash = False
    i = 0
    while i < len(args):
        arg = args[i]
        if after_doubledash or arg == "-":
            yield OptId.NONE, arg
        elif arg == "--":
            after_doubledash = True
        elif not arg.startswith("-"):
            yield OptId.NONE, arg
        else:
            for opt in options:
                if opt.longname is not None and arg.startswith("--"):
                    if not arg[2:].startswith(opt.longname):
                        continue
                    rest = arg[2 + len(opt.longname):]
                    if rest == "":
                        if opt.required_arg:
                            yield OptId.MISSING_ARG, arg
                        else:
                            yield opt.id, None
                        break
                    if rest.startswith("="):
                        if opt.optional_arg or opt.required_arg:
                            yield opt.id, rest[1:]
                        else:
                            yield OptId.BOGUS_ARG, f"--{opt.longname}"[:_MAX_OPTION_NAME]
                        break
                elif opt.shortname and arg[1:2] == opt.shortname:
                    if opt.required_arg:
                        if len(arg) > 2:
                            yield opt.id, arg[2:]
                        elif i + 1 < len(args):
                            i += 1
                            yield opt.id, args[i]
                        else:
                            yield OptId.MISSING_ARG, arg
                    else:
                        yield opt.id, None
                        if len(arg) > 2:
                            yield from _short_group(options, arg[2:])
                    break
            else:
                name = arg
                if name.startswith("--") and "=" in name:
                    name = name[: name.index("=")][:_MAX_OPTION_NAME]
                yield OptId.UNKNOWN, name
        i += 1