"""Command-line options of the form -name=value, with ranges and help text."""

from __future__ import annotations

import math
import re
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass

from .parse_utils import match

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:inf(?:inity)?|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.IGNORECASE,
)
_INT_PREFIX = re.compile(r"\s*[+-]?\d+")


class OptionError(Exception):
    """Raised for option values out of range and for unknown flags."""


@dataclass
class IntRange:
    """Inclusive bounds of an integer option."""

    begin: int = INT32_MIN
    end: int = INT32_MAX


@dataclass
class DoubleRange:
    """Bounds of a floating-point option, each inclusive or exclusive."""

    begin: float = -math.inf
    begin_inclusive: bool = False
    end: float = math.inf
    end_inclusive: bool = False


def _value_after_name(arg: str, name: str) -> str | None:
    """Return the text after '-name=', or None when arg is not for this option."""
    rest = match(arg, "-")
    if rest is None:
        return None
    rest = match(rest, name)
    if rest is None:
        return None
    return match(rest, "=")


def _leading_float(text: str) -> float:
    found = _FLOAT_PREFIX.match(text)
    return float(found.group(0)) if found else 0.0


def _leading_int(text: str) -> int:
    found = _INT_PREFIX.match(text)
    return int(found.group(0)) if found else 0


def _describe(description: str, verbose: bool) -> str:
    return f"\n        {description}\n\n" if verbose else ""


class Option(ABC):
    """An option with a name, a description, a category and a type name."""

    def __init__(self, category: str, name: str, description: str, type_name: str, value):
        self.category = category
        self.name = name
        self.description = description
        self.type_name = type_name
        self.value = value

    @abstractmethod
    def parse(self, arg: str) -> bool:
        """Take the value from arg if it names this option; True if it did."""

    @abstractmethod
    def help(self, verbose: bool = False) -> str:
        """One help entry; the description is added when verbose."""

    def _too_large(self, text: str) -> OptionError:
        return OptionError(f'ERROR! value <{text}> is too large for option "{self.name}".')

    def _too_small(self, text: str) -> OptionError:
        return OptionError(f'ERROR! value <{text}> is too small for option "{self.name}".')


class DoubleOption(Option):
    """A floating-point option."""

    def __init__(self, category, name, description, default=0.0, bounds=None):
        super().__init__(category, name, description, "<double>", float(default))
        self.bounds = bounds if bounds is not None else DoubleRange()

    def __float__(self) -> float:
        return self.value

    def parse(self, arg: str) -> bool:
        text = _value_after_name(arg, self.name)
        if text is None:
            return False
        value = _leading_float(text)
        r = self.bounds
        if value >= r.end and (not r.end_inclusive or value != r.end):
            raise self._too_large(text)
        if value <= r.begin and (not r.begin_inclusive or value != r.begin):
            raise self._too_small(text)
        self.value = value
        return True

    def help(self, verbose: bool = False) -> str:
        r = self.bounds
        line = "  -%-12s = %-8s %s%4.2g .. %4.2g%s (default: %g)\n" % (
            self.name,
            self.type_name,
            "[" if r.begin_inclusive else "(",
            r.begin,
            r.end,
            "]" if r.end_inclusive else ")",
            self.value,
        )
        return line + _describe(self.description, verbose)


class _IntegerOption(Option):
    _MIN = INT32_MIN
    _MAX = INT32_MAX

    def __init__(self, category, name, description, type_name, default, bounds):
        super().__init__(category, name, description, type_name, int(default))
        self.bounds = bounds if bounds is not None else IntRange(self._MIN, self._MAX)

    def __int__(self) -> int:
        return self.value

    def _convert(self, text: str) -> int:
        value = max(INT64_MIN, min(INT64_MAX, _leading_int(text)))
        span = self._MAX - self._MIN + 1
        return (value - self._MIN) % span + self._MIN

    def parse(self, arg: str) -> bool:
        text = _value_after_name(arg, self.name)
        if text is None:
            return False
        value = self._convert(text)
        if value > self.bounds.end:
            raise self._too_large(text)
        if value < self.bounds.begin:
            raise self._too_small(text)
        self.value = value
        return True

    def help(self, verbose: bool = False) -> str:
        low = "imin" if self.bounds.begin == self._MIN else "%4d" % self.bounds.begin
        high = "imax" if self.bounds.end == self._MAX else "%4d" % self.bounds.end
        line = "  -%-12s = %-8s [%s .. %s] (default: %d)\n" % (
            self.name, self.type_name, low, high, self.value,
        )
        return line + _describe(self.description, verbose)


class IntOption(_IntegerOption):
    """A 32-bit integer option."""

    _MIN = INT32_MIN
    _MAX = INT32_MAX

    def __init__(self, category, name, description, default=0, bounds=None):
        super().__init__(category, name, description, "<int32>", default, bounds)


class Int64Option(_IntegerOption):
    """A 64-bit integer option."""

    _MIN = INT64_MIN
    _MAX = INT64_MAX

    def __init__(self, category, name, description, default=0, bounds=None):
        super().__init__(category, name, description, "<int64>", default, bounds)


class StringOption(Option):
    """A string option."""

    def __init__(self, category, name, description, default=None):
        super().__init__(category, name, description, "<string>", default)

    def __str__(self) -> str:
        return str(self.value)

    def parse(self, arg: str) -> bool:
        text = _value_after_name(arg, self.name)
        if text is None:
            return False
        self.value = text
        return True

    def help(self, verbose: bool = False) -> str:
        line = "  -%-10s = %8s\n" % (self.name, self.type_name)
        return line + _describe(self.description, verbose)


class BoolOption(Option):
    """A switch set with -name and cleared with -no-name."""

    def __init__(self, category, name, description, value):
        super().__init__(category, name, description, "<bool>", bool(value))

    def __bool__(self) -> bool:
        return self.value

    def parse(self, arg: str) -> bool:
        rest = match(arg, "-")
        if rest is None:
            return False
        stripped = match(rest, "no-")
        setting = stripped is None
        if stripped is not None:
            rest = stripped
        if rest == self.name:
            self.value = setting
            return True
        return False

    def help(self, verbose: bool = False) -> str:
        padding = " " * max(0, 32 - 2 * len(self.name))
        line = "  -%s, -no-%s%s (default: %s)\n" % (
            self.name, self.name, padding, "on" if self.value else "off",
        )
        return line + _describe(self.description, verbose)


class OptionRegistry:
    """A set of options that together parse a command line."""

    def __init__(self, usage: str | None = None, help_prefix: str = ""):
        self.usage = usage
        self.help_prefix = help_prefix
        self.options: list[Option] = []

    def register(self, option: Option) -> Option:
        """Add an option and return it."""
        self.options.append(option)
        return option

    def parse(self, argv, strict: bool = False) -> list[str]:
        """Apply known options; return argv[0] followed by the arguments left over.

        A help flag prints the usage text to standard error and exits.
        Unknown flags raise OptionError when strict.
        """
        argv = list(argv)
        if not argv:
            return []
        remaining = [argv[0]]
        for arg in argv[1:]:
            rest = match(arg, "--")
            if rest is not None:
                rest = match(rest, self.help_prefix)
            if rest is not None:
                rest = match(rest, "help")
            if rest is not None:
                if rest == "":
                    self._exit_with_usage(argv[0], False)
                elif match(rest, "-verb") is not None:
                    self._exit_with_usage(argv[0], True)
                continue
            if any(option.parse(arg) for option in self.options):
                continue
            if strict and arg.startswith("-"):
                raise OptionError(
                    f'ERROR! Unknown flag "{arg}". '
                    f"Use '--{self.help_prefix}help' for help."
                )
            remaining.append(arg)
        return remaining

    def _exit_with_usage(self, program: str, verbose: bool) -> None:
        sys.stderr.write(self.usage_text(program, verbose))
        raise SystemExit(0)

    def usage_text(self, program: str, verbose: bool = False) -> str:
        """The full help text, options grouped by category and type."""
        parts = []
        if self.usage is not None:
            try:
                parts.append(self.usage % program)
            except TypeError:
                parts.append(self.usage)
        prev_cat = prev_type = None
        for option in sorted(self.options, key=lambda o: (o.category, o.type_name)):
            if option.category != prev_cat:
                parts.append(f"\n{option.category} OPTIONS:\n\n")
            elif option.type_name != prev_type:
                parts.append("\n")
            parts.append(option.help(verbose))
            prev_cat, prev_type = option.category, option.type_name
        prefix = self.help_prefix
        parts.append("\nHELP OPTIONS:\n\n")
        parts.append(f"  --{prefix}help        Print help message.\n")
        parts.append(f"  --{prefix}help-verb   Print verbose help message.\n")
        parts.append("\n")
        return "".join(parts)