# main.py
from __future__ import annotations

import argparse
import sys
from contextlib import nullcontext
from typing import Iterable, List, Optional, TextIO

import alphabet_and_permutation
import config_reader
import machine as machine_module
import rotor_and_reflector
from alphabet_and_permutation import Alphabet
from config_reader import load_config, parse_settings, read_config
from debug import COMPONENTS, Debug
from errors import ConfigurationError, EnigmaError
from machine import Machine, Trace
from suites import SUITES

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()
debug.toggle_global(True)

BLOCK = 5                       # output group size


# ────────────────────────────────────────────────────────────────────────
#  1. Text helpers
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str, alpha: Alphabet) -> str:
    """Drop whitespace; upper-case a letter only when its lower form is not in *alpha*."""
    out: List[str] = []
    for ch in msg:
        if ch.isspace():
            continue
        if ch not in alpha and ch.upper() in alpha:
            ch = ch.upper()
        out.append(ch)
    return "".join(out)


def group_message(msg: str, block: int = BLOCK) -> str:
    return " ".join(msg[i : i + block] for i in range(0, len(msg), block))


# ────────────────────────────────────────────────────────────────────────
#  2. Message stream
# ────────────────────────────────────────────────────────────────────────


def process(
    machine: Machine,
    lines: Iterable[str],
    out: TextIO,
    trace: Optional[Trace] = None,
) -> None:
    """Run every message in *lines* through *machine*.

    A line starting with ``*`` reconfigures the machine; blank lines are
    copied through; anything else is a message.
    """
    configured = False
    for raw in lines:
        line = raw.rstrip("\r\n")
        if line.lstrip().startswith("*"):
            machine.reset_rotors()
            parse_settings(line, machine).apply(machine)
            configured = True
        elif not line.strip():
            out.write("\n")
        elif not configured:
            raise ConfigurationError("No configuration for message")
        else:
            text = preprocess_message(line, machine.alphabet)
            out.write(group_message(machine.convert_message(text, trace)) + "\n")


# ────────────────────────────────────────────────────────────────────────
#  3. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def enable_debug(components: Iterable[str]) -> None:
    """Switch *components* on in every module that logs them."""
    switchboards = (
        alphabet_and_permutation.debug,
        rotor_and_reflector.debug,
        machine_module.debug,
        config_reader.debug,
        debug,
    )
    for component in components:
        for board in switchboards:
            board.enable(component)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    p.add_argument("config", nargs="?", metavar="CONFIG", help="Machine description file. If omitted, the built-in suite is used.")
    p.add_argument("input", nargs="?", metavar="INPUT", help="Messages to process. Default: standard input")
    p.add_argument("output", nargs="?", metavar="OUTPUT", help="Where results go. Default: standard output")
    p.add_argument("--suite", choices=sorted(SUITES), default="legacy", help="Built-in suite used when no CONFIG is given. Default: legacy")
    p.add_argument("--verbose", action="store_true", help="Log rotor windows and the signal path of every character.")
    p.add_argument("--debug", action="append", default=[], choices=COMPONENTS, metavar="COMPONENT", help=f"Switch on internal logging for one component (repeatable): {', '.join(COMPONENTS)}.")
    return p.parse_args(argv)


def _open(path: Optional[str], mode: str, default: TextIO):
    if path is None:
        return nullcontext(default)
    try:
        return open(path, mode, encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"could not open {path}") from exc


# ────────────────────────────────────────────────────────────────────────
#  4. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    enable_debug(args.debug)

    trace: Optional[Trace] = None
    if args.verbose:
        debug.enable("machine")
        trace = debug.sink("machine")

    try:
        if args.config:
            cfg = load_config(args.config)
        else:
            cfg = read_config(SUITES[args.suite]["config"])
        machine = cfg.build()

        with _open(args.input, "r", sys.stdin) as src, _open(args.output, "w", sys.stdout) as dst:
            process(machine, src, dst, trace)
    except EnigmaError as exc:
        sys.exit(f"Error: {exc}")


if __name__ == "__main__":
    main()
