#!/usr/bin/env python3
"""
codesweep - remove expired and targeted code blocks from source files

Source files mark temporary code with directive comments:

    <!-- <time-limited to="2025-01-01 00:00:00"> -->
    <div>Campaign banner</div>
    <!-- </time-limited> -->

    /* <removal-marker name="feature1" unwrap-block> */
    if (featureFlag) {
      newBehaviour();
    }
    /* </removal-marker> */

codesweep deletes the blocks whose time has come (or whose marker name is
targeted) and tidies the whitespace left behind. The list modes report what
would be removed without touching anything.

Usage:
    codesweep -f input.html
    codesweep -f app.js --delimiter-start "/* <" --delimiter-end "> */" \\
        --removal-marker-target-name feature1 -o app.clean.js
    cat input.html | codesweep --list
    codesweep -f input.html --list-all --json
"""

import sys
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import __version__
from .config import appsettings
from .lib import LOG, state_connectToLogger
from .lib.profile import Profile, ProfileError, targets_load
from .lib.report import ListError
from .lib.sweeper import ListFormat, Sweeper
from .models import ProgramState, pipeline


def parser_build() -> ArgumentParser:
    """Define CLI arguments"""
    parser = ArgumentParser(
        prog="codesweep",
        description="codesweep - remove expired and targeted code blocks marked by directive comments",
        formatter_class=ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument("-f", "--filename", type=Path, default=None,
                        help="Input file (stdin when omitted)")
    parser.add_argument("-o", "--output", type=Path, default=None,
                        help="Output file (stdout when omitted)")

    parser.add_argument("--delimiter-start", dest="delimiter_start", default=None,
                        help=f"Opening delimiter of directives (default: {appsettings.delimiter_start!r})")
    parser.add_argument("--delimiter-end", dest="delimiter_end", default=None,
                        help=f"Closing delimiter of directives (default: {appsettings.delimiter_end!r})")

    parser.add_argument("--time-limited-tag-name", dest="time_limited_tag_name", default=None,
                        help="Name of the time-limited directive")
    parser.add_argument("--time-limited-time-offset", dest="time_limited_time_offset", default=None,
                        help="UTC offset of 'to' attributes, e.g. +09:00")
    parser.add_argument("--time-limited-current", dest="time_limited_current", default=None,
                        help="Evaluate as if it were this ISO-8601 instant")

    parser.add_argument("--removal-marker-tag-name", dest="removal_marker_tag_name", default=None,
                        help="Name of the removal-marker directive")
    parser.add_argument("--removal-marker-target-name", dest="removal_marker_target_name",
                        action="append", default=None,
                        help="Marker name to remove (repeatable)")
    parser.add_argument("--removal-marker-target-config", dest="removal_marker_target_config",
                        type=Path, default=None,
                        help="File listing marker names to remove, one per line")

    parser.add_argument("--profile", type=Path, default=None,
                        help="YAML profile with delimiters and directive settings")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-l", "--list", dest="listReady", action="store_true",
                      help="List the blocks that would be removed")
    mode.add_argument("--list-all", dest="listAll", action="store_true",
                      help="List removable and pending blocks")
    parser.add_argument("--json", dest="jsonOutput", action="store_true",
                        help="Emit list output as JSON")

    parser.add_argument("-v", "--verbosity", action="count", default=0,
                        help="Increase log verbosity (can be repeated: -v, -vv, -vvv)")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def current_parse(value: Optional[str]) -> Optional[datetime]:
    """ISO-8601 instant, or None (meaning "now") when absent or invalid"""
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        LOG(f"Invalid --time-limited-current '{value}', using the current time", level=1)
        return None


def settings_resolve(inputstate: ProgramState) -> ProgramState:
    """
    Merge environment settings, profile and CLI options.

    Returns:
        ProgramState with added fields:
            - settings: AppSettings
            - configuration: SweepConfiguration

    Exits:
        1 if the profile or target list cannot be loaded
    """
    state = inputstate.copy()

    LOG("Resolving settings...", level=2)
    settings = appsettings
    try:
        if state.profile:
            settings = Profile(state.profile).settings_apply(settings)
            LOG(f"Applied profile {state.profile}", level=2)
        targets: List[str] = targets_load(state.removal_marker_target_config)
    except ProfileError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    overrides: Dict[str, Any] = {
        name: getattr(state, name)
        for name in (
            "delimiter_start",
            "delimiter_end",
            "time_limited_tag_name",
            "time_limited_time_offset",
            "removal_marker_tag_name",
        )
        if getattr(state, name) is not None
    }
    current: Optional[datetime] = current_parse(state.time_limited_current)
    if current is not None:
        overrides["time_limited_current"] = current

    if overrides:
        settings = type(settings)(**{**settings.model_dump(), **overrides})

    state.settings = settings
    state.configuration = settings.configuration_make([*state.removal_marker_target_name, *targets])
    LOG(f"Delimiters: {settings.delimiter_start!r} / {settings.delimiter_end!r}", level=2)
    LOG(f"Targets: {sorted(state.configuration.removal_marker.targets)}", level=2)
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the source text from the input file or stdin.

    Exits:
        1 if the file cannot be read, or no input is given on a terminal
    """
    state = inputstate.copy()

    try:
        if state.filename:
            state.sourceText = state.filename.read_bytes().decode("utf-8")
        elif not sys.stdin.isatty():
            state.sourceText = sys.stdin.read()
        else:
            print("Error: No input. Pass --filename or pipe text on stdin", file=sys.stderr)
            sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Read {len(state.sourceText)} characters", level=2)
    return state


def source_sweep(inputstate: ProgramState) -> ProgramState:
    """
    Clean the source text, or render the requested list report.

    Exits:
        1 if the report cannot be serialized
    """
    state = inputstate.copy()

    sweeper = Sweeper(
        state.configuration,
        state.settings.delimiter_start,
        state.settings.delimiter_end,
        debug=(state.verbosity >= 3),
    )
    list_format = ListFormat.JSON if state.jsonOutput else ListFormat.PRETTY
    try:
        if state.listAll:
            LOG("Listing removable and pending blocks...", level=1)
            state.resultText = sweeper.list_all(state.sourceText, list_format)
        elif state.listReady:
            LOG("Listing removable blocks...", level=1)
            state.resultText = sweeper.list(state.sourceText, list_format)
        else:
            LOG("Cleaning source...", level=1)
            state.resultText = sweeper.clean(state.sourceText)
    except ListError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    return state


def results_write(inputstate: ProgramState) -> ProgramState:
    """Write the result to the output file or stdout (terminal stage)"""
    state: ProgramState = inputstate.copy()

    if state.output:
        try:
            state.output.write_bytes(state.resultText.encode("utf-8"))
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            sys.exit(1)
        LOG(f"Wrote {state.output}", level=1)
    else:
        sys.stdout.write(state.resultText)
    return state


def main(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point.

    Orchestrates the pipeline:
        1. settings_resolve: env/.env settings, profile, CLI overrides
        2. source_read: input file or stdin
        3. source_sweep: clean, list or list-all
        4. results_write: output file or stdout
    """
    options: Namespace = parser_build().parse_args(argv)
    state: ProgramState = ProgramState.state_createFromNamespace(options)

    # Connect state to logger for entire pipeline
    state_connectToLogger(state)

    pipeline(state, settings_resolve, source_read, source_sweep, results_write)


if __name__ == "__main__":
    main()
