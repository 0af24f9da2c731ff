# app.py

import argparse
import sys

from rich.console import Console
from rich.markup import escape

from config.config_loader import load_config
from emulator.errors import DescriptionError, IllegalInputError
from emulator.loader import load_file
from emulator.turing_machine import TuringMachine
from logger.logger import JSONLogger, run_entry

console = Console(highlight=False, emoji=False)
err_console = Console(stderr=True, highlight=False, emoji=False)

RULE = "=" * 20
RUN_BANNER = f"{RULE} RUN {RULE}"
ERR_BANNER = f"{RULE} ERR {RULE}"
END_BANNER = f"{RULE} END {RULE}"


# === Output ===
def emit(text):
    console.print(text, markup=False, soft_wrap=True)


def report_illegal_input(error, verbose):
    if not verbose:
        err_console.print("illegal input string", markup=False, soft_wrap=True)
        return
    err_console.print(
        f"Input: {error.input}\n"
        f"{ERR_BANNER}\n"
        f'error: Symbol "{error.symbol}" in input is not defined in the set of input symbols\n'
        f"Input: {error.input}\n"
        f"{' ' * (7 + error.position)}^\n"
        f"{END_BANNER}",
        markup=False,
        soft_wrap=True,
    )


def report_result(machine, verbose):
    verdict = "ACCEPTED" if machine.accepted else "UNACCEPTED"
    if verbose:
        emit(f"{verdict}\nResult: {machine.result}\n{END_BANNER}")
    else:
        emit(f"({verdict}) {machine.result}")


# === Run ===
def run_machine(tm_path, input_string, verbose=False, logger=None):
    """Load, run and report a single machine. Returns the process exit code."""
    try:
        definition = load_file(tm_path)
    except OSError as e:
        err_console.print(f"[red]Error: cannot read {escape(str(tm_path))}: {e.strerror}[/red]")
        return 1
    except DescriptionError as e:
        err_console.print(str(e), markup=False, soft_wrap=True)
        return 1

    try:
        machine = TuringMachine.from_input(definition, input_string)
    except IllegalInputError as e:
        report_illegal_input(e, verbose)
        return 1

    if verbose:
        emit(f"Input: {input_string}\n{RUN_BANNER}")
        machine.run(on_snapshot=lambda snapshot: emit(machine.render_snapshot(snapshot)))
    else:
        machine.run()

    report_result(machine, verbose)

    if logger is not None:
        logger.log_run(run_entry(tm_path, input_string, machine))
    return 0


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="turing",
        description="Multi-tape Turing machine emulator",
    )
    parser.add_argument("tm", help="Path to the machine description (.tm)")
    parser.add_argument("input", help="Input string for track 0 (may be empty)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Print every step of the run")
    parser.add_argument("--config", help="Path to a runtime config JSON file")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError, TypeError) as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    verbose = args.verbose or config["verbose"]
    logger = None
    if config["log_results"]:
        logger = JSONLogger(config["output_directory"], config["log_file_prefix"])

    return run_machine(args.tm, args.input, verbose=verbose, logger=logger)


if __name__ == "__main__":
    sys.exit(main())
