# tools/simulate_pool.py

import argparse
import json
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from config.config_loader import load_config
from emulator.errors import DescriptionError, IllegalInputError
from emulator.loader import load_file
from emulator.turing_machine import TuringMachine

console = Console(highlight=False, emoji=False)


# === Utility Loaders ===
def load_input_pool(input_pool_file):
    """One input string per line; blank lines are skipped."""
    with open(input_pool_file, "r", encoding="utf-8") as f:
        inputs = [line.strip() for line in f if line.strip()]
    return inputs


def simulate_single(machine, input_string):
    """Run one input on a reusable machine and return its result entry."""
    try:
        machine.reset(input_string)
    except IllegalInputError as e:
        return {
            "input": input_string,
            "error": "illegal input",
            "symbol": e.symbol,
            "position": e.position,
        }
    result = machine.run()
    return {
        "input": input_string,
        "accepted": result.accepted,
        "steps": result.steps,
        "state": machine.state,
        "result": machine.result,
    }


# === Main Simulation Runner ===
def simulate_pool(machine_file, input_pool_file, results_directory="results/", output_name="results"):
    definition = load_file(machine_file)
    machine = TuringMachine.from_input(definition)

    results_folder = Path(results_directory) / Path(machine_file).stem
    results_folder.mkdir(parents=True, exist_ok=True)
    results_file = results_folder / f"{output_name}.jsonl"

    inputs = load_input_pool(input_pool_file)
    console.print(f"[cyan]Loaded {len(inputs):,} inputs for {escape(str(machine_file))}.[/cyan]")

    entries = []
    with Progress(
            SpinnerColumn(),
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            TextColumn("{task.completed}/{task.total} Inputs"),
            TimeElapsedColumn(),
            console=console,
    ) as progress:
        task = progress.add_task("[cyan]Simulating...", total=len(inputs))
        for input_string in inputs:
            entries.append(simulate_single(machine, input_string))
            progress.update(task, advance=1)

    # === BULK WRITE once per pool ===
    with open(results_file, "a", encoding="utf-8") as f:
        for entry in entries:
            f.write(json.dumps(entry) + "\n")

    accepted = sum(1 for entry in entries if entry.get("accepted"))
    console.print(f"[green]{accepted:,}/{len(entries):,} inputs accepted. Results saved to {escape(str(results_file))}[/green]")
    return entries


# === CLI ===
def main(argv=None):
    parser = argparse.ArgumentParser(description="Run one Turing machine over a pool of input strings.")
    parser.add_argument("--machine", required=True, help="Path to the machine description (.tm)")
    parser.add_argument("--inputs", required=True, help="Path to input pool file (one input per line)")
    parser.add_argument("--output", default="results", help="Output result file name (default: results)")
    parser.add_argument("--config", help="Path to a runtime config JSON file")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        simulate_pool(args.machine, args.inputs, config["results_directory"], args.output)
    except (OSError, ValueError, TypeError, DescriptionError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
