import argparse
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from emulator.errors import DescriptionError
from emulator.loader import load_file

console = Console(highlight=False, emoji=False)


def summary_table(definition):
    table = Table(title="Declarations", show_header=False)
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("States", escape(", ".join(definition.states)))
    table.add_row("Initial", escape(definition.initial.name))
    table.add_row("Final", escape(", ".join(s.name for s in definition.final_states)) or "-")
    table.add_row("Input alphabet", escape(", ".join(definition.input_alphabet)) or "-")
    table.add_row("Tape alphabet", escape(", ".join(definition.tape_alphabet)))
    table.add_row("Tracks", str(definition.track_count))
    return table


def transition_table(definition):
    """One row per rule, grouped by source state in match order."""
    table = Table(title="Transition Table", show_header=True, header_style="bold magenta")
    table.add_column("State")
    table.add_column("#", justify="right")
    table.add_column("Read")
    table.add_column("Write")
    table.add_column("Move")
    table.add_column("Next")

    for state in definition.states.values():
        label = f"{state.name} (final)" if state.final else state.name
        if not state.rules:
            table.add_row(escape(label), "-", "", "", "", "HALT")
            continue
        for idx, rule in enumerate(state.rules):
            table.add_row(
                escape(label) if idx == 0 else "",
                str(idx),
                escape(rule.reads),
                escape(rule.writes),
                escape(rule.directions),
                escape(rule.target),
            )
    return table


def inspect_machine(path):
    definition = load_file(path)
    console.print(summary_table(definition))
    console.print(transition_table(definition))
    console.print("\n[bold]=== Canonical Description ===[/bold]")
    console.print(definition.serialize(), markup=False, soft_wrap=True)
    return definition


def main(argv=None):
    parser = argparse.ArgumentParser(description="Turing Machine Description Inspector")
    parser.add_argument("tm", help="Path to the machine description (.tm)")
    args = parser.parse_args(argv)

    try:
        inspect_machine(args.tm)
    except (OSError, DescriptionError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
