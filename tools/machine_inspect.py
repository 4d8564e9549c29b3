import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from simulator.constants import BLANK
from simulator.graph import to_dot, to_mermaid, write_dot
from simulator.rules import CompileError
from simulator.transition_table import compile_source

console = Console()

def load_machine(machine_file):
    """Compile a machine source file."""
    path = Path(machine_file)
    if not path.exists():
        raise FileNotFoundError(f"Machine file {path} not found.")
    with open(path, "r", encoding="utf-8") as f:
        return compile_source(f.read())


def transition_grid(table):
    """Build a state x symbol table, one cell per transition."""
    states = list(dict.fromkeys(t.from_state for t in table.transitions))
    symbols = sorted({t.read for t in table.transitions}, key=lambda s: (s == BLANK, s))

    grid = Table(title="Transition Table", show_header=True, header_style="bold magenta")
    grid.add_column("State", justify="center")
    for symbol in symbols:
        grid.add_column(escape(symbol), justify="center")

    for state in states:
        row = [state]
        for symbol in symbols:
            lookup = table.lookup(state, symbol)
            if lookup.matched:
                t = lookup.transition
                row.append(escape(f"{t.write},{t.move} {t.to_state}"))
            else:
                row.append("-")
        grid.add_row(*row)
    return grid


def main(argv=None):
    parser = argparse.ArgumentParser(description="Turing Machine Inspector")
    parser.add_argument("--file", required=True, help="Machine source file, e.g., machines/palindrome.tm")
    parser.add_argument("--format", choices=["table", "mermaid", "dot"], default="table", help="What to print")
    parser.add_argument("--output", help="Write DOT output to this path instead of printing it")
    args = parser.parse_args(argv)

    try:
        compiled = load_machine(args.file)
    except (FileNotFoundError, CompileError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    if args.format == "table":
        console.print(transition_grid(compiled.table))
        console.print(f"[cyan]{len(compiled.graph.nodes)} states, {len(compiled.table)} transitions.[/cyan]")
    elif args.format == "mermaid":
        console.print(to_mermaid(compiled.graph), markup=False, highlight=False, emoji=False)
    elif args.output:
        write_dot(compiled.graph, args.output)
        console.print(f"[green]DOT written to {args.output}[/green]")
    else:
        console.print(to_dot(compiled.graph), markup=False, highlight=False, emoji=False)
    return 0

if __name__ == "__main__":
    sys.exit(main())
