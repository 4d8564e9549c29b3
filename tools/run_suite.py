# tools/run_suite.py

import argparse
import json
import sys
from datetime import datetime, timezone

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from config.config_loader import load_config
from logger.logger import JSONLogger
from simulator.constants import Status
from simulator.evaluator import SuiteCase, evaluate_batch, summarize_results
from simulator.rules import CompileError
from tools.machine_inspect import load_machine

console = Console()

# === Utility Loaders ===
def load_inputs(inputs_file):
    """One input per line; an empty line is the empty input, a trailing newline is not."""
    with open(inputs_file, "r", encoding="utf-8") as f:
        return f.read().splitlines()

# === Main Suite Runner ===
def run_suite(table, inputs, max_steps=5000, show_progress=True, batch_size=64):
    cases = []
    with Progress(
            SpinnerColumn(),
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            TextColumn("{task.completed}/{task.total} Inputs"),
            TimeElapsedColumn(),
            console=console,
            disable=not show_progress
    ) as progress:

        task = progress.add_task("[cyan]Evaluating...", total=len(inputs))

        for start in range(0, len(inputs), batch_size):
            batch = inputs[start:start + batch_size]
            accepted = evaluate_batch(table, batch, max_steps)
            for case_id, (input_string, ok) in enumerate(zip(batch, accepted), start=start + 1):
                cases.append(SuiteCase(case_id, input_string, Status.ACCEPTED if ok else Status.REJECTED))
            progress.update(task, advance=len(batch))

    return cases


def results_table(cases):
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", justify="center")
    table.add_column("Input", justify="center")
    table.add_column("Verdict", justify="center")
    for case in cases:
        color = "green" if case.status == Status.ACCEPTED else "red"
        table.add_row(str(case.id), escape(case.input) or "<empty>", f"[{color}]{case.status.value}[/{color}]")
    return table


def log_results(logger, machine_file, cases):
    timestamp = datetime.now(timezone.utc).isoformat()
    entries = [
        {"machine": machine_file, "id": case.id, "input": case.input, "status": case.status.value, "timestamp": timestamp}
        for case in cases
    ]
    logger.log_accepted([e for e in entries if e["status"] == Status.ACCEPTED.value])
    logger.log_rejected([e for e in entries if e["status"] == Status.REJECTED.value])
    summary = summarize_results(cases)
    logger.log_summary([{"machine": machine_file, "timestamp": timestamp, **summary}])
    return summary

# === CLI ===
def main(argv=None):
    parser = argparse.ArgumentParser(description="Evaluate a list of inputs against a Turing machine.")
    parser.add_argument("--file", required=True, help="Machine source file")
    parser.add_argument("--inputs", required=True, help="Path to inputs file (one input per line)")
    parser.add_argument("--config", help="Runtime config JSON (defaults apply when omitted)")
    parser.add_argument("--max_steps", type=int, help="Override the iteration bound per input")
    parser.add_argument("--json", action="store_true", help="Print results as JSON lines instead of a table")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        compiled = load_machine(args.file)
        inputs = load_inputs(args.inputs)
    except (FileNotFoundError, ValueError, TypeError) as e:
        # CompileError is a ValueError
        label = "Compile error" if isinstance(e, CompileError) else "Error"
        console.print(f"[red]{label}: {escape(str(e))}[/red]")
        return 1

    max_steps = args.max_steps or config["max_batch_steps"]
    cases = run_suite(compiled.table, inputs, max_steps=max_steps, show_progress=not args.json)

    logger = JSONLogger(config["output_directory"], config["log_file_prefix"])
    logger.rotate()
    summary = log_results(logger, args.file, cases)

    if args.json:
        for case in cases:
            print(json.dumps({"id": case.id, "input": case.input, "status": case.status.value}))
    else:
        console.print(results_table(cases))
        console.print(
            f"[green]{summary['accepted']} accepted[/green], "
            f"[red]{summary['rejected']} rejected[/red] of {summary['total']}."
        )
    return 0

if __name__ == "__main__":
    sys.exit(main())
