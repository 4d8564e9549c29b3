# app.py

import argparse
import time
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt, IntPrompt, Confirm
from rich.table import Table
from rich.text import Text

from config.config_loader import DEFAULT_CONFIG_PATH, load_config, save_config
from logger.logger import JSONLogger
from simulator.constants import Status
from simulator.evaluator import make_suite_cases, run_suite_cases, summarize_results
from simulator.graph import to_mermaid
from simulator.rules import CompileError
from simulator.samples import PALINDROME, PALINDROME_INPUTS
from simulator.turing_machine import TuringMachine

console = Console()

STATUS_COLORS = {
    Status.IDLE: "white",
    Status.RUNNING: "cyan",
    Status.PAUSED: "yellow",
    Status.ACCEPTED: "green",
    Status.REJECTED: "red",
}

MIN_PLAY_INTERVAL_MS = 50

# === Utilities ===
def load_runtime_config(path=DEFAULT_CONFIG_PATH):
    if Path(path).exists():
        return load_config(path)
    return load_config()

def read_source(machine_file):
    if not machine_file:
        return PALINDROME
    with open(machine_file, "r", encoding="utf-8") as f:
        return f.read()

def render_tape(machine, radius=7):
    """Tape cells around the head, the head cell highlighted."""
    table = Table(show_header=True, header_style="dim", box=None)
    cells = machine.tape_window(radius)
    for index, _ in cells:
        table.add_column(str(index), justify="center")
    color = STATUS_COLORS[machine.status]
    row = []
    for index, symbol in cells:
        if index == machine.head:
            row.append(Text(f"[{symbol}]", style=f"bold {color}"))
        else:
            row.append(Text(f" {symbol} "))
    table.add_row(*row)
    return table

def render_status(machine):
    color = STATUS_COLORS[machine.status]
    line = (
        f"[bold {color}]{machine.status.value}[/bold {color}]  "
        f"state=[bold]{machine.current_state}[/bold]  head={machine.head}  "
        f"steps={machine.step_count}  input='{escape(machine.input_string)}'"
    )
    active = machine.active_transition()
    if active is not None:
        line += f"  next=#{active.rule_index} {escape(active.label)} -> {active.to_state}"
    if machine.last_error:
        line += f"\n[red]{escape(machine.last_error)}[/red]"
    return line

def show_machine(machine, config):
    console.print(render_tape(machine, config["tape_window"]))
    console.print(render_status(machine))

def show_main_menu():
    console.print("\n[bold cyan]Turing Machine Simulator[/bold cyan]")
    console.print("[1] Step forward")
    console.print("[2] Step back")
    console.print("[3] Play until halt")
    console.print("[4] Load input")
    console.print("[5] Move head")
    console.print("[6] Load machine file")
    console.print("[7] Run test suite")
    console.print("[8] Show diagram (Mermaid)")
    console.print("[9] Edit config")
    console.print("[0] Exit")


def play(machine, interval_ms, on_step=None):
    """Call step() on a fixed cadence until the run halts or is interrupted."""
    delay = max(MIN_PLAY_INTERVAL_MS, interval_ms) / 1000
    machine.play()
    try:
        while machine.status == Status.RUNNING:
            machine.step()
            if on_step is not None:
                on_step(machine)
            if machine.status == Status.RUNNING:
                time.sleep(delay)
    except KeyboardInterrupt:
        machine.pause()
    return machine.status


def handle_load_machine(machine, config):
    machine_file = Prompt.ask("Machine file (empty for the palindrome sample)", default=config.get("machine_file", ""))
    try:
        machine.compile(read_source(machine_file))
    except (OSError, CompileError) as e:
        console.print(f"[red]Could not load machine: {escape(str(e))}[/red]")
        console.print("[yellow]Keeping the previously loaded machine.[/yellow]")
        return
    config["machine_file"] = machine_file
    console.print(f"[green]Compiled {len(machine.table)} transitions over {len(machine.graph.nodes)} states.[/green]")


def handle_test_suite(machine, config, logger, inputs):
    raw = Prompt.ask("Inputs (comma separated, '-' for empty)", default=",".join(inputs))
    inputs = ["" if s.strip() == "-" else s.strip() for s in raw.split(",")]
    cases = run_suite_cases(machine.table, make_suite_cases(inputs), config["max_batch_steps"])

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", justify="center")
    table.add_column("Input", justify="center")
    table.add_column("Verdict", justify="center")
    for case in cases:
        color = STATUS_COLORS[case.status]
        table.add_row(str(case.id), escape(case.input) or "<empty>", f"[{color}]{case.status.value}[/{color}]")
    console.print(table)

    summary = summarize_results(cases)
    logger.rotate()
    logger.log_summary([{"source": config.get("machine_file") or "sample", **summary}])
    return inputs


def handle_edit_config(config, config_path=DEFAULT_CONFIG_PATH, machine=None):
    console.print("\n[bold]Edit Configuration[/bold]")

    candidate = {
        **config,
        "max_history": IntPrompt.ask("History size", default=config["max_history"]),
        "max_batch_steps": IntPrompt.ask("Max steps per test input", default=config["max_batch_steps"]),
        "play_interval_ms": IntPrompt.ask("Play interval (ms)", default=config["play_interval_ms"]),
        "tape_window": IntPrompt.ask("Tape cells shown each side of the head", default=config["tape_window"])
    }

    try:
        save_config(candidate, config_path)
    except (ValueError, TypeError) as e:
        console.print(f"[red]Config not saved: {escape(str(e))}[/red]")
        return False

    config.update(candidate)
    if machine is not None:
        machine.set_max_history(config["max_history"])
    console.print("[green]Configuration updated successfully.[/green]")
    return True


def interactive_main(config, config_path=DEFAULT_CONFIG_PATH):
    logger = JSONLogger(config["output_directory"], config["log_file_prefix"])
    machine = TuringMachine(max_history=config["max_history"])
    machine.load_input(config["default_input"])
    try:
        machine.compile(read_source(config["machine_file"]))
    except (OSError, CompileError) as e:
        console.print(f"[red]Could not load {config['machine_file'] or 'sample'}: {escape(str(e))}[/red]")
    inputs = list(PALINDROME_INPUTS)

    while True:
        show_machine(machine, config)
        show_main_menu()
        choice = Prompt.ask("\nChoose an option", choices=[str(i) for i in range(10)], default="1")

        if choice == "1":
            machine.step()
        elif choice == "2":
            machine.step_back()
        elif choice == "3":
            play(machine, config["play_interval_ms"], on_step=lambda m: show_machine(m, config))
        elif choice == "4":
            machine.load_input(Prompt.ask("Input", default=machine.input_string))
        elif choice == "5":
            index = IntPrompt.ask("Head position", default=machine.head)
            if index < 0:
                console.print("[red]Head position must be 0 or more.[/red]")
            else:
                machine.set_head_position(index)
        elif choice == "6":
            handle_load_machine(machine, config)
        elif choice == "7":
            inputs = handle_test_suite(machine, config, logger, inputs)
        elif choice == "8":
            active = machine.active_transition()
            console.print(to_mermaid(
                machine.graph,
                machine.current_state,
                machine.status,
                active.rule_index if active is not None else None,
            ), markup=False, highlight=False, emoji=False)
        elif choice == "9":
            handle_edit_config(config, config_path, machine)
        elif choice == "0":
            if machine.step_count and Confirm.ask("Log this run?", default=False):
                logger.log_run(machine, config.get("machine_file") or "sample")
            console.print("[bold green]Goodbye![/bold green]")
            break

# === CLI Mode for Automation ===
def cli_main(args, config):
    machine = TuringMachine(max_history=config["max_history"])
    machine.load_input(args.input if args.input is not None else config["default_input"])
    try:
        machine.compile(read_source(args.file or config["machine_file"]))
    except (OSError, CompileError) as e:
        console.print(f"[red]Compile error: {escape(str(e))}[/red]")
        return 1

    machine.run(args.max_steps or config["max_batch_steps"])
    show_machine(machine, config)
    JSONLogger(config["output_directory"], config["log_file_prefix"]).log_run(machine, args.file or "sample")
    return 0 if machine.status == Status.ACCEPTED else 2

def main():
    parser = argparse.ArgumentParser(description="Turing Machine Simulator")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Runtime config JSON")
    parser.add_argument("--file", help="Machine source file (defaults to the palindrome sample)")
    parser.add_argument("--input", help="Run this input to completion and exit")
    parser.add_argument("--max_steps", type=int, help="Step bound for --input runs")
    args = parser.parse_args()

    config = load_runtime_config(args.config)

    if args.input is not None:
        raise SystemExit(cli_main(args, config))
    if args.file:
        config["machine_file"] = args.file
    interactive_main(config, args.config)

if __name__ == "__main__":
    main()
