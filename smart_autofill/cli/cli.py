"""
cli.py - command line interface for the autofill engine
Features:
- evaluate: simulate typing a test text and print a summary table
- suggest: show the three guesses for a prefix
- repl: interactive loop with accept/override feedback and model saving
- Uses Rich for tables and formatting
"""

from __future__ import annotations
import argparse
import json
import sys
from typing import List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from smart_autofill.context.tokenizer import tokenize
from smart_autofill.core.autofill import SmartWord
from smart_autofill.core.feedback_learner import is_word
from smart_autofill.errors import AutofillError
from smart_autofill.evaluation import EvaluationReport, build_engine, simulate_typing
from smart_autofill.utils.config_manager import AutofillConfig, load_config
from smart_autofill.utils.loader import load_corpus, load_vocabulary
from smart_autofill.utils.logger_utils import setup_logging, time_block
from smart_autofill.utils.model_store import load_model, save_model

# initialise console for rich output
console = Console()


def _type_prefix(engine: SmartWord, prefix: str, word_position: int = 0) -> List[Optional[str]]:
    """Feed a whole prefix and return the guesses after its last letter."""
    guesses: List[Optional[str]] = [None] * engine.cfg.suggestion_count
    for pos, letter in enumerate(prefix):
        guesses = engine.guess(letter, pos, word_position)
    return guesses


def _guess_table(prefix: str, guesses: Sequence[Optional[str]], engine: SmartWord) -> Table:
    table = Table(title=f"Guesses for '{prefix}'", box=box.SIMPLE, show_edge=False)
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Word", style="bold")
    table.add_column("Weight", justify="right", style="magenta")
    for i, w in enumerate(guesses, 1):
        if w is None:
            table.add_row(str(i), "[dim]-[/dim]", "")
        else:
            table.add_row(str(i), w, str(engine.model.weight(w)))
    return table


def _report_table(report: EvaluationReport) -> Table:
    t = Table(title="Evaluation Summary", box=box.MINIMAL)
    t.add_column("Metric", style="cyan")
    t.add_column("Value", style="white", justify="right")
    t.add_row("Words", str(report.words))
    t.add_row("Letters in text", str(report.letters_total))
    t.add_row("Letters typed", str(report.letters_typed))
    t.add_row("Keystrokes saved", str(report.keystrokes_saved))
    t.add_row("Guess calls", str(report.guesses))
    t.add_row("Hits", str(report.hits))
    t.add_row("Accuracy", f"{report.accuracy:.4f}")
    t.add_row("Word hit rate", f"{report.word_hit_rate:.4f}")
    t.add_row("Time", f"{report.elapsed:.3f}s")
    return t


class CLI:
    """Interactive session: type a prefix, pick a guess or type the real word."""

    def __init__(self, engine: SmartWord, model_path: Optional[str] = None):
        self.engine = engine
        self.model_path = model_path
        self.word_position = 0
        self.running = True

    def run(self):
        console.rule("[bold magenta]Smart Autofill[/bold magenta]")
        console.print("[cyan]Type the start of a word to see guesses.[/cyan]")
        console.print("Commands: /quit /save /stats\n")

        while self.running:
            try:
                fragment = Prompt.ask("[green]You[/green]", default="").strip().lower()
                if not fragment:
                    continue
                if fragment.startswith("/"):
                    self._handle_command(fragment)
                    continue
                self._process_prefix(fragment)
            except (EOFError, KeyboardInterrupt):
                self._exit()
                break

    def _handle_command(self, cmd: str):
        if cmd.startswith("/quit"):
            self._exit()
            return
        if cmd == "/save":
            self._save()
            return
        if cmd == "/stats":
            console.print(Panel(json.dumps(self.engine.stats(), indent=2), title="Stats", border_style="cyan"))
            return
        console.print(f"[red]Unknown command:[/red] {cmd}")

    def _process_prefix(self, prefix: str):
        guesses = _type_prefix(self.engine, prefix, self.word_position)
        console.print(_guess_table(prefix, guesses, self.engine))

        chosen = Prompt.ask("Pick # / type the word / Enter to skip", default="").strip().lower()
        if not chosen:
            return
        if chosen.isdigit() and 1 <= int(chosen) <= len(guesses) and guesses[int(chosen) - 1]:
            word = guesses[int(chosen) - 1]
            self.engine.feedback(True, word)
            console.print(f"[green]Accepted:[/green] {word}")
        elif is_word(chosen):
            accepted = chosen in guesses
            self.engine.feedback(accepted, chosen)
            console.print(f"[cyan]{'Accepted' if accepted else 'Learned'}:[/cyan] {chosen}")
        else:
            console.print("[red]Not a lowercase word, ignored.[/red]")
            return
        self.word_position += 1

    def _save(self):
        if not self.model_path:
            console.print("[yellow]No --model path given, nothing saved.[/yellow]")
            return
        try:
            save_model(self.engine, self.model_path)
            console.print("[green]Model saved.[/green]")
        except AutofillError as e:
            console.print(f"[red]Save failed:[/red] {escape(str(e))}")

    def _exit(self):
        console.rule("[red]Exiting[/red]")
        if self.model_path:
            self._save()
        self.running = False


def _build(args, cfg: AutofillConfig) -> SmartWord:
    with time_block("vocabulary load"):
        vocab = load_vocabulary(args.words)
    corpus = load_corpus(args.old_messages) if args.old_messages else []
    with time_block("training"):
        return build_engine(vocab, corpus, cfg)


def cmd_evaluate(args, cfg: AutofillConfig) -> int:
    engine = _build(args, cfg)
    test_words = load_corpus(args.test)
    with time_block("evaluation"):
        report = simulate_typing(engine, test_words)
    console.print(_report_table(report))
    if args.json:
        try:
            with open(args.json, "w", encoding="utf-8") as fh:
                json.dump(report.to_dict(), fh, indent=2)
        except OSError as e:
            raise AutofillError(f"cannot write {args.json}: {e}") from e
        console.print(f"Full JSON written to: {args.json}")
    return 0


def cmd_suggest(args, cfg: AutofillConfig) -> int:
    engine = _build(args, cfg)
    context = [t for raw in (args.context or []) for t in tokenize(raw)]
    if context:
        second = context[-2] if len(context) > 1 else None
        engine.set_context(context[-1], second)
    guesses = _type_prefix(engine, args.prefix.lower(), len(context))
    console.print(_guess_table(args.prefix, guesses, engine))
    return 0


def cmd_repl(args, cfg: AutofillConfig) -> int:
    if args.resume:
        if not args.model:
            raise AutofillError("--resume needs --model")
        engine = load_model(args.model, cfg)
    elif not args.words:
        raise AutofillError("a vocabulary file is required unless --resume is given")
    else:
        engine = _build(args, cfg)
    CLI(engine, model_path=args.model).run()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="smart-autofill", description="Letter-by-letter word autofill")
    parser.add_argument("--config", help="JSON file overriding engine settings")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--log-file", help="also write logs to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    ev = sub.add_parser("evaluate", help="simulate typing a test text")
    ev.add_argument("words", help="vocabulary file, one word per line")
    ev.add_argument("old_messages", help="old messages used for training")
    ev.add_argument("test", help="text to type")
    ev.add_argument("--json", help="write the report as JSON")
    ev.set_defaults(func=cmd_evaluate)

    sg = sub.add_parser("suggest", help="show guesses for a prefix")
    sg.add_argument("words", help="vocabulary file, one word per line")
    sg.add_argument("prefix")
    sg.add_argument("--old-messages", help="old messages used for training")
    sg.add_argument("--context", nargs="*", help="words typed before the prefix")
    sg.set_defaults(func=cmd_suggest)

    rp = sub.add_parser("repl", help="interactive session")
    rp.add_argument("words", nargs="?", help="vocabulary file, one word per line (not needed with --resume)")
    rp.add_argument("--old-messages", help="old messages used for training")
    rp.add_argument("--model", help="JSON model file to save to")
    rp.add_argument("--resume", action="store_true", help="start from --model instead of training")
    rp.set_defaults(func=cmd_repl)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)
    cfg = load_config(args.config)
    try:
        return args.func(args, cfg)
    except AutofillError as e:
        console.print(f"[red]error:[/red] {escape(str(e))}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
