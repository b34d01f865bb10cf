import argparse
import logging
import os
import sys

from rich.console import Console
from rich.markup import escape
from rich.prompt import Confirm

from renamer.exceptions import RenameFilesError
from renamer.logger import setup_logging
from renamer.renamer import DRY_RUN, ERROR, RENAMED, RenamerModule
from renamer.validator import suggest_braced

__version__ = "0.4.4"

console = Console()
log = logging.getLogger("rename_files")

PREVIEW_COUNT = 5


def build_parser():
    parser = argparse.ArgumentParser(
        prog="rename-files",
        description=(
            "Filename find and (optionally) replace using regex. Files are only "
            "renamed if --rep is provided AND --test-run is not."
        ),
    )
    parser.add_argument("regex", help="Regex to search filenames with")
    parser.add_argument(
        "--rep",
        dest="replacement",
        help="Replacement for regex matches. Use $1 or ${1}, etc. to reference capture groups",
    )
    parser.add_argument("-r", "--recurse", action="store_true", help="Recurse into child directories")
    parser.add_argument(
        "-t", "--test-run", action="store_true",
        help="Show replacements that would occur, but don't rename files",
    )
    parser.add_argument("--root", default=".", help="Directory to search (default: current directory)")
    parser.add_argument("-y", "--yes", action="store_true", help="Rename without asking for confirmation")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More log output (-vv for debug)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _display(path, root_path):
    return escape(os.path.relpath(path, root_path))


def warn_ambiguous(renamer):
    warnings = renamer.check_replacement()
    for warning in warnings:
        log.warning(warning.message())
    if warnings:
        console.print(
            f"[yellow]Warning:[/yellow] ambiguous capture reference(s) in "
            f"[red]{escape(renamer.template.text)}[/red]; did you mean "
            f"[blue]{escape(suggest_braced(renamer.template.text))}[/blue]?"
        )
    return warnings


def print_matches(candidates, root_path):
    for c in candidates:
        console.print(f"Match found: [bold black on green]{_display(c.path, root_path)}[/bold black on green]")


def print_mapping(label, result, root_path):
    c = result.candidate
    console.print(
        f"{label}: [bold black on green]{_display(c.path, root_path)}[/bold black on green]"
        f" ~~> [bold red on blue]{_display(c.new_path, root_path)}[/bold red on blue]"
    )


def print_results(results, root_path):
    for res in results:
        if res.status == RENAMED:
            print_mapping("Renaming", res, root_path)
        elif res.status == DRY_RUN:
            print_mapping("--test-run mapping", res, root_path)
        elif res.status == ERROR:
            console.print(f"[red][ERROR][/red] Failed to rename {_display(res.candidate.path, root_path)}: {escape(res.reason)}")
        else:
            console.print(f"[dim][SKIP] {_display(res.candidate.path, root_path)}: {escape(res.reason)}[/dim]")


def confirm_renames(renamer, root_path):
    mapping = list(renamer.rename_map().items())
    console.print(f"[yellow]Found {len(mapping)} entries to rename.[/yellow]")
    for old, new in mapping[:PREVIEW_COUNT]:
        console.print(f" [dim]{_display(old, root_path)}[/dim] -> [bold cyan]{_display(new, root_path)}[/bold cyan]")
    if len(mapping) > PREVIEW_COUNT:
        console.print(f" ... and {len(mapping) - PREVIEW_COUNT} more.")
    return Confirm.ask("Proceed with renaming?", default=False, console=console)


def run(args):
    root_path = args.root
    renamer = RenamerModule(
        args.regex,
        replacement=args.replacement,
        recurse=args.recurse,
        dry_run=args.test_run,
    )
    warn_ambiguous(renamer)

    candidates = renamer.scan(root_path)

    if renamer.template is None:
        print_matches(candidates, root_path)
    elif candidates:
        if not args.test_run and not args.yes and not confirm_renames(renamer, root_path):
            console.print("[dim]Nothing renamed.[/dim]")
            return 0
        results = renamer.execute()
        print_results(results, root_path)
        failed = sum(1 for r in results if r.status == ERROR)
        if failed:
            console.print(f"[red]{failed} rename(s) failed.[/red]")

    console.print(f"Total matches: [cyan]{len(candidates)}[/cyan]")
    return 0


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.test_run:
        console.print("[bold magenta]!!! TEST RUN: no files will be renamed !!![/bold magenta]")

    try:
        return run(args)
    except RenameFilesError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1


def cli():
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console.print("\n[red]Aborted by user.[/red]")
        sys.exit(130)


if __name__ == "__main__":
    cli()
