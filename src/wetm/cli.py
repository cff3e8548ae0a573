"""Command-line interface for wetm."""

import argparse
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console

from . import __version__
from .logging_config import setup_logging
from .models.config import TranslatorConfig
from .translator import init_converter, translate_post


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="wetm",
        description="Translate WordPress export post content to Markdown",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Translate a post body saved from the export feed
  wetm post.html -o post.md

  # Read from stdin, point images at the local images/ folder
  cat post.html | wetm - --save-scraped-images

  # Add frontmatter
  wetm post.html --frontmatter --title "Hello World" --author jane.doe
        """,
    )

    parser.add_argument(
        "input",
        help="File containing the post HTML, or - for stdin",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Markdown output file (default: stdout)",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="YAML config file",
    )

    # Translation settings
    translate_group = parser.add_argument_group("translation settings")
    translate_group.add_argument(
        "--save-scraped-images",
        action="store_true",
        help="Rewrite image references to the relative images/ folder",
    )

    # Frontmatter
    frontmatter_group = parser.add_argument_group("frontmatter")
    frontmatter_group.add_argument(
        "--frontmatter",
        action="store_true",
        help="Prepend YAML frontmatter",
    )
    frontmatter_group.add_argument(
        "--title",
        default=None,
        help="Post title",
    )
    frontmatter_group.add_argument(
        "--date",
        default=None,
        help="Post date",
    )
    frontmatter_group.add_argument(
        "--author",
        action="append",
        default=[],
        help="Author username (repeatable)",
    )

    # Logging
    log_group = parser.add_argument_group("logging")
    log_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    log_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )
    log_group.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Log file path",
    )

    return parser


def build_config(args: argparse.Namespace) -> TranslatorConfig:
    """Merge the YAML config file (if any) with command-line flags."""
    config_kwargs: dict = {}
    if args.config:
        config_kwargs = TranslatorConfig.from_yaml_file(args.config).model_dump()

    if args.save_scraped_images:
        config_kwargs["save_scraped_images"] = True
    if args.frontmatter:
        config_kwargs["add_frontmatter"] = True
    if args.log_file:
        config_kwargs["log_file"] = args.log_file

    # Log level
    if args.verbose:
        config_kwargs["log_level"] = "DEBUG"
    elif args.quiet:
        config_kwargs["log_level"] = "ERROR"

    return TranslatorConfig(**config_kwargs)


def run_translator(args: argparse.Namespace) -> int:
    """Translate the input file with given arguments."""
    console = Console(stderr=True)

    try:
        config = build_config(args)
    except Exception as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    setup_logging(
        level=config.log_level,
        log_file=str(config.log_file) if config.log_file else None,
    )

    try:
        if args.input == "-":
            content = sys.stdin.read()
        else:
            content = Path(args.input).read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot read {args.input}: {e}")
        return 1

    post_data = {
        "encoded": [content],
        "title": [args.title] if args.title else [],
        "post_date": [args.date] if args.date else [],
        "creator": args.author,
    }

    try:
        markdown = translate_post(post_data, config, init_converter())
    except Exception as e:
        console.print(f"[red]Error:[/red] {e}")
        if args.verbose:
            console.print_exception()
        return 1

    if args.output:
        args.output.write_text(markdown, encoding="utf-8")
        if not args.quiet:
            console.print(f"[green]Wrote[/green] {args.output}")
    else:
        sys.stdout.write(markdown)
        if not markdown.endswith("\n"):
            sys.stdout.write("\n")

    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run_translator(args)


if __name__ == "__main__":
    sys.exit(main())
