#!/usr/bin/env python3
"""
Chat Transcript Formatter CLI
Turn a pasted, exported or shared AI conversation into a speaker-labeled transcript.
"""

import argparse
import sys
from pathlib import Path
from typing import BinaryIO, List, Optional, TextIO
import logging

from config_manager import ConfigManager, get_nested_value
from fetcher import PageFetcher
from models import FormatResult
from parsers.common import ExtractionError, ExtractorErrorHandler
from parsers.pipeline import TranscriptPipeline

VERSION = "0.1.0"

logger = logging.getLogger(__name__)

def setup_logging(verbose: bool = False):
    """Setup logging configuration"""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="format-transcript",
        description="Format an AI conversation as an alternating speaker-labeled transcript",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  format-transcript conversation.txt
  pbpaste | format-transcript - --output transcript.txt
  format-transcript export.json --json
  format-transcript --url https://claude.ai/share/3f88bb56-06f8-49bf-87b3-65633b9b34ab
        """
    )

    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="Input file, or '-' to read from stdin (default: stdin)"
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--url", "-u",
        help="Fetch a shared conversation page instead of reading input"
    )
    source.add_argument(
        "--json",
        action="store_true",
        help="Treat input as a JSON document (export or page data)"
    )
    source.add_argument(
        "--html",
        action="store_true",
        help="Treat input as saved page HTML"
    )

    parser.add_argument(
        "--output", "-o",
        help="Write the transcript to this file instead of stdout"
    )

    parser.add_argument(
        "--config", "-c",
        help="Configuration file path (default: ~/.config/transcript_formatter/config.yaml)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Chat Transcript Formatter v{VERSION}"
    )

    return parser

def read_input(path: str, stdin: BinaryIO) -> bytes:
    """Read raw input bytes from a file path or the given stdin stream"""
    if path == "-":
        return stdin.read()
    return Path(path).expanduser().read_bytes()

def run(args: argparse.Namespace, config: dict, stdin: BinaryIO,
        fetcher: Optional[PageFetcher] = None) -> FormatResult:
    """Produce a FormatResult for the parsed arguments"""
    pipeline = TranscriptPipeline(config)

    if args.url:
        fetcher = fetcher or PageFetcher(config)
        logger.info(f"Fetching conversation from {args.url}...")
        markup = fetcher.fetch(args.url)
        return pipeline.format_html(markup)

    raw = read_input(args.input, stdin)
    if args.json:
        return pipeline.format_document(raw)
    if args.html:
        return pipeline.format_html(raw)
    return pipeline.format_input(raw)

def main(argv: Optional[List[str]] = None, stdin: Optional[BinaryIO] = None,
         stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None,
         fetcher: Optional[PageFetcher] = None) -> int:
    stdin = stdin or sys.stdin.buffer
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = ConfigManager(args.config).load_config()

        try:
            result = run(args, config, stdin, fetcher)
        except ExtractionError as e:
            logger.error(f"Fetch failed: {e}")
            print(ExtractorErrorHandler.get_user_friendly_message(e.error_type, str(e)), file=stderr)
            return 1

        if not result.success:
            logger.error(f"No transcript produced ({result.error_type})")
            print(result.reason, file=stderr)
            return 1

        if not result.transcript:
            logger.warning("Every recovered turn was empty; nothing to write")

        transcript = result.transcript
        if transcript and get_nested_value(config, 'output.trailing_newline', True):
            transcript += "\n"

        if args.output:
            output_path = Path(args.output).expanduser()
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(transcript, encoding='utf-8')
            print(f"✅ Formatted {result.turn_count} turns ({result.method})", file=stderr)
            print(f"📁 Saved to: {output_path}", file=stderr)
        else:
            stdout.write(transcript)

        return 0

    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        return 1

if __name__ == "__main__":
    sys.exit(main())
