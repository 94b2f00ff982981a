"""
Command-line entry point.

Reads a normalized analysis record (camelCase JSON) from a file or
stdin, runs the privacy pipeline, and prints the report as JSON.
"""

from __future__ import annotations

import argparse
import json
import sys

import dotenv
import pydantic

from privacy_assistant import config
from privacy_assistant.models import signals
from privacy_assistant.pipeline import analysis_pipeline, normalizer
from privacy_assistant.utils import logger
from privacy_assistant.utils.errors import PrivacyAssistantError, get_error_message
from privacy_assistant.utils.serialization import to_json_dict

log = logger.create_logger("Main")


def _read_input(path: str | None) -> str:
    if path is None or path == "-":
        return sys.stdin.read()
    with open(path, encoding="utf-8") as handle:
        return handle.read()


def main(argv: list[str] | None = None) -> int:
    """Analyse one normalized record and print the report.

    Returns:
        Process exit status: 0 on success, 1 when the input could
        not be read, parsed or validated.
    """
    dotenv.load_dotenv()
    settings = config.get_settings()

    parser = argparse.ArgumentParser(prog="privacy-assistant", description=__doc__)
    parser.add_argument("path", nargs="?", help="JSON file with a normalized analysis record (default: stdin)")
    args = parser.parse_args(argv)

    try:
        normalized = signals.NormalizedAnalysisInput.model_validate_json(_read_input(args.path))
        normalizer.validate_normalized_analysis(normalized)
    except (OSError, UnicodeDecodeError, pydantic.ValidationError, PrivacyAssistantError) as error:
        log.error("Could not load normalized analysis", {"error": get_error_message(error)})
        return 1

    log.section(f"Privacy Analysis: {normalized.page.hostname or 'unknown host'}")
    logger.start_log_file(normalized.page.hostname)
    try:
        result = analysis_pipeline.run_analysis(normalized)
    finally:
        logger.end_log_file()

    rendered = json.dumps(to_json_dict(result), indent=settings.json_indent or None)
    print(rendered)

    if settings.write_to_file:
        saved = logger.save_report_file(normalized.page.hostname, rendered)
        if saved:
            log.info("Report saved", {"path": saved})
    return 0


if __name__ == "__main__":
    sys.exit(main())
