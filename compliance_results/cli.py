"""CLI entry point for compliance results reporting."""

import argparse
import asyncio
import json
import logging
import sys

from pydantic import ValidationError

from compliance_results.config import ResultsConfig
from compliance_results.errors import ComplianceResultsError
from compliance_results.models.outcome import OutcomeCategory
from compliance_results.pipeline import collect_report
from compliance_results.render import format_output, log_report_summary, render_table
from compliance_results.sources.loading import load_source_manifest

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_ERROR = 2


async def run(
    source_key: str,
    source_config_json: str,
    config: ResultsConfig,
    output_json: bool = False,
) -> int:
    """Read the results archive, print the report and return exit code."""
    log = logging.getLogger("compliance_results")

    try:
        log.info("Loading source: %s", source_key)
        manifest = load_source_manifest(source_key)
        source_config = manifest.config_cls(**json.loads(source_config_json))

        async with manifest.source_factory(source_config) as source:
            async with source.open() as stream:
                rows = await asyncio.to_thread(collect_report, stream, config)
    except (json.JSONDecodeError, ValidationError) as exc:
        log.error("Invalid source configuration: %s", exc)
        return EXIT_ERROR
    except ComplianceResultsError as exc:
        log.error("%s", exc)
        return EXIT_ERROR

    log_report_summary(log, rows)

    if output_json:
        print(json.dumps(format_output(rows), indent=2))
    else:
        render_table(rows, sys.stdout)

    has_failures = any(row.category == OutcomeCategory.FAILED for row in rows)
    return EXIT_FAILURES if has_failures else EXIT_OK


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Show the results of compliance tests"
    )
    parser.add_argument(
        "--source",
        default="file",
        help="Source key (file, http)",
    )
    parser.add_argument(
        "--source-config",
        required=True,
        help='JSON configuration for the source (e.g. \'{"path": "results.tar"}\')',
    )
    parser.add_argument(
        "--member-suffix",
        default=".tar.gz",
        help="Suffix of the nested results archive inside the outer archive",
    )
    parser.add_argument(
        "--plugin",
        default="all",
        help="Plugin whose JUnit reports are shown ('all' for every plugin)",
    )
    parser.add_argument(
        "--include-skipped",
        action="store_true",
        help="Keep skipped test cases in the report",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        dest="output_json",
        help="Print a JSON summary instead of a table",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    config = ResultsConfig(
        member_suffix=args.member_suffix,
        plugin=args.plugin,
        exclude_skipped=not args.include_skipped,
    )
    exit_code = asyncio.run(
        run(
            source_key=args.source,
            source_config_json=args.source_config,
            config=config,
            output_json=args.output_json,
        )
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
