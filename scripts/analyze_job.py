"""
CLI Entry Point: Analyze a Job Posting

Usage:
    python scripts/analyze_job.py --url https://example.com/jobs/123
    python scripts/analyze_job.py --file posting.txt --user-id alice
    python scripts/analyze_job.py --text "Senior Backend Engineer ..." --score-only

Prints the analysis as JSON on stdout; logs go to stderr.
Exits 1 when the analysis fails.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.common.config import Config
from src.common.logger import setup_logging
from src.job_analysis.acquisition import ContentAcquirer
from src.job_analysis.engine import JobAnalysisEngine
from src.job_analysis.scoring import compute_score_breakdown
from src.job_analysis.types import AcquisitionError, JobAnalysisInput

logger = logging.getLogger("analyze_job")


def build_input(args: argparse.Namespace) -> JobAnalysisInput:
    """Build the analysis request from whichever source flag was given."""
    if args.url:
        return JobAnalysisInput(content=args.url, is_url=True, user_id=args.user_id)

    if args.file:
        path = Path(args.file)
        if not path.exists():
            raise FileNotFoundError(f"Posting file not found: {args.file}")
        content = path.read_text(encoding="utf-8")
    else:
        content = args.text

    return JobAnalysisInput(content=content, is_url=False, user_id=args.user_id)


async def score_only(job_input: JobAnalysisInput) -> dict:
    """Acquire the posting text and score it without calling any AI provider."""
    posting = await ContentAcquirer().acquire(job_input)
    breakdown = compute_score_breakdown(posting.description)
    return {
        "success": True,
        "source": posting.source,
        "applicationEmail": posting.application_email,
        "score": breakdown.to_dict(),
    }


async def run(args: argparse.Namespace) -> int:
    job_input = build_input(args)

    if args.score_only:
        try:
            output = await score_only(job_input)
        except AcquisitionError as e:
            output = {"success": False, "error": str(e)}
    else:
        result = await JobAnalysisEngine().analyze_job(job_input)
        output = result.to_dict()

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0 if output.get("success") else 1


def main():
    """Main CLI function."""
    parser = argparse.ArgumentParser(
        description="Analyze a job posting (pasted text, file or URL)"
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", help="Job posting URL to scrape and analyze")
    source.add_argument("--file", help="Path to a text file with the posting")
    source.add_argument("--text", help="Posting text passed inline")
    parser.add_argument(
        "--user-id",
        default="anonymous",
        help="User id recorded with the analysis"
    )
    parser.add_argument(
        "--log-level",
        default=Config.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (logs go to stderr)"
    )
    parser.add_argument(
        "--log-format",
        default=Config.LOG_FORMAT,
        choices=["simple", "json"],
        help="Log line format"
    )
    parser.add_argument(
        "--score-only",
        action="store_true",
        help="Only compute the deterministic posting score (no AI calls)"
    )

    args = parser.parse_args()
    setup_logging(level=args.log_level, format=args.log_format)

    try:
        # Scoring alone makes no AI calls, so it runs without API keys
        if args.score_only:
            Config.validate_thresholds()
        else:
            Config.validate()
        logger.debug(Config.summary())
        exit_code = asyncio.run(run(args))
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
