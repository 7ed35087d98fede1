"""
Run an immigration assessment end-to-end.

Loads an applicant profile from JSON, optionally pre-fills it from a resume,
asks Gemini for an assessment and prints the result.

Usage:
    python scripts/run_assessment.py config/profile.json --user-type Student
    python scripts/run_assessment.py config/profile.json --resume cv.pdf --json
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table

from pathway_advisor.agents.profile_analysis import ProfileAnalyzer
from pathway_advisor.agents.resume_ingestion import ResumeIngestor
from pathway_advisor.models.analysis import AIAnalysisResult
from pathway_advisor.models.config import Settings
from pathway_advisor.models.profile import UserProfile, UserType
from pathway_advisor.utils.credential_manager import (
    CredentialManager,
    MissingCredentialError,
)
from pathway_advisor.utils.logger import configure_logging
from pathway_advisor.utils.prompt_loader import format_number

console = Console()


def print_result(result: AIAnalysisResult) -> None:
    """Render an assessment with rich tables and bullet lists."""
    if result.is_fallback():
        console.print(
            "[yellow][!] Live assessment unavailable; showing the default estimate[/yellow]\n"
        )

    scores = Table(title="Assessment")
    scores.add_column("Metric")
    scores.add_column("Value", justify="right")
    scores.add_row(
        "Success probability", f"{format_number(result.overall_success_probability)}%"
    )
    scores.add_row("Predicted CRS", format_number(result.crs_score_prediction))
    console.print(scores)

    if result.future_crs_predictions:
        future = Table(title="CRS projections")
        future.add_column("Scenario")
        future.add_column("CRS", justify="right")
        for scenario, value in result.future_crs_predictions.items():
            future.add_row(scenario, format_number(value))
        console.print(future)

    sections = [
        ("Strengths", result.strengths),
        ("Risk factors", result.risk_factors),
        ("Assumptions", result.assumptions),
        ("Strategic advice", result.strategic_advice),
    ]
    for title, items in sections:
        if not items:
            continue
        console.print(f"\n[bold]{title}[/bold]")
        for item in items:
            console.print(f"  - {item}")

    for title, pathways in (
        ("Recommended pathways", result.recommended_pathways),
        ("Other pathways", result.other_pathways),
    ):
        if not pathways:
            continue
        console.print(f"\n[bold]{title}[/bold]")
        for pathway in pathways:
            if isinstance(pathway, dict):
                name = pathway.get("name", "Unnamed pathway")
                description = pathway.get("description", "")
                console.print(f"  - [cyan]{name}[/cyan] {description}")
            else:
                console.print(f"  - {pathway}")


async def main(args: argparse.Namespace) -> int:
    """Run ingestion (optional) and analysis; return a process exit code."""
    settings = Settings.from_env()
    configure_logging(log_file=settings.log_file, log_level=settings.log_level)

    if not settings.gemini_api_key:
        try:
            api_key = CredentialManager().get_gemini_api_key(interactive=True)
        except MissingCredentialError as e:
            console.print(f"[red][X] {e}[/red]")
            return 1
        settings = settings.model_copy(update={"gemini_api_key": api_key})

    if not args.json:
        masked = CredentialManager.mask_credential(settings.gemini_api_key)
        console.print(f"[green][+] Using Gemini API key {masked}[/green]")

    profile_path = Path(args.profile)
    if not profile_path.exists():
        console.print(f"[red][X] Profile not found: {profile_path}[/red]")
        return 1
    profile = UserProfile.model_validate(
        json.loads(profile_path.read_text(encoding="utf-8"))
    )

    if args.resume:
        partial = await ResumeIngestor(settings).ingest(Path(args.resume))
        if partial.is_empty():
            console.print("[yellow][!] Nothing could be extracted from the resume[/yellow]")
        else:
            console.print(
                f"[green][+] Resume fields: "
                f"{', '.join(sorted(partial.model_dump(exclude_none=True)))}[/green]"
            )
            profile = profile.merge(partial)

    result = await ProfileAnalyzer(settings).analyze(profile, UserType(args.user_type))

    if args.json:
        console.print_json(result.model_dump_json(by_alias=True))
    else:
        print_result(result)
    return 0


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("profile", help="Path to the applicant profile JSON")
    parser.add_argument("--resume", help="Resume file used to pre-fill the profile")
    parser.add_argument(
        "--user-type",
        choices=[t.value for t in UserType],
        default=UserType.SKILLED_WORKER.value,
    )
    parser.add_argument("--json", action="store_true", help="Print raw JSON")
    return parser.parse_args(argv)


if __name__ == "__main__":
    sys.exit(asyncio.run(main(parse_args(sys.argv[1:]))))
