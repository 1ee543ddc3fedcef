"""TalentMatch CLI - candidate/job matching over a JSON payload."""

import json
import logging
import sys
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from talentmatch.config import DEFAULT_TOP_N, LOG_FORMAT, LOG_LEVEL
from talentmatch.explainer.reasons import build_match_reasons, find_missing_skills
from talentmatch.matching.policy import ScoringPolicy, policy_from_config
from talentmatch.matching.scorer import score_breakdown
from talentmatch.records.loader import load_request
from talentmatch.schemas.match import JobMatch, MatchTier
from talentmatch.schemas.request import MatchRequest, MatchResponse, RequestContext
from talentmatch.services.match_service import (
    find_candidate,
    find_job,
    match_candidates,
    recommend_jobs,
)
from talentmatch.utils import TalentMatchError

app = typer.Typer(help="TalentMatch - rank candidates and jobs by compatibility")
console = Console()

TIER_STYLES = {
    MatchTier.EXCELLENT: "green",
    MatchTier.GOOD: "blue",
    MatchTier.FAIR: "yellow",
    MatchTier.POOR: "red",
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log pipeline steps"),
) -> None:
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.INFO if verbose else LOG_LEVEL,
        format=LOG_FORMAT,
    )


def _load(payload: Path) -> tuple[MatchRequest, ScoringPolicy]:
    """Load the payload and the effective policy, exiting on error."""
    if not payload.exists():
        console.print(f"[red]Error: Payload file not found: {payload}[/red]")
        raise typer.Exit(1)

    try:
        return load_request(payload), policy_from_config()
    except TalentMatchError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def rank(
    payload: Path = typer.Option(..., "--payload", "-p", help="Path to match payload JSON"),
    company: str | None = typer.Option(
        None, "--company", "-c", help="Company id (overrides the payload's job_filter)"
    ),
    user: str = typer.Option("cli", "--user", "-u", help="Requesting user id"),
    output_json: bool = typer.Option(
        False, "--json", help="Output results as JSON instead of pretty format"
    ),
) -> None:
    """Rank candidates against the company's active jobs."""
    request, policy = _load(payload)
    if company:
        request.job_filter.company_id = company

    context = RequestContext(user_id=user, company_id=company)
    try:
        response = match_candidates(request, context, policy)
    except TalentMatchError as e:
        console.print(f"[red]Error during matching: {e}[/red]")
        raise typer.Exit(1)

    if output_json:
        _output_json(response.model_dump(mode="json"))
    else:
        _output_ranked(response)


@app.command()
def recommend(
    payload: Path = typer.Option(..., "--payload", "-p", help="Path to match payload JSON"),
    candidate_id: str = typer.Option(..., "--candidate", help="Candidate id"),
    top_n: int = typer.Option(
        DEFAULT_TOP_N, "--top-n", "-n", min=1, help="Number of top jobs to return"
    ),
    output_json: bool = typer.Option(
        False, "--json", help="Output results as JSON instead of pretty format"
    ),
) -> None:
    """Recommend the best-fitting active jobs for one candidate."""
    request, policy = _load(payload)

    candidate = find_candidate(request, candidate_id)
    if candidate is None:
        console.print(f"[red]Error: Candidate not found: {candidate_id}[/red]")
        raise typer.Exit(1)

    matches = recommend_jobs(candidate, request.jobs, policy, top_n=top_n)

    if output_json:
        _output_json([match.model_dump(mode="json") for match in matches])
    else:
        _output_recommendations(matches)


@app.command()
def score(
    payload: Path = typer.Option(..., "--payload", "-p", help="Path to match payload JSON"),
    candidate_id: str = typer.Option(..., "--candidate", help="Candidate id"),
    job_id: str = typer.Option(..., "--job", help="Job id"),
) -> None:
    """Show the per-factor score breakdown for one candidate and one job."""
    request, policy = _load(payload)

    candidate = find_candidate(request, candidate_id)
    job = find_job(request, job_id)
    if candidate is None or job is None:
        missing = candidate_id if candidate is None else job_id
        console.print(f"[red]Error: Record not found: {missing}[/red]")
        raise typer.Exit(1)

    breakdown = score_breakdown(candidate, job, policy)
    weights = policy.weights.model_dump()

    table = Table(title=f"{candidate.name or candidate.id} x {job.title or job.id}")
    table.add_column("Factor", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Weight", justify="right", style="dim")

    for factor, weight in weights.items():
        table.add_row(factor.replace("_", " ").title(), f"{getattr(breakdown, factor):.0f}", f"{weight:.2f}")
    table.add_row("[bold]Total[/bold]", f"[bold]{breakdown.total:.1f}[/bold]", "")
    console.print(table)

    reasons = build_match_reasons(candidate, job, breakdown, policy)
    for reason in reasons:
        console.print(f"  • {reason}")
    missing_skills = find_missing_skills(candidate, job, policy)
    if missing_skills:
        console.print(f"[yellow]Missing skills:[/yellow] {', '.join(missing_skills)}")


@app.command(name="policy")
def show_policy() -> None:
    """Display the effective scoring policy."""
    try:
        policy = policy_from_config()
    except TalentMatchError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    table = Table(title="Scoring Policy")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    for factor, weight in policy.weights.model_dump().items():
        table.add_row(f"{factor} weight", f"{weight:.2f}")
    table.add_row("Relevance threshold", f"{policy.relevance_threshold:g}")
    table.add_row("Result cap", str(policy.result_cap))
    table.add_row("Relocation score", f"{policy.relocation_score:g}")
    table.add_row("Experience decay / year", f"{policy.experience_decay:g}")
    table.add_row("Skill match threshold", f"{policy.skill_match_threshold:g}")

    console.print(table)


def _output_json(data) -> None:
    """Output data as JSON to stdout."""
    json.dump(obj=data, fp=sys.stdout, indent=2)
    sys.stdout.write("\n")


def _output_ranked(response: MatchResponse) -> None:
    """Output ranked candidates as a table."""
    if not response.results:
        console.print("[yellow]No candidates reached the relevance threshold.[/yellow]")
        return

    table = Table(title=f"Top {len(response.results)} candidates")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Candidate", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Avg", justify="right", style="dim")
    table.add_column("Best job")

    for i, result in enumerate(iterable=response.results, start=1):
        candidate = result.candidate
        style = TIER_STYLES[result.tier]
        best_job = "-"
        if result.best_job_match:
            best_job = result.best_job_match.title or result.best_job_match.id
        table.add_row(
            str(i),
            candidate.name or candidate.id,
            f"[{style}]{result.match_score}%[/{style}]",
            f"{result.average_match_score}%",
            best_job,
        )

    console.print(table)


def _output_recommendations(matches: list[JobMatch]) -> None:
    """Output recommended jobs in pretty console format."""
    if not matches:
        console.print("[yellow]No active jobs to recommend.[/yellow]")
        return

    for i, match in enumerate(iterable=matches, start=1):
        job = match.job
        header = f"[bold]#{i} {job.title or job.id}[/bold]"

        content = []
        if job.location:
            content.append(f"[cyan]Location:[/cyan] {job.location}")
        content.append(f"[cyan]Match Score:[/cyan] {match.match_score}% ({match.tier.value})")

        if match.match_reasons:
            content.append("\n[cyan]Why it's a match:[/cyan]")
            for reason in match.match_reasons:
                content.append(f"  • {reason}")

        if match.missing_skills:
            content.append("\n[cyan]Skills to develop:[/cyan]")
            content.append(f"  {', '.join(match.missing_skills[:7])}")
            if len(match.missing_skills) > 7:
                content.append(f"  ... and {len(match.missing_skills) - 7} more")

        panel = Panel(
            renderable="\n".join(content),
            title=header,
            border_style=TIER_STYLES[match.tier],
        )
        console.print(panel)


if __name__ == "__main__":
    app()
