"""Rich output formatting helpers for the SkillCert CLI.

Provides consistent, tier- and severity-colored terminal output for trust
reports, issued certificates, verification results and adoption scores.

Color Mapping:
    CERTIFIED = bold green, CONDITIONAL = yellow, SUSPICIOUS = dark orange,
    REJECTED = bold red
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from skillcert.core.adoption import AdoptionScore
from skillcert.core.attestation import Certificate, CertificateFacts
from skillcert.core.scoring import BadgeTier, Severity, TrustReport
from skillcert.core.scoring.aggregator import category_weight

_SEVERITY_STYLES: dict[str, str] = {
    Severity.CRITICAL.value: "bold red",
    Severity.HIGH.value: "yellow",
    Severity.MEDIUM.value: "cyan",
    Severity.LOW.value: "green",
    Severity.INFO.value: "dim",
}

_BADGE_STYLES: dict[BadgeTier, str] = {
    BadgeTier.CERTIFIED: "bold green",
    BadgeTier.CONDITIONAL: "yellow",
    BadgeTier.SUSPICIOUS: "dark_orange",
    BadgeTier.REJECTED: "bold red",
}

console = Console()


def _name(value: Any) -> str:
    return str(getattr(value, "value", value))


def severity_style(severity: Any) -> str:
    """Return the Rich style string for a severity (member or raw string)."""
    return _SEVERITY_STYLES.get(_name(severity), "white")


def badge_style(badge: BadgeTier | str) -> str:
    try:
        return _BADGE_STYLES[BadgeTier(badge)]
    except ValueError:
        return "white"


def print_trust_report(report: TrustReport) -> None:
    """Print the overall result, category breakdown and findings.

    Args:
        report: Aggregated trust report for one skill.
    """
    badge_text = Text(report.badge.value.upper(), style=badge_style(report.badge))
    header = Text.assemble(
        ("Overall: ", "bold"), (f"{report.overall}/100", ""),
        ("  Badge: ", "bold"), badge_text,
    )
    console.print(Panel(header, title="Trust Report"))

    cat_table = Table(title="Category Scores", show_header=True)
    cat_table.add_column("Category", style="bold")
    cat_table.add_column("Score", justify="right")
    cat_table.add_column("Weight", justify="right")
    cat_table.add_column("Findings", justify="right")
    for name, result in report.categories.items():
        cat_table.add_row(
            _name(name),
            f"{result.score:g}",
            f"{category_weight(name):.2f}",
            str(len(result.findings)),
        )
    console.print(cat_table)

    if report.findings:
        findings_table = Table(title="Findings", show_header=True)
        findings_table.add_column("Severity", justify="center")
        findings_table.add_column("ID")
        findings_table.add_column("Category")
        findings_table.add_column("Title")
        findings_table.add_column("Evidence", style="dim")
        for f in report.findings:
            findings_table.add_row(
                Text(_name(f.severity).upper(), style=severity_style(f.severity)),
                f.id, _name(f.category), f.title, f.evidence[:80],
            )
        console.print(findings_table)
    else:
        console.print("[green]No findings.[/green]")


def print_facts(facts: CertificateFacts) -> None:
    table = Table(show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for key, value in facts.to_dict().items():
        table.add_row(key, str(value))
    console.print(table)


def print_certificate(certificate: Certificate) -> None:
    """Print an issued certificate with its attestation token."""
    console.print(Panel(
        Text(certificate.facts.certification_id, style="bold"),
        title="Certificate Issued",
    ))
    print_facts(certificate.facts)
    console.print(f"  Badge URL:   {certificate.badge_url}")
    console.print("  Attestation:")
    # soft_wrap keeps the token copy-pasteable as one line
    console.print(certificate.attestation, soft_wrap=True)


def print_verification(
    valid: bool, facts: CertificateFacts | None, expired: bool | None
) -> None:
    """Print the outcome of verifying an attestation token."""
    if not valid:
        console.print(Panel("[bold red]INVALID[/bold red]", title="Attestation"))
        return
    if expired:
        console.print(Panel(
            "[bold yellow]VALID SIGNATURE, EXPIRED[/bold yellow]",
            title="Attestation",
        ))
    else:
        console.print(Panel("[bold green]VALID[/bold green]", title="Attestation"))
    if facts is not None:
        print_facts(facts)


def print_adoption_score(score: AdoptionScore) -> None:
    console.print(Panel(
        Text(score.tier.value, style="bold"), title="Adoption",
    ))
    table = Table(title="Signal Breakdown", show_header=True)
    table.add_column("Signal", style="bold")
    table.add_column("Score", justify="right")
    table.add_row("Popularity", str(score.popularity))
    table.add_row("Freshness", str(score.freshness))
    table.add_row("Maturity", str(score.maturity))
    table.add_row("Combined", str(score.combined))
    console.print(table)

