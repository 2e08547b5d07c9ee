"""Findings, per-jurisdiction reports, and their human-readable rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from civic_graph.core.exceptions import (
    CivicGraphError,
    DocumentNotFoundError,
    DuplicateIdError,
    NamespaceFormatError,
    ReferentialIntegrityError,
)
from civic_graph.core.models import ValidationFinding

DUPLICATE_ID = "duplicate_id"
NAMESPACE_FORMAT = "namespace_format"
DANGLING_REFERENCE = "dangling_reference"
MISSING_DOCUMENT = "missing_document"
SUBVIEW_EDGE_UNRESOLVED = "subview_edge_unresolved"
TIER_METADATA = "tier_metadata"

ERROR_TYPES: dict[str, type[CivicGraphError]] = {
    DUPLICATE_ID: DuplicateIdError,
    NAMESPACE_FORMAT: NamespaceFormatError,
    DANGLING_REFERENCE: ReferentialIntegrityError,
    MISSING_DOCUMENT: DocumentNotFoundError,
    SUBVIEW_EDGE_UNRESOLVED: ReferentialIntegrityError,
}

RULE = "=" * 60
SUBRULE = "-" * 50


@dataclass(slots=True)
class JurisdictionReport:
    jurisdiction: str
    findings: list[ValidationFinding] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)

    def error(self, code: str, message: str, *, location: str | None = None, suggestions: list[str] | None = None) -> None:
        self.findings.append(
            ValidationFinding(
                severity="error",
                code=code,
                message=message,
                jurisdiction=self.jurisdiction,
                location=location,
                suggestions=list(suggestions or []),
            )
        )

    def warning(self, code: str, message: str, *, location: str | None = None) -> None:
        self.findings.append(
            ValidationFinding(
                severity="warning",
                code=code,
                message=message,
                jurisdiction=self.jurisdiction,
                location=location,
            )
        )

    @property
    def errors(self) -> list[ValidationFinding]:
        return [finding for finding in self.findings if finding.is_error]

    @property
    def warnings(self) -> list[ValidationFinding]:
        return [finding for finding in self.findings if not finding.is_error]

    def errors_with_code(self, code: str) -> list[ValidationFinding]:
        return [finding for finding in self.errors if finding.code == code]


@dataclass(slots=True)
class CorpusReport:
    title: str
    jurisdictions: list[JurisdictionReport] = field(default_factory=list)

    @property
    def findings(self) -> list[ValidationFinding]:
        return [finding for report in self.jurisdictions for finding in report.findings]

    @property
    def error_count(self) -> int:
        return sum(len(report.errors) for report in self.jurisdictions)

    @property
    def warning_count(self) -> int:
        return sum(len(report.warnings) for report in self.jurisdictions)

    @property
    def passed(self) -> bool:
        return self.error_count == 0

    @property
    def exit_code(self) -> int:
        """``1`` when any error was found; warnings never affect the status."""
        return 0 if self.passed else 1

    def raise_for_errors(self, *, include_warnings: bool = False) -> None:
        """Raise the exception matching the first error finding, if any.

        With ``include_warnings`` the first finding of either severity is raised.
        """
        for finding in self.findings:
            if finding.is_error or include_warnings:
                error_type = ERROR_TYPES.get(finding.code, CivicGraphError)
                raise error_type(f"[{finding.jurisdiction}] {finding.message}")


def _format_finding(finding: ValidationFinding) -> list[str]:
    marker = "ERROR" if finding.is_error else "WARN "
    lines = [f"  {marker} {finding.message}"]
    if finding.suggestions:
        lines.append(f"        did you mean: {', '.join(finding.suggestions)}?")
    return lines


def render_report(report: CorpusReport, *, stat_labels: Iterable[tuple[str, str]] = ()) -> str:
    """Render ``report`` as the banner-framed text printed by the validators."""
    labels = list(stat_labels)
    lines = [RULE, report.title, RULE]
    for section in report.jurisdictions:
        lines.append("")
        lines.append(section.jurisdiction.upper())
        lines.append(SUBRULE)
        for key, label in labels:
            if key in section.stats:
                lines.append(f"  {label}: {section.stats[key]}")
        if not section.findings:
            lines.append("  OK    no problems found")
        for finding in section.findings:
            lines.extend(_format_finding(finding))
    lines.append("")
    lines.append(RULE)
    if report.passed and report.warning_count == 0:
        lines.append("VALIDATION PASSED - No errors or warnings")
    elif report.passed:
        lines.append(f"VALIDATION PASSED - {report.warning_count} warnings found")
    else:
        lines.append(f"VALIDATION FAILED - {report.error_count} errors found")
        if report.warning_count:
            lines.append(f"{report.warning_count} warnings found")
    lines.append(RULE)
    return "\n".join(lines)
