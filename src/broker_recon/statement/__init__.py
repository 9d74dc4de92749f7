"""Activity statement parsing into portfolio snapshots."""

from broker_recon.statement.models import PortfolioPosition, PortfolioSnapshot, PortfolioSummary
from broker_recon.statement.parser import parse_statement
from broker_recon.statement.sections import SectionKind, classify_section

__all__ = [
    "PortfolioPosition",
    "PortfolioSnapshot",
    "PortfolioSummary",
    "SectionKind",
    "classify_section",
    "parse_statement",
]
