"""Proposal snapshot rendering.

A bid stores its proposal as one self-describing text block so that it
still reads correctly after the professional edits or deletes the
qualifications and portfolio items it referenced.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar
from uuid import UUID

from src.matchboard.models import PortfolioItem, Qualification

NONE_SELECTED = "None selected"

_Record = TypeVar("_Record", Qualification, PortfolioItem)


@dataclass(frozen=True)
class ProposalFields:
    narrative: str
    fee_proposal: str
    methodology: str
    timeline: str


def order_by_request(records: Iterable[_Record], requested_ids: Sequence[UUID]) -> list[_Record]:
    """Arrange records in the order their ids were requested.

    Duplicated ids are rendered once; ids without a record are skipped.
    """
    by_id = {record.id: record for record in records}
    ordered: list[_Record] = []
    seen: set[UUID] = set()
    for record_id in requested_ids:
        if record_id in seen or record_id not in by_id:
            continue
        seen.add(record_id)
        ordered.append(by_id[record_id])
    return ordered


def format_qualification(qualification: Qualification) -> str:
    line = f"- {qualification.title}"
    if qualification.authority:
        line += f" ({qualification.authority})"
    return line


def format_portfolio_item(item: PortfolioItem) -> str:
    line = f"- {item.title}"
    if item.location:
        line += f" ({item.location})"
    if item.units:
        line += f", {item.units} units"
    return line


def _section(lines: list[str]) -> str:
    return "\n".join(lines) if lines else NONE_SELECTED


def render_proposal(
    fields: ProposalFields,
    qualifications: Sequence[Qualification],
    portfolio_items: Sequence[PortfolioItem],
) -> str:
    """Assemble the immutable proposal text stored on a bid."""
    text = (
        f"{fields.narrative}\n"
        "\n"
        "--- FEE PROPOSAL ---\n"
        f"{fields.fee_proposal}\n"
        "\n"
        "--- METHODOLOGY & APPROACH ---\n"
        f"{fields.methodology}\n"
        "\n"
        "--- PROPOSED TIMELINE ---\n"
        f"{fields.timeline}\n"
        "\n"
        "--- SELECTED QUALIFICATIONS ---\n"
        f"{_section([format_qualification(q) for q in qualifications])}\n"
        "\n"
        "--- SELECTED PORTFOLIO ITEMS ---\n"
        f"{_section([format_portfolio_item(p) for p in portfolio_items])}"
    )
    return text.strip()
