"""Discord report builder.

Turns the current flavor snapshot (and optionally the cached one) into the
list of Discord messages to post: a header followed by one message per menu
section that has something to say.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence

from .diff import diff_items
from .models import Item, Snapshot
from .utils import bold, italic

HEADER_MESSAGE = "Here are today's New City flavors :icecream:"

ATTRIBUTE_EMOJI = {
    "E": ":egg:",
    "G": ":ear_of_rice:",
    "S": ":seedling:",
    "A": ":tumbler_glass:",
    "N": ":peanuts:",
}


@dataclass(frozen=True)
class RenderOptions:
    """Display switches for one report.

    only_category: keep a single menu section (e.g. "New City Originals").
    include_unchanged_notice: write a "no new flavors" line instead of
        staying silent when a side of the diff is empty.
    compare_against_previous: frame the report as added/removed since the
        cached run; when off every current flavor is simply listed.
    """
    only_category: Optional[str] = None
    include_unchanged_notice: bool = False
    compare_against_previous: bool = False


@dataclass
class Report:
    messages: List[str] = field(default_factory=list)
    # Things worth logging that were left out of the messages.
    notes: List[str] = field(default_factory=list)


def format_attributes(codes: Sequence[str]) -> str:
    """Return the emoji parenthetical for a flavor's allergen codes, or ""."""
    if not codes:
        return ""
    mapped = [ATTRIBUTE_EMOJI.get(code.upper(), code) for code in codes]
    return "({})".format(", ".join(mapped))


def _added_line(item: Item) -> str:
    return f"• {item.name}: {italic(item.description)} {format_attributes(item.attribute_codes)}\n"


def _write_subtitle(
    parts: List[str],
    notes: List[str],
    items: Sequence[Item],
    category: str,
    side: str,
    options: RenderOptions,
) -> None:
    if not options.compare_against_previous:
        return

    if items:
        parts.append(f"Flavors {side} since the last run:\n")
        return

    no_changes = f"No new flavors were {side} since the last run."
    if options.include_unchanged_notice:
        parts.append(italic(no_changes) + "\n")
    else:
        notes.append(f"{category}: {no_changes}")


def _category_body(
    category: str,
    added: Sequence[Item],
    removed: Sequence[Item],
    show_title: bool,
    options: RenderOptions,
    notes: List[str],
) -> str:
    parts: List[str] = []

    if show_title:
        parts.append(bold(category) + "\n")

    _write_subtitle(parts, notes, added, category, "added", options)
    parts.extend(_added_line(it) for it in added)

    _write_subtitle(parts, notes, removed, category, "removed", options)
    if options.compare_against_previous:
        parts.extend(f"• {it.name}\n" for it in removed)

    return "".join(parts)


def build_report(
    current: Mapping[str, Sequence[Item]],
    previous: Optional[Mapping[str, Sequence[Item]]] = None,
    options: RenderOptions = RenderOptions(),
) -> Report:
    """Render the messages for `current`, diffed against `previous`.

    Sections are emitted in sorted order so the same snapshots always give
    the same messages.  If no section produced a body and unchanged notices
    are off, the report has no messages at all: there is nothing to post.
    """
    report = Report(messages=[bold(HEADER_MESSAGE)])
    baseline: Mapping[str, Sequence[Item]] = previous or {}

    for category in sorted(current):
        if options.only_category and category != options.only_category:
            continue

        items = current[category]
        if options.compare_against_previous:
            added, removed = diff_items(items, baseline.get(category, []))
        else:
            added, removed = list(items), []

        show_title = (
            not options.only_category
            and len(current) > 1
            and bool(added or removed)
        )
        body = _category_body(category, added, removed, show_title, options, report.notes)
        if body:
            report.messages.append(body)

    if len(report.messages) == 1 and not options.include_unchanged_notice:
        report.messages = []

    return report


def render(
    current: Snapshot,
    previous: Optional[Snapshot] = None,
    options: RenderOptions = RenderOptions(),
) -> List[str]:
    return build_report(current, previous, options).messages


__all__ = [
    "HEADER_MESSAGE",
    "ATTRIBUTE_EMOJI",
    "RenderOptions",
    "Report",
    "format_attributes",
    "build_report",
    "render",
]
