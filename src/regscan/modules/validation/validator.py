"""Structural markup checks that complement the rule engine."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from bs4 import BeautifulSoup, Doctype, Tag

from .models import ValidationIssue, ValidationResult

logger = logging.getLogger(__name__)

REFERENCE_ATTRIBUTES = ("aria-labelledby", "aria-describedby", "aria-controls")
HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")
INTERACTIVE_ROLES = {"button", "link", "checkbox", "menuitem", "tab", "switch"}


def _position(tag: Tag) -> tuple[int, int]:
    line = tag.sourceline or 1
    column = (tag.sourcepos or 0) + 1
    return line, column


def css_path(tag: Tag) -> str:
    """Short CSS-like selector: nearest id anchor, else a nth-of-type chain from the root."""
    parts: list[str] = []
    current: Tag | None = tag
    while isinstance(current, Tag) and current.name != "[document]":
        element_id = current.get("id")
        if element_id:
            parts.append(f"#{element_id}")
            break
        parent = current.parent
        part = current.name
        if isinstance(parent, Tag):
            siblings = parent.find_all(current.name, recursive=False)
            if len(siblings) > 1:
                # Tag equality is structural; match by identity
                position = next(i for i, sibling in enumerate(siblings) if sibling is current)
                part += f":nth-of-type({position + 1})"
        parts.append(part)
        current = parent
    return " > ".join(reversed(parts))


def is_interactive(tag: Tag) -> bool:
    name = tag.name
    if name == "a":
        return tag.has_attr("href")
    if name in ("button", "select", "textarea", "details"):
        return True
    if name == "input":
        return str(tag.get("type", "")).lower() != "hidden"
    return str(tag.get("role", "")).lower() in INTERACTIVE_ROLES


class StructuralValidator:
    """Run parser-level checks on serialized markup.

    Uses BeautifulSoup's ``html.parser`` because it records source line and
    column for every tag.
    """

    def __init__(self) -> None:
        self._checks: list[Callable[[BeautifulSoup], Iterator[ValidationIssue]]] = [
            self._check_doctype,
            self._check_lang,
            self._check_title,
            self._check_duplicate_ids,
            self._check_missing_references,
            self._check_empty_headings,
            self._check_nested_interactive,
        ]

    def validate(self, markup: str) -> ValidationResult:
        soup = BeautifulSoup(markup, "html.parser")
        issues: list[ValidationIssue] = []
        for check in self._checks:
            issues.extend(check(soup))
        logger.debug("Structural validation found %d issue(s)", len(issues))
        return ValidationResult.from_issues(issues)

    def _check_doctype(self, soup: BeautifulSoup) -> Iterator[ValidationIssue]:
        if not any(isinstance(item, Doctype) for item in soup.contents):
            yield ValidationIssue("missing-doctype", "Document has no <!DOCTYPE> declaration", 1, 1)

    def _check_lang(self, soup: BeautifulSoup) -> Iterator[ValidationIssue]:
        html = soup.find("html")
        if html is None:
            yield ValidationIssue("missing-lang", "Document has no <html> element", 1, 1, "html")
            return
        if not str(html.get("lang", "")).strip():
            line, column = _position(html)
            yield ValidationIssue(
                "missing-lang", "<html> element has no lang attribute", line, column, "html"
            )

    def _check_title(self, soup: BeautifulSoup) -> Iterator[ValidationIssue]:
        title = soup.find("title")
        if title is None:
            yield ValidationIssue("missing-title", "Document has no <title>", 1, 1, "head")
        elif not title.get_text(strip=True):
            line, column = _position(title)
            yield ValidationIssue("missing-title", "<title> is empty", line, column, "title")

    def _check_duplicate_ids(self, soup: BeautifulSoup) -> Iterator[ValidationIssue]:
        seen: set[str] = set()
        for tag in soup.find_all(id=True):
            element_id = str(tag["id"])
            if element_id in seen:
                line, column = _position(tag)
                yield ValidationIssue(
                    "no-dup-id",
                    f'Duplicate id "{element_id}"',
                    line,
                    column,
                    f"{tag.name}#{element_id}",
                )
            seen.add(element_id)

    def _check_missing_references(self, soup: BeautifulSoup) -> Iterator[ValidationIssue]:
        ids = {str(tag["id"]) for tag in soup.find_all(id=True)}
        for label in soup.find_all("label", attrs={"for": True}):
            target = str(label["for"]).strip()
            if target and target not in ids:
                line, column = _position(label)
                yield ValidationIssue(
                    "no-missing-references",
                    f'<label for="{target}"> references a missing id',
                    line,
                    column,
                    css_path(label),
                )
        for attribute in REFERENCE_ATTRIBUTES:
            for tag in soup.find_all(attrs={attribute: True}):
                for target in str(tag[attribute]).split():
                    if target not in ids:
                        line, column = _position(tag)
                        yield ValidationIssue(
                            "no-missing-references",
                            f'{attribute}="{target}" references a missing id',
                            line,
                            column,
                            css_path(tag),
                        )

    def _check_empty_headings(self, soup: BeautifulSoup) -> Iterator[ValidationIssue]:
        for heading in soup.find_all(list(HEADING_TAGS)):
            if heading.get_text(strip=True):
                continue
            if heading.get("aria-label") or heading.get("aria-labelledby"):
                continue
            if any(img.get("alt") for img in heading.find_all("img")):
                continue
            line, column = _position(heading)
            yield ValidationIssue(
                "empty-heading",
                f"<{heading.name}> has no text content",
                line,
                column,
                css_path(heading),
            )

    def _check_nested_interactive(self, soup: BeautifulSoup) -> Iterator[ValidationIssue]:
        for tag in soup.find_all(True):
            if not is_interactive(tag):
                continue
            for ancestor in tag.parents:
                if isinstance(ancestor, Tag) and is_interactive(ancestor):
                    line, column = _position(tag)
                    yield ValidationIssue(
                        "nested-interactive",
                        f"<{tag.name}> is nested inside interactive <{ancestor.name}>",
                        line,
                        column,
                        css_path(tag),
                    )
                    break
