"""Markdown rendering of resolved GeneXus objects.

Output layout:

- <path>.md for every procedure
- <package>.md index for every documentation package ("root" if none)
- <kb_name>.md (or README.md) listing all objects of the knowledge base

Groupings by package and by kind are emitted sorted by key so that repeated
runs over the same export produce identical files.
"""

import logging
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from gxdocgen import __version__
from gxdocgen.constants import KIND_PROCEDURE
from gxdocgen.models import ResolvedObject

logger = logging.getLogger(__name__)

ROOT_PACKAGE = "root"
UNNAMED_PAGE = "unnamed"
README_PAGE = "README"

_UNSAFE_FILENAME_CHARS = '/\\:*?"<>|'


@dataclass
class GenerationSummary:
    """Outcome of a documentation generation run."""
    output_dir: Path
    procedure_count: int = 0
    undocumented: list[str] = field(default_factory=list)  # Procedures without /** */ comments
    files: list[Path] = field(default_factory=list)


def sanitize_file_name(name: str, default: str) -> str:
    """Make a name taken from the export safe for use as a file name.

    Path separators are replaced, so the result never leaves the output
    directory. Blank names map to default.
    """
    name = name.strip()
    for char in _UNSAFE_FILENAME_CHARS:
        name = name.replace(char, "-")
    return name or default


def sanitize_package_name(package: str) -> str:
    """Make a package name safe for use as a file name."""
    return sanitize_file_name(package, ROOT_PACKAGE)


def _page_name(proc: ResolvedObject) -> str:
    return sanitize_file_name(proc.path, UNNAMED_PAGE)


def _package_of(obj: ResolvedObject) -> str:
    if obj.documentation is not None and obj.documentation.package:
        return sanitize_package_name(obj.documentation.package)
    return ROOT_PACKAGE


def _footer() -> str:
    return f"*Generated by GXDocGen v{__version__}*\n"


def render_procedure(proc: ResolvedObject) -> str:
    """Render the Markdown page of a single procedure."""
    doc = proc.documentation
    lines = []

    title = doc.summary if doc is not None and doc.summary else proc.name
    lines.append(f"# {title}\n")

    if doc is not None and doc.package.strip():
        lines.append(
            f"**Package:** [`{doc.package}`](./{sanitize_package_name(doc.package)}.md)\n"
        )

    if proc.signature is not None and proc.signature.raw_signature:
        lines.append("## Signature\n")
        lines.append(f"```genexus\n{proc.signature.raw_signature}\n```\n")

    if doc is not None and doc.deprecated:
        notice = "⚠️ **DEPRECATED**"
        if doc.deprecation_note:
            notice += f": {doc.deprecation_note}"
        lines.append(notice + "\n")

    description = doc.description if doc is not None and doc.description else proc.xml_description
    if description:
        lines.append("## Description\n")
        lines.append(description + "\n")

    if doc is not None and doc.parameters:
        lines.append("## Parameters\n")
        lines.append("| Name | Direction | Type | Description |")
        lines.append("|------|-----------|------|-------------|")
        for param in doc.parameters:
            lines.append(
                f"| {param.name or '-'} | {param.direction or 'IN'} "
                f"| {param.type or '-'} | {param.description or '-'} |"
            )
        lines.append("")

    if doc is not None and doc.return_value:
        lines.append("## Return\n")
        lines.append(doc.return_value + "\n")

    lines.append("---\n")
    if doc is not None and doc.is_auto_generated:
        lines.append(
            "*⚠️ Auto-generated from XML metadata. "
            "Add `/** */` annotations for detailed documentation.*\n"
        )
    elif doc is not None:
        if doc.author:
            lines.append(f"**Author:** {doc.author}  ")
        if doc.created:
            lines.append(f"**Created:** {doc.created}  ")

    lines.append("")
    lines.append(_footer())
    return "\n".join(lines)


def render_package_index(package: str, procedures: list[ResolvedObject]) -> str:
    """Render the index page of a documentation package."""
    lines = [f"# Package: {package}\n", "## Procedures\n"]
    lines.append("| Procedure | Summary |")
    lines.append("|-----------|---------|")

    for proc in procedures:
        summary = proc.name
        if proc.documentation is not None and proc.documentation.summary:
            summary = proc.documentation.summary
        lines.append(f"| [{proc.path}](./{_page_name(proc)}.md) | {summary} |")

    lines.append("\n---")
    lines.append(_footer())
    return "\n".join(lines)


def render_readme(
    objects: list[ResolvedObject],
    kb_name: str,
    generated_at: datetime | None = None
) -> str:
    """Render the knowledge base overview page."""
    if generated_at is None:
        generated_at = datetime.now()

    lines = [f"# {kb_name} Documentation\n" if kb_name else "# GeneXus Documentation\n"]
    lines.append(f"Generated on: {generated_at:%Y-%m-%d %H:%M:%S}\n")
    lines.append(f"Total Objects: **{len(objects)}**\n")

    kind_counts = Counter(obj.kind or "Unknown" for obj in objects)
    if kind_counts:
        lines.append("## Object Statistics\n")
        lines.append("| Type | Count |")
        lines.append("|------|-------|")
        for kind in sorted(kind_counts):
            lines.append(f"| {kind} | {kind_counts[kind]} |")
        lines.append("")

    package_counts = Counter(
        _package_of(obj) for obj in objects
        if obj.kind == KIND_PROCEDURE and obj.documentation is not None
    )
    if package_counts:
        lines.append("## Packages\n")
        lines.append("| Package | Procedures |")
        lines.append("|---------|------------|")
        for package in sorted(package_counts):
            lines.append(f"| [{package}](./{package}.md) | {package_counts[package]} |")
        lines.append("")

    lines.append("## Extracted Objects\n")
    if not objects:
        lines.append("*No objects found in the XPZ file.*")
    else:
        lines.append("| Name | Type | Path |")
        lines.append("|------|------|------|")
        for obj in objects:
            lines.append(
                f"| {obj.name or '*unnamed*'} | {obj.kind or 'Unknown'} | `{obj.path or '-'}` |"
            )

    lines.append("\n---")
    lines.append(_footer())
    return "\n".join(lines)


def generate_docs(
    objects: list[ResolvedObject],
    kb_name: str,
    output_dir: Path,
    generated_at: datetime | None = None
) -> GenerationSummary:
    """Write Markdown documentation for all resolved objects.

    Args:
        objects: Objects returned by extraction, in archive order
        kb_name: Knowledge base name (may be empty)
        output_dir: Directory to write into (created if missing)
        generated_at: Timestamp shown in the README (defaults to now)

    Returns:
        GenerationSummary describing what was written

    Raises:
        OSError: If the output directory or README cannot be written
    """
    logger.info(f"Generating Markdown documentation in: {output_dir}")
    output_dir.mkdir(parents=True, exist_ok=True)
    summary = GenerationSummary(output_dir=output_dir)

    procedures = [obj for obj in objects if obj.kind == KIND_PROCEDURE]
    summary.procedure_count = len(procedures)

    packages: dict[str, list[ResolvedObject]] = defaultdict(list)
    for proc in procedures:
        if proc.documentation is None:
            summary.undocumented.append(proc.path)
            logger.warning(f"Procedure '{proc.name}' has no documentation comments")

        page = output_dir / f"{_page_name(proc)}.md"
        try:
            page.write_text(render_procedure(proc), encoding="utf-8")
            summary.files.append(page)
        except OSError as e:
            logger.warning(f"Failed to generate docs for {proc.name}: {e}")

        packages[_package_of(proc)].append(proc)

    for package in sorted(packages):
        index = output_dir / f"{package}.md"
        try:
            index.write_text(render_package_index(package, packages[package]), encoding="utf-8")
            summary.files.append(index)
        except OSError as e:
            logger.warning(f"Failed to generate package index {package}: {e}")

    readme = output_dir / f"{sanitize_file_name(kb_name, README_PAGE)}.md"
    readme.write_text(render_readme(objects, kb_name, generated_at), encoding="utf-8")
    summary.files.append(readme)

    return summary
