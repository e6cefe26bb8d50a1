"""
Conversion operations — walk a Markdown tree and write Neorg files.

Channel-independent: the CLI calls these, and they return models rather
than printing. A single file's I/O failure becomes a failed
ConversionRecord; whether the run stops there is up to ``keep_going``.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterator
from pathlib import Path

from md2norg.core.models.conversion import ConversionRecord, ConversionReport
from md2norg.core.services.neorg_transforms import transform

logger = logging.getLogger(__name__)


class ConvertError(Exception):
    """Raised when a conversion run cannot start at all."""


# ── Discovery ───────────────────────────────────────────────────────


def iter_markdown_files(
    input_dir: Path,
    recursive: bool = False,
    extension: str = "md",
) -> Iterator[Path]:
    """Yield source files under ``input_dir`` in sorted order.

    Only regular files whose extension is exactly ``extension`` are
    yielded. Without ``recursive``, only direct children are considered.
    """
    if not input_dir.is_dir():
        raise ConvertError(f"Input directory not found: {input_dir}")

    suffix = f".{extension}"
    candidates = input_dir.rglob("*") if recursive else input_dir.iterdir()

    for path in sorted(candidates):
        if path.suffix == suffix and path.is_file():
            yield path


def resolve_output_path(
    source: Path,
    input_dir: Path,
    output_dir: Path | None = None,
    extension: str = "norg",
) -> Path:
    """Compute where the converted file for ``source`` goes.

    Without ``output_dir`` the result sits next to the source. With it,
    the source's position below ``input_dir`` is mirrored under
    ``output_dir``.
    """
    if output_dir is None:
        return source.with_suffix(f".{extension}")
    return (output_dir / source.relative_to(input_dir)).with_suffix(f".{extension}")


# ── Single File ─────────────────────────────────────────────────────


def write_document(path: Path, text: str) -> None:
    """Write ``text`` as UTF-8, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def convert_file(source: Path, target: Path, replace: bool = False) -> ConversionRecord:
    """Convert one Markdown file to Neorg.

    Args:
        source: Markdown file to read.
        target: Neorg file to write.
        replace: Delete ``source`` once ``target`` is written.

    Returns:
        ConversionRecord — failed (never raised) on read/decode/write errors.
    """
    start = time.monotonic()

    try:
        content = source.read_text(encoding="utf-8")
        write_document(target, transform(content))
        if replace:
            source.unlink()
    except (OSError, UnicodeDecodeError) as e:
        elapsed = int((time.monotonic() - start) * 1000)
        return ConversionRecord.failure(
            str(source), str(target), error=str(e), duration_ms=elapsed,
        )

    elapsed = int((time.monotonic() - start) * 1000)
    logger.info("Converted: %s -> %s", source, target)
    if replace:
        logger.info("Removed original: %s", source)
    return ConversionRecord.success(
        str(source), str(target), duration_ms=elapsed, replaced=replace,
    )


# ── Batch ───────────────────────────────────────────────────────────


def convert_tree(
    input_dir: Path,
    output_dir: Path | None = None,
    recursive: bool = False,
    replace: bool = False,
    keep_going: bool = False,
    source_extension: str = "md",
    target_extension: str = "norg",
) -> ConversionReport:
    """Convert every Markdown file under ``input_dir``.

    Args:
        input_dir: Root to search for source files.
        output_dir: Mirror root for outputs (None = beside each source).
        recursive: Descend into subdirectories.
        replace: Delete each source after its output is written.
        keep_going: On a file failure, log it and continue. Otherwise the
            run stops at that file and the report is marked aborted.
        source_extension: Extension of files to convert.
        target_extension: Extension given to converted files.

    Returns:
        ConversionReport with one record per file attempted.

    Raises:
        ConvertError: If ``input_dir`` is not a directory, or the settings
            would make a file overwrite itself.
    """
    if output_dir is None and source_extension == target_extension:
        raise ConvertError(
            f"Source and target extension are both '.{source_extension}' "
            "and no output directory is set — files would overwrite themselves."
        )

    report = ConversionReport(
        input_dir=str(input_dir),
        output_dir=str(output_dir) if output_dir else None,
    )

    for source in iter_markdown_files(input_dir, recursive, source_extension):
        target = resolve_output_path(source, input_dir, output_dir, target_extension)
        record = convert_file(source, target, replace=replace)
        report.add(record)

        if record.failed:
            if not keep_going:
                logger.error("Conversion of %s failed, aborting: %s", source, record.error)
                report.aborted = True
                break
            logger.warning("Skipping %s: %s", source, record.error)

    logger.info(
        "Run finished: %d/%d converted (%s)",
        report.converted,
        report.total,
        report.status,
    )
    return report
