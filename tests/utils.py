"""Test helpers for stringtie_gf modules."""

from pathlib import Path


def make_inputs(tmp_path: Path) -> tuple[Path, Path, Path]:
    """Create a staged BAM and GTF and return ``(bam, gtf, output)``.

    Args:
        tmp_path: Root temporary path.

    Returns:
        Paths to the BAM file, the GTF file and a not-yet-created output
        directory.
    """
    inputs = tmp_path / "in"
    inputs.mkdir(parents=True, exist_ok=True)
    bam = inputs / "a.bam"
    gtf = inputs / "b.gtf"
    bam.write_bytes(b"BAM\x01")
    gtf.write_text("chr1\tsrc\texon\t1\t10\t.\t+\t.\tgene_id \"g1\";\n")
    return bam, gtf, tmp_path / "out" / "run1"


def make_stub(path: Path, exit_code: int = 0, record: Path | None = None) -> Path:
    """Write a stub executable that optionally records its arguments.

    Args:
        path: Destination path for the generated shell script.
        exit_code: Exit status emitted when the stub is executed.
        record: File receiving one argument per line.

    Returns:
        *path*, made executable.
    """
    lines = ["#!/usr/bin/env bash"]
    if record is not None:
        lines.append(f"printf '%s\\n' \"$@\" > '{record}'")
    lines.append("echo stub-stdout")
    lines.append("echo stub-stderr >&2")
    lines.append(f"exit {exit_code}")
    path.write_text("\n".join(lines) + "\n")
    path.chmod(0o755)
    return path


def write_config(tmp_path: Path, *, attempts: int = 1, interval: float = 0) -> Path:
    """Write a YAML config with a short staging window."""
    cfg = tmp_path / "stringtie.yaml"
    cfg.write_text(
        "image: quay.io/biocontainers/stringtie:2.1.6--h978d192_0\n"
        "staging:\n"
        f"  max_attempts: {attempts}\n"
        f"  interval: {interval}\n"
    )
    return cfg
