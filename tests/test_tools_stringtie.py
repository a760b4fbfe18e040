from pathlib import Path

import pytest

from stringtie_gf.engines import DockerEngine
from stringtie_gf.models import OutputLayout, ResolvedPath
from stringtie_gf.tools.stringtie import (
    STRINGTIE_TEMPLATE,
    StringtieConfig,
    StringtieTool,
    TemplateParam,
    split_executable,
    translate,
)


def _resolved(path: str) -> ResolvedPath:
    p = Path(path)
    return ResolvedPath(full=p, directory=p.parent, base=p.name)


def _config(bam="/in/a.bam", gtf="/in/b.gtf", output="/out/run1", **kwargs) -> StringtieConfig:
    out = _resolved(output)
    layout = OutputLayout(output=out, log_dir=out.directory / "_log", tmp_dir=out.directory / "_tmp")
    return StringtieConfig(bam=_resolved(bam), gtf=_resolved(gtf), layout=layout, **kwargs)


EXPECTED = (
    "docker run --rm"
    " -v /in:/data1 -v /out:/data5 -v /out:/data6 -v /out:/data7 -v /in:/data8"
    " quay.io/biocontainers/stringtie:2.1.6--h978d192_0"
    " stringtie -G /data1/b.gtf --rf -e -B"
    " -o /data5/run1/run1_final_transcript.gtf"
    " -A /data6/run1/run1.tsv"
    " -C /data7/run1/run1_final_reference.gtf"
    " /data8/a.bam"
    " >/out/_log/run1-stringtie.stdout 2>/out/_log/run1-stringtie.stderr"
)


def test_stringtie_command_layout():
    """Verify the composed Docker command for a typical run."""
    cmd = StringtieTool(_config()).command(DockerEngine())
    assert cmd.render() == EXPECTED


def test_stringtie_mounts_one_slot_per_parameter():
    """Verify each file parameter gets its own mount, even for shared hosts."""
    spec = StringtieTool(_config()).build_spec()
    pairs = [(str(m.host_directory), m.container_path) for m in spec.mounts]
    assert pairs == [
        ("/in", "/data1"),
        ("/out", "/data5"),
        ("/out", "/data6"),
        ("/out", "/data7"),
        ("/in", "/data8"),
    ]
    assert len({m.container_path for m in spec.mounts}) == len(spec.mounts)


def test_bam_is_last_argument():
    """Verify the BAM file is the final positional token."""
    cmd = StringtieTool(_config()).command(DockerEngine())
    assert cmd.argv()[-1] == "/data8/a.bam"


def test_stringtie_logs_named_after_output():
    """Verify log files are named after the output base name."""
    tool = StringtieTool(_config(output="/work/out/sampleA"))
    stdout_log, stderr_log = tool.log_paths()
    assert stdout_log == Path("/work/out/_log/sampleA-stringtie.stdout")
    assert stderr_log == Path("/work/out/_log/sampleA-stringtie.stderr")


def test_command_is_deterministic():
    """Verify identical inputs produce byte-identical commands."""
    first = StringtieTool(_config()).command(DockerEngine()).render()
    second = StringtieTool(_config()).command(DockerEngine()).render()
    assert first == second


def test_paths_with_spaces_are_quoted():
    """Verify host paths containing spaces survive the shell."""
    cmd = StringtieTool(_config(bam="/in dir/a.bam")).command(DockerEngine())
    assert "'/in dir:/data8'" in cmd.render()


def test_custom_image():
    """Verify the configured image is used verbatim."""
    cmd = StringtieTool(_config(image="example/stringtie:2.2.1")).command(DockerEngine())
    assert " example/stringtie:2.2.1 stringtie " in cmd.render()


def test_template_table_order():
    """Verify the native flag order of the StringTie template."""
    flags = [p.flag for p in STRINGTIE_TEMPLATE]
    assert flags == ["-G", "--rf", "-e", "-B", "-o", "-A", "-C", None]


def test_translate_custom_template():
    """Verify translation is independent of StringTie."""
    template = (
        TemplateParam("switch", "-x"),
        TemplateParam("ref", "--ref", source="ref"),
        TemplateParam("report", "--out", source="out", subpath="{base}.txt"),
    )
    args, mounts = translate(template, {"ref": _resolved("/r/g.fa"), "out": _resolved("/o/s1")})
    assert args == ["-x", "--ref", "/data2/g.fa", "--out", "/data3/s1.txt"]
    assert [m.container_path for m in mounts] == ["/data2", "/data3"]


def test_split_executable_mounts_marked_tokens(tmp_path):
    """Verify ``^``-prefixed tokens are mounted as extra inputs."""
    ref = tmp_path / "ref.fa"
    ref.touch()
    program, args, mounts = split_executable(f"stringtie ^{ref} -p 4")
    assert program == "stringtie"
    assert args == ["/data1_r/ref.fa", "-p", "4"]
    assert mounts[0].container_path == "/data1_r"
    assert mounts[0].host_directory == tmp_path.resolve()


def test_split_executable_rejects_empty():
    """Verify an empty executable string is rejected."""
    with pytest.raises(ValueError):
        split_executable("   ")


def test_extra_executable_args_precede_template(tmp_path):
    """Verify run arguments come before the template arguments."""
    ref = tmp_path / "ref.fa"
    ref.touch()
    spec = StringtieTool(_config(executable=f"stringtie ^{ref}")).build_spec()
    assert spec.args[:3] == ["stringtie", "/data1_r/ref.fa", "-G"]
    assert spec.mounts[0].container_path == "/data1_r"
    assert spec.mounts[1].container_path == "/data1"
