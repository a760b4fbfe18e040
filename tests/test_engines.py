from pathlib import Path

import pytest

from stringtie_gf import engines
from stringtie_gf.engines import (
    SUPPORTED_METHODS,
    DockerEngine,
    detect_methods,
    get_engine,
    resolve_method,
    validate_method,
)
from stringtie_gf.errors import MethodNotDetected, UnsupportedMethod
from stringtie_gf.models import MountSpec
from stringtie_gf.tools.base import ToolSpec


def _which_docker(name):
    return "/usr/bin/docker" if name == "docker" else None


def _which_nothing(name):
    return None


def test_supported_methods():
    """Verify the static allow-list."""
    assert SUPPORTED_METHODS == ("docker", "auto")


@pytest.mark.parametrize("method", ["docker", "auto"])
def test_validate_accepts_supported(method):
    """Verify supported methods pass validation."""
    assert validate_method(method) == method


@pytest.mark.parametrize("method", ["singularity", "environment", "", "Docker"])
def test_validate_rejects_others(method):
    """Verify anything outside the allow-list is rejected."""
    with pytest.raises(UnsupportedMethod) as info:
        validate_method(method)
    assert str(info.value) == f"Invalid execution method: {method}"
    assert info.value.show_usage is True


def test_detect_methods_ranked():
    """Verify detection lists available engines in registry order."""
    assert detect_methods(_which_docker) == ["docker"]
    assert detect_methods(_which_nothing) == []


def test_auto_resolves_to_first_detected():
    """Verify ``auto`` picks the best available engine."""
    assert resolve_method("auto", _which_docker) == "docker"


def test_auto_without_runtime():
    """Verify ``auto`` fails when no runtime binary is on PATH."""
    with pytest.raises(MethodNotDetected, match="Valid execution method not detected"):
        resolve_method("auto", _which_nothing)


def test_explicit_method_skips_probe():
    """Verify a concrete method is returned without probing."""

    def _boom(name):
        raise AssertionError("probed")

    assert resolve_method("docker", _boom) == "docker"


def test_registry_extension(monkeypatch):
    """Verify a new engine can be ranked without touching tool wrappers."""

    class PodmanEngine(DockerEngine):
        name = "podman"
        binary = "podman"

    monkeypatch.setitem(engines.ENGINES, "podman", PodmanEngine)
    found = detect_methods(lambda name: f"/bin/{name}" if name == "podman" else None)
    assert found == ["podman"]
    assert isinstance(get_engine("podman"), PodmanEngine)


def test_get_engine_unknown():
    """Verify unknown engines are reported as unsupported."""
    with pytest.raises(UnsupportedMethod):
        get_engine("auto")


def _spec(tmp_path: Path) -> ToolSpec:
    return ToolSpec(
        image="img:1.0",
        args=["tool", "/data1/x"],
        mounts=[MountSpec(host_directory=tmp_path, container_path="/data1")],
        stdout_log=tmp_path / "t.stdout",
        stderr_log=tmp_path / "t.stderr",
    )


def test_docker_engine_builds_command(tmp_path):
    """Verify the Docker command layout."""
    cmd = DockerEngine().build_command(_spec(tmp_path))
    argv = cmd.argv()
    assert argv[:3] == ["docker", "run", "--rm"]
    assert argv[3:5] == ["-v", f"{tmp_path}:/data1"]
    assert argv[5] == "img:1.0"
    assert argv[6:] == ["tool", "/data1/x"]
    assert cmd.render().endswith(f">{tmp_path}/t.stdout 2>{tmp_path}/t.stderr")


def test_docker_engine_rejects_colliding_mounts(tmp_path):
    """Verify two mounts may not share a container path."""
    spec = _spec(tmp_path)
    spec.mounts = [
        MountSpec(host_directory=tmp_path, container_path="/data1"),
        MountSpec(host_directory=tmp_path / "x", container_path="/data1"),
    ]
    with pytest.raises(ValueError, match="duplicate"):
        DockerEngine().build_command(spec)


def test_docker_engine_run_uses_shell(tmp_path, monkeypatch):
    """Verify running delegates the rendered command to the shell runner."""
    calls = []
    monkeypatch.setattr("stringtie_gf.engines.base.run_shell", lambda cmd: calls.append(cmd) or [0])
    cmd = DockerEngine().run(_spec(tmp_path))
    assert calls == [cmd.render()]
