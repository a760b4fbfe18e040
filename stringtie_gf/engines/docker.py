"""Docker execution engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from stringtie_gf.models import ExternalCommand

from .base import ExecutionEngine

if TYPE_CHECKING:  # pragma: no cover
    from stringtie_gf.tools.base import ToolSpec

log = structlog.get_logger()


class DockerEngine(ExecutionEngine):
    """Run tools inside throw-away Docker containers."""

    name = "docker"
    binary = "docker"

    def build_command(self, spec: "ToolSpec") -> ExternalCommand:
        """Return ``docker run --rm <mounts> <image> <args>`` for *spec*.

        Mounts are emitted in the order the tool declared them; their
        container paths must be unique.
        """
        seen: set[str] = set()
        args: list[str] = ["run", "--rm"]
        for mount in spec.mounts:
            if mount.container_path in seen:
                raise ValueError(f"duplicate container mount point: {mount.container_path}")
            seen.add(mount.container_path)
            args += ["-v", mount.as_volume()]
        args.append(spec.image)
        args.extend(spec.args)
        log.debug("docker.command", image=spec.image, mounts=len(spec.mounts))
        return ExternalCommand(
            executable=self.binary,
            arguments=tuple(args),
            mounts=tuple(spec.mounts),
            stdout_log=spec.stdout_log,
            stderr_log=spec.stderr_log,
        )

    def run(self, spec: "ToolSpec") -> ExternalCommand:
        """Execute *spec* in a container, logging the image used."""
        log.info("docker.run", image=spec.image, args=list(spec.args))
        return super().run(spec)
