"""Dockerfile resolution and docker invocations for the site generator."""

from __future__ import annotations

import time
from pathlib import Path
from typing import List, Optional

from .errors import ValidationError
from .logging import get_logger
from .models import DockerfileInfo, VersionsInfo
from .process import Runner, run_command
from .remote import read_location

CONTAINER_DOCS_PATH = "/mkdocs"
SITE_GENERATOR_COMMAND = ("mkdocs", "build")

_LOGGER = get_logger("docker")


def image_full_name(image_name: str, tag_name: str) -> str:
    """Return ``image:tag`` with ``:`` and ``/`` replaced in both parts."""
    return f"{_normalize(image_name)}:{_normalize(tag_name)}"


def _normalize(value: str) -> str:
    return value.replace(":", "-").replace("/", "-")


def get_dockerfile_fallback(location: str, image_name: str, build_path: str = "") -> DockerfileInfo:
    """Fetch the fallback Dockerfile once for the whole run."""
    content = read_location(location)
    return DockerfileInfo(
        name=f"{time.time_ns()}.Dockerfile",
        content=content,
        image_name=image_name,
        build_path=build_path,
    )


def get_dockerfile(
    working_dir: Path | str,
    fallback: DockerfileInfo,
    dockerfile_name: str,
    build_path: str = "",
) -> DockerfileInfo:
    """Return the Dockerfile of the version in ``working_dir``, or ``fallback``.

    ``<working_dir>/<name>`` is looked up first, then ``<working_dir>/docs/<name>``.
    """
    if not str(working_dir):
        raise ValueError("working directory is undefined")
    directory = Path(working_dir)
    if not directory.is_dir():
        raise ValidationError(f"working directory does not exist: {directory}")

    for candidate in (directory / dockerfile_name, directory / "docs" / dockerfile_name):
        if not candidate.is_file():
            continue
        _LOGGER.info("Found Dockerfile for building documentation in %s.", candidate)
        return DockerfileInfo(
            name=dockerfile_name,
            path=candidate,
            content=candidate.read_bytes(),
            image_name=fallback.image_name,
            build_path=build_path,
        )

    _LOGGER.info("Using fallback Dockerfile, written into %s", fallback.path)
    return fallback


class DockerClient:
    """Builds the documentation image and runs the site generator in it."""

    def __init__(self, runner: Runner | None = None, *, dry_run: bool = False) -> None:
        self._runner = runner or run_command
        self.dry_run = dry_run
        self.logger = get_logger("docker")

    def build_image(
        self,
        dockerfile: DockerfileInfo,
        versions_info: VersionsInfo,
        *,
        no_cache: bool = False,
    ) -> str:
        """Write ``dockerfile`` to disk, build it and return the image name."""
        if dockerfile.path is None:
            raise ValidationError(f"Dockerfile {dockerfile.name} has no path")
        dockerfile.path.write_bytes(dockerfile.content)

        image = image_full_name(dockerfile.image_name, versions_info.current)
        context = Path(versions_info.current_path) / dockerfile.build_path
        self._exec(
            [
                "build",
                f"--no-cache={str(no_cache).lower()}",
                "-t",
                image,
                "-f",
                str(dockerfile.path),
                str(context).rstrip("/") + "/",
            ]
        )
        return image

    def run_site_generator(
        self,
        image: str,
        versions_info: VersionsInfo,
        *,
        env_file: Optional[Path] = None,
    ) -> None:
        """Run the site generator against the version's documentation root."""
        args = ["run", "--rm", "-v", f"{versions_info.current_path}:{CONTAINER_DOCS_PATH}"]
        if env_file is not None:
            args.extend(["--env-file", str(env_file)])
        args.append(image)
        args.extend(SITE_GENERATOR_COMMAND)
        self._exec(args)

    def _exec(self, args: List[str]) -> str:
        command = ["docker", *args]
        if self.dry_run:
            self.logger.info("%s", " ".join(command))
            return ""
        return self._runner(command)


__all__ = [
    "DockerClient",
    "get_dockerfile",
    "get_dockerfile_fallback",
    "image_full_name",
]
