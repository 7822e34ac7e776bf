"""Pipeline orchestration of the multi-version documentation build."""

from __future__ import annotations

import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType
from typing import List, Optional, Sequence, Type

from . import requirements
from .config import BuildConfig, validate_config
from .docker import DockerClient, get_dockerfile, get_dockerfile_fallback
from .errors import CommandError, MissingFileError, ValidationError, VersionBuildError
from .git import BranchResolver, WorktreeManager, short_name
from .logging import get_logger
from .manifest import FILE_NAME as MANIFEST_FILE_NAME
from .menu import EditUriOptions, MenuBuilder, get_template_content
from .models import DockerfileInfo, MenuContent, VersionsInfo
from .process import Runner
from .remote import get_latest_release_tag
from .site import SITE_DIR_NAME, compose, prepare_site_root

DOCS_ROOT_SEARCH_PATHS = ("", "docs")
ENV_FILE_NAME = ".env"

_LOGGER = get_logger("orchestrator")


def get_documentation_root(repository_root: Path | str) -> Path:
    """Return the directory of ``repository_root`` that holds ``mkdocs.yml``.

    The repository root is searched first, then ``docs/``. The requirements
    file must sit next to the manifest.
    """
    if not str(repository_root):
        raise ValueError("repository root is undefined")
    root = Path(repository_root)
    if not root.is_dir():
        raise ValidationError(f"repository root does not exist: {root}")

    for search_path in DOCS_ROOT_SEARCH_PATHS:
        candidate = root / search_path if search_path else root
        if (candidate / MANIFEST_FILE_NAME).is_file():
            _LOGGER.info("Found %s for building documentation in %s.", MANIFEST_FILE_NAME, candidate)
            requirements.check(candidate)
            return candidate

    searched = ", ".join(f"{path}/" if path else "/" for path in DOCS_ROOT_SEARCH_PATHS)
    raise MissingFileError(
        f"no file {MANIFEST_FILE_NAME} found in {root} (search path was: {searched})",
        root / MANIFEST_FILE_NAME,
    )


class Workspace:
    """Temporary root holding the worktrees of a run.

    Leaving the context removes the directory and prunes the worktree
    bookkeeping, whatever the outcome; cleanup failures are only logged.
    """

    def __init__(self, worktrees: WorktreeManager) -> None:
        self._worktrees = worktrees
        self.root: Optional[Path] = None
        self.logger = get_logger("workspace")

    def __enter__(self) -> "Workspace":
        self.root = Path(tempfile.mkdtemp(prefix="versiondocs-"))
        self.logger.debug("Temp directory: %s", self.root)
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        self.cleanup()

    def version_path(self, version: str) -> Path:
        if self.root is None:
            raise ValidationError("workspace is not initialized")
        return self.root / version

    def cleanup(self) -> None:
        if self.root is not None:
            try:
                shutil.rmtree(self.root)
            except OSError as exc:
                self.logger.error("Error during cleaning of %s: %s", self.root, exc)
        try:
            self._worktrees.prune()
        except CommandError as exc:
            self.logger.error("Error during worktree pruning: %s", exc)


@dataclass
class RunContext:
    """Values resolved once per run and shared by every version build."""

    config: BuildConfig
    latest: str
    branches: Sequence[str]
    site_root: Path
    menu_content: MenuContent
    fallback_dockerfile: DockerfileInfo
    requirements_override: Optional[str]


class Orchestrator:
    """Builds every documented version, one after the other.

    The first failure aborts the run: versions are never skipped and nothing
    is retried.
    """

    def __init__(
        self,
        *,
        runner: Runner | None = None,
        branch_resolver: BranchResolver | None = None,
        worktrees: WorktreeManager | None = None,
        docker: DockerClient | None = None,
        base_dir: Path | None = None,
    ) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else Path.cwd()
        self.branch_resolver = branch_resolver or BranchResolver(runner, cwd=self.base_dir)
        self.worktrees = worktrees or WorktreeManager(runner, cwd=self.base_dir)
        self._runner = runner
        self._docker = docker
        self.logger = get_logger("orchestrator")

    def run(self, config: BuildConfig) -> List[str]:
        """Build the documentation of every branch; return the built versions."""
        config = validate_config(config)
        docker = self._docker or DockerClient(self._runner, dry_run=config.dry_run)

        menu_content = get_template_content(config.menu)
        fallback_dockerfile = get_dockerfile_fallback(
            config.dockerfile_url, config.image_name, config.build_path
        )
        requirements_override = requirements.get_content(config.requirements)

        latest = get_latest_release_tag(config.repo_id)
        self.logger.info("Latest tag: %s", latest)

        branches = self.branch_resolver.resolve(
            config.experimental_branch, config.excluded_branches
        )
        site_root = prepare_site_root(self.base_dir)

        context = RunContext(
            config=config,
            latest=latest,
            branches=branches,
            site_root=site_root,
            menu_content=menu_content,
            fallback_dockerfile=fallback_dockerfile,
            requirements_override=requirements_override,
        )

        built: List[str] = []
        with Workspace(self.worktrees) as workspace:
            for branch_ref in branches:
                version = short_name(branch_ref)
                path = workspace.version_path(version)
                try:
                    self._build_version(context, docker, branch_ref, version, path)
                except VersionBuildError:
                    raise
                except Exception as exc:
                    raise VersionBuildError(version, path, exc) from exc
                built.append(version)
        return built

    def _build_version(
        self,
        context: RunContext,
        docker: DockerClient,
        branch_ref: str,
        version: str,
        path: Path,
    ) -> None:
        config = context.config
        self.logger.info("Generating doc for version %s", version)

        self.worktrees.add(path, branch_ref)
        docs_root = get_documentation_root(path)
        versions_info = VersionsInfo(
            current=version,
            latest=context.latest,
            experimental=config.experimental_branch,
            current_path=docs_root,
        )

        dockerfile = get_dockerfile(
            docs_root,
            context.fallback_dockerfile.with_path(docs_root),
            config.dockerfile_name,
            config.build_path,
        )
        requirements.build(versions_info, context.requirements_override)

        docs_dir_base = docs_root.relative_to(path).as_posix()
        MenuBuilder(context.menu_content).build(
            versions_info,
            context.branches,
            EditUriOptions(
                docs_dir_base="" if docs_dir_base == "." else docs_dir_base,
                override=config.force_edit_url,
                repo_url=config.repo_url,
            ),
        )

        image = docker.build_image(dockerfile, versions_info, no_cache=config.no_cache)
        env_file = self.base_dir / ENV_FILE_NAME
        docker.run_site_generator(
            image,
            versions_info,
            env_file=env_file if env_file.is_file() else None,
        )

        if config.dry_run:
            self.logger.info("Dry run: skipping site composition for %s", version)
            return
        output_dir = docs_root / SITE_DIR_NAME
        if not output_dir.is_dir():
            raise MissingFileError(f"site generator produced no output in {output_dir}", output_dir)
        compose(output_dir, context.site_root, version, context.latest)


__all__ = ["Orchestrator", "RunContext", "Workspace", "get_documentation_root"]
