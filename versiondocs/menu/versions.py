"""Classification of documented versions for the version switcher."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from packaging.version import InvalidVersion, Version

from ..errors import VersionError
from ..git.branches import short_name
from ..models import OptionVersion, VersionState

EXPERIMENTAL_TEXT = "Experimental"


def parse_version(label: str) -> Version:
    """Parse ``label`` (``v1.4``, ``1.4.6``...) as a semantic version."""
    try:
        return Version(label)
    except InvalidVersion as exc:
        raise VersionError(f"failed to parse version {label}: {exc}") from exc


def build_versions(
    current: str,
    branches: Sequence[str],
    latest: str,
    experimental: str = "",
) -> List[OptionVersion]:
    """Return the menu entries for ``branches``, ``current`` being selected.

    Each branch is classified against the ``latest`` release:

    * the latest tag itself is skipped, its branch stands for it;
    * the experimental branch is labelled ``Experimental``;
    * versions above the latest are release candidates;
    * versions sharing the latest major.minor are aliased to the site root;
    * older versions are obsolete unless they are the newest of their major.
    """
    try:
        latest_version = Version(latest)
    except InvalidVersion as exc:
        raise VersionError(f"failed to parse latest tag version {latest}: {exc}") from exc

    labels, heads = parse_branches(branches)

    versions: List[OptionVersion] = []
    for label in labels:
        if label == latest:
            continue

        selected = label == current
        if experimental and label == experimental:
            versions.append(
                OptionVersion(
                    name=label,
                    path=label,
                    text=EXPERIMENTAL_TEXT,
                    state=VersionState.EXPERIMENTAL,
                    selected=selected,
                )
            )
            continue

        version = parse_version(label)
        option = OptionVersion(name=label, selected=selected)
        if version > latest_version:
            option.path = label
            option.text = f"{label} RC"
            option.state = VersionState.PRE_FINAL_RELEASE
        elif same_minor(version, latest_version):
            option.text = f"{label} Latest"
            option.state = VersionState.LATEST
        else:
            option.path = label
            option.text = label
            if heads.get(_major(version)) != version:
                option.state = VersionState.OBSOLETE
        versions.append(option)

    return versions


def parse_branches(branches: Sequence[str]) -> Tuple[List[str], Dict[int, Version]]:
    """Return the raw labels of ``branches`` and the newest version per major."""
    heads: Dict[int, Version] = {}
    labels: List[str] = []
    for branch in branches:
        label = short_name(branch)
        labels.append(label)
        try:
            version = Version(label)
        except InvalidVersion:
            continue
        major = _major(version)
        head = heads.get(major)
        if head is None or version > head:
            heads[major] = version
    return labels, heads


def same_minor(left: Version, right: Version) -> bool:
    return (_major(left), _minor(left)) == (_major(right), _minor(right))


def _major(version: Version) -> int:
    return version.release[0]


def _minor(version: Version) -> int:
    return version.release[1] if len(version.release) > 1 else 0


__all__ = ["build_versions", "parse_branches", "parse_version", "same_minor"]
