"""Tests for the version classification of the menu."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from versiondocs.errors import VersionError
from versiondocs.menu.versions import build_versions, parse_branches
from versiondocs.models import OptionVersion, VersionState


def _summary(versions: list[OptionVersion]) -> list[tuple[str, str, str, VersionState, bool]]:
    return [(v.name, v.path, v.text, v.state, v.selected) for v in versions]


def test_build_versions_latest_branch_is_aliased_to_root() -> None:
    versions = build_versions("v1.4", ["origin/v1.4", "v1.4.6"], "v1.4.6")

    assert _summary(versions) == [("v1.4", "", "v1.4 Latest", VersionState.LATEST, True)]


def test_build_versions_experimental_branch() -> None:
    versions = build_versions("v1.4", ["origin/v1.4", "origin/master"], "v1.4.6", "master")

    assert _summary(versions) == [
        ("v1.4", "", "v1.4 Latest", VersionState.LATEST, True),
        ("master", "master", "Experimental", VersionState.EXPERIMENTAL, False),
    ]


def test_build_versions_release_candidate() -> None:
    versions = build_versions("v1.4", ["origin/v1.4", "origin/v1.5"], "v1.4.6")

    assert versions[1].path == "v1.5"
    assert versions[1].text == "v1.5 RC"
    assert versions[1].state is VersionState.PRE_FINAL_RELEASE


def test_build_versions_head_of_major_is_not_obsolete() -> None:
    versions = build_versions("v1.4", ["origin/v1.3"], "v1.4.6", "master")

    assert _summary(versions) == [("v1.3", "v1.3", "v1.3", VersionState.SUPPORTED, False)]


def test_build_versions_full_scenario() -> None:
    branches = ["origin/v1.4", "origin/master", "v1.4.6", "origin/v1.5", "origin/v1.3"]

    versions = build_versions("v1.4", branches, "v1.4.6", "master")

    assert _summary(versions) == [
        ("v1.4", "", "v1.4 Latest", VersionState.LATEST, True),
        ("master", "master", "Experimental", VersionState.EXPERIMENTAL, False),
        ("v1.5", "v1.5", "v1.5 RC", VersionState.PRE_FINAL_RELEASE, False),
        ("v1.3", "v1.3", "v1.3", VersionState.OBSOLETE, False),
    ]


def test_build_versions_previous_major_head_stays_supported() -> None:
    branches = ["origin/v2.1", "origin/v2.0", "origin/v1.9", "origin/v1.8"]

    versions = build_versions("v1.8", branches, "v2.1.2")

    states = {v.name: v.state for v in versions}
    assert states == {
        "v2.1": VersionState.LATEST,
        "v2.0": VersionState.OBSOLETE,
        "v1.9": VersionState.SUPPORTED,
        "v1.8": VersionState.OBSOLETE,
    }
    assert [v.name for v in versions if v.selected] == ["v1.8"]


def test_build_versions_rejects_invalid_latest_tag() -> None:
    with pytest.raises(VersionError):
        build_versions("v1.4", ["origin/v1.4"], "latest-release")


def test_build_versions_rejects_unparsable_branch() -> None:
    with pytest.raises(VersionError, match="feature-x"):
        build_versions("v1.4", ["origin/v1.4", "origin/feature-x"], "v1.4.6")


def test_parse_branches_tracks_greatest_version_per_major() -> None:
    labels, heads = parse_branches(["origin/v1.2", "origin/master", "origin/v1.10", "origin/v2.0"])

    assert labels == ["v1.2", "master", "v1.10", "v2.0"]
    assert str(heads[1]) == "1.10"
    assert str(heads[2]) == "2.0"


_minor_versions = st.tuples(st.integers(0, 5), st.integers(0, 12))


@given(st.lists(_minor_versions, min_size=1, max_size=8, unique=True), _minor_versions, st.integers(0, 9))
def test_classification_properties(pairs, latest_pair, latest_patch) -> None:
    latest = f"v{latest_pair[0]}.{latest_pair[1]}.{latest_patch}"
    labels = [f"v{major}.{minor}" for major, minor in pairs]
    branches = [f"origin/{label}" for label in labels]

    versions = build_versions(labels[0], branches, latest)

    assert len(versions) == len(labels)
    assert sum(1 for v in versions if v.selected) == 1
    for pair, version in zip(pairs, versions):
        if pair == latest_pair:
            assert version.state is VersionState.LATEST
            assert version.path == ""
        elif pair > latest_pair:
            assert version.state is VersionState.PRE_FINAL_RELEASE
            assert version.text.endswith(" RC")
        else:
            assert version.state in {VersionState.OBSOLETE, VersionState.SUPPORTED}

    for major in {major for major, _ in pairs}:
        group = [
            v
            for pair, v in zip(pairs, versions)
            if pair[0] == major and v.state in {VersionState.OBSOLETE, VersionState.SUPPORTED}
        ]
        if not group:
            continue
        greatest = max(pair for pair in pairs if pair[0] == major)
        exempt = [v for v in group if v.state is VersionState.SUPPORTED]
        if greatest < latest_pair:
            assert [v.name for v in exempt] == [f"v{greatest[0]}.{greatest[1]}"]
        else:
            assert exempt == []
