from __future__ import annotations

from grel.release.model import VersionBump
from grel.release.semver import ZERO, SemVer, parse_release_tag, parse_version


def test_parse_version_accepts_optional_v_prefix() -> None:
    assert parse_version("1.2.3") == SemVer(1, 2, 3)
    assert parse_version("v1.2.3") == SemVer(1, 2, 3)


def test_parse_version_keeps_prerelease_and_build() -> None:
    parsed = parse_version("v2.0.0-rc.1+build.5")
    assert parsed == SemVer(2, 0, 0, prerelease="rc.1", build="build.5")
    assert parsed is not None
    assert parsed.build == "build.5"
    assert str(parsed) == "2.0.0-rc.1+build.5"


def test_parse_version_rejects_garbage() -> None:
    assert parse_version("not-a-version") is None
    assert parse_version("1.2") is None
    assert parse_version("01.2.3") is None
    assert parse_version("vv1.2.3") is None
    assert parse_version("1.2.3\n") is None
    assert parse_version("") is None


def test_parse_release_tag_requires_v() -> None:
    assert parse_release_tag("v0.4.1") == SemVer(0, 4, 1)
    assert parse_release_tag("0.4.1") is None
    assert parse_release_tag("release-0.4.1") is None


def test_ordering_by_core_triple() -> None:
    versions = [SemVer(1, 10, 0), SemVer(1, 2, 3), SemVer(0, 9, 9), SemVer(2, 0, 0)]
    assert sorted(versions) == [
        SemVer(0, 9, 9),
        SemVer(1, 2, 3),
        SemVer(1, 10, 0),
        SemVer(2, 0, 0),
    ]


def test_prerelease_sorts_below_release() -> None:
    assert SemVer(1, 0, 0, prerelease="rc.1") < SemVer(1, 0, 0)
    assert SemVer(1, 0, 0, prerelease="alpha") < SemVer(1, 0, 0, prerelease="beta")
    assert SemVer(1, 0, 0, prerelease="rc.2") < SemVer(1, 0, 0, prerelease="rc.10")
    assert SemVer(1, 0, 0) < SemVer(1, 0, 1, prerelease="rc.1")


def test_bump() -> None:
    base = SemVer(1, 2, 3)
    assert base.bump(VersionBump.MAJOR) == SemVer(2, 0, 0)
    assert base.bump(VersionBump.MINOR) == SemVer(1, 3, 0)
    assert base.bump(VersionBump.PATCH) == SemVer(1, 2, 4)
    assert base.bump(VersionBump.NONE) == SemVer(1, 2, 3)


def test_bump_drops_prerelease() -> None:
    assert SemVer(1, 0, 0, prerelease="rc.1").bump(VersionBump.PATCH) == SemVer(1, 0, 1)


def test_to_tag() -> None:
    assert ZERO.to_tag() == "v0.0.0"
    assert SemVer(3, 1, 4).to_tag() == "v3.1.4"


def test_build_metadata_ignored_by_equality_and_ordering() -> None:
    a = SemVer(1, 0, 0, build="a")
    b = SemVer(1, 0, 0, build="b")
    assert a == b
    assert a <= b
    assert a >= b
    assert not a < b
    assert not a > b
    assert hash(a) == hash(b)
    assert SemVer(1, 0, 0, prerelease="rc.1", build="x") < SemVer(1, 0, 0, build="y")
