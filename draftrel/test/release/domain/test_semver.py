from __future__ import annotations

import pytest

from draftrel.release.domain.channel import Channel
from draftrel.release.domain.semver import Version, parse_version


def test_parse_production_version() -> None:
    assert parse_version("1.2.3") == Version(1, 2, 3)
    assert parse_version(" 0.0.1 ") == Version(0, 0, 1)


def test_parse_prerelease_version() -> None:
    assert parse_version("1.3.0-beta4") == Version(1, 3, 0, "beta4")
    assert parse_version("2.0.0-rc.1") == Version(2, 0, 0, "rc.1")


@pytest.mark.parametrize(
    "text",
    [
        "1.2",
        "v1.2.3",
        "1.2.3+build.5",
        "01.2.3",
        "1.2.3-",
        "1.2.3-beta..1",
        "1.2.3-01",
        "",
        "1\u0660.2.0",
        "1.2.1\uff10",
        "1.\u0662.0",
    ],
)
def test_parse_rejects_malformed(text: str) -> None:
    assert parse_version(text) is None


def test_str_roundtrip() -> None:
    assert str(Version(1, 3, 0, "beta4")) == "1.3.0-beta4"
    assert str(Version(1, 2, 0)) == "1.2.0"


def test_invalid_components_rejected() -> None:
    with pytest.raises(ValueError):
        Version(-1, 0, 0)
    with pytest.raises(ValueError):
        Version(1, 0, 0, "beta 1")


class TestOrdering:
    def test_numeric_triple_precedence(self) -> None:
        assert Version(1, 2, 0) < Version(1, 10, 0)
        assert Version(1, 9, 9) < Version(2, 0, 0)

    def test_prerelease_orders_before_release(self) -> None:
        assert Version(1, 3, 0, "beta1") < Version(1, 3, 0)
        assert Version(1, 2, 0) < Version(1, 3, 0, "beta1")

    def test_iteration_counters_compare_numerically(self) -> None:
        assert Version(1, 3, 0, "beta9") < Version(1, 3, 0, "beta10")
        assert Version(1, 3, 0, "test2") < Version(1, 3, 0, "test11")

    def test_semver_precedence_chain(self) -> None:
        chain = [
            "1.0.0-alpha",
            "1.0.0-alpha.1",
            "1.0.0-alpha.beta",
            "1.0.0-beta",
            "1.0.0-beta.2",
            "1.0.0-beta.11",
            "1.0.0-rc.1",
            "1.0.0",
        ]
        versions = [parse_version(v) for v in chain]
        assert all(v is not None for v in versions)
        assert sorted(versions, key=lambda v: v.sort_key()) == versions  # type: ignore[union-attr]

    def test_sorting_is_total(self) -> None:
        versions = [Version(1, 2, 0), Version(1, 3, 0, "beta2"), Version(1, 1, 0), Version(1, 3, 0, "beta10")]
        assert [str(v) for v in sorted(versions)] == ["1.1.0", "1.2.0", "1.3.0-beta2", "1.3.0-beta10"]
        assert max(versions) == Version(1, 3, 0, "beta10")

    def test_equal_versions(self) -> None:
        assert Version(1, 2, 0) <= Version(1, 2, 0)
        assert Version(1, 2, 0) >= Version(1, 2, 0)
        assert not Version(1, 2, 0) < Version(1, 2, 0)


class TestChannelIteration:
    def test_production(self) -> None:
        assert Version(1, 2, 0).channel_iteration() == (Channel.PRODUCTION, 0)

    def test_beta_and_test(self) -> None:
        assert Version(1, 3, 0, "beta3").channel_iteration() == (Channel.BETA, 3)
        assert Version(1, 3, 0, "test12").channel_iteration() == (Channel.TEST, 12)

    def test_other_qualifiers_have_no_channel(self) -> None:
        assert Version(1, 3, 0, "rc1").channel_iteration() is None
        assert Version(1, 3, 0, "beta").channel_iteration() is None
        assert Version(1, 3, 0, "beta0").channel_iteration() is None


def test_bump() -> None:
    v = Version(1, 2, 3, "beta1")
    assert v.bump("major") == Version(2, 0, 0)
    assert v.bump("minor") == Version(1, 3, 0)
    assert v.bump("patch") == Version(1, 2, 4)


def test_with_qualifier_and_release() -> None:
    v = Version(1, 3, 0)
    assert v.with_qualifier(Channel.BETA, 2) == Version(1, 3, 0, "beta2")
    assert Version(1, 3, 0, "beta2").release() == v
    with pytest.raises(ValueError):
        v.with_qualifier(Channel.PRODUCTION, 1)
    with pytest.raises(ValueError):
        v.with_qualifier(Channel.TEST, 0)
