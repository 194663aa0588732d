from __future__ import annotations

import pytest

from app.services.version_resolver import (
    FALLBACK_TITLE,
    parse_title_version,
    resolve_versioned_title,
    split_filename,
)


@pytest.mark.parametrize(
    "filename, expected",
    [
        ("clip.mp4", ("clip", ".mp4")),
        ("clip", ("clip", "")),
        ("my.holiday.clip.mov", ("my.holiday.clip", ".mov")),
        (".hidden", ("", ".hidden")),
        ("trailing.", ("trailing", ".")),
    ],
)
def test_split_filename_uses_last_dot(filename: str, expected: tuple[str, str]) -> None:
    assert split_filename(filename) == expected


def test_no_candidates_returns_original_name() -> None:
    assert resolve_versioned_title("clip.mp4", []) == "clip.mp4"


def test_non_matching_candidates_are_ignored() -> None:
    candidates = {"clip_final.mp4", "clipper.mp4", "clip_v2.mov", "clip_vx.mp4", "clip_v.mp4"}
    assert resolve_versioned_title("clip.mp4", candidates) == "clip.mp4"


def test_bare_and_suffixed_titles_bump_max_version() -> None:
    assert resolve_versioned_title("clip.mp4", {"clip.mp4", "clip_v2.mp4"}) == "clip_v3.mp4"


def test_name_without_extension() -> None:
    assert resolve_versioned_title("clip", {"clip"}) == "clip_v2"


def test_only_suffixed_candidate_counts() -> None:
    assert resolve_versioned_title("clip.mp4", {"clip_v5.mp4"}) == "clip_v6.mp4"


def test_gaps_use_maximum_not_count() -> None:
    assert resolve_versioned_title("clip.mp4", ["clip.mp4", "clip_v9.mp4", "clip_v3.mp4"]) == "clip_v10.mp4"


def test_matching_is_case_insensitive_and_keeps_upload_casing() -> None:
    assert resolve_versioned_title("Clip.MP4", {"clip.mp4", "CLIP_V2.mp4"}) == "Clip_v3.MP4"


def test_leading_zeros_are_accepted() -> None:
    assert resolve_versioned_title("clip.mp4", {"clip_v007.mp4"}) == "clip_v8.mp4"


def test_version_zero_is_not_a_version() -> None:
    assert parse_title_version("clip_v0.mp4", "clip", ".mp4") is None
    assert resolve_versioned_title("clip.mp4", {"clip_v0.mp4"}) == "clip.mp4"


def test_pattern_metacharacters_are_literal() -> None:
    name = "a+b (1)[x].mp4"
    assert resolve_versioned_title(name, {name}) == "a+b (1)[x]_v2.mp4"
    assert resolve_versioned_title(name, {"aab (1)[x].mp4"}) == name


def test_empty_name_uses_fallback_label() -> None:
    assert resolve_versioned_title("", []) == FALLBACK_TITLE
    assert resolve_versioned_title("", [FALLBACK_TITLE]) == f"{FALLBACK_TITLE}_v2"


def test_result_does_not_depend_on_candidate_order() -> None:
    candidates = ["clip_v4.mp4", "clip.mp4", "clip_v2.mp4", "other.mp4"]
    forward = resolve_versioned_title("clip.mp4", candidates)
    backward = resolve_versioned_title("clip.mp4", list(reversed(candidates)))
    assert forward == backward == "clip_v5.mp4"


def test_non_ascii_digits_do_not_count() -> None:
    assert parse_title_version("clip_v٢.mp4", "clip", ".mp4") is None
