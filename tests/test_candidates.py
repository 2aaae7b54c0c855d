import pandas as pd
import pytest

from candidates import (
    LANGUAGE_CANDIDATES,
    MAX_NAME_LENGTH,
    CandidateFileError,
    find_malformed,
    is_valid_candidate,
    load_candidates,
)


def test_every_candidate_is_a_non_empty_string():
    assert LANGUAGE_CANDIDATES
    for name in LANGUAGE_CANDIDATES:
        assert isinstance(name, str)
        assert name


def test_candidate_list_is_immutable_and_ordered():
    assert isinstance(LANGUAGE_CANDIDATES, tuple)
    assert LANGUAGE_CANDIDATES[:3] == ("A#", "A+", "A++")
    assert LANGUAGE_CANDIDATES[34] == "Apex"


@pytest.mark.xfail(strict=True, reason="entries from APL to Axum are missing separating commas")
def test_every_candidate_is_a_single_language_name():
    assert find_malformed(LANGUAGE_CANDIDATES) == []


def test_missing_commas_join_the_tail_into_one_entry():
    malformed = find_malformed(LANGUAGE_CANDIDATES)
    assert len(malformed) == 1
    assert malformed[0].startswith("APLAppleScriptArc")
    assert malformed[0].endswith("AWKAxum")
    assert LANGUAGE_CANDIDATES[-1] == malformed[0]


@pytest.mark.parametrize("name", ["Ada", "A#", "A++", "ACT-III", "Action!", "AutoLISP / Visual LISP", "ALGOL 68"])
def test_valid_names(name):
    assert is_valid_candidate(name)


@pytest.mark.parametrize("name", ["", " Ada", "Ada ", "-Ada", "Ada\nAWK", "x" * (MAX_NAME_LENGTH + 1), None, 42])
def test_invalid_names(name):
    assert not is_valid_candidate(name)


def test_load_candidates_from_csv(tmp_path):
    path = tmp_path / "languages.csv"
    path.write_text("Name\nHaskell\n\nOCaml\nHaskell\nElixir\n", encoding="utf-8")
    assert load_candidates(path) == ("Haskell", "OCaml", "Elixir")


def test_load_candidates_from_excel(tmp_path):
    path = tmp_path / "languages.xlsx"
    pd.DataFrame({"Name": ["Ada", "AWK", None, "Axum"]}).to_excel(path, index=False)
    assert load_candidates(path) == ("Ada", "AWK", "Axum")


def test_load_candidates_requires_name_column(tmp_path):
    path = tmp_path / "languages.csv"
    path.write_text("Language\nAda\n", encoding="utf-8")
    with pytest.raises(CandidateFileError):
        load_candidates(path)


def test_load_candidates_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_candidates(tmp_path / "nope.csv")


def test_load_candidates_drops_whitespace_only_cells(tmp_path):
    path = tmp_path / "languages.xlsx"
    pd.DataFrame({"Name": ["Ada", " ", "AWK", "\t"]}).to_excel(path, index=False)
    assert load_candidates(path) == ("Ada", "AWK")
