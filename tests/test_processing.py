from __future__ import annotations

import logging

import pandas as pd

from nhlapi.client.types import FetchSuccess, TaggedPayload
from nhlapi.processing import attributes_to_cols, element_to_frame, process_copyright, process_result


def test_process_copyright_moves_field_to_provenance() -> None:
    payload = TaggedPayload(
        body={"copyright": "NHL 2020", "teams": [{"id": 1}]},
        provenance={"url": "https://api.test/teams"},
    )

    tagged = process_copyright(payload)

    assert tagged.body == {"teams": [{"id": 1}]}
    assert tagged.provenance == {"url": "https://api.test/teams", "copyright": "NHL 2020"}
    # Input is not mutated.
    assert "copyright" in payload.body


def test_process_copyright_is_idempotent_and_tolerates_absence() -> None:
    once = process_copyright({"copyright": "X", "people": []})
    twice = process_copyright(once)
    assert once == twice

    plain = TaggedPayload(body={"people": []})
    assert process_copyright(plain) is plain


def test_process_result_extracts_table_with_provenance_columns() -> None:
    fetched = FetchSuccess(
        url="http://x/1",
        payload={"data": {"rows": [{"a": 1}]}, "copyright": "X"},
    )

    df = process_result(fetched, "data")

    assert set(df.columns) == {"a", "copyright", "url"}
    assert len(df) == 1
    row = df.iloc[0]
    assert row["a"] == 1
    assert row["copyright"] == "X"
    assert row["url"] == "http://x/1"


def test_process_result_flattens_nested_records() -> None:
    fetched = FetchSuccess(
        url="https://api.test/people/8451101",
        payload={
            "copyright": "NHL",
            "people": [{"id": 8451101, "fullName": "Joe Sakic", "currentTeam": {"id": 21}}],
        },
    )

    df = process_result(fetched, "people")

    assert list(df.columns) == ["id", "fullName", "currentTeam.id", "url", "copyright"]
    assert df.loc[0, "currentTeam.id"] == 21


def test_process_result_empty_element_gives_zero_rows_with_provenance_columns() -> None:
    fetched = FetchSuccess(url="https://api.test/people/1", payload={"copyright": "X", "people": []})

    df = process_result(fetched, "people")

    assert len(df) == 0
    assert set(df.columns) == {"url", "copyright"}


def test_process_result_missing_element_gives_zero_rows() -> None:
    df = process_result(TaggedPayload(body={"other": 1}), "people")
    assert df.empty


def test_attributes_to_cols_overwrites_colliding_column(caplog) -> None:
    payload = TaggedPayload(body={}, provenance={"url": "https://api.test/a"})
    df = pd.DataFrame({"url": ["from-data", "from-data"], "b": [1, 2]})

    with caplog.at_level(logging.WARNING, logger="nhlapi.processing"):
        out = attributes_to_cols(payload, df)

    assert out["url"].to_list() == ["https://api.test/a", "https://api.test/a"]
    assert df["url"].to_list() == ["from-data", "from-data"]
    assert "already present" in caplog.text


def test_attributes_to_cols_respects_attribute_selection() -> None:
    payload = TaggedPayload(body={}, provenance={"url": "u", "copyright": "c"})
    out = attributes_to_cols(payload, pd.DataFrame({"a": [1]}), attributes=["copyright"])
    assert list(out.columns) == ["a", "copyright"]


def test_element_to_frame_shapes() -> None:
    assert element_to_frame({"id": 1, "name": "x"}).to_dict("records") == [{"id": 1, "name": "x"}]
    assert element_to_frame(["a", "b"])["value"].to_list() == ["a", "b"]
    assert element_to_frame({}).shape == (0, 0)
    assert element_to_frame(None).shape == (0, 0)
    assert element_to_frame({"rows": []}).shape == (0, 0)


def test_from_fetch_keeps_body_url_and_provenance_column_wins() -> None:
    fetched = FetchSuccess(
        url="https://api.test/teams/1",
        payload={"url": "from-body", "teams": [{"id": 1}]},
    )

    tagged = TaggedPayload.from_fetch(fetched)
    assert tagged.body["url"] == "from-body"
    assert tagged.provenance == {"url": "https://api.test/teams/1"}

    df = process_result(fetched, "teams")
    assert df["url"].to_list() == ["https://api.test/teams/1"]
