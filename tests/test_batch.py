from __future__ import annotations

import httpx
import pandas as pd

from nhlapi.batch import BatchResult, get_records, report_get_data_errors
from nhlapi.client.http import HttpClient
from nhlapi.client.types import FetchFailure, FetchSuccess

FAILING_IDS = {"none", "some"}


def _people_client() -> HttpClient:
    def handler(request: httpx.Request) -> httpx.Response:
        pid = request.url.path.rsplit("/", 1)[-1]
        if pid in FAILING_IDS:
            return httpx.Response(404, json={"message": "Object not found"})
        person = {"id": int(pid), "fullName": f"Player {pid}"}
        if pid == "3":
            person["captain"] = True
        return httpx.Response(200, json={"copyright": "NHL and the NHL Shield", "people": [person]})

    return HttpClient(transport=httpx.MockTransport(handler))


def _url(pid: object) -> str:
    return f"https://api.test/api/v1/people/{pid}"


def test_get_records_merges_successes_and_keeps_error_ledger() -> None:
    ids = ["1", "none", "2", "some", "3"]

    with _people_client() as client:
        result = get_records(ids, _url, "people", client=client, max_workers=4)

    assert result.errors == [_url("none"), _url("some")]
    assert result.merged
    df = result.data
    assert df["id"].to_list() == [1, 2, 3]
    assert df["url"].to_list() == [_url("1"), _url("2"), _url("3")]
    assert (df["copyright"] == "NHL and the NHL Shield").all()
    assert df["captain"].isna().to_list() == [True, True, False]
    assert len(result.results) == 5


def test_get_records_all_failed_returns_empty_frame() -> None:
    with _people_client() as client:
        result = get_records(["none", "some"], _url, "people", client=client)

    assert isinstance(result.data, pd.DataFrame)
    assert result.data.empty
    assert len(result.errors) == 2


def test_report_get_data_errors_calls_reporter_once_with_summary() -> None:
    results = [
        FetchSuccess(url="u1", payload={}),
        FetchFailure(url="u2", cause="HTTP 404"),
        FetchSuccess(url="u3", payload={}),
        FetchFailure(url="u4", cause="timeout"),
        FetchSuccess(url="u5", payload={}),
    ]
    messages: list[str] = []

    errors = report_get_data_errors(results, messages.append)

    assert errors == ["u2", "u4"]
    assert len(messages) == 1
    msg = messages[0]
    assert "The following 2 of 5 url retrievals errored" in msg
    assert "u2" in msg and "u4" in msg


def test_report_get_data_errors_silent_without_errors() -> None:
    results = [FetchSuccess(url=f"u{i}", payload={}) for i in range(5)]
    calls: list[str] = []

    assert report_get_data_errors(results, calls.append) == []
    assert calls == []


def test_report_get_data_errors_forwards_reporter_arguments(tmp_path) -> None:
    log_file = tmp_path / "errors.log"
    results = [FetchFailure(url="https://api.test/x", cause="boom")]

    def write_lines(message: str, *, path) -> None:
        path.write_text(message, encoding="utf-8")

    report_get_data_errors(results, write_lines, path=log_file)

    assert "https://api.test/x" in log_file.read_text(encoding="utf-8")


def test_batch_result_report_uses_default_logger(caplog) -> None:
    result = BatchResult(
        data=pd.DataFrame(),
        errors=["https://api.test/x"],
        results=[FetchFailure(url="https://api.test/x", cause="boom")],
    )

    with caplog.at_level("ERROR", logger="nhlapi.batch"):
        assert result.report() == ["https://api.test/x"]

    assert "1 of 1 url retrievals errored" in caplog.text


def test_get_records_ledgers_payloads_that_cannot_be_tabulated(caplog) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        pid = request.url.path.rsplit("/", 1)[-1]
        if pid == "2":
            return httpx.Response(200, json={"people": 5})
        return httpx.Response(200, json={"people": [{"id": int(pid)}]})

    ids = ["1", "2", "3"]
    with HttpClient(transport=httpx.MockTransport(handler)) as client:
        with caplog.at_level("WARNING", logger="nhlapi.batch"):
            result = get_records(ids, _url, "people", client=client, max_workers=3)

    assert result.data["id"].to_list() == [1, 3]
    assert result.errors == [_url("2")]
    assert isinstance(result.results[1], FetchFailure)
    assert "Could not extract 'people'" in result.results[1].cause
    assert _url("2") in caplog.text


def test_get_records_ledgers_missing_record_path() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path.endswith("/2"):
            return httpx.Response(200, json={"dates": [{"date": "2019-10-03"}]})
        return httpx.Response(200, json={"dates": [{"date": "2019-10-02", "games": [{"gamePk": 1}]}]})

    with HttpClient(transport=httpx.MockTransport(handler)) as client:
        result = get_records(
            ["1", "2"], _url, "dates", record_path="games", meta=["date"], client=client
        )

    assert result.data["gamePk"].to_list() == [1]
    assert result.errors == [_url("2")]
