# tests/test_benchmark/test_engines.py


###### IMPORT TOOLS ######
# global imports
import logging

import pytest

# local imports
from apps.benchmark.src.data.athena_engine import AthenaQueryEngine
from apps.benchmark.src.data.timestream_engine import TimestreamQueryEngine
from libs.errors import QueryFailedError

LOG = logging.getLogger("tests.engines")


###### FAKE CLIENTS ######
class FakeAthenaClient:
    def __init__(self, states, pages, reason=None):
        self._states = list(states)
        self._pages = list(pages)
        self._reason = reason
        self.started = []
        self.result_calls = []

    def start_query_execution(self, **kwargs):
        self.started.append(kwargs)
        return {"QueryExecutionId": "q-1"}

    def get_query_execution(self, QueryExecutionId):
        status = {"State": self._states.pop(0)}
        if self._reason:
            status["StateChangeReason"] = self._reason
        return {
            "QueryExecution": {
                "QueryExecutionId": QueryExecutionId,
                "Status": status,
                "Statistics": {"EngineExecutionTimeInMillis": 812},
            }
        }

    def get_query_results(self, **kwargs):
        self.result_calls.append(kwargs)
        return self._pages.pop(0)


def _athena_page(values, token=None, header=False):
    rows = [{"Data": [{"VarCharValue": v} for v in row]} for row in values]
    page = {
        "ResultSet": {
            "Rows": ([{"Data": [{"VarCharValue": "page_url"}, {"VarCharValue": "views"}]}] if header else []) + rows,
            "ResultSetMetadata": {"ColumnInfo": [{"Name": "page_url"}, {"Name": "views"}]},
        }
    }
    if token:
        page["NextToken"] = token
    return page


class FakeTimestreamQueryClient:
    def __init__(self, pages):
        self._pages = list(pages)
        self.calls = []

    def query(self, **kwargs):
        self.calls.append(kwargs)
        return self._pages.pop(0)


###### ATHENA ######
@pytest.mark.asyncio
async def test_athena_polls_then_fetches_all_pages():
    client = FakeAthenaClient(
        states=["QUEUED", "RUNNING", "SUCCEEDED"],
        pages=[
            _athena_page([("/a.html", "3")], token="t-1", header=True),
            _athena_page([("/b.html", "1")]),
        ],
    )
    engine = AthenaQueryEngine(client, "db", "s3://bucket/results", LOG, workgroup="wg", poll_interval_sec=0.001)

    result = await engine.execute("SELECT 1")

    assert client.started[0]["QueryString"] == "SELECT 1"
    assert client.started[0]["QueryExecutionContext"] == {"Database": "db"}
    assert client.started[0]["ResultConfiguration"] == {"OutputLocation": "s3://bucket/results"}
    assert client.started[0]["WorkGroup"] == "wg"
    assert result.columns == ["page_url", "views"]
    assert result.rows == [("/a.html", "3"), ("/b.html", "1")]
    assert result.query_id == "q-1"
    assert result.engine_time_ms == 812
    assert client.result_calls[1]["NextToken"] == "t-1"


@pytest.mark.asyncio
@pytest.mark.parametrize("state", ["FAILED", "CANCELLED"])
async def test_athena_failed_query_raises(state):
    client = FakeAthenaClient(states=["RUNNING", state], pages=[], reason="SYNTAX_ERROR")
    engine = AthenaQueryEngine(client, "db", "s3://bucket/results", LOG, poll_interval_sec=0.001)

    with pytest.raises(QueryFailedError) as excinfo:
        await engine.execute("SELEC 1")

    assert excinfo.value.state == state
    assert excinfo.value.query_id == "q-1"
    assert "SYNTAX_ERROR" in str(excinfo.value)
    assert client.result_calls == []


###### TIMESTREAM ######
@pytest.mark.asyncio
async def test_timestream_follows_next_token_through_empty_pages():
    column_info = [{"Name": "count", "Type": {"ScalarType": "BIGINT"}}]
    client = FakeTimestreamQueryClient(
        [
            {"QueryId": "ts-1", "Rows": [], "ColumnInfo": column_info, "NextToken": "n-1"},
            {"QueryId": "ts-1", "Rows": [{"Data": [{"ScalarValue": "250"}]}], "ColumnInfo": column_info},
        ]
    )

    result = await TimestreamQueryEngine(client, LOG).execute("SELECT COUNT(*) FROM t")

    assert result.rows == [("250",)]
    assert result.columns == ["count"]
    assert result.query_id == "ts-1"
    assert client.calls == [
        {"QueryString": "SELECT COUNT(*) FROM t"},
        {"QueryString": "SELECT COUNT(*) FROM t", "NextToken": "n-1"},
    ]
