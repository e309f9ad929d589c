import pytest
from botocore.stub import ANY

from dynamo_records.config.settings import Settings
from dynamo_records.exceptions.errors import (
    InvalidContextError,
    InvalidInputError,
    NoKeyConditionError,
    NoSdkConfigError,
)
from dynamo_records.handler import RequestContext, get_records


def _query_params(**overrides):
    params = {
        "TableName": "functions",
        "KeyConditionExpression": ANY,
        "FilterExpression": ANY,
        "ExpressionAttributeNames": ANY,
        "ExpressionAttributeValues": ANY,
        "Limit": 1,
    }
    params.update(overrides)
    return params


def test_primary_key_lookup(ddb_client, stubber, context_data):
    stubber.add_response(
        "query",
        {"Items": [{"id": {"S": "abc"}, "name": {"S": "create_function"}}], "Count": 1, "ScannedCount": 1},
        _query_params(KeyConditionExpression="#id_key = :id_val"),
    )

    resp = get_records(RequestContext(data=context_data, store_client=ddb_client), {"filter": {"id": "abc"}, "limit": 1})

    assert resp == {
        "message": "Successfully retrieved 1 records",
        "data": [{"id": "abc", "name": "create_function"}],
        "pagination": {"count": 1},
    }


def test_index_lookup_returns_cursor(ddb_client, stubber, context_data):
    stubber.add_response(
        "query",
        {
            "Items": [{"id": {"S": "f1"}, "team_id": {"S": "t1"}, "name": {"S": "create_function"}}],
            "Count": 1,
            "ScannedCount": 1,
            "LastEvaluatedKey": {"id": {"S": "f1"}, "team_id": {"S": "t1"}},
        },
        _query_params(IndexName="team_id-index", KeyConditionExpression="#team_id_key = :team_id_val"),
    )

    resp = get_records(
        RequestContext(data=context_data, store_client=ddb_client),
        {"filter": {"team_id": "t1", "name": "create_function"}, "limit": 1},
    )

    assert len(resp["data"]) == 1
    assert resp["pagination"]["count"] == 1
    assert resp["pagination"]["last_record_keys"] == {"id": "f1", "team_id": "t1"}


def test_cursor_feeds_next_call(ddb_client, stubber, context_data):
    stubber.add_response(
        "query",
        {"Items": [], "Count": 0, "ScannedCount": 0},
        _query_params(
            IndexName="team_id-index",
            ExclusiveStartKey={"id": {"S": "f1"}, "team_id": {"S": "t1"}},
        ),
    )

    resp = get_records(
        RequestContext(data=context_data, store_client=ddb_client),
        {"filter": {"team_id": "t1"}, "limit": 1, "start_key": {"id": "f1", "team_id": "t1"}},
    )

    assert resp["pagination"] == {"count": 0}


def test_no_key_condition_issues_no_query(ddb_client, stubber, context_data):
    with pytest.raises(NoKeyConditionError):
        get_records(RequestContext(data=context_data, store_client=ddb_client), {"filter": {}, "limit": 1})
    # stubber fixture asserts nothing was queued or consumed


def test_missing_store_client_fails_before_planning(context_data):
    # An unplannable filter still reports the missing session first
    with pytest.raises(NoSdkConfigError) as ei:
        get_records(RequestContext(data=context_data), {"filter": {"name": "x"}, "limit": 1})

    assert ei.value.to_dict() == {
        "code": "NO_SDK_CONFIG",
        "message": "No aws sdk config found in handler context",
    }


@pytest.mark.parametrize("payload", [{"filter": {"id": "a"}}, {"filter": {"id": "a"}, "limit": 0}, {"limit": True}])
def test_invalid_input(ddb_client, context_data, payload):
    with pytest.raises(InvalidInputError):
        get_records(RequestContext(data=context_data, store_client=ddb_client), payload)


def test_invalid_context(ddb_client):
    with pytest.raises(InvalidContextError):
        get_records(RequestContext(data={"primary_key": "id"}, store_client=ddb_client), {"filter": {"id": "a"}, "limit": 1})


def test_settings_choose_soft_delete_attribute(ddb_client, stubber, context_data):
    settings = Settings(
        env="test",
        log_level="INFO",
        log_file="",
        aws_region="ap-south-1",
        aws_profile="",
        dynamodb_endpoint_url="",
        store_max_attempts=1,
        store_retry_mode="standard",
        connect_timeout=5.0,
        read_timeout=10.0,
        soft_delete_attribute="removed_at",
    )
    stubber.add_response(
        "query",
        {"Items": [], "Count": 0, "ScannedCount": 0},
        _query_params(
            FilterExpression="(attribute_not_exists(#removed_at_key) OR #removed_at_key = :removed_at_val)",
            ExpressionAttributeNames={"#id_key": "id", "#removed_at_key": "removed_at"},
        ),
    )

    get_records(
        RequestContext(data=context_data, store_client=ddb_client),
        {"filter": {"id": "abc"}, "limit": 1},
        settings=settings,
    )
