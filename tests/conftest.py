import boto3
import pytest
from botocore.stub import Stubber

from dynamo_records.schema.context import SchemaContext


@pytest.fixture(autouse=True)
def _aws_env(monkeypatch):
    # Never let a test pick up real credentials or a developer's profile
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-south-1")
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture()
def ddb_client():
    return boto3.client(
        "dynamodb",
        region_name="ap-south-1",
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


@pytest.fixture()
def stubber(ddb_client):
    with Stubber(ddb_client) as stub:
        yield stub
        stub.assert_no_pending_responses()


@pytest.fixture()
def context_data():
    return {
        "table_name": "functions",
        "primary_key": "id",
        "index_data": {"team_id": "team_id-index"},
        "token_claims": {},
    }


@pytest.fixture()
def schema(context_data):
    return SchemaContext.from_context_data(context_data)
