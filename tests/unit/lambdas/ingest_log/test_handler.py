import json
from typing import cast
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch
from freezegun import freeze_time

from tinylinks.types import LambdaEvent, LambdaContext
from tinylinks.lambdas.ingest_log import app
from tinylinks.logship import RemoteLogClient


def make_event(body, authorization: str | None = 'Bearer s3cr3t') -> LambdaEvent:
    headers = {} if authorization is None else {'Authorization': authorization}
    return cast(LambdaEvent, {
        'resource': '/log',
        'httpMethod': 'POST',
        'path': '/log',
        'headers': headers,
        'body': body if isinstance(body, str) else json.dumps(body),
    })


@pytest.fixture
def log_event() -> dict:
    return {'stack': 'frontend', 'level': 'error', 'package': 'api', 'message': 'Failed to fetch statistics'}


class TestIngestLogHandler:

    @pytest.fixture
    def context(self) -> LambdaContext:
        return cast(LambdaContext, {'function_name': 'ingest_log'})

    @pytest.fixture
    def client(self) -> RemoteLogClient:
        return MagicMock(spec=RemoteLogClient)

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context: LambdaContext, client: RemoteLogClient) -> None:
        monkeypatch.setenv('LOG_BEARER_TOKEN', 's3cr3t')
        monkeypatch.setattr(app, 'get_remote_log_client', lambda: client)

        self.context = context
        self.client = client

    @freeze_time('2025-10-15 12:00:00')
    def test_lambda_handler(self, log_event: dict) -> None:
        response = app.lambda_handler(make_event(log_event), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert body == {'message': 'Log received and forwarded successfully', 'logID': '1760529600000'}
        self.client.log.assert_called_once_with('frontend', 'error', 'api', 'Failed to fetch statistics')

    @pytest.mark.parametrize(
        'authorization',
        [None, 'Bearer wrong', 'Basic s3cr3t', 'Bearer ', 's3cr3t'],
    )
    def test_lambda_handler_with_bad_token(self, log_event: dict, authorization) -> None:
        response = app.lambda_handler(make_event(log_event, authorization=authorization), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 401
        assert body['errorCode'] == 'UNAUTHORIZED'
        self.client.log.assert_not_called()

    def test_lambda_handler_without_configured_token(self, monkeypatch: MonkeyPatch, log_event: dict) -> None:
        monkeypatch.delenv('LOG_BEARER_TOKEN')

        response = app.lambda_handler(make_event(log_event), self.context)

        assert response['statusCode'] == 401

    def test_lambda_handler_with_missing_fields(self) -> None:
        response = app.lambda_handler(make_event({'stack': 'frontend', 'level': 'info', 'message': 7}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['message'] == 'Bad Request (missing required fields: package, message)'
        assert body['errorCode'] == 'MISSING_LOG_FIELDS'
        self.client.log.assert_not_called()

    def test_lambda_handler_with_invalid_level(self, log_event: dict) -> None:
        log_event['level'] = 'verbose'

        response = app.lambda_handler(make_event(log_event), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'INVALID_LOG_LEVEL'
        self.client.log.assert_not_called()

    def test_lambda_handler_accepts_upper_case_level(self, log_event: dict) -> None:
        log_event['level'] = 'WARN'

        response = app.lambda_handler(make_event(log_event), self.context)

        assert response['statusCode'] == 200
        self.client.log.assert_called_once_with('frontend', 'WARN', 'api', 'Failed to fetch statistics')

    @pytest.mark.parametrize('raw_body', ['{not json', '"just a string"'])
    def test_lambda_handler_with_invalid_json(self, raw_body) -> None:
        response = app.lambda_handler(make_event(raw_body), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'INVALID_JSON'

    def test_lambda_handler_without_collector(self, monkeypatch: MonkeyPatch, log_event: dict) -> None:
        monkeypatch.setattr(app, 'get_remote_log_client', lambda: None)

        response = app.lambda_handler(make_event(log_event), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['message'] == 'Internal Server Error'
