"""Tests for app.aws.secrets — Secrets Manager wrapper."""

import json
from unittest.mock import MagicMock

import pytest

from app.aws import secrets
from app.aws.secrets import GetSecretWrapper


class _NotFound(Exception):
    pass


def _client():
    client = MagicMock()
    client.exceptions.ResourceNotFoundException = _NotFound
    return client


def test_wrapper_returns_secret_string():
    client = _client()
    client.get_secret_value.return_value = {"SecretString": "s3cr3t"}
    assert GetSecretWrapper(client).get_secret("db") == "s3cr3t"
    client.get_secret_value.assert_called_once_with(SecretId="db")


def test_wrapper_reraises_not_found():
    client = _client()
    client.get_secret_value.side_effect = _NotFound()
    with pytest.raises(_NotFound):
        GetSecretWrapper(client).get_secret("missing")


def test_get_secret_parses_json(monkeypatch):
    client = _client()
    client.get_secret_value.return_value = {"SecretString": json.dumps({"host": "db", "port": 5432})}
    seen = {}

    def fake_get_aws_client(service_name, region_name=None):
        seen["args"] = (service_name, region_name)
        return client

    monkeypatch.setattr(secrets, "get_aws_client", fake_get_aws_client)
    assert secrets.get_secret("postcards/db", region_name="eu-central-1") == {"host": "db", "port": 5432}
    assert seen["args"] == ("secretsmanager", "eu-central-1")
