"""
AWS Secrets Manager wrapper.
Used to load database credentials when DB_SECRET_NAME is configured.
"""
import json
import logging

from app.aws.client import get_aws_client

logger = logging.getLogger(__name__)


class GetSecretWrapper:
    """Encapsulates AWS Secrets Manager actions."""

    def __init__(self, secretsmanager_client):
        self.client = secretsmanager_client

    def get_secret(self, secret_name: str) -> str:
        """
        Retrieve a secret string from AWS Secrets Manager.

        Raises:
            ClientError: If secret retrieval fails
        """
        try:
            response = self.client.get_secret_value(SecretId=secret_name)
        except self.client.exceptions.ResourceNotFoundException:
            logger.error("The requested secret %s was not found.", secret_name)
            raise
        logger.info("Secret %s retrieved.", secret_name)
        return response["SecretString"]


def get_secret(secret_name: str, region_name: str = "us-east-1") -> dict:
    """Get a secret from AWS Secrets Manager and parse it as JSON."""
    client = get_aws_client("secretsmanager", region_name=region_name)
    return json.loads(GetSecretWrapper(client).get_secret(secret_name))
