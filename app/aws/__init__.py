"""
AWS integrations layer.
"""
from app.aws.client import get_aws_client
from app.aws.secrets import get_secret

__all__ = [
    "get_aws_client",
    "get_secret",
]
