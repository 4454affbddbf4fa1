"""Data Access Object (DAO) implementation for managing links in DynamoDB

This module provides a DynamoDB-based implementation of LinkBaseDAO, the
document-store backend.

Table layout:
    Partition key:  hashId (S)
    Attributes:     url (S), createdAt (S, ISO-8601 UTC, lexicographically sortable),
                    kind (S, constant 'link')
    GSI 'recent':   partition key kind, sort key createdAt (ALL projection)

Responsibilities:
    - Insert links with `attribute_not_exists(hashId)` so DynamoDB itself
      rejects a taken hash;
    - Retrieve links by hash (strongly consistent reads);
    - List the newest links by querying the 'recent' index backwards;
    - Raise appropriate DAO exceptions.

Example:
    >>> from shortlinks.dao.dynamodb import LinkDynamoDBDAO

    >>> with LinkDynamoDBDAO(table_name='links', region_name='eu-west-1') as dao:
    ...     dao.insert('aB3_', 'https://example.com/page')
    LinkModel(hash='aB3_', url='https://example.com/page', created_at=...)
"""

import os
from datetime import datetime, UTC
from typing import Any, Optional

import boto3
from beartype import beartype
from boto3.dynamodb.conditions import Attr, Key
from botocore.config import Config
from botocore.exceptions import ClientError

from shortlinks.models import LinkModel
from shortlinks.types import DynamoDBTable
from shortlinks.dao.base import LinkBaseDAO
from shortlinks.dao.dynamodb.helpers import handle_dynamodb_errors, is_conditional_check_failure
from shortlinks.dao.exceptions import DataStoreError, LinkAlreadyExistsError, LinkNotFoundError
from shortlinks.utils.runtime import running_locally
from shortlinks.utils.constants import (
    LINKS_PAGE_SIZE,
    DEFAULT_ACQUIRE_TIMEOUT,
    DEFAULT_OPERATION_TIMEOUT,
    LOCALSTACK_ENDPOINT_ENV,
)


LINK_KIND = 'link'
RECENT_INDEX_NAME = 'recent'
CREATED_AT_FORMAT = '%Y-%m-%dT%H:%M:%S.%fZ'


class LinkDynamoDBDAO(LinkBaseDAO):
    """DynamoDB-based Data Access Object (DAO) for managing links

    Attributes:
        table (DynamoDBTable):
            boto3 Table resource for the links table.
        table_name (str):
            Name of the links table.
        recent_index_name (str):
            Name of the GSI used for recency listing.

    Methods:
        insert(hash: str, url: str, **kwargs) -> LinkModel
        get(hash: str, **kwargs) -> LinkModel
        recent(limit: int = 30, **kwargs) -> list[LinkModel]
        create_table() -> None
        close() -> None
    """

    def __init__(
        self,
        table_name: str,
        region_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        connect_timeout: float = DEFAULT_ACQUIRE_TIMEOUT,
        read_timeout: float = DEFAULT_OPERATION_TIMEOUT,
        max_attempts: int = 1,
        recent_index_name: str = RECENT_INDEX_NAME,
        dynamodb_table: Optional[DynamoDBTable] = None,
    ):
        """Initialize a DynamoDB-based DAO

        Either reuse an existing boto3 Table resource (useful in tests) or
        create one with bounded timeouts.

        Args:
            table_name (str):
                Name of the DynamoDB links table.
            region_name (Optional[str]):
                AWS region. Defaults to boto3's own resolution.
            endpoint_url (Optional[str]):
                Custom endpoint. Defaults to LocalStack when running locally.
            connect_timeout (float):
                Seconds to wait for a connection. Defaults to 1.
            read_timeout (float):
                Seconds to wait for a response. Defaults to 1.
            max_attempts (int):
                Total botocore attempts per call (retries included). Defaults to 1.
            recent_index_name (str):
                Name of the GSI used for listing. Defaults to 'recent'.
            dynamodb_table (Optional[DynamoDBTable]):
                Pre-initialized boto3 Table resource. If None, a new one is created.
        """
        self.table_name = table_name
        self.recent_index_name = recent_index_name
        self._owns_client = dynamodb_table is None

        if dynamodb_table is None:
            if endpoint_url is None and running_locally():
                endpoint_url = os.environ.get(LOCALSTACK_ENDPOINT_ENV, 'http://localhost:4566')
            config = Config(
                connect_timeout=connect_timeout,
                read_timeout=read_timeout,
                retries={'max_attempts': int(max_attempts), 'mode': 'standard'},
            )
            dynamodb = boto3.resource('dynamodb', region_name=region_name, endpoint_url=endpoint_url, config=config)
            dynamodb_table = dynamodb.Table(table_name)

        self.table = dynamodb_table

    @handle_dynamodb_errors
    @beartype
    def insert(self, hash: str, url: str, **kwargs) -> LinkModel:
        """Insert a link unless its hash is taken

        The write carries `attribute_not_exists(hashId)`, evaluated atomically
        by DynamoDB. A ConditionalCheckFailedException is the one and only
        signal that the hash is already taken.

        Raises:
            LinkAlreadyExistsError:
                If a link with the same hash already exists.
            DataStoreError:
                On any other DynamoDB failure (handled by decorator).
        """
        created_at = datetime.now(UTC)
        item = {
            'hashId': hash,
            'url': url,
            'createdAt': created_at.strftime(CREATED_AT_FORMAT),
            'kind': LINK_KIND,
        }

        try:
            self.table.put_item(Item=item, ConditionExpression=Attr('hashId').not_exists())
        except ClientError as e:
            if is_conditional_check_failure(e):
                raise LinkAlreadyExistsError(f"Link with hash '{hash}' already exists.") from e
            raise

        return LinkModel(hash=hash, url=url, created_at=created_at)

    @handle_dynamodb_errors
    @beartype
    def get(self, hash: str, **kwargs) -> LinkModel:
        """Retrieve a link by hash with a strongly consistent read

        Raises:
            LinkNotFoundError:
                If no item with the given hash exists.
            DataStoreError:
                On DynamoDB failures or malformed items.
        """
        response = self.table.get_item(Key={'hashId': hash}, ConsistentRead=True)
        item = response.get('Item')
        if not item:
            raise LinkNotFoundError(f"Link with hash '{hash}' not found.")
        return self._to_model(item)

    @handle_dynamodb_errors
    @beartype
    def recent(self, limit: int = LINKS_PAGE_SIZE, **kwargs) -> list[LinkModel]:
        """Retrieve the newest links via the 'recent' index, newest first

        Raises:
            DataStoreError:
                On DynamoDB failures or malformed items.
        """
        if limit < 1:
            return []

        response = self.table.query(
            IndexName=self.recent_index_name,
            KeyConditionExpression=Key('kind').eq(LINK_KIND),
            ScanIndexForward=False,
            Limit=limit,
        )
        return [self._to_model(item) for item in response.get('Items', [])]

    @handle_dynamodb_errors
    def create_table(self) -> None:
        """Create the links table and its 'recent' index, then wait until it is active"""
        client = self.table.meta.client
        client.create_table(
            TableName=self.table_name,
            BillingMode='PAY_PER_REQUEST',
            AttributeDefinitions=[
                {'AttributeName': 'hashId', 'AttributeType': 'S'},
                {'AttributeName': 'kind', 'AttributeType': 'S'},
                {'AttributeName': 'createdAt', 'AttributeType': 'S'},
            ],
            KeySchema=[{'AttributeName': 'hashId', 'KeyType': 'HASH'}],
            GlobalSecondaryIndexes=[
                {
                    'IndexName': self.recent_index_name,
                    'KeySchema': [
                        {'AttributeName': 'kind', 'KeyType': 'HASH'},
                        {'AttributeName': 'createdAt', 'KeyType': 'RANGE'},
                    ],
                    'Projection': {'ProjectionType': 'ALL'},
                }
            ],
        )
        client.get_waiter('table_exists').wait(TableName=self.table_name)

    def close(self) -> None:
        if self._owns_client:
            self.table.meta.client.close()

    @staticmethod
    def _to_model(item: dict[str, Any]) -> LinkModel:
        try:
            return LinkModel(
                hash=item['hashId'],
                url=item['url'],
                created_at=datetime.fromisoformat(item['createdAt']),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise DataStoreError('Malformed link item in DynamoDB.') from e
