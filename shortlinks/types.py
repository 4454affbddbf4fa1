from typing import Any, TypeAlias

from sqlalchemy.engine import Engine


# Type aliases for Python dictionaries
LambdaEvent: TypeAlias = dict[str, Any]
LambdaContext: TypeAlias = Any
LambdaResponse: TypeAlias = dict[str, Any]
LambdaConfiguration: TypeAlias = dict[str, Any]
AppConfig: TypeAlias = dict[str, Any]
HttpHeaders: TypeAlias = dict[str, str]

# Type aliases for store clients
DynamoDBTable: TypeAlias = Any  # boto3.resources.factory.dynamodb.Table (generated at runtime)
SQLEngine: TypeAlias = Engine
