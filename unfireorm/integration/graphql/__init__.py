""" Integration with GraphQL: graphql-core """

from .schema import graphql_relay_schema
from .relay import relay_connection, paginate_input_from_args
from .relay import ConnectionDict, EdgeDict, PageInfoDict
