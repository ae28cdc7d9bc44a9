import os.path

# Load GraphQL definitions from the file
pwd = os.path.dirname(__file__)

# Get this schema
with open(os.path.join(pwd, './relay.graphql'), 'rt') as f:
    graphql_relay_schema = f.read()
