import nox.sessions

# Nox
nox.options.reuse_existing_virtualenvs = True
nox.options.sessions = [
    'tests',
    'tests_strawberry',
    'tests_graphql',
    'tests_fastapi',
]

# Versions
PYTHON_VERSIONS = ['3.9', '3.10', '3.11', '3.12']
STRAWBERRY_VERSIONS = [
    # Selective: releases that touched the DataLoader
    '0.200.0', '0.209.8', '0.220.0', '0.235.2', '0.243.1',
]
GRAPHQL_CORE_VERSIONS = [
    '3.2.0', '3.2.1', '3.2.3', '3.2.4', '3.2.5',
]
FASTAPI_VERSIONS = [
    '0.95.2', '0.100.1', '0.104.1', '0.110.3', '0.115.0',
]


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.sessions.Session, *, overrides: dict[str, str] = {}):
    """ Run all tests """
    session.install('.[test]')

    if overrides:
        session.install(*(f'{name}=={version}' for name, version in overrides.items()))

    # Test
    args = []
    if not overrides:
        args.append('--cov=unfireorm')

    session.run('pytest', 'tests/', *args)


@nox.session(python=PYTHON_VERSIONS[-1])
@nox.parametrize('strawberry', STRAWBERRY_VERSIONS)
def tests_strawberry(session: nox.sessions.Session, strawberry):
    """ Test against a specific Strawberry version: DataLoader """
    tests(session, overrides={'strawberry-graphql': strawberry})


@nox.session(python=PYTHON_VERSIONS[-1])
@nox.parametrize('graphql_core', GRAPHQL_CORE_VERSIONS)
def tests_graphql(session: nox.sessions.Session, graphql_core):
    """ Test against a specific GraphQL version """
    tests(session, overrides={'graphql-core': graphql_core})


@nox.session(python=PYTHON_VERSIONS[-1])
@nox.parametrize('fastapi', FASTAPI_VERSIONS)
def tests_fastapi(session: nox.sessions.Session, fastapi):
    """ Test against a specific FastAPI version """
    tests(session, overrides={'fastapi': fastapi})
