from datetime import datetime, timezone

import pytest

from unfireorm import exc
from unfireorm.testing import MemoryClient, QueryLogger, ASCENDING, DESCENDING


async def ids(query) -> list[str]:
    return [snapshot.id for snapshot in await query.get()]


@pytest.mark.asyncio
async def test_order_by_mixed_types(client: MemoryClient):
    """ Values of different types are ordered by type first """
    ref = client.collection('things')
    await ref.document('str').set({'v': 'a'})
    await ref.document('int').set({'v': 2})
    await ref.document('float').set({'v': 1.5})
    await ref.document('null').set({'v': None})
    await ref.document('bool').set({'v': True})
    await ref.document('time').set({'v': datetime(2000, 1, 1, tzinfo=timezone.utc)})
    await ref.document('none').set({'other': 1})

    # Documents without the field are excluded
    assert await ids(ref.order_by('v')) == ['null', 'bool', 'float', 'int', 'time', 'str']
    assert await ids(ref.order_by('v', DESCENDING)) == ['str', 'time', 'int', 'float', 'bool', 'null']

    # Unordered: every document
    assert len(await ref.get()) == 7


@pytest.mark.asyncio
async def test_ties_and_cursors(client: MemoryClient):
    """ Ties are broken by path; dict cursors skip the whole tie """
    ref = client.collection('things')
    for name, v in [('a', 1), ('b', 2), ('c', 2), ('d', 3)]:
        await ref.document(name).set({'v': v})

    assert await ids(ref.order_by('v', ASCENDING)) == ['a', 'b', 'c', 'd']
    assert await ids(ref.order_by('v', DESCENDING)) == ['d', 'c', 'b', 'a']

    assert await ids(ref.order_by('v').start_after({'v': 1})) == ['b', 'c', 'd']
    assert await ids(ref.order_by('v').start_after({'v': 2})) == ['d']
    assert await ids(ref.order_by('v').end_before({'v': 3})) == ['a', 'b', 'c']
    assert await ids(ref.order_by('v', DESCENDING).start_after({'v': 2}).limit(1)) == ['a']

    # A snapshot cursor positions on the document itself
    b, = await ref.where('v', '==', 2).order_by('v').limit(1).get()
    assert await ids(ref.order_by('v').start_after(b)) == ['c', 'd']

    # Cursors need an ordering
    with pytest.raises(ValueError):
        await ref.start_after({'v': 1}).get()
    with pytest.raises(ValueError):
        await ref.order_by('v').start_after({'x': 1}).get()


@pytest.mark.asyncio
async def test_filters(client: MemoryClient):
    ref = client.collection('things')
    await ref.document('a').set({'n': 1, 'tags': ['x', 'y']})
    await ref.document('b').set({'n': 2, 'tags': ['y']})
    await ref.document('c').set({'n': 'two', 'tags': []})

    assert await ids(ref.where('n', '==', 1)) == ['a']
    assert await ids(ref.where('n', '!=', 1)) == ['b', 'c']
    assert await ids(ref.where('n', '>', 0)) == ['a', 'b']  # strings don't compare with numbers
    assert await ids(ref.where('n', 'in', [2, 'two'])) == ['b', 'c']
    assert await ids(ref.where('n', 'not-in', [2, 'two'])) == ['a']
    assert await ids(ref.where('tags', 'array-contains', 'x')) == ['a']
    assert await ids(ref.where('tags', 'array-contains-any', ['x', 'y'])) == ['a', 'b']

    with pytest.raises(ValueError):
        ref.where('n', 'like', 1)


@pytest.mark.asyncio
async def test_collection_group_scope(client: MemoryClient):
    """ A group spans every collection with the same id """
    await client.collection('posts').document('top').set({'n': 0})
    await client.collection('users').document('u1').collection('posts').document('p1').set({'n': 1})
    await client.collection('users').document('u2').collection('posts').document('p1').set({'n': 2})
    await client.collection('users').document('u2').collection('comments').document('c1').set({'n': 3})

    snapshots = await client.collection_group('posts').order_by('n').get()
    assert [snapshot.reference.path for snapshot in snapshots] == ['posts/top', 'users/u1/posts/p1', 'users/u2/posts/p1']

    # A collection only sees its own documents
    assert await ids(client.collection('users').document('u2').collection('posts')) == ['p1']

    with pytest.raises(ValueError):
        client.collection_group('users/u1/posts')


@pytest.mark.asyncio
async def test_documents(client: MemoryClient):
    """ Document references: get, set, delete, add """
    ref = client.collection('things')

    snapshot = await ref.document('a').get()
    assert not snapshot.exists
    assert snapshot.to_dict() is None

    # Stored data is a copy
    data = {'n': 1}
    await ref.document('a').set(data)
    data['n'] = 2
    assert (await ref.document('a').get()).to_dict() == {'n': 1}

    # add(): generated ids
    _, added = await ref.add({'n': 3})
    assert len(added.id) == 20
    assert added.parent.path == 'things'

    with pytest.raises(exc.StoreError):
        await ref.add({'n': 4}, 'a')

    # delete
    await ref.document('a').delete()
    assert not (await ref.document('a').get()).exists


@pytest.mark.asyncio
async def test_query_logger(client: MemoryClient):
    """ Every operation is reported to listeners """
    ref = client.collection('things')

    with QueryLogger(client) as log:
        await ref.document('a').set({'n': 1})
        await ref.document('a').get()
        await ref.order_by('n').limit(1).get()
        await ref.document('a').delete()

    assert log == [
        'set things/a',
        'get things/a',
        'query things order_by(n ASCENDING) limit(1)',
        'delete things/a',
    ]
    assert log.n == 4

    # Detached
    await ref.get()
    assert len(log) == 4


@pytest.mark.asyncio
async def test_failing_reads(client: MemoryClient):
    ref = client.collection('things')
    await ref.document('a').set({'n': 1})
    await ref.document('b').set({'n': 2})

    client.fail_reads_of('things/b')

    assert (await ref.document('a').get()).exists
    with pytest.raises(exc.StoreError):
        await ref.document('b').get()
    with pytest.raises(exc.StoreError):
        await ref.get()
