import pytest

from crushmatch.services.identity_store import IdentityStore
from crushmatch.services.interest_store import InterestStore
from crushmatch.services.match_resolver import MatchResolver
from crushmatch.utils.exceptions import NotFound


@pytest.fixture
def identities(db_session):
    return IdentityStore(db_session)


@pytest.fixture
def interests(db_session, identities):
    return InterestStore(db_session, identities)


@pytest.fixture
def resolver(identities, interests):
    return MatchResolver(identities, interests)


@pytest.mark.asyncio
async def test_alice_and_bob(identities, interests, resolver):
    alice = await identities.register("alice", "pw1")
    bob = await identities.register("bob", "pw2")

    await interests.add(alice, "bob")
    assert await resolver.resolve_matches(alice) == []
    assert await resolver.resolve_matches(bob) == []

    await interests.add(bob, "alice")
    assert await resolver.resolve_matches(alice) == ["bob"]
    assert await resolver.resolve_matches(bob) == ["alice"]


@pytest.mark.asyncio
async def test_unregistered_name_never_matches(identities, interests, resolver):
    alice = await identities.register("alice", "pw1")
    bob = await identities.register("bob", "pw2")
    await interests.add(alice, "nonexistent")
    await interests.add(bob, "alice")

    assert await resolver.resolve_matches(alice) == []


@pytest.mark.asyncio
async def test_matches_are_symmetric(identities, interests, resolver):
    ids = {name: await identities.register(name, "pw") for name in ["alice", "bob", "carol", "dave"]}
    edges = [("alice", "bob"), ("bob", "alice"), ("alice", "carol"), ("carol", "dave"), ("dave", "carol"), ("bob", "dave")]
    for owner, target in edges:
        await interests.add(ids[owner], target)

    results = {name: await resolver.resolve_matches(user_id) for name, user_id in ids.items()}

    for name, matched in results.items():
        for other in matched:
            assert name in results[other]
    assert results == {
        "alice": ["bob"],
        "bob": ["alice"],
        "carol": ["dave"],
        "dave": ["carol"],
    }


@pytest.mark.asyncio
async def test_duplicates_are_kept_in_order(identities, interests, resolver):
    alice = await identities.register("alice", "pw1")
    bob = await identities.register("bob", "pw2")
    carol = await identities.register("carol", "pw3")
    await interests.add(alice, "bob")
    await interests.add(alice, "carol")
    await interests.add(alice, "bob")
    await interests.add(bob, "alice")
    await interests.add(carol, "alice")

    assert await resolver.resolve_matches(alice) == ["bob", "carol", "bob"]


@pytest.mark.asyncio
async def test_match_requires_exact_username(identities, interests, resolver):
    alice = await identities.register("alice", "pw1")
    bob = await identities.register("bob", "pw2")
    await interests.add(alice, "Bob")
    await interests.add(bob, "alice")

    assert await resolver.resolve_matches(alice) == []
    assert await resolver.resolve_matches(bob) == []


@pytest.mark.asyncio
async def test_resolve_is_idempotent(identities, interests, resolver):
    alice = await identities.register("alice", "pw1")
    bob = await identities.register("bob", "pw2")
    await interests.add(alice, "bob")
    await interests.add(bob, "alice")

    first = await resolver.resolve_matches(alice)
    second = await resolver.resolve_matches(alice)

    assert first == second == ["bob"]


@pytest.mark.asyncio
async def test_agrees_with_find_reciprocal(identities, interests, resolver):
    alice = await identities.register("alice", "pw1")
    bob = await identities.register("bob", "pw2")
    await identities.register("carol", "pw3")
    for name in ["bob", "carol", "nonexistent"]:
        await interests.add(alice, name)
    await interests.add(bob, "alice")

    expected = [
        i.name
        for i in await interests.list_by_owner(alice)
        if await interests.find_reciprocal(alice, i.name) is not None
    ]

    assert await resolver.resolve_matches(alice) == expected == ["bob"]


@pytest.mark.asyncio
async def test_unknown_user_not_found(resolver):
    with pytest.raises(NotFound):
        await resolver.resolve_matches("missing-id")
