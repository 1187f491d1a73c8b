from ari.models.user import User
from ari.seed import seed_users


def test_seed_is_idempotent_and_rehashes(db, hasher):
    first = seed_users(db, hasher)
    old_hash = first[0].hashed_password

    second = seed_users(db, hasher)

    assert [u.email for u in second] == ["alice@example.com", "bob@example.com"]
    assert db.query(User).count() == 2
    assert second[0].id == first[0].id
    assert second[0].hashed_password != old_hash
    assert hasher.verify_sync("password123", second[0].hashed_password)
