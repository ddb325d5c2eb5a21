import pytest

from token_lease.core.errors import InvalidInput
from token_lease.core.expiration import BlockInfo, Expiration
from token_lease.core.types import Approval, LeaseState, Metadata, TokenInfo


NOW = BlockInfo(height=100, time=1_000)


def test_never_is_never_expired() -> None:
    assert Expiration.never().is_expired(NOW) is False
    assert Expiration.never().is_expired(BlockInfo(height=10**12, time=10**12)) is False


def test_height_and_time_families_compare_against_matching_component() -> None:
    assert Expiration.at_height(101).is_expired(NOW) is False
    assert Expiration.at_height(100).is_expired(NOW) is True
    assert Expiration.at_height(99).is_expired(NOW) is True

    assert Expiration.at_time(1_001).is_expired(NOW) is False
    assert Expiration.at_time(1_000).is_expired(NOW) is True


def test_expiration_dict_shape() -> None:
    assert Expiration.never().to_dict() == {"never": {}}
    assert Expiration.at_height(5).to_dict() == {"at_height": 5}
    assert Expiration.from_dict({"at_time": 7}) == Expiration.at_time(7)
    assert Expiration.from_dict(None) == Expiration.never()
    with pytest.raises(ValueError):
        Expiration.from_dict({"at_epoch": 1})


def test_expiration_rejects_negative_threshold() -> None:
    with pytest.raises(InvalidInput) as excinfo:
        Expiration.at_height(-1)
    assert excinfo.value.to_dict()["reason"] == "invalid_input"
    with pytest.raises(InvalidInput):
        Expiration.from_dict({"at_block": 3})


def test_missing_extension_and_missing_expires_both_read_as_never() -> None:
    bare = TokenInfo(token_id="t", owner="alice")
    no_expires = TokenInfo(token_id="t", owner="alice", extension=Metadata(name="x"))
    assert bare.lease == Expiration.never()
    assert no_expires.lease == Expiration.never()
    assert bare.lease_state(NOW) == LeaseState.ACTIVE_UNLEASED


def test_lease_state_transitions_lazily_with_time() -> None:
    token = TokenInfo(token_id="t", owner="alice", extension=Metadata(expires=Expiration.at_height(150)))
    assert token.lease_state(NOW) == LeaseState.ACTIVE_LEASED
    assert token.lease_state(BlockInfo(height=150, time=1_000)) == LeaseState.EXPIRED


def test_token_dict_round_trip_keeps_lease_and_approvals() -> None:
    token = TokenInfo(
        token_id="t",
        owner="alice",
        approvals=[Approval(spender="bob", expires=Expiration.at_height(300))],
        extension=Metadata(name="x", royalty_percentage=5, expires=Expiration.at_time(2_000)),
    )
    restored = TokenInfo.from_dict(token.to_dict())
    assert restored == token
