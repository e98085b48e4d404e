"""Tests for notification visibility resolution."""

import pytest

from app.domain.errors import InvalidArgumentError
from app.domain.services import (
    RELATIONSHIP_UNRELATED,
    is_visible,
    is_visible_to,
    resolve_viewer_relationship,
)


@pytest.mark.parametrize(
    ("visibility", "relationship", "expected"),
    [
        ("both", "sender", True),
        ("both", "recipient", True),
        ("both", RELATIONSHIP_UNRELATED, False),
        ("both", None, False),
        ("sender_only", "sender", True),
        ("sender_only", "recipient", False),
        ("sender_only", RELATIONSHIP_UNRELATED, False),
        ("recipient_only", "recipient", True),
        ("recipient_only", "sender", False),
        ("recipient_only", RELATIONSHIP_UNRELATED, False),
    ],
)
def test_is_visible(visibility, relationship, expected):
    assert is_visible(visibility, relationship) is expected


@pytest.mark.parametrize("visibility", ["everyone", "", None])
def test_unknown_visibility_is_rejected(visibility):
    with pytest.raises(InvalidArgumentError):
        is_visible(visibility, "sender")


def test_owner_takes_the_recorded_role(make_notification):
    notification = make_notification(
        user_id="alice", metadata={"role": "sender", "counterparty_id": "bob"}
    )

    assert resolve_viewer_relationship("alice", notification) == "sender"
    assert resolve_viewer_relationship("bob", notification) == "recipient"
    assert resolve_viewer_relationship("carol", notification) == RELATIONSHIP_UNRELATED


def test_owner_without_role_is_treated_as_recipient(make_notification):
    notification = make_notification(user_id="alice", metadata={"counterparty_id": "bob"})

    assert resolve_viewer_relationship("alice", notification) == "recipient"
    assert resolve_viewer_relationship("bob", notification) == "sender"


def test_missing_viewer_is_unrelated(make_notification):
    assert resolve_viewer_relationship(None, make_notification()) == RELATIONSHIP_UNRELATED
    assert resolve_viewer_relationship("", make_notification()) == RELATIONSHIP_UNRELATED


def test_is_visible_to_combines_relationship_and_visibility(make_notification):
    notification = make_notification(
        user_id="alice",
        metadata={"role": "sender", "counterparty_id": "bob", "visibility": "sender_only"},
    )

    assert is_visible_to("alice", notification) is True
    assert is_visible_to("bob", notification) is False
    assert is_visible_to("mallory", notification) is False
