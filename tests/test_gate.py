from __future__ import annotations

from typing import Optional

import pytest

from bbpush.core.classifier import ContentClassifier
from bbpush.core.gate import InsertionGate, rejection_reason
from bbpush.core.models import ContentItem, ContentKind, ContentSaveEvent


def _item(kind: ContentKind = ContentKind.POST, status: str = "publish") -> ContentItem:
    post_type = {ContentKind.POST: "topic", ContentKind.COMMENT: "reply"}.get(kind, "revision")
    return ContentItem(
        id=10,
        kind=kind,
        post_type=post_type,
        author_id=7,
        title="Welcome",
        raw_content="hello",
        status=status,
        parent_id=3,
    )


def _event(
    *,
    kind: ContentKind = ContentKind.POST,
    is_update: bool = False,
    is_autosave: bool = False,
    is_revision: bool = False,
    origin: Optional[str] = None,
) -> ContentSaveEvent:
    return ContentSaveEvent(
        content_id=10,
        content=_item(kind),
        is_update=is_update,
        is_autosave=is_autosave,
        is_revision=is_revision,
        origin=origin,
    )


@pytest.mark.parametrize("kind", [ContentKind.POST, ContentKind.COMMENT])
@pytest.mark.parametrize("origin", [None, "admin", "frontend"])
def test_accepts_new_publications(kind: ContentKind, origin: Optional[str]) -> None:
    assert InsertionGate().accept(_event(kind=kind, origin=origin))


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"is_autosave": True},
        {"is_revision": True},
        {"origin": "rest"},
        {"kind": ContentKind.COMMENT},
    ],
)
def test_updates_are_always_rejected(kwargs: dict) -> None:
    assert not InsertionGate().accept(_event(is_update=True, **kwargs))


@pytest.mark.parametrize(
    ("kwargs", "reason"),
    [
        ({"kind": ContentKind.OTHER}, "unsupported type"),
        ({"is_autosave": True}, "autosave"),
        ({"is_revision": True}, "revision"),
        ({"origin": "rest"}, "rest origin"),
        ({"is_update": True}, "update"),
    ],
)
def test_each_predicate_rejects_on_its_own(kwargs: dict, reason: str) -> None:
    event = _event(**kwargs)
    assert rejection_reason(event) == reason
    assert not InsertionGate().accept(event)


def test_gate_keeps_no_state() -> None:
    gate = InsertionGate()
    event = _event()
    assert gate.accept(event)
    assert gate.accept(event)


def test_classifier_eligibility() -> None:
    classifier = ContentClassifier()
    assert classifier.is_eligible(_item(ContentKind.POST))
    assert classifier.is_eligible(_item(ContentKind.COMMENT))
    assert not classifier.is_eligible(_item(ContentKind.COMMENT, status="pending"))
    assert not classifier.is_eligible(_item(ContentKind.POST, status="draft"))
    assert not classifier.is_eligible(_item(ContentKind.OTHER))


def test_classifier_object_type() -> None:
    classifier = ContentClassifier()
    assert classifier.object_type(_item(ContentKind.POST)) == "topic"
    assert classifier.object_type(_item(ContentKind.COMMENT, status="draft")) == "reply"
    assert classifier.object_type(_item(ContentKind.OTHER)) == ""


@pytest.mark.parametrize("origin", ["REST", "Rest", " rest "])
def test_rest_origin_is_rejected_in_any_case(origin: str) -> None:
    event = _event(origin=origin)
    assert rejection_reason(event) == "rest origin"
    assert not InsertionGate().accept(event)
