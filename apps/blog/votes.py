"""
Comment like/dislike reconciliation.

Each voter is in one of three states per comment: no vote, like, dislike.
Actions move the voter to a target state; reaching the state they are
already in is a no-op. The decision and the write happen under a row lock
on the comment, so counters always equal the number of vote rows of each
kind.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from django.db import models, transaction
from django.db.models import F

from .models import Comment, CommentVote, VoteKind

logger = logging.getLogger(__name__)


class VoteAction(models.TextChoices):
    LIKE = "like", "Like"
    UNLIKE = "unlike", "Unlike"
    DISLIKE = "dislike", "Dislike"
    UNDISLIKE = "undislike", "Undislike"
    SWITCH_TO_LIKE = "switchToLike", "Switch to like"
    SWITCH_TO_DISLIKE = "switchToDislike", "Switch to dislike"


def resolve_vote(current: str | None, action: str) -> str | None:
    """Return the voter's state after `action`, given their current state.

    States are VoteKind.LIKE, VoteKind.DISLIKE or None.
    """
    if action in (VoteAction.LIKE, VoteAction.SWITCH_TO_LIKE):
        return VoteKind.LIKE
    if action in (VoteAction.DISLIKE, VoteAction.SWITCH_TO_DISLIKE):
        return VoteKind.DISLIKE
    if action == VoteAction.UNLIKE:
        return None if current == VoteKind.LIKE else current
    if action == VoteAction.UNDISLIKE:
        return None if current == VoteKind.DISLIKE else current
    raise ValueError(f"Unknown vote action: {action}")


def toggle_action(current: str | None) -> str:
    """Single-button like toggle: unlike when liked, like otherwise."""
    return VoteAction.UNLIKE if current == VoteKind.LIKE else VoteAction.LIKE


def counter_deltas(current: str | None, target: str | None) -> tuple[int, int]:
    """(likeCount delta, dislikeCount delta) for moving from current to target."""
    like_delta = (target == VoteKind.LIKE) - (current == VoteKind.LIKE)
    dislike_delta = (target == VoteKind.DISLIKE) - (current == VoteKind.DISLIKE)
    return int(like_delta), int(dislike_delta)


@dataclass
class VoteResult:
    like_count: int
    dislike_count: int
    state: str | None
    changed: bool

    @property
    def has_liked(self) -> bool:
        return self.state == VoteKind.LIKE

    @property
    def has_disliked(self) -> bool:
        return self.state == VoteKind.DISLIKE


class CommentNotFound(Exception):
    pass


def reconcile_vote(
    post_id: str,
    comment_id: str,
    voter_id: str,
    choose_action: Callable[[str | None], str],
) -> VoteResult:
    """Apply the action chosen from the voter's current state, atomically."""
    with transaction.atomic():
        comment = (
            Comment.objects.select_for_update()
            .filter(pk=comment_id, post_id=post_id)
            .first()
        )
        if comment is None:
            raise CommentNotFound(comment_id)

        vote = CommentVote.objects.filter(comment=comment, voter_id=voter_id).first()
        current = vote.kind if vote else None
        action = choose_action(current)
        target = resolve_vote(current, action)

        if target == current:
            return VoteResult(comment.like_count, comment.dislike_count, current, changed=False)

        if target is None:
            vote.delete()
        elif vote is None:
            CommentVote.objects.create(comment=comment, voter_id=voter_id, kind=target)
        else:
            vote.kind = target
            vote.save(update_fields=["kind", "updated_at"])

        like_delta, dislike_delta = counter_deltas(current, target)
        Comment.objects.filter(pk=comment.pk).update(
            like_count=F("like_count") + like_delta,
            dislike_count=F("dislike_count") + dislike_delta,
        )
        comment.refresh_from_db(fields=["like_count", "dislike_count"])

    logger.info(f"[Vote] {voter_id} {action} on comment {comment_id}: {current} -> {target}")
    return VoteResult(comment.like_count, comment.dislike_count, target, changed=True)


def vote_on_comment(post_id: str, comment_id: str, voter_id: str, action: str) -> VoteResult:
    return reconcile_vote(post_id, comment_id, voter_id, lambda current: action)


def toggle_comment_like(post_id: str, comment_id: str, voter_id: str) -> VoteResult:
    return reconcile_vote(post_id, comment_id, voter_id, toggle_action)
