"""
Conversation State Machine

States: REQUEST, ACTIVE, BLOCKED. A REQUEST ends either by ACCEPT (to ACTIVE)
or by DECLINE, which deletes the conversation. BLOCK parks any state in
BLOCKED and remembers where it came from so UNBLOCK can restore it.

Every (state, event) pair that is not in ``TRANSITIONS`` is rejected with
InvalidTransitionError.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from zfounders.domain.entities.conversation import Conversation
from zfounders.domain.entities.user import User
from zfounders.domain.exceptions import InvalidTransitionError
from zfounders.domain.value_objects.enums import ConversationStatus


class ConversationEvent(str, Enum):
    SEND = "send"
    ACCEPT = "accept"
    DECLINE = "decline"
    ACTIVATE_VIA_INTEREST = "activate"
    BLOCK = "block"
    UNBLOCK = "unblock"


class _Marker(str, Enum):
    DELETE = "DELETE"
    RESTORE = "RESTORE"


DELETE = _Marker.DELETE
RESTORE = _Marker.RESTORE

REQUEST = ConversationStatus.REQUEST
ACTIVE = ConversationStatus.ACTIVE
BLOCKED = ConversationStatus.BLOCKED

TRANSITIONS = {
    (ACTIVE, ConversationEvent.SEND): ACTIVE,
    (REQUEST, ConversationEvent.ACCEPT): ACTIVE,
    (ACTIVE, ConversationEvent.ACCEPT): ACTIVE,
    (REQUEST, ConversationEvent.DECLINE): DELETE,
    (REQUEST, ConversationEvent.ACTIVATE_VIA_INTEREST): ACTIVE,
    (ACTIVE, ConversationEvent.ACTIVATE_VIA_INTEREST): ACTIVE,
    (REQUEST, ConversationEvent.BLOCK): BLOCKED,
    (ACTIVE, ConversationEvent.BLOCK): BLOCKED,
    (BLOCKED, ConversationEvent.BLOCK): BLOCKED,
    (BLOCKED, ConversationEvent.UNBLOCK): RESTORE,
}

_REVEALING_EVENTS = {ConversationEvent.ACCEPT, ConversationEvent.ACTIVATE_VIA_INTEREST}


@dataclass(frozen=True)
class Transition:
    previous: ConversationStatus
    current: Optional[ConversationStatus]  # None once deleted
    event: ConversationEvent

    @property
    def deleted(self) -> bool:
        return self.current is None

    @property
    def changed(self) -> bool:
        return self.previous != self.current


def next_state(status: ConversationStatus, event: ConversationEvent):
    try:
        return TRANSITIONS[(status, event)]
    except KeyError:
        raise InvalidTransitionError(status.value, event.value) from None


def apply_event(conversation: Conversation, event: ConversationEvent) -> Transition:
    """Move ``conversation`` along ``event``; the caller persists or deletes it."""
    previous = conversation.status
    target = next_state(previous, event)

    if target == DELETE:
        return Transition(previous, None, event)

    if target == RESTORE:
        conversation.status = conversation.pre_block_status or ACTIVE
        conversation.pre_block_status = None
    else:
        if target == BLOCKED and previous != BLOCKED:
            conversation.pre_block_status = previous
        conversation.status = target

    if event in _REVEALING_EVENTS:
        conversation.is_revealed = True

    return Transition(previous, conversation.status, event)


def initial_state(
    sender: User, recipient: User, has_accepted_interest: bool
) -> tuple[ConversationStatus, bool]:
    """Status and reveal flag for a conversation created by a first message.

    An investor's cold first contact with a founder waits for the founder
    (REQUEST) unless the founder already accepted that investor's interest.
    """
    status = ACTIVE
    if sender.is_investor and recipient.is_founder and not has_accepted_interest:
        status = REQUEST
    return status, not sender.is_private_investor
