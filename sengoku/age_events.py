"""
sengoku/age_events.py
~~~~~~~~~~~~~~~~~~~~~
Scripted life events keyed by character age.

Only a handful of ages carry an event; every other year passes silently and
``lookup`` returns an empty list for it.
"""

from __future__ import annotations

from collections import defaultdict

from sengoku.models import AgeEvent, Choice, StatDelta

# ---------------------------------------------------------------------------
#  Content
# ---------------------------------------------------------------------------

AGE_EVENTS: tuple[AgeEvent, ...] = (
    AgeEvent(
        age=16,
        title="Coming-of-Age Ceremony",
        description=(
            "You have turned sixteen and are ready to become a warrior. Your clan "
            "holds a ceremony to mark your passage into adult life."
        ),
        choices=(
            Choice(
                text="Dedicate to swordsmanship training",
                consequence="You become a skilled swordsman, but neglect your studies.",
                effects=StatDelta(strength=5, intelligence=-2),
            ),
            Choice(
                text="Study strategy with the elders",
                consequence="You become a brilliant strategist, but your body falls behind.",
                effects=StatDelta(intelligence=5, strength=-2),
            ),
            Choice(
                text="Balance training and study",
                consequence="You become a well-rounded warrior who excels at nothing in particular.",
                effects=StatDelta(strength=2, intelligence=2),
            ),
        ),
    ),
    AgeEvent(
        age=20,
        title="First Battle",
        description=(
            "Your clan is at war with a rival clan. This is your first true battle."
        ),
        choices=(
            Choice(
                text="Fight on the front line",
                consequence="Your courage is noticed, but you are gravely wounded.",
                effects=StatDelta(honor=10, health=-20),
            ),
            Choice(
                text="Serve as a support archer",
                consequence="You help secure the victory without exposing yourself.",
                effects=StatDelta(honor=5, health=-5),
            ),
            Choice(
                text="Protect the commander",
                consequence="Your loyalty is rewarded with a promotion.",
                effects=StatDelta(honor=15, gold=20),
            ),
        ),
    ),
    AgeEvent(
        age=25,
        title="Arranged Marriage",
        description=(
            "Your clan proposes a strategic marriage with another clan to "
            "strengthen their alliance."
        ),
        choices=(
            Choice(
                text="Accept the marriage",
                consequence="The alliance strengthens your clan, at the cost of your own heart.",
                effects=StatDelta(honor=10, charisma=3),
            ),
            Choice(
                text="Decline politely",
                consequence="You keep your freedom, but displease some of the elders.",
                effects=StatDelta(honor=-5, charisma=5),
            ),
            Choice(
                text="Negotiate better terms",
                consequence="You show political wisdom and secure advantages.",
                effects=StatDelta(intelligence=5, gold=30),
            ),
        ),
    ),
    AgeEvent(
        age=35,
        title="Position of Leadership",
        description=(
            "Your experience and reputation earn you a leading position in the clan."
        ),
        choices=(
            Choice(
                text="Accept command",
                consequence="You become a respected leader, but the burden is heavy.",
                effects=StatDelta(honor=20, health=-10),
            ),
            Choice(
                text="Become an advisor",
                consequence="You shape decisions without the weight of direct command.",
                effects=StatDelta(intelligence=10, honor=10),
            ),
            Choice(
                text="Refuse to keep your freedom",
                consequence="You prefer the freedom of the battlefield to politics.",
                effects=StatDelta(strength=5, charisma=-5),
            ),
        ),
    ),
    AgeEvent(
        age=50,
        title="Heir",
        description="Your children have grown and are ready to follow in your footsteps.",
        choices=(
            Choice(
                text="Train your eldest",
                consequence="Your eldest becomes a warrior worthy of your legacy.",
                effects=StatDelta(honor=15, charisma=5),
            ),
            Choice(
                text="Let your children choose their own paths",
                consequence="Your children find their own destinies.",
                effects=StatDelta(intelligence=5, honor=5),
            ),
            Choice(
                text="Retire and meditate",
                consequence="You find inner peace in old age.",
                effects=StatDelta(health=20, intelligence=10),
            ),
        ),
    ),
)

_EVENTS_BY_AGE: dict[int, list[AgeEvent]] = defaultdict(list)
for _event in AGE_EVENTS:
    _EVENTS_BY_AGE[_event.age].append(_event)


# ---------------------------------------------------------------------------
#  Public API
# ---------------------------------------------------------------------------

def lookup(age: int) -> list[AgeEvent]:
    """Return the events that trigger at exactly ``age`` (possibly none)."""
    return list(_EVENTS_BY_AGE.get(age, ()))


def trigger_ages() -> list[int]:
    """Sorted list of ages that carry at least one event."""
    return sorted(_EVENTS_BY_AGE)
