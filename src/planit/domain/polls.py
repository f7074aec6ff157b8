"""ABOUTME: Poll domain models: polls, their options and the votes cast on them
ABOUTME: A poll belongs to one event, stays open for a number of hours and takes one vote per user"""

from datetime import UTC, datetime, timedelta

MIN_OPTIONS = 2
MAX_OPTIONS = 5


class PollOption:
    def __init__(self, text: str, option_id: int | None = None, poll_id: int | None = None):
        self.id = option_id
        self.poll_id = poll_id
        self.text = text

    def create_detached_copy(self) -> "PollOption":
        return PollOption(text=self.text, option_id=self.id, poll_id=self.poll_id)


class PollVote:
    def __init__(
        self,
        user_id: int,
        option_id: int,
        poll_id: int | None = None,
        voted_at: datetime | None = None,
    ):
        self.user_id = user_id
        self.option_id = option_id
        self.poll_id = poll_id
        self.voted_at = voted_at or datetime.now(UTC)

    def create_detached_copy(self) -> "PollVote":
        return PollVote(user_id=self.user_id, option_id=self.option_id, poll_id=self.poll_id, voted_at=self.voted_at)


class Poll:
    """Poll domain model. Options are fixed when the poll is created."""

    def __init__(
        self,
        event_id: int,
        title: str,
        duration_hours: int,
        options: list[PollOption] | None = None,
        poll_id: int | None = None,
        created_at: datetime | None = None,
    ):
        if not title or not title.strip():
            raise ValueError("Poll title is required")
        if duration_hours <= 0:
            raise ValueError("Poll duration must be a positive number of hours")
        options = options or []
        if not MIN_OPTIONS <= len(options) <= MAX_OPTIONS:
            raise ValueError(f"A poll needs between {MIN_OPTIONS} and {MAX_OPTIONS} options")

        self.id = poll_id
        self.event_id = event_id
        self.title = title
        self.duration_hours = duration_hours
        self.created_at = created_at or datetime.now(UTC)
        self.options: list[PollOption] = options
        self.votes: list[PollVote] = []

    @property
    def ends_at(self) -> datetime:
        created_at = self.created_at
        # sqlite hands back naive datetimes
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=UTC)
        return created_at + timedelta(hours=self.duration_hours)

    def has_ended(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(UTC)) > self.ends_at

    def get_option(self, option_id: int) -> PollOption | None:
        for option in self.options:
            if option.id == option_id:
                return option
        return None

    def has_voted(self, user_id: int) -> bool:
        return any(vote.user_id == user_id for vote in self.votes)

    def vote(self, user_id: int, option_id: int) -> PollVote:
        if self.get_option(option_id) is None:
            raise ValueError(f"Option {option_id} does not belong to poll {self.id}")
        if self.has_voted(user_id):
            raise ValueError(f"User {user_id} has already voted on poll {self.id}")
        vote = PollVote(user_id=user_id, option_id=option_id, poll_id=self.id)
        self.votes.append(vote)
        return vote

    def vote_counts(self) -> dict[int, int]:
        counts = {option.id: 0 for option in self.options if option.id is not None}
        for vote in self.votes:
            counts[vote.option_id] = counts.get(vote.option_id, 0) + 1
        return counts

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Poll):  # pragma: no cover
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return id(self) if self.id is None else hash(("poll", self.id))

    def create_detached_copy(self) -> "Poll":
        detached_poll = Poll(
            event_id=self.event_id,
            title=self.title,
            duration_hours=self.duration_hours,
            options=[o.create_detached_copy() for o in self.options],
            poll_id=self.id,
            created_at=self.created_at,
        )
        detached_poll.votes = [v.create_detached_copy() for v in self.votes]
        return detached_poll
