from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Mapping, Sequence

from attrs import define, field

from negboa import warnings
from negboa.common import BOAParameter, ResponseType

if TYPE_CHECKING:
    from negboa.outcomes import Bid, BidDetails
    from negboa.session import BidHistory, NegotiationSession

__all__ = [
    "BOAComponent",
    "OpponentModel",
    "OfferingPolicy",
    "BidSelector",
    "AcceptancePolicy",
]


@define
class BOAComponent(ABC):
    """
    A component of a BOA agent bound to one negotiation session.

    Subclasses declare their tunables in `PARAMETERS` and reset their
    per-session state in `on_init`.
    """

    PARAMETERS: ClassVar[tuple[BOAParameter, ...]] = ()

    _session: NegotiationSession | None = field(default=None, kw_only=True)

    @property
    def session(self) -> NegotiationSession | None:
        return self._session

    @property
    def name(self) -> str:
        return self.__class__.__name__

    @classmethod
    def parameter_spec(cls) -> list[BOAParameter]:
        """The tunables of this component with their defaults and effects."""
        return list(cls.PARAMETERS)

    def init(
        self, session: NegotiationSession, parameters: Mapping[str, Any] | None = None
    ) -> None:
        """
        Binds the component to a session and applies the given parameters.

        Args:
            session: The negotiation session.
            parameters: Maps parameter names (see `parameter_spec`) to values.

        Remarks:
            - Unknown parameter names are ignored with a warning.
            - Values are cast to the type of the attribute they set. A value
              with a fractional part given to an integer attribute is ignored
              with a warning.
        """
        self._session = session
        if parameters:
            known = {_.name: _ for _ in self.parameter_spec()}
            for key, value in parameters.items():
                p = known.get(key)
                if p is None:
                    warnings.warn(
                        f"{self.name} has no parameter called {key}. Ignoring it",
                        warnings.NegboaUnknownParameterWarning,
                    )
                    continue
                current = getattr(self, p.attribute)
                if isinstance(current, bool):
                    value = bool(value)
                elif isinstance(current, int):
                    number = float(value)
                    if not number.is_integer():
                        warnings.warn(
                            f"{self.name}: {key} must be an integer (got {value}). Keeping {current}",
                            warnings.NegboaParameterWarning,
                        )
                        continue
                    value = int(number)
                elif isinstance(current, float):
                    value = float(value)
                setattr(self, p.attribute, value)
        self.on_init()

    def on_init(self) -> None:
        """Called at the end of `init` after parameters are applied."""

    def parameters(self) -> dict[str, Any]:
        """Current values of all tunables."""
        return {_.name: getattr(self, _.attribute) for _ in self.parameter_spec()}


@define
class OpponentModel(BOAComponent):
    """
    Estimates the preferences of the opponent from the bids it makes.

    Remarks:
        - The model reads the opponent history from the session. A bid passed
          to `update` that is not the last one recorded there (see
          `NegotiationSession.receive_bid`) is recorded first.
    """

    @abstractmethod
    def update(self, bid: Bid, time: float) -> None:
        """Learns from a new opponent bid."""

    def record(self, bid: Bid, time: float) -> BidHistory:
        """Makes sure `bid` is the last opponent bid of the session and returns the history."""
        assert self.session is not None
        history = self.session.opponent_bid_history
        last = history.last()
        if last is None or last.bid is not bid:
            self.session.receive_bid(bid, time)
        return history

    @abstractmethod
    def eval(self, bid: Bid | None) -> float:
        """Estimated opponent utility of a bid in [0, 1]. Never changes the model."""

    def __call__(self, bid: Bid | None) -> float:
        return self.eval(bid)

    def is_cooperative(self) -> bool:
        """
        Whether the opponent is believed to be cooperative.

        Models that do not track cooperation treat the opponent as offensive.
        """
        return False


@define
class BidSelector(BOAComponent):
    """
    Picks the bid to offer among candidates of similar utility for us
    (an opponent-model strategy).

    Args:
        model: The opponent model used to score candidates.
        initial_window: Width of the first utility window searched above the target.
        window_increment: Amount by which the window is widened when too few bids are found.
        expected_bids: Number of candidates below which the window is widened once.
        upper_limit: The window is never widened above this utility.
    """

    model: OpponentModel | None = None
    initial_window: float = 0.01
    window_increment: float = 0.01
    expected_bids: int = 100
    upper_limit: float = 1.01

    @abstractmethod
    def select(self, candidates: Sequence[BidDetails]) -> BidDetails:
        """Selects one of a non-empty list of candidates."""

    @abstractmethod
    def may_update(self, time: float) -> bool:
        """Whether the opponent model should still learn at this time."""

    def candidates(self, target: float) -> list[BidDetails]:
        """
        Bids near the target utility (never below it).

        The search starts at [target, target + initial_window]. If fewer than
        `expected_bids` bids are found, the upper bound is raised by
        `window_increment` and then raised again while no bids are found. If
        the upper bound reaches `upper_limit` with no bids, the best bid of
        the domain is returned.
        """
        assert self.session is not None, "The selector is not bound to a session"
        space = self.session.outcome_space
        lower, upper = target, target + self.initial_window
        bids = space.bids_in_range(lower, upper)
        if len(bids) < self.expected_bids and upper < self.upper_limit:
            upper += self.window_increment
            bids = space.bids_in_range(lower, upper)
            while not bids and upper < self.upper_limit:
                upper += self.window_increment
                bids = space.bids_in_range(lower, upper)
        if not bids:
            return [space.max_bid()]
        return bids

    def __call__(self, target: float) -> BidDetails:
        return self.select(self.candidates(target))


@define
class OfferingPolicy(BOAComponent):
    """
    Decides the bid to offer next.

    Args:
        model: The opponent model (None for no opponent modeling).
        selector: Selects among bids near the target utility when a model is used.
    """

    model: OpponentModel | None = None
    selector: BidSelector | None = None
    _current: BidDetails | None = field(init=False, default=None)

    @abstractmethod
    def target_utility(self, time: float) -> float:
        """The utility we aim at for the next offer."""

    @abstractmethod
    def next_bid(self, time: float) -> BidDetails:
        """Determines the next bid to offer and remembers it as `current_bid`."""

    def opening_bid(self) -> BidDetails:
        return self.next_bid(0.0)

    @property
    def current_bid(self) -> BidDetails | None:
        """The last bid determined by `next_bid` (None before the first one)."""
        return self._current

    def on_init(self) -> None:
        self._current = None


@define
class AcceptancePolicy(BOAComponent):
    """
    Decides whether to accept the last offer of the opponent.

    Args:
        offering_policy: The offering policy providing the bid we would send next.
    """

    offering_policy: OfferingPolicy | None = None

    @abstractmethod
    def decide(
        self,
        next_own_bid: BidDetails | None,
        last_opponent_bid: BidDetails | None,
        best_opponent_bid: BidDetails | None,
        time: float,
    ) -> ResponseType:
        """
        Accept or reject the last opponent bid. Must not have side effects.
        """

    def respond(self) -> ResponseType:
        """Decides using the session histories and the current bid of the offering policy."""
        session = self.session
        assert session is not None, "The acceptance policy is not bound to a session"
        next_own = None
        if self.offering_policy is not None:
            next_own = self.offering_policy.current_bid
            if next_own is None:
                next_own = self.offering_policy.next_bid(session.time)
        return self.decide(
            next_own,
            session.opponent_bid_history.last(),
            session.opponent_bid_history.best(),
            session.time,
        )

    def __call__(self) -> ResponseType:
        return self.respond()
