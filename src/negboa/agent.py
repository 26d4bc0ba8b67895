"""
A negotiation agent composed of BOA components.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from negboa import warnings
from negboa.common import ResponseType
from negboa.components import (
    ACCombiFloor,
    RegimeSwitchingOffering,
    TimeBlendedFrequencyModel,
    WeightedBidSelector,
)

if TYPE_CHECKING:
    from negboa.common import BOAParameter
    from negboa.components import (
        AcceptancePolicy,
        BidSelector,
        BOAComponent,
        OfferingPolicy,
        OpponentModel,
    )
    from negboa.outcomes import Bid, BidDetails
    from negboa.session import NegotiationSession

__all__ = ["BOAAgent", "make_boa", "ROLES"]

ROLES = ("model", "selector", "offering", "acceptance")
"""Roles of the components of a `BOAAgent` (also the keys of its config)."""


class BOAAgent:
    """
    A negotiator constructed from four components:

    1. An `OpponentModel` to learn the preferences of the opponent.
    2. A `BidSelector` that picks among bids of similar utility using the model.
    3. An `OfferingPolicy` that decides the target utility and the next bid.
    4. An `AcceptancePolicy` used for responding to offers.

    The components are wired together on construction: the selector and the
    offering policy share the model and the acceptance policy reads the bid
    the offering policy is about to send.

    Args:
        offering: The offering policy.
        acceptance: The acceptance policy.
        model: The opponent model (None for no opponent modeling).
        selector: The bid selector (None to always offer the bid nearest the target).
        name: Agent name.
    """

    def __init__(
        self,
        offering: OfferingPolicy,
        acceptance: AcceptancePolicy,
        model: OpponentModel | None = None,
        selector: BidSelector | None = None,
        name: str | None = None,
    ):
        self.name = name if name else self.__class__.__name__
        self.model = model
        self.selector = selector
        self.offering = offering
        self.acceptance = acceptance
        if selector is not None:
            selector.model = model
        offering.model = model
        offering.selector = selector
        acceptance.offering_policy = offering
        self._session: NegotiationSession | None = None

    @property
    def session(self) -> NegotiationSession | None:
        return self._session

    @property
    def components(self) -> dict[str, BOAComponent]:
        """The components of the agent keyed by their role."""
        return {
            role: c
            for role, c in zip(
                ROLES, (self.model, self.selector, self.offering, self.acceptance)
            )
            if c is not None
        }

    def init(
        self,
        session: NegotiationSession,
        config: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> None:
        """
        Binds all components to the session.

        Args:
            session: The negotiation session.
            config: Maps a role (see `ROLES`) to the parameters of the
                    component playing it.
        """
        self._session = session
        config = config if config else dict()
        components = self.components
        for role in config.keys():
            if role not in components:
                warnings.warn(
                    f"{self.name} has no {role} component. Ignoring its parameters",
                    warnings.NegboaUnknownParameterWarning,
                )
        for role, component in components.items():
            component.init(session, config.get(role, None))
        session.loginfo(
            f"{self.name} initialized with "
            + ", ".join(f"{r}={c.name}{c.parameters()}" for r, c in components.items())
        )

    def _require_session(self) -> NegotiationSession:
        if self._session is None:
            raise ValueError(f"{self.name} was not initialized with a session")
        return self._session

    def update_model(self, bid: Bid, time: float) -> BidDetails:
        """
        Records an opponent bid and lets the opponent model learn from it.

        Remarks:
            - The model is not updated once the selector forbids it.
        """
        session = self._require_session()
        details = session.receive_bid(bid, time)
        if self.model is not None and (
            self.selector is None or self.selector.may_update(time)
        ):
            self.model.update(bid, time)
        session.logdebug(
            f"received {bid} ({details.my_utility:.3f}) at {details.time:.3f}"
        )
        return details

    def determine_opening_bid(self) -> BidDetails:
        self._require_session()
        return self.offering.opening_bid()

    def determine_next_bid(self) -> BidDetails:
        session = self._require_session()
        return self.offering.next_bid(session.time)

    def determine_acceptability(self) -> ResponseType:
        session = self._require_session()
        response = self.acceptance.respond()
        session.logdebug(f"{response.name} at {session.time:.3f}")
        return response

    def propose(self) -> BidDetails:
        """Determines the bid to send (the opening bid if nothing was sent yet) and records it."""
        session = self._require_session()
        if not session.own_bid_history:
            bid = self.determine_opening_bid()
        else:
            bid = self.determine_next_bid()
        return session.record_own_bid(bid)

    def respond(self, bid: Bid, time: float) -> tuple[ResponseType, BidDetails]:
        """
        Runs a full round for an incoming opponent bid.

        Returns:
            The response and the bid we would send next. The bid is recorded as
            sent only if the response is a rejection.
        """
        session = self._require_session()
        self.update_model(bid, time)
        next_bid = self.determine_next_bid()
        response = self.determine_acceptability()
        if response == ResponseType.REJECT_OFFER:
            next_bid = session.record_own_bid(next_bid)
        return response, next_bid

    def parameter_spec(self) -> dict[str, list[BOAParameter]]:
        """The tunables of every component keyed by role."""
        return {role: c.parameter_spec() for role, c in self.components.items()}


def make_boa(
    model: OpponentModel | None = None,
    selector: BidSelector | None = None,
    offering: OfferingPolicy | None = None,
    acceptance: AcceptancePolicy | None = None,
    name: str | None = None,
) -> BOAAgent:
    """
    Creates a `BOAAgent` filling every missing component with its default:

    - `TimeBlendedFrequencyModel`
    - `WeightedBidSelector`
    - `RegimeSwitchingOffering`
    - `ACCombiFloor`
    """
    return BOAAgent(
        offering=offering if offering is not None else RegimeSwitchingOffering(),
        acceptance=acceptance if acceptance is not None else ACCombiFloor(),
        model=model if model is not None else TimeBlendedFrequencyModel(),
        selector=selector if selector is not None else WeightedBidSelector(),
        name=name,
    )
