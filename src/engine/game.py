"""
Fair Dice - Game State Machine

One round of the non-transitive dice game between the host and an
external party.

Flow:
- DETERMINE_FIRST_MOVE: host commits to a bit, external party guesses it.
  A correct guess makes the external party the mover.
- CLAIM_DICE: the mover claims a dice from the pool first, then the other
  party. Host claims are automatic and uniform over what remains.
- THROW_HOST / THROW_EXTERNAL: host commits to a number modulo the face
  count, external party adds theirs, the sum picks the face.
- RESOLVED: higher face wins, equal faces tie.

`x` exits and `?` shows the probability table from any awaiting state.

All methods are stateless class methods operating on immutable data.
State is passed in and returned together with the events it produced.
"""

import logging
import secrets
from dataclasses import dataclass, replace
from typing import ClassVar, Protocol, Sequence

from src.engine.base import Dice, Outcome, Party, Phase, Throw
from src.engine.commitment import DEFAULT_KEY_BYTES, Commitment, combine, generate_commitment
from src.engine.errors import ConfigurationError, ProtocolError, ValidationError
from src.engine.events import EventPayload, GameEvent
from src.engine.probability import probability_table
from src.engine.validators import is_exit_token, is_help_token, parse_selection

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Host-side randomness: commitments and automatic dice claims."""

    def commit(self, value_range: int) -> Commitment: ...

    def pick(self, count: int) -> int: ...


class SecureRandomSource:
    """RandomSource backed by the `secrets` CSPRNG."""

    def __init__(self, key_bytes: int = DEFAULT_KEY_BYTES) -> None:
        self._key_bytes = key_bytes

    def commit(self, value_range: int) -> Commitment:
        return generate_commitment(value_range, key_bytes=self._key_bytes)

    def pick(self, count: int) -> int:
        return secrets.randbelow(count)


@dataclass(frozen=True)
class GameState:
    """
    Complete state of one game.

    Attributes:
        phase: Current state machine phase
        options: All dice options in display order
        pool: Dice not yet claimed, in option order
        commitment: Commitment whose digest is published and awaiting input
        mover: Party that claims a dice first
        claimant: Party expected to claim next (CLAIM_DICE only)
        host_dice: Dice claimed by the host
        external_dice: Dice claimed by the external party
        host_throw: Resolved host throw
        external_throw: Resolved external throw
        outcome: Final result once RESOLVED
    """
    phase: Phase
    options: tuple[Dice, ...]
    pool: tuple[Dice, ...]
    commitment: Commitment | None = None
    mover: Party | None = None
    claimant: Party | None = None
    host_dice: Dice | None = None
    external_dice: Dice | None = None
    host_throw: Throw | None = None
    external_throw: Throw | None = None
    outcome: Outcome | None = None

    @property
    def is_finished(self) -> bool:
        return self.phase.is_terminal

    def claimed_dice(self, party: Party) -> Dice | None:
        return self.host_dice if party is Party.HOST else self.external_dice

    def throw_of(self, party: Party) -> Throw | None:
        return self.host_throw if party is Party.HOST else self.external_throw


Transition = tuple[GameState, list[EventPayload]]


class GameEngine:
    """
    Stateless engine for the fair dice game.

    All methods are class methods operating on immutable data.
    State is passed in and returned, never stored.
    """

    FIRST_MOVE_RANGE: ClassVar[int] = 2

    @classmethod
    def start(cls, dice: Sequence[Dice], source: RandomSource | None = None) -> Transition:
        """
        Begin a game and publish the first-move commitment.

        Args:
            dice: Dice options; each must be a distinct object
            source: Host randomness (defaults to SecureRandomSource)

        Returns:
            Tuple of (state awaiting the first-move guess, events)

        Raises:
            ConfigurationError: If fewer than two distinct dice are given
        """
        options = tuple(dice)
        if len(options) < 2:
            raise ConfigurationError(f"At least 2 dice are needed to play, got {len(options)}.")
        if len({id(d) for d in options}) != len(options):
            raise ConfigurationError("Each dice option must be a separate Dice instance.")

        source = source or SecureRandomSource()
        commitment = source.commit(cls.FIRST_MOVE_RANGE)
        state = GameState(
            phase=Phase.DETERMINE_FIRST_MOVE,
            options=options,
            pool=options,
            commitment=commitment,
        )
        logger.info("Game started with %d dice options", len(options))
        return state, [cls._published(commitment, purpose="first_move")]

    @classmethod
    def choices(cls, state: GameState) -> tuple[str, ...]:
        """Numbered selections accepted in the current phase."""
        if state.phase is Phase.DETERMINE_FIRST_MOVE:
            return tuple(str(i) for i in range(cls.FIRST_MOVE_RANGE))
        if state.phase is Phase.CLAIM_DICE:
            return tuple(d.label for d in state.pool)
        if state.phase in (Phase.THROW_HOST, Phase.THROW_EXTERNAL):
            return tuple(str(i) for i in range(state.commitment.value_range))
        return ()

    @classmethod
    def advance(
        cls,
        state: GameState,
        token: str,
        source: RandomSource | None = None,
    ) -> Transition:
        """
        Apply one line of external input.

        Exit and help are accepted in every awaiting phase. Invalid input
        leaves the state untouched and emits INPUT_REJECTED.

        Args:
            state: Current game state
            token: Raw input line
            source: Host randomness (defaults to SecureRandomSource)

        Returns:
            Tuple of (new_state, events)

        Raises:
            ProtocolError: If the game has already finished
        """
        if state.is_finished:
            raise ProtocolError(f"Game is already over ({state.phase.name}).")

        if is_exit_token(token):
            logger.info("Session exited during %s", state.phase.name)
            exited = replace(state, phase=Phase.EXITED, commitment=None, claimant=None)
            return exited, [EventPayload(event=GameEvent.SESSION_EXITED)]

        if is_help_token(token):
            help_event = EventPayload(
                event=GameEvent.HELP_SHOWN,
                data={"options": state.options, "table": probability_table(state.options)},
            )
            return state, [help_event]

        try:
            selection = parse_selection(token, len(cls.choices(state)))
        except ValidationError as exc:
            return state, [EventPayload(event=GameEvent.INPUT_REJECTED, data={"reason": str(exc)})]

        source = source or SecureRandomSource()
        if state.phase is Phase.DETERMINE_FIRST_MOVE:
            return cls._decide_first_move(state, selection, source)
        if state.phase is Phase.CLAIM_DICE:
            return cls._claim_for_external(state, selection, source)
        return cls._throw(state, selection, source)

    # --- phase handlers ---

    @classmethod
    def _decide_first_move(cls, state: GameState, guess: int, source: RandomSource) -> Transition:
        commitment = state.commitment
        events = [cls._revealed(commitment)]

        mover = Party.EXTERNAL if guess == commitment.secret else Party.HOST
        events.append(EventPayload(
            event=GameEvent.FIRST_MOVE_DECIDED,
            party=mover,
            data={"guess": guess, "secret": commitment.secret},
        ))
        logger.debug("First move goes to %s", mover.value)

        state = replace(
            state,
            phase=Phase.CLAIM_DICE,
            commitment=None,
            mover=mover,
            claimant=mover,
        )
        if mover is Party.HOST:
            state = cls._claim_for_host(state, source, events)
        return state, events

    @classmethod
    def _claim_for_external(cls, state: GameState, index: int, source: RandomSource) -> Transition:
        events: list[EventPayload] = []
        state = cls._transfer(state, Party.EXTERNAL, state.pool[index], events)
        if state.host_dice is None:
            state = cls._claim_for_host(state, source, events)
        state = cls._enter_throw(state, Party.HOST, source, events)
        return state, events

    @classmethod
    def _throw(cls, state: GameState, external_input: int, source: RandomSource) -> Transition:
        party = Party.HOST if state.phase is Phase.THROW_HOST else Party.EXTERNAL
        dice = state.claimed_dice(party)
        commitment = state.commitment
        events = [cls._revealed(commitment)]

        index = combine(commitment.secret, external_input, dice.face_count)
        throw = Throw(
            party=party,
            dice=dice,
            secret=commitment.secret,
            external_input=external_input,
            index=index,
            value=dice.faces[index],
        )
        events.append(EventPayload(
            event=GameEvent.THROW_RESOLVED,
            party=party,
            data={"throw": throw},
        ))
        logger.debug("%s throw: index %d -> %d", party.value, index, throw.value)

        if party is Party.HOST:
            state = replace(state, host_throw=throw, commitment=None)
            state = cls._enter_throw(state, Party.EXTERNAL, source, events)
            return state, events

        state = replace(state, external_throw=throw, commitment=None)
        return cls._resolve(state, events)

    # --- helpers ---

    @classmethod
    def _transfer(
        cls,
        state: GameState,
        party: Party,
        dice: Dice,
        events: list[EventPayload],
    ) -> GameState:
        """Move one dice from the pool into a party's slot."""
        if state.claimed_dice(party) is not None:
            raise ProtocolError(f"The {party.value} party has already claimed a dice.")
        if not any(d is dice for d in state.pool):
            raise ProtocolError(f"Dice [{dice.label}] is not in the pool.")

        pool = tuple(d for d in state.pool if d is not dice)
        slot = {"host_dice": dice} if party is Party.HOST else {"external_dice": dice}
        other_done = state.claimed_dice(party.other) is not None
        events.append(EventPayload(
            event=GameEvent.DICE_CLAIMED,
            party=party,
            data={"dice": dice, "remaining": len(pool)},
        ))
        logger.debug("%s claimed [%s], %d left in pool", party.value, dice.label, len(pool))
        return replace(state, pool=pool, claimant=None if other_done else party.other, **slot)

    @classmethod
    def _claim_for_host(
        cls,
        state: GameState,
        source: RandomSource,
        events: list[EventPayload],
    ) -> GameState:
        index = source.pick(len(state.pool))
        return cls._transfer(state, Party.HOST, state.pool[index], events)

    @classmethod
    def _enter_throw(
        cls,
        state: GameState,
        party: Party,
        source: RandomSource,
        events: list[EventPayload],
    ) -> GameState:
        dice = state.claimed_dice(party)
        commitment = source.commit(dice.face_count)
        events.append(cls._published(commitment, purpose="throw", party=party))
        phase = Phase.THROW_HOST if party is Party.HOST else Phase.THROW_EXTERNAL
        return replace(state, phase=phase, commitment=commitment, claimant=None)

    @classmethod
    def _resolve(cls, state: GameState, events: list[EventPayload]) -> Transition:
        host_value = state.host_throw.value
        external_value = state.external_throw.value
        if external_value > host_value:
            outcome = Outcome.EXTERNAL_WINS
        elif host_value > external_value:
            outcome = Outcome.HOST_WINS
        else:
            outcome = Outcome.TIE

        events.append(EventPayload(
            event=GameEvent.GAME_RESOLVED,
            data={
                "outcome": outcome,
                "host_value": host_value,
                "external_value": external_value,
            },
        ))
        logger.info("Game resolved: %s (%d vs %d)", outcome.value, external_value, host_value)
        return replace(state, phase=Phase.RESOLVED, outcome=outcome), events

    @staticmethod
    def _published(
        commitment: Commitment,
        purpose: str,
        party: Party | None = None,
    ) -> EventPayload:
        return EventPayload(
            event=GameEvent.COMMITMENT_PUBLISHED,
            party=party,
            data={
                "purpose": purpose,
                "value_range": commitment.value_range,
                "digest": commitment.digest,
            },
        )

    @staticmethod
    def _revealed(commitment: Commitment) -> EventPayload:
        return EventPayload(
            event=GameEvent.COMMITMENT_REVEALED,
            data={
                "secret": commitment.secret,
                "key": commitment.key_hex,
                "digest": commitment.digest,
                "value_range": commitment.value_range,
            },
        )

