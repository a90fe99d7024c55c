"""
Fair Dice - Text Rendering

Turns engine states and events into the lines shown at the prompt.
Nothing here takes part in the protocol.
"""

from typing import Sequence

from tabulate import tabulate

from src.engine.base import Dice, Outcome, Party, Phase
from src.engine.events import EventPayload, GameEvent
from src.engine.game import GameEngine, GameState
from src.engine.probability import ProbabilityTable, format_probability

INPUT_PROMPT = "Your selection: "

WELCOME = (
    "Welcome to the Dice Game!\n"
    "You and I will each select a dice, and we will compete."
)

_HELP_RULES = """\
Help:
- Guess my random bit correctly to make the first move.
- Each player selects a dice; the other player picks from what is left.
- Every throw is fair: I commit to a number (HMAC) before you add yours,
  and reveal my number and KEY afterwards so you can check the HMAC.
- The higher thrown value wins the round.

Probability of the win for the user:"""

_PHASE_TITLES = {
    Phase.DETERMINE_FIRST_MOVE: "Try to guess my selection.",
    Phase.CLAIM_DICE: "Choose your dice:",
}


def render_prompt(state: GameState) -> str:
    """Enumerated menu for the phase awaiting input."""
    choices = GameEngine.choices(state)
    if state.phase in (Phase.THROW_HOST, Phase.THROW_EXTERNAL):
        title = f"Add your number modulo {len(choices)}."
    else:
        title = _PHASE_TITLES[state.phase]

    lines = [title]
    lines.extend(f"{i} - {choice}" for i, choice in enumerate(choices))
    lines.append("X - exit")
    lines.append("? - help")
    return "\n".join(lines)


def render_help(
    options: Sequence[Dice],
    table: ProbabilityTable,
    precision: int = 4,
    table_format: str = "grid",
) -> str:
    """Rules text followed by the win-probability grid."""
    headers = ["User dice v"] + [d.label for d in options]
    rows = []
    for i, row in enumerate(table):
        cells = [options[i].label]
        for j, probability in enumerate(row):
            text = format_probability(probability, precision)
            cells.append(f"- ({text})" if i == j else text)
        rows.append(cells)
    grid = tabulate(rows, headers=headers, tablefmt=table_format, disable_numparse=True)
    return f"{_HELP_RULES}\n{grid}"


def _render_published(payload: EventPayload) -> str:
    upper = payload.data["value_range"] - 1
    line = f"I selected a random value in the range 0..{upper} (HMAC={payload.data['digest']})."
    if payload.data["purpose"] == "first_move":
        return f"Let's determine who makes the first move.\n{line}"
    if payload.party is Party.HOST:
        return f"It's time for my throw.\n{line}"
    return f"It's time for your throw.\n{line}"


def _render_throw(payload: EventPayload) -> str:
    throw = payload.data["throw"]
    formula = (
        f"Result: ({throw.secret} + {throw.external_input}) mod {throw.modulus} = {throw.index}."
    )
    whose = "My" if throw.party is Party.HOST else "Your"
    return f"{formula}\n{whose} throw is {throw.value}."


def _render_resolved(payload: EventPayload) -> str:
    outcome = payload.data["outcome"]
    host_value = payload.data["host_value"]
    external_value = payload.data["external_value"]
    if outcome is Outcome.EXTERNAL_WINS:
        return f"You win ({external_value} > {host_value})!"
    if outcome is Outcome.HOST_WINS:
        return f"I win ({host_value} > {external_value})!"
    return f"Tie ({host_value} = {external_value})!"


def render_event(payload: EventPayload, precision: int = 4, table_format: str = "grid") -> str:
    """Text for one engine event."""
    event = payload.event
    if event is GameEvent.COMMITMENT_PUBLISHED:
        return _render_published(payload)
    if event is GameEvent.COMMITMENT_REVEALED:
        return f"My selection: {payload.data['secret']} (KEY={payload.data['key']})."
    if event is GameEvent.FIRST_MOVE_DECIDED:
        if payload.party is Party.EXTERNAL:
            return "You guessed right, you make the first move."
        return "I make the first move."
    if event is GameEvent.DICE_CLAIMED:
        who = "I choose" if payload.party is Party.HOST else "You chose"
        return f"{who} the dice: [{payload.data['dice'].label}]."
    if event is GameEvent.THROW_RESOLVED:
        return _render_throw(payload)
    if event is GameEvent.GAME_RESOLVED:
        return _render_resolved(payload)
    if event is GameEvent.INPUT_REJECTED:
        return payload.data["reason"]
    if event is GameEvent.HELP_SHOWN:
        return render_help(
            payload.data["options"],
            payload.data["table"],
            precision=precision,
            table_format=table_format,
        )
    if event is GameEvent.SESSION_EXITED:
        return "Exiting..."
    raise ValueError(f"Unknown event {event!r}")
