"""Riddle retrieval with built-in fallbacks and multiple-choice assembly."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import requests

from .config import config_section
from .rng import RandomSource

CHOICE_COUNT = 4
CHOICE_LABELS = ("A", "B", "C", "D")


@dataclass(frozen=True)
class Riddle:
    question: str
    answer: str
    choices: tuple[str, ...] | None = None


@dataclass(frozen=True)
class Puzzle:
    riddle: Riddle
    choices: tuple[str, ...]
    correct_index: int
    point_id: int

    @property
    def question(self) -> str:
        return self.riddle.question

    @property
    def answer(self) -> str:
        return self.riddle.answer


FALLBACK_RIDDLES: tuple[Riddle, ...] = (
    Riddle(
        "I speak without a mouth and hear without ears. I have no body, "
        "but I come alive with wind. What am I?",
        "echo",
        ("echo", "wind", "sound", "voice"),
    ),
    Riddle(
        "The more you take, the more you leave behind. What am I?",
        "footsteps",
        ("footsteps", "memories", "tracks", "time"),
    ),
    Riddle(
        "I have cities, but no houses. I have mountains, but no trees. "
        "I have water, but no fish. What am I?",
        "map",
        ("map", "painting", "book", "dream"),
    ),
    Riddle(
        "What has keys but no locks, space but no room, you can enter "
        "but not go inside?",
        "keyboard",
        ("keyboard", "piano", "computer", "typewriter"),
    ),
    Riddle(
        "I am not alive, but I grow; I don't have lungs, but I need air; "
        "I don't have a mouth, but water kills me. What am I?",
        "fire",
        ("fire", "plant", "balloon", "crystal"),
    ),
    Riddle(
        "What gets wetter the more it dries?",
        "towel",
        ("towel", "sponge", "cloth", "mop"),
    ),
    Riddle(
        "I have a heart that doesn't beat, a mouth that doesn't speak. What am I?",
        "artichoke",
        ("artichoke", "statue", "doll", "robot"),
    ),
    Riddle(
        "What can travel around the world while staying in a corner?",
        "stamp",
        ("stamp", "letter", "coin", "map"),
    ),
)

# Used when the request itself fails
OFFLINE_RIDDLE = Riddle(
    "I have keys but no locks, space but no room, you can enter but not go "
    "inside. What am I?",
    "keyboard",
    ("keyboard", "piano", "computer", "typewriter"),
)

DECOY_ANSWERS: tuple[str, ...] = (
    "water", "air", "fire", "earth", "time", "light", "shadow", "mirror",
    "book", "key", "door", "window", "clock", "coin", "ring", "box",
)


class RiddleSource:
    """Fetch riddles from the web API, falling back to the built-in set."""

    def __init__(
        self,
        rng: RandomSource,
        *,
        api_url: str,
        api_key: str | None = None,
        timeout_s: float = 5.0,
        session: requests.Session | None = None,
    ) -> None:
        self.rng = rng
        self.api_url = api_url
        self.api_key = api_key
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: dict[str, Any], rng: RandomSource) -> RiddleSource:
        riddle_conf = config_section(config, "riddles")
        try:
            timeout_s = float(riddle_conf.get("timeout_s", 5.0))
        except (TypeError, ValueError):
            timeout_s = 5.0
        return cls(
            rng,
            api_url=riddle_conf.get("api_url") or "",
            api_key=riddle_conf.get("api_key") or None,
            timeout_s=timeout_s,
        )

    def fallback(self) -> Riddle:
        return self.rng.choice(FALLBACK_RIDDLES)

    def fetch(self) -> Riddle:
        if not self.api_key or not self.api_url:
            return self.fallback()
        try:
            response = self.session.get(
                self.api_url,
                headers={"X-Api-Key": self.api_key},
                timeout=self.timeout_s,
            )
            if not response.ok:
                return self.fallback()
            return _parse_riddle(response.json())
        except (requests.RequestException, ValueError) as exc:
            print(f"Failed to fetch riddle: {exc}")
            return OFFLINE_RIDDLE


def _parse_riddle(payload: Any) -> Riddle:
    if isinstance(payload, list):
        payload = payload[0] if payload else None
    if not isinstance(payload, dict):
        raise ValueError("Riddle payload is not an object")
    question = payload.get("question")
    answer = payload.get("answer")
    if not isinstance(question, str) or not isinstance(answer, str) or not answer:
        raise ValueError("Riddle payload lacks question/answer")
    choices = payload.get("choices")
    if isinstance(choices, list) and len(choices) == CHOICE_COUNT and answer in choices:
        return Riddle(question, answer, tuple(str(c) for c in choices))
    return Riddle(question, answer)


def generate_choices(answer: str, rng: RandomSource) -> list[str]:
    """Return the answer followed by distinct decoys."""
    choices = [answer]
    used = {answer.lower()}
    while len(choices) < CHOICE_COUNT:
        decoy = rng.choice(DECOY_ANSWERS)
        if decoy.lower() not in used:
            choices.append(decoy)
            used.add(decoy.lower())
    return choices


def build_puzzle(riddle: Riddle, point_id: int, rng: RandomSource) -> Puzzle:
    choices = list(riddle.choices) if riddle.choices else generate_choices(riddle.answer, rng)
    rng.shuffle(choices)
    return Puzzle(
        riddle=riddle,
        choices=tuple(choices),
        correct_index=choices.index(riddle.answer),
        point_id=point_id,
    )


__all__ = [
    "CHOICE_LABELS",
    "FALLBACK_RIDDLES",
    "OFFLINE_RIDDLE",
    "Puzzle",
    "Riddle",
    "RiddleSource",
    "build_puzzle",
    "generate_choices",
]
