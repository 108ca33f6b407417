"""
Arithmetic human-verification challenges kept in the visitor's session.
"""
import random
from dataclasses import dataclass
from typing import Any, MutableMapping, Optional

REQUIREMENT_CAPTCHA_KEY = "requirement_captcha"
LOGIN_CAPTCHA_KEY = "admin_login_captcha"


@dataclass(frozen=True)
class CaptchaChallenge:
    num1: int
    num2: int

    @property
    def answer(self) -> int:
        return self.num1 + self.num2

    @property
    def prompt(self) -> str:
        return f"What is {self.num1} + {self.num2}?"

    def to_dict(self) -> dict:
        return {"num1": self.num1, "num2": self.num2, "prompt": self.prompt}


def generate_challenge(rng: Optional[random.Random] = None) -> CaptchaChallenge:
    """Pick two integers between 1 and 10."""
    rng = rng or random
    return CaptchaChallenge(num1=rng.randint(1, 10), num2=rng.randint(1, 10))


def is_correct(challenge: Optional[CaptchaChallenge], answer: Any) -> bool:
    if challenge is None or answer is None or isinstance(answer, bool):
        return False
    try:
        return int(str(answer).strip()) == challenge.answer
    except ValueError:
        return False


class ChallengeStore:
    """Holds at most one outstanding challenge under ``key`` in a session mapping."""

    def __init__(self, session: MutableMapping, key: str = REQUIREMENT_CAPTCHA_KEY):
        self.session = session
        self.key = key

    def issue(self, rng: Optional[random.Random] = None) -> CaptchaChallenge:
        challenge = generate_challenge(rng)
        self.session[self.key] = {"num1": challenge.num1, "num2": challenge.num2}
        return challenge

    def current(self) -> Optional[CaptchaChallenge]:
        stored = self.session.get(self.key)
        if not stored:
            return None
        return CaptchaChallenge(num1=stored["num1"], num2=stored["num2"])

    def current_or_issue(self) -> CaptchaChallenge:
        return self.current() or self.issue()

    def clear(self) -> None:
        self.session.pop(self.key, None)
