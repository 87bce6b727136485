import os
import random

import pytest

os.environ.setdefault("RATE_LIMIT", "10000/minute")

from flashy.schemas import ReviewSettings
from flashy.services.deck import parse_deck
from flashy.services.scheduler import ManualScheduler
from flashy.services.session import SessionController


MIXED = """What is 10+20?
=30
20
10
---
Humans have {{206}} bones in their body
---
This plugin is
===Awesome"""


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def make_session(scheduler):
    def _make(source=MIXED, renders=None, **overrides):
        opts = {"shuffle_answers": False}
        opts.update(overrides)
        return SessionController(
            parse_deck(source),
            ReviewSettings(**opts),
            scheduler=scheduler,
            rng=random.Random(7),
            on_render=renders.append if renders is not None else None,
        )
    return _make
