import contextlib
import datetime as dt

from prompt_toolkit import PromptSession
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from budget_tracker.models import SUGGESTED_CATEGORIES
from budget_tracker.term_ui import (
    category_choices,
    prompt_amount,
    prompt_category,
    prompt_date,
    prompt_description,
)


@contextlib.contextmanager
def pipe_session():
    with create_pipe_input() as pipe:
        sess = PromptSession(input=pipe, output=DummyOutput())
        yield pipe, sess


def test_prompt_date_empty_means_today():
    today = dt.date(2024, 2, 2)
    with pipe_session() as (pipe, sess):
        pipe.send_text("\r")
        assert prompt_date(session=sess, today=today) == today


def test_prompt_date_accepts_slash_format():
    with pipe_session() as (pipe, sess):
        pipe.send_text("2024/01/05\r")
        assert prompt_date(session=sess) == dt.date(2024, 1, 5)


def test_prompt_date_reprompts_until_valid():
    # Invalid text is rejected in place; clear it (Ctrl-A, Ctrl-K) and retype.
    with pipe_session() as (pipe, sess):
        pipe.send_text("05-01-2024\r\x01\x0b2024-01-05\r")
        assert prompt_date(session=sess) == dt.date(2024, 1, 5)


def test_prompt_description_strips_whitespace():
    with pipe_session() as (pipe, sess):
        pipe.send_text("  Lunch with Sam \r")
        assert prompt_description(session=sess) == "Lunch with Sam"


def test_prompt_category_returns_known_spelling():
    with pipe_session() as (pipe, sess):
        pipe.send_text("food\r")
        assert prompt_category(SUGGESTED_CATEGORIES, session=sess) == "Food"


def test_prompt_category_capitalizes_new_category():
    with pipe_session() as (pipe, sess):
        pipe.send_text("groceries\r")
        assert prompt_category(SUGGESTED_CATEGORIES, session=sess) == "Groceries"


def test_prompt_amount_reprompts_until_valid():
    with pipe_session() as (pipe, sess):
        pipe.send_text("twelve\r\x01\x0b-12.50\r")
        assert prompt_amount(session=sess) == "-12.50"


def test_category_choices_merge_suggested_and_existing():
    choices = category_choices(["food", "Groceries", "", "groceries"])
    assert choices == [*SUGGESTED_CATEGORIES, "Groceries"]
