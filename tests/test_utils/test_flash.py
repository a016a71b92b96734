"""Tests for one-shot flash messages."""

from types import SimpleNamespace

from afterburner.utils.flash import ERROR, FLASH_SESSION_KEY, MESSAGE, flash, pop_flash


def make_request() -> SimpleNamespace:
    """Stand-in for a request: flash only touches ``request.session``."""
    return SimpleNamespace(session={})


def test_message_is_read_once() -> None:
    request = make_request()
    flash(request, MESSAGE, "Medal created.")

    assert pop_flash(request, MESSAGE) == "Medal created."
    assert pop_flash(request, MESSAGE) is None


def test_categories_are_independent() -> None:
    request = make_request()
    flash(request, MESSAGE, "Saved.")
    flash(request, ERROR, "Something went wrong.")

    assert pop_flash(request, ERROR) == "Something went wrong."
    assert pop_flash(request, MESSAGE) == "Saved."
    assert FLASH_SESSION_KEY not in request.session


def test_later_message_replaces_earlier() -> None:
    request = make_request()
    flash(request, ERROR, "first")
    flash(request, ERROR, "second")

    assert pop_flash(request, ERROR) == "second"


def test_nothing_pending() -> None:
    assert pop_flash(make_request(), MESSAGE) is None
