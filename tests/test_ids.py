"""Unit tests for identifier generation."""

import re

from quotebook.store import IdGenerator


def test_ids_have_time_and_random_parts() -> None:
    """Ids look like id_<millis>_<9 base36 chars>."""
    new_id = IdGenerator(clock=lambda: 1718000000.123).new_id()
    assert re.fullmatch(r"id_1718000000123_[0-9a-z]{9}", new_id)


def test_ids_are_unique_within_a_session() -> None:
    """Many ids minted in a row never repeat."""
    generator = IdGenerator()
    minted = {generator.new_id() for _ in range(5000)}
    assert len(minted) == 5000


def test_time_component_never_goes_backwards() -> None:
    """A clock stepping back does not move the millisecond part back."""
    readings = iter([100.0, 50.0, 101.0])
    generator = IdGenerator(clock=lambda: next(readings))

    millis = [int(generator.new_id().split("_")[1]) for _ in range(3)]
    assert millis == [100000, 100000, 101000]
