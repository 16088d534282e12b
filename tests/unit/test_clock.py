"""Tests for the injectable clock."""

from datetime import date, timezone

from juris_kernel.domain.clock import DeterministicClock, SystemClock


class TestDeterministicClock:

    def test_default_date(self):
        assert DeterministicClock().today() == date(2024, 1, 1)

    def test_fixed_date_repeats(self):
        clock = DeterministicClock(date(2023, 1, 1))

        assert clock.now() == clock.now()
        assert clock.today() == date(2023, 1, 1)

    def test_advance_days(self):
        clock = DeterministicClock(date(2024, 2, 28))
        clock.advance_days()

        assert clock.today() == date(2024, 2, 29)

        clock.advance_days(2)
        assert clock.today() == date(2024, 3, 2)

    def test_set_date_resets_advance(self):
        clock = DeterministicClock(date(2024, 1, 1))
        clock.advance_days(10)
        clock.set_date(date(2030, 6, 1))

        assert clock.today() == date(2030, 6, 1)


class TestSystemClock:

    def test_timezone_aware(self):
        assert SystemClock().now().tzinfo is timezone.utc
