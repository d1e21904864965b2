from datetime import datetime, timedelta, timezone


class ManualClock:
    """Clock that only moves when a test tells it to."""

    def __init__(self, start=None):
        self.current = start or datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc)

    def now(self):
        return self.current

    def advance(self, days=0, hours=0, minutes=0):
        self.current = self.current + timedelta(days=days, hours=hours, minutes=minutes)
        return self.current
