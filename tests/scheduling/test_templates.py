from datetime import date, datetime, timezone

import pytest

from timeflow.core.exceptions import ValidationError
from timeflow.scheduling.model import TemplateEntry
from timeflow.scheduling.templates import materialize

UTC = timezone.utc


def test_materialize_places_entries_on_target_week():
    entries = [
        TemplateEntry("e1", day_index=4, start_hour=8, end_hour=16),
        TemplateEntry("e2", day_index=6, start_hour=22, end_hour=6),
    ]
    placed = materialize(entries, week_start=date(2025, 1, 6), tz=UTC)

    assert placed[0][1:] == (datetime(2025, 1, 10, 8, tzinfo=UTC), datetime(2025, 1, 10, 16, tzinfo=UTC))
    assert placed[1][1:] == (datetime(2025, 1, 12, 22, tzinfo=UTC), datetime(2025, 1, 13, 6, tzinfo=UTC))


def test_materialize_rejects_bad_entries():
    with pytest.raises(ValidationError):
        materialize([TemplateEntry("e1", day_index=7, start_hour=8, end_hour=16)], week_start=date(2025, 1, 6))
    with pytest.raises(ValidationError):
        materialize([TemplateEntry("e1", day_index=0, start_hour=8, end_hour=8)], week_start=date(2025, 1, 6))
