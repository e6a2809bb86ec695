from unittest.mock import MagicMock

import pytest
from learnos.db import PAGE_SIZE, get_session_dates, get_friend_ids, get_profile, get_profiles


def _result(rows):
    res = MagicMock()
    res.data = rows
    return res


class TestSessionDates:
    def test_pages_until_short_batch(self):
        db = MagicMock()
        query = db.table.return_value.select.return_value.eq.return_value.order.return_value.range.return_value
        query.execute.side_effect = [
            _result([{"date": "2024-06-10"}] * PAGE_SIZE),
            _result([{"date": "2024-06-09"}]),
        ]
        dates = get_session_dates(db, "u1")
        assert len(dates) == PAGE_SIZE + 1
        assert dates[-1] == "2024-06-09"
        ranges = db.table.return_value.select.return_value.eq.return_value.order.return_value.range.call_args_list
        assert [c.args for c in ranges] == [(0, PAGE_SIZE - 1), (PAGE_SIZE, 2 * PAGE_SIZE - 1)]
        db.table.assert_called_with("sessions")

    def test_errors_are_logged_and_raised(self, caplog):
        db = MagicMock()
        query = db.table.return_value.select.return_value.eq.return_value.order.return_value.range.return_value
        query.execute.side_effect = RuntimeError("boom")
        with pytest.raises(RuntimeError):
            get_session_dates(db, "u1")
        assert "session dates" in caplog.text


class TestFriends:
    def test_returns_the_other_side(self):
        db = MagicMock()
        query = db.table.return_value.select.return_value.or_.return_value.eq.return_value
        query.execute.return_value = _result([
            {"requester_id": "me", "addressee_id": "f1"},
            {"requester_id": "f2", "addressee_id": "me"},
        ])
        assert get_friend_ids(db, "me") == ["f1", "f2"]


class TestProfiles:
    def test_missing_profile(self):
        db = MagicMock()
        db.table.return_value.select.return_value.eq.return_value.execute.return_value = _result([])
        assert get_profile(db, "u1") is None

    def test_no_ids_skips_query(self):
        db = MagicMock()
        assert get_profiles(db, []) == []
        db.table.assert_not_called()
