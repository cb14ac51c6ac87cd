import pytest
from pydantic import ValidationError

from pybracket.models import PlayerRecord


def test_player_record_is_frozen():
    record = PlayerRecord(player_id=1, name="Mario", historical_average=42.5)

    assert record.player_id == 1
    assert record.show_odds is True
    assert str(record) == "Mario"

    with pytest.raises((TypeError, ValidationError)):
        record.player_id = 2  # type: ignore[misc]


def test_player_record_rejects_negative_values():
    with pytest.raises(ValidationError):
        PlayerRecord(player_id=-1, name="Luigi")
    with pytest.raises(ValidationError):
        PlayerRecord(player_id=1, name="Luigi", historical_average=-3.0)

