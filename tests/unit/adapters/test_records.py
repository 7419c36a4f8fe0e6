"""
Tests unitaires de la conversion des enregistrements bruts.
"""

from cinelog.adapters.records import (
    parse_location,
    parse_locations,
    parse_watch_log,
    parse_watch_log_entry,
)
from tests.fixtures.watch_log import DIARY_RECORDS, LOCATION_RECORDS


class TestParseWatchLogEntry:
    """Tests pour parse_watch_log_entry."""

    def test_remote_field_names(self) -> None:
        """Les noms de la table distante sont acceptes."""
        parsed = parse_watch_log_entry(DIARY_RECORDS[0])

        assert parsed is not None
        assert parsed.watch_date == "2024-03-02"
        assert parsed.detailed_rating == 91.0
        assert parsed.is_rewatch is True
        assert parsed.genres == ("Crime", "Drama")
        assert parsed.location_id == 10

    def test_domain_field_names(self) -> None:
        """Les noms du domaine sont acceptes."""
        parsed = parse_watch_log_entry(
            {"id": "5", "title": "Ran", "watch_date": "2024-01-01", "is_rewatch": True}
        )
        assert parsed.id == 5
        assert parsed.is_rewatch is True

    def test_rewatch_string_flag(self) -> None:
        """Le drapeau texte "no" vaut False."""
        parsed = parse_watch_log_entry({"id": 1, "rewatch": "no"})
        assert parsed.is_rewatch is False

    def test_non_positive_runtime_dropped(self) -> None:
        """Une duree nulle ou negative est ignoree."""
        assert parse_watch_log_entry({"id": 1, "runtime": 0}).runtime is None

    def test_missing_id_is_skipped(self) -> None:
        """Un enregistrement sans id est ignore."""
        assert parse_watch_log_entry({"title": "x"}) is None
        assert len(parse_watch_log(DIARY_RECORDS)) == 2

    def test_non_string_date_is_dropped(self) -> None:
        """Une date numerique est ecartee au lieu d'etre transmise."""
        parsed = parse_watch_log_entry({"id": 1, "watch_date": 20240101})
        assert parsed.watch_date is None

    def test_tag_list_is_joined(self) -> None:
        """Une liste de tags devient une chaine separee par des virgules."""
        parsed = parse_watch_log_entry({"id": 1, "tags": ["Short", "cinema"]})
        assert parsed.tags == "Short, cinema"

    def test_non_string_text_fields(self) -> None:
        """Les champs texte non textuels valent None."""
        parsed = parse_watch_log_entry({"id": 1, "tags": 3, "director": 42, "poster_url": {}})
        assert parsed.tags is None
        assert parsed.director is None
        assert parsed.poster_url is None


class TestParseLocation:
    """Tests pour parse_location."""

    def test_nested_group_name(self) -> None:
        """Le groupe peut venir de la relation imbriquee."""
        location = parse_location(LOCATION_RECORDS[0])
        assert location.group_name == "Paris"
        assert location.has_coordinates

    def test_without_coordinates(self) -> None:
        """Un lieu sans coordonnees n'est pas geocode."""
        locations = parse_locations(LOCATION_RECORDS)
        assert set(locations) == {10, 11}
        assert not locations[11].has_coordinates
        assert locations[11].group_name is None
