"""Tests des objets valeur FilmTypeMode et StatisticsScope."""

from cinelog.core.value_objects.scope import FilmTypeMode, StatisticsScope


class TestStatisticsScope:
    def test_default_is_all_time(self) -> None:
        scope = StatisticsScope()
        assert scope.is_all_time
        assert scope.cache_key == "all-time-all"

    def test_cache_key_includes_year_and_mode(self) -> None:
        assert StatisticsScope(year=2024, mode=FilmTypeMode.FEATURE).cache_key == "2024-feature"

    def test_scopes_are_hashable_values(self) -> None:
        assert StatisticsScope(year=2024) == StatisticsScope(year=2024)
        assert len({StatisticsScope(year=2024), StatisticsScope(year=2024)}) == 1


class TestFilmTypeMode:
    def test_labels(self) -> None:
        assert FilmTypeMode.ALL.label == "All"
        assert FilmTypeMode.SHORT.label == "Short Films"

    def test_from_value(self) -> None:
        assert FilmTypeMode("feature") is FilmTypeMode.FEATURE
