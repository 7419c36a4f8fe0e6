"""
Tests unitaires de la projection du rythme annuel.
"""

from datetime import date

from cinelog.services.statistics.dataclasses import FilmsPerMonth, NoProjection, PaceProjection
from cinelog.services.statistics.pace import historical_curve, monthly_counts, yearly_pace


def _months(year: int, counts: dict[int, int]) -> list[FilmsPerMonth]:
    return [
        FilmsPerMonth(year=year, month=month, month_name="", film_count=count, unique_films=count)
        for month, count in counts.items()
    ]


class TestMonthlyCounts:
    """Tests pour monthly_counts et historical_curve."""

    def test_monthly_counts_fills_missing_months(self) -> None:
        """Les mois sans visionnage valent 0."""
        counts = monthly_counts(_months(2024, {1: 3, 4: 2}), 2024)
        assert counts == [3, 0, 0, 2, 0, 0, 0, 0, 0, 0, 0, 0]

    def test_historical_curve_averages_all_years(self) -> None:
        """La reference est la moyenne des cumuls de toutes les annees."""
        per_month = _months(2022, {1: 2}) + _months(2023, {1: 4}) + _months(2024, {1: 6})
        curve = historical_curve(per_month)

        assert curve[0] == 4.0
        assert curve[-1] == 4.0

    def test_historical_curve_skips_excluded_year(self) -> None:
        """L'annee en cours, incomplete, peut etre retiree de la reference."""
        per_month = _months(2022, {1: 2}) + _months(2023, {1: 4}) + _months(2024, {1: 100})
        assert historical_curve(per_month, exclude_year=2024)[-1] == 3.0

    def test_historical_curve_without_other_years(self) -> None:
        """Sans autre annee, pas de reference."""
        assert historical_curve(_months(2024, {1: 1}), exclude_year=2024) == []


class TestYearlyPace:
    """Tests pour yearly_pace."""

    def test_past_year_has_no_projection(self) -> None:
        """Une annee revolue n'expose que sa courbe reelle."""
        per_month = _months(2023, {month: 2 for month in range(1, 13)})
        pace = yearly_pace(per_month, 2023, date(2026, 10, 18))

        assert not pace.is_current_year
        assert isinstance(pace.projection, NoProjection)
        assert len(pace.monthly_data) == 12
        assert pace.monthly_data[-1].cumulative_count == 24

    def test_past_year_is_part_of_its_baseline(self) -> None:
        """Une annee revolue selectionnee compte dans la reference historique."""
        per_month = _months(2022, {month: 2 for month in range(1, 13)}) + _months(
            2023, {month: 10 for month in range(1, 13)}
        )
        pace = yearly_pace(per_month, 2023, date(2026, 1, 1))

        assert pace.historical_average[-1].cumulative_count == 72

    def test_current_year_is_left_out_of_baseline(self) -> None:
        """Les mois partiels de l'annee en cours ne diluent pas la reference."""
        history = _months(2023, {month: 10 for month in range(1, 13)})
        current = _months(2024, {1: 1})
        pace = yearly_pace(history + current, 2024, date(2024, 1, 31))

        assert pace.historical_average[-1].cumulative_count == 120

    def test_linear_projection_without_history(self) -> None:
        """Sans historique, la projection saisonniere retombe sur la lineaire."""
        per_month = _months(2024, {month: 10 for month in range(1, 7)})
        pace = yearly_pace(per_month, 2024, date(2024, 6, 30))

        assert pace.is_current_year
        assert len(pace.monthly_data) == 6
        assert pace.historical_average == ()
        assert isinstance(pace.projection, PaceProjection)
        assert pace.projection.end_of_year_linear == 120
        assert pace.projection.end_of_year_seasonal == 120
        assert [p.cumulative_count for p in pace.projection.linear[6:]] == [70, 80, 90, 100, 110, 120]

    def test_seasonal_projection_follows_history(self) -> None:
        """Le reste de l'annee suit la forme de la reference historique."""
        history = _months(2023, {month: 5 if month <= 6 else 15 for month in range(1, 13)})
        current = _months(2024, {month: 10 for month in range(1, 7)})
        pace = yearly_pace(history + current, 2024, date(2024, 6, 30))

        assert isinstance(pace.projection, PaceProjection)
        assert pace.historical_average[-1].cumulative_count == 120
        assert pace.projection.end_of_year_linear == 120
        assert pace.projection.end_of_year_seasonal == 240
        assert pace.projection.seasonal[6].cumulative_count == 90

    def test_current_month_is_prorated(self) -> None:
        """Le mois en cours compte au prorata des jours ecoules."""
        per_month = _months(2024, {1: 10, 2: 10, 3: 5})
        # Mi-mars 2024 : 2 mois + 15/31 ecoules
        pace = yearly_pace(per_month, 2024, date(2024, 3, 15))

        linear = pace.projection.end_of_year_linear
        assert 25 / (2 + 15 / 31) * 12 - 1 <= linear <= 25 / (2 + 15 / 31) * 12 + 1
