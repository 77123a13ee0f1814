# services/trip_aggregator.py
from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Dict, Iterable, List, Optional

from models.trips import CarbonSummary, Insight, InsightKind, ModeStats, Trip

ECO_FRIENDLY_MODES = ("walking", "bicycling", "transit")


def _savings(trip: Trip) -> float:
    return trip.emission_savings.amount if trip.emission_savings else 0.0


def _local_date(ts: datetime) -> date:
    # sqlite hands back naive timestamps; they were written as UTC
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone().date()


def _add(stats: ModeStats, trip: Trip) -> None:
    stats.count += 1
    stats.distance += trip.selected_route.distance
    stats.emission += trip.selected_route.emission
    stats.savings += _savings(trip)


def summarize(trips: Iterable[Trip], today: Optional[date] = None) -> CarbonSummary:
    """
    Carbon totals for a user's trips.

    `current_month` holds the trips created in today's calendar month (local time).
    Pure: the input order never changes the totals.
    """
    today = today or date.today()
    summary = CarbonSummary()
    per_mode: Dict[str, ModeStats] = {}
    eco_total = 0

    for trip in trips:
        route = trip.selected_route
        summary.trip_count += 1
        summary.total_distance += route.distance
        summary.total_emission += route.emission
        summary.total_emission_savings += _savings(trip)
        eco_total += route.eco_score

        _add(per_mode.setdefault(route.mode.value, ModeStats()), trip)

        created = _local_date(trip.created_at)
        if (created.year, created.month) == (today.year, today.month):
            _add(summary.current_month, trip)

    summary.per_mode = per_mode
    if summary.trip_count:
        summary.average_eco_score = eco_total / summary.trip_count
    return summary


def environmental_insights(summary: CarbonSummary) -> List[Insight]:
    """Short feedback messages derived from a carbon summary."""
    insights: List[Insight] = []

    if summary.total_emission_savings > 0:
        insights.append(
            Insight(
                kind=InsightKind.SUCCESS,
                title="Carbon Savings",
                message=f"You've saved {summary.total_emission_savings:.2f} kg CO2 emissions!",
            )
        )

    if summary.trip_count > 0:
        score = f"{summary.average_eco_score:.1f}/100"
        if summary.average_eco_score >= 80:
            insights.append(
                Insight(
                    kind=InsightKind.SUCCESS,
                    title="Excellent Eco-Score",
                    message=f"Your average eco-score is {score}!",
                )
            )
        elif summary.average_eco_score >= 60:
            insights.append(
                Insight(
                    kind=InsightKind.WARNING,
                    title="Good Eco-Score",
                    message=f"Your average eco-score is {score}. Keep it up!",
                )
            )
        else:
            insights.append(
                Insight(
                    kind=InsightKind.INFO,
                    title="Improve Eco-Score",
                    message=f"Your average eco-score is {score}. Try more eco-friendly routes!",
                )
            )

    green = [m for m in ECO_FRIENDLY_MODES if m in summary.per_mode]
    if green:
        insights.append(
            Insight(
                kind=InsightKind.SUCCESS,
                title="Eco-Friendly Travel",
                message=f"You've used {', '.join(green)} for some trips!",
            )
        )
    return insights
