"""
Mood trend statistics and insight generation.

Works on plain (entry_date, rating) data so it can be exercised without a
database; MoodService feeds it the active entries of a lookback window.
"""

from datetime import date, timedelta
from typing import List, Sequence

from domain.enums import TrendDirection, TrendPeriod
from domain.schemas.journal_schemas import MoodStatistics

LOOKBACK_DAYS = {
    TrendPeriod.WEEK: 6,
    TrendPeriod.MONTH: 29,
    TrendPeriod.QUARTER: 89,
    TrendPeriod.YEAR: 364,
}

STABLE_THRESHOLD = 0.5


def window(period: TrendPeriod, today: date):
    """(start_date, end_date, days) covered by a trend period ending today"""
    lookback = LOOKBACK_DAYS[period]
    return today - timedelta(days=lookback), today, lookback + 1


def empty_distribution() -> dict:
    return {str(rating): 0 for rating in range(1, 11)}


def trend_direction(ratings: Sequence[int]) -> TrendDirection:
    """
    Compare the average of the later half of the ratings to the earlier half.

    Ratings must be ordered by date. The split point is floor(n / 2).
    """
    if len(ratings) < 2:
        return TrendDirection.STABLE
    middle = len(ratings) // 2
    first, second = ratings[:middle], ratings[middle:]
    diff = sum(second) / len(second) - sum(first) / len(first)
    if abs(diff) < STABLE_THRESHOLD:
        return TrendDirection.STABLE
    return TrendDirection.IMPROVING if diff > 0 else TrendDirection.DECLINING


def calculate_statistics(ratings: Sequence[int], days: int) -> MoodStatistics:
    if not ratings:
        return MoodStatistics(
            average_mood=0.0,
            lowest_mood=0,
            highest_mood=0,
            mood_variance=0.0,
            total_entries=0,
            completion_rate=0.0,
            trend_direction=TrendDirection.STABLE,
            mood_distribution=empty_distribution(),
        )

    count = len(ratings)
    average = sum(ratings) / count
    variance = sum((r - average) ** 2 for r in ratings) / count
    distribution = empty_distribution()
    for rating in ratings:
        distribution[str(rating)] += 1

    return MoodStatistics(
        average_mood=average,
        lowest_mood=min(ratings),
        highest_mood=max(ratings),
        mood_variance=variance,
        total_entries=count,
        completion_rate=count / days if days else 0.0,
        trend_direction=trend_direction(ratings),
        mood_distribution=distribution,
    )


def generate_insights(stats: MoodStatistics) -> List[str]:
    insights = []

    if stats.total_entries >= 3:
        if stats.trend_direction == TrendDirection.IMPROVING:
            insights.append(
                "Your mood has been improving over this period. "
                "Keep up the positive momentum!"
            )
        elif stats.trend_direction == TrendDirection.DECLINING:
            insights.append(
                "Your mood has been declining recently. "
                "Consider reaching out for support if needed."
            )
        else:
            insights.append("Your mood has been relatively stable during this period.")

    if stats.total_entries > 0:
        if stats.completion_rate < 0.5:
            insights.append(
                f"Your completion rate is {round(stats.completion_rate * 100)}%. "
                "Try to log more consistently for better insights."
            )
        elif stats.completion_rate > 0.8:
            insights.append(
                "Great job on consistent mood tracking! "
                "This helps provide accurate trends."
            )

    if stats.average_mood >= 7:
        insights.append("Your average mood is in the positive range. You're doing well!")
    elif stats.average_mood <= 4:
        insights.append(
            "Your average mood has been low. "
            "Remember to practice self-care and seek support when needed."
        )

    if stats.mood_variance > 4:
        insights.append(
            "Your mood has been quite variable. "
            "Consider identifying triggers for these fluctuations."
        )
    elif stats.mood_variance < 1 and stats.total_entries > 5:
        insights.append("Your mood has been very consistent during this period.")

    return insights
