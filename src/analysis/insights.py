"""Aggregations over customer analyses for report surfaces"""
from __future__ import annotations

import re
from collections import Counter, defaultdict
from typing import Dict, Iterable, List, Sequence

from src.analysis.language import language_name
from src.core import EMOTIONS, SENTIMENTS, CustomerAnalysisData

STOP_WORDS = frozenset({
    "i", "me", "my", "myself", "we", "our", "ours", "ourselves", "you", "your",
    "yours", "yourself", "yourselves", "he", "him", "his", "himself", "she", "her",
    "hers", "herself", "it", "its", "itself", "they", "them", "their", "theirs",
    "themselves", "what", "which", "who", "whom", "this", "that", "these", "those",
    "am", "is", "are", "was", "were", "be", "been", "being", "have", "has", "had",
    "having", "do", "does", "did", "doing", "a", "an", "the", "and", "but", "if",
    "or", "because", "as", "until", "while", "of", "at", "by", "for", "with",
    "about", "against", "between", "into", "through", "during", "before", "after",
    "above", "below", "to", "from", "up", "down", "in", "out", "on", "off", "over",
    "under", "again", "further", "then", "once", "here", "there", "when", "where",
    "why", "how", "all", "any", "both", "each", "few", "more", "most", "other",
    "some", "such", "no", "nor", "not", "only", "own", "same", "so", "than", "too",
    "very", "s", "t", "can", "will", "just", "don", "should", "now",
})

_WORD = re.compile(r"\b(\w+)\b")

def emotion_distribution(customers: Iterable[CustomerAnalysisData]) -> Dict[str, int]:
    """Count of customers per dominant emotion, every emotion present"""
    counts = {emotion: 0 for emotion in EMOTIONS}
    for customer in customers:
        counts[customer.dominant_emotion] += 1
    return counts

def priority_distribution(customers: Iterable[CustomerAnalysisData]) -> Dict[str, int]:
    counts = {"high": 0, "medium": 0, "low": 0}
    for customer in customers:
        counts[customer.priority_category] += 1
    return counts

def emotions_by_priority(customers: Sequence[CustomerAnalysisData]) -> Dict[str, Dict[str, int]]:
    return {
        category: emotion_distribution(c for c in customers if c.priority_category == category)
        for category in ("high", "medium", "low")
    }

def language_distribution(customers: Iterable[CustomerAnalysisData]) -> Dict[str, int]:
    """Count of customers per language display name"""
    return dict(Counter(language_name(c.language) for c in customers))

def sentiment_by_language(customers: Iterable[CustomerAnalysisData]) -> List[Dict[str, object]]:
    """
    Sentiment breakdown per language

    Returns:
        One row per language with the language name, total and the
        percentage (rounded) of positive, neutral and negative customers
    """
    groups: Dict[str, List[CustomerAnalysisData]] = defaultdict(list)
    for customer in customers:
        groups[customer.language].append(customer)

    rows: List[Dict[str, object]] = []
    for code, members in groups.items():
        total = len(members)
        row: Dict[str, object] = {"language": language_name(code), "total": total}
        for sentiment in SENTIMENTS:
            count = sum(1 for c in members if c.sentiment == sentiment)
            row[sentiment] = round(count / total * 100)
        rows.append(row)
    return rows

def sentiment_summary(customers: Sequence[CustomerAnalysisData]) -> Dict[str, object]:
    """Counts, rounded percentages and average sentiment score"""
    total = len(customers)
    counts = Counter(c.sentiment for c in customers)
    summary: Dict[str, object] = {"total": total}
    for sentiment in SENTIMENTS:
        summary[sentiment] = counts.get(sentiment, 0)
        summary[f"{sentiment}_percent"] = round(counts.get(sentiment, 0) / total * 100) if total else 0
    summary["average_score"] = (
        sum(c.sentiment_score for c in customers) / total if total else 0.5
    )
    return summary

def daily_trends(customers: Iterable[CustomerAnalysisData]) -> List[Dict[str, object]]:
    """Per-day average sentiment score and label counts, oldest day first"""
    groups: Dict[str, List[CustomerAnalysisData]] = defaultdict(list)
    for customer in customers:
        groups[customer.timestamp.date().isoformat()].append(customer)

    trends: List[Dict[str, object]] = []
    for day in sorted(groups):
        items = groups[day]
        row: Dict[str, object] = {
            "date": day,
            "average_score": sum(c.sentiment_score for c in items) / len(items),
            "count": len(items),
        }
        for sentiment in SENTIMENTS:
            row[sentiment] = sum(1 for c in items if c.sentiment == sentiment)
        trends.append(row)
    return trends

def top_words(messages: Iterable[str], limit: int = 15) -> List[tuple[str, int]]:
    """Most frequent non-stopword words longer than two characters"""
    counts: Counter[str] = Counter()
    for message in messages:
        for word in _WORD.findall(message.lower()):
            if len(word) > 2 and word not in STOP_WORDS:
                counts[word] += 1
    return counts.most_common(limit)
