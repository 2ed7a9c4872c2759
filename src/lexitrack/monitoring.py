"""Monitoring configuration for the learning progress engine."""
from prometheus_client import Counter, Histogram

# Attempt metrics
attempts_evaluated = Counter(
    "lexitrack_attempts_evaluated_total",
    "Total number of practice attempts evaluated",
    ["result"],  # correct, partial, incorrect
)

response_time = Histogram(
    "lexitrack_response_time_seconds",
    "Response time of practice attempts in seconds",
    buckets=[1, 2, 5, 10, 20, 30, 60],
)

# Learning metrics
status_transitions = Counter(
    "lexitrack_status_transitions_total",
    "Total number of learning status changes",
    ["from_status", "to_status"],
)

words_learned = Counter(
    "lexitrack_words_learned_total",
    "Total number of words that reached the learned status",
)

# Session metrics
sessions_completed = Counter(
    "lexitrack_sessions_completed_total",
    "Total number of practice sessions summarized",
    ["outcome"],  # excellent, successful, unsuccessful
)

# Database metrics
db_operations = Counter(
    "lexitrack_db_operations_total",
    "Total number of database operations",
    ["operation_type"],
)