"""Planner commands (plans, buckets, tasks)."""
